from rest_framework import serializers

from .engine import campaign_stats
from .models import CotisationCampaign, MemberCotisation, CotisationPayment


class CotisationPaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = CotisationPayment
        fields = ['id', 'amount', 'date', 'method']

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Veuillez entrer un montant valide.")
        return value


class MemberCotisationSerializer(serializers.ModelSerializer):
    member_name = serializers.CharField(read_only=True)
    payments = CotisationPaymentSerializer(many=True, read_only=True)
    paid_amount = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    remaining_amount = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    status = serializers.SerializerMethodField()

    class Meta:
        model = MemberCotisation
        fields = [
            'id', 'campaign', 'member', 'member_name', 'expected_amount', 'due_date',
            'payments', 'paid_amount', 'remaining_amount', 'status',
        ]
        read_only_fields = ['campaign', 'member', 'due_date']

    def get_status(self, obj):
        return obj.get_status()


class CotisationCampaignSerializer(serializers.ModelSerializer):
    stats = serializers.SerializerMethodField()

    class Meta:
        model = CotisationCampaign
        exclude = ['church']

    def get_stats(self, obj):
        stats = campaign_stats(obj, obj.pledges.all())
        stats.pop('campaign')
        return stats


class GroupPaymentSerializer(CotisationPaymentSerializer):
    pledge_ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)

    class Meta(CotisationPaymentSerializer.Meta):
        fields = CotisationPaymentSerializer.Meta.fields + ['pledge_ids']


class AddMembersSerializer(serializers.Serializer):
    member_ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)
    expected_amount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
