from rest_framework import serializers

from .models import Church, PaymentRequest, InscriptionCode


class ChurchSerializer(serializers.ModelSerializer):
    user_count = serializers.SerializerMethodField()

    class Meta:
        model = Church
        fields = [
            'id', 'reference', 'name', 'admin_email', 'status', 'registration_code',
            'creation_date', 'expiration_date', 'onboarding_completed', 'user_count',
        ]
        read_only_fields = fields

    def get_user_count(self, obj):
        return obj.app_users.count()


class PaymentRequestSerializer(serializers.ModelSerializer):
    class Meta:
        model = PaymentRequest
        fields = [
            'id', 'applicant_name', 'applicant_email', 'church_name', 'payment_method',
            'transaction_id', 'request_date', 'status', 'validation_date', 'generated_code',
        ]
        read_only_fields = ['request_date', 'status', 'validation_date', 'generated_code']


class InscriptionCodeSerializer(serializers.ModelSerializer):
    used_by = serializers.StringRelatedField()

    class Meta:
        model = InscriptionCode
        fields = ['id', 'code', 'status', 'expiration_date', 'used_by', 'used_date']
