from django.core.exceptions import ValidationError as DjangoValidationError
from django.shortcuts import get_object_or_404
from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from accounts.permissions import HasPagePermission
from eglise.models import Departement, DeathCase, Project
from .engine import filter_pledges
from .models import CotisationCampaign, MemberCotisation
from .serializers import (
    CotisationCampaignSerializer, MemberCotisationSerializer, CotisationPaymentSerializer, GroupPaymentSerializer,
    AddMembersSerializer,
)
from .services import create_campaign, add_payment, add_group_payment, add_members_to_campaign, campaign_pledges


def _django_error(e):
    return ValidationError({"detail": e.messages[0]})


class CotisationCampaignViewSet(mixins.CreateModelMixin, viewsets.ReadOnlyModelViewSet):
    serializer_class = CotisationCampaignSerializer
    permission_classes = [HasPagePermission]
    page_id = 'cotisations'

    def get_queryset(self):
        return (
            CotisationCampaign.objects.filter(church=self.request.user.church)
            .prefetch_related('pledges__payments')
        )

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        church = request.user.church
        data = dict(serializer.validated_data)
        # Les références doivent appartenir à l'église active
        for field, model in (('target_group', Departement), ('death_case', DeathCase), ('project', Project)):
            if data.get(field) is not None:
                data[field] = get_object_or_404(model, pk=data[field].pk, church=church)
        try:
            campaign = create_campaign(church, data)
        except DjangoValidationError as e:
            raise _django_error(e)
        return Response(self.get_serializer(campaign).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['get'])
    def pledges(self, request, pk=None):
        pledges = filter_pledges(
            campaign_pledges(self.get_object()),
            request.query_params.get('status', 'all'),
            request.query_params.get('search', ''),
        )
        return Response(MemberCotisationSerializer(pledges, many=True).data)

    @action(detail=True, methods=['post'], url_path='add-members')
    def add_members(self, request, pk=None):
        campaign = self.get_object()
        serializer = AddMembersSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            created = add_members_to_campaign(
                campaign,
                serializer.validated_data['member_ids'],
                serializer.validated_data.get('expected_amount'),
            )
        except DjangoValidationError as e:
            raise _django_error(e)
        return Response({"created": len(created)}, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'], url_path='group-payment')
    def group_payment(self, request, pk=None):
        campaign = self.get_object()
        serializer = GroupPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        pledges = MemberCotisation.objects.filter(campaign=campaign, pk__in=data.pop('pledge_ids'))
        if not pledges.exists():
            raise ValidationError({"detail": "Veuillez sélectionner au moins un membre."})
        try:
            payments = add_group_payment(pledges, **data)
        except DjangoValidationError as e:
            raise _django_error(e)
        return Response({"created": len(payments)}, status=status.HTTP_201_CREATED)


class MemberCotisationViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = MemberCotisationSerializer
    permission_classes = [HasPagePermission]
    page_id = 'cotisations'

    def get_queryset(self):
        return (
            MemberCotisation.objects.filter(campaign__church=self.request.user.church)
            .select_related('member')
            .prefetch_related('payments')
        )

    @action(detail=True, methods=['post'])
    def payments(self, request, pk=None):
        pledge = self.get_object()
        serializer = CotisationPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            payment = add_payment(pledge, **serializer.validated_data)
        except DjangoValidationError as e:
            raise _django_error(e)
        return Response(CotisationPaymentSerializer(payment).data, status=status.HTTP_201_CREATED)
