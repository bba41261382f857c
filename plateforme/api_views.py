from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from accounts.permissions import IsSuperAdmin
from .models import Church, PaymentRequest, InscriptionCode
from .serializers import ChurchSerializer, PaymentRequestSerializer, InscriptionCodeSerializer
from .services import validate_payment, reject_payment, toggle_church_status


class ChurchViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Church.objects.all()
    serializer_class = ChurchSerializer
    permission_classes = [IsSuperAdmin]

    @action(detail=True, methods=['post'])
    def toggle(self, request, pk=None):
        church = toggle_church_status(self.get_object())
        return Response(self.get_serializer(church).data)


class PaymentRequestViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = PaymentRequest.objects.all()
    serializer_class = PaymentRequestSerializer
    permission_classes = [IsSuperAdmin]

    @action(detail=True, methods=['post'])
    def validate(self, request, pk=None):
        demande = self.get_object()
        try:
            months = int(request.data.get('duration_in_months', 12))
        except (TypeError, ValueError):
            raise ValidationError({"detail": "Durée d'abonnement invalide."})
        try:
            code, church = validate_payment(demande, months)
        except DjangoValidationError as e:
            raise ValidationError({"detail": e.messages[0]})
        return Response({
            "code": code,
            "church": church.reference if church else None,
        }, status=status.HTTP_200_OK)

    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        try:
            demande = reject_payment(self.get_object())
        except DjangoValidationError as e:
            raise ValidationError({"detail": e.messages[0]})
        return Response(self.get_serializer(demande).data)


class InscriptionCodeViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = InscriptionCode.objects.select_related('used_by')
    serializer_class = InscriptionCodeSerializer
    permission_classes = [IsSuperAdmin]
