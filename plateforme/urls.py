from django.urls import path, include
from rest_framework.routers import DefaultRouter

from . import views
from . import api_views

app_name = 'plateforme'

router = DefaultRouter()
router.register(r'churches', api_views.ChurchViewSet, basename='api-churches')
router.register(r'payment-requests', api_views.PaymentRequestViewSet, basename='api-payment-requests')
router.register(r'codes', api_views.InscriptionCodeViewSet, basename='api-codes')

urlpatterns = [
    # Inscription publique
    path('inscription/', views.register_church_view, name='register'),
    path('inscription/<int:pk>/attente/', views.awaiting_activation_view, name='awaiting_activation'),
    path('inscription/<int:pk>/statut/', views.payment_request_status_view, name='payment_request_status'),
    path('activation/', views.activate_view, name='activate'),

    # Super administrateur
    path('admin/', views.super_admin_dashboard_view, name='super_admin_dashboard'),
    path('admin/paiements/<int:pk>/valider/', views.validate_payment_view, name='validate_payment'),
    path('admin/paiements/<int:pk>/rejeter/', views.reject_payment_view, name='reject_payment'),
    path('admin/eglises/<int:pk>/statut/', views.toggle_church_status_view, name='toggle_church_status'),
    path('admin/parametres/', views.platform_settings_view, name='settings'),

    path('api/', include(router.urls)),
]
