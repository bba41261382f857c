from django.urls import path, include
from rest_framework.routers import DefaultRouter

from . import views
from . import api_views

app_name = 'cotisations'

router = DefaultRouter()
router.register(r'campaigns', api_views.CotisationCampaignViewSet, basename='api-campaigns')
router.register(r'pledges', api_views.MemberCotisationViewSet, basename='api-pledges')

urlpatterns = [
    path('', views.campaign_list_view, name='campaign_list'),
    path('creer/', views.campaign_create_view, name='campaign_create'),
    path('rapport/<str:fmt>/', views.report_export_view, name='report_export'),
    path('<int:pk>/', views.campaign_detail_view, name='campaign_detail'),
    path('<int:pk>/versements/<int:pledge_id>/', views.add_payment_view, name='add_payment'),
    path('<int:pk>/paiement-groupe/', views.group_payment_view, name='group_payment'),
    path('<int:pk>/membres/', views.add_members_view, name='add_members'),
    path('<int:pk>/export/<str:fmt>/', views.campaign_export_view, name='campaign_export'),

    path('api/', include(router.urls)),
]
