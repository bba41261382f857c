from django.urls import path, include
from rest_framework.routers import DefaultRouter

from . import views
from . import api_views

app_name = 'accounts'

router = DefaultRouter()
router.register(r'personnel', api_views.AppUserViewSet, basename='api-personnel')

urlpatterns = [
    path('login/', views.login_view, name='login'),
    path('logout/', views.logout_view, name='logout'),
    path('mot-de-passe/changer/', views.force_password_change_view, name='force_password_change'),
    path('mot-de-passe/', views.password_change_view, name='password_change'),
    path('mot-de-passe/oublie/', views.password_reset_request_view, name='password_reset_request'),
    path('reinitialisations/', views.password_reset_list_view, name='password_reset_list'),
    path('reinitialisations/<int:pk>/resoudre/', views.password_reset_resolve_view, name='password_reset_resolve'),
    path('profil/', views.profile_view, name='profile'),

    path('personnel/', views.personnel_list_view, name='personnel'),
    path('personnel/ajouter/', views.personnel_create_view, name='personnel_create'),
    path('personnel/groupe/', views.personnel_assign_group_view, name='personnel_assign_group'),
    path('personnel/<int:pk>/', views.personnel_edit_view, name='personnel_edit'),
    path('personnel/<int:pk>/supprimer/', views.personnel_delete_view, name='personnel_delete'),
    path('personnel/<int:pk>/roles/<int:role_id>/supprimer/', views.personnel_role_delete_view,
         name='personnel_role_delete'),

    path('api/me/', api_views.MeAPI.as_view(), name='api_me'),
    path('api/', include(router.urls)),
]
