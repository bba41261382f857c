from django.urls import path, include
from rest_framework.routers import DefaultRouter

from . import views
from . import api_views

app_name = 'eglise'

router = DefaultRouter()
router.register(r'members', api_views.MemberViewSet, basename='api-members')
router.register(r'departements', api_views.DepartementViewSet, basename='api-departements')
router.register(r'transactions', api_views.TransactionViewSet, basename='api-transactions')
router.register(r'death-cases', api_views.DeathCaseViewSet, basename='api-death-cases')
router.register(r'projects', api_views.ProjectViewSet, basename='api-projects')
router.register(r'threads', api_views.MessageThreadViewSet, basename='api-threads')
router.register(r'events', api_views.EventViewSet, basename='api-events')
router.register(r'courses', api_views.TrainingCourseViewSet, basename='api-courses')
router.register(r'documents', api_views.ChurchDocumentViewSet, basename='api-documents')
router.register(r'announcements', api_views.AnnouncementViewSet, basename='api-announcements')

urlpatterns = [
    path('configuration/', views.onboarding_view, name='onboarding'),

    path('membres/', views.member_list_view, name='member_list'),
    path('membres/ajouter/', views.member_form_view, name='member_create'),
    path('membres/<int:pk>/', views.member_form_view, name='member_edit'),
    path('membres/<int:pk>/supprimer/', views.member_delete_view, name='member_delete'),

    path('departements/', views.departement_list_view, name='departement_list'),
    path('departements/ajouter/', views.departement_form_view, name='departement_create'),
    path('departements/<int:pk>/', views.departement_form_view, name='departement_edit'),
    path('departements/<int:pk>/supprimer/', views.departement_delete_view, name='departement_delete'),

    path('finances/', views.transaction_list_view, name='transaction_list'),
    path('finances/ajouter/', views.transaction_create_view, name='transaction_create'),
    path('finances/<int:pk>/supprimer/', views.transaction_delete_view, name='transaction_delete'),

    path('cas-deces/', views.death_case_list_view, name='death_case_list'),
    path('cas-deces/<int:pk>/cloturer/', views.death_case_close_view, name='death_case_close'),

    path('projets/', views.project_list_view, name='project_list'),
    path('projets/ajouter/', views.project_form_view, name='project_create'),
    path('projets/<int:pk>/', views.project_form_view, name='project_edit'),
    path('projets/<int:pk>/supprimer/', views.project_delete_view, name='project_delete'),

    path('evenements/', views.event_list_view, name='event_list'),
    path('evenements/ajouter/', views.event_form_view, name='event_create'),
    path('evenements/<int:pk>/', views.event_form_view, name='event_edit'),
    path('evenements/<int:pk>/annuler/', views.event_cancel_view, name='event_cancel'),
    path('evenements/<int:pk>/supprimer/', views.event_delete_view, name='event_delete'),

    path('formations/', views.course_list_view, name='course_list'),
    path('formations/ajouter/', views.course_form_view, name='course_create'),
    path('formations/<int:pk>/', views.course_detail_view, name='course_detail'),
    path('formations/<int:pk>/modifier/', views.course_form_view, name='course_edit'),
    path('formations/<int:pk>/supprimer/', views.course_delete_view, name='course_delete'),
    path('formations/<int:pk>/participants/', views.course_add_participants_view, name='course_add_participants'),
    path('formations/<int:pk>/seances/', views.course_add_session_view, name='course_add_session'),
    path(
        'formations/<int:pk>/seances/<int:session_id>/presences/<int:member_id>/',
        views.attendance_view,
        name='attendance',
    ),
    path('formations/<int:pk>/presences/<int:member_id>/', views.attendance_toggle_view, name='attendance_toggle'),

    path('documents/', views.document_list_view, name='document_list'),
    path('documents/<int:pk>/supprimer/', views.document_delete_view, name='document_delete'),

    path('annonces/', views.announcement_list_view, name='announcement_list'),
    path('annonces/<int:pk>/', views.announcement_edit_view, name='announcement_edit'),
    path('annonces/<int:pk>/supprimer/', views.announcement_delete_view, name='announcement_delete'),

    path('messagerie/', views.thread_list_view, name='thread_list'),
    path('messagerie/<int:pk>/', views.thread_detail_view, name='thread_detail'),

    path('api/', include(router.urls)),
]
