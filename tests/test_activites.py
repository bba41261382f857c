"""Tests des activités : événements, formations, documents, annonces."""
from datetime import date, time, timedelta

import pytest
from django.core.exceptions import ValidationError, PermissionDenied
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import Client
from django.utils import timezone

from eglise.models import Event, ChurchDocument, Announcement
from eglise.services import (
    create_event, update_event, cancel_event, mark_past_events, split_events, add_participants_to_course,
    add_session, set_attendance, toggle_member_attendance, course_attendance, save_document, filter_documents,
    can_manage_announcement, save_announcement, delete_announcement,
)

from .factories import (
    AnnouncementFactory, ChurchDocumentFactory, EventFactory, MemberFactory, SpiritualPathwayFactory,
    TrainingCourseFactory, TrainingSessionFactory, make_user,
)


def client_for(user):
    client = Client()
    client.force_login(user)
    return client


def event_data(**overrides):
    data = {
        'name': 'Culte de louange',
        'type': 'Culte',
        'start_date': timezone.localdate() + timedelta(days=3),
        'start_time': time(9, 0),
        'end_time': time(11, 30),
        'location': 'Temple',
    }
    data.update(overrides)
    return data


@pytest.mark.django_db
class TestEvents:
    def test_created_event_is_upcoming(self, church):
        member = MemberFactory(church=church)
        event = create_event(church, status='Passé', attendees=[member, MemberFactory()], **event_data())
        assert event.status == 'À venir'
        assert list(event.attendees.all()) == [member]

    def test_missing_fields(self, church):
        with pytest.raises(ValidationError) as exc:
            create_event(church, **event_data(name=''))
        assert exc.value.messages[0] == "Veuillez remplir tous les champs obligatoires."

    def test_end_before_start(self, church):
        start = timezone.localdate()
        with pytest.raises(ValidationError):
            create_event(church, **event_data(start_date=start, end_date=start - timedelta(days=1)))

    def test_update_keeps_status(self, church):
        event = cancel_event(EventFactory(church=church))
        update_event(event, **event_data(name='Veillée', status='À venir'))
        event.refresh_from_db()
        assert event.name == 'Veillée'
        assert event.status == 'Annulé'

    def test_mark_past_events(self, church):
        today = date(2024, 6, 15)
        one_day = EventFactory(church=church, start_date=date(2024, 6, 14))
        still_running = EventFactory(church=church, start_date=date(2024, 6, 10), end_date=date(2024, 6, 15))
        cancelled = EventFactory(church=church, start_date=date(2024, 6, 1), status='Annulé')
        assert mark_past_events(church, today) == 1
        statuses = dict(Event.objects.values_list('pk', 'status'))
        assert statuses[one_day.pk] == 'Passé'
        assert statuses[still_running.pk] == 'À venir'
        assert statuses[cancelled.pk] == 'Annulé'

    def test_split_events(self, church):
        later = EventFactory(church=church, start_date=date(2024, 7, 2))
        sooner = EventFactory(church=church, start_date=date(2024, 7, 1), status='Annulé')
        old = EventFactory(church=church, start_date=date(2024, 5, 1), status='Passé')
        recent = EventFactory(church=church, start_date=date(2024, 6, 1), status='Passé')
        upcoming, past = split_events(Event.objects.all())
        assert upcoming == [sooner, later]
        assert past == [recent, old]


@pytest.mark.django_db
class TestTraining:
    def test_add_participants_scoped_to_church(self, church):
        course = TrainingCourseFactory(church=church)
        member = MemberFactory(church=church)
        add_participants_to_course(course, [member.pk, MemberFactory().pk])
        assert list(course.enrolled_members.all()) == [member]

    def test_add_participants_requires_a_selection(self, church):
        with pytest.raises(ValidationError):
            add_participants_to_course(TrainingCourseFactory(church=church), [])

    def test_add_session_requires_topic(self, church):
        with pytest.raises(ValidationError):
            add_session(TrainingCourseFactory(church=church), '', timezone.localdate())

    def test_attendance_only_for_enrolled_members(self, church):
        session = TrainingSessionFactory(course__church=church)
        with pytest.raises(ValidationError):
            set_attendance(session, MemberFactory(church=church), True)

    def test_toggle_and_rate(self, church):
        course = TrainingCourseFactory(church=church)
        alice, bob = MemberFactory.create_batch(2, church=church)
        course.enrolled_members.add(alice, bob)
        first = TrainingSessionFactory(course=course, date=date(2024, 3, 1))
        TrainingSessionFactory(course=course, date=date(2024, 3, 8))

        set_attendance(first, bob, True)
        assert toggle_member_attendance(course, alice) is True
        sessions, rows = course_attendance(course)
        rates = {row['member']: row['rate'] for row in rows}
        assert len(sessions) == 2
        assert rates[alice] == 100
        assert rates[bob] == 50

        assert toggle_member_attendance(course, alice) is False
        assert not first.present_members.filter(pk=alice.pk).exists()

    def test_rate_without_sessions(self, church):
        course = TrainingCourseFactory(church=church)
        course.enrolled_members.add(MemberFactory(church=church))
        assert course_attendance(course)[1][0]['rate'] == 0

    def test_pathway_name_falls_back_to_custom(self, church):
        course = TrainingCourseFactory(church=church, pathway=None, custom_pathway='Préparation au mariage')
        assert course.pathway_name == 'Préparation au mariage'


@pytest.mark.django_db
class TestDocuments:
    def test_save_document(self, church, admin_user):
        upload = SimpleUploadedFile('rapport.pdf', b'%PDF-1.4', content_type='application/pdf')
        document = save_document(church, admin_user, upload, name='Rapport 2023', category='Rapport annuel')
        assert document.file_name == 'rapport.pdf'
        assert document.kind == 'PDF'
        assert document.uploaded_by == admin_user

    def test_save_document_requires_a_file(self, church, admin_user):
        with pytest.raises(ValidationError):
            save_document(church, admin_user, None, name='Vide', category='Autre')

    def test_filter_documents(self, church):
        ChurchDocumentFactory(church=church, name='PV assemblée', category='Procès-verbal')
        baptism = ChurchDocumentFactory(church=church, name='Baptême Aka', category='Certificat de baptême')
        documents = ChurchDocument.objects.all()
        assert filter_documents(documents, 'Certificat de baptême') == [baptism]
        assert filter_documents(documents, 'all', 'aka') == [baptism]
        assert len(filter_documents(documents)) == 2


@pytest.mark.django_db
class TestAnnouncements:
    def test_author_or_admin_manages(self, church, admin_user):
        secretary = make_user('Secrétaire', church=church)
        announcement = AnnouncementFactory(church=church, author=secretary)
        assert can_manage_announcement(secretary, announcement)
        assert can_manage_announcement(admin_user, announcement)
        assert not can_manage_announcement(make_user('Trésorier', church=church), announcement)

    def test_save_requires_title_and_content(self, church, admin_user):
        with pytest.raises(ValidationError) as exc:
            save_announcement(church, admin_user, '  ', 'Texte')
        assert exc.value.messages[0] == "Veuillez remplir le titre et le contenu de l'annonce."

    def test_other_user_cannot_edit_or_delete(self, church):
        announcement = AnnouncementFactory(church=church)
        other = make_user('Secrétaire', church=church)
        with pytest.raises(PermissionDenied):
            save_announcement(church, other, 'Titre', 'Texte', announcement)
        with pytest.raises(PermissionDenied):
            delete_announcement(other, announcement)
        assert Announcement.objects.filter(pk=announcement.pk).exists()


@pytest.mark.django_db
class TestActivityViews:
    def test_event_list_marks_past(self, admin_client, church):
        old = EventFactory(church=church, start_date=timezone.localdate() - timedelta(days=2))
        EventFactory(church=church)
        EventFactory()
        response = admin_client.get('/eglise/evenements/')
        assert response.status_code == 200
        assert len(response.context['upcoming_events']) == 1
        assert response.context['past_events'] == [Event.objects.get(pk=old.pk)]

    def test_event_create_view(self, admin_client, church):
        response = admin_client.post('/eglise/evenements/ajouter/', {
            'name': 'Veillée de prière',
            'type': 'Veillée',
            'start_date': (timezone.localdate() + timedelta(days=1)).isoformat(),
            'start_time': '21:00',
            'end_time': '23:59',
            'recurrence': 'none',
            'access_type': 'Libre',
        })
        assert response.status_code == 302
        assert church.events.get().status == 'À venir'

    def test_event_cancel_view(self, admin_client, church):
        event = EventFactory(church=church)
        admin_client.post(f'/eglise/evenements/{event.pk}/annuler/')
        event.refresh_from_db()
        assert event.status == 'Annulé'

    def test_treasurer_has_no_access_to_events(self, church):
        client = client_for(make_user('Trésorier', church=church))
        assert client.get('/eglise/evenements/').status_code == 403
        assert client.get('/eglise/formations/').status_code == 403

    def test_course_detail_and_participants(self, admin_client, church):
        course = TrainingCourseFactory(church=church)
        member = MemberFactory(church=church)
        url = f'/eglise/formations/{course.pk}/'
        assert admin_client.get(url).status_code == 200
        admin_client.post(f'{url}participants/', {'member_ids': [member.pk]})
        assert list(course.enrolled_members.all()) == [member]

    def test_course_form_requires_a_pathway(self, admin_client, church):
        admin_client.post('/eglise/formations/ajouter/', {'name': 'Baptême', 'status': 'Planifié', 'amount': '0'})
        assert not church.training_courses.exists()
        pathway = SpiritualPathwayFactory(church=church)
        admin_client.post('/eglise/formations/ajouter/', {
            'name': 'Baptême', 'status': 'Planifié', 'amount': '0', 'pathway': pathway.pk,
        })
        assert church.training_courses.get().pathway == pathway

    def test_document_upload_view(self, church):
        client = client_for(make_user('Secrétaire', church=church))
        response = client.post('/eglise/documents/', {
            'name': 'PV du conseil',
            'category': 'Procès-verbal',
            'file': SimpleUploadedFile('pv.pdf', b'%PDF-1.4', content_type='application/pdf'),
        })
        assert response.status_code == 302
        assert church.documents.get().file_type == 'application/pdf'

    def test_announcements_are_open_to_every_role(self, church):
        client = client_for(make_user('Responsable transport', church=church))
        client.post('/eglise/annonces/', {'title': 'Bus', 'content': 'Départ à 7h.'})
        assert church.announcements.get().title == 'Bus'

    def test_announcement_edit_forbidden_for_others(self, church):
        announcement = AnnouncementFactory(church=church)
        client = client_for(make_user('Secrétaire', church=church))
        assert client.get(f'/eglise/annonces/{announcement.pk}/').status_code == 403
        client.post(f'/eglise/annonces/{announcement.pk}/supprimer/')
        assert Announcement.objects.filter(pk=announcement.pk).exists()
