# eglise/services.py
import logging
from decimal import Decimal

from django.core.exceptions import ValidationError, PermissionDenied
from django.db import transaction
from django.db.models import Count, Sum, Q
from django.utils import timezone

from accounts.roles import ADMIN_PRINCIPAL, get_user_active_roles
from .models import (
    Member, Departement, DeathCase, MessageThread, InternalMessage, Transaction, Event, TrainingSession,
    ChurchDocument, Announcement,
)

logger = logging.getLogger(__name__)


# ----------------------------------------------------
# Membres / départements / cas de décès
# ----------------------------------------------------
def create_member(church, **fields):
    if not fields.get('first_name') or not fields.get('last_name'):
        raise ValidationError("Veuillez remplir tous les champs obligatoires.")
    fields.setdefault('status', 'Nouveau')
    member = Member.objects.create(church=church, **fields)
    logger.info("Membre %s ajouté à l'église %s", member.pk, church.reference)
    return member


@transaction.atomic
def save_departement(departement):
    """
    Enregistre un département ; son responsable en devient automatiquement membre.
    """
    departement.save()
    if departement.leader_id:
        departement.members.add(departement.leader)
    return departement


def declare_death_case(church, **fields):
    if not fields.get('deceased_name'):
        raise ValidationError("Veuillez remplir tous les champs obligatoires.")
    fields['status'] = 'En cours'
    case = DeathCase.objects.create(church=church, **fields)
    logger.info("Cas de décès %s déclaré (%s)", case.pk, church.reference)
    return case


def close_death_case(case):
    case.status = 'Clôturé'
    case.save(update_fields=['status'])
    return case


# ----------------------------------------------------
# Finances
# ----------------------------------------------------
def finance_totals(church, start=None, end=None):
    qs = Transaction.objects.filter(church=church)
    if start:
        qs = qs.filter(date__gte=start)
    if end:
        qs = qs.filter(date__lte=end)
    totals = qs.aggregate(
        income=Sum('amount', filter=Q(type='income')),
        expense=Sum('amount', filter=Q(type='expense')),
    )
    income = totals['income'] or Decimal('0')
    expense = totals['expense'] or Decimal('0')
    return {'income': income, 'expense': expense, 'balance': income - expense}


def member_counts(church):
    counts = dict(
        Member.objects.filter(church=church).order_by().values('status').annotate(n=Count('id'))
        .values_list('status', 'n')
    )
    return {
        'total': sum(counts.values()),
        'actifs': counts.get('Actif', 0),
        'nouveaux': counts.get('Nouveau', 0),
        'a_suivre': counts.get('À suivre', 0),
        'inactifs': counts.get('Inactif', 0),
    }


def dashboard_stats(church):
    return {
        'members': member_counts(church),
        'finances': finance_totals(church),
        'departements': Departement.objects.filter(church=church).count(),
        'death_cases_open': DeathCase.objects.filter(church=church, status='En cours').count(),
    }


# ----------------------------------------------------
# Assistant de configuration
# ----------------------------------------------------
ONBOARDING_FIELDS = [
    'name', 'slogan', 'address', 'country', 'city', 'neighborhood', 'phone', 'phone2', 'email', 'whatsapp',
    'leader_name', 'leader_title', 'currency', 'timezone', 'language', 'pdf_footer_text', 'date_format',
]


def complete_onboarding(church, **data):
    for field in ONBOARDING_FIELDS:
        if field in data:
            setattr(church, field, data[field])
    if 'activated_roles' in data:
        church.activated_roles = list(data['activated_roles'])
    church.onboarding_completed = True
    church.save()
    logger.info("Configuration initiale terminée pour %s", church.reference)
    return church


# ----------------------------------------------------
# Messagerie interne
# ----------------------------------------------------
def unread_count(user):
    """
    Nombre de conversations de l'utilisateur contenant au moins un message
    non lu envoyé par quelqu'un d'autre.
    """
    unread = InternalMessage.objects.filter(is_read=False).exclude(sender=user)
    return MessageThread.objects.filter(participants=user, messages__in=unread).distinct().count()


@transaction.atomic
def create_thread(church, sender, participant_ids, subject, text):
    if not subject or not text or not participant_ids:
        raise ValidationError("Veuillez remplir tous les champs obligatoires.")
    participants = list(church.app_users.filter(id__in=participant_ids).exclude(pk=sender.pk))
    if not participants:
        raise ValidationError("Veuillez sélectionner au moins un destinataire.")
    thread = MessageThread.objects.create(church=church, subject=subject)
    thread.participants.add(sender, *participants)
    InternalMessage.objects.create(thread=thread, sender=sender, text=text)
    logger.info("Conversation %s créée par %s", thread.pk, sender.identifiant)
    return thread


def send_message(thread, sender, text):
    if not thread.participants.filter(pk=sender.pk).exists():
        raise PermissionDenied("Vous ne participez pas à cette conversation.")
    if not text or not text.strip():
        raise ValidationError("Le message est vide.")
    return InternalMessage.objects.create(thread=thread, sender=sender, text=text.strip())


def mark_as_read(thread, user):
    """
    Marque comme lus les messages des autres participants.
    """
    return thread.messages.filter(is_read=False).exclude(sender=user).update(is_read=True)


# ----------------------------------------------------
# Événements
# ----------------------------------------------------
def _check_event_dates(fields):
    if not (fields.get('name') and fields.get('start_date') and fields.get('start_time') and fields.get('end_time')):
        raise ValidationError("Veuillez remplir tous les champs obligatoires.")
    end_date = fields.get('end_date')
    if end_date and end_date < fields['start_date']:
        raise ValidationError("La date de fin doit être postérieure à la date de début.")


@transaction.atomic
def create_event(church, **fields):
    """
    Planifie un événement ; il est toujours créé « À venir ».
    """
    _check_event_dates(fields)
    attendees = fields.pop('attendees', None) or []
    fields['status'] = 'À venir'
    event = Event.objects.create(church=church, **fields)
    if attendees:
        event.attendees.set(Member.objects.filter(church=church, pk__in=[getattr(m, 'pk', m) for m in attendees]))
    logger.info("Événement %s planifié (%s)", event.pk, church.reference)
    return event


@transaction.atomic
def update_event(event, **fields):
    _check_event_dates(fields)
    attendees = fields.pop('attendees', None)
    fields.pop('status', None)
    for name, value in fields.items():
        setattr(event, name, value)
    event.save()
    if attendees is not None:
        event.attendees.set(
            Member.objects.filter(church=event.church, pk__in=[getattr(m, 'pk', m) for m in attendees])
        )
    return event


def cancel_event(event):
    event.status = 'Annulé'
    event.save(update_fields=['status'])
    logger.info("Événement %s annulé", event.pk)
    return event


def mark_past_events(church, today=None):
    """
    Les événements « À venir » dont la dernière journée est passée deviennent « Passé ».
    """
    today = today or timezone.localdate()
    events = Event.objects.filter(church=church, status='À venir').filter(
        Q(end_date__lt=today) | Q(end_date__isnull=True, start_date__lt=today)
    )
    return events.update(status='Passé')


def split_events(events):
    """
    Sépare les événements à venir ou annulés (du plus proche au plus lointain)
    des événements passés (du plus récent au plus ancien).
    """
    events = list(events)
    upcoming = sorted((e for e in events if e.status != 'Passé'), key=lambda e: (e.start_date, e.start_time))
    past = sorted((e for e in events if e.status == 'Passé'), key=lambda e: (e.start_date, e.start_time), reverse=True)
    return upcoming, past


# ----------------------------------------------------
# Formations
# ----------------------------------------------------
def add_participants_to_course(course, member_ids):
    if not member_ids:
        raise ValidationError("Veuillez sélectionner au moins un membre.")
    members = Member.objects.filter(church=course.church, pk__in=member_ids)
    course.enrolled_members.add(*members)
    return course


def add_session(course, topic, date):
    if not topic or not date:
        raise ValidationError("Veuillez remplir tous les champs obligatoires.")
    return TrainingSession.objects.create(course=course, topic=topic, date=date)


def set_attendance(session, member, is_present):
    if not session.course.enrolled_members.filter(pk=member.pk).exists():
        raise ValidationError("Ce membre n'est pas inscrit à cette formation.")
    if is_present:
        session.present_members.add(member)
    else:
        session.present_members.remove(member)


@transaction.atomic
def toggle_member_attendance(course, member):
    """
    Présent à toutes les séances : le membre est retiré partout.
    Sinon il est marqué présent à chaque séance. Retourne le nouvel état.
    """
    sessions = list(course.sessions.all())
    fully_present = all(s.present_members.filter(pk=member.pk).exists() for s in sessions)
    for session in sessions:
        set_attendance(session, member, not fully_present)
    return not fully_present


def course_attendance(course):
    sessions = list(course.sessions.prefetch_related('present_members'))
    presents = [{m.pk for m in s.present_members.all()} for s in sessions]
    rows = []
    for member in course.enrolled_members.all():
        marks = [member.pk in p for p in presents]
        rows.append({
            'member': member,
            'presences': marks,
            'rate': round(sum(marks) / len(marks) * 100, 2) if marks else 0,
        })
    return sessions, rows


# ----------------------------------------------------
# Documents
# ----------------------------------------------------
def save_document(church, user, uploaded_file, **fields):
    if not fields.get('name') or not fields.get('category') or uploaded_file is None:
        raise ValidationError("Veuillez remplir tous les champs obligatoires.")
    document = ChurchDocument.objects.create(
        church=church,
        uploaded_by=user,
        file=uploaded_file,
        file_name=uploaded_file.name,
        file_type=getattr(uploaded_file, 'content_type', '') or '',
        **fields
    )
    logger.info("Document %s archivé par %s", document.pk, user.identifiant)
    return document


def filter_documents(documents, category='all', search=''):
    search = (search or '').strip().lower()
    result = [
        d for d in documents
        if (not category or category == 'all' or d.category == category)
        and (not search or search in d.name.lower())
    ]
    return sorted(result, key=lambda d: (d.upload_date, d.pk), reverse=True)


# ----------------------------------------------------
# Annonces
# ----------------------------------------------------
def can_manage_announcement(user, announcement):
    return ADMIN_PRINCIPAL in get_user_active_roles(user) or announcement.author_id == user.pk


def save_announcement(church, author, title, content, announcement=None):
    if not (title or '').strip() or not (content or '').strip():
        raise ValidationError("Veuillez remplir le titre et le contenu de l'annonce.")
    if announcement is None:
        announcement = Announcement(church=church, author=author)
    elif not can_manage_announcement(author, announcement):
        raise PermissionDenied("Seul l'auteur ou l'administrateur peut modifier cette annonce.")
    announcement.title = title.strip()
    announcement.content = content.strip()
    announcement.save()
    return announcement


def delete_announcement(user, announcement):
    if not can_manage_announcement(user, announcement):
        raise PermissionDenied("Seul l'auteur ou l'administrateur peut supprimer cette annonce.")
    announcement.delete()
