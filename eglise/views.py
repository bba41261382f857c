import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.exceptions import ValidationError, PermissionDenied
from django.db.models import Q
from django.shortcuts import render, redirect, get_object_or_404
from django.views.decorators.http import require_POST

from accounts.decorators import page_permission_required, church_required
from accounts.roles import ROLES_DATA
from .forms import (
    MemberForm, DepartementForm, DeathCaseForm, ProjectForm, TransactionForm,
    NewThreadForm, ReplyForm, OnboardingForm, EventForm, TrainingCourseForm, TrainingSessionForm, ParticipantsForm,
    DocumentForm, DocumentFilterForm, AnnouncementForm,
)
from .models import (
    Member, Departement, DeathCase, Project, Transaction, MessageThread, Event, TrainingCourse, TrainingSession,
    ChurchDocument, Announcement,
)
from .services import (
    create_member, save_departement, declare_death_case, close_death_case, finance_totals, dashboard_stats,
    complete_onboarding, create_thread, send_message, mark_as_read, create_event, update_event, cancel_event,
    split_events, mark_past_events, add_participants_to_course, add_session, set_attendance,
    toggle_member_attendance, course_attendance, save_document, filter_documents, can_manage_announcement,
    save_announcement, delete_announcement,
)

logger = logging.getLogger(__name__)


# ----------------------------------------------------
# Tableau de bord
# ----------------------------------------------------
@login_required
def dashboard_view(request):
    if request.user.is_super_admin:
        return redirect('plateforme:super_admin_dashboard')
    return _church_dashboard(request)


@church_required
@page_permission_required('dashboard')
def _church_dashboard(request):
    church = request.user.church
    context = {
        "stats": dashboard_stats(church),
        "recent_transactions": Transaction.objects.filter(church=church)[:5],
        "new_members": Member.objects.filter(church=church, status='Nouveau')[:5],
    }
    return render(request, "eglise/dashboard.html", context)


# ----------------------------------------------------
# Assistant de configuration
# ----------------------------------------------------
@church_required
def onboarding_view(request):
    church = request.user.church
    if church.onboarding_completed:
        return redirect('dashboard')

    if request.method == 'POST':
        form = OnboardingForm(request.POST, instance=church)
        if form.is_valid():
            data = dict(form.cleaned_data)
            data['activated_roles'] = data.get('activated_roles') or [r['role'] for r in ROLES_DATA]
            complete_onboarding(church, **data)
            messages.success(request, f"✅ Bienvenue ! La configuration de {church.name} est terminée.")
            return redirect('dashboard')
        messages.error(request, "Veuillez remplir tous les champs obligatoires.")
    else:
        form = OnboardingForm(instance=church, initial={'activated_roles': church.activated_roles})
    return render(request, "eglise/onboarding.html", {"form": form})


# ----------------------------------------------------
# Membres
# ----------------------------------------------------
@church_required
@page_permission_required('members-list')
def member_list_view(request):
    members = Member.objects.filter(church=request.user.church)
    q = request.GET.get('q', '').strip()
    if q:
        members = members.filter(
            Q(first_name__icontains=q) | Q(last_name__icontains=q) | Q(phone__icontains=q) | Q(email__icontains=q)
        )
    statut = request.GET.get('status', '')
    if statut:
        members = members.filter(status=statut)
    return render(request, "eglise/member_list.html", {
        "members": members,
        "q": q,
        "status": statut,
        "status_choices": Member.STATUT_CHOICES,
    })


@church_required
@page_permission_required('members-list')
def member_form_view(request, pk=None):
    church = request.user.church
    member = get_object_or_404(Member, pk=pk, church=church) if pk else None
    form = MemberForm(request.POST or None, instance=member, church=church)
    if request.method == 'POST':
        if form.is_valid():
            if member is None:
                obj = create_member(church, **form.cleaned_data)
            else:
                obj = form.save()
            messages.success(request, f"✅ {obj.full_name} a été enregistré.")
            return redirect('eglise:member_list')
        messages.error(request, "Veuillez remplir tous les champs obligatoires.")
    return render(request, "eglise/member_form.html", {"form": form, "member": member})


@church_required
@page_permission_required('members-list')
@require_POST
def member_delete_view(request, pk):
    member = get_object_or_404(Member, pk=pk, church=request.user.church)
    member.delete()
    messages.success(request, f"🗑️ {member.full_name} a été supprimé.")
    return redirect('eglise:member_list')


# ----------------------------------------------------
# Départements / ministères
# ----------------------------------------------------
@church_required
@page_permission_required('groups')
def departement_list_view(request):
    departements = (
        Departement.objects.filter(church=request.user.church)
        .select_related('leader')
        .prefetch_related('members')
    )
    return render(request, "eglise/departement_list.html", {"departements": departements})


@church_required
@page_permission_required('groups')
def departement_form_view(request, pk=None):
    church = request.user.church
    departement = get_object_or_404(Departement, pk=pk, church=church) if pk else None
    form = DepartementForm(request.POST or None, instance=departement, church=church)
    if request.method == 'POST':
        if form.is_valid():
            obj = form.save(commit=False)
            obj.church = church
            obj.save()
            form.save_m2m()
            save_departement(obj)
            messages.success(request, f"✅ Département {obj.name} enregistré.")
            return redirect('eglise:departement_list')
        messages.error(request, "Veuillez remplir tous les champs obligatoires.")
    return render(request, "eglise/departement_form.html", {"form": form, "departement": departement})


@church_required
@page_permission_required('groups')
@require_POST
def departement_delete_view(request, pk):
    departement = get_object_or_404(Departement, pk=pk, church=request.user.church)
    departement.delete()
    messages.success(request, f"🗑️ Département {departement.name} supprimé.")
    return redirect('eglise:departement_list')


# ----------------------------------------------------
# Finances
# ----------------------------------------------------
@church_required
@page_permission_required('finances-overview')
def transaction_list_view(request):
    church = request.user.church
    transactions = Transaction.objects.filter(church=church).select_related('member')
    type_filter = request.GET.get('type', '')
    if type_filter:
        transactions = transactions.filter(type=type_filter)
    start = request.GET.get('start') or None
    end = request.GET.get('end') or None
    if start:
        transactions = transactions.filter(date__gte=start)
    if end:
        transactions = transactions.filter(date__lte=end)

    form = TransactionForm(church=church)
    return render(request, "eglise/transaction_list.html", {
        "transactions": transactions,
        "totals": finance_totals(church, start, end),
        "form": form,
    })


@church_required
@page_permission_required('finances-overview')
@require_POST
def transaction_create_view(request):
    church = request.user.church
    form = TransactionForm(request.POST, church=church)
    if form.is_valid():
        obj = form.save(commit=False)
        obj.church = church
        obj.save()
        logger.info("Transaction %s enregistrée (%s)", obj.pk, church.reference)
        messages.success(request, "✅ Transaction enregistrée.")
    else:
        for errors in form.errors.values():
            messages.error(request, errors[0])
    return redirect('eglise:transaction_list')


@church_required
@page_permission_required('finances-overview')
@require_POST
def transaction_delete_view(request, pk):
    get_object_or_404(Transaction, pk=pk, church=request.user.church).delete()
    messages.success(request, "🗑️ Transaction supprimée.")
    return redirect('eglise:transaction_list')


# ----------------------------------------------------
# Cas de décès
# ----------------------------------------------------
@church_required
@page_permission_required('cas-deces')
def death_case_list_view(request):
    church = request.user.church
    cases = DeathCase.objects.filter(church=church).select_related('family_contact')
    form = DeathCaseForm(request.POST or None, church=church)
    if request.method == 'POST':
        if form.is_valid():
            try:
                declare_death_case(church, **form.cleaned_data)
            except ValidationError as e:
                messages.error(request, e.messages[0])
            else:
                messages.success(request, "✅ Cas de décès déclaré.")
                return redirect('eglise:death_case_list')
        else:
            messages.error(request, "Veuillez remplir tous les champs obligatoires.")
    return render(request, "eglise/death_case_list.html", {"cases": cases, "form": form})


@church_required
@page_permission_required('cas-deces')
@require_POST
def death_case_close_view(request, pk):
    case = get_object_or_404(DeathCase, pk=pk, church=request.user.church)
    close_death_case(case)
    messages.success(request, f"Le cas de {case.deceased_name} est clôturé.")
    return redirect('eglise:death_case_list')


# ----------------------------------------------------
# Projets
# ----------------------------------------------------
@church_required
@page_permission_required('projects')
def project_list_view(request):
    projects = Project.objects.filter(church=request.user.church).select_related('leader')
    return render(request, "eglise/project_list.html", {"projects": projects})


@church_required
@page_permission_required('projects')
def project_form_view(request, pk=None):
    church = request.user.church
    project = get_object_or_404(Project, pk=pk, church=church) if pk else None
    form = ProjectForm(request.POST or None, instance=project, church=church)
    if request.method == 'POST':
        if form.is_valid():
            obj = form.save(commit=False)
            obj.church = church
            obj.save()
            messages.success(request, f"✅ Projet {obj.name} enregistré.")
            return redirect('eglise:project_list')
        messages.error(request, "Veuillez remplir tous les champs obligatoires.")
    return render(request, "eglise/project_form.html", {"form": form, "project": project})


@church_required
@page_permission_required('projects')
@require_POST
def project_delete_view(request, pk):
    get_object_or_404(Project, pk=pk, church=request.user.church).delete()
    messages.success(request, "🗑️ Projet supprimé.")
    return redirect('eglise:project_list')


# ----------------------------------------------------
# Messagerie interne
# ----------------------------------------------------
@church_required
@page_permission_required('internal-messaging')
def thread_list_view(request):
    church = request.user.church
    threads = (
        MessageThread.objects.filter(church=church, participants=request.user)
        .prefetch_related('participants', 'messages')
    )
    form = NewThreadForm(request.POST or None, church=church, sender=request.user)
    if request.method == 'POST':
        if form.is_valid():
            try:
                thread = create_thread(
                    church, request.user,
                    form.cleaned_data['participants'],
                    form.cleaned_data['subject'],
                    form.cleaned_data['text'],
                )
            except ValidationError as e:
                messages.error(request, e.messages[0])
            else:
                return redirect('eglise:thread_detail', pk=thread.pk)
        else:
            messages.error(request, "Veuillez remplir tous les champs obligatoires.")
    return render(request, "eglise/thread_list.html", {"threads": threads, "form": form})


@church_required
@page_permission_required('internal-messaging')
def thread_detail_view(request, pk):
    thread = get_object_or_404(MessageThread, pk=pk, church=request.user.church, participants=request.user)
    if request.method == 'POST':
        form = ReplyForm(request.POST)
        if form.is_valid():
            try:
                send_message(thread, request.user, form.cleaned_data['text'])
            except ValidationError as e:
                messages.error(request, e.messages[0])
            return redirect('eglise:thread_detail', pk=thread.pk)
    else:
        form = ReplyForm()
    mark_as_read(thread, request.user)
    return render(request, "eglise/thread_detail.html", {
        "thread": thread,
        "thread_messages": thread.messages.select_related('sender'),
        "form": form,
    })


# ----------------------------------------------------
# Cultes et événements
# ----------------------------------------------------
@church_required
@page_permission_required('events')
def event_list_view(request):
    church = request.user.church
    mark_past_events(church)
    upcoming, past = split_events(Event.objects.filter(church=church).select_related('organizer'))
    return render(request, "eglise/event_list.html", {"upcoming_events": upcoming, "past_events": past})


@church_required
@page_permission_required('events')
def event_form_view(request, pk=None):
    church = request.user.church
    event = get_object_or_404(Event, pk=pk, church=church) if pk else None
    initial = {'start_date': request.GET['date']} if event is None and request.GET.get('date') else None
    form = EventForm(request.POST or None, instance=event, church=church, initial=initial)
    if request.method == 'POST':
        if form.is_valid():
            try:
                if event is None:
                    obj = create_event(church, **form.cleaned_data)
                else:
                    obj = update_event(event, **form.cleaned_data)
            except ValidationError as e:
                messages.error(request, e.messages[0])
            else:
                messages.success(request, f"✅ Événement {obj.name} enregistré.")
                return redirect('eglise:event_list')
        else:
            messages.error(request, "Veuillez remplir tous les champs obligatoires.")
    return render(request, "eglise/event_form.html", {"form": form, "event": event})


@church_required
@page_permission_required('events')
@require_POST
def event_cancel_view(request, pk):
    event = cancel_event(get_object_or_404(Event, pk=pk, church=request.user.church))
    messages.success(request, f"L'événement {event.name} est annulé.")
    return redirect('eglise:event_list')


@church_required
@page_permission_required('events')
@require_POST
def event_delete_view(request, pk):
    get_object_or_404(Event, pk=pk, church=request.user.church).delete()
    messages.success(request, "🗑️ Événement supprimé.")
    return redirect('eglise:event_list')


# ----------------------------------------------------
# Formations
# ----------------------------------------------------
@church_required
@page_permission_required('education')
def course_list_view(request):
    courses = (
        TrainingCourse.objects.filter(church=request.user.church)
        .select_related('pathway', 'leader')
        .prefetch_related('enrolled_members', 'sessions')
    )
    return render(request, "eglise/course_list.html", {"courses": courses})


@church_required
@page_permission_required('education')
def course_form_view(request, pk=None):
    church = request.user.church
    course = get_object_or_404(TrainingCourse, pk=pk, church=church) if pk else None
    form = TrainingCourseForm(request.POST or None, instance=course, church=church)
    if request.method == 'POST':
        if form.is_valid():
            obj = form.save(commit=False)
            obj.church = church
            obj.save()
            messages.success(request, f"✅ Formation {obj.name} enregistrée.")
            return redirect('eglise:course_detail', pk=obj.pk)
        messages.error(request, "Veuillez remplir tous les champs obligatoires.")
    return render(request, "eglise/course_form.html", {"form": form, "course": course})


@church_required
@page_permission_required('education')
def course_detail_view(request, pk):
    church = request.user.church
    course = get_object_or_404(TrainingCourse, pk=pk, church=church)
    sessions, rows = course_attendance(course)
    candidates = Member.objects.filter(church=church).exclude(formations=course)
    return render(request, "eglise/course_detail.html", {
        "course": course,
        "sessions": sessions,
        "rows": rows,
        "session_form": TrainingSessionForm(),
        "participants_form": ParticipantsForm(members=candidates),
    })


@church_required
@page_permission_required('education')
@require_POST
def course_add_participants_view(request, pk):
    church = request.user.church
    course = get_object_or_404(TrainingCourse, pk=pk, church=church)
    form = ParticipantsForm(request.POST, members=Member.objects.filter(church=church))
    try:
        if not form.is_valid():
            raise ValidationError("Veuillez sélectionner au moins un membre.")
        add_participants_to_course(course, form.cleaned_data['member_ids'])
    except ValidationError as e:
        messages.error(request, e.messages[0])
    else:
        messages.success(request, "✅ Participants ajoutés.")
    return redirect('eglise:course_detail', pk=pk)


@church_required
@page_permission_required('education')
@require_POST
def course_add_session_view(request, pk):
    course = get_object_or_404(TrainingCourse, pk=pk, church=request.user.church)
    form = TrainingSessionForm(request.POST)
    if form.is_valid():
        add_session(course, form.cleaned_data['topic'], form.cleaned_data['date'])
        messages.success(request, "✅ Séance ajoutée.")
    else:
        messages.error(request, "Veuillez remplir tous les champs obligatoires.")
    return redirect('eglise:course_detail', pk=pk)


@church_required
@page_permission_required('education')
@require_POST
def attendance_view(request, pk, session_id, member_id):
    church = request.user.church
    session = get_object_or_404(TrainingSession, pk=session_id, course__pk=pk, course__church=church)
    member = get_object_or_404(Member, pk=member_id, church=church)
    try:
        set_attendance(session, member, request.POST.get('present') == 'on')
    except ValidationError as e:
        messages.error(request, e.messages[0])
    return redirect('eglise:course_detail', pk=pk)


@church_required
@page_permission_required('education')
@require_POST
def attendance_toggle_view(request, pk, member_id):
    church = request.user.church
    course = get_object_or_404(TrainingCourse, pk=pk, church=church)
    member = get_object_or_404(Member, pk=member_id, church=church)
    try:
        toggle_member_attendance(course, member)
    except ValidationError as e:
        messages.error(request, e.messages[0])
    return redirect('eglise:course_detail', pk=pk)


@church_required
@page_permission_required('education')
@require_POST
def course_delete_view(request, pk):
    get_object_or_404(TrainingCourse, pk=pk, church=request.user.church).delete()
    messages.success(request, "🗑️ Formation supprimée.")
    return redirect('eglise:course_list')


# ----------------------------------------------------
# Documents
# ----------------------------------------------------
@church_required
@page_permission_required('documents')
def document_list_view(request):
    church = request.user.church
    filters = DocumentFilterForm(request.GET or None)
    documents = ChurchDocument.objects.filter(church=church).select_related('uploaded_by')
    if filters.is_valid():
        documents = filter_documents(documents, filters.cleaned_data.get('category'), filters.cleaned_data.get('q'))

    form = DocumentForm(request.POST or None, request.FILES or None)
    if request.method == 'POST':
        if form.is_valid():
            data = dict(form.cleaned_data)
            try:
                save_document(church, request.user, data.pop('file'), **data)
            except ValidationError as e:
                messages.error(request, e.messages[0])
            else:
                messages.success(request, "✅ Document archivé.")
                return redirect('eglise:document_list')
        else:
            messages.error(request, "Veuillez remplir tous les champs obligatoires.")
    return render(request, "eglise/document_list.html", {"documents": documents, "filters": filters, "form": form})


@church_required
@page_permission_required('documents')
@require_POST
def document_delete_view(request, pk):
    document = get_object_or_404(ChurchDocument, pk=pk, church=request.user.church)
    document.file.delete(save=False)
    document.delete()
    messages.success(request, "🗑️ Document supprimé.")
    return redirect('eglise:document_list')


# ----------------------------------------------------
# Annonces
# ----------------------------------------------------
@church_required
@page_permission_required('announcements')
def announcement_list_view(request):
    church = request.user.church
    form = AnnouncementForm(request.POST or None)
    if request.method == 'POST':
        try:
            save_announcement(church, request.user, request.POST.get('title'), request.POST.get('content'))
        except ValidationError as e:
            messages.error(request, e.messages[0])
        else:
            messages.success(request, "✅ Annonce publiée.")
            return redirect('eglise:announcement_list')
    announcements = Announcement.objects.filter(church=church).select_related('author')
    return render(request, "eglise/announcement_list.html", {
        "rows": [{"announcement": a, "can_manage": can_manage_announcement(request.user, a)} for a in announcements],
        "form": form,
    })


@church_required
@page_permission_required('announcements')
def announcement_edit_view(request, pk):
    church = request.user.church
    announcement = get_object_or_404(Announcement, pk=pk, church=church)
    if not can_manage_announcement(request.user, announcement):
        raise PermissionDenied("Seul l'auteur ou l'administrateur peut modifier cette annonce.")
    form = AnnouncementForm(request.POST or None, instance=announcement)
    if request.method == 'POST':
        try:
            save_announcement(
                church, request.user, request.POST.get('title'), request.POST.get('content'), announcement
            )
        except ValidationError as e:
            messages.error(request, e.messages[0])
        else:
            messages.success(request, "✅ Annonce modifiée.")
            return redirect('eglise:announcement_list')
    return render(request, "eglise/announcement_form.html", {"form": form, "announcement": announcement})


@church_required
@page_permission_required('announcements')
@require_POST
def announcement_delete_view(request, pk):
    announcement = get_object_or_404(Announcement, pk=pk, church=request.user.church)
    try:
        delete_announcement(request.user, announcement)
    except PermissionDenied as e:
        messages.error(request, str(e))
    else:
        messages.success(request, "🗑️ Annonce supprimée.")
    return redirect('eglise:announcement_list')
