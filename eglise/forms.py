from django import forms

from plateforme.models import Church
from accounts.roles import ROLE_CHOICES, SUPER_ADMIN
from .models import (
    Member, Departement, DeathCase, Project, Transaction, Event, SpiritualPathway, TrainingCourse, TrainingSession,
    ChurchDocument, Announcement,
)


class ChurchScopedForm(forms.ModelForm):
    """
    Restreint les listes déroulantes (membres, responsables) à l'église active.
    """
    member_fields = ()

    def __init__(self, *args, church=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.church = church
        for name in self.member_fields:
            if name in self.fields:
                self.fields[name].queryset = Member.objects.filter(church=church)
                self.fields[name].label_from_instance = lambda obj: obj.full_name


# ✅ Membre
class MemberForm(ChurchScopedForm):
    class Meta:
        model = Member
        fields = [
            'first_name', 'last_name', 'phone', 'phone2', 'email', 'gender', 'birth_date', 'address',
            'nationality', 'national_id_number', 'marital_status', 'spouse_name', 'profession',
            'department', 'member_type', 'status', 'conversion_date', 'baptism_date', 'mentor',
        ]
        widgets = {
            'first_name': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Prénom'}),
            'last_name': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Nom'}),
            'birth_date': forms.DateInput(attrs={'type': 'date'}),
            'conversion_date': forms.DateInput(attrs={'type': 'date'}),
            'baptism_date': forms.DateInput(attrs={'type': 'date'}),
        }


# ✅ Département
class DepartementForm(ChurchScopedForm):
    member_fields = ('leader', 'members')

    class Meta:
        model = Departement
        fields = ['name', 'description', 'leader', 'members']
        widgets = {
            'members': forms.CheckboxSelectMultiple,
        }


# ✅ Cas de décès
class DeathCaseForm(ChurchScopedForm):
    member_fields = ('family_contact',)

    class Meta:
        model = DeathCase
        fields = [
            'deceased_name', 'declaration_date', 'family_contact', 'death_date',
            'funeral_date', 'funeral_location', 'church_support_details',
        ]
        widgets = {
            'declaration_date': forms.DateInput(attrs={'type': 'date'}),
            'death_date': forms.DateInput(attrs={'type': 'date'}),
            'funeral_date': forms.DateInput(attrs={'type': 'date'}),
        }


# ✅ Projet
class ProjectForm(ChurchScopedForm):
    member_fields = ('leader',)

    class Meta:
        model = Project
        fields = ['name', 'description', 'status', 'budget', 'spent', 'start_date', 'end_date', 'leader']
        widgets = {
            'start_date': forms.DateInput(attrs={'type': 'date'}),
            'end_date': forms.DateInput(attrs={'type': 'date'}),
        }

    def clean(self):
        cleaned = super().clean()
        start, end = cleaned.get('start_date'), cleaned.get('end_date')
        if start and end and end < start:
            self.add_error('end_date', "La date de fin doit être postérieure à la date de début.")
        return cleaned


# ✅ Transaction
class TransactionForm(ChurchScopedForm):
    member_fields = ('member',)

    class Meta:
        model = Transaction
        fields = ['date', 'type', 'category', 'category_detail', 'amount', 'description', 'member', 'period']
        widgets = {
            'date': forms.DateInput(attrs={'type': 'date'}),
            'amount': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'}),
        }

    def clean_amount(self):
        amount = self.cleaned_data['amount']
        if amount is None or amount <= 0:
            raise forms.ValidationError("Montant invalide")
        return amount


# ✅ Événement
class EventForm(ChurchScopedForm):
    member_fields = ('organizer', 'attendees')

    class Meta:
        model = Event
        fields = [
            'name', 'type', 'objective', 'start_date', 'end_date', 'start_time', 'end_time', 'location',
            'description', 'recurrence', 'recurrence_end_date', 'access_type', 'expected_participants',
            'organizer', 'attendees', 'report', 'internal_notes',
        ]
        widgets = {
            'start_date': forms.DateInput(attrs={'type': 'date'}),
            'end_date': forms.DateInput(attrs={'type': 'date'}),
            'recurrence_end_date': forms.DateInput(attrs={'type': 'date'}),
            'start_time': forms.TimeInput(attrs={'type': 'time'}),
            'end_time': forms.TimeInput(attrs={'type': 'time'}),
            'attendees': forms.CheckboxSelectMultiple,
        }


# ✅ Formation
class TrainingCourseForm(ChurchScopedForm):
    member_fields = ('leader',)

    class Meta:
        model = TrainingCourse
        fields = ['pathway', 'custom_pathway', 'name', 'description', 'leader', 'status', 'is_paid', 'amount']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['pathway'].queryset = SpiritualPathway.objects.filter(church=self.church)

    def clean(self):
        cleaned = super().clean()
        if not cleaned.get('pathway') and not cleaned.get('custom_pathway'):
            self.add_error('custom_pathway', "Veuillez choisir un parcours ou en saisir un.")
        if cleaned.get('is_paid') and not cleaned.get('amount'):
            self.add_error('amount', "Montant invalide")
        return cleaned


class TrainingSessionForm(forms.ModelForm):
    class Meta:
        model = TrainingSession
        fields = ['topic', 'date']
        widgets = {'date': forms.DateInput(attrs={'type': 'date'})}


class ParticipantsForm(forms.Form):
    member_ids = forms.TypedMultipleChoiceField(coerce=int, required=False, widget=forms.CheckboxSelectMultiple)

    def __init__(self, *args, members=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['member_ids'].choices = [(m.pk, m.full_name) for m in (members or [])]


# ✅ Document
class DocumentForm(forms.ModelForm):
    class Meta:
        model = ChurchDocument
        fields = ['name', 'category', 'description', 'file']


class DocumentFilterForm(forms.Form):
    q = forms.CharField(required=False)
    category = forms.ChoiceField(
        required=False,
        choices=[('all', 'Toutes les catégories')] + ChurchDocument.CATEGORIE_CHOICES,
    )


# ✅ Annonce
class AnnouncementForm(forms.ModelForm):
    class Meta:
        model = Announcement
        fields = ['title', 'content']
        widgets = {'content': forms.Textarea(attrs={'rows': 4})}


# ✅ Messagerie
class NewThreadForm(forms.Form):
    subject = forms.CharField(label="Sujet", max_length=255)
    participants = forms.MultipleChoiceField(label="Destinataires", widget=forms.CheckboxSelectMultiple)
    text = forms.CharField(label="Message", widget=forms.Textarea(attrs={'rows': 4}))

    def __init__(self, *args, church=None, sender=None, **kwargs):
        super().__init__(*args, **kwargs)
        users = church.app_users.exclude(pk=sender.pk) if church else []
        self.fields['participants'].choices = [(u.pk, u.name) for u in users]


class ReplyForm(forms.Form):
    text = forms.CharField(label="Message", widget=forms.Textarea(attrs={'rows': 3}))


# ✅ Assistant de configuration
class OnboardingForm(forms.ModelForm):
    activated_roles = forms.MultipleChoiceField(
        label="Rôles activés",
        choices=[c for c in ROLE_CHOICES if c[0] != SUPER_ADMIN],
        required=False,
        widget=forms.CheckboxSelectMultiple,
    )

    class Meta:
        model = Church
        fields = [
            'name', 'slogan', 'address', 'country', 'city', 'neighborhood', 'phone', 'phone2', 'email',
            'whatsapp', 'leader_name', 'leader_title', 'currency', 'timezone', 'language',
            'pdf_footer_text', 'date_format',
        ]
