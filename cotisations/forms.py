from django import forms

from eglise.models import Departement, DeathCase, Project
from .engine import STATUS_CHOICES
from .models import CotisationCampaign, CotisationPayment


# ✅ Création d'une campagne
class CampaignForm(forms.ModelForm):
    class Meta:
        model = CotisationCampaign
        fields = [
            'name', 'description', 'type', 'frequency', 'default_amount', 'is_amount_free', 'is_mandatory',
            'target_scope', 'target_group', 'start_date', 'end_date', 'death_case', 'project',
            'close_on_target_amount',
        ]
        widgets = {
            'name': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Ex: Projet Construction Temple'}),
            'description': forms.Textarea(attrs={'rows': 2}),
            'default_amount': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01', 'placeholder': '50000'}),
            'start_date': forms.DateInput(attrs={'type': 'date'}),
            'end_date': forms.DateInput(attrs={'type': 'date'}),
        }
        labels = {
            'default_amount': 'Montant par défaut',
            'is_amount_free': 'Montant libre (laisser le membre décider)',
        }

    def __init__(self, *args, church=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['target_group'].queryset = Departement.objects.filter(church=church)
        self.fields['death_case'].queryset = DeathCase.objects.filter(church=church, status='En cours')
        self.fields['project'].queryset = Project.objects.filter(church=church)
        self.fields['default_amount'].required = False

    def clean(self):
        cleaned = super().clean()
        # La clôture à l'objectif n'existe que sans date de fin
        if cleaned.get('end_date'):
            cleaned['close_on_target_amount'] = False
        return cleaned


class PaymentForm(forms.ModelForm):
    class Meta:
        model = CotisationPayment
        fields = ['amount', 'date', 'method']
        widgets = {
            'amount': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01', 'placeholder': 'Montant versé'}),
            'date': forms.DateInput(attrs={'type': 'date'}),
            'method': forms.Select(attrs={'class': 'form-select'}),
        }


class GroupPaymentForm(PaymentForm):
    pledge_ids = forms.TypedMultipleChoiceField(coerce=int, required=False, widget=forms.MultipleHiddenInput)

    def __init__(self, *args, pledges=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['pledge_ids'].choices = [(p.pk, p.pk) for p in (pledges or [])]


class AddMembersForm(forms.Form):
    member_ids = forms.TypedMultipleChoiceField(coerce=int, required=False, widget=forms.CheckboxSelectMultiple)
    expected_amount = forms.DecimalField(max_digits=12, decimal_places=2, required=False, min_value=0)

    def __init__(self, *args, members=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['member_ids'].choices = [(m.pk, m.full_name) for m in (members or [])]


class CampaignFilterForm(forms.Form):
    q = forms.CharField(required=False)
    type = forms.ChoiceField(
        required=False,
        choices=[('all', 'Tous les types')] + CotisationCampaign.TYPE_CHOICES,
    )
    date = forms.DateField(required=False, widget=forms.DateInput(attrs={'type': 'date'}))


class PledgeFilterForm(forms.Form):
    q = forms.CharField(required=False)
    status = forms.ChoiceField(required=False, choices=[('all', 'Tous les statuts')] + STATUS_CHOICES)
