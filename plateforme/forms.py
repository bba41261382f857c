from django import forms

from .models import Church, PaymentRequest, PlatformSettings


# ✅ Formulaire d'inscription d'une église (demande de paiement)
class ChurchRegistrationForm(forms.Form):
    # Église
    church_name = forms.CharField(
        label="Nom de l'église",
        max_length=255,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': "Nom de l'église"})
    )
    denomination = forms.CharField(max_length=255, required=False)
    website = forms.URLField(required=False)
    foundation_date = forms.DateField(required=False, widget=forms.DateInput(attrs={'type': 'date'}))
    legal_status = forms.ChoiceField(choices=Church.LEGAL_STATUS_CHOICES, initial='Non déclarée')
    address = forms.CharField(max_length=255, required=False)
    country = forms.CharField(max_length=100, required=False)
    city = forms.CharField(max_length=100, required=False)
    neighborhood = forms.CharField(max_length=100, required=False)
    phone = forms.CharField(max_length=50, required=False)
    whatsapp = forms.CharField(max_length=50, required=False)

    # Administrateur
    admin_name = forms.CharField(label="Nom de l'administrateur", max_length=150)
    admin_email = forms.EmailField(label="Email de l'administrateur")
    admin_contact = forms.CharField(label="Téléphone", max_length=50, required=False)

    # Paiement
    payment_method = forms.ChoiceField(
        choices=PaymentRequest._meta.get_field('payment_method').choices,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    transaction_id = forms.CharField(label="ID de la transaction", max_length=100, required=False)

    def church_onboarding_data(self):
        d = self.cleaned_data
        return {
            'name': d['church_name'],
            'adminEmail': d['admin_email'],
            'denomination': d.get('denomination', ''),
            'website': d.get('website', ''),
            'foundationDate': d['foundation_date'].isoformat() if d.get('foundation_date') else None,
            'legalStatus': d.get('legal_status'),
            'address': d.get('address', ''),
            'country': d.get('country', ''),
            'city': d.get('city', ''),
            'neighborhood': d.get('neighborhood', ''),
            'phone': d.get('phone', ''),
            'whatsapp': d.get('whatsapp', ''),
        }

    def admin_onboarding_data(self):
        d = self.cleaned_data
        return {
            'name': d['admin_name'],
            'email': d['admin_email'],
            'contact': d.get('admin_contact', ''),
        }


class ActivationCodeForm(forms.Form):
    code = forms.CharField(
        label="Code d'activation",
        max_length=30,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'GRACE-XXXXXX'})
    )


class ValidatePaymentForm(forms.Form):
    duration_in_months = forms.IntegerField(label="Durée (mois)", min_value=1, max_value=60, initial=12)


class PlatformSettingsForm(forms.ModelForm):
    class Meta:
        model = PlatformSettings
        fields = '__all__'
