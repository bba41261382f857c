from django import forms
from django.contrib.auth import authenticate
from django.contrib.auth.forms import ReadOnlyPasswordHashField
from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _

from .models import AppUser, UserRole
from .roles import ROLE_CHOICES
from .services import check_credentials


# ----------------------------------------------------
# Formulaire de connexion
# ----------------------------------------------------
class LoginForm(forms.Form):
    """
    Connexion par identifiant ou email.
    """
    username = forms.CharField(
        label=_("Identifiant ou e-mail"),
        widget=forms.TextInput(attrs={
            'autofocus': True,
            'placeholder': 'Ex: GRACE-1234 ou email',
            'class': 'form-control'
        })
    )
    password = forms.CharField(
        label=_("Mot de passe"),
        widget=forms.PasswordInput(attrs={'placeholder': 'Votre mot de passe', 'class': 'form-control'}),
        strip=False
    )

    def __init__(self, request=None, *args, **kwargs):
        self.request = request
        self.user_cache = None
        super().__init__(*args, **kwargs)

    def clean(self):
        username = self.cleaned_data.get('username')
        password = self.cleaned_data.get('password')
        if username and password:
            check_credentials(username, password)
            self.user_cache = authenticate(self.request, username=username, password=password)
            if self.user_cache is None:
                raise ValidationError("Identifiant ou e-mail non trouvé, ou église inactive.")
        return self.cleaned_data

    def get_user(self):
        return self.user_cache


class PasswordChangeForm(forms.Form):
    current_password = forms.CharField(
        label="Mot de passe actuel",
        widget=forms.PasswordInput(attrs={'class': 'form-control'}),
        strip=False
    )
    new_password1 = forms.CharField(
        label="Nouveau mot de passe",
        widget=forms.PasswordInput(attrs={'class': 'form-control'}),
        strip=False
    )
    new_password2 = forms.CharField(
        label="Confirmer le mot de passe",
        widget=forms.PasswordInput(attrs={'class': 'form-control'}),
        strip=False
    )

    def clean_new_password2(self):
        p1 = self.cleaned_data.get('new_password1')
        p2 = self.cleaned_data.get('new_password2')
        if p1 and p2 and p1 != p2:
            raise forms.ValidationError("Les mots de passe ne correspondent pas.")
        return p2


class PasswordResetRequestForm(forms.Form):
    username = forms.CharField(
        label="Identifiant ou e-mail",
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )


class ProfileForm(forms.ModelForm):
    class Meta:
        model = AppUser
        fields = ['name', 'email', 'contact', 'civilite', 'sexe', 'birth_date', 'marital_status', 'cell_group']
        widgets = {
            'birth_date': forms.DateInput(attrs={'type': 'date', 'class': 'form-control'}),
        }


# ----------------------------------------------------
# Personnel de l'église
# ----------------------------------------------------
class AppUserForm(forms.ModelForm):
    role = forms.ChoiceField(choices=[('', '---------')] + ROLE_CHOICES, required=False, label="Rôle")
    role_start_date = forms.DateField(
        required=False,
        label="Début du rôle",
        widget=forms.DateInput(attrs={'type': 'date', 'class': 'form-control'})
    )
    role_end_date = forms.DateField(
        required=False,
        label="Fin du rôle",
        widget=forms.DateInput(attrs={'type': 'date', 'class': 'form-control'})
    )

    class Meta:
        model = AppUser
        fields = [
            'name', 'email', 'status', 'civilite', 'sexe', 'contact', 'department',
            'groupe_administratif', 'birth_date', 'marital_status', 'cell_group', 'join_date',
        ]
        widgets = {
            'name': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Nom complet'}),
            'email': forms.EmailInput(attrs={'class': 'form-control'}),
            'birth_date': forms.DateInput(attrs={'type': 'date', 'class': 'form-control'}),
            'join_date': forms.DateInput(attrs={'type': 'date', 'class': 'form-control'}),
        }

    def clean(self):
        cleaned = super().clean()
        start, end = cleaned.get('role_start_date'), cleaned.get('role_end_date')
        if cleaned.get('role') and not start:
            self.add_error('role_start_date', "La date de début du rôle est obligatoire.")
        if start and end and end < start:
            self.add_error('role_end_date', "La date de fin doit être postérieure à la date de début.")
        return cleaned

    def roles_data(self):
        if not self.cleaned_data.get('role'):
            return []
        return [{
            'role': self.cleaned_data['role'],
            'start_date': self.cleaned_data['role_start_date'],
            'end_date': self.cleaned_data.get('role_end_date'),
        }]


class UserRoleForm(forms.ModelForm):
    class Meta:
        model = UserRole
        fields = ['role', 'start_date', 'end_date']
        widgets = {
            'role': forms.Select(choices=ROLE_CHOICES, attrs={'class': 'form-select'}),
            'start_date': forms.DateInput(attrs={'type': 'date'}),
            'end_date': forms.DateInput(attrs={'type': 'date'}),
        }


# ----------------------------------------------------
# Formulaires de l'admin Django
# ----------------------------------------------------
class AppUserCreationFormAdmin(forms.ModelForm):
    password1 = forms.CharField(label="Mot de passe", widget=forms.PasswordInput)
    password2 = forms.CharField(label="Confirmer le mot de passe", widget=forms.PasswordInput)

    class Meta:
        model = AppUser
        fields = ('identifiant', 'name', 'email', 'church')

    def clean_password2(self):
        pw1 = self.cleaned_data.get('password1')
        pw2 = self.cleaned_data.get('password2')
        if pw1 and pw2 and pw1 != pw2:
            raise forms.ValidationError("Les mots de passe ne correspondent pas.")
        return pw2

    def save(self, commit=True):
        user = super().save(commit=False)
        user.set_password(self.cleaned_data['password1'])
        if commit:
            user.save()
        return user


class AppUserChangeFormAdmin(forms.ModelForm):
    password = ReadOnlyPasswordHashField(label="Mot de passe")

    class Meta:
        model = AppUser
        fields = '__all__'
