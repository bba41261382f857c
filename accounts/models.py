from django.db import models
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from plateforme.models import Church
from .managers import AppUserManager


class AppUser(AbstractBaseUser, PermissionsMixin):
    STATUT_CHOICES = (
        ('Actif', 'Actif'),
        ('Suspendu', 'Suspendu'),
    )
    CIVILITE_CHOICES = (
        ('M.', 'M.'),
        ('Mme', 'Mme'),
    )
    SEXE_CHOICES = (
        ('M', 'Masculin'),
        ('F', 'Féminin'),
    )
    MARITAL_CHOICES = (
        ('Célibataire', 'Célibataire'),
        ('Marié(e)', 'Marié(e)'),
        ('Divorcé(e)', 'Divorcé(e)'),
        ('Veuf(ve)', 'Veuf(ve)'),
    )

    identifiant = models.CharField(
        _('identifiant'),
        max_length=50,
        unique=True,
        help_text=_('Identifiant de connexion, ex: EGLIS-1234')
    )
    email = models.EmailField(_('adresse email'), blank=True)
    name = models.CharField(_('nom complet'), max_length=150)

    # Null pour le super administrateur de la plateforme
    church = models.ForeignKey(
        Church,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='app_users',
        verbose_name=_('église')
    )

    status = models.CharField(max_length=10, choices=STATUT_CHOICES, default='Actif')
    civilite = models.CharField(max_length=3, choices=CIVILITE_CHOICES, default='M.')
    sexe = models.CharField(max_length=1, choices=SEXE_CHOICES, default='M')
    contact = models.CharField(_('téléphone / WhatsApp'), max_length=50, blank=True)
    department = models.CharField(_('ministère / département'), max_length=150, blank=True)
    groupe_administratif = models.CharField(max_length=100, blank=True)
    birth_date = models.DateField(null=True, blank=True)
    marital_status = models.CharField(max_length=15, choices=MARITAL_CHOICES, default='Célibataire')
    cell_group = models.CharField(max_length=100, blank=True)
    join_date = models.DateField(default=timezone.localdate)
    photo = models.ImageField(upload_to='avatars/', blank=True, null=True)

    is_super_admin = models.BooleanField(
        _('super administrateur'),
        default=False,
        help_text=_('Gère toutes les églises de la plateforme.')
    )
    must_change_password = models.BooleanField(
        default=False,
        help_text=_('Le mot de passe par défaut doit être changé à la prochaine connexion.')
    )
    is_active = models.BooleanField(_('actif'), default=True)
    is_staff = models.BooleanField(_('membre du staff'), default=False)
    date_joined = models.DateTimeField(_("date d'inscription"), default=timezone.now)

    USERNAME_FIELD = 'identifiant'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    objects = AppUserManager()

    class Meta:
        verbose_name = _('utilisateur')
        verbose_name_plural = _('utilisateurs')
        ordering = ['name', 'identifiant']

    def __str__(self):
        return f"{self.name} ({self.identifiant})"

    def get_full_name(self):
        return self.name

    def get_short_name(self):
        return self.name.split()[0] if self.name else self.identifiant

    @property
    def is_suspended(self):
        return self.status == 'Suspendu'


class UserRole(models.Model):
    """
    Rôle occupé par un utilisateur sur une période donnée.
    Un rôle sans date de fin reste actif indéfiniment.
    """
    user = models.ForeignKey(AppUser, on_delete=models.CASCADE, related_name='roles')
    role = models.CharField(max_length=100)
    start_date = models.DateField(default=timezone.localdate)
    end_date = models.DateField(null=True, blank=True)

    class Meta:
        ordering = ['id']
        verbose_name = "Rôle utilisateur"
        verbose_name_plural = "Rôles utilisateur"

    def __str__(self):
        fin = self.end_date.strftime('%d/%m/%Y') if self.end_date else '...'
        return f"{self.role} ({self.start_date:%d/%m/%Y} → {fin})"


class PasswordResetRequest(models.Model):
    STATUT_CHOICES = [
        ('En attente', 'En attente'),
        ('Résolue', 'Résolue'),
    ]

    church = models.ForeignKey(Church, on_delete=models.CASCADE, related_name='password_reset_requests')
    user = models.ForeignKey(AppUser, on_delete=models.CASCADE, related_name='password_reset_requests')
    request_date = models.DateTimeField(default=timezone.now)
    status = models.CharField(max_length=12, choices=STATUT_CHOICES, default='En attente')

    class Meta:
        ordering = ['-request_date']
        verbose_name = "Demande de réinitialisation"
        verbose_name_plural = "Demandes de réinitialisation"

    def __str__(self):
        return f"{self.user.name} - {self.church.name} - {self.status}"
