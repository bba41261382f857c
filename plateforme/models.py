from django.db import models
from django.utils import timezone


# ✅ Église (tenant de la plateforme)
class Church(models.Model):
    STATUT_CHOICES = [
        ('Actif', 'Actif'),
        ('Inactif', 'Inactif'),
    ]
    LEGAL_STATUS_CHOICES = [
        ('Enregistrée', 'Enregistrée'),
        ('En cours', 'En cours'),
        ('Non déclarée', 'Non déclarée'),
    ]
    DATE_FORMAT_CHOICES = [
        ('JJ/MM/AAAA', 'JJ/MM/AAAA'),
        ('MM/DD/AAAA', 'MM/DD/AAAA'),
    ]

    reference = models.CharField(max_length=20, unique=True, verbose_name="Référence")
    name = models.CharField(max_length=255, verbose_name="Nom de l'église")
    admin_email = models.EmailField(verbose_name="Email de l'administrateur")
    status = models.CharField(max_length=10, choices=STATUT_CHOICES, default='Actif')
    registration_code = models.CharField(max_length=30, blank=True, verbose_name="Code d'inscription")
    creation_date = models.DateTimeField(default=timezone.now, verbose_name="Date de création")
    expiration_date = models.DateTimeField(null=True, blank=True, verbose_name="Fin d'abonnement")
    denomination = models.CharField(max_length=255, blank=True)
    website = models.URLField(blank=True)
    foundation_date = models.DateField(null=True, blank=True)
    legal_status = models.CharField(max_length=20, choices=LEGAL_STATUS_CHOICES, default='Non déclarée')
    onboarding_completed = models.BooleanField(default=False)

    # Paramètres de l'église
    slogan = models.CharField(max_length=255, blank=True)
    address = models.CharField(max_length=255, blank=True)
    country = models.CharField(max_length=100, blank=True)
    city = models.CharField(max_length=100, blank=True)
    neighborhood = models.CharField(max_length=100, blank=True)
    phone = models.CharField(max_length=50, blank=True)
    phone2 = models.CharField(max_length=50, blank=True)
    email = models.EmailField(blank=True)
    whatsapp = models.CharField(max_length=50, blank=True)
    leader_name = models.CharField(max_length=255, blank=True)
    leader_title = models.CharField(max_length=100, blank=True)
    currency = models.CharField(max_length=10, default='FCFA')
    timezone = models.CharField(max_length=50, default='Africa/Abidjan')
    language = models.CharField(max_length=30, default='Français')
    logo = models.ImageField(upload_to='logos/', blank=True, null=True)
    activated_roles = models.JSONField(default=list, blank=True)
    pdf_footer_text = models.CharField(max_length=255, blank=True)
    date_format = models.CharField(max_length=10, choices=DATE_FORMAT_CHOICES, default='JJ/MM/AAAA')

    class Meta:
        ordering = ['name']
        verbose_name = "Église"
        verbose_name_plural = "Églises"

    def __str__(self):
        return f"{self.name} ({self.reference})"

    @property
    def is_active(self):
        return self.status == 'Actif'


# ✅ Paramètres globaux (une seule ligne)
class PlatformSettings(models.Model):
    app_name = models.CharField(max_length=100, default='GraceConnect')
    developed_by_text = models.CharField(max_length=100, default='CYDROVIS')
    subscription_price = models.DecimalField(max_digits=12, decimal_places=2, default=120000)
    subscription_price_currency = models.CharField(max_length=10, default='FCFA')
    contact_phone = models.CharField(max_length=255, blank=True)
    contact_email = models.EmailField(blank=True)
    copyright_year = models.CharField(max_length=4, blank=True)

    class Meta:
        verbose_name = "Paramètres de la plateforme"
        verbose_name_plural = "Paramètres de la plateforme"

    def __str__(self):
        return self.app_name

    @classmethod
    def load(cls):
        obj, _ = cls.objects.get_or_create(pk=1)
        return obj


PAYMENT_METHOD_CHOICES = [
    ('Wave', 'Wave'),
    ('Orange Money', 'Orange Money'),
    ('MTN Money', 'MTN Money'),
    ('Moov Money', 'Moov Money'),
]


class PaymentMethodConfig(models.Model):
    name = models.CharField(max_length=20, choices=PAYMENT_METHOD_CHOICES, unique=True)
    details = models.TextField(blank=True)
    number = models.CharField(max_length=50, blank=True)
    transaction_id_required = models.BooleanField(default=True)

    def __str__(self):
        return self.name


# ✅ Demande de paiement d'abonnement
class PaymentRequest(models.Model):
    STATUT_CHOICES = [
        ('En attente', 'En attente'),
        ('Validé', 'Validé'),
        ('Rejeté', 'Rejeté'),
    ]

    applicant_name = models.CharField(max_length=255)
    applicant_email = models.EmailField()
    church_name = models.CharField(max_length=255)
    payment_method = models.CharField(max_length=20, choices=PAYMENT_METHOD_CHOICES)
    transaction_id = models.CharField(max_length=100, blank=True)
    request_date = models.DateTimeField(default=timezone.now)
    status = models.CharField(max_length=12, choices=STATUT_CHOICES, default='En attente')
    validation_date = models.DateTimeField(null=True, blank=True)
    generated_code = models.CharField(max_length=30, blank=True)
    church_onboarding_data = models.JSONField(null=True, blank=True)
    admin_onboarding_data = models.JSONField(null=True, blank=True)

    class Meta:
        ordering = ['-request_date']
        verbose_name = "Demande de paiement"
        verbose_name_plural = "Demandes de paiement"

    def __str__(self):
        return f"{self.church_name} - {self.payment_method} - {self.status}"


# ✅ Code d'inscription généré à la validation d'un paiement
class InscriptionCode(models.Model):
    STATUT_CHOICES = [
        ('Actif', 'Actif'),
        ('Utilisé', 'Utilisé'),
        ('Expiré', 'Expiré'),
    ]

    code = models.CharField(max_length=30, unique=True)
    status = models.CharField(max_length=10, choices=STATUT_CHOICES, default='Actif')
    expiration_date = models.DateField()
    used_by = models.ForeignKey(
        Church,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='codes_utilises'
    )
    used_date = models.DateTimeField(null=True, blank=True)
    payment_request = models.ForeignKey(
        PaymentRequest,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='codes'
    )

    class Meta:
        ordering = ['-expiration_date']
        verbose_name = "Code d'inscription"
        verbose_name_plural = "Codes d'inscription"

    def __str__(self):
        return f"{self.code} ({self.status})"

    def est_expire(self, today=None):
        today = today or timezone.localdate()
        return self.expiration_date < today
