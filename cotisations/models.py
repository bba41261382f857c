from decimal import Decimal

from django.db import models
from django.utils import timezone

from plateforme.models import Church
from eglise.models import Member, Departement, DeathCase, Project
from .engine import compute_status


# ✅ Campagne de cotisation
class CotisationCampaign(models.Model):
    TYPE_CHOICES = [
        ('Projet spécial', 'Projet spécial'),
        ('Département', 'Département'),
        ('Campagne spéciale', 'Campagne spéciale'),
        ('Régulière', 'Régulière'),
        ('Cas de Décès', 'Cas de Décès'),
    ]
    FREQUENCE_CHOICES = [
        ('Ponctuelle', 'Ponctuelle'),
        ('Mensuelle', 'Mensuelle'),
        ('Annuelle', 'Annuelle'),
        ('Unique', 'Unique'),
    ]
    CIBLE_CHOICES = [
        ('Tous les membres', 'Tous les membres'),
        ('Groupe spécifique', 'Groupe spécifique'),
        ('Volontaires', 'Volontaires'),
    ]

    church = models.ForeignKey(Church, on_delete=models.CASCADE, related_name='cotisation_campaigns')
    name = models.CharField(max_length=255, verbose_name="Nom de la cotisation")
    description = models.TextField(blank=True)
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default='Projet spécial')
    frequency = models.CharField(max_length=12, choices=FREQUENCE_CHOICES, default='Ponctuelle')
    default_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0, verbose_name="Montant par défaut")
    is_amount_free = models.BooleanField(default=False, verbose_name="Montant libre")
    is_mandatory = models.BooleanField(default=False, verbose_name="Obligatoire")
    target_scope = models.CharField(max_length=20, choices=CIBLE_CHOICES, default='Tous les membres')
    target_group = models.ForeignKey(
        Departement, on_delete=models.SET_NULL, null=True, blank=True, related_name='cotisation_campaigns'
    )
    start_date = models.DateField(default=timezone.localdate)
    end_date = models.DateField(null=True, blank=True)
    death_case = models.ForeignKey(
        DeathCase, on_delete=models.SET_NULL, null=True, blank=True, related_name='cotisation_campaigns'
    )
    project = models.ForeignKey(
        Project, on_delete=models.SET_NULL, null=True, blank=True, related_name='cotisation_campaigns'
    )
    close_on_target_amount = models.BooleanField(default=False)
    date_creation = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-start_date', '-id']
        verbose_name = "Campagne de cotisation"
        verbose_name_plural = "Campagnes de cotisation"

    def __str__(self):
        return f"{self.name} ({self.type})"


# ✅ Engagement d'un membre (le statut est toujours recalculé, jamais stocké)
class MemberCotisation(models.Model):
    campaign = models.ForeignKey(CotisationCampaign, on_delete=models.CASCADE, related_name='pledges')
    member = models.ForeignKey(Member, on_delete=models.CASCADE, related_name='cotisations')
    expected_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    due_date = models.DateField()

    class Meta:
        unique_together = ('campaign', 'member')
        ordering = ['member__last_name', 'member__first_name']
        verbose_name = "Cotisation membre"
        verbose_name_plural = "Cotisations membres"

    def __str__(self):
        return f"{self.member} - {self.campaign.name}"

    @property
    def member_name(self):
        return self.member.full_name

    @property
    def paid_amount(self):
        # Utilise le cache de prefetch_related('payments') quand il existe
        return sum((p.amount for p in self.payments.all()), Decimal('0'))

    @property
    def remaining_amount(self):
        return self.expected_amount - self.paid_amount

    def get_status(self, today=None):
        return compute_status(self.expected_amount, self.paid_amount, self.due_date, today)

    @property
    def status(self):
        return self.get_status()


# ✅ Versement (ajout uniquement)
class CotisationPayment(models.Model):
    METHODE_CHOICES = [
        ('Espèces', 'Espèces'),
        ('Mobile Money', 'Mobile Money'),
        ('Virement', 'Virement'),
        ('Carte', 'Carte'),
    ]

    pledge = models.ForeignKey(MemberCotisation, on_delete=models.CASCADE, related_name='payments')
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    date = models.DateField(default=timezone.localdate)
    method = models.CharField(max_length=15, choices=METHODE_CHOICES, default='Espèces')
    date_creation = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['date', 'id']
        verbose_name = "Versement"
        verbose_name_plural = "Versements"

    def __str__(self):
        return f"{self.pledge.member} - {self.amount} ({self.method})"
