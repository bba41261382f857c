from django.conf import settings
from django.db import models
from django.utils import timezone

from plateforme.models import Church


# ✅ Membre de l'église
class Member(models.Model):
    STATUT_CHOICES = [
        ('Actif', 'Actif'),
        ('Nouveau', 'Nouveau'),
        ('À suivre', 'À suivre'),
        ('Inactif', 'Inactif'),
    ]
    GENRE_CHOICES = [
        ('Homme', 'Homme'),
        ('Femme', 'Femme'),
    ]
    MARITAL_CHOICES = [
        ('Célibataire', 'Célibataire'),
        ('Marié(e)', 'Marié(e)'),
        ('Divorcé(e)', 'Divorcé(e)'),
        ('Veuf(ve)', 'Veuf(ve)'),
    ]

    church = models.ForeignKey(Church, on_delete=models.CASCADE, related_name='members')
    first_name = models.CharField(max_length=100, verbose_name="Prénom")
    last_name = models.CharField(max_length=100, verbose_name="Nom")
    phone = models.CharField(max_length=50, blank=True)
    phone2 = models.CharField(max_length=50, blank=True)
    email = models.EmailField(blank=True)
    gender = models.CharField(max_length=5, choices=GENRE_CHOICES, default='Homme')
    birth_date = models.DateField(null=True, blank=True)
    address = models.CharField(max_length=255, blank=True)
    nationality = models.CharField(max_length=100, blank=True)
    national_id_number = models.CharField(max_length=50, blank=True)
    marital_status = models.CharField(max_length=15, choices=MARITAL_CHOICES, default='Célibataire')
    spouse_name = models.CharField(max_length=150, blank=True)
    profession = models.CharField(max_length=150, blank=True)
    department = models.CharField(max_length=150, blank=True)
    member_type = models.CharField(max_length=50, blank=True, default='Membre')
    status = models.CharField(max_length=10, choices=STATUT_CHOICES, default='Nouveau')
    conversion_date = models.DateField(null=True, blank=True)
    baptism_date = models.DateField(null=True, blank=True)
    mentor = models.CharField(max_length=150, blank=True)
    last_seen = models.DateField(default=timezone.localdate)
    photo = models.ImageField(upload_to='membres/', blank=True, null=True)
    date_ajout = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['last_name', 'first_name']
        verbose_name = "Membre"
        verbose_name_plural = "Membres"

    def __str__(self):
        return self.full_name

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()


# ✅ Département / ministère
class Departement(models.Model):
    church = models.ForeignKey(Church, on_delete=models.CASCADE, related_name='departements')
    name = models.CharField(max_length=150, verbose_name="Nom")
    description = models.TextField(blank=True)
    leader = models.ForeignKey(
        Member,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='departements_diriges',
        verbose_name="Responsable"
    )
    members = models.ManyToManyField(Member, blank=True, related_name='departements')

    class Meta:
        ordering = ['name']
        verbose_name = "Département"
        verbose_name_plural = "Départements"

    def __str__(self):
        return self.name


# ✅ Cas de décès
class DeathCase(models.Model):
    STATUT_CHOICES = [
        ('En cours', 'En cours'),
        ('Clôturé', 'Clôturé'),
    ]

    church = models.ForeignKey(Church, on_delete=models.CASCADE, related_name='death_cases')
    deceased_name = models.CharField(max_length=255, verbose_name="Nom du défunt")
    declaration_date = models.DateField(default=timezone.localdate)
    status = models.CharField(max_length=10, choices=STATUT_CHOICES, default='En cours')
    family_contact = models.ForeignKey(
        Member,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='cas_deces_contact',
        verbose_name="Contact famille"
    )
    death_date = models.DateField(null=True, blank=True)
    funeral_date = models.DateField(null=True, blank=True)
    funeral_location = models.CharField(max_length=255, blank=True)
    church_support_details = models.TextField(blank=True)

    class Meta:
        ordering = ['-declaration_date']
        verbose_name = "Cas de décès"
        verbose_name_plural = "Cas de décès"

    def __str__(self):
        return self.deceased_name


# ✅ Projet de l'église
class Project(models.Model):
    STATUT_CHOICES = [
        ('En cours', 'En cours'),
        ('Planifié', 'Planifié'),
        ('En attente', 'En attente'),
        ('Terminé', 'Terminé'),
        ('Annulé', 'Annulé'),
    ]

    church = models.ForeignKey(Church, on_delete=models.CASCADE, related_name='projects')
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    status = models.CharField(max_length=12, choices=STATUT_CHOICES, default='Planifié')
    budget = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    spent = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    start_date = models.DateField(default=timezone.localdate)
    end_date = models.DateField(null=True, blank=True)
    leader = models.ForeignKey(
        Member, on_delete=models.SET_NULL, null=True, blank=True, related_name='projets_diriges'
    )

    class Meta:
        ordering = ['-start_date']
        verbose_name = "Projet"
        verbose_name_plural = "Projets"

    def __str__(self):
        return self.name

    @property
    def progression(self):
        if not self.budget:
            return 0
        return round(float(self.spent) / float(self.budget) * 100, 2)


# ✅ Transaction financière
class Transaction(models.Model):
    TYPE_CHOICES = [
        ('income', 'Revenu'),
        ('expense', 'Dépense'),
    ]
    CATEGORY_CHOICES = [
        ('Dîme', 'Dîme'),
        ('Offrande', 'Offrande'),
        ('Quête', 'Quête'),
        ('Don spécial', 'Don spécial'),
        ('Contribution projet', 'Contribution projet'),
        ('Salaire', 'Salaire'),
        ('Facture', 'Facture'),
        ('Construction', 'Construction'),
        ('Autre dépense', 'Autre dépense'),
        ('Autre revenu', 'Autre revenu'),
    ]

    church = models.ForeignKey(Church, on_delete=models.CASCADE, related_name='transactions')
    date = models.DateField(default=timezone.localdate)
    type = models.CharField(max_length=7, choices=TYPE_CHOICES)
    category = models.CharField(max_length=30, choices=CATEGORY_CHOICES)
    category_detail = models.CharField(max_length=150, blank=True)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    description = models.CharField(max_length=255, blank=True)
    member = models.ForeignKey(
        Member, on_delete=models.SET_NULL, null=True, blank=True, related_name='transactions'
    )
    receipt_generated = models.BooleanField(default=False)
    period = models.CharField(max_length=20, blank=True)

    class Meta:
        ordering = ['-date', '-id']
        verbose_name = "Transaction"
        verbose_name_plural = "Transactions"

    def __str__(self):
        return f"{self.get_type_display()} - {self.category} - {self.amount}"


# ✅ Messagerie interne
class MessageThread(models.Model):
    church = models.ForeignKey(Church, on_delete=models.CASCADE, related_name='message_threads')
    subject = models.CharField(max_length=255)
    participants = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name='message_threads')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Conversation"
        verbose_name_plural = "Conversations"

    def __str__(self):
        return self.subject


class InternalMessage(models.Model):
    thread = models.ForeignKey(MessageThread, on_delete=models.CASCADE, related_name='messages')
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='messages_envoyes'
    )
    timestamp = models.DateTimeField(default=timezone.now)
    text = models.TextField()
    is_read = models.BooleanField(default=False)

    class Meta:
        ordering = ['timestamp', 'id']
        verbose_name = "Message"
        verbose_name_plural = "Messages"

    def __str__(self):
        return f"{self.sender} : {self.text[:30]}"


# ✅ Culte / événement
class Event(models.Model):
    STATUT_CHOICES = [
        ('À venir', 'À venir'),
        ('Passé', 'Passé'),
        ('Annulé', 'Annulé'),
    ]
    RECURRENCE_CHOICES = [
        ('none', 'Aucune'),
        ('weekly', 'Hebdomadaire'),
        ('monthly', 'Mensuelle'),
        ('yearly', 'Annuelle'),
    ]
    ACCES_CHOICES = [
        ('Libre', 'Libre'),
        ('Inscription obligatoire', 'Inscription obligatoire'),
        ('Sur invitation', 'Sur invitation'),
    ]

    church = models.ForeignKey(Church, on_delete=models.CASCADE, related_name='events')
    name = models.CharField(max_length=255, verbose_name="Nom de l'événement")
    type = models.CharField(max_length=100, default='Culte')
    objective = models.CharField(max_length=255, blank=True)
    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)
    start_time = models.TimeField()
    end_time = models.TimeField()
    location = models.CharField(max_length=255, blank=True)
    description = models.TextField(blank=True)
    recurrence = models.CharField(max_length=10, choices=RECURRENCE_CHOICES, default='none')
    recurrence_end_date = models.DateField(null=True, blank=True)
    access_type = models.CharField(max_length=25, choices=ACCES_CHOICES, default='Libre')
    expected_participants = models.PositiveIntegerField(null=True, blank=True)
    organizer = models.ForeignKey(
        Member, on_delete=models.SET_NULL, null=True, blank=True, related_name='evenements_organises'
    )
    attendees = models.ManyToManyField(Member, blank=True, related_name='evenements')
    status = models.CharField(max_length=10, choices=STATUT_CHOICES, default='À venir')
    report = models.TextField(blank=True, verbose_name="Compte rendu")
    internal_notes = models.TextField(blank=True)

    class Meta:
        ordering = ['start_date', 'start_time']
        verbose_name = "Événement"
        verbose_name_plural = "Événements"

    def __str__(self):
        return f"{self.name} ({self.start_date})"


# ✅ Formation / parcours spirituel
class SpiritualPathway(models.Model):
    church = models.ForeignKey(Church, on_delete=models.CASCADE, related_name='spiritual_pathways')
    name = models.CharField(max_length=150)
    description = models.TextField(blank=True)

    class Meta:
        ordering = ['name']
        verbose_name = "Parcours spirituel"
        verbose_name_plural = "Parcours spirituels"

    def __str__(self):
        return self.name


class TrainingCourse(models.Model):
    STATUT_CHOICES = [
        ('En cours', 'En cours'),
        ('Planifié', 'Planifié'),
        ('Terminé', 'Terminé'),
    ]

    church = models.ForeignKey(Church, on_delete=models.CASCADE, related_name='training_courses')
    pathway = models.ForeignKey(
        SpiritualPathway, on_delete=models.SET_NULL, null=True, blank=True, related_name='courses'
    )
    custom_pathway = models.CharField(max_length=150, blank=True, verbose_name="Autre parcours")
    name = models.CharField(max_length=255, verbose_name="Nom de la formation")
    description = models.TextField(blank=True)
    leader = models.ForeignKey(
        Member, on_delete=models.SET_NULL, null=True, blank=True, related_name='formations_dirigees'
    )
    enrolled_members = models.ManyToManyField(Member, blank=True, related_name='formations')
    status = models.CharField(max_length=10, choices=STATUT_CHOICES, default='Planifié')
    is_paid = models.BooleanField(default=False, verbose_name="Formation payante")
    amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)

    class Meta:
        ordering = ['name']
        verbose_name = "Formation"
        verbose_name_plural = "Formations"

    def __str__(self):
        return self.name

    @property
    def pathway_name(self):
        return self.pathway.name if self.pathway else self.custom_pathway


class TrainingSession(models.Model):
    course = models.ForeignKey(TrainingCourse, on_delete=models.CASCADE, related_name='sessions')
    topic = models.CharField(max_length=255, verbose_name="Thème")
    date = models.DateField(default=timezone.localdate)
    present_members = models.ManyToManyField(Member, blank=True, related_name='presences_formation')

    class Meta:
        ordering = ['date', 'id']
        verbose_name = "Séance"
        verbose_name_plural = "Séances"

    def __str__(self):
        return f"{self.course.name} - {self.topic}"


# ✅ Archives / documents
class ChurchDocument(models.Model):
    CATEGORIE_CHOICES = [
        ('Certificat de baptême', 'Certificat de baptême'),
        ('Rapport annuel', 'Rapport annuel'),
        ('Procès-verbal', 'Procès-verbal'),
        ('Autre', 'Autre'),
    ]

    church = models.ForeignKey(Church, on_delete=models.CASCADE, related_name='documents')
    name = models.CharField(max_length=255, verbose_name="Nom du document")
    category = models.CharField(max_length=25, choices=CATEGORIE_CHOICES, default='Autre')
    upload_date = models.DateField(default=timezone.localdate)
    uploaded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='documents_deposes'
    )
    description = models.TextField(blank=True)
    file = models.FileField(upload_to='documents/')
    file_name = models.CharField(max_length=255, blank=True)
    file_type = models.CharField(max_length=100, blank=True)

    class Meta:
        ordering = ['-upload_date', '-id']
        verbose_name = "Document"
        verbose_name_plural = "Documents"

    def __str__(self):
        return self.name

    @property
    def kind(self):
        if 'pdf' in self.file_type:
            return 'PDF'
        if 'word' in self.file_type:
            return 'DOC'
        if 'image' in self.file_type:
            return 'IMG'
        return 'FILE'


# ✅ Annonce
class Announcement(models.Model):
    church = models.ForeignKey(Church, on_delete=models.CASCADE, related_name='announcements')
    title = models.CharField(max_length=255, verbose_name="Titre")
    content = models.TextField(verbose_name="Contenu")
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='annonces'
    )
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['-created_at', '-id']
        verbose_name = "Annonce"
        verbose_name_plural = "Annonces"

    def __str__(self):
        return self.title
