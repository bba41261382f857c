import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('plateforme', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Member',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('first_name', models.CharField(max_length=100, verbose_name='Prénom')),
                ('last_name', models.CharField(max_length=100, verbose_name='Nom')),
                ('phone', models.CharField(blank=True, max_length=50)),
                ('phone2', models.CharField(blank=True, max_length=50)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('gender', models.CharField(choices=[('Homme', 'Homme'), ('Femme', 'Femme')], default='Homme', max_length=5)),
                ('birth_date', models.DateField(blank=True, null=True)),
                ('address', models.CharField(blank=True, max_length=255)),
                ('nationality', models.CharField(blank=True, max_length=100)),
                ('national_id_number', models.CharField(blank=True, max_length=50)),
                ('marital_status', models.CharField(choices=[('Célibataire', 'Célibataire'), ('Marié(e)', 'Marié(e)'), ('Divorcé(e)', 'Divorcé(e)'), ('Veuf(ve)', 'Veuf(ve)')], default='Célibataire', max_length=15)),
                ('spouse_name', models.CharField(blank=True, max_length=150)),
                ('profession', models.CharField(blank=True, max_length=150)),
                ('department', models.CharField(blank=True, max_length=150)),
                ('member_type', models.CharField(blank=True, default='Membre', max_length=50)),
                ('status', models.CharField(choices=[('Actif', 'Actif'), ('Nouveau', 'Nouveau'), ('À suivre', 'À suivre'), ('Inactif', 'Inactif')], default='Nouveau', max_length=10)),
                ('conversion_date', models.DateField(blank=True, null=True)),
                ('baptism_date', models.DateField(blank=True, null=True)),
                ('mentor', models.CharField(blank=True, max_length=150)),
                ('last_seen', models.DateField(default=django.utils.timezone.localdate)),
                ('photo', models.ImageField(blank=True, null=True, upload_to='membres/')),
                ('date_ajout', models.DateTimeField(auto_now_add=True)),
                ('church', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='members', to='plateforme.church')),
            ],
            options={
                'verbose_name': 'Membre',
                'verbose_name_plural': 'Membres',
                'ordering': ['last_name', 'first_name'],
            },
        ),
        migrations.CreateModel(
            name='Departement',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=150, verbose_name='Nom')),
                ('description', models.TextField(blank=True)),
                ('church', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='departements', to='plateforme.church')),
                ('leader', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='departements_diriges', to='eglise.member', verbose_name='Responsable')),
                ('members', models.ManyToManyField(blank=True, related_name='departements', to='eglise.member')),
            ],
            options={
                'verbose_name': 'Département',
                'verbose_name_plural': 'Départements',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='DeathCase',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('deceased_name', models.CharField(max_length=255, verbose_name='Nom du défunt')),
                ('declaration_date', models.DateField(default=django.utils.timezone.localdate)),
                ('status', models.CharField(choices=[('En cours', 'En cours'), ('Clôturé', 'Clôturé')], default='En cours', max_length=10)),
                ('death_date', models.DateField(blank=True, null=True)),
                ('funeral_date', models.DateField(blank=True, null=True)),
                ('funeral_location', models.CharField(blank=True, max_length=255)),
                ('church_support_details', models.TextField(blank=True)),
                ('church', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='death_cases', to='plateforme.church')),
                ('family_contact', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='cas_deces_contact', to='eglise.member', verbose_name='Contact famille')),
            ],
            options={
                'verbose_name': 'Cas de décès',
                'verbose_name_plural': 'Cas de décès',
                'ordering': ['-declaration_date'],
            },
        ),
        migrations.CreateModel(
            name='Project',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True)),
                ('status', models.CharField(choices=[('En cours', 'En cours'), ('Planifié', 'Planifié'), ('En attente', 'En attente'), ('Terminé', 'Terminé'), ('Annulé', 'Annulé')], default='Planifié', max_length=12)),
                ('budget', models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ('spent', models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ('start_date', models.DateField(default=django.utils.timezone.localdate)),
                ('end_date', models.DateField(blank=True, null=True)),
                ('church', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='projects', to='plateforme.church')),
                ('leader', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='projets_diriges', to='eglise.member')),
            ],
            options={
                'verbose_name': 'Projet',
                'verbose_name_plural': 'Projets',
                'ordering': ['-start_date'],
            },
        ),
        migrations.CreateModel(
            name='Transaction',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(default=django.utils.timezone.localdate)),
                ('type', models.CharField(choices=[('income', 'Revenu'), ('expense', 'Dépense')], max_length=7)),
                ('category', models.CharField(choices=[('Dîme', 'Dîme'), ('Offrande', 'Offrande'), ('Quête', 'Quête'), ('Don spécial', 'Don spécial'), ('Contribution projet', 'Contribution projet'), ('Salaire', 'Salaire'), ('Facture', 'Facture'), ('Construction', 'Construction'), ('Autre dépense', 'Autre dépense'), ('Autre revenu', 'Autre revenu')], max_length=30)),
                ('category_detail', models.CharField(blank=True, max_length=150)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12)),
                ('description', models.CharField(blank=True, max_length=255)),
                ('receipt_generated', models.BooleanField(default=False)),
                ('period', models.CharField(blank=True, max_length=20)),
                ('church', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='transactions', to='plateforme.church')),
                ('member', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='transactions', to='eglise.member')),
            ],
            options={
                'verbose_name': 'Transaction',
                'verbose_name_plural': 'Transactions',
                'ordering': ['-date', '-id'],
            },
        ),
        migrations.CreateModel(
            name='MessageThread',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('subject', models.CharField(max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('church', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='message_threads', to='plateforme.church')),
                ('participants', models.ManyToManyField(related_name='message_threads', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Conversation',
                'verbose_name_plural': 'Conversations',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='InternalMessage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('timestamp', models.DateTimeField(default=django.utils.timezone.now)),
                ('text', models.TextField()),
                ('is_read', models.BooleanField(default=False)),
                ('sender', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='messages_envoyes', to=settings.AUTH_USER_MODEL)),
                ('thread', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='messages', to='eglise.messagethread')),
            ],
            options={
                'verbose_name': 'Message',
                'verbose_name_plural': 'Messages',
                'ordering': ['timestamp', 'id'],
            },
        ),
        migrations.CreateModel(
            name='Event',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255, verbose_name="Nom de l'événement")),
                ('type', models.CharField(default='Culte', max_length=100)),
                ('objective', models.CharField(blank=True, max_length=255)),
                ('start_date', models.DateField()),
                ('end_date', models.DateField(blank=True, null=True)),
                ('start_time', models.TimeField()),
                ('end_time', models.TimeField()),
                ('location', models.CharField(blank=True, max_length=255)),
                ('description', models.TextField(blank=True)),
                ('recurrence', models.CharField(choices=[('none', 'Aucune'), ('weekly', 'Hebdomadaire'), ('monthly', 'Mensuelle'), ('yearly', 'Annuelle')], default='none', max_length=10)),
                ('recurrence_end_date', models.DateField(blank=True, null=True)),
                ('access_type', models.CharField(choices=[('Libre', 'Libre'), ('Inscription obligatoire', 'Inscription obligatoire'), ('Sur invitation', 'Sur invitation')], default='Libre', max_length=25)),
                ('expected_participants', models.PositiveIntegerField(blank=True, null=True)),
                ('status', models.CharField(choices=[('À venir', 'À venir'), ('Passé', 'Passé'), ('Annulé', 'Annulé')], default='À venir', max_length=10)),
                ('report', models.TextField(blank=True, verbose_name='Compte rendu')),
                ('internal_notes', models.TextField(blank=True)),
                ('attendees', models.ManyToManyField(blank=True, related_name='evenements', to='eglise.member')),
                ('church', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='events', to='plateforme.church')),
                ('organizer', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='evenements_organises', to='eglise.member')),
            ],
            options={
                'verbose_name': 'Événement',
                'verbose_name_plural': 'Événements',
                'ordering': ['start_date', 'start_time'],
            },
        ),
        migrations.CreateModel(
            name='SpiritualPathway',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=150)),
                ('description', models.TextField(blank=True)),
                ('church', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='spiritual_pathways', to='plateforme.church')),
            ],
            options={
                'verbose_name': 'Parcours spirituel',
                'verbose_name_plural': 'Parcours spirituels',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='TrainingCourse',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('custom_pathway', models.CharField(blank=True, max_length=150, verbose_name='Autre parcours')),
                ('name', models.CharField(max_length=255, verbose_name='Nom de la formation')),
                ('description', models.TextField(blank=True)),
                ('status', models.CharField(choices=[('En cours', 'En cours'), ('Planifié', 'Planifié'), ('Terminé', 'Terminé')], default='Planifié', max_length=10)),
                ('is_paid', models.BooleanField(default=False, verbose_name='Formation payante')),
                ('amount', models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ('church', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='training_courses', to='plateforme.church')),
                ('enrolled_members', models.ManyToManyField(blank=True, related_name='formations', to='eglise.member')),
                ('leader', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='formations_dirigees', to='eglise.member')),
                ('pathway', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='courses', to='eglise.spiritualpathway')),
            ],
            options={
                'verbose_name': 'Formation',
                'verbose_name_plural': 'Formations',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='TrainingSession',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('topic', models.CharField(max_length=255, verbose_name='Thème')),
                ('date', models.DateField(default=django.utils.timezone.localdate)),
                ('course', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sessions', to='eglise.trainingcourse')),
                ('present_members', models.ManyToManyField(blank=True, related_name='presences_formation', to='eglise.member')),
            ],
            options={
                'verbose_name': 'Séance',
                'verbose_name_plural': 'Séances',
                'ordering': ['date', 'id'],
            },
        ),
        migrations.CreateModel(
            name='ChurchDocument',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255, verbose_name='Nom du document')),
                ('category', models.CharField(choices=[('Certificat de baptême', 'Certificat de baptême'), ('Rapport annuel', 'Rapport annuel'), ('Procès-verbal', 'Procès-verbal'), ('Autre', 'Autre')], default='Autre', max_length=25)),
                ('upload_date', models.DateField(default=django.utils.timezone.localdate)),
                ('description', models.TextField(blank=True)),
                ('file', models.FileField(upload_to='documents/')),
                ('file_name', models.CharField(blank=True, max_length=255)),
                ('file_type', models.CharField(blank=True, max_length=100)),
                ('church', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='documents', to='plateforme.church')),
                ('uploaded_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='documents_deposes', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Document',
                'verbose_name_plural': 'Documents',
                'ordering': ['-upload_date', '-id'],
            },
        ),
        migrations.CreateModel(
            name='Announcement',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255, verbose_name='Titre')),
                ('content', models.TextField(verbose_name='Contenu')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('author', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='annonces', to=settings.AUTH_USER_MODEL)),
                ('church', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='announcements', to='plateforme.church')),
            ],
            options={
                'verbose_name': 'Annonce',
                'verbose_name_plural': 'Annonces',
                'ordering': ['-created_at', '-id'],
            },
        ),
    ]
