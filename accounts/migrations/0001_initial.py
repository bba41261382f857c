import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('auth', '0012_alter_user_first_name_max_length'),
        ('plateforme', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='AppUser',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('password', models.CharField(max_length=128, verbose_name='password')),
                ('last_login', models.DateTimeField(blank=True, null=True, verbose_name='last login')),
                ('is_superuser', models.BooleanField(default=False, help_text='Designates that this user has all permissions without explicitly assigning them.', verbose_name='superuser status')),
                ('identifiant', models.CharField(help_text='Identifiant de connexion, ex: EGLIS-1234', max_length=50, unique=True, verbose_name='identifiant')),
                ('email', models.EmailField(blank=True, max_length=254, verbose_name='adresse email')),
                ('name', models.CharField(max_length=150, verbose_name='nom complet')),
                ('status', models.CharField(choices=[('Actif', 'Actif'), ('Suspendu', 'Suspendu')], default='Actif', max_length=10)),
                ('civilite', models.CharField(choices=[('M.', 'M.'), ('Mme', 'Mme')], default='M.', max_length=3)),
                ('sexe', models.CharField(choices=[('M', 'Masculin'), ('F', 'Féminin')], default='M', max_length=1)),
                ('contact', models.CharField(blank=True, max_length=50, verbose_name='téléphone / WhatsApp')),
                ('department', models.CharField(blank=True, max_length=150, verbose_name='ministère / département')),
                ('groupe_administratif', models.CharField(blank=True, max_length=100)),
                ('birth_date', models.DateField(blank=True, null=True)),
                ('marital_status', models.CharField(choices=[('Célibataire', 'Célibataire'), ('Marié(e)', 'Marié(e)'), ('Divorcé(e)', 'Divorcé(e)'), ('Veuf(ve)', 'Veuf(ve)')], default='Célibataire', max_length=15)),
                ('cell_group', models.CharField(blank=True, max_length=100)),
                ('join_date', models.DateField(default=django.utils.timezone.localdate)),
                ('photo', models.ImageField(blank=True, null=True, upload_to='avatars/')),
                ('is_super_admin', models.BooleanField(default=False, help_text='Gère toutes les églises de la plateforme.', verbose_name='super administrateur')),
                ('must_change_password', models.BooleanField(default=False, help_text='Le mot de passe par défaut doit être changé à la prochaine connexion.')),
                ('is_active', models.BooleanField(default=True, verbose_name='actif')),
                ('is_staff', models.BooleanField(default=False, verbose_name='membre du staff')),
                ('date_joined', models.DateTimeField(default=django.utils.timezone.now, verbose_name="date d'inscription")),
                ('church', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='app_users', to='plateforme.church', verbose_name='église')),
                ('groups', models.ManyToManyField(blank=True, help_text='The groups this user belongs to. A user will get all permissions granted to each of their groups.', related_name='user_set', related_query_name='user', to='auth.group', verbose_name='groups')),
                ('user_permissions', models.ManyToManyField(blank=True, help_text='Specific permissions for this user.', related_name='user_set', related_query_name='user', to='auth.permission', verbose_name='user permissions')),
            ],
            options={
                'verbose_name': 'utilisateur',
                'verbose_name_plural': 'utilisateurs',
                'ordering': ['name', 'identifiant'],
            },
        ),
        migrations.CreateModel(
            name='UserRole',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('role', models.CharField(max_length=100)),
                ('start_date', models.DateField(default=django.utils.timezone.localdate)),
                ('end_date', models.DateField(blank=True, null=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='roles', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Rôle utilisateur',
                'verbose_name_plural': 'Rôles utilisateur',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='PasswordResetRequest',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('request_date', models.DateTimeField(default=django.utils.timezone.now)),
                ('status', models.CharField(choices=[('En attente', 'En attente'), ('Résolue', 'Résolue')], default='En attente', max_length=12)),
                ('church', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='password_reset_requests', to='plateforme.church')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='password_reset_requests', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Demande de réinitialisation',
                'verbose_name_plural': 'Demandes de réinitialisation',
                'ordering': ['-request_date'],
            },
        ),
    ]
