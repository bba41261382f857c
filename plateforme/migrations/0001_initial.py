import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Church',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('reference', models.CharField(max_length=20, unique=True, verbose_name='Référence')),
                ('name', models.CharField(max_length=255, verbose_name="Nom de l'église")),
                ('admin_email', models.EmailField(max_length=254, verbose_name="Email de l'administrateur")),
                ('status', models.CharField(choices=[('Actif', 'Actif'), ('Inactif', 'Inactif')], default='Actif', max_length=10)),
                ('registration_code', models.CharField(blank=True, max_length=30, verbose_name="Code d'inscription")),
                ('creation_date', models.DateTimeField(default=django.utils.timezone.now, verbose_name='Date de création')),
                ('expiration_date', models.DateTimeField(blank=True, null=True, verbose_name="Fin d'abonnement")),
                ('denomination', models.CharField(blank=True, max_length=255)),
                ('website', models.URLField(blank=True)),
                ('foundation_date', models.DateField(blank=True, null=True)),
                ('legal_status', models.CharField(choices=[('Enregistrée', 'Enregistrée'), ('En cours', 'En cours'), ('Non déclarée', 'Non déclarée')], default='Non déclarée', max_length=20)),
                ('onboarding_completed', models.BooleanField(default=False)),
                ('slogan', models.CharField(blank=True, max_length=255)),
                ('address', models.CharField(blank=True, max_length=255)),
                ('country', models.CharField(blank=True, max_length=100)),
                ('city', models.CharField(blank=True, max_length=100)),
                ('neighborhood', models.CharField(blank=True, max_length=100)),
                ('phone', models.CharField(blank=True, max_length=50)),
                ('phone2', models.CharField(blank=True, max_length=50)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('whatsapp', models.CharField(blank=True, max_length=50)),
                ('leader_name', models.CharField(blank=True, max_length=255)),
                ('leader_title', models.CharField(blank=True, max_length=100)),
                ('currency', models.CharField(default='FCFA', max_length=10)),
                ('timezone', models.CharField(default='Africa/Abidjan', max_length=50)),
                ('language', models.CharField(default='Français', max_length=30)),
                ('logo', models.ImageField(blank=True, null=True, upload_to='logos/')),
                ('activated_roles', models.JSONField(blank=True, default=list)),
                ('pdf_footer_text', models.CharField(blank=True, max_length=255)),
                ('date_format', models.CharField(choices=[('JJ/MM/AAAA', 'JJ/MM/AAAA'), ('MM/DD/AAAA', 'MM/DD/AAAA')], default='JJ/MM/AAAA', max_length=10)),
            ],
            options={
                'verbose_name': 'Église',
                'verbose_name_plural': 'Églises',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='PlatformSettings',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('app_name', models.CharField(default='GraceConnect', max_length=100)),
                ('developed_by_text', models.CharField(default='CYDROVIS', max_length=100)),
                ('subscription_price', models.DecimalField(decimal_places=2, default=120000, max_digits=12)),
                ('subscription_price_currency', models.CharField(default='FCFA', max_length=10)),
                ('contact_phone', models.CharField(blank=True, max_length=255)),
                ('contact_email', models.EmailField(blank=True, max_length=254)),
                ('copyright_year', models.CharField(blank=True, max_length=4)),
            ],
            options={
                'verbose_name': 'Paramètres de la plateforme',
                'verbose_name_plural': 'Paramètres de la plateforme',
            },
        ),
        migrations.CreateModel(
            name='PaymentMethodConfig',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(choices=[('Wave', 'Wave'), ('Orange Money', 'Orange Money'), ('MTN Money', 'MTN Money'), ('Moov Money', 'Moov Money')], max_length=20, unique=True)),
                ('details', models.TextField(blank=True)),
                ('number', models.CharField(blank=True, max_length=50)),
                ('transaction_id_required', models.BooleanField(default=True)),
            ],
        ),
        migrations.CreateModel(
            name='PaymentRequest',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('applicant_name', models.CharField(max_length=255)),
                ('applicant_email', models.EmailField(max_length=254)),
                ('church_name', models.CharField(max_length=255)),
                ('payment_method', models.CharField(choices=[('Wave', 'Wave'), ('Orange Money', 'Orange Money'), ('MTN Money', 'MTN Money'), ('Moov Money', 'Moov Money')], max_length=20)),
                ('transaction_id', models.CharField(blank=True, max_length=100)),
                ('request_date', models.DateTimeField(default=django.utils.timezone.now)),
                ('status', models.CharField(choices=[('En attente', 'En attente'), ('Validé', 'Validé'), ('Rejeté', 'Rejeté')], default='En attente', max_length=12)),
                ('validation_date', models.DateTimeField(blank=True, null=True)),
                ('generated_code', models.CharField(blank=True, max_length=30)),
                ('church_onboarding_data', models.JSONField(blank=True, null=True)),
                ('admin_onboarding_data', models.JSONField(blank=True, null=True)),
            ],
            options={
                'verbose_name': 'Demande de paiement',
                'verbose_name_plural': 'Demandes de paiement',
                'ordering': ['-request_date'],
            },
        ),
        migrations.CreateModel(
            name='InscriptionCode',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(max_length=30, unique=True)),
                ('status', models.CharField(choices=[('Actif', 'Actif'), ('Utilisé', 'Utilisé'), ('Expiré', 'Expiré')], default='Actif', max_length=10)),
                ('expiration_date', models.DateField()),
                ('used_date', models.DateTimeField(blank=True, null=True)),
                ('payment_request', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='codes', to='plateforme.paymentrequest')),
                ('used_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='codes_utilises', to='plateforme.church')),
            ],
            options={
                'verbose_name': "Code d'inscription",
                'verbose_name_plural': "Codes d'inscription",
                'ordering': ['-expiration_date'],
            },
        ),
    ]
