import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('eglise', '0001_initial'),
        ('plateforme', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='CotisationCampaign',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255, verbose_name='Nom de la cotisation')),
                ('description', models.TextField(blank=True)),
                ('type', models.CharField(choices=[('Projet spécial', 'Projet spécial'), ('Département', 'Département'), ('Campagne spéciale', 'Campagne spéciale'), ('Régulière', 'Régulière'), ('Cas de Décès', 'Cas de Décès')], default='Projet spécial', max_length=20)),
                ('frequency', models.CharField(choices=[('Ponctuelle', 'Ponctuelle'), ('Mensuelle', 'Mensuelle'), ('Annuelle', 'Annuelle'), ('Unique', 'Unique')], default='Ponctuelle', max_length=12)),
                ('default_amount', models.DecimalField(decimal_places=2, default=0, max_digits=12, verbose_name='Montant par défaut')),
                ('is_amount_free', models.BooleanField(default=False, verbose_name='Montant libre')),
                ('is_mandatory', models.BooleanField(default=False, verbose_name='Obligatoire')),
                ('target_scope', models.CharField(choices=[('Tous les membres', 'Tous les membres'), ('Groupe spécifique', 'Groupe spécifique'), ('Volontaires', 'Volontaires')], default='Tous les membres', max_length=20)),
                ('start_date', models.DateField(default=django.utils.timezone.localdate)),
                ('end_date', models.DateField(blank=True, null=True)),
                ('close_on_target_amount', models.BooleanField(default=False)),
                ('date_creation', models.DateTimeField(auto_now_add=True)),
                ('church', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='cotisation_campaigns', to='plateforme.church')),
                ('death_case', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='cotisation_campaigns', to='eglise.deathcase')),
                ('project', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='cotisation_campaigns', to='eglise.project')),
                ('target_group', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='cotisation_campaigns', to='eglise.departement')),
            ],
            options={
                'verbose_name': 'Campagne de cotisation',
                'verbose_name_plural': 'Campagnes de cotisation',
                'ordering': ['-start_date', '-id'],
            },
        ),
        migrations.CreateModel(
            name='MemberCotisation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('expected_amount', models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ('due_date', models.DateField()),
                ('campaign', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='pledges', to='cotisations.cotisationcampaign')),
                ('member', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='cotisations', to='eglise.member')),
            ],
            options={
                'verbose_name': 'Cotisation membre',
                'verbose_name_plural': 'Cotisations membres',
                'ordering': ['member__last_name', 'member__first_name'],
                'unique_together': {('campaign', 'member')},
            },
        ),
        migrations.CreateModel(
            name='CotisationPayment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12)),
                ('date', models.DateField(default=django.utils.timezone.localdate)),
                ('method', models.CharField(choices=[('Espèces', 'Espèces'), ('Mobile Money', 'Mobile Money'), ('Virement', 'Virement'), ('Carte', 'Carte')], default='Espèces', max_length=15)),
                ('date_creation', models.DateTimeField(auto_now_add=True)),
                ('pledge', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='payments', to='cotisations.membercotisation')),
            ],
            options={
                'verbose_name': 'Versement',
                'verbose_name_plural': 'Versements',
                'ordering': ['date', 'id'],
            },
        ),
    ]
