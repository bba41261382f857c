from datetime import datetime

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from plateforme.services import expire_inscription_codes


class Command(BaseCommand):
    help = "Passe au statut 'Expiré' les codes d'inscription actifs dont la date d'expiration est dépassée"

    def add_arguments(self, parser):
        parser.add_argument(
            '--date',
            type=str,
            help="Date de référence au format AAAA-MM-JJ (par défaut : aujourd'hui)",
        )

    def handle(self, *args, **kwargs):
        today = timezone.localdate()
        if kwargs.get('date'):
            try:
                today = datetime.strptime(kwargs['date'], '%Y-%m-%d').date()
            except ValueError:
                raise CommandError(f"Date invalide : {kwargs['date']}")

        count = expire_inscription_codes(today)
        if count:
            self.stdout.write(self.style.SUCCESS(f"✅ {count} code(s) d'inscription expiré(s)."))
        else:
            self.stdout.write(self.style.WARNING("Aucun code à expirer."))
