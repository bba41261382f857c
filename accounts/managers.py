from django.contrib.auth.base_user import BaseUserManager
from django.utils.translation import gettext_lazy as _


class AppUserManager(BaseUserManager):
    """
    Manager personnalisé pour le modèle AppUser.
    """

    def create_user(self, identifiant, name, password=None, **extra_fields):
        """
        Crée et retourne un utilisateur avec un identifiant et un nom.
        """
        if not identifiant:
            raise ValueError(_("L'identifiant doit être renseigné."))
        if not name:
            raise ValueError(_('Le nom complet doit être renseigné.'))

        email = extra_fields.pop('email', '')
        user = self.model(
            identifiant=identifiant,
            name=name,
            email=self.normalize_email(email) if email else '',
            **extra_fields
        )
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, identifiant, name, password=None, **extra_fields):
        """
        Crée et retourne le super administrateur de la plateforme.
        """
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('is_super_admin', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError(_('Le superutilisateur doit avoir is_staff=True.'))
        if extra_fields.get('is_superuser') is not True:
            raise ValueError(_('Le superutilisateur doit avoir is_superuser=True.'))

        return self.create_user(identifiant, name, password, **extra_fields)

    def get_by_login(self, login):
        """
        Recherche insensible à la casse par identifiant ou email.
        """
        login = (login or '').strip()
        if not login:
            raise self.model.DoesNotExist
        qs = self.select_related('church')
        user = qs.filter(identifiant__iexact=login).first()
        if user is None:
            user = qs.filter(email__iexact=login).exclude(email='').first()
        if user is None:
            raise self.model.DoesNotExist
        return user
