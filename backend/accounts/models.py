"""
Accounts app models.

A custom ``User`` extending Django's ``AbstractUser`` with the fields the
citizen-reporting app needs: unique email and phone number, a display
name, and exactly one of the three fixed roles.
"""

from django.contrib.auth.models import AbstractUser, UserManager
from django.core.validators import RegexValidator
from django.db import models

from core.constants import PHONE_NUMBER_PATTERN
from core.domain.access import Role

phone_number_validator = RegexValidator(
    regex=PHONE_NUMBER_PATTERN,
    message="Phone number must contain 10 to 14 digits.",
)


class CitizenUserManager(UserManager):
    """
    Regular sign-ups are citizens; ``createsuperuser`` produces admins.
    """

    def create_user(self, username, email=None, password=None, **extra_fields):
        extra_fields.setdefault("role", Role.CITIZEN)
        return super().create_user(username, email, password, **extra_fields)

    def create_superuser(self, username, email=None, password=None, **extra_fields):
        extra_fields.setdefault("role", Role.ADMIN)
        return super().create_superuser(username, email, password, **extra_fields)


class User(AbstractUser):
    """
    Custom user model.

    Login is supported via *any one* of username / email / phone_number
    together with the password (see ``accounts.backends``).

    The role is a plain choice column: authorization is a lookup in
    ``core.domain.access.CAPABILITIES``, so there is no role table and no
    per-user permission set.  Only admins can change a role.
    """

    email = models.EmailField(
        unique=True,
        verbose_name="Email Address",
    )
    phone_number = models.CharField(
        max_length=14,
        unique=True,
        validators=[phone_number_validator],
        verbose_name="Phone Number",
        db_index=True,
    )
    full_name = models.CharField(
        max_length=150,
        verbose_name="Full Name",
    )
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.CITIZEN,
        verbose_name="Role",
        db_index=True,
    )

    objects = CitizenUserManager()

    # Fields required when creating a superuser via CLI
    REQUIRED_FIELDS = ["email", "phone_number", "full_name"]

    class Meta:
        verbose_name = "User"
        verbose_name_plural = "Users"
        ordering = ["-date_joined"]

    def __str__(self):
        return f"{self.username} ({self.full_name}) - {self.get_role_display()}"
