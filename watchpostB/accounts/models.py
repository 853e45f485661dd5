import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models

from .managers import CustomUserManager


class CustomUser(AbstractUser):
    # Remove username and first/last name
    username = None
    first_name = None
    last_name = None

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)

    # Registration metadata, copied into the profile when the principal is created
    metadata = models.JSONField(default=dict, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    objects = CustomUserManager()

    def __str__(self):
        return self.email


class Profile(models.Model):
    ROLE_USER = 'user'
    ROLE_OFFICER = 'officer'

    ROLE_CHOICES = [
        (ROLE_USER, 'User'),
        (ROLE_OFFICER, 'Officer'),
    ]

    # Attributes filled from registration metadata
    METADATA_FIELDS = ('full_name', 'address', 'phone_number', 'sex', 'gender')

    user = models.OneToOneField(CustomUser, on_delete=models.CASCADE, related_name='profile')
    full_name = models.CharField(max_length=255, blank=True)
    email = models.EmailField()
    address = models.TextField(blank=True)
    phone_number = models.CharField(max_length=20, blank=True)
    sex = models.CharField(max_length=20, blank=True)
    gender = models.CharField(max_length=50, blank=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_USER)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['full_name', 'email']

    def __str__(self):
        return f"{self.full_name or self.email} ({self.role})"

    @property
    def is_officer(self):
        return self.role == self.ROLE_OFFICER

    @classmethod
    def from_registration(cls, user):
        """Build the profile row for a freshly registered principal.

        Absent metadata fields default to the empty string.
        """
        metadata = user.metadata or {}
        values = {field: str(metadata.get(field) or '') for field in cls.METADATA_FIELDS}
        return cls(user=user, email=user.email, **values)
