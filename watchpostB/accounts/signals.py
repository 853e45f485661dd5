import logging

from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import CustomUser, Profile

logger = logging.getLogger(__name__)


@receiver(post_save, sender=CustomUser)
def create_profile_for_new_user(sender, instance, created, raw=False, **kwargs):
    if not created or raw:
        return

    profile = Profile.from_registration(instance)
    profile.save()
    logger.info(f"Created profile for {instance.email}")
