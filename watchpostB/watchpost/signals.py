from functools import partial

from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import IncidentReport, DistressNotification
from . import realtime


@receiver(post_save, sender=IncidentReport)
def announce_incident_report(sender, instance, created, raw=False, **kwargs):
    if created and not raw:
        transaction.on_commit(partial(realtime.publish_report_created, instance))


@receiver(post_save, sender=DistressNotification)
def announce_distress_notification(sender, instance, created, raw=False, **kwargs):
    if created and not raw:
        transaction.on_commit(partial(realtime.publish_notification_created, instance))
