import uuid

from django.db import models
from django.utils import timezone
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError

User = get_user_model()


# report

class IncidentReport(models.Model):
    INCIDENT_TYPES = [
        ('theft', 'Theft'),
        ('vandalism', 'Vandalism'),
        ('violence', 'Violence'),
        ('suspicious_activity', 'Suspicious Activity'),
        ('emergency', 'Emergency'),
        ('fire', 'Fire'),
        ('medical', 'Medical'),
        ('other', 'Other'),
    ]

    STATUS_PENDING = 'pending'
    STATUS_IN_PROGRESS = 'in_progress'
    STATUS_RESOLVED = 'resolved'
    STATUS_CLOSED = 'closed'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_IN_PROGRESS, 'In Progress'),
        (STATUS_RESOLVED, 'Resolved'),
        (STATUS_CLOSED, 'Closed'),
    ]

    # Path the officer dashboard offers. Not enforced: officers may set any status.
    SUGGESTED_TRANSITIONS = {
        STATUS_PENDING: (STATUS_IN_PROGRESS, STATUS_CLOSED),
        STATUS_IN_PROGRESS: (STATUS_RESOLVED, STATUS_CLOSED),
        STATUS_RESOLVED: (),
        STATUS_CLOSED: (),
    }

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    reporter = models.ForeignKey(User, on_delete=models.CASCADE, related_name='incident_reports')
    title = models.CharField(max_length=200)
    description = models.TextField()
    # Stored free-form; the submission form restricts it to INCIDENT_TYPES
    incident_type = models.CharField(max_length=50)
    location = models.TextField()
    video_url = models.CharField(max_length=500, blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    assigned_officer = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assigned_reports'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['reporter', 'created_at'], name='watchpost_report_reporter_idx'),
            models.Index(fields=['status', 'created_at'], name='watchpost_report_status_idx'),
        ]

    def __str__(self):
        return f"{self.title} ({self.status})"

    @property
    def suggested_transitions(self):
        return list(self.SUGGESTED_TRANSITIONS.get(self.status, ()))

    def save(self, *args, **kwargs):
        if not self._state.adding:
            stored_reporter = IncidentReport.objects.filter(pk=self.pk).values_list('reporter_id', flat=True).first()
            if stored_reporter is not None and stored_reporter != self.reporter_id:
                raise ValidationError({'reporter': 'The reporter of an incident cannot be changed.'})

        super().save(*args, **kwargs)

    def transition(self, status, officer):
        """Set ``status`` and hand the report to ``officer``.

        Any status may follow any other; the last officer to act holds the
        assignment.
        """
        if status not in dict(self.STATUS_CHOICES):
            raise ValidationError({'status': f'Invalid status: {status}'})

        self.status = status
        self.assigned_officer = officer
        self.save(update_fields=['status', 'assigned_officer', 'updated_at'])


# distress notification

class DistressNotification(models.Model):
    STATUS_SENT = 'sent'
    STATUS_ACKNOWLEDGED = 'acknowledged'
    # Reserved: nothing moves a notification to resolved
    STATUS_RESOLVED = 'resolved'

    STATUS_CHOICES = [
        (STATUS_SENT, 'Sent'),
        (STATUS_ACKNOWLEDGED, 'Acknowledged'),
        (STATUS_RESOLVED, 'Resolved'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    incident = models.ForeignKey(IncidentReport, on_delete=models.CASCADE, related_name='distress_notifications')
    officer = models.ForeignKey(User, on_delete=models.CASCADE, related_name='sent_distress_notifications')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='distress_notifications')
    message = models.TextField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_SENT)
    created_at = models.DateTimeField(default=timezone.now)
    acknowledged_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'created_at'], name='watchpost_notice_user_idx'),
        ]

    def __str__(self):
        return f"Notification for {self.incident_id} - {self.status}"

    def clean(self):
        if self.incident_id and self.user_id != self.incident.reporter_id:
            raise ValidationError({'user': 'Notifications can only be sent to the reporter of the incident.'})

    def save(self, *args, **kwargs):
        self.clean()

        if not self._state.adding and self.acknowledged_at is None:
            stored = DistressNotification.objects.filter(pk=self.pk).values_list('acknowledged_at', flat=True).first()
            if stored is not None:
                raise ValidationError({'acknowledged_at': 'An acknowledgement cannot be withdrawn.'})

        super().save(*args, **kwargs)

    @property
    def is_acknowledged(self):
        return self.acknowledged_at is not None

    def acknowledge(self):
        """Mark the notification acknowledged, once.

        The stored row is only updated while ``acknowledged_at`` is still
        empty, so a stale or concurrent second acknowledgement keeps the
        first timestamp. Returns True when this call recorded it.
        """
        updated = DistressNotification.objects.filter(
            pk=self.pk, acknowledged_at__isnull=True
        ).update(status=self.STATUS_ACKNOWLEDGED, acknowledged_at=timezone.now())

        self.refresh_from_db(fields=['status', 'acknowledged_at'])
        return updated == 1
