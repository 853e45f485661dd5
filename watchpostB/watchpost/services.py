"""
Report and notification mutations.

Each operation takes the acting principal explicitly and runs the row-level
policy before anything is written. Denials raise ``PolicyViolation``.
"""
import logging

from accounts import policy

from .models import IncidentReport, DistressNotification
from .storage import upload_surveillance_video

logger = logging.getLogger(__name__)

VIDEO_UPLOAD_WARNING = 'Video upload failed, but the report was submitted without it.'


def submit_report(caller, data, video=None, reporter=None):
    """Create an incident report attributed to ``reporter`` (the caller by default).

    Returns ``(report, warning)``. A failed video upload does not stop the
    report; it is saved without a video and ``warning`` says so.
    """
    report = IncidentReport(
        reporter=reporter or caller,
        title=data['title'],
        description=data['description'],
        incident_type=data['incident_type'],
        location=data['location'],
    )
    policy.enforce(caller, policy.INCIDENT_REPORTS, policy.INSERT, report)

    warning = None
    if video is not None:
        policy.enforce(caller, policy.SURVEILLANCE_VIDEOS, policy.INSERT, {'owner_id': caller.pk})
        report.video_url = upload_surveillance_video(caller, video)
        if report.video_url is None:
            warning = VIDEO_UPLOAD_WARNING

    report.save()
    logger.info(f"Incident report {report.id} submitted by {report.reporter_id}")
    return report, warning


def update_report_status(caller, report, status):
    policy.enforce(caller, policy.INCIDENT_REPORTS, policy.UPDATE, report)

    previous = report.status
    report.transition(status, caller)
    logger.info(f"Report {report.id} moved from {previous} to {status} by {caller.pk}")
    return report


def send_distress_notification(caller, report, message):
    notification = DistressNotification(
        incident=report,
        officer=caller,
        user_id=report.reporter_id,
        message=message,
        status=DistressNotification.STATUS_SENT,
    )
    policy.enforce(caller, policy.DISTRESS_NOTIFICATIONS, policy.INSERT, notification)

    notification.save()
    logger.info(f"Distress notification {notification.id} sent to {notification.user_id} for report {report.id}")
    return notification


def acknowledge_notification(caller, notification):
    policy.enforce(caller, policy.DISTRESS_NOTIFICATIONS, policy.UPDATE, notification)

    if notification.acknowledge():
        logger.info(f"Distress notification {notification.id} acknowledged by {caller.pk}")
    return notification
