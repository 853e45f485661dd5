"""
Insert announcements for live dashboards.

Officers listen on one group for every new incident report. Each principal
listens on its own group for distress notifications addressed to it.
Messages only say that a row was inserted; subscribers re-fetch their list.
"""
import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

from accounts import policy

logger = logging.getLogger(__name__)

INCIDENT_REPORTS_GROUP = 'incident_reports'


def notifications_group(user_id):
    return f'distress_notifications.{user_id}'


def publish_insert(table, group, row_id):
    """Tell ``group`` that a row was inserted into ``table``.

    Delivery is best effort: a missing or failing channel layer is logged and
    never retried.
    """
    channel_layer = get_channel_layer()
    if channel_layer is None:
        logger.debug(f"No channel layer configured, dropping {table} insert {row_id}")
        return False

    try:
        async_to_sync(channel_layer.group_send)(group, {
            'type': 'row.inserted',
            'table': table,
            'id': str(row_id),
        })
    except Exception as e:
        logger.error(f"Error publishing {table} insert {row_id} to {group}: {str(e)}")
        return False

    logger.debug(f"Published {table} insert {row_id} to {group}")
    return True


def publish_report_created(report):
    return publish_insert(policy.INCIDENT_REPORTS, INCIDENT_REPORTS_GROUP, report.id)


def publish_notification_created(notification):
    return publish_insert(
        policy.DISTRESS_NOTIFICATIONS,
        notifications_group(notification.user_id),
        notification.id,
    )
