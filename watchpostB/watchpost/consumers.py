# watchpost/consumers.py
import json
import logging

from channels.generic.websocket import AsyncWebsocketConsumer
from channels.db import database_sync_to_async

from accounts import policy
from accounts.models import Profile
from .realtime import INCIDENT_REPORTS_GROUP, notifications_group

logger = logging.getLogger(__name__)


class InsertFeedConsumer(AsyncWebsocketConsumer):
    """Forwards row insert announcements from one group to the socket.

    Incoming socket messages are ignored; the feed is one way.
    """
    group_name = None

    async def connect(self):
        self.user = self.scope.get('user')
        if not policy.is_authenticated(self.user):
            await self.close()
            return

        self.group_name = await self.get_group_name()
        if self.group_name is None:
            await self.close()
            return

        # Join group
        await self.channel_layer.group_add(
            self.group_name,
            self.channel_name
        )

        await self.accept()
        logger.info(f"{self.user.pk} subscribed to {self.group_name}")

    async def disconnect(self, close_code):
        if self.group_name:
            # Leave group
            await self.channel_layer.group_discard(
                self.group_name,
                self.channel_name
            )

    async def get_group_name(self):
        raise NotImplementedError

    # Receive message from group
    async def row_inserted(self, event):
        await self.send(text_data=json.dumps({
            'event': 'INSERT',
            'table': event['table'],
            'id': event['id'],
        }))


class ReportFeedConsumer(InsertFeedConsumer):
    async def get_group_name(self):
        role = await database_sync_to_async(policy.get_user_role)(self.user.pk)
        if role != Profile.ROLE_OFFICER:
            logger.warning(f"Rejected report feed subscription from {self.user.pk}")
            return None
        return INCIDENT_REPORTS_GROUP


class NotificationFeedConsumer(InsertFeedConsumer):
    async def get_group_name(self):
        return notifications_group(self.user.pk)
