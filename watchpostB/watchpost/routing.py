from django.urls import path

from . import consumers

websocket_urlpatterns = [
    path('ws/reports/', consumers.ReportFeedConsumer.as_asgi()),
    path('ws/notifications/', consumers.NotificationFeedConsumer.as_asgi()),
]
