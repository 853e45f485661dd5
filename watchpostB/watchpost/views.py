import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework.generics import ListAPIView
from rest_framework.parsers import MultiPartParser, FormParser, JSONParser
from django.conf import settings
from django.db import DatabaseError
from django.db.models import Count
from django.http import FileResponse, Http404

from accounts import policy
from accounts.models import Profile
from accounts.serializers import ProfileSerializer
from .models import IncidentReport, DistressNotification
from .serializers import (
    DistressNotificationCreateSerializer,
    DistressNotificationSerializer,
    IncidentReportCreateSerializer,
    IncidentReportSerializer,
    IncidentStatusSerializer,
)
from . import services
from .storage import open_surveillance_video

logger = logging.getLogger(__name__)

PERMISSION_DENIED = {'error': 'Permission denied'}


def visible_reports(user):
    queryset = IncidentReport.objects.select_related('reporter__profile')
    return policy.filter_visible(user, policy.INCIDENT_REPORTS, queryset)


def visible_notifications(user):
    queryset = DistressNotification.objects.select_related('incident')
    return policy.filter_visible(user, policy.DISTRESS_NOTIFICATIONS, queryset)


def status_counts(reports):
    counts = {value: 0 for value, _ in IncidentReport.STATUS_CHOICES}
    for row in reports.order_by().values('status').annotate(total=Count('id')):
        counts[row['status']] = row['total']
    return counts


# dashboard

@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard(request):
    profile = Profile.objects.filter(user=request.user).first()
    role = policy.get_user_role(request.user.pk) or Profile.ROLE_USER
    reports = visible_reports(request.user)

    if role == Profile.ROLE_OFFICER:
        return Response({
            'role': role,
            'profile': ProfileSerializer(profile).data if profile else None,
            'status_counts': status_counts(reports),
            'reports': IncidentReportSerializer(reports, many=True).data,
        })

    limit = settings.WATCHPOST_NOTIFICATION_FEED_LIMIT
    notifications = visible_notifications(request.user)[:limit]
    return Response({
        'role': role,
        'profile': ProfileSerializer(profile).data if profile else None,
        'reports': IncidentReportSerializer(reports, many=True).data,
        'notifications': DistressNotificationSerializer(notifications, many=True).data,
    })


# report

@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser, JSONParser])
def submit_incident_report(request):
    serializer = IncidentReportCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    data = dict(serializer.validated_data)
    video = data.pop('video', None)

    try:
        report, warning = services.submit_report(request.user, data, video=video)
    except policy.PolicyViolation:
        return Response(PERMISSION_DENIED, status=status.HTTP_403_FORBIDDEN)
    except DatabaseError as e:
        logger.error(f"Error submitting incident report for {request.user.pk}: {str(e)}")
        return Response(
            {'error': 'Failed to submit report'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    body = {
        'message': 'Incident report submitted successfully',
        'report': IncidentReportSerializer(report).data,
    }
    if warning:
        body['warning'] = warning
    return Response(body, status=status.HTTP_201_CREATED)


class IncidentReportListView(ListAPIView):
    serializer_class = IncidentReportSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        queryset = visible_reports(self.request.user)

        status_filter = self.request.query_params.get('status')
        if status_filter:
            queryset = queryset.filter(status=status_filter)

        return queryset


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def incident_report_detail(request, report_id):
    report = visible_reports(request.user).filter(id=report_id).first()
    if report is None:
        return Response({'error': 'Incident report not found'}, status=status.HTTP_404_NOT_FOUND)
    return Response(IncidentReportSerializer(report).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def update_incident_status(request, report_id):
    report = visible_reports(request.user).filter(id=report_id).first()
    if report is None:
        return Response({'error': 'Incident report not found'}, status=status.HTTP_404_NOT_FOUND)

    serializer = IncidentStatusSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        report = services.update_report_status(request.user, report, serializer.validated_data['status'])
    except policy.PolicyViolation:
        return Response(PERMISSION_DENIED, status=status.HTTP_403_FORBIDDEN)
    except DatabaseError as e:
        logger.error(f"Error updating status of report {report_id}: {str(e)}")
        return Response(
            {'error': 'Failed to update report status'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return Response({
        'message': 'Report status updated successfully',
        'report': IncidentReportSerializer(report).data,
    }, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def incident_statistics(request):
    reports = visible_reports(request.user)
    total_reports = reports.count()

    type_counts = {
        row['incident_type']: row['total']
        for row in reports.order_by().values('incident_type').annotate(total=Count('id'))
    }

    latest = reports.first()
    return Response({
        'total_reports': total_reports,
        'status_counts': status_counts(reports),
        'type_counts': type_counts,
        'last_submission': latest.created_at if latest else None,
    })


# distress notification

@api_view(['POST'])
@permission_classes([IsAuthenticated])
def send_distress_notification(request, report_id):
    report = visible_reports(request.user).filter(id=report_id).first()
    if report is None:
        return Response({'error': 'Incident report not found'}, status=status.HTTP_404_NOT_FOUND)

    serializer = DistressNotificationCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        notification = services.send_distress_notification(
            request.user, report, serializer.validated_data['message']
        )
    except policy.PolicyViolation:
        return Response(PERMISSION_DENIED, status=status.HTTP_403_FORBIDDEN)
    except DatabaseError as e:
        logger.error(f"Error sending notification for report {report_id}: {str(e)}")
        return Response(
            {'error': 'Failed to send notification'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return Response({
        'message': 'Notification sent to user successfully',
        'notification': DistressNotificationSerializer(notification).data,
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_user_notifications(request):
    notifications = visible_notifications(request.user)
    unacknowledged_count = notifications.filter(status=DistressNotification.STATUS_SENT).count()

    limit = settings.WATCHPOST_NOTIFICATION_FEED_LIMIT
    serializer = DistressNotificationSerializer(notifications[:limit], many=True)

    return Response({
        'unacknowledged_count': unacknowledged_count,
        'data': serializer.data,
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def acknowledge_notification(request, notification_id):
    notification = visible_notifications(request.user).filter(id=notification_id).first()
    if notification is None:
        return Response({'error': 'Notification not found'}, status=status.HTTP_404_NOT_FOUND)

    try:
        notification = services.acknowledge_notification(request.user, notification)
    except policy.PolicyViolation:
        return Response(PERMISSION_DENIED, status=status.HTTP_403_FORBIDDEN)
    except DatabaseError as e:
        logger.error(f"Error acknowledging notification {notification_id}: {str(e)}")
        return Response(
            {'error': 'Failed to acknowledge notification'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return Response({
        'message': 'Notification acknowledged successfully',
        'notification': DistressNotificationSerializer(notification).data,
    })


# surveillance video

@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_surveillance_video(request, owner_id, filename):
    if not policy.is_allowed(request.user, policy.SURVEILLANCE_VIDEOS, policy.SELECT, {'owner_id': owner_id}):
        raise Http404('Video not found')

    video = open_surveillance_video(owner_id, filename)
    if video is None:
        raise Http404('Video not found')

    return FileResponse(video, filename=filename)
