from rest_framework import serializers
from django.conf import settings

from accounts.serializers import ProfileSummarySerializer
from .models import IncidentReport, DistressNotification


# report

class IncidentReportSerializer(serializers.ModelSerializer):
    reporter_id = serializers.UUIDField(read_only=True)
    reporter = ProfileSummarySerializer(source='reporter.profile', read_only=True)
    assigned_officer_id = serializers.UUIDField(read_only=True, allow_null=True)
    suggested_transitions = serializers.ListField(child=serializers.CharField(), read_only=True)

    class Meta:
        model = IncidentReport
        fields = (
            'id', 'reporter_id', 'reporter', 'title', 'description',
            'incident_type', 'location', 'video_url', 'status',
            'assigned_officer_id', 'suggested_transitions',
            'created_at', 'updated_at'
        )
        read_only_fields = fields


class IncidentReportCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200, min_length=5)
    description = serializers.CharField(min_length=10)
    incident_type = serializers.ChoiceField(choices=IncidentReport.INCIDENT_TYPES)
    location = serializers.CharField(min_length=5)
    video = serializers.FileField(required=False, allow_null=True, allow_empty_file=False)

    def validate_video(self, value):
        if value is None:
            return value

        content_type = getattr(value, 'content_type', '') or ''
        if not content_type.startswith('video/'):
            raise serializers.ValidationError("Uploaded file must be a video")

        max_size = settings.WATCHPOST_MAX_VIDEO_SIZE
        if value.size > max_size:
            raise serializers.ValidationError(
                f"Video file must be less than {max_size // (1024 * 1024)}MB"
            )

        return value


class IncidentStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=IncidentReport.STATUS_CHOICES)


# distress notification

class DistressNotificationSerializer(serializers.ModelSerializer):
    incident_id = serializers.UUIDField(read_only=True)
    incident_title = serializers.CharField(source='incident.title', read_only=True)
    officer_id = serializers.UUIDField(read_only=True)
    user_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = DistressNotification
        fields = (
            'id', 'incident_id', 'incident_title', 'officer_id', 'user_id',
            'message', 'status', 'created_at', 'acknowledged_at'
        )
        read_only_fields = fields


class DistressNotificationCreateSerializer(serializers.Serializer):
    message = serializers.CharField(min_length=10)
