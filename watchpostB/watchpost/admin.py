from django.contrib import admin
from . import models


class DistressNotificationInline(admin.TabularInline):
    model = models.DistressNotification
    fk_name = 'incident'
    extra = 0
    fields = ('officer', 'user', 'message', 'status', 'created_at', 'acknowledged_at')
    readonly_fields = ('status', 'created_at', 'acknowledged_at')


@admin.register(models.IncidentReport)
class IncidentReportAdmin(admin.ModelAdmin):
    list_display = ('title', 'incident_type', 'status', 'reporter', 'assigned_officer', 'created_at')
    list_filter = ('status', 'incident_type')
    search_fields = ('title', 'description', 'location', 'reporter__email')
    ordering = ('-created_at',)
    inlines = [DistressNotificationInline]

    def get_readonly_fields(self, request, obj=None):
        if obj is not None:
            return ('reporter', 'created_at', 'updated_at')
        return ('created_at', 'updated_at')


@admin.register(models.DistressNotification)
class DistressNotificationAdmin(admin.ModelAdmin):
    list_display = ('message_preview', 'incident', 'officer', 'user', 'status', 'created_at', 'acknowledged_at')
    list_filter = ('status',)
    search_fields = ('message', 'user__email', 'officer__email')
    readonly_fields = ('status', 'created_at', 'acknowledged_at')
    ordering = ('-created_at',)

    def message_preview(self, obj):
        return obj.message[:75] + ("..." if len(obj.message) > 75 else "")
    message_preview.short_description = "Message"
