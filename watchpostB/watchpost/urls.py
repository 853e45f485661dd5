from django.urls import path
from . import views


urlpatterns = [
    # dashboard
    path('dashboard/', views.dashboard, name='dashboard'),

    # incident reports
    path('reports/', views.IncidentReportListView.as_view(), name='incident-reports-list'),
    path('reports/submit/', views.submit_incident_report, name='submit-incident'),
    path('reports/statistics/', views.incident_statistics, name='incident-statistics'),
    path('reports/<uuid:report_id>/', views.incident_report_detail, name='incident-report-detail'),
    path('reports/<uuid:report_id>/update-status/', views.update_incident_status, name='update-incident-status'),
    path('reports/<uuid:report_id>/notify/', views.send_distress_notification, name='send-distress-notification'),

    # distress notifications
    path('notifications/', views.get_user_notifications, name='user-notifications'),
    path('notifications/<uuid:notification_id>/acknowledge/', views.acknowledge_notification, name='acknowledge-notification'),

    # surveillance videos
    path('videos/<uuid:owner_id>/<str:filename>', views.get_surveillance_video, name='surveillance-video'),
]
