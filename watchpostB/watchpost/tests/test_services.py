from unittest.mock import patch

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase
from accounts import policy
from accounts.models import CustomUser, Profile
from ..models import IncidentReport, DistressNotification
from .. import services


class ReportServicesTest(TestCase):
    def setUp(self):
        self.user = CustomUser.objects.create_user(email='test@example.com', password='password123')
        self.other = CustomUser.objects.create_user(email='other@example.com', password='password123')
        self.officer = CustomUser.objects.create_user(email='officer@example.com', password='password123')
        self.second_officer = CustomUser.objects.create_user(email='officer2@example.com', password='password123')
        Profile.objects.filter(user__in=[self.officer, self.second_officer]).update(role=Profile.ROLE_OFFICER)

        self.data = {
            'title': 'Break-in',
            'description': 'Window smashed and the front door left open',
            'incident_type': 'emergency',
            'location': 'Lobby',
        }

    def test_submit_report(self):
        report, warning = services.submit_report(self.user, self.data)
        self.assertIsNone(warning)

        stored = IncidentReport.objects.get(pk=report.pk)
        self.assertEqual(stored.reporter, self.user)
        self.assertEqual(stored.status, IncidentReport.STATUS_PENDING)
        self.assertIsNone(stored.video_url)
        self.assertIsNone(stored.assigned_officer)

    def test_cannot_submit_for_someone_else(self):
        with self.assertRaises(policy.PolicyViolation):
            services.submit_report(self.user, self.data, reporter=self.other)
        self.assertFalse(IncidentReport.objects.exists())

    def test_officer_cannot_submit_for_citizen(self):
        with self.assertRaises(policy.PolicyViolation):
            services.submit_report(self.officer, self.data, reporter=self.user)

    @patch('watchpost.services.upload_surveillance_video', return_value=None)
    def test_failed_upload_keeps_report(self, upload):
        video = SimpleUploadedFile('clip.mp4', b'footage', content_type='video/mp4')
        report, warning = services.submit_report(self.user, self.data, video=video)

        upload.assert_called_once_with(self.user, video)
        self.assertEqual(warning, services.VIDEO_UPLOAD_WARNING)
        self.assertIsNone(IncidentReport.objects.get(pk=report.pk).video_url)

    @patch('watchpost.services.upload_surveillance_video', return_value='/videos/clip.mp4')
    def test_successful_upload_sets_video_url(self, upload):
        video = SimpleUploadedFile('clip.mp4', b'footage', content_type='video/mp4')
        report, warning = services.submit_report(self.user, self.data, video=video)
        self.assertIsNone(warning)
        self.assertEqual(IncidentReport.objects.get(pk=report.pk).video_url, '/videos/clip.mp4')

    def test_last_officer_holds_assignment(self):
        report, _ = services.submit_report(self.user, self.data)

        services.update_report_status(self.officer, report, IncidentReport.STATUS_IN_PROGRESS)
        services.update_report_status(
            self.second_officer,
            IncidentReport.objects.get(pk=report.pk),
            IncidentReport.STATUS_RESOLVED
        )

        report.refresh_from_db()
        self.assertEqual(report.status, IncidentReport.STATUS_RESOLVED)
        self.assertEqual(report.assigned_officer, self.second_officer)
        self.assertEqual(report.reporter, self.user)

    def test_citizen_cannot_update_status(self):
        report, _ = services.submit_report(self.user, self.data)
        with self.assertRaises(policy.PolicyViolation):
            services.update_report_status(self.user, report, IncidentReport.STATUS_CLOSED)

    def test_demoted_officer_loses_access(self):
        report, _ = services.submit_report(self.user, self.data)
        Profile.objects.filter(user=self.officer).update(role=Profile.ROLE_USER)
        with self.assertRaises(policy.PolicyViolation):
            services.update_report_status(self.officer, report, IncidentReport.STATUS_CLOSED)


class NotificationServicesTest(TestCase):
    def setUp(self):
        self.user = CustomUser.objects.create_user(email='test@example.com', password='password123')
        self.officer = CustomUser.objects.create_user(email='officer@example.com', password='password123')
        Profile.objects.filter(user=self.officer).update(role=Profile.ROLE_OFFICER)
        self.report = IncidentReport.objects.create(
            reporter=self.user,
            title='Break-in',
            description='Back door forced open overnight',
            incident_type='theft',
            location='Lobby of block C',
        )

    def test_notification_goes_to_reporter(self):
        notification = services.send_distress_notification(self.officer, self.report, 'Help is on the way.')
        self.assertEqual(notification.user, self.user)
        self.assertEqual(notification.officer, self.officer)
        self.assertEqual(notification.status, DistressNotification.STATUS_SENT)

    def test_citizen_cannot_send_notification(self):
        with self.assertRaises(policy.PolicyViolation):
            services.send_distress_notification(self.user, self.report, 'Help is on the way.')
        self.assertFalse(DistressNotification.objects.exists())

    def test_acknowledge(self):
        notification = services.send_distress_notification(self.officer, self.report, 'Help is on the way.')
        services.acknowledge_notification(self.user, notification)

        notification.refresh_from_db()
        self.assertEqual(notification.status, DistressNotification.STATUS_ACKNOWLEDGED)
        self.assertIsNotNone(notification.acknowledged_at)

    def test_officer_cannot_acknowledge(self):
        notification = services.send_distress_notification(self.officer, self.report, 'Help is on the way.')
        with self.assertRaises(policy.PolicyViolation):
            services.acknowledge_notification(self.officer, notification)
