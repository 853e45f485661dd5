from django.test import TestCase
from ..serializers import (
    RegisterSerializer,
    LoginSerializer,
    ProfileSerializer,
)
from ..models import CustomUser, Profile


class SerializersTest(TestCase):
    def setUp(self):
        self.user = CustomUser.objects.create_user(
            email='test@example.com',
            password='password123',
            metadata={'full_name': 'Test User'}
        )

    def test_register_serializer_creates_profile(self):
        serializer = RegisterSerializer(data={
            'email': 'new@example.com',
            'password': 'secret123',
            'full_name': 'New User',
            'phone_number': '555-0101',
        })
        self.assertTrue(serializer.is_valid(), serializer.errors)
        user = serializer.save()
        self.assertEqual(user.profile.full_name, 'New User')
        self.assertEqual(user.profile.phone_number, '555-0101')
        self.assertEqual(user.profile.address, '')

    def test_register_serializer_ignores_role(self):
        serializer = RegisterSerializer(data={
            'email': 'sneaky@example.com',
            'password': 'secret123',
            'role': 'officer',
        })
        self.assertTrue(serializer.is_valid(), serializer.errors)
        user = serializer.save()
        self.assertEqual(user.profile.role, Profile.ROLE_USER)

    def test_register_serializer_rejects_existing_email(self):
        serializer = RegisterSerializer(data={'email': 'test@example.com', 'password': 'secret123'})
        self.assertFalse(serializer.is_valid())
        self.assertIn('email', serializer.errors)

    def test_login_serializer(self):
        serializer = LoginSerializer(data={'email': 'test@example.com', 'password': 'password123'})
        self.assertTrue(serializer.is_valid())
        self.assertEqual(serializer.validated_data['user'], self.user)

    def test_login_serializer_wrong_password(self):
        serializer = LoginSerializer(data={'email': 'test@example.com', 'password': 'nope'})
        self.assertFalse(serializer.is_valid())

    def test_profile_serializer_role_is_read_only(self):
        serializer = ProfileSerializer(self.user.profile, data={'role': 'officer', 'full_name': 'Renamed'}, partial=True)
        self.assertTrue(serializer.is_valid())
        serializer.save()
        self.user.profile.refresh_from_db()
        self.assertEqual(self.user.profile.full_name, 'Renamed')
        self.assertEqual(self.user.profile.role, Profile.ROLE_USER)
