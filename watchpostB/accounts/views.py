import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.authtoken.models import Token
from rest_framework.generics import ListAPIView
from django.db import DatabaseError

from . import policy
from .models import Profile
from .serializers import RegisterSerializer, LoginSerializer, ProfileSerializer

logger = logging.getLogger(__name__)


def _own_profile(user):
    """Return the caller's profile, inserting it if the registration trigger never ran."""
    try:
        return Profile.objects.get(user=user)
    except Profile.DoesNotExist:
        profile = Profile.from_registration(user)
        policy.enforce(user, policy.PROFILES, policy.INSERT, profile)
        profile.save()
        logger.info(f"Inserted missing profile for {user.email}")
        return profile


@api_view(['POST'])
@permission_classes([AllowAny])
def register_user(request):
    serializer = RegisterSerializer(data=request.data)
    if serializer.is_valid():
        user = serializer.save()
        token, created = Token.objects.get_or_create(user=user)

        logger.info(f"User registered: {user.email}")
        return Response({
            'user': ProfileSerializer(user.profile).data,
            'token': token.key,
            'message': 'User created successfully'
        }, status=status.HTTP_201_CREATED)

    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['POST'])
@permission_classes([AllowAny])
def login_user(request):
    serializer = LoginSerializer(data=request.data)
    if serializer.is_valid():
        user = serializer.validated_data['user']
        token, created = Token.objects.get_or_create(user=user)
        logger.info(f"User logged in: {user.email}")

        return Response({
            'user': ProfileSerializer(_own_profile(user)).data,
            'token': token.key,
            'message': 'Login successful'
        }, status=status.HTTP_200_OK)

    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_user(request):
    Token.objects.filter(user=request.user).delete()
    logger.info(f"User logged out: {request.user.email}")
    return Response({'message': 'Logout successful'}, status=status.HTTP_200_OK)


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def get_user_profile(request):
    try:
        profile = _own_profile(request.user)
    except policy.PolicyViolation:
        return Response({'error': 'Permission denied'}, status=status.HTTP_403_FORBIDDEN)

    if request.method == 'GET':
        serializer = ProfileSerializer(profile)
        return Response(serializer.data)

    if not policy.is_allowed(request.user, policy.PROFILES, policy.UPDATE, profile):
        return Response({'error': 'Permission denied'}, status=status.HTTP_403_FORBIDDEN)

    serializer = ProfileSerializer(profile, data=request.data, partial=True)
    if serializer.is_valid():
        try:
            serializer.save()
        except DatabaseError as e:
            logger.error(f"Error updating profile for {request.user.email}: {str(e)}")
            return Response(
                {'error': 'Failed to update profile'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        return Response({
            'user': serializer.data,
            'message': 'Profile updated successfully'
        }, status=status.HTTP_200_OK)

    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


class ProfileListView(ListAPIView):
    serializer_class = ProfileSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return policy.filter_visible(
            self.request.user, policy.PROFILES, Profile.objects.select_related('user')
        )


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def profile_detail(request, user_id):
    visible = policy.filter_visible(request.user, policy.PROFILES, Profile.objects.all())
    profile = visible.filter(user_id=user_id).first()
    if profile is None:
        return Response({'error': 'Profile not found'}, status=status.HTTP_404_NOT_FOUND)
    return Response(ProfileSerializer(profile).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def check_auth_status(request):
    user = request.user
    return Response({
        'authenticated': True,
        'user': {
            'id': str(user.id),
            'email': user.email,
            'role': policy.get_user_role(user.id),
        }
    })
