from rest_framework import serializers
from django.contrib.auth import authenticate
from .models import CustomUser, Profile


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6)
    full_name = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    address = serializers.CharField(required=False, allow_blank=True, default='')
    phone_number = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    sex = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    gender = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')

    def validate_email(self, value):
        if CustomUser.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return value

    def create(self, validated_data):
        email = validated_data.pop('email')
        password = validated_data.pop('password')
        # The profile is derived from this metadata by the post_save signal
        metadata = {field: validated_data.get(field, '') for field in Profile.METADATA_FIELDS}
        return CustomUser.objects.create_user(email=email, password=password, metadata=metadata)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField()

    def validate(self, data):
        email = data.get('email')
        password = data.get('password')

        if not email or not password:
            raise serializers.ValidationError("Must provide both email and password.")

        user = authenticate(username=email, password=password)

        if not user:
            raise serializers.ValidationError("Invalid login credentials.")

        if not user.is_active:
            raise serializers.ValidationError("User account is disabled.")

        data['user'] = user
        return data


class ProfileSerializer(serializers.ModelSerializer):
    user_id = serializers.UUIDField(source='user.id', read_only=True)

    class Meta:
        model = Profile
        fields = ('user_id', 'full_name', 'email', 'address', 'phone_number',
                  'sex', 'gender', 'role', 'created_at', 'updated_at')
        read_only_fields = ('email', 'role', 'created_at', 'updated_at')


class ProfileSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Profile
        fields = ('full_name', 'phone_number', 'address', 'email')
        read_only_fields = fields
