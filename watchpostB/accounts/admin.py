import logging

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import CustomUser, Profile

logger = logging.getLogger(__name__)


class ProfileInline(admin.StackedInline):
    model = Profile
    can_delete = False
    extra = 0


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    list_display = ('email', 'is_staff', 'is_active', 'created_at')
    list_filter = ('is_staff', 'is_active')
    search_fields = ('email',)
    ordering = ('-created_at',)
    inlines = [ProfileInline]

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Registration', {'fields': ('metadata',)}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Important dates', {'fields': ('last_login', 'date_joined')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'password1', 'password2'),
        }),
    )


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ('full_name', 'email', 'role', 'phone_number', 'created_at')
    list_filter = ('role',)
    search_fields = ('full_name', 'email', 'phone_number')
    readonly_fields = ('user', 'created_at', 'updated_at')
    actions = ['promote_to_officer', 'demote_to_user']

    def _set_role(self, request, queryset, role):
        # Saved one by one so updated_at is refreshed
        for profile in queryset:
            profile.role = role
            profile.save(update_fields=['role', 'updated_at'])
            logger.info(f"{request.user} set role of {profile.email} to {role}")

    @admin.action(description='Promote selected profiles to officer')
    def promote_to_officer(self, request, queryset):
        self._set_role(request, queryset, Profile.ROLE_OFFICER)

    @admin.action(description='Demote selected profiles to user')
    def demote_to_user(self, request, queryset):
        self._set_role(request, queryset, Profile.ROLE_USER)
