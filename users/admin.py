from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ('username', 'email', 'name', 'role', 'university', 'is_profile_complete')
    list_filter = ('role', 'is_profile_complete', 'university')
    search_fields = ('username', 'email', 'name')
    fieldsets = BaseUserAdmin.fieldsets + (
        ('TeamSync profile', {
            'fields': (
                'role', 'google_id', 'name', 'avatar', 'university', 'department',
                'age', 'gender', 'bio', 'skills', 'interests', 'social_links',
                'achievements', 'is_profile_complete',
            )
        }),
    )
