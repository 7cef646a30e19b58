from django.contrib import admin
from .models import Team, TeamMember, TeamRequest, Message


class TeamMemberInline(admin.TabularInline):
    model = TeamMember
    extra = 0


@admin.register(Team)
class TeamAdmin(admin.ModelAdmin):
    list_display = ('name', 'leader', 'category', 'max_members', 'is_active', 'created_at')
    list_filter = ('category', 'is_active')
    search_fields = ('name', 'description', 'leader__username', 'event_name')
    inlines = [TeamMemberInline]


@admin.register(TeamRequest)
class TeamRequestAdmin(admin.ModelAdmin):
    list_display = ('user', 'team', 'status', 'created_at')
    list_filter = ('status',)
    search_fields = ('user__username', 'team__name')


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ('team', 'user', 'created_at')
    search_fields = ('content', 'team__name', 'user__username')
    date_hierarchy = 'created_at'
