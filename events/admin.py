from django.contrib import admin
from .models import Event


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ('name', 'category', 'domain', 'organizer', 'start_date', 'is_active')
    list_filter = ('category', 'is_active', 'domain', 'start_date')
    search_fields = ('name', 'description', 'organizer')
    date_hierarchy = 'start_date'
