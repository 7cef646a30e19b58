# events/models.py
from django.db import models
from django.db.models import Q
from django.conf import settings
import uuid


class EventQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)

    def visible_to(self, user):
        """
        Events without a domain are open to everyone; domain-scoped events
        are only shown to users whose email domain matches.
        """
        open_to_all = Q(domain__isnull=True) | Q(domain="")
        domain = getattr(user, "domain", "")
        if not domain:
            return self.filter(open_to_all)
        return self.filter(open_to_all | Q(domain__iexact=domain))


class Event(models.Model):
    """
    Institution-posted announcement (hackathon, competition, ...).

    Teams may optionally bind themselves to an event.
    """
    CATEGORY_HACKATHON = "hackathon"
    CATEGORY_COMPETITION = "competition"
    CATEGORY_RESEARCH = "research"
    CATEGORY_SYMPOSIUM = "symposium"

    CATEGORY_CHOICES = [
        (CATEGORY_HACKATHON, "Hackathon"),
        (CATEGORY_COMPETITION, "Competition"),
        (CATEGORY_RESEARCH, "Research"),
        (CATEGORY_SYMPOSIUM, "Symposium"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    category = models.CharField(max_length=32, choices=CATEGORY_CHOICES, blank=True, null=True)

    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    registration_deadline = models.DateTimeField(blank=True, null=True)

    organizer = models.CharField(max_length=255, blank=True, null=True, help_text="Display name of the organizing body")
    website = models.URLField(blank=True, null=True)

    # Institution scoping
    domain = models.CharField(
        max_length=255,
        blank=True,
        null=True,
        help_text="Only users with this email domain see the event (empty = everyone)",
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="posted_events",
        null=True,
        blank=True,
    )

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = EventQuerySet.as_manager()

    class Meta:
        ordering = ["-start_date"]
        indexes = [
            models.Index(fields=["is_active", "start_date"], name="event_active_start_idx"),
            models.Index(fields=["domain"], name="event_domain_idx"),
        ]

    def __str__(self):
        return self.name
