# teams/models.py
"""
Team formation: teams, their members, join requests and chat messages.

A team owns its members, requests and messages; deleting the team
cascades to all three. Users are only referenced.
"""
from django.db import models
from django.db.models import Q
from django.conf import settings
import uuid


class Team(models.Model):
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
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, null=True)
    leader = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="led_teams",
    )
    max_members = models.PositiveIntegerField(default=4, help_text="Maximum team members, leader included")
    required_skills = models.JSONField(default=list, blank=True, help_text="Skills the team is looking for")
    category = models.CharField(max_length=32, choices=CATEGORY_CHOICES, blank=True, null=True)

    # Optional binding to a posted event; event_name covers events not on the board.
    event = models.ForeignKey(
        "events.Event",
        on_delete=models.SET_NULL,
        related_name="teams",
        null=True,
        blank=True,
    )
    event_name = models.CharField(max_length=255, blank=True, null=True)
    deadline = models.DateTimeField(blank=True, null=True)

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["is_active", "category"], name="team_active_category_idx"),
        ]

    def __str__(self):
        return self.name

    @property
    def current_size(self):
        return self.members.filter(status=TeamMember.STATUS_APPROVED).count()

    @property
    def is_full(self):
        return self.current_size >= self.max_members

    def is_leader(self, user) -> bool:
        return user is not None and self.leader_id == getattr(user, "pk", None)

    def has_member(self, user) -> bool:
        """True if the user holds an approved membership."""
        if user is None or not getattr(user, "is_authenticated", False):
            return False
        return self.members.filter(user=user, status=TeamMember.STATUS_APPROVED).exists()


class TeamMember(models.Model):
    STATUS_PENDING = "pending"
    STATUS_APPROVED = "approved"
    STATUS_REJECTED = "rejected"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_APPROVED, "Approved"),
        (STATUS_REJECTED, "Rejected"),
    ]

    ROLE_LEADER = "leader"
    ROLE_MEMBER = "member"

    ROLE_CHOICES = [
        (ROLE_LEADER, "Team Leader"),
        (ROLE_MEMBER, "Member"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    team = models.ForeignKey(Team, on_delete=models.CASCADE, related_name="members")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="team_memberships",
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_MEMBER)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["joined_at"]
        constraints = [
            models.UniqueConstraint(fields=["team", "user"], name="unique_membership_per_team_user"),
        ]

    def __str__(self):
        return f"{self.user} in {self.team} ({self.status})"


class TeamRequest(models.Model):
    """
    A user's ask to join a team.

    Only the newest row per (team, user) is authoritative; older rows are
    pruned by the request service. At most one pending row may exist per
    pair at any time.
    """
    STATUS_PENDING = "pending"
    STATUS_APPROVED = "approved"
    STATUS_REJECTED = "rejected"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_APPROVED, "Approved"),
        (STATUS_REJECTED, "Rejected"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    team = models.ForeignKey(Team, on_delete=models.CASCADE, related_name="requests")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="team_requests",
    )
    message = models.TextField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["team", "user"],
                condition=Q(status="pending"),
                name="unique_pending_request_per_team_user",
            ),
        ]
        indexes = [
            models.Index(fields=["team", "user", "created_at"], name="teamrequest_pair_created_idx"),
        ]

    def __str__(self):
        return f"{self.user} -> {self.team} ({self.status})"


class Message(models.Model):
    """Immutable chat line. Ordered by creation time."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    team = models.ForeignKey(Team, on_delete=models.CASCADE, related_name="messages")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="chat_messages",
    )
    content = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["team", "created_at"], name="message_team_created_idx"),
        ]

    def __str__(self):
        return f"{self.user} @ {self.team}: {self.content[:40]}"
