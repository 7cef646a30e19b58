# users/models.py
from django.contrib.auth.models import AbstractUser
from django.db import models


def university_for_domain(domain: str) -> str:
    """
    Best-effort institution name from an email domain.

    vitstudent.ac.in -> "VIT University", iitb.ac.in -> "IITB".
    """
    if not domain:
        return ""
    if "vit" in domain:
        return "VIT University"
    return domain.split(".")[0].upper()


class User(AbstractUser):
    ROLE_STUDENT = "student"
    ROLE_INSTITUTION = "institution"
    ROLE_ADMIN = "admin"

    ROLE_CHOICES = (
        (ROLE_STUDENT, 'Student'),
        (ROLE_INSTITUTION, 'Institution'),
        (ROLE_ADMIN, 'Admin'),
    )

    role = models.CharField(
        max_length=30,
        choices=ROLE_CHOICES,
        default=ROLE_STUDENT
    )

    # Identity from the external login provider; linked on first login.
    google_id = models.CharField(max_length=255, unique=True, blank=True, null=True)
    email = models.EmailField(unique=True)

    name = models.CharField(max_length=255, blank=True, default="")
    avatar = models.CharField(max_length=1024, blank=True, null=True)
    university = models.CharField(max_length=255, blank=True, null=True, help_text="Derived from the email domain when empty")
    department = models.CharField(max_length=255, blank=True, null=True)
    age = models.PositiveIntegerField(blank=True, null=True)
    gender = models.CharField(max_length=30, blank=True, null=True)
    bio = models.TextField(blank=True, null=True)

    # Profile lists
    social_links = models.JSONField(default=dict, blank=True, help_text="e.g. {\"github\": \"...\", \"linkedin\": \"...\"}")
    achievements = models.JSONField(default=list, blank=True)
    skills = models.JSONField(default=list, blank=True, help_text="List of technical skills")
    interests = models.JSONField(default=list, blank=True)

    is_profile_complete = models.BooleanField(default=False, help_text="Has the user saved their profile at least once?")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.username

    @property
    def domain(self) -> str:
        """Email domain, used to scope events to an institution."""
        if not self.email or "@" not in self.email:
            return ""
        return self.email.rsplit("@", 1)[1].lower()

    @property
    def display_name(self) -> str:
        return self.name or self.get_full_name() or self.username

    @property
    def is_institution(self) -> bool:
        return self.role == self.ROLE_INSTITUTION

    def public_snapshot(self) -> dict:
        """Public identity shown next to requests and chat lines."""
        return {
            "id": self.id,
            "name": self.display_name,
            "avatar": self.avatar,
            "email": self.email,
        }

    def save(self, *args, **kwargs):
        if not self.university and self.domain:
            self.university = university_for_domain(self.domain)
        super().save(*args, **kwargs)
