from rest_framework.permissions import BasePermission

from .models import Team


class IsTeamMember(BasePermission):
    """
    Object-level check for team-scoped reads (chat history).
    The caller must hold an approved membership.
    """
    message = "Not a team member."

    def has_object_permission(self, request, view, obj):
        team = obj if isinstance(obj, Team) else getattr(obj, "team", None)
        if team is None:
            return False
        return team.has_member(request.user)
