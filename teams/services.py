# teams/services.py
"""
Team and join-request operations.

Views stay thin and call into these services; every rule about who may
join, approve or clear requests lives here so the HTTP layer and tests
exercise the same code.
"""
from collections import OrderedDict
import logging

from django.core.exceptions import ObjectDoesNotExist
from django.db import IntegrityError, transaction
from rest_framework.exceptions import PermissionDenied, ValidationError

from core.exceptions import Conflict
from .models import Team, TeamMember, TeamRequest
from .state_machine import DECISIONS, transition

logger = logging.getLogger("teamsync.teams")


class TeamService:
    @staticmethod
    @transaction.atomic
    def create_team(leader, **data) -> Team:
        """
        Create a team and enrol its creator as the approved leader.

        Both rows are written in one transaction.
        """
        event = data.get("event")
        if event is not None and not data.get("event_name"):
            data["event_name"] = event.name

        team = Team.objects.create(leader=leader, **data)
        TeamMember.objects.create(
            team=team,
            user=leader,
            status=TeamMember.STATUS_APPROVED,
            role=TeamMember.ROLE_LEADER,
        )
        logger.info(f"Team created: team={team.id}, leader={leader.id}")
        return team

    @staticmethod
    def add_member(team: Team, user, role: str = TeamMember.ROLE_MEMBER) -> TeamMember:
        """
        Give ``user`` an approved membership.

        A leftover pending/rejected row for the pair is promoted instead of
        inserting a second one.
        """
        member, created = TeamMember.objects.get_or_create(
            team=team,
            user=user,
            defaults={"status": TeamMember.STATUS_APPROVED, "role": role},
        )
        if not created and member.status != TeamMember.STATUS_APPROVED:
            member.status = TeamMember.STATUS_APPROVED
            member.save(update_fields=["status"])
        return member

    @staticmethod
    def teams_for_user(user):
        """Teams where the user holds an approved membership."""
        return Team.objects.filter(
            members__user=user,
            members__status=TeamMember.STATUS_APPROVED,
        ).distinct()

    @staticmethod
    def recommended_teams(user):
        """Active teams the user has not joined yet."""
        joined = TeamMember.objects.filter(
            user=user, status=TeamMember.STATUS_APPROVED
        ).values_list("team_id", flat=True)
        return Team.objects.filter(is_active=True).exclude(id__in=joined)

    @staticmethod
    def teams_by_category(category: str):
        return Team.objects.filter(is_active=True, category=category)


class TeamRequestService:
    """
    Join-request lifecycle.

    Only the newest request per (team, user) counts. Older rows are pruned
    whenever a pair or a whole team inbox is read.
    """

    @staticmethod
    def _require_leader(team: Team, user, action: str):
        if not team.is_leader(user):
            logger.warning(
                f"Non-leader attempted to {action}: team={team.id}, actor={getattr(user, 'id', 'unknown')}"
            )
            raise PermissionDenied(f"Only the team leader can {action}.")

    @staticmethod
    def prune_pair(team: Team, user):
        """
        Delete every request of the pair except the newest one.

        Returns the surviving request, or None when the pair has none.
        Rows sharing a ``created_at`` are tie-broken on the random UUID pk,
        so which of them survives is arbitrary; exactly one always does.
        """
        requests = list(
            TeamRequest.objects.filter(team=team, user=user).order_by("-created_at", "-id")
        )
        if not requests:
            return None

        latest, stale = requests[0], requests[1:]
        if stale:
            TeamRequest.objects.filter(pk__in=[r.pk for r in stale]).delete()
            logger.info(f"Pruned {len(stale)} stale request(s): team={team.id}, user={user.id}")
        return latest

    @staticmethod
    def dedupe_team_requests(team: Team) -> list:
        """
        Keep only the newest request per user for the team.

        Returns the surviving requests, newest first. Timestamp ties are
        resolved the same way as in ``prune_pair``.
        """
        newest_by_user = OrderedDict()
        stale_ids = []
        rows = (
            TeamRequest.objects.filter(team=team)
            .select_related("user")
            .order_by("-created_at", "-id")
        )
        for row in rows:
            if row.user_id in newest_by_user:
                stale_ids.append(row.pk)
            else:
                newest_by_user[row.user_id] = row

        if stale_ids:
            TeamRequest.objects.filter(pk__in=stale_ids).delete()
            logger.info(f"Deduplicated team inbox: team={team.id}, removed={len(stale_ids)}")

        return list(newest_by_user.values())

    @staticmethod
    def submit_join_request(team: Team, user, message=None) -> TeamRequest:
        if team.has_member(user):
            raise Conflict("You are already a member of this team.")

        latest = TeamRequestService.prune_pair(team, user)
        if latest is not None:
            if latest.status == TeamRequest.STATUS_PENDING:
                raise Conflict("You have already requested to join this team.")
            if latest.status == TeamRequest.STATUS_APPROVED:
                raise Conflict("You are already a member of this team.")
            if latest.status == TeamRequest.STATUS_REJECTED:
                raise Conflict("Your request to join this team was previously rejected.")

        try:
            with transaction.atomic():
                team_request = TeamRequest.objects.create(
                    team=team,
                    user=user,
                    message=message,
                    status=TeamRequest.STATUS_PENDING,
                )
        except IntegrityError:
            # A concurrent submission won the pending slot for this pair.
            raise Conflict("You have already requested to join this team.")

        logger.info(f"Join request submitted: request={team_request.id}, team={team.id}, user={user.id}")
        return team_request

    @staticmethod
    def user_snapshot(team_request: TeamRequest):
        """Requester's public identity, or None if it cannot be loaded."""
        try:
            return team_request.user.public_snapshot()
        except ObjectDoesNotExist:
            logger.warning(f"Could not load requester for request={team_request.id}")
            return None

    @staticmethod
    def list_pending_requests(team: Team, requester) -> list:
        TeamRequestService._require_leader(team, requester, "view join requests")

        pending = [
            row for row in TeamRequestService.dedupe_team_requests(team)
            if row.status == TeamRequest.STATUS_PENDING
        ]
        for row in pending:
            row.user_snapshot = TeamRequestService.user_snapshot(row)
        return pending

    @staticmethod
    def pending_requests_for_leader(user) -> list:
        """Pending requests across every team the user leads."""
        pending = []
        for team in Team.objects.filter(leader=user):
            pending.extend(TeamRequestService.list_pending_requests(team, user))
        pending.sort(key=lambda row: row.created_at, reverse=True)
        return pending

    @staticmethod
    def decide_request(team_request: TeamRequest, decision: str, actor=None) -> TeamRequest:
        """
        Approve or reject a pending request.

        Approval also enrols the requester; the status change and the
        membership are committed together or not at all.
        """
        if decision not in DECISIONS:
            raise ValidationError({"status": f"Status must be one of: {', '.join(DECISIONS)}."})

        team = team_request.team
        if actor is not None:
            TeamRequestService._require_leader(team, actor, "decide join requests")

        with transaction.atomic():
            locked = TeamRequest.objects.select_for_update().select_related("team", "user").get(pk=team_request.pk)
            ok, reason = transition(locked, decision, actor=actor)
            if not ok:
                raise Conflict(reason)

            if decision == TeamRequest.STATUS_APPROVED:
                TeamService.add_member(locked.team, locked.user, role=TeamMember.ROLE_MEMBER)

        return locked

    @staticmethod
    def clear_all_requests(team: Team, requester) -> int:
        TeamRequestService._require_leader(team, requester, "clear join requests")

        cleared, _ = TeamRequest.objects.filter(team=team).delete()
        logger.info(f"Cleared team inbox: team={team.id}, removed={cleared}, actor={requester.id}")
        return cleared
