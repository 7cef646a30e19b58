# teams/state_machine.py
"""
Join-request state machine.

pending → approved
       └→ rejected

Both outcomes are terminal: a decided request never moves again, and a
rejected user cannot open a fresh request for the same team.
"""
from typing import Tuple
import logging

from .models import TeamRequest

logger = logging.getLogger('teamsync.teams')


# Valid state transitions: from_status -> list of allowed to_statuses
VALID_TRANSITIONS = {
    TeamRequest.STATUS_PENDING: [TeamRequest.STATUS_APPROVED, TeamRequest.STATUS_REJECTED],
    TeamRequest.STATUS_APPROVED: [],
    TeamRequest.STATUS_REJECTED: [],
}

DECISIONS = (TeamRequest.STATUS_APPROVED, TeamRequest.STATUS_REJECTED)


def can_transition(team_request: TeamRequest, new_status: str) -> Tuple[bool, str]:
    """
    Check if a request can move to a new status.

    Returns (can_transition: bool, reason: str)
    """
    current_status = team_request.status

    if new_status not in dict(TeamRequest.STATUS_CHOICES):
        return False, f"Invalid status: {new_status}"

    allowed = VALID_TRANSITIONS.get(current_status, [])

    if new_status not in allowed:
        return False, f"Request already {current_status}"

    return True, ""


def transition(team_request: TeamRequest, new_status: str, actor=None, save: bool = True) -> Tuple[bool, str]:
    """
    Attempt to move a request to a new status.

    Returns (success: bool, message: str)
    """
    can, reason = can_transition(team_request, new_status)

    if not can:
        logger.warning(
            f"Invalid request transition attempted: request={team_request.id}, "
            f"from={team_request.status}, to={new_status}, actor={getattr(actor, 'id', 'unknown')}. "
            f"Reason: {reason}"
        )
        return False, reason

    old_status = team_request.status
    team_request.status = new_status

    if save:
        team_request.save(update_fields=['status'])

    logger.info(
        f"Request state transition: request={team_request.id}, team={team_request.team_id}, "
        f"from={old_status}, to={new_status}, actor={getattr(actor, 'id', 'unknown')}"
    )

    return True, f"Transitioned from '{old_status}' to '{new_status}'"


def is_terminal_status(status: str) -> bool:
    """A status with no outgoing transitions."""
    return status not in VALID_TRANSITIONS or len(VALID_TRANSITIONS[status]) == 0
