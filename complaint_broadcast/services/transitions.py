# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Complaint status state machine.

Consulted by the CRUD layer before a status change is persisted; the
broadcaster itself never re-checks a committed transition.
"""

from typing import Dict, FrozenSet, List, Tuple

from complaint_broadcast.core.exceptions import InvalidTransition, Unauthorized
from complaint_broadcast.core.logging import get_logger
from complaint_broadcast.metrics import TRANSITIONS_REJECTED
from complaint_broadcast.models.domain import Role, Status

logger = get_logger(__name__)

INITIAL_STATUS = Status.REGISTERED

_ASSIGNERS = frozenset({Role.WARD_OFFICER, Role.ADMINISTRATOR})
_WORKERS = frozenset({Role.MAINTENANCE_TEAM, Role.ADMINISTRATOR})
_REOPENERS = frozenset({Role.CITIZEN, Role.WARD_OFFICER, Role.ADMINISTRATOR})

# (current, requested) → roles allowed to perform it
TRANSITION_ROLES: Dict[Tuple[Status, Status], FrozenSet[Role]] = {
    (Status.REGISTERED, Status.ASSIGNED): _ASSIGNERS,
    (Status.ASSIGNED, Status.IN_PROGRESS): _WORKERS,
    (Status.ASSIGNED, Status.RESOLVED): _WORKERS,
    (Status.IN_PROGRESS, Status.RESOLVED): _WORKERS,
    (Status.RESOLVED, Status.CLOSED): _ASSIGNERS,
    (Status.CLOSED, Status.REOPENED): _REOPENERS,
    (Status.REOPENED, Status.ASSIGNED): _ASSIGNERS,
    (Status.REOPENED, Status.IN_PROGRESS): _WORKERS,
}

ALLOWED_TRANSITIONS: Dict[Status, FrozenSet[Status]] = {
    status: frozenset(dst for (src, dst) in TRANSITION_ROLES if src == status)
    for status in Status
}


def validate_transition(current: Status, requested: Status, actor_role: Role) -> None:
    """Raise ``InvalidTransition`` or ``Unauthorized`` unless the move is legal."""
    current, requested, actor_role = Status(current), Status(requested), Role(actor_role)
    allowed_roles = TRANSITION_ROLES.get((current, requested))
    if allowed_roles is None:
        TRANSITIONS_REJECTED.labels(reason="invalid_transition").inc()
        logger.info("Rejected transition %s -> %s", current.value, requested.value)
        raise InvalidTransition(current.value, requested.value)
    if actor_role not in allowed_roles:
        TRANSITIONS_REJECTED.labels(reason="unauthorized").inc()
        logger.info(
            "Rejected transition %s -> %s for role %s",
            current.value, requested.value, actor_role.value,
        )
        raise Unauthorized(current.value, requested.value, actor_role.value)


def can_transition(current: Status, requested: Status, actor_role: Role) -> bool:
    try:
        validate_transition(current, requested, actor_role)
    except (InvalidTransition, Unauthorized):
        return False
    return True


def allowed_next_statuses(current: Status, actor_role: Role) -> List[Status]:
    """Statuses *actor_role* may move a complaint to from *current*, in enum order."""
    current, actor_role = Status(current), Role(actor_role)
    return [
        status for status in Status
        if actor_role in TRANSITION_ROLES.get((current, status), frozenset())
    ]
