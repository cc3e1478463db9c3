# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Recipient resolution.

Walks the stakeholders of a complaint in a fixed precedence order and keeps
the first occurrence of every email address, filtered by what each role's
template allows for the target status.
"""

from typing import Iterable, List, Optional, Set, Tuple

from complaint_broadcast.core.logging import get_logger
from complaint_broadcast.models.domain import (
    ComplaintSnapshot,
    Person,
    Recipient,
    Role,
    Status,
)
from complaint_broadcast.repositories.complaint_repository import ComplaintStore
from complaint_broadcast.services.templates import TemplateRegistry

logger = get_logger(__name__)


class RecipientResolver:
    """Determine who is notified of a status change, and in which role."""

    def __init__(self, registry: TemplateRegistry, store: ComplaintStore) -> None:
        self._registry = registry
        self._store = store

    def resolve(self, complaint: ComplaintSnapshot, status: Status) -> List[Recipient]:
        status = Status(status)
        recipients: List[Recipient] = []
        seen: Set[str] = set()

        for person, role in self._candidates(complaint):
            recipient = self._admit(person, role, status, seen)
            if recipient is not None:
                recipients.append(recipient)
                seen.add(recipient.email)

        logger.debug(
            "Resolved %d recipients for complaint %s status %s",
            len(recipients), complaint.id, status.value,
        )
        return recipients

    # ── Candidates in precedence order ──

    def _candidates(self, complaint: ComplaintSnapshot) -> Iterable[Tuple[Person, Role]]:
        if complaint.submitted_by is None:
            logger.warning(
                "Complaint %s has no submitter; skipping citizen notification",
                complaint.id, extra={"complaint_id": complaint.id},
            )
        else:
            yield complaint.submitted_by, Role.CITIZEN

        if complaint.ward_officer is not None:
            yield complaint.ward_officer, Role.WARD_OFFICER
        if complaint.maintenance_team is not None:
            yield complaint.maintenance_team, Role.MAINTENANCE_TEAM
        if complaint.assigned_to is not None:
            yield complaint.assigned_to, complaint.assigned_to.role

        if complaint.ward is not None:
            for member in complaint.ward.staff or []:
                if member.is_active:
                    yield member, member.role

        for admin in self._administrators():
            yield admin, Role.ADMINISTRATOR

    def _administrators(self) -> List[Person]:
        try:
            admins = self._store.list_active_administrators()
        except Exception as exc:
            logger.warning("Administrator lookup failed, continuing without admins: %s", exc)
            return []
        return [a for a in admins or [] if a.is_active]

    def _admit(self, person: Person, role: Role, status: Status,
               seen: Set[str]) -> Optional[Recipient]:
        if not person.email or person.email in seen:
            return None
        template = self._registry.template_for(role)
        if template is None or not template.allows(status):
            return None
        return Recipient(
            id=person.id,
            email=person.email,
            full_name=person.full_name,
            role=role,
            language=person.language or self._registry.default_locale,
            template=template,
        )
