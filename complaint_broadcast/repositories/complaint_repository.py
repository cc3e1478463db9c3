# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Read-only data access for complaint snapshots and administrators.

Two implementations of the same ``ComplaintStore`` contract: a SQL one over
the complaint tables, and an in-memory one for tests and local runs.
"""

from typing import Any, Dict, List, Mapping, Optional, Protocol

from sqlalchemy import bindparam, text
from sqlalchemy.engine import Engine

from complaint_broadcast.core.logging import get_logger
from complaint_broadcast.models.domain import (
    ComplaintSnapshot,
    Person,
    Role,
    StatusLog,
    SubZone,
    Ward,
)

logger = get_logger(__name__)

RECENT_STATUS_LOGS = 5
WARD_STAFF_ROLES = (Role.WARD_OFFICER.value, Role.ADMINISTRATOR.value)

USER_COLS = "id, email, full_name, role, language, phone_number, is_active"


class ComplaintStore(Protocol):
    def fetch_complaint_with_relations(self, complaint_id: str) -> Optional[ComplaintSnapshot]:
        ...

    def list_active_administrators(self) -> List[Person]:
        ...


def _row_to_person(row: Mapping[str, Any], prefix: str = "") -> Optional[Person]:
    person_id = row.get(f"{prefix}id")
    if person_id is None:
        return None
    return Person(
        id=str(person_id),
        email=row.get(f"{prefix}email"),
        full_name=row.get(f"{prefix}full_name") or "",
        role=row.get(f"{prefix}role"),
        language=row.get(f"{prefix}language") or "en",
        phone_number=row.get(f"{prefix}phone_number"),
        is_active=bool(row.get(f"{prefix}is_active", True)),
    )


class SqlComplaintStore:
    def __init__(self, engine: Engine):
        self._engine = engine

    # ── Read ──────────────────────────────────────────────────────────

    def fetch_complaint_with_relations(self, complaint_id: str) -> Optional[ComplaintSnapshot]:
        with self._engine.connect() as conn:
            row = conn.execute(
                text("""
                    SELECT c.id, c.complaint_id, c.type, c.description, c.status, c.priority,
                           c.area, c.landmark, c.address,
                           c.contact_name, c.contact_email, c.contact_phone,
                           c.submitted_by_id, c.ward_officer_id, c.maintenance_team_id,
                           c.assigned_to_id, c.ward_id, c.sub_zone_id,
                           c.submitted_on, c.deadline, c.resolved_on,
                           w.name AS ward_name, sz.name AS sub_zone_name
                    FROM complaints c
                    LEFT JOIN wards w ON w.id = c.ward_id
                    LEFT JOIN sub_zones sz ON sz.id = c.sub_zone_id
                    WHERE c.id = :id
                """),
                {"id": complaint_id},
            ).mappings().first()
            if not row:
                return None

            person_ids = [
                row[key] for key in (
                    "submitted_by_id", "ward_officer_id",
                    "maintenance_team_id", "assigned_to_id",
                ) if row[key] is not None
            ]
            people: Dict[str, Person] = {}
            if person_ids:
                user_rows = conn.execute(
                    text(f"SELECT {USER_COLS} FROM users WHERE id IN :ids")
                    .bindparams(bindparam("ids", expanding=True)),
                    {"ids": person_ids},
                ).mappings().all()
                for user_row in user_rows:
                    person = _row_to_person(user_row)
                    people[person.id] = person

            ward = None
            if row["ward_id"] is not None:
                staff_rows = conn.execute(
                    text(f"""
                        SELECT {USER_COLS} FROM users
                        WHERE ward_id = :ward_id AND is_active = TRUE AND role IN :roles
                        ORDER BY id
                    """).bindparams(bindparam("roles", expanding=True)),
                    {"ward_id": row["ward_id"], "roles": list(WARD_STAFF_ROLES)},
                ).mappings().all()
                ward = Ward(
                    id=str(row["ward_id"]),
                    name=row["ward_name"] or "",
                    staff=[_row_to_person(r) for r in staff_rows],
                )

            log_rows = conn.execute(
                text("""
                    SELECT l.id, l.from_status, l.to_status, l.comment, l.timestamp,
                           u.id AS user_id, u.email AS user_email, u.full_name AS user_full_name,
                           u.role AS user_role, u.language AS user_language,
                           u.phone_number AS user_phone_number, u.is_active AS user_is_active
                    FROM status_logs l
                    LEFT JOIN users u ON u.id = l.user_id
                    WHERE l.complaint_id = :id
                    ORDER BY l.timestamp DESC
                    LIMIT :limit
                """),
                {"id": complaint_id, "limit": RECENT_STATUS_LOGS},
            ).mappings().all()

        def _person(key: str) -> Optional[Person]:
            ref = row[key]
            return people.get(str(ref)) if ref is not None else None

        return ComplaintSnapshot(
            id=str(row["id"]),
            complaint_id=row["complaint_id"],
            type=row["type"],
            description=row["description"],
            status=row["status"],
            priority=row["priority"] or "MEDIUM",
            area=row["area"],
            landmark=row["landmark"],
            address=row["address"],
            contact_name=row["contact_name"],
            contact_email=row["contact_email"],
            contact_phone=row["contact_phone"],
            submitted_by=_person("submitted_by_id"),
            ward_officer=_person("ward_officer_id"),
            maintenance_team=_person("maintenance_team_id"),
            assigned_to=_person("assigned_to_id"),
            ward=ward,
            sub_zone=(
                SubZone(id=str(row["sub_zone_id"]), name=row["sub_zone_name"] or "")
                if row["sub_zone_id"] is not None else None
            ),
            submitted_on=row["submitted_on"],
            deadline=row["deadline"],
            resolved_on=row["resolved_on"],
            status_logs=[
                StatusLog(
                    id=str(r["id"]),
                    from_status=r["from_status"],
                    to_status=r["to_status"],
                    comment=r["comment"],
                    timestamp=r["timestamp"],
                    user=_row_to_person(r, prefix="user_"),
                )
                for r in log_rows
            ],
        )

    def list_active_administrators(self) -> List[Person]:
        with self._engine.connect() as conn:
            rows = conn.execute(
                text(f"""
                    SELECT {USER_COLS} FROM users
                    WHERE role = :role AND is_active = TRUE
                    ORDER BY id
                """),
                {"role": Role.ADMINISTRATOR.value},
            ).mappings().all()
        return [_row_to_person(r) for r in rows]

    def verify_connection(self) -> int:
        with self._engine.connect() as conn:
            return conn.execute(text("SELECT COUNT(*) FROM complaints")).scalar() or 0

    def dispose(self):
        self._engine.dispose()


class InMemoryComplaintStore:
    """Dictionary-backed store, keyed by internal complaint id."""

    def __init__(self) -> None:
        self._complaints: Dict[str, ComplaintSnapshot] = {}
        self._users: Dict[str, Person] = {}

    # ── Read ──

    def fetch_complaint_with_relations(self, complaint_id: str) -> Optional[ComplaintSnapshot]:
        complaint = self._complaints.get(complaint_id)
        return complaint.model_copy(deep=True) if complaint else None

    def list_active_administrators(self) -> List[Person]:
        return [
            u for u in sorted(self._users.values(), key=lambda p: p.id)
            if u.role == Role.ADMINISTRATOR and u.is_active
        ]

    def verify_connection(self) -> int:
        return len(self._complaints)

    # ── Write ──

    def save_complaint(self, complaint: ComplaintSnapshot) -> None:
        self._complaints[complaint.id] = complaint

    def save_user(self, person: Person) -> None:
        self._users[person.id] = person

    def clear(self) -> None:
        self._complaints.clear()
        self._users.clear()
