"""
Bootstrap data for the volatile datastore.

Two free-plan tenants, one Admin and one Member each, and one sample note per
tenant. Everything is re-created on every process start.
"""
from datetime import datetime
from typing import Optional
from app.core.config import settings
from app.core.logging_config import logger
from app.crud import tenant as tenant_crud
from app.crud import user as user_crud
from app.database import Store
from app.models.note import Note
from app.models.user import UserRole

DEMO_PASSWORD = "password"

SEED_TENANTS = [
    {"slug": "acme", "name": "Acme Corporation"},
    {"slug": "globex", "name": "Globex Corporation"},
]

SEED_USERS = [
    {"id": "user_admin_acme", "email": "admin@acme.test", "role": UserRole.admin,
     "tenant_id": "acme", "name": "Sarah Johnson"},
    {"id": "user_member_acme", "email": "user@acme.test", "role": UserRole.member,
     "tenant_id": "acme", "name": "Mike Chen"},
    {"id": "user_admin_globex", "email": "admin@globex.test", "role": UserRole.admin,
     "tenant_id": "globex", "name": "Emma Davis"},
    {"id": "user_member_globex", "email": "user@globex.test", "role": UserRole.member,
     "tenant_id": "globex", "name": "Alex Kumar"},
]

SEED_NOTES = [
    {
        "id": "note_sample_acme_1",
        "title": "Welcome to Acme Notes",
        "content": "This is a sample note for Acme Corporation. Only Acme users can see this note.",
        "tenant_id": "acme",
        "author_id": "user_admin_acme",
        "timestamp": datetime(2025, 9, 1, 10, 0, 0),
    },
    {
        "id": "note_sample_globex_1",
        "title": "Welcome to Globex Notes",
        "content": "This is a sample note for Globex Corporation. Only Globex users can see this note.",
        "tenant_id": "globex",
        "author_id": "user_admin_globex",
        "timestamp": datetime(2025, 9, 1, 11, 0, 0),
    },
]


def seed_demo_data(
    store: Store,
    *,
    include_sample_notes: Optional[bool] = None,
    password_rounds: Optional[int] = None
) -> None:
    """
    Populate an empty store with the demo tenants, users and notes.

    Args:
        store: Freshly created datastore
        include_sample_notes: Defaults to settings.SEED_SAMPLE_NOTES
        password_rounds: bcrypt cost override, defaults to settings.BCRYPT_ROUNDS
    """
    if include_sample_notes is None:
        include_sample_notes = settings.SEED_SAMPLE_NOTES

    with store.transaction() as db:
        for tenant_data in SEED_TENANTS:
            tenant_crud.create(db, note_limit=settings.FREE_PLAN_NOTE_LIMIT, **tenant_data)

        for user_data in SEED_USERS:
            user_crud.create(db, password=DEMO_PASSWORD, password_rounds=password_rounds, **user_data)

        if include_sample_notes:
            for note_data in SEED_NOTES:
                data = dict(note_data)
                timestamp = data.pop("timestamp")
                db.add(Note(created_at=timestamp, updated_at=timestamp, **data))

    logger.info(
        f"Seeded demo data: tenants={len(SEED_TENANTS)}, users={len(SEED_USERS)}, "
        f"sample_notes={len(SEED_NOTES) if include_sample_notes else 0}"
    )
