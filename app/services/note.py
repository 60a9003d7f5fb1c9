from typing import List, Optional, Tuple
from app.core.authorization import authorize_tenant_access
from app.core.exceptions import AccessDeniedError, NoteNotFoundError, TenantNotFoundError, ValidationError
from app.core.logging_config import logger
from app.crud import note as note_crud
from app.crud import tenant as tenant_crud
from app.database import Store
from app.models.note import Note, TITLE_MAX_LENGTH, CONTENT_MAX_LENGTH
from app.schemas.auth import Principal
from app.schemas.note import NoteCreate, NoteUpdate, Usage
from app.services.entitlement import entitlement_service
from app.utils.sanitize import sanitize_text


def validate_field(field: str, value: str, max_length: int) -> str:
    """
    Trim a text field and check it is non-empty and within bounds.

    Returns:
        The trimmed value

    Raises:
        ValidationError: Naming the field and the violated constraint
    """
    trimmed = value.strip()
    if not trimmed:
        raise ValidationError(
            f"{field.capitalize()} is required",
            field=field,
            constraint="required",
        )
    if len(trimmed) > max_length:
        raise ValidationError(
            f"{field.capitalize()} must be at most {max_length} characters",
            field=field,
            constraint="max_length",
            max_length=max_length,
        )
    return trimmed


class NoteService:
    """
    Service layer for note business logic.

    Each public method is one store transaction. Every access to an existing
    note passes through ``authorize_tenant_access``; a note in another tenant
    is reported exactly like a missing one.
    """

    def __init__(self):
        self.crud = note_crud
        self.entitlements = entitlement_service

    def _authorized_note(self, db, note_id: str, principal: Principal) -> Note:
        note = self.crud.get(db=db, id=note_id)
        if note is None:
            raise NoteNotFoundError()

        try:
            authorize_tenant_access(principal, note.tenant_id)
        except AccessDeniedError:
            logger.warning(
                f"Cross-tenant note access blocked: note_id={note_id}, "
                f"user_id={principal.user_id}, tenant={principal.tenant_slug}"
            )
            raise NoteNotFoundError() from None

        return note

    def list_notes(self, store: Store, tenant_slug: str) -> Tuple[List[Note], Usage]:
        """
        Get a tenant's notes together with plan usage.

        Args:
            store: Datastore
            tenant_slug: Tenant taken from the verified token

        Returns:
            Notes ordered by updated_at descending, and the usage summary
        """
        with store.transaction() as db:
            tenant = tenant_crud.get_active(db, tenant_slug)
            if tenant is None:
                raise TenantNotFoundError()

            notes = self.crud.get_multi(db=db, tenant_id=tenant.slug)
            usage = self.entitlements.usage(tenant, len(notes))

        return notes, usage

    def get_note(self, store: Store, note_id: str, principal: Principal) -> Note:
        """
        Raises:
            NoteNotFoundError: If note is missing or belongs to another tenant
        """
        with store.transaction() as db:
            return self._authorized_note(db, note_id, principal)

    def create_note(self, store: Store, note_data: NoteCreate, principal: Principal) -> Note:
        """
        Create a note in the principal's tenant if the plan allows it.

        Validation runs before anything is read. The limit check and the
        insert share one transaction, so concurrent creates cannot overshoot
        the plan limit.

        Raises:
            ValidationError: Empty or oversized title/content
            NoteLimitExceededError: Tenant is at its plan limit
        """
        title = validate_field("title", note_data.title, TITLE_MAX_LENGTH)
        content = validate_field("content", note_data.content, CONTENT_MAX_LENGTH)

        with store.transaction() as db:
            tenant = tenant_crud.get_active(db, principal.tenant_slug)
            if tenant is None:
                raise TenantNotFoundError()

            current_count = self.crud.count(db=db, tenant_id=tenant.slug)
            self.entitlements.ensure_can_create(tenant, current_count)

            note = self.crud.create(
                db=db,
                tenant_id=tenant.slug,
                author_id=principal.user_id,
                title=sanitize_text(title),
                content=sanitize_text(content),
            )

        logger.info(f"Note created: id={note.id}, tenant={note.tenant_id}, author={note.author_id}")
        return note

    def update_note(
        self,
        store: Store,
        note_id: str,
        note_data: NoteUpdate,
        principal: Principal
    ) -> Note:
        """
        Update a note's title and/or content.

        Raises:
            ValidationError: Supplied title/content empty or oversized
            NoteNotFoundError: If note is missing or belongs to another tenant
        """
        title: Optional[str] = None
        content: Optional[str] = None
        if note_data.title is not None:
            title = sanitize_text(validate_field("title", note_data.title, TITLE_MAX_LENGTH))
        if note_data.content is not None:
            content = sanitize_text(validate_field("content", note_data.content, CONTENT_MAX_LENGTH))

        with store.transaction() as db:
            note = self._authorized_note(db, note_id, principal)
            note = self.crud.update(db=db, db_obj=note, title=title, content=content)

        logger.info(f"Note updated: id={note.id}, tenant={note.tenant_id}")
        return note

    def delete_note(self, store: Store, note_id: str, principal: Principal) -> None:
        """
        Raises:
            NoteNotFoundError: If note is missing, already deleted or in another tenant
        """
        with store.transaction() as db:
            note = self._authorized_note(db, note_id, principal)
            self.crud.delete(db=db, db_obj=note)

        logger.info(f"Note deleted: id={note_id}, tenant={principal.tenant_slug}")


# Create a singleton instance
note_service = NoteService()
