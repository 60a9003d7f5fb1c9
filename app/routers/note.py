from fastapi import APIRouter, Depends, status
from app.core.tenant_context import get_tenant_slug
from app.database import Store, get_store
from app.dependencies import get_current_principal
from app.schemas.auth import Principal
from app.schemas.note import NoteCreate, NoteUpdate, NoteResponse, NoteListResponse
from app.services.note import note_service

router = APIRouter()


@router.get("", response_model=NoteListResponse)
def get_notes(
    store: Store = Depends(get_store),
    tenant_slug: str = Depends(get_tenant_slug)
):
    """
    Retrieve all notes for your tenant, most recently updated first.

    Args:
        store: Datastore
        tenant_slug: Tenant from the JWT

    Returns:
        Notes plus plan usage for the tenant
    """
    notes, usage = note_service.list_notes(store, tenant_slug)
    return NoteListResponse(
        notes=[NoteResponse.model_validate(n) for n in notes],
        count=len(notes),
        usage=usage
    )


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
def create_note(
    note_data: NoteCreate,
    store: Store = Depends(get_store),
    principal: Principal = Depends(get_current_principal)
):
    """
    Create a new note in your tenant.

    Raises:
        ValidationError 400: If title or content is empty or too long
        NoteLimitExceededError 403: If the tenant's plan limit is reached
    """
    return note_service.create_note(store, note_data, principal)


@router.get("/{note_id}", response_model=NoteResponse)
def get_note(
    note_id: str,
    store: Store = Depends(get_store),
    principal: Principal = Depends(get_current_principal)
):
    """
    Retrieve a specific note by ID.

    Raises:
        NoteNotFoundError 404: If note not found in your tenant
    """
    return note_service.get_note(store, note_id, principal)


@router.put("/{note_id}", response_model=NoteResponse)
def update_note(
    note_id: str,
    note_data: NoteUpdate,
    store: Store = Depends(get_store),
    principal: Principal = Depends(get_current_principal)
):
    """
    Update an existing note's title and/or content.

    Raises:
        ValidationError 400: If a supplied field is empty or too long
        NoteNotFoundError 404: If note not found in your tenant
    """
    return note_service.update_note(store, note_id, note_data, principal)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_note(
    note_id: str,
    store: Store = Depends(get_store),
    principal: Principal = Depends(get_current_principal)
):
    """
    Delete a note.

    Raises:
        NoteNotFoundError 404: If note not found in your tenant
    """
    note_service.delete_note(store, note_id, principal)
    return None
