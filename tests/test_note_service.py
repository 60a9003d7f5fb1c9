from concurrent.futures import ThreadPoolExecutor

import pytest

from app.core.exceptions import NoteLimitExceededError, NoteNotFoundError, ValidationError
from app.crud import note as note_crud
from app.models.note import TITLE_MAX_LENGTH, CONTENT_MAX_LENGTH
from app.schemas.note import NoteCreate, NoteUpdate
from app.services.entitlement import entitlement_service
from app.services.note import note_service


def _create(store, principal, title="Title", content="Body"):
    return note_service.create_note(store, NoteCreate(title=title, content=content), principal)


def _count(store, tenant_slug):
    with store.transaction() as db:
        return note_crud.count(db=db, tenant_id=tenant_slug)


def test_create_then_get_roundtrip(store, acme_member):
    created = _create(store, acme_member, title="  Standup  ", content="\n Agenda items \n")
    fetched = note_service.get_note(store, created.id, acme_member)

    assert fetched.id == created.id
    assert fetched.title == "Standup"
    assert fetched.content == "Agenda items"
    assert fetched.tenant_id == "acme"
    assert fetched.author_id == "user_member_acme"
    assert fetched.created_at == fetched.updated_at


def test_update_moves_updated_at_only(store, acme_member):
    created = _create(store, acme_member)

    updated = note_service.update_note(
        store, created.id, NoteUpdate(title="New title"), acme_member
    )

    assert updated.id == created.id
    assert updated.title == "New title"
    assert updated.content == "Body"
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at
    assert updated.tenant_id == "acme"


def test_repeated_updates_keep_advancing(store, acme_member):
    note = _create(store, acme_member)
    stamps = [note.updated_at]
    for i in range(5):
        note = note_service.update_note(store, note.id, NoteUpdate(content=f"rev {i}"), acme_member)
        stamps.append(note.updated_at)

    assert stamps == sorted(stamps)
    assert len(set(stamps)) == len(stamps)


def test_list_is_tenant_scoped_and_most_recent_first(store, acme_member, globex_member):
    first = _create(store, acme_member, title="first")
    second = _create(store, acme_member, title="second")
    note_service.update_note(store, first.id, NoteUpdate(content="edited"), acme_member)

    notes, usage = note_service.list_notes(store, acme_member.tenant_slug)

    assert [n.id for n in notes][:2] == [first.id, second.id]
    assert {n.tenant_id for n in notes} == {"acme"}
    assert usage.current == 3
    assert usage.can_create_more is False

    globex_notes, _ = note_service.list_notes(store, globex_member.tenant_slug)
    assert [n.id for n in globex_notes] == ["note_sample_globex_1"]


@pytest.mark.parametrize(
    "title,content,field,constraint",
    [
        ("", "Body", "title", "required"),
        ("   ", "Body", "title", "required"),
        ("Title", "", "content", "required"),
        ("Title", " \n\t ", "content", "required"),
        ("x" * (TITLE_MAX_LENGTH + 1), "Body", "title", "max_length"),
        ("Title", "y" * (CONTENT_MAX_LENGTH + 1), "content", "max_length"),
    ],
)
def test_create_validation(store, acme_member, title, content, field, constraint):
    with pytest.raises(ValidationError) as exc_info:
        _create(store, acme_member, title=title, content=content)

    assert exc_info.value.context["field"] == field
    assert exc_info.value.context["constraint"] == constraint
    assert _count(store, "acme") == 1


def test_length_bounds_apply_after_trim(store, acme_member):
    note = _create(store, acme_member, title="  " + "t" * TITLE_MAX_LENGTH + "  ")
    assert len(note.title) == TITLE_MAX_LENGTH


def test_invalid_update_leaves_note_untouched(store, acme_member):
    note = _create(store, acme_member)

    with pytest.raises(ValidationError):
        note_service.update_note(store, note.id, NoteUpdate(title="Fine", content="   "), acme_member)

    fetched = note_service.get_note(store, note.id, acme_member)
    assert fetched.title == "Title"
    assert fetched.updated_at == note.updated_at


def test_text_is_html_escaped(store, acme_member):
    note = _create(store, acme_member, title="<b>bold</b>", content="a & b \\ 'c'")
    assert note.title == "&lt;b&gt;bold&lt;/b&gt;"
    assert note.content == "a &amp; b &#x5C; &#x27;c&#x27;"


def test_cross_tenant_access_looks_like_missing(store, acme_member, globex_member, globex_admin):
    note = _create(store, acme_member, title="acme secret")

    for principal in (globex_member, globex_admin):
        with pytest.raises(NoteNotFoundError):
            note_service.get_note(store, note.id, principal)
        with pytest.raises(NoteNotFoundError):
            note_service.update_note(store, note.id, NoteUpdate(title="pwned"), principal)
        with pytest.raises(NoteNotFoundError):
            note_service.delete_note(store, note.id, principal)

    fetched = note_service.get_note(store, note.id, acme_member)
    assert fetched.title == "acme secret"


def test_delete_is_terminal(store, acme_member):
    note = _create(store, acme_member)
    note_service.delete_note(store, note.id, acme_member)

    with pytest.raises(NoteNotFoundError):
        note_service.get_note(store, note.id, acme_member)
    with pytest.raises(NoteNotFoundError):
        note_service.delete_note(store, note.id, acme_member)
    with pytest.raises(NoteNotFoundError):
        note_service.update_note(store, note.id, NoteUpdate(title="back"), acme_member)


def test_limit_enforced_on_create(store, acme_member):
    # acme starts with one sample note and a limit of 3
    _create(store, acme_member)
    _create(store, acme_member)

    with pytest.raises(NoteLimitExceededError) as exc_info:
        _create(store, acme_member)

    assert exc_info.value.context["usage"]["current"] == 3
    assert _count(store, "acme") == 3


def test_deleting_frees_capacity(store, acme_member):
    _create(store, acme_member)
    note = _create(store, acme_member)
    note_service.delete_note(store, note.id, acme_member)

    _create(store, acme_member)
    assert _count(store, "acme") == 3


def test_concurrent_creates_never_exceed_limit(store, acme_member):
    def attempt(i):
        try:
            _create(store, acme_member, title=f"race {i}")
            return True
        except NoteLimitExceededError:
            return False

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(attempt, range(20)))

    assert results.count(True) == 2
    assert _count(store, "acme") == 3


def test_concurrent_upgrade_and_creates(store, acme_member, acme_admin):
    def attempt(i):
        try:
            _create(store, acme_member, title=f"race {i}")
            return True
        except NoteLimitExceededError:
            return False

    with ThreadPoolExecutor(max_workers=8) as pool:
        futures = [pool.submit(attempt, i) for i in range(10)]
        upgrade = pool.submit(entitlement_service.upgrade, store, "acme", acme_admin)
        futures += [pool.submit(attempt, i) for i in range(10, 20)]
        results = [f.result() for f in futures]
        upgrade.result()

    # Creates after the upgrade always succeed; before it at most two fit
    assert _count(store, "acme") == 1 + results.count(True)
    assert _create(store, acme_member).tenant_id == "acme"


def test_pro_tenant_creates_past_free_limit(store, acme_member, acme_admin):
    entitlement_service.upgrade(store, "acme", acme_admin)

    for i in range(10):
        _create(store, acme_member, title=f"note {i}")

    notes, usage = note_service.list_notes(store, acme_member.tenant_slug)
    assert len(notes) == 11
    assert usage.can_create_more is True
    assert usage.limit == -1
