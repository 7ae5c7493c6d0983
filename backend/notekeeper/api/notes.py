from fastapi import APIRouter, Depends, Request, status

from notekeeper.errors import NotFound
from notekeeper.models.notes import NoteCreate, NoteOut, NoteUpdate
from notekeeper.services.note_service import NoteAggregateManager
from notekeeper.storage.notes_store import Note
from notekeeper.utils.jwt_auth import get_current_user

router = APIRouter(prefix="/note", tags=["notes"])


def get_note_manager(request: Request) -> NoteAggregateManager:
    return request.app.state.note_manager


def _owned(user_id: str, current_user: str) -> str:
    # other users' notes answer exactly like missing ones (no leak)
    if user_id != current_user:
        raise NotFound("Note not found")
    return user_id


def _out(note: Note) -> NoteOut:
    return NoteOut(**note.to_dict())


@router.post("", response_model=NoteOut, status_code=status.HTTP_201_CREATED)
def create_note(
    payload: NoteCreate,
    user_id: str = Depends(get_current_user),
    notes: NoteAggregateManager = Depends(get_note_manager),
) -> NoteOut:
    note = notes.create_note(
        user_id,
        title=payload.title,
        description=payload.description,
        category=payload.category,
        priority=payload.priority,
        reminders=tuple(payload.reminders),
    )
    return _out(note)


@router.get("/{user_id}", response_model=list[NoteOut])
def list_notes(
    user_id: str,
    current_user: str = Depends(get_current_user),
    notes: NoteAggregateManager = Depends(get_note_manager),
) -> list[NoteOut]:
    return [_out(n) for n in notes.get_all_notes(_owned(user_id, current_user))]


@router.get("/{user_id}/{note_id}", response_model=NoteOut)
def get_note(
    user_id: str,
    note_id: int,
    current_user: str = Depends(get_current_user),
    notes: NoteAggregateManager = Depends(get_note_manager),
) -> NoteOut:
    return _out(notes.get_note(_owned(user_id, current_user), note_id))


@router.put("/{user_id}/{note_id}", response_model=NoteOut)
def update_note(
    user_id: str,
    note_id: int,
    payload: NoteUpdate,
    current_user: str = Depends(get_current_user),
    notes: NoteAggregateManager = Depends(get_note_manager),
) -> NoteOut:
    patch = payload.model_dump(exclude_unset=True, exclude_none=True)
    return _out(notes.update_note(_owned(user_id, current_user), note_id, patch))


@router.delete("/{user_id}/{note_id}")
def delete_note(
    user_id: str,
    note_id: int,
    current_user: str = Depends(get_current_user),
    notes: NoteAggregateManager = Depends(get_note_manager),
) -> dict:
    return {"deleted": notes.delete_note(_owned(user_id, current_user), note_id)}


@router.delete("/{user_id}")
def delete_all_notes(
    user_id: str,
    current_user: str = Depends(get_current_user),
    notes: NoteAggregateManager = Depends(get_note_manager),
) -> dict:
    return {"deleted": notes.delete_all_notes(_owned(user_id, current_user))}
