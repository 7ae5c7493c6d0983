from fastapi import APIRouter, Depends, Path, Request, status

from notekeeper.models.common import KEY_PATTERN
from notekeeper.models.records import ReminderCreate, ReminderOut, ReminderUpdate
from notekeeper.services.records_service import ReminderService
from notekeeper.utils.jwt_auth import get_current_user

router = APIRouter(prefix="/reminder", tags=["reminders"])


def get_reminder_service(request: Request) -> ReminderService:
    return request.app.state.reminder_service


@router.post("", response_model=ReminderOut, status_code=status.HTTP_201_CREATED)
def create_reminder(
    payload: ReminderCreate,
    user_id: str = Depends(get_current_user),
    reminders: ReminderService = Depends(get_reminder_service),
):
    rem = reminders.create(payload.id, payload.name, payload.description, payload.type, created_by=user_id)
    return ReminderOut(**rem.to_dict())


@router.get("", response_model=list[ReminderOut])
def list_reminders(
    user_id: str = Depends(get_current_user),
    reminders: ReminderService = Depends(get_reminder_service),
):
    return [ReminderOut(**r.to_dict()) for r in reminders.list_for_user(user_id)]


@router.get("/{reminder_id}", response_model=ReminderOut)
def get_reminder(
    reminder_id: str = Path(pattern=KEY_PATTERN),
    user_id: str = Depends(get_current_user),
    reminders: ReminderService = Depends(get_reminder_service),
):
    return ReminderOut(**reminders.get(reminder_id, user_id).to_dict())


@router.put("/{reminder_id}", response_model=ReminderOut)
def update_reminder(
    payload: ReminderUpdate,
    reminder_id: str = Path(pattern=KEY_PATTERN),
    user_id: str = Depends(get_current_user),
    reminders: ReminderService = Depends(get_reminder_service),
):
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    return ReminderOut(**reminders.update(reminder_id, user_id, changes).to_dict())


@router.delete("/{reminder_id}")
def delete_reminder(
    reminder_id: str = Path(pattern=KEY_PATTERN),
    user_id: str = Depends(get_current_user),
    reminders: ReminderService = Depends(get_reminder_service),
):
    return {"deleted": reminders.delete(reminder_id, user_id)}
