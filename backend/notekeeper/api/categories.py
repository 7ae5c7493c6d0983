from fastapi import APIRouter, Depends, Path, Request, status

from notekeeper.models.common import KEY_PATTERN
from notekeeper.models.records import CategoryCreate, CategoryOut, CategoryUpdate
from notekeeper.services.records_service import CategoryService
from notekeeper.utils.jwt_auth import get_current_user

router = APIRouter(prefix="/category", tags=["categories"])


def get_category_service(request: Request) -> CategoryService:
    return request.app.state.category_service


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    user_id: str = Depends(get_current_user),
    categories: CategoryService = Depends(get_category_service),
):
    cat = categories.create(payload.id, payload.name, payload.description, created_by=user_id)
    return CategoryOut(**cat.to_dict())


@router.get("", response_model=list[CategoryOut])
def list_categories(
    user_id: str = Depends(get_current_user),
    categories: CategoryService = Depends(get_category_service),
):
    return [CategoryOut(**c.to_dict()) for c in categories.list_for_user(user_id)]


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(
    category_id: str = Path(pattern=KEY_PATTERN),
    user_id: str = Depends(get_current_user),
    categories: CategoryService = Depends(get_category_service),
):
    return CategoryOut(**categories.get(category_id, user_id).to_dict())


@router.put("/{category_id}", response_model=CategoryOut)
def update_category(
    payload: CategoryUpdate,
    category_id: str = Path(pattern=KEY_PATTERN),
    user_id: str = Depends(get_current_user),
    categories: CategoryService = Depends(get_category_service),
):
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    return CategoryOut(**categories.update(category_id, user_id, changes).to_dict())


@router.delete("/{category_id}")
def delete_category(
    category_id: str = Path(pattern=KEY_PATTERN),
    user_id: str = Depends(get_current_user),
    categories: CategoryService = Depends(get_category_service),
):
    return {"deleted": categories.delete(category_id, user_id)}
