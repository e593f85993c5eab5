from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from users_api.core.errors import ErrorKind, UserError, UserNotFoundError
from users_api.core.utils import absolute_url
from users_api.domain.users import Sort
from users_api.schemas import MessageResponse, UserCreate, UserPage, UserRead, UserUpdate
from users_api.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["users"])

# Create/update/delete report every rejected request as 400, including an
# unknown id. UNAVAILABLE is left to the global handler.
MUTATION_STATUS = {
    ErrorKind.NOT_FOUND: status.HTTP_400_BAD_REQUEST,
    ErrorKind.VALIDATION_FAILURE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_400_BAD_REQUEST,
}


def get_user_service(request: Request) -> UserService:
    svc = getattr(getattr(request.app, "state", None), "user_service", None)
    if not svc:
        raise RuntimeError("UserService not configured")
    return svc


def _rejected(exc: UserError) -> JSONResponse:
    code = MUTATION_STATUS.get(exc.kind)
    if code is None:
        raise exc
    return JSONResponse(status_code=code, content=exc.to_response())


@router.get("", response_model=list[UserRead])
def list_users(sort: str | None = None, svc: UserService = Depends(get_user_service)):
    return svc.list_users(Sort.parse(sort))


@router.get("/page", response_model=UserPage)
def list_users_page(
    page: int = 0,
    size: int | None = None,
    sort: str | None = None,
    svc: UserService = Depends(get_user_service),
):
    result = svc.list_users_page(page, size, Sort.parse(sort))
    return UserPage(
        items=[UserRead.model_validate(user) for user in result.items],
        page=result.page,
        size=result.size,
        total=result.total,
        total_pages=result.total_pages,
    )


@router.get("/email/{email}", response_model=UserRead)
def get_user_by_email(email: str, svc: UserService = Depends(get_user_service)):
    user = svc.get_user_by_email(email)
    if user is None:
        raise UserNotFoundError(email=email)
    return user


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, svc: UserService = Depends(get_user_service)):
    user = svc.get_user(user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, response: Response, svc: UserService = Depends(get_user_service)):
    try:
        user = svc.create_user(email=payload.email, name=payload.name)
    except UserError as exc:
        return _rejected(exc)
    response.headers["Location"] = absolute_url(f"{router.prefix}/{user.id}")
    return user


@router.put("/{user_id}", response_model=UserRead)
def update_user(user_id: int, payload: UserUpdate, svc: UserService = Depends(get_user_service)):
    try:
        return svc.update_user(user_id, email=payload.email, name=payload.name)
    except UserError as exc:
        return _rejected(exc)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: int, svc: UserService = Depends(get_user_service)):
    try:
        svc.delete_user(user_id)
    except UserError as exc:
        return _rejected(exc)
    return MessageResponse(message="User deleted successfully")
