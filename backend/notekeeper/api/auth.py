from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from notekeeper.models.auth import LoginRequest, RegisterRequest, RegisterResponse, TokenResponse
from notekeeper.services.auth_service import AuthenticationService

router = APIRouter(prefix="/auth", tags=["auth"])


def get_auth_service(request: Request) -> AuthenticationService:
    return request.app.state.auth_service


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(req: RegisterRequest, auth: AuthenticationService = Depends(get_auth_service)):
    rec = auth.register(req.user_id, req.password, req.role)
    return RegisterResponse(user_id=rec.user_id, role=rec.role)


@router.post("/login", response_model=TokenResponse)
def login(req: LoginRequest, auth: AuthenticationService = Depends(get_auth_service)):
    token = auth.login(req.user_id, req.password)
    return TokenResponse(access_token=token)
