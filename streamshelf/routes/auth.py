# streamshelf/routes/auth.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from streamshelf.deps import get_auth_service
from streamshelf.schemas import LoginIn, MeOut, RegisterIn, TokenOut, UserOut
from streamshelf.security import Identity, require_user
from streamshelf.services import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserOut, status_code=201, summary="Register")
def register(payload: RegisterIn, auth: AuthService = Depends(get_auth_service)) -> dict:
    email = str(payload.email) if payload.email is not None else None
    return auth.register(payload.name, email, payload.password)


# The frontend posts to /signup
router.add_api_route(
    "/signup",
    register,
    methods=["POST"],
    response_model=UserOut,
    status_code=201,
    summary="Register (alias)",
)


@router.post("/login", response_model=TokenOut, summary="Login")
def login(payload: LoginIn, auth: AuthService = Depends(get_auth_service)) -> dict:
    return auth.login(payload.email, payload.password)


@router.get("/me", response_model=MeOut, summary="Me")
def me(
    current: Identity = Depends(require_user),
    auth: AuthService = Depends(get_auth_service),
) -> dict:
    return auth.me(current)
