"""Auth API: register, login, and the current user."""

from fastapi import APIRouter

from listings.api.v1.dependencies import AuthServiceDep, CurrentUser
from listings.schemas.auth import LoginRequest, RegisterRequest
from listings.schemas.common import Envelope, success_response

router = APIRouter()


@router.post("/register", response_model=Envelope, status_code=201)
async def register(body: RegisterRequest, auth_service: AuthServiceDep):
    """Create an account and return the user with a bearer token."""
    result = await auth_service.register(body.email, body.password, body.name)
    return success_response({"user": result.user.to_dict(), "token": result.token})


@router.post("/login", response_model=Envelope)
async def login(body: LoginRequest, auth_service: AuthServiceDep):
    """Exchange email and password for a bearer token."""
    result = await auth_service.login(body.email, body.password)
    return success_response({"user": result.user.to_dict(), "token": result.token})


@router.get("/me", response_model=Envelope)
async def me(current_user: CurrentUser, auth_service: AuthServiceDep):
    user = await auth_service.me(current_user.id)
    return success_response({"user": user.to_dict()})
