import logging

from fastapi import APIRouter, Depends, HTTPException

from api.deps import create_token, get_current_user, get_users_client
from clients import BackendError, UsersClient
from schemas.user import CurrentUser, LoginRequest
from services.mappers import map_user

router = APIRouter(prefix="/api/auth", tags=["auth"])

logger = logging.getLogger("docmgr.auth")

MSG_INVALID_CREDENTIALS = "Invalid credentials"


@router.post("/login", response_model=dict)
async def login(body: LoginRequest, users: UsersClient = Depends(get_users_client)):
    """
    Check credentials against the backend and issue a session token.
    Any 4xx from the backend is a failed login; other failures propagate.
    """
    try:
        raw = await users.login(body.username, body.password)
    except BackendError as e:
        if 400 <= e.status_code < 500:
            logger.info("login_rejected username=%s status=%s", body.username, e.status_code)
            raise HTTPException(status_code=401, detail=e.detail or MSG_INVALID_CREDENTIALS) from e
        raise
    if not raw:
        raise HTTPException(status_code=401, detail=MSG_INVALID_CREDENTIALS)
    user = CurrentUser(**map_user({"username": body.username, **raw}))
    logger.info("login_ok username=%s role=%s", user.username, user.role)
    return {"token": create_token(user), "user": user.model_dump(by_alias=True)}


@router.get("/me", response_model=dict)
async def me(user: CurrentUser = Depends(get_current_user)):
    return user.model_dump(by_alias=True)
