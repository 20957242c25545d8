import logging

from fastapi import APIRouter, Depends, HTTPException

from api.deps import KNOWN_MODULES, KNOWN_PAGES, get_current_user, get_users_client, require_admin
from clients import UsersClient
from schemas.user import CurrentUser, UserCreate, UserUpdate
from services.mappers import map_user

router = APIRouter(prefix="/api/settings", tags=["settings"])

logger = logging.getLogger("docmgr.settings")


def _check_access_lists(system_access, page_access) -> None:
    unknown = [m for m in system_access or [] if m not in KNOWN_MODULES]
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown modules: {', '.join(unknown)}")
    unknown = [p for p in page_access or [] if p not in KNOWN_PAGES and p not in KNOWN_MODULES]
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown pages: {', '.join(unknown)}")


@router.get("/profile", response_model=dict)
async def profile(user: CurrentUser = Depends(get_current_user)):
    return user.model_dump(by_alias=True)


@router.get("/users", response_model=list[dict])
async def list_users(_: CurrentUser = Depends(require_admin), users: UsersClient = Depends(get_users_client)):
    return [map_user(u) for u in await users.list_users()]


@router.post("/users", response_model=dict, status_code=201)
async def create_user(
    body: UserCreate,
    _: CurrentUser = Depends(require_admin),
    users: UsersClient = Depends(get_users_client),
):
    _check_access_lists(body.system_access, body.page_access)
    created = await users.create_user(body.model_dump())
    logger.info("user_created username=%s role=%s", body.username, body.role)
    return map_user(created or body.model_dump(exclude={"password"}))


@router.put("/users/{user_id}", response_model=dict)
async def update_user(
    user_id: str,
    body: UserUpdate,
    _: CurrentUser = Depends(require_admin),
    users: UsersClient = Depends(get_users_client),
):
    _check_access_lists(body.system_access, body.page_access)
    updated = await users.update_user(user_id, body.model_dump(exclude_none=True))
    return map_user(updated or {"id": user_id, "username": user_id})


@router.delete("/users/{user_id}", status_code=204)
async def delete_user(
    user_id: str,
    admin: CurrentUser = Depends(require_admin),
    users: UsersClient = Depends(get_users_client),
):
    if user_id in (admin.id, admin.username):
        raise HTTPException(status_code=400, detail="You cannot delete your own account")
    await users.delete_user(user_id)
    logger.info("user_deleted id=%s", user_id)
