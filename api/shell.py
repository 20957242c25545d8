from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.deps import get_current_user, navigation_for, page_title
from config import settings
from schemas.user import CurrentUser

router = APIRouter(prefix="/api/shell", tags=["shell"])


@router.get("", response_model=dict)
async def get_shell(
    page: Optional[str] = Query(None, description="Page key, e.g. document.renewal"),
    user: CurrentUser = Depends(get_current_user),
):
    """Header title, signed-in user and the navigation the user may see."""
    return {
        "title": page_title(page) or settings.app_name,
        "appName": settings.app_name,
        "user": {
            "username": user.username,
            "role": user.role,
            "department": user.department,
        },
        "navigation": navigation_for(user),
    }
