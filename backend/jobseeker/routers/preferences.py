from fastapi import APIRouter, Depends

from jobseeker.dependencies import get_platform
from jobseeker.schemas.preferences import ThemeResponse
from jobseeker.services.platform import Platform

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("/theme", response_model=ThemeResponse)
async def get_theme(platform: Platform = Depends(get_platform)):
    theme = platform.theme.current()
    return ThemeResponse(theme=theme, is_dark=theme == "dark")


@router.post("/theme/toggle", response_model=ThemeResponse)
async def toggle_theme(platform: Platform = Depends(get_platform)):
    theme = platform.theme.toggle()
    return ThemeResponse(theme=theme, is_dark=theme == "dark")
