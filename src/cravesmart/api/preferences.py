"""Theme preference endpoints."""

from fastapi import APIRouter, Request

from cravesmart.api.auth import get_container
from cravesmart.api.schemas import ThemeRequest

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("/theme")
async def get_theme(request: Request) -> dict[str, str]:
    """Return the stored theme."""
    return {"theme": str(get_container(request).theme_service.get_theme())}


@router.put("/theme")
async def set_theme(body: ThemeRequest, request: Request) -> dict[str, str]:
    """Store a new theme."""
    theme = get_container(request).theme_service.set_theme(body.theme)
    return {"theme": str(theme)}


@router.post("/theme/toggle")
async def toggle_theme(request: Request) -> dict[str, str]:
    """Flip between dark and light."""
    return {"theme": str(get_container(request).theme_service.toggle())}
