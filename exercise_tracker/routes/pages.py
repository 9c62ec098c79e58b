"""
Exercise Tracker — Landing Page Route
=======================================

What:  Serves views/index.html at GET /. Assets under public/ are mounted
       at /public by the app factory.
"""

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse

router = APIRouter(tags=["Pages"])


@router.get("/", include_in_schema=False)
async def index(request: Request) -> FileResponse:
    views_dir = request.app.state.settings.views_dir
    return FileResponse(views_dir / "index.html", media_type="text/html")
