"""Serves the push service worker script."""

from importlib import resources

from fastapi import APIRouter
from fastapi.responses import Response

router = APIRouter()


def load_service_worker() -> str:
    return resources.files("coach_ai").joinpath("static/sw.js").read_text(encoding="utf-8")


@router.get("/sw.js", include_in_schema=False)
async def service_worker():
    return Response(
        content=load_service_worker(),
        media_type="application/javascript",
        headers={"Cache-Control": "no-cache", "Service-Worker-Allowed": "/"},
    )
