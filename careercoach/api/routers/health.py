"""Health endpoint.

Routes
------
GET /health    → {"status": "ok", "version": "..."}
"""

from __future__ import annotations

from fastapi import APIRouter

from careercoach import __version__

router = APIRouter()


@router.get("")
def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}
