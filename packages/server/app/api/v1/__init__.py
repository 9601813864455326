"""
API v1 Router
"""

from fastapi import APIRouter

from . import members, teams, whiteboards

router = APIRouter()

router.include_router(members.router, prefix="/members", tags=["Members"])
router.include_router(teams.router, prefix="/teams", tags=["Teams"])
router.include_router(whiteboards.router, prefix="/whiteboards", tags=["Whiteboards"])


@router.get("/", tags=["API"])
async def api_root():
    """API root — returns version and available endpoints."""
    return {
        "api": "v1",
        "version": "0.1.0",
        "endpoints": [
            "/members",
            "/teams",
            "/teams/{teamId}/members",
            "/teams/{teamId}/meetings",
            "/whiteboards",
        ],
    }
