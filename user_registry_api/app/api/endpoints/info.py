"""
Greeting endpoint served at the root path.
"""

from typing import Dict

from fastapi import APIRouter

router = APIRouter()


@router.get("/")
async def root() -> Dict[str, str]:
    """Return the static greeting."""
    return {"message": "hello, world"}
