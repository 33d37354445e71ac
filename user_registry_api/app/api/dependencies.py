"""
FastAPI dependencies shared by the endpoint modules.
"""

from fastapi import Request

from user_registry_api.app.services.user_service import UserStore


def get_user_store(request: Request) -> UserStore:
    """Return the store attached to the application by ``create_app``.

    Tests can replace it through ``app.dependency_overrides``.
    """
    return request.app.state.user_store
