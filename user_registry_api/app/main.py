"""
Main entrypoint for the User Registry API.

This module assembles the FastAPI application, sets up logging and
includes the routers.  ``create_app`` builds and configures the app,
which is then instantiated at module import time as ``app`` so it can
be served directly, e.g.::

    uvicorn user_registry_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

import logging
from typing import Optional

from fastapi import FastAPI

from .api.router import router
from .core.config import settings
from .core.logging_config import setup_logging
from .services.user_service import InMemoryUserStore, UserStore, seed_users

logger = logging.getLogger(__name__)


def create_app(store: Optional[UserStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[UserStore]
        Store backing the user endpoints.  When omitted a fresh
        ``InMemoryUserStore`` is created, seeded with the fixture users
        unless ``settings.seed_users`` is false.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that the code below can
    # safely log messages.
    setup_logging(settings.log_level, settings.log_file or None, settings.debug)

    if store is None:
        store = InMemoryUserStore(seed_users() if settings.seed_users else None)
        logger.info("Initialised in-memory user store with %d users", len(store.list_users()))

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.user_store = store
    app.include_router(router)
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
