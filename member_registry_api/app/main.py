"""
Application factory for the Member Registry.

``create_app`` sets up logging, builds the record store and the
template renderer, and includes the JSON API under ``/api`` and the
HTML site under ``/`` according to the feature toggles in
:class:`~member_registry_api.app.core.config.Settings`.  Run it with
uvicorn's factory mode, e.g.::

    uvicorn member_registry_api.app.main:create_app --factory

or use ``python run.py`` which also accepts command line flags.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from .api.responses import registry_error_handler
from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.errors import RegistryError
from .core.logging_config import setup_logging
from .core.store import MemberStore
from .site.pages import router as site_router
from .site.templates import TemplateRenderer


def create_app(settings: Optional[Settings] = None, store: Optional[MemberStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the environment‑derived
        module level settings.
    store : Optional[MemberStore]
        Record store to serve.  Defaults to a store on
        ``settings.database_path``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Create the database file and the members bucket before the
        # first request arrives.
        app.state.store.ensure_bucket()
        yield

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store or MemberStore(settings.database_path, settings.bucket)

    if settings.enable_api:
        app.include_router(v1_router, prefix="/api")
        app.add_exception_handler(RegistryError, registry_error_handler)

    if settings.enable_site:
        app.state.renderer = TemplateRenderer(settings.template_dir, title=settings.project_name)
        app.include_router(site_router)

    return app
