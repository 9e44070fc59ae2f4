"""Burgerhub FastAPI application.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload

PROTEAN_ENV selects the configuration overlay of ``storefront/domain.toml``
(e.g. "production" switches the default database to PostgreSQL).
"""

from storefront.api.app import create_app
from storefront.domain import storefront

# Domain is initialized at module level so uvicorn workers share it.
storefront.init()

app = create_app()
