"""
App assembly entry point.

Re-exports the FastAPI `app` from `codehub.api.main` so servers can be
pointed at `app:app`.
"""

from codehub.api.main import app  # noqa: F401
