"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from pagescout.api import app

    uvicorn pagescout.api:app --reload
"""

from pagescout.api.app import app

__all__ = ["app"]
