"""FastAPI REST layer for the career-coach backend.

Start the server with::

    uvicorn careercoach.api.app:app --reload
"""

from careercoach.api.app import create_app

__all__ = ["create_app"]
