"""FastAPI web layer for Alpha Insight.

Re-exports the application factory so consumers can import directly:
    from Alpha_Insight.web import create_app
"""

from Alpha_Insight.web.app import create_app

__all__ = ["create_app"]
