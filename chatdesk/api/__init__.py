"""FastAPI host application.

Serves the NiceGUI pages plus a small JSON surface.

Endpoints:
    - GET /health: Service health status
    - GET /stats: Global usage count
"""

from chatdesk.api.app import create_app

__all__ = ["create_app"]
