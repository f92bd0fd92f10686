"""FastAPI application hosting the Webhook Chat UI.

Endpoints:
    - GET /health: Service health status
    - GET /previews/{token}: Image previews of queued uploads

The NiceGUI pages are mounted onto this app by ``webhook_chat.main``.
"""

from webhook_chat.api.app import create_app

__all__ = ["create_app"]
