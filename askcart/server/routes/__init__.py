"""
Route registration.
"""

from fastapi import FastAPI

from askcart.config import Settings
from askcart.server.routes.chat import websocket_chat
from askcart.server.routes.products import router as products_router


async def health() -> dict[str, str]:
    return {"status": "ok"}


def register_routes(app: FastAPI, settings: Settings) -> None:
    """Register all routes on the app."""
    app.add_api_route("/health", health, methods=["GET"])
    app.add_api_websocket_route(settings.ws_path, websocket_chat)
    app.include_router(products_router)
