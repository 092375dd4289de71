"""Web server exposing the chat operation."""

import logging

from aiohttp import web

from travelbot.chat.service import ChatService
from travelbot.errors import ChatbotError

logger = logging.getLogger(__name__)


class WebServer:
    """HTTP server for chat requests."""

    def __init__(self, chat_service: ChatService, host: str = "0.0.0.0", port: int = 3000):
        """Initialize web server."""
        self.chat_service = chat_service
        self.host = host
        self.port = port
        self.app = web.Application()
        self._setup_routes()
        logger.info(f"Web server initialized on port {port}")

    def _setup_routes(self):
        """Set up HTTP routes."""
        self.app.router.add_get("/", self._handle_health)
        self.app.router.add_get("/health", self._handle_health)
        self.app.router.add_post("/api/chat", self._handle_chat)
        logger.info("Routes configured: /, /health, /api/chat")

    async def _handle_health(self, request: web.Request) -> web.Response:
        """Health check endpoint."""
        return web.json_response({"status": "healthy", "service": "travelbot"})

    async def _handle_chat(self, request: web.Request) -> web.Response:
        """
        Handle a chat turn.

        Expects JSON: {"message": "...", "lang": "vi" | "en"}
        """
        try:
            data = await request.json()
        except ValueError:
            # invalid JSON or a body that is not UTF-8
            return web.json_response({"error": "Request body must be JSON"}, status=400)

        if not isinstance(data, dict):
            return web.json_response({"error": "Request body must be a JSON object"}, status=400)

        message = data.get("message")
        lang = data.get("lang")
        if message is not None and not isinstance(message, str):
            return web.json_response({"error": "message must be a string"}, status=400)

        try:
            response = await self.chat_service.handle_chat(message, lang if isinstance(lang, str) else None)
        except ChatbotError as e:
            logger.error(f"Chat request failed ({e.status_code}): {e.message}")
            return web.json_response({"error": e.message}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error handling chat request: {e}", exc_info=True)
            return web.json_response({"error": "Internal server error"}, status=500)

        return web.json_response(response.model_dump(mode="json", exclude_none=True))

    async def start(self) -> web.AppRunner:
        """Start the web server."""
        runner = web.AppRunner(self.app)
        await runner.setup()
        site = web.TCPSite(runner, self.host, self.port)
        await site.start()
        logger.info(f"Web server started on {self.host}:{self.port}")
        logger.info(f"Chat endpoint: http://localhost:{self.port}/api/chat")
        return runner

    async def stop(self, runner: web.AppRunner):
        """Stop the web server."""
        await runner.cleanup()
        logger.info("Web server stopped")
