from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
import logging
import urllib.parse

from .config import load_settings
from .logging_utils import configure_logging
from .service import EmbedService
from .validator import decode_target

logger = logging.getLogger(__name__)

QUERY_ROUTES = ("/api/gen_embed.json", "/api/gen_embed", "/embed")


class EmbedHandler(BaseHTTPRequestHandler):
    """
    GET /<url-encoded TikTok URL>
    GET /api/gen_embed.json?url=<TikTok URL>
    """

    service = None

    @classmethod
    def bind(cls, service):
        return type("BoundEmbedHandler", (cls,), {"service": service})

    @classmethod
    def get_service(cls):
        # Serverless entrypoints construct the service on first use
        if cls.service is None:
            settings = load_settings()
            configure_logging(settings)
            cls.service = EmbedService(settings)
        return cls.service

    def set_headers(self, status_code=200, content_length=None):
        self.send_response(status_code)
        self.send_header('Access-Control-Allow-Origin', '*')
        self.send_header('Access-Control-Allow-Methods', 'GET, OPTIONS')
        self.send_header('Access-Control-Allow-Headers', 'Content-Type')
        if status_code != 204:
            self.send_header('Content-type', 'application/json')
        if content_length is not None:
            self.send_header('Content-Length', str(content_length))
        self.end_headers()

    def do_OPTIONS(self):
        self.set_headers(200, 0)

    def do_GET(self):
        target = self.target_from_path(self.path)
        response = self.get_service().handle(target)

        body = response.to_bytes()
        self.set_headers(response.status, len(body))
        if body:
            self.wfile.write(body)

    @staticmethod
    def target_from_path(path):
        parsed = urllib.parse.urlparse(path)
        if parsed.path in QUERY_ROUTES:
            query_params = urllib.parse.parse_qs(parsed.query)
            return query_params.get('url', [None])[0]
        return decode_target(path)

    def log_message(self, format, *args):
        logger.info("%s - %s", self.address_string(), format % args)


def serve(settings):
    service = EmbedService(settings)
    server = ThreadingHTTPServer((settings.host, settings.port), EmbedHandler.bind(service))
    logger.info("Server running on port %s (strategy=%s, layout=%s)",
                settings.port, settings.strategy, settings.layout)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.server_close()
