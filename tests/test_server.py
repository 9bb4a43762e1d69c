import threading
from http.server import ThreadingHTTPServer
from urllib.parse import quote

import pytest
import requests

from embedgen.server import EmbedHandler
from embedgen.service import EmbedResponse

TARGET = "https://www.tiktok.com/@catlover/video/1"


class RecordingService:
    def __init__(self, response):
        self.response = response
        self.targets = []

    def handle(self, target):
        self.targets.append(target)
        return self.response


@pytest.fixture
def serve():
    servers = []

    def start(service):
        server = ThreadingHTTPServer(("127.0.0.1", 0), EmbedHandler.bind(service))
        threading.Thread(target=server.serve_forever, daemon=True).start()
        servers.append(server)
        return f"http://127.0.0.1:{server.server_address[1]}"

    yield start
    for server in servers:
        server.shutdown()
        server.server_close()


@pytest.mark.parametrize("path, expected", [
    ("/" + quote(TARGET, safe=""), TARGET),
    ("/" + TARGET, TARGET),
    ("/api/gen_embed.json?url=" + quote(TARGET, safe=""), TARGET),
    ("/embed?url=" + quote(TARGET, safe=""), TARGET),
    ("/api/gen_embed?url=" + quote(TARGET, safe=""), TARGET),
    ("/api/gen_embed.json", None),
    ("/favicon.ico", "favicon.ico"),
])
def test_target_from_path(path, expected):
    assert EmbedHandler.target_from_path(path) == expected


def test_json_response(serve):
    service = RecordingService(EmbedResponse(200, {"embeds": [{"type": "video"}]}))
    base = serve(service)

    response = requests.get(f"{base}/{quote(TARGET, safe='')}", timeout=5)

    assert response.status_code == 200
    assert response.headers["Content-Type"] == "application/json"
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert response.json() == {"embeds": [{"type": "video"}]}
    assert service.targets == [TARGET]


def test_error_response(serve):
    base = serve(RecordingService(EmbedResponse(400, {"error": "Invalid TikTok URL"})))

    response = requests.get(f"{base}/api/gen_embed.json?url=nope", timeout=5)

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid TikTok URL"}


def test_no_content_response(serve):
    base = serve(RecordingService(EmbedResponse(204)))

    response = requests.get(f"{base}/favicon.ico", timeout=5)

    assert response.status_code == 204
    assert response.content == b""


def test_options(serve):
    base = serve(RecordingService(EmbedResponse(204)))

    response = requests.options(f"{base}/anything", timeout=5)

    assert response.status_code == 200
    assert "GET" in response.headers["Access-Control-Allow-Methods"]
