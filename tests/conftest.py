# tests/conftest.py
import socket
import threading
import time

import pytest
import uvicorn
from fastapi.testclient import TestClient

from mock_api.main import app
from mock_api.database import load_samples
from storefront.client import CatalogClient


class _ThreadedServer(uvicorn.Server):
    def install_signal_handlers(self):
        # running off the main thread
        pass


@pytest.fixture(scope="session")
def live_server():
    """Serves the mock API over real HTTP in a background thread, yields its /api base URL."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]

    server = _ThreadedServer(uvicorn.Config(app, log_level="error"))
    t = threading.Thread(target=server.run, kwargs={"sockets": [sock]}, daemon=True)
    t.start()

    deadline = time.time() + 10
    while not server.started:
        if time.time() > deadline:
            raise RuntimeError("mock API did not start")
        time.sleep(0.05)

    yield f"http://127.0.0.1:{port}/api"

    server.should_exit = True
    t.join(timeout=5)
    sock.close()


@pytest.fixture
def api():
    """In-process handle on the mock API, used to seed data and inject faults."""
    load_samples()
    yield TestClient(app)
    load_samples()


@pytest.fixture
def catalog(live_server, api):
    c = CatalogClient(base_url=live_server, timeout=2)
    yield c
    c.close()
