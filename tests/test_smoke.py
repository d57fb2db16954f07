import io
import logging

from fastapi.testclient import TestClient

from bookstore.api.app import create_app
from bookstore.bootstrap import build_container
from bookstore.core.config import load_config
from bookstore.core.logging import setup_logging

client = TestClient(create_app(build_container(load_config(environ={}))))

def test_health_ok():
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert "ok" in body and "checks" in body

def test_books_listed():
    r = client.get("/books")
    assert r.status_code == 200
    assert isinstance(r.json(), list) and len(r.json()) >= 1

def test_metrics_exposed():
    client.get("/books")
    r = client.get("/metrics")
    assert r.status_code == 200
    assert b'path="/books"' in r.content

def test_setup_logging_installs_single_handler():
    root = logging.getLogger()
    saved = (root.handlers[:], root.level)
    buf = io.StringIO()
    try:
        setup_logging("debug", stream=buf)
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        logging.getLogger("bookstore.smoke").debug("hello")
        assert "DEBUG bookstore.smoke - hello" in buf.getvalue()
        setup_logging("bogus", stream=buf)
        assert root.level == logging.INFO
    finally:
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])
