# tests/conftest.py
import os
import sys
import io
import json
from datetime import datetime, timedelta

import httpx
import pytest
from PIL import Image
from fastapi.testclient import TestClient

# ensure project root is importable
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from product_form.config import settings  # noqa: E402
from product_form.main import app  # noqa: E402
from product_form.services.notifications import Notifier  # noqa: E402
from product_form.services.submission import SubmissionClient  # noqa: E402
from product_form.controller import ProductFormController  # noqa: E402


@pytest.fixture(autouse=True)
def temp_data_dir(tmp_path, monkeypatch):
    """
    Every test gets its own products store under tmp_path.
    """
    data_dir = tmp_path / "data"
    monkeypatch.setattr(settings, "DATA_DIR", data_dir, raising=False)
    return data_dir


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_sample_jpeg_bytes():
    """
    Return a callable that generates JPEG bytes for tests that need an image.
    Usage: jpg = make_sample_jpeg_bytes(size=(200,200))
    """
    def _fn(size=(200, 200), color=(180, 120, 60)):
        bio = io.BytesIO()
        im = Image.new("RGB", size, color)
        im.save(bio, format="JPEG", quality=85)
        bio.seek(0)
        return bio.read()
    return _fn


@pytest.fixture
def sample_jpeg_file(tmp_path, make_sample_jpeg_bytes):
    path = tmp_path / "tee.jpg"
    path.write_bytes(make_sample_jpeg_bytes())
    return path


class RecordingHandler:
    """
    httpx.MockTransport handler that records every request and answers with
    `status_code`. Set `fail` to raise a connection error instead.
    """

    def __init__(self, status_code=201, body=None, fail=False):
        self.status_code = status_code
        self.body = {"ok": True} if body is None else body
        self.fail = fail
        self.requests = []

    @property
    def payloads(self):
        return [json.loads(r.content) for r in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(self.status_code, json=self.body)


@pytest.fixture
def recording_handler():
    """
    Usage: handler = recording_handler(status_code=500)
    """
    def _fn(**kwargs):
        return RecordingHandler(**kwargs)
    return _fn


@pytest.fixture
def make_controller():
    """
    Build a controller whose submission client talks to `handler` through
    httpx.MockTransport. Returns (controller, notifier).
    """
    def _fn(handler):
        sub = SubmissionClient(base_url="http://shop.test", transport=httpx.MockTransport(handler))
        notifier = Notifier()
        return ProductFormController(sub, notifier=notifier), notifier
    return _fn


@pytest.fixture
def valid_fields():
    return {
        "name": "Classic Tee",
        "description": "",
        "price": 499,
        "type": "TSHIRT",
        "color": "BLUE",
    }


class FakeClock:
    """Stand-in for datetime.utcnow that only moves when told to."""

    def __init__(self):
        self.now = datetime(2025, 6, 9, 14, 5, 37)

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def fake_clock():
    return FakeClock()
