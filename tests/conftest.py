# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# This file contains shared fixtures for all tests.
#
# FIXTURES:
# ---------
#   reset_config_singleton → (autouse) fresh get_config() per test
#   app_config             → AppConfig whose input dir is tmp_path
#   write_input            → write a file into the input dir
#   people_rows            → small CSV-origin raw rows
#   fake_pocketbase        → FakePocketBase class (no network)
#   fake_response          → FakeResponse class
#   fake_session           → build a FakeSession from responses
#
# NOTES:
# ------
# - No test talks to a real PocketBase server.
# - Use tmp_path for temporary files.
# ==============================================

from typing import Any, Dict, List

import pytest

from pb_import.config import AppConfig, ImportConfig, PocketBaseConfig, reset_config
from pb_import.errors import AuthenticationError, BatchWriteError
from pb_import.storage.pocketbase_client import OperationResult


class FakePocketBase:
    """
    Stand-in for PocketBaseClient.

    Records every call. Batches listed in `fail_batches` (1-based)
    raise BatchWriteError; `statuses` overrides per-row statuses.
    """

    def __init__(self, fail_batches=(), statuses=None, auth_error: bool = False):
        self.fail_batches = set(fail_batches)
        self.statuses = statuses
        self.auth_error = auth_error
        self.calls: List[str] = []
        self.collections: List[tuple] = []
        self.batches: List[List[Dict[str, Any]]] = []

    def authenticate(self) -> None:
        self.calls.append("authenticate")
        if self.auth_error:
            raise AuthenticationError("Superuser login as 'admin@example.com' failed (400)")

    def create_collection(self, name, schema):
        self.calls.append("create_collection")
        self.collections.append((name, schema))
        return {"name": name}

    def send_batch(self, collection_name, rows):
        self.calls.append("send_batch")
        self.batches.append(list(rows))
        if len(self.batches) in self.fail_batches:
            raise BatchWriteError(f"batch {len(self.batches)} refused")
        if self.statuses is not None:
            return [OperationResult(status=status) for status in self.statuses[:len(rows)]]
        return [OperationResult(status=200) for _ in rows]

    def close(self) -> None:
        self.calls.append("close")


class FakeResponse:
    """Minimal requests.Response look-alike."""

    def __init__(self, status_code: int = 200, payload: Any = None, text: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.text = text
        self.reason = "OK" if status_code < 400 else "Bad Request"

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


class FakeSession:
    """Replays queued responses; an exception in the queue is raised instead."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.requests: List[Dict[str, Any]] = []
        self.headers: Dict[str, str] = {}
        self.closed = False

    def post(self, url, json=None, timeout=None):
        self.requests.append({"url": url, "json": json, "timeout": timeout})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def reset_config_singleton():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    return AppConfig(
        pocketbase=PocketBaseConfig(
            url="http://pb.test",
            admin_email="admin@example.com",
            admin_password="secret",
        ),
        importing=ImportConfig(input_dir=str(tmp_path)),
    )


@pytest.fixture
def write_input(tmp_path):
    def _write(name: str, content: str):
        path = tmp_path / name
        path.write_bytes(content.encode("utf-8"))
        return path
    return _write


@pytest.fixture
def people_rows() -> List[Dict[str, str]]:
    return [
        {"id": "1", "name": "Ann", "age": "30", "active": "true", "email": "ann@example.com"},
        {"id": "2", "name": "Bob", "age": "", "active": "0", "email": "bob@example.org"},
        {"id": "3", "name": "Cid", "age": "41.5", "active": "1", "email": ""},
    ]


@pytest.fixture
def fake_pocketbase():
    return FakePocketBase


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def fake_session():
    def _session(*responses) -> FakeSession:
        return FakeSession(responses)
    return _session
