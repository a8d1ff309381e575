"""Shared test fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import Mock

import pytest
import requests


def _make_response(payload: Any, status: int = 200) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp._content = json.dumps(payload).encode()
    resp.url = "https://api.example.test/"
    return resp


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    """Build a real ``requests.Response`` carrying a JSON payload."""
    return _make_response


@pytest.fixture
def session() -> Mock:
    """A stand-in ``requests.Session``; set ``session.get.return_value`` per test."""
    return Mock(spec=requests.Session)
