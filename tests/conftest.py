"""Shared fixtures: an API context whose session never touches the network."""

from typing import Any
import logging
import datetime
from unittest import mock

import pytest
import requests

from bussched.types import ApiContext

API_URL = "http://api.test"


def make_response(payload: Any = None, status: int = 200) -> mock.Mock:
    response = mock.Mock(spec=requests.Response)
    response.status_code = status
    response.ok = status < 400

    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload

    return response


@pytest.fixture
def session():
    return mock.Mock(spec=requests.Session)


@pytest.fixture
def ctx(session):
    return ApiContext(
        logging.getLogger("bussched.tests"),
        session,
        API_URL,
        5.0,
        datetime.timezone.utc,
    )


@pytest.fixture
def routed_session(session):
    """Answer GETs by path from a dict the test fills in."""

    routes: dict[str, Any] = {}

    def get(url, params=None, timeout=None):
        path = url[len(API_URL):]
        return make_response(routes[path])

    session.get.side_effect = get
    session.post.return_value = make_response(None, status=201)
    session.routes = routes

    return session
