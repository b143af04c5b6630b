"""
Request helpers shared by the endpoint wrappers.
"""

from typing import Any, TypeVar

import serde
import requests

from bussched.types import ApiContext
from bussched.error import ApiError, NetworkError

T = TypeVar("T")


def api_url(ctx: ApiContext, path: str) -> str:
    return ctx.base_url.rstrip("/") + path


def check_response(response: requests.Response, method: str, url: str) -> None:
    """
    Check that a response has a success status.
    """

    if not response.ok:
        raise ApiError(
            f"{method} {url} failed with status {response.status_code}",
            status_code=response.status_code,
            url=url,
        ) from None


def get_json(ctx: ApiContext, path: str, params: dict[str, Any] | None = None) -> Any:
    """
    GET an endpoint and decode its JSON body.
    """

    url = api_url(ctx, path)

    ctx.logger.info(f"GET {url}")
    try:
        response = ctx.session.get(url, params=params, timeout=ctx.timeout)
    except requests.RequestException as exc:
        raise NetworkError(f"GET {url} failed: {exc}") from exc

    check_response(response, "GET", url)

    try:
        return response.json()
    except ValueError:
        raise ApiError(
            f"GET {url} did not return JSON",
            status_code=response.status_code,
            url=url,
        ) from None


def post_json(ctx: ApiContext, path: str, body: dict[str, Any]) -> None:
    """
    POST a JSON body to an endpoint; the response body is not used.
    """

    url = api_url(ctx, path)

    ctx.logger.info(f"POST {url}")
    try:
        response = ctx.session.post(url, json=body, timeout=ctx.timeout)
    except requests.RequestException as exc:
        raise NetworkError(f"POST {url} failed: {exc}") from exc

    check_response(response, "POST", url)


def decode(cls: type[T], payload: Any, url: str) -> T:
    """
    Deserialize a decoded JSON payload into a raw payload class.
    """

    if not isinstance(payload, dict):
        raise ApiError(
            f"unexpected payload from {url}: expected an object,"
            f" got {type(payload).__name__}",
            url=url,
        )

    try:
        return serde.from_dict(cls, payload)
    except (serde.SerdeError, KeyError, TypeError) as exc:
        raise ApiError(f"unexpected payload from {url}: {exc}", url=url) from exc
