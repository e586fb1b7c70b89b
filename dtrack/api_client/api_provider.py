import json as json_lib
import logging
import re
from collections.abc import Callable
from http import HTTPStatus
from typing import Any
from urllib.parse import quote
from urllib.parse import urlencode
from urllib.parse import urljoin

from pydantic import AnyHttpUrl
from urllib3 import PoolManager
from urllib3 import Retry

from dtrack import Conflict
from dtrack import Json
from dtrack import Page

from .exceptions import ApiException
from .response import Response

__all__ = ["ApiProvider", "api_key_headers", "TOTAL_COUNT_HEADER"]


logger = logging.getLogger(__name__)

# Retry on 429 and all 5xx errors (because they are mostly temporary)
RETRY_STATUSES = frozenset(
    {
        HTTPStatus.TOO_MANY_REQUESTS,
        HTTPStatus.INTERNAL_SERVER_ERROR,
        HTTPStatus.BAD_GATEWAY,
        HTTPStatus.SERVICE_UNAVAILABLE,
        HTTPStatus.GATEWAY_TIMEOUT,
    }
)
# Dependency-Track creates with PUT and updates with POST. Neither is retried,
# PUT because a retried create may end up as a duplicate.
RETRY_METHODS = frozenset(["HEAD", "GET", "DELETE", "OPTIONS", "TRACE"])

TOTAL_COUNT_HEADER = "X-Total-Count"


def is_success(status: HTTPStatus) -> bool:
    """Returns True on 2xx status"""
    return (int(status) // 100) == 2


def check_exception(status: HTTPStatus, body: Any) -> None:
    if status == HTTPStatus.CONFLICT:
        message = body.get("message", str(body)) if isinstance(body, dict) else body
        raise Conflict(str(message))
    elif not is_success(status):
        raise ApiException(body, status=status)


JSON_CONTENT_TYPE_REGEX = re.compile(r"^application\/[^+]*[+]?(json);?.*$")


def is_json_content_type(content_type: str | None) -> bool:
    if not content_type:
        return False
    return bool(JSON_CONTENT_TYPE_REGEX.match(content_type))


def join(url: str, path: str, trailing_slash: bool = False) -> str:
    """Results in a full url without trailing slash"""
    assert url.endswith("/")
    assert not path.startswith("/")
    result = urljoin(url, path)
    if trailing_slash and not result.endswith("/"):
        result = result + "/"
    elif not trailing_slash and result.endswith("/"):
        result = result[:-1]
    return result


def add_query_params(url: str, params: Json | None) -> str:
    if params is None:
        return url
    params = {k: v for (k, v) in params.items() if v is not None}
    if not params:
        return url
    query = urlencode(params, doseq=True)
    return url + "?" + query if query else url


def api_key_headers(api_key: str) -> Callable[[], dict[str, str]]:
    """Header factory for API key authentication"""
    headers = {"X-Api-Key": api_key}
    return lambda: headers


class ApiProvider:
    """Basic JSON API provider with retry policy.

    The default retry policy has 3 retries with 1, 2, 4 second intervals.

    Args:
        url: The url of the API (e.g. https://dtrack.example.com/api/)
        headers_factory: Callable that returns headers (for e.g. authorization)
        retries: Total number of retries per request
        backoff_factor: Multiplier for retry delay times (1, 2, 4, ...)
        trailing_slash: Wether to automatically add or remove trailing slashes.
    """

    def __init__(
        self,
        url: AnyHttpUrl | str,
        headers_factory: Callable[[], dict[str, str]] | None = None,
        retries: int = 3,
        backoff_factor: float = 1.0,
        trailing_slash: bool = False,
    ):
        self._url = str(url)
        if not self._url.endswith("/"):
            self._url += "/"
        self._headers_factory = headers_factory
        assert retries >= 0
        self._pool = PoolManager(
            retries=Retry(
                retries,
                backoff_factor=backoff_factor,
                status_forcelist=RETRY_STATUSES,
                allowed_methods=RETRY_METHODS,
                raise_on_status=False,
            )
        )
        self._trailing_slash = trailing_slash

    def _request(
        self,
        method: str,
        path: str,
        params: Json | None,
        json: Any,
        headers: dict[str, str] | None,
        timeout: float,
    ):
        actual_headers = {}
        if self._headers_factory is not None:
            actual_headers.update(self._headers_factory())
        if headers:
            actual_headers.update(headers)
        request_kwargs = {
            "method": method,
            "url": add_query_params(
                join(self._url, quote(path), self._trailing_slash), params
            ),
            "timeout": timeout,
        }
        if json is not None:
            request_kwargs["body"] = json_lib.dumps(json).encode()
            actual_headers["Content-Type"] = "application/json"
        logger.debug("%s %s", method, request_kwargs["url"])
        return self._pool.request(headers=actual_headers, **request_kwargs)

    def _decode(self, response) -> Any:
        status = HTTPStatus(response.status)
        content_type = response.headers.get("Content-Type")
        if is_success(status) and (
            status is HTTPStatus.NO_CONTENT or not response.data
        ):
            return None
        if is_json_content_type(content_type) and response.data:
            body = json_lib.loads(response.data.decode())
        elif not is_success(status):
            # error responses are often plain text
            body = response.data.decode()
        else:
            raise ApiException(
                f"Unexpected content type '{content_type}'", status=status
            )
        check_exception(status, body)
        return body

    def request(
        self,
        method: str,
        path: str,
        params: Json | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
        timeout: float = 5.0,
    ) -> Any:
        """Perform a request and return the decoded JSON body (None without a body)"""
        response = self._request(method, path, params, json, headers, timeout)
        return self._decode(response)

    def request_page(
        self,
        path: str,
        params: Json | None = None,
        headers: dict[str, str] | None = None,
        timeout: float = 5.0,
    ) -> Page[Json]:
        """GET one page of a listing.

        The body must be a JSON array. The total count is read from the
        X-Total-Count header; if absent, the number of items is used.
        """
        response = self._request("GET", path, params, None, headers, timeout)
        body = self._decode(response)
        if body is None:
            body = []
        if not isinstance(body, list):
            raise ApiException(
                "Expected a JSON array", status=HTTPStatus(response.status)
            )
        total_count = response.headers.get(TOTAL_COUNT_HEADER)
        try:
            total = len(body) if total_count is None else int(total_count)
        except ValueError:
            raise ApiException(
                f"Invalid {TOTAL_COUNT_HEADER} header '{total_count}'",
                status=HTTPStatus(response.status),
            )
        return Page(
            total_count=total,
            items=body,
            page_number=(params or {}).get("pageNumber"),
            page_size=(params or {}).get("pageSize"),
        )

    def request_raw(
        self,
        method: str,
        path: str,
        params: Json | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
        timeout: float = 5.0,
    ) -> Response:
        response = self._request(method, path, params, json, headers, timeout)
        return Response(
            status=response.status,
            data=response.data,
            content_type=response.headers.get("Content-Type"),
            headers=dict(response.headers),
        )
