from http import HTTPStatus
from unittest import mock

import pytest

from dtrack import Conflict
from dtrack.api_client import ApiException
from dtrack.api_client import ApiProvider
from dtrack.api_client import api_key_headers

MODULE = "dtrack.api_client.api_provider"


@pytest.fixture
def response():
    response = mock.Mock()
    response.status = int(HTTPStatus.OK)
    response.headers = {"Content-Type": "application/json"}
    response.data = b'{"foo": 2}'
    return response


@pytest.fixture
def api_provider(response) -> ApiProvider:
    with mock.patch(MODULE + ".PoolManager"):
        api_provider = ApiProvider(
            url="http://testserver/api/",
            headers_factory=api_key_headers("secret"),
        )
        api_provider._pool.request.return_value = response
        yield api_provider


def test_get(api_provider: ApiProvider, response):
    actual = api_provider.request("GET", "")

    assert api_provider._pool.request.call_count == 1
    assert api_provider._pool.request.call_args[1] == dict(
        method="GET",
        url="http://testserver/api",
        headers={"X-Api-Key": "secret"},
        timeout=5.0,
    )
    assert actual == {"foo": 2}


def test_put_json(api_provider: ApiProvider, response):
    response.status = int(HTTPStatus.CREATED)
    actual = api_provider.request("PUT", "v1/project", json={"name": "foo"})

    assert api_provider._pool.request.call_count == 1
    assert api_provider._pool.request.call_args[1] == dict(
        method="PUT",
        url="http://testserver/api/v1/project",
        body=b'{"name": "foo"}',
        headers={
            "Content-Type": "application/json",
            "X-Api-Key": "secret",
        },
        timeout=5.0,
    )
    assert actual == {"foo": 2}


@pytest.mark.parametrize(
    "path,params,expected_url",
    [
        ("", None, "http://testserver/api"),
        ("bar", None, "http://testserver/api/bar"),
        ("bar/", None, "http://testserver/api/bar"),
        ("", {"a": 2}, "http://testserver/api?a=2"),
        ("bar", {"a": 2}, "http://testserver/api/bar?a=2"),
        ("", {"a": [1, 2]}, "http://testserver/api?a=1&a=2"),
        ("", {"a": 1, "b": "foo"}, "http://testserver/api?a=1&b=foo"),
        ("", {"a": None}, "http://testserver/api"),
        ("", {"a": ""}, "http://testserver/api?a="),
        ("", {"a": []}, "http://testserver/api"),
        ("", {}, "http://testserver/api"),
    ],
)
def test_url(api_provider: ApiProvider, path, params, expected_url):
    api_provider.request("GET", path, params=params)
    assert api_provider._pool.request.call_args[1]["url"] == expected_url


def test_timeout(api_provider: ApiProvider):
    api_provider.request("POST", "bar", timeout=2.1)
    assert api_provider._pool.request.call_args[1]["timeout"] == 2.1


@pytest.mark.parametrize("status", [HTTPStatus.OK, HTTPStatus.CREATED])
def test_unexpected_content_type(api_provider: ApiProvider, response, status):
    response.status = int(status)
    response.headers["Content-Type"] = "text/plain"
    with pytest.raises(ApiException) as e:
        api_provider.request("GET", "bar")

    assert e.value.status is status
    assert str(e.value) == f"{status}: Unexpected content type 'text/plain'"


@pytest.mark.parametrize(
    "status", [HTTPStatus.NOT_FOUND, HTTPStatus.INTERNAL_SERVER_ERROR]
)
def test_plain_text_error(api_provider: ApiProvider, response, status):
    response.status = int(status)
    response.headers["Content-Type"] = "text/plain"
    response.data = b"The project could not be found."
    with pytest.raises(ApiException) as e:
        api_provider.request("GET", "bar")

    assert e.value.status is status
    assert str(e.value) == f"{status}: The project could not be found."


@pytest.mark.parametrize("status", [HTTPStatus.OK, HTTPStatus.ACCEPTED])
def test_empty_body(api_provider: ApiProvider, response, status):
    response.status = int(status)
    response.headers = {}
    response.data = b""

    assert api_provider.request("GET", "v1/component/internal/identify") is None


def test_json_variant_content_type(api_provider: ApiProvider, response):
    response.headers["Content-Type"] = "application/something+json"
    actual = api_provider.request("GET", "bar")
    assert actual == {"foo": 2}


def test_no_content(api_provider: ApiProvider, response):
    response.status = int(HTTPStatus.NO_CONTENT)
    response.headers = {}

    actual = api_provider.request("DELETE", "bar/2")
    assert actual is None


@pytest.mark.parametrize("status", [HTTPStatus.BAD_REQUEST, HTTPStatus.NOT_FOUND])
def test_error_response(api_provider: ApiProvider, response, status):
    response.status = int(status)

    with pytest.raises(ApiException) as e:
        api_provider.request("GET", "bar")

    assert e.value.status is status
    assert str(e.value) == str(int(status)) + ": {'foo': 2}"


def test_conflict(api_provider: ApiProvider, response):
    response.status = int(HTTPStatus.CONFLICT)
    response.data = b'{"message": "already exists"}'

    with pytest.raises(Conflict, match="already exists"):
        api_provider.request("PUT", "v1/project", json={"name": "foo"})


def test_conflict_plain_text(api_provider: ApiProvider, response):
    response.status = int(HTTPStatus.CONFLICT)
    response.headers["Content-Type"] = "text/plain"
    response.data = b"A project with the specified name already exists."

    with pytest.raises(Conflict) as e:
        api_provider.request("PUT", "v1/project", json={"name": "foo"})

    assert str(e.value) == "A project with the specified name already exists."


def test_error_empty_body(api_provider: ApiProvider, response):
    response.status = int(HTTPStatus.BAD_GATEWAY)
    response.headers = {}
    response.data = b""

    with pytest.raises(ApiException) as e:
        api_provider.request("GET", "bar")

    assert e.value.status is HTTPStatus.BAD_GATEWAY


@mock.patch(MODULE + ".PoolManager", new=mock.Mock())
def test_no_headers_factory(response):
    api_provider = ApiProvider(url="http://testserver/api/")
    api_provider._pool.request.return_value = response
    api_provider.request("GET", "")
    assert api_provider._pool.request.call_args[1]["headers"] == {}


def test_custom_header(api_provider: ApiProvider):
    api_provider.request("GET", "", headers={"Accept": "application/json"})
    assert api_provider._pool.request.call_args[1]["headers"] == {
        "X-Api-Key": "secret",
        "Accept": "application/json",
    }


@pytest.mark.parametrize(
    "path,trailing_slash,expected",
    [
        ("bar", False, "bar"),
        ("bar", True, "bar/"),
        ("bar/", False, "bar"),
        ("bar/", True, "bar/"),
    ],
)
def test_trailing_slash(response, path, trailing_slash, expected):
    with mock.patch(MODULE + ".PoolManager"):
        api_provider = ApiProvider(
            url="http://testserver/api/", trailing_slash=trailing_slash
        )
        api_provider._pool.request.return_value = response
        api_provider.request("GET", path)

    assert (
        api_provider._pool.request.call_args[1]["url"]
        == "http://testserver/api/" + expected
    )


def test_url_without_trailing_slash(response):
    with mock.patch(MODULE + ".PoolManager"):
        api_provider = ApiProvider(url="http://testserver/api")
        api_provider._pool.request.return_value = response
        api_provider.request("GET", "version")

    assert (
        api_provider._pool.request.call_args[1]["url"]
        == "http://testserver/api/version"
    )


def test_request_page(api_provider: ApiProvider, response):
    response.data = b'[{"name": "a"}, {"name": "b"}]'
    response.headers["X-Total-Count"] = "25"

    actual = api_provider.request_page(
        "v1/project", params={"pageNumber": 2, "pageSize": 2}
    )

    assert api_provider._pool.request.call_args[1] == dict(
        method="GET",
        url="http://testserver/api/v1/project?pageNumber=2&pageSize=2",
        headers={"X-Api-Key": "secret"},
        timeout=5.0,
    )
    assert actual.total_count == 25
    assert list(actual.items) == [{"name": "a"}, {"name": "b"}]
    assert actual.page_number == 2
    assert actual.page_size == 2


def test_request_page_no_total_count_header(api_provider: ApiProvider, response):
    response.data = b'[{"name": "a"}]'

    actual = api_provider.request_page("v1/project")

    assert actual.total_count == 1
    assert actual.page_number is None


def test_request_page_empty(api_provider: ApiProvider, response):
    response.data = b"[]"
    response.headers["X-Total-Count"] = "0"

    actual = api_provider.request_page("v1/project")

    assert actual.total_count == 0
    assert list(actual.items) == []


def test_request_page_not_a_list(api_provider: ApiProvider, response):
    with pytest.raises(ApiException, match="Expected a JSON array"):
        api_provider.request_page("v1/project")


def test_request_page_invalid_total_count(api_provider: ApiProvider, response):
    response.data = b"[]"
    response.headers["X-Total-Count"] = "many"

    with pytest.raises(ApiException, match="Invalid X-Total-Count"):
        api_provider.request_page("v1/project")


def test_request_page_error(api_provider: ApiProvider, response):
    response.status = int(HTTPStatus.FORBIDDEN)

    with pytest.raises(ApiException) as e:
        api_provider.request_page("v1/project")

    assert e.value.status is HTTPStatus.FORBIDDEN


def test_request_raw(api_provider: ApiProvider, response):
    response.headers["X-Total-Count"] = "3"

    actual = api_provider.request_raw("GET", "bar")

    assert actual.status is HTTPStatus.OK
    assert actual.data == b'{"foo": 2}'
    assert actual.content_type == "application/json"
    assert actual.headers["X-Total-Count"] == "3"


def test_retry_policy():
    with mock.patch(MODULE + ".PoolManager") as pool_manager:
        ApiProvider(url="http://testserver/api/", retries=2, backoff_factor=0.5)

    retry = pool_manager.call_args[1]["retries"]
    assert retry.total == 2
    assert retry.backoff_factor == 0.5
    assert "GET" in retry.allowed_methods
    assert "PUT" not in retry.allowed_methods
    assert HTTPStatus.SERVICE_UNAVAILABLE in retry.status_forcelist
