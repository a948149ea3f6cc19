import base64
import dataclasses
import logging

import httpx
import pytest
from pydantic import BaseModel

from adapters.rest_request import Method, RestRequest, decode_model
from core.errors import BadResponseError, HTTPStatusError, InvalidURLError, TransportError


def test_caller_headers_win_over_accept_and_content_type():
    request = RestRequest(
        method=Method.POST,
        url="https://example.com/api",
        accept_type="application/json",
        content_type="text/plain",
        header_parameters={"accept": "text/csv", "X-Watson-Learning-Opt-Out": "true"},
    )

    headers = request.build_headers()

    assert headers["Accept"] == "text/csv"
    assert headers.get_list("accept") == ["text/csv"]
    assert headers["Content-Type"] == "text/plain"
    assert headers["X-Watson-Learning-Opt-Out"] == "true"
    assert len(headers) == 3


def test_headers_only_contain_what_was_given():
    request = RestRequest(method=Method.GET, url="https://example.com/api")

    assert len(request.build_headers()) == 0
    assert request.build_auth() is None


def test_query_parameters_are_appended_in_order():
    request = RestRequest(
        method=Method.GET,
        url="https://example.com/api/v2/profile?version=2016-10-20",
        query_parameters=(("include_raw", "true"), ("csv_headers", "false")),
    )

    url = request.build_url()

    assert url.scheme == "https"
    assert url.host == "example.com"
    assert url.path == "/api/v2/profile"
    assert list(url.params.multi_items()) == [
        ("version", "2016-10-20"),
        ("include_raw", "true"),
        ("csv_headers", "false"),
    ]


@pytest.mark.parametrize(
    "url",
    [
        "gateway.watsonplatform.net/personality-insights/api",
        "https:///v2/profile",
        "",
    ],
)
def test_url_without_scheme_or_host_is_rejected(url):
    request = RestRequest(method=Method.GET, url=url)

    with pytest.raises(InvalidURLError):
        request.build_url()


@pytest.mark.asyncio
async def test_invalid_url_raises_before_reaching_the_transport(recorder):
    request = RestRequest(method=Method.GET, url="https:///v2/profile")

    async with httpx.AsyncClient(transport=recorder.transport) as client:
        with pytest.raises(InvalidURLError):
            await request.execute(client)

    assert recorder.requests == []


@pytest.mark.asyncio
async def test_execute_sends_method_body_and_basic_auth(recorder):
    recorder.reply(200, json={"ok": True})
    request = RestRequest(
        method=Method.PUT,
        url="https://example.com/api/items",
        content_type="application/octet-stream",
        message_body=b"\x00\x01payload",
        username="user",
        password="secret",
    )

    async with httpx.AsyncClient(transport=recorder.transport) as client:
        response = await request.execute(client)

    assert response.status_code == 200
    sent = recorder.last
    assert sent.method == "PUT"
    assert sent.content == b"\x00\x01payload"
    assert sent.headers["Content-Type"] == "application/octet-stream"
    expected = base64.b64encode(b"user:secret").decode("ascii")
    assert sent.headers["Authorization"] == f"Basic {expected}"


@pytest.mark.asyncio
async def test_username_without_password_uses_empty_password(recorder):
    request = RestRequest(method=Method.GET, url="https://example.com/api", username="apikey")

    async with httpx.AsyncClient(transport=recorder.transport) as client:
        await request.execute(client)

    expected = base64.b64encode(b"apikey:").decode("ascii")
    assert recorder.last.headers["Authorization"] == f"Basic {expected}"


@pytest.mark.asyncio
async def test_response_json_parses_body(recorder):
    recorder.reply(200, json={"classifiers": []})
    request = RestRequest(method=Method.GET, url="https://example.com/api")

    async with httpx.AsyncClient(transport=recorder.transport) as client:
        payload = await request.response_json(client)

    assert payload == {"classifiers": []}


@pytest.mark.asyncio
async def test_empty_success_body_decodes_to_empty_dict(recorder):
    recorder.reply(200)
    request = RestRequest(method=Method.DELETE, url="https://example.com/api/thing")

    async with httpx.AsyncClient(transport=recorder.transport) as client:
        assert await request.response_json(client) == {}


@pytest.mark.asyncio
async def test_error_status_uses_service_error_fields(recorder):
    recorder.reply(404, json={"code": 404, "error": "Not found", "description": "Classifier not found"})
    request = RestRequest(method=Method.GET, url="https://example.com/api")

    async with httpx.AsyncClient(transport=recorder.transport) as client:
        with pytest.raises(HTTPStatusError) as excinfo:
            await request.response_json(client)

    assert excinfo.value.status_code == 404
    assert excinfo.value.message == "HTTP 404: Not found: Classifier not found"


@pytest.mark.asyncio
async def test_error_status_without_json_falls_back_to_reason_phrase(recorder):
    recorder.reply(502, text="<html>bad gateway</html>")
    request = RestRequest(method=Method.GET, url="https://example.com/api")

    async with httpx.AsyncClient(transport=recorder.transport) as client:
        with pytest.raises(HTTPStatusError) as excinfo:
            await request.response_json(client)

    assert excinfo.value.status_code == 502
    assert excinfo.value.message == "HTTP 502: Bad Gateway"


@pytest.mark.asyncio
async def test_non_json_success_body_is_a_bad_response(recorder):
    recorder.reply(200, text="not json")
    request = RestRequest(method=Method.GET, url="https://example.com/api")

    async with httpx.AsyncClient(transport=recorder.transport) as client:
        with pytest.raises(BadResponseError):
            await request.response_json(client)


@pytest.mark.asyncio
async def test_transport_failure_is_wrapped(recorder):
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    recorder.fail_with(refuse)
    request = RestRequest(method=Method.GET, url="https://example.com/api")

    async with httpx.AsyncClient(transport=recorder.transport) as client:
        with pytest.raises(TransportError) as excinfo:
            await request.response_json(client)

    assert "connection refused" in excinfo.value.message


def test_decode_model_rejects_payloads_of_the_wrong_shape():
    class Item(BaseModel):
        name: str

    assert decode_model(Item, {"name": "x"}).name == "x"
    with pytest.raises(BadResponseError):
        decode_model(Item, ["not", "an", "object"])


def test_empty_path_normalizes_to_root():
    url = RestRequest(method=Method.GET, url="https://example.com").build_url()

    assert url.path == "/"
    assert url.host == "example.com"


def test_request_does_not_follow_later_changes_to_caller_containers():
    headers = {"X-Watson-Learning-Opt-Out": "true"}
    query = [("include_raw", "true")]
    files = {"training_data": ("training_data.csv", b"a,b\n", "text/csv")}
    request = RestRequest(
        method=Method.POST,
        url="https://example.com/api",
        query_parameters=query,
        header_parameters=headers,
        files=files,
    )

    headers["X-Injected"] = "1"
    query.append(("csv_headers", "false"))
    files["training_metadata"] = ("training_metadata.json", b"{}", "application/json")

    sent_headers = request.build_headers()
    assert "X-Injected" not in sent_headers
    assert len(sent_headers) == 1
    assert list(request.build_url().params.multi_items()) == [("include_raw", "true")]
    assert list(request.files) == ["training_data"]
    with pytest.raises(TypeError):
        request.header_parameters["X-Injected"] = "1"
    with pytest.raises(dataclasses.FrozenInstanceError):
        request.url = "https://other.example.com"


def test_rejected_url_is_logged(caplog):
    request = RestRequest(method=Method.GET, url="gateway.watsonplatform.net/api")

    with caplog.at_level(logging.WARNING, logger="adapters.rest_request"):
        with pytest.raises(InvalidURLError):
            request.build_url()

    assert "no scheme" in caplog.text


def test_undecodable_payload_is_logged(caplog):
    class Item(BaseModel):
        name: str

    with caplog.at_level(logging.WARNING, logger="adapters.rest_request"):
        with pytest.raises(BadResponseError):
            decode_model(Item, {"name": None})

    assert "Item" in caplog.text
