"""
Tests for the HTTP transport.
"""

import pytest
import requests
from unittest.mock import Mock, patch

from asc_client import ClientConfig, Transport
from asc_client.apps import AppResponse, ListAppsQuery
from asc_client.exceptions import (
    APIError,
    AuthenticationError,
    ConflictError,
    DecodeError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    ServerError,
    TransportError,
)
from asc_client.models import UploadOperation, UploadOperationHeader
from asc_client.transport import Rate, Response

APP_PAYLOAD = {
    "data": {"id": "123456789", "type": "apps", "attributes": {"name": "Test App"}},
    "links": {"self": "https://api.appstoreconnect.apple.com/v1/apps/123456789"},
}


class TestUrls:
    """Test URL construction."""

    def test_relative_path(self, transport):
        assert transport.url_for("v1/apps") == "https://api.appstoreconnect.apple.com/v1/apps"

    def test_leading_slash(self, transport):
        assert transport.url_for("/v1/apps") == "https://api.appstoreconnect.apple.com/v1/apps"

    def test_query_appended(self, transport):
        url = transport.url_for("v1/apps", ListAppsQuery(filter_id=["123"], limit=10))
        assert url == "https://api.appstoreconnect.apple.com/v1/apps?filter[id]=123&limit=10"

    def test_absolute_url_unchanged(self, transport):
        next_link = "https://api.appstoreconnect.apple.com/v1/apps?cursor=Mg.ABC&limit=10"
        assert transport.url_for(next_link) == next_link

    def test_custom_base_url(self, token_provider):
        config = ClientConfig(
            key_id="k",
            issuer_id="i",
            private_key="p",
            base_url="http://localhost:8080/",
            rate_limit_calls=None,
        )
        transport = Transport(config, token_provider)
        assert transport.url_for("v1/apps") == "http://localhost:8080/v1/apps"


class TestRequests:
    """Test successful exchanges."""

    @patch("requests.request")
    def test_get(self, mock_request, transport, make_response):
        mock_request.return_value = make_response(200, APP_PAYLOAD)

        result, response = transport.get("v1/apps/123456789", None, AppResponse)

        assert isinstance(result, AppResponse)
        assert result.data.attributes.name == "Test App"
        assert response.status_code == 200

        kwargs = mock_request.call_args.kwargs
        assert kwargs["method"] == "GET"
        assert kwargs["url"] == "https://api.appstoreconnect.apple.com/v1/apps/123456789"
        assert kwargs["headers"]["Authorization"] == "Bearer test_token"
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert kwargs["json"] is None
        assert kwargs["timeout"] == 30

    @patch("requests.request")
    def test_get_with_query(self, mock_request, transport, make_response):
        mock_request.return_value = make_response(200, {"data": [], "links": {}})

        transport.get("v1/apps", ListAppsQuery(filter_id=["123"], limit=10))

        url = mock_request.call_args.kwargs["url"]
        assert url.endswith("/v1/apps?filter[id]=123&limit=10")

    @patch("requests.request")
    def test_post_sends_json(self, mock_request, transport, make_response):
        mock_request.return_value = make_response(201, APP_PAYLOAD)
        body = {"data": {"type": "apps", "attributes": {"name": "Test App"}}}

        result, response = transport.post("v1/apps", body, AppResponse)

        assert mock_request.call_args.kwargs["method"] == "POST"
        assert mock_request.call_args.kwargs["json"] == body
        assert response.status_code == 201
        assert result.data.id == "123456789"

    @patch("requests.request")
    def test_delete_no_content(self, mock_request, transport, make_response):
        mock_request.return_value = make_response(204)

        response = transport.delete("v1/appScreenshotSets/1")

        assert isinstance(response, Response)
        assert response.status_code == 204
        assert response.content == b""
        assert mock_request.call_args.kwargs["method"] == "DELETE"

    @patch("requests.request")
    def test_without_result_type(self, mock_request, transport, make_response):
        mock_request.return_value = make_response(200, APP_PAYLOAD)

        result, response = transport.patch("v1/apps/123456789", {"data": {}})

        assert result is None
        assert response.json() == APP_PAYLOAD

    @patch("requests.request")
    def test_single_attempt(self, mock_request, token_provider, make_response):
        """Throttling spaces calls out but never sends a request twice."""
        config = ClientConfig(
            key_id="k", issuer_id="i", private_key="p", rate_limit_calls=1000
        )
        transport = Transport(config, token_provider)
        mock_request.return_value = make_response(500, {"errors": []})

        with pytest.raises(ServerError):
            transport.get("v1/apps")

        assert mock_request.call_count == 1


class TestErrorHandling:
    """Test error handling."""

    @patch("requests.request")
    def test_request_timeout(self, mock_request, transport):
        mock_request.side_effect = requests.exceptions.Timeout()

        with pytest.raises(TransportError, match="Request failed"):
            transport.get("v1/apps")

    @patch("requests.request")
    def test_connection_error(self, mock_request, transport):
        mock_request.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(TransportError) as exc_info:
            transport.get("v1/apps")

        assert not isinstance(exc_info.value, APIError)
        assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)

    @pytest.mark.parametrize(
        "status_code,error_class",
        [
            (401, AuthenticationError),
            (403, PermissionError),
            (404, NotFoundError),
            (409, ConflictError),
            (429, RateLimitError),
            (500, ServerError),
            (503, ServerError),
        ],
    )
    @patch("requests.request")
    def test_status_errors(self, mock_request, status_code, error_class, transport, make_response):
        mock_request.return_value = make_response(status_code, {"errors": []})

        with pytest.raises(error_class) as exc_info:
            transport.get("v1/apps")

        assert exc_info.value.status_code == status_code

    @patch("requests.request")
    def test_conflict_carries_status_and_body(self, mock_request, transport, make_response):
        """A 409 surfaces its status and raw body and no decoded result."""
        raw = (
            b'{"errors":[{"status":"409","code":"ENTITY_ERROR.ATTRIBUTE.INVALID",'
            b'"title":"An attribute value is invalid.","detail":"The product ID is taken."}]}'
        )
        mock_request.return_value = make_response(409, content=raw)

        with pytest.raises(ConflictError) as exc_info:
            transport.post("v1/subscriptions", {"data": {}}, AppResponse)

        error = exc_info.value
        assert error.status_code == 409
        assert error.body == raw.decode("utf-8")
        assert error.errors[0]["code"] == "ENTITY_ERROR.ATTRIBUTE.INVALID"
        assert error.detail == "The product ID is taken."
        assert error.response.status_code == 409
        assert "The product ID is taken." in str(error)

    @patch("requests.request")
    def test_unlisted_status(self, mock_request, transport, make_response):
        mock_request.return_value = make_response(422, {"errors": [{"title": "Bad"}]})

        with pytest.raises(APIError) as exc_info:
            transport.get("v1/apps")

        assert type(exc_info.value) is APIError
        assert exc_info.value.status_code == 422

    @patch("requests.request")
    def test_error_body_not_json(self, mock_request, transport, make_response):
        mock_request.return_value = make_response(502, content=b"<html>Bad Gateway</html>")

        with pytest.raises(ServerError) as exc_info:
            transport.get("v1/apps")

        assert exc_info.value.errors == []
        assert exc_info.value.body == "<html>Bad Gateway</html>"

    @pytest.mark.parametrize(
        "raw",
        [
            b'{"errors": ["conflict"]}',
            b'{"errors": "conflict"}',
            b'[{"detail": "conflict"}]',
            b"",
        ],
    )
    @patch("requests.request")
    def test_malformed_error_document(self, mock_request, raw, transport, make_response):
        mock_request.return_value = make_response(409, content=raw)

        with pytest.raises(ConflictError) as exc_info:
            transport.get("v1/apps")

        assert exc_info.value.errors == []
        assert exc_info.value.detail is None
        assert exc_info.value.body == raw.decode("utf-8")

    @patch("requests.request")
    def test_error_objects_are_normalized(self, mock_request, transport, make_response):
        mock_request.return_value = make_response(
            422, {"errors": [{"code": "PARAMETER_ERROR.INVALID", "title": "Invalid", "meta": {}}]}
        )

        with pytest.raises(APIError) as exc_info:
            transport.get("v1/apps")

        assert exc_info.value.errors == [{"code": "PARAMETER_ERROR.INVALID", "title": "Invalid"}]
        assert exc_info.value.detail is None
        assert "Invalid" in str(exc_info.value)

    @patch("requests.request")
    def test_decode_error_on_wrong_shape(self, mock_request, transport, make_response):
        mock_request.return_value = make_response(200, {"data": "not an app"})

        with pytest.raises(DecodeError) as exc_info:
            transport.get("v1/apps/1", None, AppResponse)

        assert not isinstance(exc_info.value, APIError)
        assert exc_info.value.body == '{"data": "not an app"}'
        assert exc_info.value.response.status_code == 200

    @patch("requests.request")
    def test_decode_error_on_invalid_json(self, mock_request, transport, make_response):
        mock_request.return_value = make_response(200, content=b"{not json")

        with pytest.raises(DecodeError):
            transport.get("v1/apps/1", None, AppResponse)

    @patch("requests.request")
    def test_decode_error_on_wrong_type(self, mock_request, transport, make_response):
        payload = {"data": {"id": "1", "type": "builds"}, "links": {}}
        mock_request.return_value = make_response(200, payload)

        with pytest.raises(DecodeError):
            transport.get("v1/apps/1", None, AppResponse)

    @patch("requests.request")
    def test_token_failure_sends_nothing(self, mock_request, transport, token_provider):
        token_provider.token.side_effect = AuthenticationError("Failed to generate JWT token")

        with pytest.raises(AuthenticationError):
            transport.get("v1/apps")

        mock_request.assert_not_called()


class TestUpload:
    """Test signed-URL uploads."""

    @patch("requests.request")
    def test_upload_slice_and_headers(self, mock_request, transport, make_response):
        mock_request.return_value = make_response(200)
        operation = UploadOperation(
            method="PUT",
            url="https://upload.example.com/part1",
            offset=2,
            length=3,
            request_headers=[UploadOperationHeader(name="Content-Type", value="image/png")],
        )

        response = transport.upload(operation, b"0123456789")

        kwargs = mock_request.call_args.kwargs
        assert kwargs["method"] == "PUT"
        assert kwargs["url"] == "https://upload.example.com/part1"
        assert kwargs["data"] == b"234"
        assert kwargs["headers"]["Content-Type"] == "image/png"
        assert kwargs["headers"]["Content-Length"] == "3"
        assert "Authorization" not in kwargs["headers"]
        assert response.status_code == 200

    @patch("requests.request")
    def test_upload_whole_file_by_default(self, mock_request, transport, make_response):
        mock_request.return_value = make_response(200)

        transport.upload(UploadOperation(url="https://upload.example.com/"), b"abc")

        kwargs = mock_request.call_args.kwargs
        assert kwargs["method"] == "PUT"
        assert kwargs["data"] == b"abc"
        assert kwargs["headers"] == {"Content-Type": "image/png", "Content-Length": "3"}


class TestResponse:
    """Test the response descriptor."""

    def test_rate_header(self):
        response = Response(
            method="GET",
            url="https://api.appstoreconnect.apple.com/v1/apps",
            status_code=200,
            headers={"X-Rate-Limit": "user-hour-lim:3500;user-hour-rem:3499;"},
        )
        assert response.rate == Rate(limit=3500, remaining=3499)

    @pytest.mark.parametrize("header", [None, "", "garbage", "user-hour-lim:3500;"])
    def test_rate_missing(self, header):
        assert Rate.parse(header) is None

    @patch("requests.request")
    def test_headers_case_insensitive(self, mock_request, transport, make_response):
        mock_request.return_value = make_response(
            200, APP_PAYLOAD, headers={"x-rate-limit": "user-hour-lim:10;user-hour-rem:9;"}
        )

        _, response = transport.get("v1/apps/1", None, AppResponse)

        assert response.rate.remaining == 9
        assert response.ok
