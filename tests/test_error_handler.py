"""
Unit tests for the centralized error handling system.
"""

import asyncio
import json
import logging
import pytest
import httpx
from unittest.mock import Mock

from app.core.error_handler import (
    ErrorCode,
    ErrorHandler,
    INTERNAL_SERVER_ERROR_MESSAGE,
    error_handler,
)
from app.models.responses import ErrorResponse


@pytest.fixture
def handler():
    return ErrorHandler(logger=logging.getLogger("tests.error_handler"))


@pytest.fixture
def outbound_request():
    return httpx.Request("POST", "http://scraper.test/search")


class TestErrorCode:
    """Test error code definitions"""

    def test_values_match_names(self):
        for code in ErrorCode:
            assert code.value == code.name

    def test_every_code_has_a_message(self):
        for code in ErrorCode:
            assert code in ErrorHandler.ERROR_MESSAGES


class TestClassifyProviderError:
    """Test mapping of provider exceptions to error codes"""

    def test_asyncio_timeout(self, handler):
        code, _ = handler.classify_provider_error(asyncio.TimeoutError())
        assert code == ErrorCode.PROVIDER_TIMEOUT

    def test_httpx_timeout(self, handler, outbound_request):
        code, _ = handler.classify_provider_error(httpx.ConnectTimeout("slow", request=outbound_request))
        assert code == ErrorCode.PROVIDER_TIMEOUT

    def test_http_status_error(self, handler, outbound_request):
        response = httpx.Response(503, request=outbound_request)
        error = httpx.HTTPStatusError("API returned 503", request=outbound_request, response=response)

        code, message = handler.classify_provider_error(error)

        assert code == ErrorCode.PROVIDER_HTTP_ERROR
        assert message == "API returned 503"

    def test_connect_error(self, handler, outbound_request):
        code, message = handler.classify_provider_error(httpx.ConnectError("refused", request=outbound_request))
        assert code == ErrorCode.PROVIDER_UNREACHABLE
        assert "refused" in message

    def test_json_decode_error(self, handler):
        with pytest.raises(json.JSONDecodeError) as exc_info:
            json.loads("<html>")

        code, _ = handler.classify_provider_error(exc_info.value)
        assert code == ErrorCode.PROVIDER_INVALID_RESPONSE

    def test_unknown_error(self, handler):
        code, message = handler.classify_provider_error(RuntimeError("weird"))
        assert code == ErrorCode.PROVIDER_UNREACHABLE
        assert "weird" in message


class TestErrorResponses:
    """Test error response construction"""

    def test_internal_error_body_is_fixed(self, handler):
        response = handler.create_error_response(ErrorCode.INTERNAL_SERVER_ERROR)
        assert isinstance(response, ErrorResponse)
        assert response.error == INTERNAL_SERVER_ERROR_MESSAGE == "Internal server error"

    def test_unmapped_codes_are_server_errors(self, handler):
        response = handler.create_json_response(ErrorCode.PROVIDER_TIMEOUT)
        assert response.status_code == 500
        assert json.loads(response.body) == {"error": "Internal server error"}

    def test_client_error_message(self, handler):
        response = handler.create_json_response(ErrorCode.HTTP_404)
        assert response.status_code == 404
        assert json.loads(response.body) == {"error": "Not Found"}

    def test_error_code_for_status(self, handler):
        assert handler.error_code_for_status(404) == ErrorCode.HTTP_404
        assert handler.error_code_for_status(405) == ErrorCode.HTTP_405
        assert handler.error_code_for_status(500) == ErrorCode.INTERNAL_SERVER_ERROR
        assert handler.error_code_for_status(418) is None

    def test_json_response_headers(self, handler):
        response = handler.create_json_response(ErrorCode.HTTP_405, headers={"Allow": "POST"})
        assert response.status_code == 405
        assert response.headers["allow"] == "POST"
        assert json.loads(response.body) == {"error": "Method Not Allowed"}

    def test_json_response(self, handler):
        response = handler.create_json_response(ErrorCode.INTERNAL_SERVER_ERROR)
        assert response.status_code == 500
        assert json.loads(response.body) == {"error": "Internal server error"}


class TestLogError:
    """Test contextual error logging"""

    def test_log_error_with_context(self, handler, caplog):
        with caplog.at_level(logging.ERROR, logger="tests.error_handler"):
            handler.log_error(
                ErrorCode.INTERNAL_SERVER_ERROR,
                "Fatal error: boom",
                url="http://scraper.test/search",
                additional_context={"origin": "YUL"}
            )

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.getMessage() == "INTERNAL_SERVER_ERROR: Fatal error: boom"
        assert record.context["target_url"] == "http://scraper.test/search"
        assert record.context["origin"] == "YUL"

    def test_log_error_with_request(self, handler, caplog):
        request = Mock()
        request.method = "POST"
        request.url = "http://testserver/api/search"
        request.client.host = "127.0.0.1"

        with caplog.at_level(logging.ERROR, logger="tests.error_handler"):
            handler.log_error(ErrorCode.INTERNAL_SERVER_ERROR, "boom", request=request)

        context = caplog.records[-1].context
        assert context["method"] == "POST"
        assert context["url"] == "http://testserver/api/search"
        assert context["client_ip"] == "127.0.0.1"

    def test_recovered_failure_logged_as_warning(self, handler, caplog):
        error = RuntimeError("down")
        with caplog.at_level(logging.WARNING, logger="tests.error_handler"):
            handler.log_error(
                ErrorCode.PROVIDER_UNREACHABLE,
                "down",
                exception=error,
                level=logging.WARNING
            )

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.exc_info is None

    def test_exception_traceback_attached(self, handler, caplog):
        try:
            raise ValueError("bad body")
        except ValueError as e:
            with caplog.at_level(logging.ERROR, logger="tests.error_handler"):
                handler.log_error(ErrorCode.INTERNAL_SERVER_ERROR, "bad body", exception=e)

        assert caplog.records[-1].exc_info is not None


def test_global_error_handler_instance():
    assert isinstance(error_handler, ErrorHandler)
