"""Unit tests for middleware."""
import pytest
from unittest.mock import Mock
from edconsult.middleware.logging import LoggingMiddleware


def _mock_request(path="/test", headers=None):
    mock_request = Mock()
    mock_request.state = Mock(spec=[])
    mock_request.method = "GET"
    mock_request.url = Mock()
    mock_request.url.path = path
    mock_request.client = Mock()
    mock_request.client.host = "127.0.0.1"
    mock_request.query_params = {}
    mock_request.headers = headers or {}
    return mock_request


def _mock_response(status_code=200):
    mock_response = Mock()
    mock_response.headers = {}
    mock_response.status_code = status_code
    return mock_response


@pytest.mark.unit
class TestLoggingMiddleware:
    """Test logging middleware."""

    @pytest.mark.asyncio
    async def test_request_id_added_to_state_and_header(self):
        """The request id is visible to handlers and echoed in X-Request-ID."""
        mock_request = _mock_request()

        async def mock_call_next(request):
            assert isinstance(request.state.request_id, str)
            assert len(request.state.request_id) > 0
            return _mock_response()

        middleware = LoggingMiddleware(Mock())
        response = await middleware.dispatch(mock_request, mock_call_next)

        assert response.headers["X-Request-ID"] == mock_request.state.request_id

    @pytest.mark.asyncio
    async def test_upstream_request_id_reused(self):
        mock_request = _mock_request(headers={"X-Request-ID": "abc-123"})

        async def mock_call_next(request):
            return _mock_response()

        middleware = LoggingMiddleware(Mock())
        response = await middleware.dispatch(mock_request, mock_call_next)

        assert response.headers["X-Request-ID"] == "abc-123"

    @pytest.mark.asyncio
    async def test_request_id_unique_across_requests(self):
        async def mock_call_next(request):
            return _mock_response()

        middleware = LoggingMiddleware(Mock())
        first = await middleware.dispatch(_mock_request("/a"), mock_call_next)
        second = await middleware.dispatch(_mock_request("/b"), mock_call_next)

        assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_exception_is_reraised(self):
        async def mock_call_next(request):
            raise RuntimeError("boom")

        middleware = LoggingMiddleware(Mock())
        with pytest.raises(RuntimeError, match="boom"):
            await middleware.dispatch(_mock_request(), mock_call_next)
