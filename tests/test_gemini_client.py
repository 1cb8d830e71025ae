"""
Unit tests for the Gemini completion client and its overload retry.
"""

import os
import sys
from unittest.mock import MagicMock, call, patch

import pytest
from google.genai import errors as genai_errors

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from llm.gemini_client import GEMINI_MODEL, CompletionError, generate_with_retry, is_overloaded


def overloaded_error():
    return genai_errors.ServerError(
        503,
        {"error": {"code": 503, "message": "The model is overloaded.", "status": "UNAVAILABLE"}},
    )


def bad_request_error():
    return genai_errors.ClientError(
        400,
        {"error": {"code": 400, "message": "Invalid argument.", "status": "INVALID_ARGUMENT"}},
    )


def gemini_response(text):
    response = MagicMock()
    response.text = text
    return response


@pytest.fixture
def client():
    return MagicMock()


class TestGenerateWithRetry:
    """Request shape and retry policy."""

    def test_sends_single_user_message(self, client):
        client.models.generate_content.return_value = gemini_response("Sales rose 10%.")

        assert generate_with_retry("the prompt", client=client, sleep=MagicMock()) == "Sales rose 10%."

        kwargs = client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == GEMINI_MODEL
        assert kwargs["config"].temperature == 0.2
        assert len(kwargs["contents"]) == 1
        assert kwargs["contents"][0].role == "user"
        assert kwargs["contents"][0].parts[0].text == "the prompt"

    def test_retries_overload_with_linear_backoff(self, client):
        client.models.generate_content.side_effect = [
            overloaded_error(),
            overloaded_error(),
            gemini_response("third time lucky"),
        ]
        sleep = MagicMock()

        assert generate_with_retry("p", client=client, sleep=sleep) == "third time lucky"
        assert client.models.generate_content.call_count == 3
        assert sleep.call_args_list == [call(0.5), call(1.0)]

    def test_gives_up_after_three_overloads(self, client):
        client.models.generate_content.side_effect = [overloaded_error() for _ in range(3)]
        sleep = MagicMock()

        with pytest.raises(CompletionError) as exc_info:
            generate_with_retry("p", client=client, sleep=sleep)

        assert exc_info.value.overloaded
        assert isinstance(exc_info.value.__cause__, genai_errors.ServerError)
        assert client.models.generate_content.call_count == 3
        assert sleep.call_count == 2

    def test_non_overload_error_is_not_retried(self, client):
        client.models.generate_content.side_effect = bad_request_error()
        sleep = MagicMock()

        with pytest.raises(CompletionError) as exc_info:
            generate_with_retry("p", client=client, sleep=sleep)

        assert not exc_info.value.overloaded
        assert exc_info.value.code == 400
        client.models.generate_content.assert_called_once()
        sleep.assert_not_called()

    def test_other_exceptions_propagate(self, client):
        client.models.generate_content.side_effect = ConnectionError("reset")

        with pytest.raises(ConnectionError):
            generate_with_retry("p", client=client, sleep=MagicMock())

    def test_returns_none_when_model_has_no_text(self, client):
        client.models.generate_content.return_value = gemini_response(None)

        assert generate_with_retry("p", client=client, sleep=MagicMock()) is None


class TestClientSetup:
    """Lazy Gemini client creation."""

    @patch("llm.gemini_client._gemini", None)
    @patch("llm.gemini_client.GEMINI_API_KEY", None)
    def test_missing_api_key(self):
        with pytest.raises(CompletionError) as exc_info:
            generate_with_retry("p", sleep=MagicMock())
        assert not exc_info.value.overloaded

    @patch("llm.gemini_client._gemini", None)
    @patch("llm.gemini_client.GEMINI_API_KEY", "test-key")
    @patch("llm.gemini_client.genai.Client")
    def test_client_created_once(self, mock_client_cls):
        mock_client_cls.return_value.models.generate_content.return_value = gemini_response("ok")

        generate_with_retry("p", sleep=MagicMock())
        generate_with_retry("p", sleep=MagicMock())

        mock_client_cls.assert_called_once_with(api_key="test-key")


class TestIsOverloaded:
    """Overload signal detection."""

    def test_status_codes(self):
        assert is_overloaded(overloaded_error())
        assert is_overloaded(CompletionError("busy", status="UNAVAILABLE"))
        assert is_overloaded(CompletionError("busy", code=503))
        assert not is_overloaded(bad_request_error())
        assert not is_overloaded(ValueError("bad json"))
