"""
Tests for the chat-completions client and JSON extraction.

Validates:
- Client construction (missing key, from_config)
- Request payload and headers
- HTTP error handling (timeout, 4xx/5xx, connection errors)
- Empty and malformed completions
- Lenient JSON parsing of model output

Uses unittest.mock to mock requests.post responses.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from salesbuddy.config import Config
from salesbuddy.errors import LLMEmptyResponseError, LLMError, LLMResponseError, StoreError
from salesbuddy.llm.client import LLMClient
from salesbuddy.llm.parsing import parse_json_object, safe_json_parse


# ---------------------------------------------------------------------------
#  Helpers
# ---------------------------------------------------------------------------

def _mock_response(json_data=None, status_code=200, json_error=None):
    """Create a mock requests.Response object."""
    mock_response = MagicMock()
    mock_response.status_code = status_code
    if json_error is not None:
        mock_response.json.side_effect = json_error
    else:
        mock_response.json.return_value = json_data
    if status_code >= 400:
        mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} Error"
        )
    else:
        mock_response.raise_for_status.return_value = None
    return mock_response


def _completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


# ---------------------------------------------------------------------------
#  Construction
# ---------------------------------------------------------------------------

class TestClientInit:
    """Tests for client construction."""

    def test_missing_key_raises(self):
        with pytest.raises(LLMError):
            LLMClient(api_key="")

    def test_base_url_trailing_slash(self):
        client = LLMClient(api_key="k", base_url="http://localhost:8000/v1/")
        assert client.endpoint == "http://localhost:8000/v1/chat/completions"

    def test_from_config_without_key(self):
        config = Config(llm_api_key=None)
        assert LLMClient.from_config(config) is None

    def test_from_config_with_key(self):
        config = Config(llm_api_key="sk-test", llm_model="test-model", llm_timeout=5)
        client = LLMClient.from_config(config)

        assert client.api_key == "sk-test"
        assert client.model == "test-model"
        assert client.timeout == 5


# ---------------------------------------------------------------------------
#  complete()
# ---------------------------------------------------------------------------

class TestComplete:
    """Tests for LLMClient.complete."""

    @patch("salesbuddy.llm.client.requests.post")
    def test_success(self, mock_post):
        mock_post.return_value = _mock_response(_completion("hello"))
        client = LLMClient(api_key="sk-test", model="gpt-test")

        text = client.complete([{"role": "user", "content": "hi"}], max_tokens=100)

        assert text == "hello"
        args, kwargs = mock_post.call_args
        assert args[0] == "https://api.openai.com/v1/chat/completions"
        assert kwargs["json"] == {
            "model": "gpt-test",
            "messages": [{"role": "user", "content": "hi"}],
            "max_completion_tokens": 100,
        }
        assert kwargs["headers"]["Authorization"] == "Bearer sk-test"

    @patch("salesbuddy.llm.client.requests.post")
    def test_timeout(self, mock_post):
        mock_post.side_effect = requests.exceptions.Timeout("timed out")
        with pytest.raises(LLMError, match="timed out"):
            LLMClient(api_key="k").complete([])

    @patch("salesbuddy.llm.client.requests.post")
    def test_http_error(self, mock_post):
        mock_post.return_value = _mock_response({}, status_code=500)
        with pytest.raises(LLMError, match="HTTP error"):
            LLMClient(api_key="k").complete([])

    @patch("salesbuddy.llm.client.requests.post")
    def test_connection_error(self, mock_post):
        mock_post.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(LLMError, match="request failed"):
            LLMClient(api_key="k").complete([])

    @patch("salesbuddy.llm.client.requests.post")
    def test_non_json_body(self, mock_post):
        mock_post.return_value = _mock_response(json_error=ValueError("bad json"))
        with pytest.raises(LLMError, match="not JSON"):
            LLMClient(api_key="k").complete([])

    @pytest.mark.parametrize("data", [
        _completion(""),
        _completion(None),
        {"choices": []},
        {},
        [],
    ])
    @patch("salesbuddy.llm.client.requests.post")
    def test_empty_completion(self, mock_post, data):
        mock_post.return_value = _mock_response(data)
        with pytest.raises(LLMEmptyResponseError):
            LLMClient(api_key="k").complete([])


# ---------------------------------------------------------------------------
#  JSON extraction
# ---------------------------------------------------------------------------

class TestSafeJsonParse:
    """Tests for safe_json_parse and parse_json_object."""

    def test_plain_json(self):
        assert safe_json_parse('{"a": 1}') == {"a": 1}

    def test_code_fence(self):
        assert safe_json_parse('```json\n{"a": 1}\n```') == {"a": 1}

    def test_prose_around_object(self):
        assert safe_json_parse('Sure! {"a": {"b": 2}} Hope that helps.') == {"a": {"b": 2}}

    def test_garbage(self):
        assert safe_json_parse("no json here") is None

    def test_broken_braces(self):
        assert safe_json_parse("{ not: valid }") is None

    def test_array_is_returned(self):
        assert safe_json_parse("[1, 2]") == [1, 2]

    def test_parse_json_object_rejects_array(self):
        with pytest.raises(LLMResponseError):
            parse_json_object("[1, 2]")

    def test_parse_json_object_rejects_garbage(self):
        with pytest.raises(LLMResponseError):
            parse_json_object("nope")


class TestErrorHierarchy:
    """Model errors share LLMError so callers can catch them together."""

    @pytest.mark.parametrize("error_cls", [LLMResponseError, LLMEmptyResponseError])
    def test_subclasses_llm_error(self, error_cls):
        assert issubclass(error_cls, LLMError)
        assert not issubclass(error_cls, StoreError)
