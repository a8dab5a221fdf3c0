import asyncio
from unittest.mock import patch

import pytest

from fitcoach.config import TextSettings
from fitcoach.errors import ConfigurationError, UpstreamError
from fitcoach.llm.llm_client import _extract_text_from_response, generate_text, generate_text_sync

SETTINGS = TextSettings(api_key="test-key", model="gemini-test")

RESPONSE = {
    "candidates": [
        {"content": {"parts": [{"text": '{"workout": {},'}, {"text": '"diet": {}}'}]}}
    ]
}


def test_missing_key_is_configuration_error():
    with pytest.raises(ConfigurationError):
        generate_text_sync("prompt", TextSettings(api_key=None))


def test_extract_text_joins_parts():
    assert _extract_text_from_response(RESPONSE) == '{"workout": {},\n"diet": {}}'
    assert _extract_text_from_response({"candidates": []}) == ""
    assert _extract_text_from_response(None) == ""


@patch("fitcoach.llm.llm_client.genai")
def test_generate_text_returns_model_text(mock_genai):
    mock_genai.GenerativeModel.return_value.generate_content.return_value = RESPONSE

    text = asyncio.run(generate_text("make a plan", SETTINGS))

    assert text == '{"workout": {},\n"diet": {}}'
    mock_genai.configure.assert_called_once_with(api_key="test-key")
    mock_genai.GenerativeModel.assert_called_once_with("gemini-test")
    args, kwargs = mock_genai.GenerativeModel.return_value.generate_content.call_args
    assert args == ("make a plan",)
    assert kwargs["generation_config"] == {"temperature": 0.7, "max_output_tokens": 2000}


@patch("fitcoach.llm.llm_client.genai")
def test_sdk_failure_is_upstream_error(mock_genai):
    mock_genai.GenerativeModel.return_value.generate_content.side_effect = RuntimeError("quota exceeded")

    with pytest.raises(UpstreamError) as excinfo:
        generate_text_sync("prompt", SETTINGS)
    assert "quota exceeded" in str(excinfo.value)


@patch("fitcoach.llm.llm_client.genai")
def test_empty_response_is_upstream_error(mock_genai):
    mock_genai.GenerativeModel.return_value.generate_content.return_value = {"candidates": [{"content": {"parts": []}}]}

    with pytest.raises(UpstreamError):
        generate_text_sync("prompt", SETTINGS)
