"""Tests for shared helper functions."""

import logging
from unittest.mock import patch

import pytest
from langchain_core.messages import AIMessage

from hybrid_rag.config import LLMConfig, ToolkitConfig
from hybrid_rag.utils.helpers import (
    collapse_newlines,
    find_timestamp,
    get_llm,
    message_text,
    model_label,
    setup_logging,
    timed_url,
    timestamp_to_seconds,
    truncate,
)


class TestGetLLM:

    @patch("langchain_google_genai.ChatGoogleGenerativeAI")
    def test_google_default(self, mock_cls):
        get_llm(LLMConfig())
        mock_cls.assert_called_once_with(
            model="gemini-2.5-flash",
            temperature=0.2,
            max_output_tokens=4000,
            timeout=60.0,
            max_retries=2,
        )

    @patch("langchain_openai.ChatOpenAI")
    def test_openai(self, mock_cls):
        get_llm(LLMConfig(provider="openai", model_name="gpt-4o-mini", max_tokens=500))
        kwargs = mock_cls.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["max_tokens"] == 500

    @patch("langchain_anthropic.ChatAnthropic")
    def test_anthropic(self, mock_cls):
        get_llm(LLMConfig(provider="anthropic", model_name="claude-sonnet-4-5"))
        assert mock_cls.call_args.kwargs["model"] == "claude-sonnet-4-5"

    def test_model_label(self):
        assert model_label(LLMConfig()) == "google/gemini-2.5-flash"


class TestMessageText:

    def test_string_content(self):
        assert message_text(AIMessage(content="hello")) == "hello"

    def test_content_blocks(self):
        message = AIMessage(content=[
            {"type": "text", "text": "one "},
            {"type": "tool_use", "id": "x", "name": "n", "input": {}},
            "two",
        ])
        assert message_text(message) == "one two"

    def test_plain_string(self):
        assert message_text("raw") == "raw"


class TestTextHelpers:

    def test_collapse_newlines(self):
        assert collapse_newlines("a\nb\r\nc\rd") == "a b c d"

    @pytest.mark.parametrize("text, expected", [
        ("02:30 Chocolate Hills", "02:30"),
        ("see 1:02:30 for the boat", "1:02:30"),
        ("at 5:07 and later 9:00", "5:07"),
        ("no markers, 6,000 PHP", None),
        ("version 12345", None),
    ])
    def test_find_timestamp(self, text, expected):
        assert find_timestamp(text) == expected

    @pytest.mark.parametrize("stamp, seconds", [("02:30", 150), ("1:02:30", 3750), ("0:05", 5)])
    def test_timestamp_to_seconds(self, stamp, seconds):
        assert timestamp_to_seconds(stamp) == seconds

    @pytest.mark.parametrize("url, expected", [
        ("https://youtu.be/abc", "https://youtu.be/abc?t=150"),
        ("https://www.youtube.com/watch?v=abc", "https://www.youtube.com/watch?v=abc&t=150"),
    ])
    def test_timed_url(self, url, expected):
        assert timed_url(url, "02:30") == expected

    def test_truncate(self):
        assert truncate("short", 10) == "short"
        assert truncate("abcdef", 3) == "abc…"


class TestSetupLogging:

    @pytest.fixture(autouse=True)
    def restore_level(self):
        package_logger = logging.getLogger("hybrid_rag")
        previous = package_logger.level
        yield
        package_logger.setLevel(previous)

    def test_uses_configured_level(self):
        setup_logging(ToolkitConfig(log_level="DEBUG").log_level)
        assert logging.getLogger("hybrid_rag").level == logging.DEBUG
        assert logging.getLogger("hybrid_rag.retrieval.search").isEnabledFor(logging.DEBUG)

    def test_unknown_level_falls_back_to_info(self):
        setup_logging("chatty")
        assert logging.getLogger("hybrid_rag").level == logging.INFO
