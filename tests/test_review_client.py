from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from openai import OpenAIError

from gpt_review.models import ReviewSuggestion
from gpt_review.review_client import GENERATION_CONFIG, ReviewClient, parse_review_response


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def openai_client():
    return MagicMock()


@pytest.fixture
def review_client(config, openai_client):
    return ReviewClient(config, client=openai_client)


class TestParseReviewResponse:
    def test_well_formed_reply(self):
        suggestions = parse_review_response('[{"lineNumber":"12","reviewComment":"fix this"}]')
        assert suggestions == [ReviewSuggestion(lineNumber="12", reviewComment="fix this")]

    def test_integer_line_number_kept_as_text(self):
        suggestions = parse_review_response('[{"lineNumber": 3, "reviewComment": "x"}]')
        assert suggestions[0].lineNumber == "3"

    @pytest.mark.parametrize("text", ["", "   \n", None, "[]"])
    def test_empty_reply_means_no_suggestions(self, text):
        assert parse_review_response(text) == []

    @pytest.mark.parametrize("text", [
        "Looks good to me!",
        '[{"lineNumber": "12", "reviewComment": "trunc',
        '{"reviews": []}',
        '"just a string"',
    ])
    def test_unparseable_reply(self, text):
        assert parse_review_response(text) is None

    def test_code_fenced_reply(self):
        text = '```json\n[{"lineNumber": "4", "reviewComment": "rename"}]\n```'
        assert parse_review_response(text)[0].reviewComment == "rename"

    def test_extra_fields_ignored(self):
        suggestions = parse_review_response('[{"lineNumber": "1", "reviewComment": "c", "severity": "high"}]')
        assert suggestions[0].model_dump() == {"lineNumber": "1", "reviewComment": "c"}

    def test_invalid_entries_dropped(self):
        text = (
            '[{"lineNumber": "abc", "reviewComment": "bad line"},'
            ' {"lineNumber": "-1", "reviewComment": "negative"},'
            ' {"reviewComment": "no line"},'
            ' "not an object",'
            ' {"lineNumber": "8", "reviewComment": "ok"}]'
        )
        assert [s.lineNumber for s in parse_review_response(text)] == ["8"]


class TestReviewClient:
    def test_single_system_message_with_generation_config(self, review_client, openai_client):
        openai_client.chat.completions.create.return_value = _completion("[]")

        assert review_client.get_review("PROMPT") == []

        openai_client.chat.completions.create.assert_called_once_with(
            model="gpt-4",
            messages=[{"role": "system", "content": "PROMPT"}],
            **GENERATION_CONFIG,
        )

    def test_generation_config_values(self):
        assert GENERATION_CONFIG == {
            "temperature": 0.2,
            "max_tokens": 700,
            "top_p": 1,
            "frequency_penalty": 0,
            "presence_penalty": 0,
        }

    def test_reply_is_trimmed_and_parsed(self, review_client, openai_client):
        openai_client.chat.completions.create.return_value = _completion(
            '\n  [{"lineNumber":"12","reviewComment":"fix this"}]  \n'
        )
        assert review_client.get_review("p") == [ReviewSuggestion(lineNumber="12", reviewComment="fix this")]

    def test_missing_content_means_no_suggestions(self, review_client, openai_client):
        openai_client.chat.completions.create.return_value = _completion(None)
        assert review_client.get_review("p") == []

    def test_no_choices(self, review_client, openai_client):
        openai_client.chat.completions.create.return_value = SimpleNamespace(choices=[])
        assert review_client.get_review("p") == []

    def test_prose_reply_returns_none(self, review_client, openai_client):
        openai_client.chat.completions.create.return_value = _completion("Nothing to add here.")
        assert review_client.get_review("p") is None

    def test_service_failure_returns_none(self, review_client, openai_client):
        openai_client.chat.completions.create.side_effect = OpenAIError("rate limited")
        assert review_client.get_review("p") is None

    def test_builds_azure_client_from_config(self, config):
        client = ReviewClient(config)
        assert str(client.client.base_url).startswith("https://example.openai.azure.com/openai")
        assert client.deployment == "gpt-4"
