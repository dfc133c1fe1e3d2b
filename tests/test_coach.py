"""
Tests for the coaching helpers.

Validates:
- improve_content input checks, prompt selection and empty answers
- get_coaching_advice with and without a model
- Advice parsing with missing fields
- Prompt context from metrics
"""

import json

import pytest

from salesbuddy.coaching.coach import (
    CALL_SCRIPT_PROMPT,
    DEFAULT_TIPS,
    DEFAULT_WHY_IT_MATTERS,
    EMAIL_PROMPT,
    IMPROVE_MAX_TOKENS,
    build_advice_prompt,
    get_coaching_advice,
    improve_content,
    parse_advice_response,
)
from salesbuddy.errors import LLMEmptyResponseError, LLMError


OBSERVATION = "Seller talk ratio is high; aim for more buyer airtime."


# ---------------------------------------------------------------------------
#  improve_content
# ---------------------------------------------------------------------------

class TestImproveContent:
    """Tests for improve_content."""

    def test_email(self, fake_llm):
        client = fake_llm("Polished email")
        assert improve_content("hi jordan thx", "email", client) == "Polished email"

        call = client.calls[0]
        assert call["messages"][0]["content"] == EMAIL_PROMPT
        assert call["messages"][1]["content"] == "hi jordan thx"
        assert call["max_tokens"] == IMPROVE_MAX_TOKENS

    def test_call_script(self, fake_llm):
        client = fake_llm("1. Open\n2. Ask")
        improve_content("open then ask", "callScript", client)
        assert client.calls[0]["messages"][0]["content"] == CALL_SCRIPT_PROMPT

    def test_empty_answer_returns_original(self, fake_llm):
        client = fake_llm(LLMEmptyResponseError("empty"))
        assert improve_content("draft", "email", client) == "draft"

    def test_other_errors_propagate(self, fake_llm):
        client = fake_llm(LLMError("HTTP error"))
        with pytest.raises(LLMError):
            improve_content("draft", "email", client)

    @pytest.mark.parametrize("content,kind", [
        ("", "email"),
        (None, "email"),
        ("draft", "sms"),
    ])
    def test_invalid_input(self, fake_llm, content, kind):
        with pytest.raises(ValueError):
            improve_content(content, kind, fake_llm())

    def test_requires_client(self):
        with pytest.raises(LLMError):
            improve_content("draft", "email", None)


# ---------------------------------------------------------------------------
#  get_coaching_advice
# ---------------------------------------------------------------------------

class TestCoachingAdvice:
    """Tests for get_coaching_advice."""

    def test_no_client_returns_defaults(self):
        advice = get_coaching_advice(OBSERVATION)

        assert advice.observation == OBSERVATION
        assert advice.why_it_matters == DEFAULT_WHY_IT_MATTERS
        assert advice.actionable_tips == DEFAULT_TIPS

    def test_model_advice(self, fake_llm):
        response = json.dumps({
            "whyItMatters": "Buyers who talk more buy more.",
            "actionableTips": ["Pause after questions"],
            "examplePhrases": ['"What else?"'],
            "relatedMetrics": ["Talk ratio"],
        })
        client = fake_llm(response)
        advice = get_coaching_advice(OBSERVATION, seller_name="Alex", client=client)

        assert advice.why_it_matters == "Buyers who talk more buy more."
        assert advice.actionable_tips == ["Pause after questions"]
        assert "Salesperson: Alex" in client.calls[0]["messages"][0]["content"]
        assert OBSERVATION in client.calls[0]["messages"][1]["content"]

    @pytest.mark.parametrize("response", [
        "not json",
        LLMError("timed out"),
        LLMEmptyResponseError("empty"),
    ])
    def test_model_failure_falls_back(self, fake_llm, response):
        advice = get_coaching_advice(OBSERVATION, client=fake_llm(response))
        assert advice.why_it_matters == DEFAULT_WHY_IT_MATTERS

    def test_empty_observation(self):
        with pytest.raises(ValueError):
            get_coaching_advice("")

    def test_to_dict_camel_case(self):
        data = get_coaching_advice(OBSERVATION).to_dict()
        assert set(data) == {
            "observation", "whyItMatters", "actionableTips", "examplePhrases", "relatedMetrics",
        }


class TestAdviceHelpers:
    """Tests for prompt building and response parsing."""

    def test_partial_response_defaults(self):
        advice = parse_advice_response(OBSERVATION, '{"examplePhrases": "not a list"}')
        assert advice.why_it_matters == "This observation highlights an area for improvement."
        assert advice.actionable_tips == ["Practice this skill in your next call."]
        assert advice.example_phrases == ['"Can you tell me more about that?"']
        assert advice.related_metrics == ["Talk ratio", "Question quality"]

    def test_empty_list_kept(self):
        """An explicit empty list from the model is not replaced by defaults."""
        advice = parse_advice_response(OBSERVATION, '{"actionableTips": [], "relatedMetrics": []}')
        assert advice.actionable_tips == []
        assert advice.related_metrics == []
        assert advice.example_phrases == ['"Can you tell me more about that?"']

    def test_prompt_context(self):
        prompt = build_advice_prompt("Alex", {"talk_ratio": 72, "question_score": 40})
        assert "Context:\nSalesperson: Alex\nCurrent talk ratio: 72% seller" in prompt
        assert "Question quality score: 40%" in prompt
        assert "Average buy likelihood" not in prompt

    def test_prompt_without_context(self):
        assert "Context:" not in build_advice_prompt()
