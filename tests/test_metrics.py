"""
Tests for coaching metric computation.

Validates:
- Talk ratio complement and 50/50 default
- Unknown-speaker words excluded from the ratio
- Question counting and open-question scoring
- Default observations
- Half-up rounding
"""

import pytest

from salesbuddy.analysis.metrics import (
    HIGH_TALK_RATIO_OBSERVATION,
    NO_LABELS_OBSERVATION,
    NO_QUESTIONS_OBSERVATION,
    compute_coaching_metrics,
    compute_question_score,
    compute_talk_ratio,
    count_words,
    is_open_question,
    round_half_up,
)


class TestRoundHalfUp:
    """Tests for round_half_up."""

    @pytest.mark.parametrize("value,expected", [
        (0.5, 1),
        (1.5, 2),
        (2.5, 3),
        (12.4999, 12),
        (66.66666, 67),
        (0.0, 0),
    ])
    def test_rounding(self, value, expected):
        assert round_half_up(value) == expected


class TestTalkRatio:
    """Tests for compute_talk_ratio."""

    def test_split(self):
        ratio = compute_talk_ratio(30, 10)
        assert ratio.seller_pct == 75
        assert ratio.customer_pct == 25

    def test_no_words_defaults_to_even(self):
        ratio = compute_talk_ratio(0, 0)
        assert (ratio.seller_pct, ratio.customer_pct) == (50, 50)

    def test_rounding_half_up(self):
        """1 of 8 words is 12.5%, which rounds to 13."""
        ratio = compute_talk_ratio(1, 7)
        assert ratio.seller_pct == 13
        assert ratio.customer_pct == 87


class TestQuestionScore:
    """Tests for compute_question_score."""

    def test_no_questions_scores_zero(self):
        assert compute_question_score(0, 0).score == 0

    def test_two_of_three_open(self):
        assert compute_question_score(3, 2).score == 67


class TestHelpers:
    """Tests for count_words and is_open_question."""

    def test_count_words(self):
        assert count_words("  one two\tthree\n") == 3
        assert count_words("") == 0

    def test_open_question_case_insensitive(self):
        assert is_open_question("WHAT keeps you up at night?")

    def test_closed_question(self):
        assert not is_open_question("Do you use a CRM?")

    def test_hint_inside_word_counts(self):
        """Open-question hints are plain substring matches."""
        assert is_open_question("Is somehow a word?")


class TestComputeCoachingMetrics:
    """Tests for compute_coaching_metrics."""

    def test_sample_transcript(self, sample_transcript):
        """Seller and customer words and questions are attributed."""
        metrics = compute_coaching_metrics(sample_transcript, seller_name="Alex")

        talk = metrics.talk_ratio
        # Alex: 11 + 5 words, Jordan: 11 + 9 words
        assert talk.seller_words == 16
        assert talk.customer_words == 20
        assert talk.seller_pct == 44
        assert talk.customer_pct == 56

        questions = metrics.question_score
        assert questions.seller_questions == 2
        assert questions.open_questions == 1
        assert questions.score == 50

        assert metrics.observations == []

    def test_talk_ratio_always_sums_to_100(self, sample_transcript):
        for hint in (None, "Alex", "Jordan", "nobody"):
            talk = compute_coaching_metrics(sample_transcript, seller_name=hint).talk_ratio
            assert talk.seller_pct + talk.customer_pct == 100

    def test_unlabelled_transcript(self, unlabelled_transcript):
        """No attributed words gives 50/50 and both observations."""
        metrics = compute_coaching_metrics(unlabelled_transcript)

        assert metrics.talk_ratio.seller_pct == 50
        assert metrics.talk_ratio.seller_words == 0
        assert metrics.talk_ratio.customer_words == 0
        assert metrics.question_score.score == 0
        assert metrics.observations == [NO_LABELS_OBSERVATION, NO_QUESTIONS_OBSERVATION]

    def test_unknown_words_excluded(self):
        """Words from unknown speakers do not affect the ratio."""
        transcript = (
            "Sales Rep: one two three\n"
            "Customer: one\n"
            "this line has no speaker and many many words in it\n"
        )
        talk = compute_coaching_metrics(transcript).talk_ratio
        assert talk.seller_words == 3
        assert talk.customer_words == 1
        assert talk.seller_pct == 75

    def test_high_talk_ratio_observation(self):
        transcript = (
            "Sales Rep: let me walk through every feature we have in great detail today\n"
            "Customer: ok\n"
        )
        metrics = compute_coaching_metrics(transcript)
        assert metrics.talk_ratio.seller_pct > 70
        assert HIGH_TALK_RATIO_OBSERVATION in metrics.observations
        assert NO_QUESTIONS_OBSERVATION in metrics.observations

    def test_customer_questions_not_counted(self):
        transcript = "Sales Rep: Here is the plan.\nCustomer: What does it cost?\n"
        questions = compute_coaching_metrics(transcript).question_score
        assert questions.seller_questions == 0
        assert questions.score == 0

    def test_question_mark_anywhere_counts_once(self):
        """An utterance with several question marks is one question."""
        transcript = "Sales Rep: Really? Truly? How so?\nCustomer: yes\n"
        questions = compute_coaching_metrics(transcript).question_score
        assert questions.seller_questions == 1
        assert questions.open_questions == 1

    def test_open_questions_never_exceed_questions(self, sample_transcript):
        questions = compute_coaching_metrics(sample_transcript, "Alex").question_score
        assert 0 <= questions.open_questions <= questions.seller_questions
        assert 0 <= questions.score <= 100

    def test_deterministic(self, sample_transcript):
        first = compute_coaching_metrics(sample_transcript, "Alex")
        second = compute_coaching_metrics(sample_transcript, "Alex")
        assert first == second


class TestScenarios:
    """Reference transcripts with fully worked expectations."""

    def test_balanced_dialogue(self):
        transcript = (
            "Alex: What challenges are you facing?\n"
            "Jordan: We need better reporting.\n"
            "Alex: How does your team use reports today?"
        )
        metrics = compute_coaching_metrics(transcript, seller_name="Alex")

        assert metrics.talk_ratio.seller_words == 12
        assert metrics.talk_ratio.customer_words == 4
        assert metrics.talk_ratio.seller_pct == 75
        assert metrics.question_score.seller_questions == 2
        assert metrics.question_score.open_questions == 2
        assert metrics.question_score.score == 100

    def test_no_seller_questions(self):
        transcript = "Alex: Here is our pricing.\nJordan: Is that per seat?\nAlex: It is."
        metrics = compute_coaching_metrics(transcript, seller_name="Alex")

        assert metrics.question_score.seller_questions == 0
        assert metrics.question_score.score == 0
        assert NO_QUESTIONS_OBSERVATION in metrics.observations

    def test_unlabelled_single_line(self):
        metrics = compute_coaching_metrics("Just some text with no colons at all")

        assert metrics.talk_ratio.seller_words + metrics.talk_ratio.customer_words == 0
        assert metrics.talk_ratio.seller_pct == 50
        assert metrics.talk_ratio.customer_pct == 50
        assert NO_LABELS_OBSERVATION in metrics.observations

    def test_keyword_inside_speaker_name(self):
        """'Michael' contains 'ae' and is counted as the seller."""
        metrics = compute_coaching_metrics("Michael: What do you need?\nJordan: Reporting.")

        assert metrics.talk_ratio.seller_words == 4
        assert metrics.talk_ratio.customer_words == 0
        assert metrics.talk_ratio.seller_pct == 100
        assert metrics.question_score.seller_questions == 1
        assert NO_LABELS_OBSERVATION not in metrics.observations
        assert HIGH_TALK_RATIO_OBSERVATION in metrics.observations
