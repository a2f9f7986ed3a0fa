"""Tests for prediction badge parsing, layout inference and reporting."""

import pytest

from hextwitch.output import PredictionTracker, PredictUpdate
from hextwitch.output.prediction import (
    Predict,
    PredictionBadge,
    PredictMode,
    PredictVariant,
)


def badge(raw):
    parsed = PredictionBadge.parse(raw)
    assert parsed is not None
    return parsed


class TestPredictionBadge:
    def test_parse(self):
        assert PredictionBadge.parse("blue-3") == PredictionBadge(PredictVariant.BLUE, 3)
        assert PredictionBadge.parse("PINK-2") == PredictionBadge(PredictVariant.PINK, 2)

    @pytest.mark.parametrize("raw", ["", "blue", "blue-", "blue-x", "red-1", "gray-0"])
    def test_parse_rejects(self, raw):
        assert PredictionBadge.parse(raw) is None

    def test_str(self):
        assert str(badge("gray-2")) == "gray-2"

    def test_ordering_is_variant_then_rank(self):
        assert sorted([badge("pink-2"), badge("blue-5"), badge("blue-1")]) == [
            badge("blue-1"),
            badge("blue-5"),
            badge("pink-2"),
        ]


class TestPredictMode:
    def test_accepts(self):
        assert PredictMode.BLUE10.accepts(badge("blue-10"))
        assert not PredictMode.BLUE10.accepts(badge("blue-11"))
        assert not PredictMode.BLUE10.accepts(badge("pink-2"))
        assert PredictMode.BLUE_PINK.accepts(badge("blue-1"))
        assert not PredictMode.BLUE_PINK.accepts(badge("blue-2"))
        assert PredictMode.GRAY2.accepts(badge("gray-2"))
        assert PredictMode.UNKNOWN.accepts(badge("pink-7"))

    def test_guess(self):
        assert PredictMode.guess(badge("blue-1")) is None
        assert PredictMode.guess(badge("blue-4")) is PredictMode.BLUE10
        assert PredictMode.guess(badge("pink-2")) is PredictMode.BLUE_PINK
        assert PredictMode.guess(badge("gray-1")) is PredictMode.GRAY2
        assert PredictMode.guess(badge("pink-3")) is None


class TestPredict:
    def test_new_label_is_reported_once(self):
        predict = Predict()
        assert predict.observe(badge("blue-1"), "Yes") is PredictUpdate.LABEL
        assert predict.observe(badge("blue-1"), "Yes") is PredictUpdate.NONE

    def test_mode_switch_keeps_earlier_labels(self):
        predict = Predict()
        predict.observe(badge("blue-1"), "Yes")
        update = predict.observe(badge("pink-2"), "No")
        assert update is PredictUpdate.BOTH
        assert predict.mode is PredictMode.BLUE_PINK
        assert predict.display() == '"Yes" (⧮) or "No" (⧯)'

    def test_blue10_icons_carry_rank(self):
        predict = Predict()
        for n, label in enumerate(["a", "b", "c"], start=1):
            predict.observe(badge(f"blue-{n}"), label)
        assert predict.display() == '"a" (⧮1), "b" (⧮2), or "c" (⧮3)'

    def test_labels_outside_layout_are_hidden(self):
        predict = Predict()
        predict.observe(badge("blue-5"), "Five")
        predict.observe(badge("gray-1"), "G")
        assert predict.mode is PredictMode.GRAY2
        assert predict.display() == '"G" (⧲)'
        assert not predict.is_empty()

    def test_unguessable_badge_keeps_layout(self):
        predict = Predict()
        update = predict.observe(badge("pink-3"), "odd")
        assert update is PredictUpdate.LABEL
        assert predict.mode is PredictMode.BLUE10
        assert predict.display() == "Unknown"

    def test_unguessable_badge_in_debug_goes_unknown(self):
        predict = Predict()
        update = predict.observe(badge("pink-3"), "odd", debug=True)
        assert update is PredictUpdate.BOTH
        assert predict.mode is PredictMode.UNKNOWN
        assert predict.display() == '"odd" (⧯)'


class TestPredictionTracker:
    def test_report_without_prediction(self):
        assert PredictionTracker().report("#c") == "No active Prediction."

    def test_report(self):
        tracker = PredictionTracker()
        tracker.observe("#c", "blue-1", "Yes")
        tracker.observe("#c", "pink-2", "No")
        assert tracker.report("#c") == 'Current Prediction (Blue/Pink): "Yes" (⧮) or "No" (⧯)'

    def test_bad_badge_is_ignored(self):
        tracker = PredictionTracker()
        assert tracker.observe("#c", "orange-1", "x") is PredictUpdate.NONE
        assert tracker.get("#c") is None

    def test_get_returns_a_copy(self):
        tracker = PredictionTracker()
        tracker.observe("#c", "blue-1", "Yes")
        snapshot = tracker.get("#c")
        snapshot.labels.clear()
        assert not tracker.get("#c").is_empty()

    def test_clear(self):
        tracker = PredictionTracker()
        tracker.observe("#c", "blue-1", "Yes")
        tracker.clear("#c")
        assert tracker.report("#c") == "No active Prediction."
