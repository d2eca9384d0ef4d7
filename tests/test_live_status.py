"""Tests for app/services/live_status.py."""

import logging

import pytest

from app.models.schemas import StatusType
from app.services.live_status import build_live_statuses, classify_status


class TestClassifyStatus:
    @pytest.mark.parametrize("wait", ["15", 15, "0", "-3", -1, None, "abc"])
    def test_temporarily_closed_is_down(self, wait):
        """temporaryClosed "true" wins over any wait time."""
        assert classify_status({"id": 1, "temporaryClosed": "true", "waitingTime": wait}) == StatusType.down

    def test_positive_wait_is_operating(self):
        assert classify_status({"id": 1, "temporaryClosed": "false", "waitingTime": "47"}) == StatusType.operating

    def test_sentinel_minus_three_is_closed(self):
        assert classify_status({"id": 1, "temporaryClosed": "false", "waitingTime": "-3"}) == StatusType.closed
        assert classify_status({"id": 1, "temporaryClosed": "false", "waitingTime": -3}) == StatusType.closed

    @pytest.mark.parametrize("wait", ["0", 0, -1, "-2", None, ""])
    def test_other_non_positive_waits_default_to_operating(self, wait):
        assert classify_status({"id": 1, "temporaryClosed": "false", "waitingTime": wait}) == StatusType.operating

    def test_non_numeric_wait_is_reported(self, caplog):
        with caplog.at_level(logging.WARNING):
            status = classify_status({"id": 1, "temporaryClosed": "false", "waitingTime": "n/a"})
        assert status == StatusType.operating
        assert "Unparseable waitingTime" in caplog.text

    @pytest.mark.parametrize("wait", ["1e400", "inf", "-inf", float("inf"), "nan"])
    def test_non_finite_wait_is_reported(self, wait, caplog):
        with caplog.at_level(logging.WARNING):
            status = classify_status({"id": 1, "temporaryClosed": "false", "waitingTime": wait})
        assert status == StatusType.operating
        assert "Non-finite waitingTime" in caplog.text

    @pytest.mark.parametrize("wait,expected", [
        ("-3.5", StatusType.operating),
        ("-3.0", StatusType.closed),
        ("0.5", StatusType.operating),
    ])
    def test_fractional_waits_are_not_truncated(self, wait, expected):
        assert classify_status({"id": 1, "temporaryClosed": "false", "waitingTime": wait}) == expected

    @pytest.mark.parametrize("flag", ["maybe", None, "", 1])
    def test_unknown_flag_defaults_to_operating_and_is_reported(self, flag, caplog):
        with caplog.at_level(logging.WARNING):
            status = classify_status({"id": 9, "temporaryClosed": flag, "waitingTime": "-3"})
        assert status == StatusType.operating
        assert "Unknown temporaryClosed" in caplog.text

    def test_flags_are_case_insensitive_and_accept_booleans(self):
        assert classify_status({"temporaryClosed": "TRUE"}) == StatusType.down
        assert classify_status({"temporaryClosed": True}) == StatusType.down
        assert classify_status({"temporaryClosed": False, "waitingTime": -3}) == StatusType.closed


class TestBuildLiveStatuses:
    def test_matched_entry(self):
        catalog = [{"id": 7, "translatableName": {"de": "Bandit"}}]
        feed = [{"id": 7, "temporaryClosed": "false", "waitingTime": "15"}]

        statuses = build_live_statuses(catalog, feed)

        assert [s.to_document() for s in statuses] == [{"_id": "attr_7", "status": "OPERATING"}]

    def test_unmatched_entries_are_dropped(self):
        catalog = [{"id": 1}, {"id": 2}]
        feed = [
            {"id": 2, "temporaryClosed": "true", "waitingTime": "0"},
            {"id": 99, "temporaryClosed": "false", "waitingTime": "30"},
            {"id": 1, "temporaryClosed": "false", "waitingTime": "-3"},
        ]

        statuses = build_live_statuses(catalog, feed)

        assert [(s.id, s.status) for s in statuses] == [
            ("attr_2", StatusType.down),
            ("attr_1", StatusType.closed),
        ]

    def test_infinite_wait_does_not_sink_the_batch(self):
        """One entry with an overflowing wait time leaves the rest of the feed intact."""
        catalog = [{"id": 1}, {"id": 2}]
        feed = [
            {"id": 1, "temporaryClosed": "false", "waitingTime": "1e400"},
            {"id": 2, "temporaryClosed": "false", "waitingTime": "15"},
        ]

        statuses = build_live_statuses(catalog, feed)

        assert [(s.id, s.status) for s in statuses] == [
            ("attr_1", StatusType.operating),
            ("attr_2", StatusType.operating),
        ]

    def test_ids_match_across_types(self):
        statuses = build_live_statuses([{"id": "5"}], [{"id": 5, "temporaryClosed": "false", "waitingTime": 5}])
        assert [s.id for s in statuses] == ["attr_5"]

    def test_entries_without_id_are_skipped(self, caplog):
        with caplog.at_level(logging.WARNING):
            statuses = build_live_statuses(
                [{"id": 1}],
                [{"temporaryClosed": "true"}, "junk", {"id": 1, "temporaryClosed": "true"}],
            )
        assert [s.id for s in statuses] == ["attr_1"]
        assert "without id" in caplog.text

    def test_empty_inputs(self):
        assert build_live_statuses(None, None) == []
        assert build_live_statuses([], [{"id": 1, "temporaryClosed": "true"}]) == []
