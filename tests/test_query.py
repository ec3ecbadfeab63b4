"""Tests for query string helpers."""

import pytest

from checkly_sdk import (
    CheckResultsFilter,
    CheckType,
    build_check_results_query,
    with_auto_assign_alerts_flag,
)


class TestBuildCheckResultsQuery:
    def test_empty_filter(self) -> None:
        assert build_check_results_query(CheckResultsFilter()) == ""

    def test_no_filter(self) -> None:
        assert build_check_results_query(None) == ""

    def test_has_failures_only(self) -> None:
        assert build_check_results_query(CheckResultsFilter(has_failures=True)) == "hasFailures=1"

    def test_all_fields(self) -> None:
        query = build_check_results_query(
            CheckResultsFilter(
                page=2,
                limit=50,
                from_=1700000000,
                to=1700003600,
                check_type=CheckType.BROWSER,
                has_failures=True,
                location="eu west",
            )
        )

        assert query == (
            "checkType=BROWSER&from=1700000000&hasFailures=1"
            "&limit=50&location=eu+west&page=2&to=1700003600"
        )

    def test_ignores_non_positive_numbers(self) -> None:
        query = build_check_results_query(CheckResultsFilter(page=-1, limit=0, from_=-5, to=0))

        assert query == ""

    def test_accepts_plain_string_check_type(self) -> None:
        query = build_check_results_query(CheckResultsFilter(check_type="API"))  # type: ignore[arg-type]

        assert query == "checkType=API"

    def test_ignores_unknown_check_type(self) -> None:
        query = build_check_results_query(CheckResultsFilter(check_type="HEARTBEAT"))  # type: ignore[arg-type]

        assert query == ""


class TestAutoAssignAlertsFlag:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("checks", "checks?autoAssignAlerts=false"),
            ("check-groups/4", "check-groups/4?autoAssignAlerts=false"),
            ("checks?foo=bar", "checks?foo=bar&autoAssignAlerts=false"),
        ],
    )
    def test_joins_flag(self, path: str, expected: str) -> None:
        assert with_auto_assign_alerts_flag(path) == expected
