"""Query string helpers for check results and write operations."""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

from .types import CheckType

AUTO_ASSIGN_ALERTS_FLAG = "autoAssignAlerts=false"


@dataclass
class CheckResultsFilter:
    """Filters for listing check results. Zero or empty values are not applied."""

    page: int = 0
    limit: int = 0
    from_: int = 0
    to: int = 0
    check_type: Optional[CheckType] = None
    has_failures: bool = False
    location: str = ""


def build_check_results_query(filters: Optional[CheckResultsFilter]) -> str:
    """
    Encode a check results filter as a query string.

    Args:
        filters: The filter to encode, or None

    Returns:
        The encoded query without a leading "?", empty when nothing is set
    """
    if filters is None:
        return ""

    params: dict[str, str] = {}
    if filters.page > 0:
        params["page"] = str(filters.page)
    if filters.limit > 0:
        params["limit"] = str(filters.limit)
    if filters.from_ > 0:
        params["from"] = str(filters.from_)
    if filters.to > 0:
        params["to"] = str(filters.to)
    if filters.check_type in (CheckType.API, CheckType.BROWSER):
        params["checkType"] = CheckType(filters.check_type).value
    if filters.has_failures:
        params["hasFailures"] = "1"
    if filters.location:
        params["location"] = filters.location

    return urlencode(sorted(params.items()))


def with_auto_assign_alerts_flag(path: str) -> str:
    """Append the flag that stops the API from subscribing all alert channels."""
    if "?" in path:
        return f"{path}&{AUTO_ASSIGN_ALERTS_FLAG}"
    return f"{path}?{AUTO_ASSIGN_ALERTS_FLAG}"
