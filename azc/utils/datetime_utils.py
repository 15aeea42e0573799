#!/usr/bin/env python3
"""
Datetime Utility Functions

Parsing helpers for the timestamps returned by the Azure CLI and the
Azure DevOps REST API, used when ordering pull requests and comment threads.
"""

import re
from datetime import UTC, datetime

# ADO emits up to 7 fractional digits ("2026-02-10T10:00:00.1234567Z")
_FRACTION_PATTERN = re.compile(r"\.(\d{6})\d+")

# Sort key for items whose timestamp is missing or unparseable
EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def parse_ado_timestamp(timestamp_str: str | None) -> datetime | None:
    """
    Parse Azure DevOps ISO timestamp with 'Z' suffix to datetime object.

    Examples: "2026-02-10T10:00:00Z", "2026-02-10T10:00:00.1234567Z"

    Args:
        timestamp_str: ISO timestamp string, or None

    Returns:
        Timezone-aware datetime (naive input is assumed UTC), or None if input is empty

    Raises:
        ValueError: If timestamp format is invalid or cannot be parsed

    Examples:
        >>> parse_ado_timestamp("2026-02-10T10:00:00Z")
        datetime.datetime(2026, 2, 10, 10, 0, tzinfo=datetime.timezone.utc)
    """
    if not timestamp_str:
        return None

    if not isinstance(timestamp_str, str):
        raise ValueError(f"Timestamp must be a string, got {type(timestamp_str)}")

    try:
        normalized = _FRACTION_PATTERN.sub(r".\1", timestamp_str.replace("Z", "+00:00"))
        parsed = datetime.fromisoformat(normalized)
    except (ValueError, AttributeError) as e:
        raise ValueError(f"Invalid timestamp format: {timestamp_str}") from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def timestamp_sort_key(timestamp_str: str | None) -> datetime:
    """
    Sort key for ADO timestamps. Missing or invalid values sort as the epoch.
    """
    try:
        parsed = parse_ado_timestamp(timestamp_str)
    except ValueError:
        return EPOCH
    return parsed or EPOCH
