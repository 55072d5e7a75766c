"""Small helpers shared by the client, dispatcher and formatters."""

from __future__ import annotations

import base64
from collections.abc import Iterable
from datetime import datetime, timezone

from .models.common import Label

OCTET_STREAM_DATA_URI = "data:application/octet-stream;base64,"


def is_valid_iso_date(value: str) -> bool:
    """Check that *value* is a canonical ISO 8601 UTC timestamp.

    The value must parse as a timezone-aware date-time and reproduce itself exactly
    when re-serialized in UTC, as ``YYYY-MM-DDTHH:MM:SSZ`` or
    ``YYYY-MM-DDTHH:MM:SS.sssZ``. Bare dates and offset notations are rejected.
    """
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return False
    if parsed.tzinfo is None:
        return False
    utc = parsed.astimezone(timezone.utc)
    canonical = (
        utc.strftime("%Y-%m-%dT%H:%M:%SZ"),
        utc.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
    )
    return value in canonical


def decode_base64_text(content: str) -> str:
    """Decode base64 file content to text. Raises ``binascii.Error`` on bad padding."""
    return base64.b64decode(content).decode("utf-8", errors="replace")


def to_data_uri(content: str) -> str:
    """Wrap *content* in an octet-stream data URI unless it already carries that prefix."""
    if content.startswith(OCTET_STREAM_DATA_URI):
        return content
    encoded = base64.b64encode(content.encode("utf-8")).decode("ascii")
    return f"{OCTET_STREAM_DATA_URI}{encoded}"


def file_name_from_path(file_path: str) -> str:
    return file_path.rstrip("/").rsplit("/", 1)[-1]


def label_name(label: str | Label) -> str:
    return label if isinstance(label, str) else label.name


def label_names(labels: Iterable[str | Label]) -> list[str]:
    """Normalize plain-string and object labels to display names."""
    return [label_name(label) for label in labels]
