"""Request Signature - strict timestamp parsing and integrity digest computation.

Invariants:
    - Timestamps use exactly `yyyy-MM-ddTHH:mm:ssZ`: two-digit fields, ASCII digits,
      literal T and Z; anything else parses to None
    - Parsed timestamps are timezone-aware UTC datetimes
    - Digest input order: yyyyMMddHHmmss timestamp, partner key, ref no, total, password
    - Missing (None) digest inputs contribute an empty string
    - Digest = base64(SHA-256(UTF-8 bytes)), compared as exact strings
"""

import base64
import hashlib
import re
from datetime import datetime, timezone

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_TIMESTAMP_PATTERN = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}Z",
)


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a request timestamp as UTC. Returns None when unparseable."""
    if not isinstance(value, str) or not _TIMESTAMP_PATTERN.fullmatch(value):
        return None
    try:
        parsed = datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError:
        # Shape matched but the calendar did not (month 13, Feb 30, hour 24)
        return None
    return parsed.replace(tzinfo=timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Render an aware datetime in the wire timestamp format."""
    return moment.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def _digest_timestamp(moment: datetime) -> str:
    """yyyyMMddHHmmss in UTC, zero-padded (strftime %Y does not pad years < 1000)."""
    t = moment.astimezone(timezone.utc)
    return (
        f"{t.year:04d}{t.month:02d}{t.day:02d}"
        f"{t.hour:02d}{t.minute:02d}{t.second:02d}"
    )


def compute_signature(
    timestamp: datetime,
    partner_key: str | None,
    partner_ref_no: str | None,
    total_amount: int | None,
    partner_password: str | None,
) -> str:
    """Compute the base64 SHA-256 integrity digest of a request."""
    payload = "".join((
        _digest_timestamp(timestamp),
        partner_key or "",
        partner_ref_no or "",
        "" if total_amount is None else str(total_amount),
        partner_password or "",
    ))
    digest = hashlib.sha256(payload.encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")
