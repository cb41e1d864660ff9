from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Any

_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_COMPACT_DATE_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})$")
_SLASH_DATE_RE = re.compile(r"^(\d{4})/(\d{2})/(\d{2})$")

# US-style dates the NCAA feed uses for `startDate`.
_US_DATE_RE = re.compile(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{4})$")


@dataclass(frozen=True)
class ProviderDates:
    """One calendar day rendered for each provider's URL scheme."""

    espn: str
    ncaa: str | None


def today_utc() -> date:
    return datetime.now(UTC).date()


def provider_dates(value: str | date | None = None) -> ProviderDates:
    """
    Derive per-provider date strings from a caller-supplied date.

    Accepts:
      - None: ESPN gets today (UTC); NCAA gets None so its client picks today
      - datetime.date / datetime
      - "YYYY-MM-DD", "YYYYMMDD", "YYYY/MM/DD"

    Any other string is passed through unchanged to both providers.
    """
    if value is None:
        return ProviderDates(espn=today_utc().strftime("%Y%m%d"), ncaa=None)

    if isinstance(value, date):
        return ProviderDates(espn=value.strftime("%Y%m%d"), ncaa=value.strftime("%Y/%m/%d"))

    v = value.strip()
    for pattern in (_ISO_DATE_RE, _COMPACT_DATE_RE, _SLASH_DATE_RE):
        m = pattern.match(v)
        if m is not None:
            y, mo, d = m.groups()
            return ProviderDates(espn=f"{y}{mo}{d}", ncaa=f"{y}/{mo}/{d}")

    return ProviderDates(espn=value, ncaa=value)


def ncaa_today() -> str:
    return today_utc().strftime("%Y/%m/%d")


def current_year() -> int:
    return today_utc().year


def _format_utc(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).replace(microsecond=0).strftime("%Y-%m-%dT%H:%M:%SZ")


def to_iso_utc(value: Any) -> str | None:
    """
    Best-effort conversion of a provider timestamp to "YYYY-MM-DDTHH:MM:SSZ".

    Supports:
      - ISO strings, with or without "Z" / offset / seconds ("2025-03-01T18:00Z")
      - epoch seconds (int or numeric string)
      - "YYYY-MM-DD", "MM-DD-YYYY", "MM/DD/YYYY" (midnight UTC)

    Returns None instead of raising on anything else.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int | float):
        try:
            return _format_utc(datetime.fromtimestamp(float(value), tz=UTC))
        except (OverflowError, OSError, ValueError):
            return None

    if not isinstance(value, str) or not value.strip():
        return None

    v = value.strip()

    if v.isascii() and v.isdecimal() and len(v) >= 9:
        try:
            return to_iso_utc(int(v))
        except ValueError:
            return None

    m = _US_DATE_RE.match(v)
    if m is not None:
        mo, d, y = (int(p) for p in m.groups())
        try:
            return _format_utc(datetime(y, mo, d, tzinfo=UTC))
        except ValueError:
            return None

    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    try:
        return _format_utc(datetime.fromisoformat(v))
    except ValueError:
        return None
