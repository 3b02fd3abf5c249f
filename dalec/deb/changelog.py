"""Values for the debian/changelog file generated from a spec."""

from __future__ import annotations

from datetime import datetime, timezone

from ..spec import ChangelogEntry, Spec

DISTRO_VERSION_ID_SEPARATOR = "u"

_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

DUMMY_CHANGELOG_ENTRY = ChangelogEntry(
    date=datetime.fromtimestamp(0, timezone.utc),
    author="Dalec Dummy Changelog <>",
    changes=["Dummy changelog entry"],
)


def distro_version_id(distro_id: str) -> str:
    return distro_id or ""


def distro_version_separator(distro_id: str) -> str:
    return DISTRO_VERSION_ID_SEPARATOR if distro_id else ""


def _aware(date: datetime) -> datetime:
    return date if date.tzinfo is not None else date.replace(tzinfo=timezone.utc)


def _format_date(date: datetime) -> str:
    date = _aware(date)
    offset = int(date.utcoffset().total_seconds()) // 60
    sign = "+" if offset >= 0 else "-"
    hours, minutes = divmod(abs(offset), 60)
    return (
        f"{_DAYS[date.weekday()]}, {date.day:02d} {_MONTHS[date.month - 1]} {date.year:04d} "
        f"{date.hour:02d}:{date.minute:02d}:{date.second:02d} {sign}{hours:02d}{minutes:02d}"
    )


def changelog_change(spec: Spec) -> str:
    """The body of the changelog entry: the change lines and the trailer line."""
    entries = sorted(spec.changelog, key=lambda e: _aware(e.date))
    entry = entries[0] if entries else DUMMY_CHANGELOG_ENTRY
    body = "".join(f"  * {change}\n" for change in entry.changes)
    return body + f" -- {entry.author}  {_format_date(entry.date)}"