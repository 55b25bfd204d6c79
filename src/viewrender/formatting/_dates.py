"""Date and time display helpers.

All helpers convert their input into the registry's display timezone before
formatting. Naive datetimes are treated as UTC. Format strings use pendulum
tokens (``YYYY-MM-DD``, ``h:mma``, ...).
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

import pendulum

from ._timezone import DisplayTimezone

type Clock = Callable[[], pendulum.DateTime]


def utc_now() -> pendulum.DateTime:
    """Return the current instant in UTC."""
    return pendulum.now("UTC")


def _in_zone(val: datetime, zone: DisplayTimezone | str) -> pendulum.DateTime:
    return pendulum.instance(val).in_timezone(zone)


def format_date_utc(val: datetime, fmt: str) -> str:
    """Format `val` in UTC with a pendulum token format."""
    return _in_zone(val, pendulum.UTC).format(fmt)


def format_date(val: datetime, zone: DisplayTimezone | str, fmt: str) -> str:
    """Format `val` in an explicit zone with a pendulum token format."""
    return _in_zone(val, zone).format(fmt)


def full_date_format(val: datetime, zone: DisplayTimezone | str) -> str:
    """Monday, January 2, 2006."""
    return _in_zone(val, zone).format("dddd, MMMM D, YYYY")


def time_format_am_pm(val: datetime, zone: DisplayTimezone | str) -> str:
    """3:04pm."""
    return _in_zone(val, zone).format("h:mma")


@dataclass(frozen=True, slots=True)
class DateFormatters:
    """Date helpers bound to one display timezone and one clock.

    Attributes:
        timezone: Zone every helper renders in.
        clock: Source of "now" for `is_today`.
    """

    timezone: DisplayTimezone
    clock: Clock = utc_now

    def _local(self, val: datetime) -> pendulum.DateTime:
        return _in_zone(val, self.timezone)

    def full_date_time_et(self, val: datetime) -> str:
        """2006-01-02 15:04."""
        return self._local(val).format("YYYY-MM-DD HH:mm")

    def short_date_time(self, val: datetime) -> str:
        """Jan 02 3:04pm."""
        return self._local(val).format("MMM DD h:mma")

    def date_time_formal(self, val: datetime) -> str:
        """January 02, 2006 at 3:04pm."""
        return self._local(val).format("MMMM DD, YYYY [at] h:mma")

    def time_format(self, val: datetime) -> str:
        return self._local(val).format("h:mma")

    def full_display_date(self, val: datetime) -> str:
        return full_date_format(val, self.timezone)

    def display_date(self, val: datetime | None) -> str:
        """01/02/2006, or an empty string for a missing date."""
        if val is None:
            return ""
        return self._local(val).format("MM/DD/YYYY")

    def display_date_time(self, val: datetime | None) -> str:
        """01/02/2006 03:04PM, or an empty string for a missing date."""
        if val is None:
            return ""
        return self._local(val).format("MM/DD/YYYY hh:mmA")

    def display_morning_afternoon_evening(self, val: datetime) -> str:
        hour = self._local(val).hour
        if hour < 12:  # noqa: PLR2004
            return "morning"
        if hour < 17:  # noqa: PLR2004
            return "afternoon"
        return "evening"

    def date_format_display(self, val: datetime) -> str:
        """January 2006."""
        return self._local(val).format("MMMM YYYY")

    def date_month(self, val: datetime) -> str:
        return self._local(val).format("MMM")

    def date_day(self, val: datetime) -> str:
        return self._local(val).format("D")

    def date_year(self, val: datetime) -> str:
        return self._local(val).format("YYYY")

    def intl_date_display(self, val: datetime) -> str:
        """2006-01-02."""
        return self._local(val).format("YYYY-MM-DD")

    def when_completed_display(self, val: datetime | None) -> str:
        if val is None:
            return ""
        return "completed " + self.date_format_display(val)

    def when_revised_display(self, val: datetime | None) -> str:
        if val is None:
            return ""
        return ", revised " + self.date_format_display(val)

    def issue_date_format_display(self, val: datetime | None) -> str:
        if val is None:
            return ""
        return self.date_format_display(val)

    def is_today(self, val: datetime) -> bool:
        """Whether `val` falls on the clock's current calendar day."""
        now = self.clock().in_timezone(self.timezone)
        return self._local(val).date() == now.date()

    def helpers(self) -> dict[str, Callable[..., object]]:
        """Return the bound helpers keyed by registry name."""
        return {
            "format_date": format_date,
            "format_date_utc": format_date_utc,
            "full_date_format": full_date_format,
            "time_format_am_pm": time_format_am_pm,
            "display_date": self.display_date,
            "display_date_time": self.display_date_time,
            "display_morning_afternoon_evening": (
                self.display_morning_afternoon_evening
            ),
            "date_format_display": self.date_format_display,
            "date_month": self.date_month,
            "date_day": self.date_day,
            "date_year": self.date_year,
            "date_time_formal": self.date_time_formal,
            "short_date_time": self.short_date_time,
            "full_date_time_et": self.full_date_time_et,
            "full_display_date": self.full_display_date,
            "time_format": self.time_format,
            "intl_date_display": self.intl_date_display,
            "when_completed_display": self.when_completed_display,
            "when_revised_display": self.when_revised_display,
            "issue_date_format_display": self.issue_date_format_display,
            "is_today": self.is_today,
        }
