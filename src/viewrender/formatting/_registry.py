"""The formatter registry: one immutable helper table shared by every template."""

from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType

from structlog.typing import FilteringBoundLogger

from . import _numbers, _text
from ._dates import Clock, DateFormatters, utc_now
from ._timezone import DEFAULT_TIMEZONE, DisplayTimezone, load_timezone

type Helper = Callable[..., object]


class FormatterRegistry(Mapping[str, Helper]):
    """Read-only mapping from helper name to formatting function.

    Built once by `build_registry` and then shared by reference with every
    compiler and composer. The underlying table is a ``MappingProxyType``,
    so there is no way to add, replace or remove an entry after
    construction; concurrent readers need no locking.

    Attributes:
        timezone: Display timezone the date helpers render in.
        timezone_fallback: True when the requested zone could not be loaded
            and UTC is being used instead.
    """

    __slots__ = ("_helpers", "timezone", "timezone_fallback")

    def __init__(
        self,
        helpers: Mapping[str, Helper],
        *,
        timezone: DisplayTimezone,
        timezone_fallback: bool = False,
    ) -> None:
        self._helpers: MappingProxyType[str, Helper] = MappingProxyType(
            dict(helpers)
        )
        self.timezone: DisplayTimezone = timezone
        self.timezone_fallback: bool = timezone_fallback

    def __getitem__(self, name: str) -> Helper:
        return self._helpers[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._helpers)

    def __len__(self) -> int:
        return len(self._helpers)

    def __repr__(self) -> str:
        return (
            f"FormatterRegistry({len(self)} helpers, timezone={self.timezone.name!r})"
        )


def build_registry(
    *,
    timezone: str = DEFAULT_TIMEZONE,
    clock: Clock | None = None,
    logger: FilteringBoundLogger | None = None,
) -> FormatterRegistry:
    """Build the formatter registry.

    Deterministic for a given timezone name and clock. If the timezone
    cannot be loaded, date helpers fall back to UTC and a
    ``timezone_fallback`` warning is logged; construction itself never
    fails.

    Args:
        timezone: IANA name of the display timezone.
        clock: Source of "now" for ``is_today``. Defaults to the system
            clock in UTC; inject a fixed clock for reproducible output.
        logger: Logger for the timezone fallback warning.

    Returns:
        The immutable registry.
    """
    zone, fell_back = load_timezone(timezone, logger=logger)
    dates = DateFormatters(timezone=zone, clock=clock if clock is not None else utc_now)

    helpers: dict[str, Helper] = {
        **dates.helpers(),
        **_numbers.HELPERS,
        **_text.HELPERS,
    }

    return FormatterRegistry(helpers, timezone=zone, timezone_fallback=fell_back)
