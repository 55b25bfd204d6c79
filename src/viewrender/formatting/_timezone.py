"""Display timezone resolution."""

from zoneinfo import ZoneInfoNotFoundError

import pendulum
from structlog.typing import FilteringBoundLogger

from viewrender.utils import get_logger

DEFAULT_TIMEZONE = "America/New_York"

type DisplayTimezone = pendulum.Timezone | pendulum.FixedTimezone


def load_timezone(
    name: str = DEFAULT_TIMEZONE,
    *,
    logger: FilteringBoundLogger | None = None,
) -> tuple[DisplayTimezone, bool]:
    """Load a display timezone, degrading to UTC when it is unavailable.

    A missing tz database entry never fails registry construction. The
    degradation is reported as a ``timezone_fallback`` warning so that
    silently shifted dates can be traced.

    Args:
        name: IANA timezone name.
        logger: Logger for the fallback warning.

    Returns:
        Tuple of (timezone, fell_back).
    """
    try:
        return pendulum.timezone(name), False
    except (ValueError, ZoneInfoNotFoundError) as e:
        log = logger if logger is not None else get_logger()
        log.warning("timezone_fallback", requested=name, using="UTC", error=str(e))
        return pendulum.UTC, True
