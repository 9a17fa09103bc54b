from __future__ import annotations


class ScheduleError(Exception):
    """Base class for every failure raised by this package."""


class ConfigurationError(ScheduleError):
    pass


class CacheLoadError(ScheduleError):
    # Recovered by load_storage(); never escapes a run.
    pass


class AuthError(ScheduleError):
    pass


class FetchError(ScheduleError):
    pass


class NormalizationError(ScheduleError):
    pass


class ParseError(NormalizationError):
    pass


class ZoneError(NormalizationError):
    pass
