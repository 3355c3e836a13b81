"""Errors raised while wiring the application together.

These surface at startup, before any request is served. Request-time
failures are domain errors (see ``discuss.domain.error``).
"""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """A setting is unusable in the current environment."""

    def __init__(self, setting: str, reason: str):
        self.setting = setting
        super().__init__(f"{setting} {reason}")


class DependencyInjectionError(UtilError):
    """No provider implementation matches the requested component."""

    pass
