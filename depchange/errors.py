"""Exceptions raised by depchange."""


class DepChangeError(Exception):
    """Base class for depchange errors."""


class VersionValidationError(DepChangeError, ValueError):
    """A version string could not be parsed."""

    def __init__(self, version, reason: str | None = None):
        self.version = version
        message = f"Malformed version number string {version!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class NoVersionStrategyError(DepChangeError, LookupError):
    """No version class is registered for an ecosystem."""

    def __init__(self, ecosystem: str):
        self.ecosystem = ecosystem
        super().__init__(f"No version strategy registered for ecosystem {ecosystem!r}")


class BranchNameError(DepChangeError, RuntimeError):
    """Branch naming metadata was expected but not found."""


class ConfigError(DepChangeError):
    """Invalid configuration file or environment override."""


class ChangeParseError(DepChangeError, ValueError):
    """A serialized dependency change could not be read."""
