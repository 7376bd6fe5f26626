"""
Error types raised by the scenario manager components.

Components raise; only the command dispatcher (esm.cli) logs and turns an
error into a process exit status.
"""


class EsmError(Exception):
    """Base exception for scenario manager operations."""

    def __init__(self, message: str, detail: str = ""):
        self.message = message
        self.detail = detail
        super().__init__(message)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message


class StoreError(EsmError):
    """Raised when the scenario directory cannot be created, read or modified."""


class ScenarioNotFoundError(StoreError, LookupError):
    """Raised when a scenario is not installed."""


class ScenarioExistsError(StoreError):
    """Raised when installing over an existing scenario without confirmation."""


class InvalidIdentifierError(EsmError, ValueError):
    """Raised for identifiers that would escape the scenario directory."""


class ConfigError(EsmError):
    """Raised when the config document cannot be written or parsed."""


class ConfigNotFoundError(ConfigError):
    """Raised when no config document exists yet."""


class FetchError(EsmError):
    """Raised for any failure while downloading a scenario."""
