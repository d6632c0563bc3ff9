"""Exceptions raised by db-dumper.

Construction and validation problems surface as ``ConfigurationError``.
Command generation never raises for missing values (it logs a warning).
Only process execution raises ``ProcessFailedError`` and then only when the
job runs in debug mode, or when the shell itself cannot be launched.
"""


class DumperError(Exception):
    """Base class for all db-dumper errors."""

    pass


class ConfigurationError(DumperError, ValueError):
    """Raised when a backup job is configured with invalid or missing options."""

    pass


class UnsupportedEngineError(ConfigurationError):
    """Raised when a value outside the supported engines reaches dispatch."""

    def __init__(self, engine: object) -> None:
        self.engine = engine
        super().__init__(
            f"Unsupported database engine: {engine!r}. "
            f"Supported engines: mysql, postgresql, mongodb"
        )


class ProcessFailedError(DumperError, RuntimeError):
    """Raised when a dump/restore process cannot be launched or exits non-zero."""

    def __init__(
        self,
        message: str,
        command: str = "",
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class ProcessTimeoutError(ProcessFailedError):
    """Raised when a dump/restore process exceeds its timeout (debug mode)."""

    pass
