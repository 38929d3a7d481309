"""Exception hierarchy for toolkitify."""


class ToolkitifyError(Exception):
    """Base class for all toolkitify errors."""

    pass


class InvalidTimeFormatError(ToolkitifyError, ValueError):
    """Raised when a duration string cannot be parsed."""

    pass


class EnvironmentMismatchError(ToolkitifyError, RuntimeError):
    """Raised when a client-only backend is used outside a browser."""

    pass


class MissingDependencyError(ToolkitifyError):
    """Raised when a backend is selected without its client handle."""

    pass
