"""Exception taxonomy shared by the filter, bridge, parser and commands."""


class TestRunnerError(Exception):
    """Base class for all errors raised by this package."""

    __test__ = False


class InvalidArgumentError(TestRunnerError, ValueError):
    """Raised when a required argument is missing or has the wrong type."""


class NotAvailableError(TestRunnerError):
    """Raised when an optional collaborator (e.g. coverage) is not installed."""


class CoverageNotEnabledError(TestRunnerError):
    """Raised when coverage recording is requested before enabling coverage."""


class MalformedDocumentError(TestRunnerError, ValueError):
    """Raised when a test results document cannot be parsed."""
