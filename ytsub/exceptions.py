"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class YtsubError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(YtsubError):
    """Raised for issues related to run options or the subscriptions file."""


class IntervalError(ConfigurationError):
    """Raised when a refresh interval expression cannot be parsed."""


class OrganizeRuleError(YtsubError):
    """Raised when an '-organize' directive is malformed or its pattern is invalid."""


class DownloadError(YtsubError):
    """
    Raised when the external downloader cannot be started or exits with a
    non-zero status.
    """

    def __init__(self, url: str, reason: str, returncode: int | None = None):
        super().__init__(f"Failed to download '{url}': {reason}")
        self.url = url
        self.reason = reason
        self.returncode = returncode
