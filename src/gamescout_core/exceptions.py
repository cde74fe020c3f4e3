class GameScoutException(Exception):
    """Base exception for all GameScout core errors."""


class NetworkUnavailable(GameScoutException):
    """
    Raised when an upstream request fails at the transport level
    (DNS, connection refused/reset, timeout, broken payload).
    The specific transport failure is kept only for diagnostics.
    """

    def __init__(self, url: str, original_error: BaseException | None = None):
        super().__init__(f"Network unavailable while requesting {url}: {original_error}")
        self.url = url
        self.original_error = original_error


class UpstreamProtocolError(GameScoutException):
    """Raised when an upstream service answers with a non-success status or an unreadable body."""

    def __init__(self, service: str, status_code: int | None = None, url: str = "", message: str = "Unexpected response"):
        msg = f"{service} API Error"
        if status_code:
            msg += f" ({status_code})"
        msg += f": {message}"
        if url:
            msg += f" [{url}]"
        super().__init__(msg)
        self.service = service
        self.status_code = status_code
        self.url = url


class ConfigurationError(GameScoutException):
    """Raised at construction time when a required setting (e.g. a base URL) is missing."""

    def __init__(self, setting: str):
        super().__init__(f"{setting} is missing in configuration.")
        self.setting = setting
