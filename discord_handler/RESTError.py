class RESTError(Exception):
    """Base class of everything `RESTClient` raises.

    There are exactly two kinds: `DiscordAPIError` when Discord answered with
    a non-2xx status and `RequestError` when the call couldn't be made."""

    pass


class DiscordAPIError(RESTError):
    def __init__(self, raw, *, status=None):
        super().__init__(f"Discord API error (status {status})")
        # The undecoded response body, interpreting it is left to the caller
        self.raw = raw
        self.status = status


class RequestError(RESTError):
    def __init__(self, message, *, cause=None):
        super().__init__(message)
        self.cause = cause


class MissingTokenError(RequestError):
    """Raised when a request needs authorization but the client has no token."""

    def __init__(self):
        super().__init__(
            "Expected token to be set for this request, but none was present"
        )
