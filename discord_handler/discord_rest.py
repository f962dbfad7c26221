from enum import Enum


class RequestMethod(Enum):
    DELETE = "DELETE"
    GET = "GET"
    PATCH = "PATCH"
    POST = "POST"
    PUT = "PUT"


class AuthPrefix(Enum):
    BOT = "Bot"
    BEARER = "Bearer"

    def __str__(self):
        return self.value


class FileData:
    def __init__(self, *, content_type, data, name, key=None):
        self.content_type = content_type
        self.data = data
        self.name = name
        # Defaults to `files[<index>]` when the request is built
        self.key = key

    def __repr__(self):
        return (
            f"FileData(name={self.name!r}, content_type={self.content_type!r}, "
            f"key={self.key!r}, size={len(self.data)})"
        )


class RequestData:
    """
    Everything about a single Discord API call other than its method and
    route.  Modelled on discord.js' `RequestData`.

    `body` may be any JSON encodable value.  When `files` is non-empty the
    request is sent as `multipart/form-data` and `body` is sent as the
    `payload_json` part.
    """

    def __init__(
        self,
        *,
        body=None,
        files=None,
        append_to_form_data=None,
        headers=None,
        query=None,
        reason=None,
        auth=True,
        auth_prefix=None,
        versioned=True,
    ):
        self.body = body
        self.files = list(files) if files else []
        self.append_to_form_data = dict(append_to_form_data or {})
        self.headers = dict(headers or {})
        self.query = dict(query or {})
        self.reason = reason
        self.auth = auth
        self.auth_prefix = auth_prefix
        self.versioned = versioned
