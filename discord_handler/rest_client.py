import asyncio
import json
import logging
import re
import requests
from requests.structures import CaseInsensitiveDict
from discord_rest import AuthPrefix, RequestData
from RESTError import DiscordAPIError, MissingTokenError, RequestError

logger = logging.getLogger(__name__)

API_BASE = "https://discord.com/api"
API_VERSION = "10"

# Seconds to wait for Discord before giving up on a request.  Interaction
# webhooks must be answered within 3 seconds but follow-up calls made from a
# deferred response have longer.
TIMEOUT = 15

# `type/subtype` with optional parameters, e.g. `text/plain; charset=utf-8`
MIME_TYPE = re.compile(r"^[\w!#$&^.+-]+/[\w!#$&^.+-]+(\s*;.*)?$")


def encode_reason(reason):
    """Percent-encode everything in `reason` other than ASCII letters and digits."""
    return "".join(
        chr(b) if chr(b).isascii() and chr(b).isalnum() else f"%{b:02X}"
        for b in reason.encode("utf-8")
    )


class RESTClient:
    """
    A client for the Discord HTTP API.

    `resolve_request` turns a `RequestData` into a `requests.PreparedRequest`
    without touching the network; `request` and `request_json` send it.
    """

    def __init__(
        self,
        *,
        api=API_BASE,
        version=API_VERSION,
        token=None,
        auth_prefix=AuthPrefix.BOT,
        session=None,
        timeout=TIMEOUT,
    ):
        self.api = api
        self.version = str(version)
        self.token = token
        self.auth_prefix = auth_prefix
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def url(self, route, *, versioned=True):
        if versioned:
            return f"{self.api}/v{self.version}{route}"
        return f"{self.api}{route}"

    def resolve_request(self, method, route, data=None):
        data = data if data is not None else RequestData()
        headers = CaseInsensitiveDict()

        if data.auth:
            if self.token is None:
                raise MissingTokenError()
            prefix = data.auth_prefix or self.auth_prefix
            headers["Authorization"] = f"{prefix} {self.token}"

        body = None
        files = None
        if not data.files:
            if data.body is not None:
                body = encode_json(data.body)
                headers["Content-Type"] = "application/json"
        else:
            files = []
            for index, file in enumerate(data.files):
                if not MIME_TYPE.match(file.content_type):
                    raise RequestError(
                        f"Unsupported content type ({file.content_type}) for "
                        f"file {file.name}"
                    )
                key = file.key if file.key is not None else f"files[{index}]"
                files.append((key, (file.name, file.data, file.content_type)))
            for key, value in data.append_to_form_data.items():
                files.append((key, (None, value)))
            if data.body is not None:
                files.append(
                    ("payload_json", (None, encode_json(data.body), "application/json"))
                )

        if data.reason is not None:
            headers["X-Audit-Log-Reason"] = encode_reason(data.reason)

        # Caller supplied headers win over everything we generated
        headers.update(data.headers)

        request = requests.Request(
            method=method.value,
            url=self.url(route, versioned=data.versioned),
            params=list(data.query.items()),
            headers=headers,
            data=body,
            files=files,
        )
        try:
            return request.prepare()
        except (requests.RequestException, ValueError, TypeError) as e:
            raise RequestError(f"Unable to build request: {e}", cause=e) from e

    async def request(self, method, route, data=None):
        """
        Send the request and return the raw response body.

        Raises `DiscordAPIError` if Discord responds with a non-2xx status and
        `RequestError` if the request could not be built or sent.
        """
        prepared = self.resolve_request(method, route, data)
        logger.debug("%s %s", prepared.method, prepared.url)
        try:
            response = await asyncio.to_thread(
                self.session.send, prepared, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise RequestError(f"Request to Discord failed: {e}", cause=e) from e

        if 200 <= response.status_code < 300:
            return response.content

        logger.warning(
            "%s %s failed with status %s",
            prepared.method,
            prepared.url,
            response.status_code,
        )
        raise DiscordAPIError(response.content, status=response.status_code)

    async def request_json(self, method, route, data=None, *, parse=None):
        """
        As `request` but decode the response as JSON.  If `parse` is given it
        is called with the decoded value to convert it into the expected
        shape, e.g. `InteractionResponse.fromDict`.
        """
        raw = await self.request(method, route, data)
        try:
            value = json.loads(raw)
            return parse(value) if parse is not None else value
        except (ValueError, KeyError, TypeError) as e:
            raise RequestError(f"Unexpected response from Discord: {e}", cause=e) from e


def encode_json(value):
    try:
        return json.dumps(value).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise RequestError(f"Request body is not JSON encodable: {e}", cause=e) from e


def rest_client(
    api=API_BASE, version=API_VERSION, token=None, auth_prefix=AuthPrefix.BOT
):
    return RESTClient(api=api, version=version, token=token, auth_prefix=auth_prefix)
