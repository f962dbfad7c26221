import json
import logging
from nacl.signing import VerifyKey
from nacl.exceptions import BadSignatureError
from discord_interaction import (
    Interaction,
    InteractionParseError,
    InteractionResponse,
    InteractionType,
)

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Signature-Ed25519"
TIMESTAMP_HEADER = "X-Signature-Timestamp"

# Ed25519 signatures are always 64 bytes
SIGNATURE_SIZE = 64

INVALID_SIGNATURE_MESSAGE = "invalid request signature"


class MissingHeaderError(ValueError):
    """Raised when a request lacks one of the signature headers."""

    pass


class SignatureFormatError(ValueError):
    """Raised when the signature header is not a hex encoded Ed25519 signature."""

    pass


class InboundRequest:
    """The parts of an inbound webhook delivery that we need."""

    def __init__(self, *, headers, body):
        # HTTP header names are case-insensitive
        self.headers = {k.lower(): v for k, v in headers.items()}
        self.body = body

    def header(self, name):
        value = self.headers.get(name.lower())
        if value is None:
            raise MissingHeaderError(f"missing request header: {name}")
        return value

    def text(self):
        if isinstance(self.body, (bytes, bytearray)):
            return self.body.decode("utf-8")
        return self.body


class OutboundResponse:
    def __init__(self, *, status, body, content_type):
        self.status = status
        self.body = body
        self.content_type = content_type

    def __eq__(self, other):
        return (
            isinstance(other, OutboundResponse)
            and self.status == other.status
            and self.body == other.body
            and self.content_type == other.content_type
        )

    def __repr__(self):
        return f"OutboundResponse(status={self.status}, body={self.body!r})"

    @staticmethod
    def json(value):
        return OutboundResponse(
            status=200, body=json.dumps(value), content_type="application/json"
        )

    @staticmethod
    def error(message, status):
        return OutboundResponse(status=status, body=message, content_type="text/plain")


def verify_signature(verify_key, *, body, timestamp, signature):
    """
    Return whether `signature` is a valid Ed25519 signature of `timestamp`
    immediately followed by `body`.

    Raises `SignatureFormatError` if `signature` is not 128 hex characters as
    that is a malformed request rather than a forged one.
    """
    try:
        signature_bytes = bytes.fromhex(signature)
    except ValueError as e:
        raise SignatureFormatError(f"Signature is not hex encoded: {e}") from e
    if len(signature_bytes) != SIGNATURE_SIZE:
        raise SignatureFormatError(
            f"Expected a {SIGNATURE_SIZE} byte signature, got {len(signature_bytes)}"
        )

    # libsodium rejects non-canonical signatures and small order keys so
    # this is a strict verification
    try:
        verify_key.verify(timestamp.encode() + body.encode(), signature_bytes)
    except BadSignatureError:
        return False
    return True


def parse_interaction(body):
    try:
        payload = json.loads(body)
    except ValueError as e:
        raise InteractionParseError(f"Request body is not valid JSON: {e}") from e
    return Interaction.fromDict(payload)


class RequestProcessor:
    """
    Terminates an inbound interaction webhook: checks the signature, answers
    pings and hands every other interaction to `handler`.
    """

    def __init__(self, *, verify_key, handler):
        self.verify_key = verify_key
        self.handler = handler

    @staticmethod
    def fromPublicKey(public_key, handler):
        """Build a processor from the hex encoded application public key."""
        return RequestProcessor(
            verify_key=VerifyKey(bytes.fromhex(public_key)), handler=handler
        )

    async def process_request(self, request):
        signature = request.header(SIGNATURE_HEADER)
        timestamp = request.header(TIMESTAMP_HEADER)
        body = request.text()

        if not verify_signature(
            self.verify_key, body=body, timestamp=timestamp, signature=signature
        ):
            logger.info("Rejected request with an invalid signature")
            return OutboundResponse.error(INVALID_SIGNATURE_MESSAGE, 401)

        interaction = parse_interaction(body)
        if interaction.type == InteractionType.PING:
            response = InteractionResponse.pong()
        else:
            logger.debug(
                "Dispatching interaction %s of type %s",
                interaction.id,
                interaction.type,
            )
            response = await self.handler.on_interaction(interaction)

        return OutboundResponse.json(response.toDict())
