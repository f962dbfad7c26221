from typing import Protocol


class InteractionType:
    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    APPLICATION_COMMAND_AUTOCOMPLETE = 4
    MODAL_SUBMIT = 5


class InteractionResponseType:
    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5
    DEFERRED_UPDATE_MESSAGE = 6
    UPDATE_MESSAGE = 7
    APPLICATION_COMMAND_AUTOCOMPLETE_RESULT = 8
    MODAL = 9


class MessageFlag:
    SUPPRESS_EMBEDS = 4
    EPHEMERAL = 64


class InteractionParseError(ValueError):
    """Raised when a request body does not decode to an interaction."""

    pass


# Top-level fields copied onto `Interaction`.  Anything else Discord sends
# is still reachable through `Interaction.raw`.
INTERACTION_FIELDS = (
    "id",
    "application_id",
    "token",
    "version",
    "data",
    "guild_id",
    "channel_id",
    "member",
    "user",
    "message",
    "locale",
    "guild_locale",
)


class Interaction:
    def __init__(self, *, type, raw=None, **fields):
        unknown = set(fields) - set(INTERACTION_FIELDS)
        if unknown:
            raise TypeError(f"Unexpected interaction fields {sorted(unknown)}")
        self.type = type
        for name in INTERACTION_FIELDS:
            setattr(self, name, fields.get(name))
        self.raw = raw if raw is not None else {"type": type, **fields}

    @property
    def user_id(self):
        """The ID of the invoking user, whether in a guild or a DM."""
        user = (self.member or {}).get("user") or self.user or {}
        return user.get("id")

    @property
    def command_name(self):
        return (self.data or {}).get("name")

    @property
    def custom_id(self):
        return (self.data or {}).get("custom_id")

    def __eq__(self, other):
        return isinstance(other, Interaction) and self.raw == other.raw

    def __repr__(self):
        return f"Interaction(type={self.type}, id={self.id})"

    def toDict(self):
        return dict(self.raw)

    @staticmethod
    def fromDict(payload):
        if not isinstance(payload, dict):
            raise InteractionParseError(
                f"Expected a JSON object, got {type(payload).__name__}"
            )
        kind = payload.get("type")
        # `bool` is an `int` but never a valid discriminant
        if not isinstance(kind, int) or isinstance(kind, bool):
            raise InteractionParseError(f"Invalid interaction type ({kind!r})")
        return Interaction(
            type=kind,
            raw=payload,
            **{name: payload.get(name) for name in INTERACTION_FIELDS},
        )


# Optional fields of the callback data in the order Discord documents them
CALLBACK_DATA_FIELDS = (
    "tts",
    "content",
    "embeds",
    "allowed_mentions",
    "flags",
    "components",
    "attachments",
    "choices",
    "custom_id",
    "title",
)


class InteractionCallbackData:
    def __init__(self, **fields):
        unknown = set(fields) - set(CALLBACK_DATA_FIELDS)
        if unknown:
            raise TypeError(f"Unexpected callback data fields {sorted(unknown)}")
        for name in CALLBACK_DATA_FIELDS:
            setattr(self, name, fields.get(name))

    def __eq__(self, other):
        return isinstance(other, InteractionCallbackData) and all(
            getattr(self, n) == getattr(other, n) for n in CALLBACK_DATA_FIELDS
        )

    def __repr__(self):
        set_fields = ", ".join(f"{k}={v!r}" for k, v in self.toDict().items())
        return f"InteractionCallbackData({set_fields})"

    def toDict(self):
        return {
            name: getattr(self, name)
            for name in CALLBACK_DATA_FIELDS
            if getattr(self, name) is not None
        }

    @staticmethod
    def fromDict(dict):
        return InteractionCallbackData(
            **{name: dict[name] for name in CALLBACK_DATA_FIELDS if name in dict}
        )


class InteractionResponse:
    def __init__(self, *, type, data=None):
        self.type = type
        self.data = data

    def __eq__(self, other):
        return (
            isinstance(other, InteractionResponse)
            and self.type == other.type
            and self.data == other.data
        )

    def __repr__(self):
        return f"InteractionResponse(type={self.type}, data={self.data!r})"

    def toDict(self):
        result = {"type": self.type}
        if self.data is not None:
            result["data"] = self.data.toDict()
        return result

    @staticmethod
    def fromDict(dict):
        data = dict.get("data")
        return InteractionResponse(
            type=dict["type"],
            data=InteractionCallbackData.fromDict(data) if data is not None else None,
        )

    @staticmethod
    def pong():
        return InteractionResponse(type=InteractionResponseType.PONG)

    @staticmethod
    def message(content, *, ephemeral=False, **fields):
        """
        Reply to the interaction with a message.  Additional callback data
        (`embeds`, `components`, ...) is passed through `fields`.
        """
        if ephemeral:
            fields["flags"] = (fields.get("flags") or 0) | MessageFlag.EPHEMERAL
        return InteractionResponse(
            type=InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE,
            data=InteractionCallbackData(content=content, **fields),
        )


class InteractionHandler(Protocol):
    """
    Produces the response to a single interaction.

    Implementations are plain classes with an `on_interaction` coroutine;
    they may keep state between calls (e.g. a `RESTClient`), but each call
    handles exactly one interaction.  The liveness ping is answered before a
    handler is consulted so `on_interaction` never sees `InteractionType.PING`.
    """

    async def on_interaction(self, interaction: Interaction) -> InteractionResponse:
        ...
