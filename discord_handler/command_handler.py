import logging
from discord_interaction import InteractionResponse, InteractionType

logger = logging.getLogger(__name__)


class UserError(RuntimeError):
    """Raised by a callback when the user made a mistake.

    The message is shown to the invoking user only, instead of failing the
    interaction."""

    pass


class UnknownInteractionError(Exception):
    pass


class CommandHandler:
    """
    An `InteractionHandler` that routes interactions to registered callbacks:
      * application commands by command name,
      * autocomplete requests by command name,
      * message components and modal submissions by `custom_id`, where a
        registered ID ending in `#` matches any `custom_id` it prefixes.

    Callbacks are coroutines taking the `Interaction` and returning an
    `InteractionResponse`.  `rest` is an optional `RESTClient` made available
    to callbacks that need to call back into Discord.
    """

    def __init__(self, *, rest=None):
        self.rest = rest
        self.commands = {}
        self.autocompletes = {}
        self.components = {}

    def command(self, name):
        def decorator(callback):
            self.commands[name] = callback
            return callback

        return decorator

    def autocomplete(self, name):
        def decorator(callback):
            self.autocompletes[name] = callback
            return callback

        return decorator

    def component(self, custom_id):
        def decorator(callback):
            self.components[custom_id] = callback
            return callback

        return decorator

    def find_component(self, custom_id):
        if custom_id in self.components:
            return self.components[custom_id]
        for registered, callback in self.components.items():
            if registered.endswith("#") and custom_id.startswith(registered):
                return callback
        return None

    def find_callback(self, interaction):
        if interaction.type == InteractionType.APPLICATION_COMMAND:
            name = interaction.command_name
            callback = self.commands.get(name)
            if callback is None:
                raise UnknownInteractionError(f"Unknown application command (/{name})")
        elif interaction.type == InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE:
            name = interaction.command_name
            callback = self.autocompletes.get(name)
            if callback is None:
                raise UnknownInteractionError(f"Autocomplete not supported for /{name}")
        elif interaction.type in (
            InteractionType.MESSAGE_COMPONENT,
            InteractionType.MODAL_SUBMIT,
        ):
            custom_id = interaction.custom_id
            callback = self.find_component(custom_id or "")
            if callback is None:
                raise UnknownInteractionError(f"Unknown 'custom_id' ({custom_id})!")
        else:
            raise UnknownInteractionError(f"Unknown type ({interaction.type})!")
        return callback

    async def on_interaction(self, interaction):
        callback = self.find_callback(interaction)
        try:
            return await callback(interaction)
        except UserError as e:
            # If we get a `UserError` it's something we can display to the user
            if interaction.type == InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE:
                raise
            logger.info("Interaction %s failed with a user error: %s", interaction.id, e)
            return InteractionResponse.message(str(e), ephemeral=True)
