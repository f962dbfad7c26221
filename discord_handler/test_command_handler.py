import unittest
from command_handler import CommandHandler, UnknownInteractionError, UserError
from discord_interaction import (
    Interaction,
    InteractionCallbackData,
    InteractionResponse,
    InteractionResponseType,
    InteractionType,
    MessageFlag,
)
from rest_client import RESTClient


def command(name):
    return Interaction.fromDict(
        {
            "id": "1",
            "type": InteractionType.APPLICATION_COMMAND,
            "data": {"name": name},
            "guild_id": "123",
            "member": {"user": {"id": "abc"}},
        }
    )


def button(custom_id):
    return Interaction.fromDict(
        {
            "id": "2",
            "type": InteractionType.MESSAGE_COMPONENT,
            "data": {"custom_id": custom_id, "component_type": 2},
            "member": {"user": {"id": "abc"}},
        }
    )


class TestCommandHandler(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.handler = CommandHandler()

        @self.handler.command("hello")
        async def hello(interaction):
            return InteractionResponse.message(f"Hello <@{interaction.user_id}>")

        @self.handler.command("nominate")
        async def nominate(interaction):
            raise UserError("You have already nominated a film")

        @self.handler.command("crash")
        async def crash(interaction):
            raise RuntimeError("boom")

        @self.handler.component("register_attendance")
        async def attendance(interaction):
            return InteractionResponse.message("attended")

        @self.handler.component("more_history#")
        async def history(interaction):
            next_key = interaction.custom_id.removeprefix("more_history#")
            return InteractionResponse.message(f"after {next_key}")

        @self.handler.autocomplete("vote")
        async def vote(interaction):
            return InteractionResponse(
                type=InteractionResponseType.APPLICATION_COMMAND_AUTOCOMPLETE_RESULT,
                data=InteractionCallbackData(choices=[]),
            )

    async def test_command(self):
        self.assertEqual(
            await self.handler.on_interaction(command("hello")),
            InteractionResponse.message("Hello <@abc>"),
        )

    async def test_unknown_command(self):
        with self.assertRaisesRegex(UnknownInteractionError, "/unknown"):
            await self.handler.on_interaction(command("unknown"))

    async def test_user_error(self):
        response = await self.handler.on_interaction(command("nominate"))
        self.assertEqual(
            response.toDict(),
            {
                "type": InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE,
                "data": {
                    "content": "You have already nominated a film",
                    "flags": MessageFlag.EPHEMERAL,
                },
            },
        )

    async def test_other_errors_propagate(self):
        with self.assertRaisesRegex(RuntimeError, "boom"):
            await self.handler.on_interaction(command("crash"))

    async def test_component(self):
        self.assertEqual(
            await self.handler.on_interaction(button("register_attendance")),
            InteractionResponse.message("attended"),
        )

    async def test_component_prefix(self):
        self.assertEqual(
            await self.handler.on_interaction(button("more_history#FILM#42")),
            InteractionResponse.message("after FILM#42"),
        )

    async def test_unknown_component(self):
        with self.assertRaises(UnknownInteractionError):
            await self.handler.on_interaction(button("shame"))

    async def test_autocomplete(self):
        interaction = Interaction.fromDict(
            {
                "type": InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE,
                "data": {"name": "vote", "options": [{"value": "Ali"}]},
            }
        )
        response = await self.handler.on_interaction(interaction)
        self.assertEqual(
            response.type, InteractionResponseType.APPLICATION_COMMAND_AUTOCOMPLETE_RESULT
        )

    async def test_autocomplete_user_error_propagates(self):
        @self.handler.autocomplete("nominate")
        async def nominate(interaction):
            raise UserError("IMDb is unavailable")

        interaction = Interaction.fromDict(
            {
                "type": InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE,
                "data": {"name": "nominate"},
            }
        )
        with self.assertRaises(UserError):
            await self.handler.on_interaction(interaction)

    async def test_unknown_autocomplete(self):
        interaction = Interaction.fromDict(
            {
                "type": InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE,
                "data": {"name": "hello"},
            }
        )
        with self.assertRaises(UnknownInteractionError):
            await self.handler.on_interaction(interaction)

    async def test_unknown_type(self):
        with self.assertRaises(UnknownInteractionError):
            await self.handler.on_interaction(Interaction.fromDict({"type": -1}))

    async def test_stateful_handler(self):
        rest = RESTClient(token="my-token")
        handler = CommandHandler(rest=rest)
        calls = []

        @handler.command("count")
        async def count(interaction):
            calls.append(interaction.id)
            self.assertIs(handler.rest, rest)
            return InteractionResponse.message(str(len(calls)))

        self.assertEqual(
            (await handler.on_interaction(command("count"))).data.content, "1"
        )
        self.assertEqual(
            (await handler.on_interaction(command("count"))).data.content, "2"
        )


if __name__ == "__main__":
    unittest.main()
