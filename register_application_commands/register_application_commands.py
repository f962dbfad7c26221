# register_application_commands.py
#
# Description
# ===========
#
# This application will overwrite the bot's global application commands with
#   - /ping
# so that they are visible and accessible within Discord.
#
# Usage
# =====
#
# $ DISCORD_BOT_TOKEN=... DISCORD_APPLICATION_ID=... python register_application_commands.py

import asyncio
import json
from discord_config import Config
from discord_rest import RequestData, RequestMethod
from rest_client import RESTClient

CHAT_INPUT = 1

commands = [
    {
        "name": "ping",
        "type": CHAT_INPUT,
        "description": "Check that the bot is responding",
    },
]


async def register(config):
    client = RESTClient(
        api=config.api_base_url, version=config.api_version, token=config.bot_token
    )
    return await client.request_json(
        RequestMethod.PUT,
        f"/applications/{config.application_id}/commands",
        RequestData(body=commands),
    )


if __name__ == "__main__":
    config = Config().require("bot_token", "application_id")
    for command in asyncio.run(register(config)):
        print(json.dumps(command))
