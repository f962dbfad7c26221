# delete_command.py
#
# Description
# ===========
#
# This application will remove a particular global application command.
#
# Usage
# =====
#
# $ DISCORD_BOT_TOKEN=... DISCORD_APPLICATION_ID=... python delete_command.py [CommandID]

import asyncio
import sys
from discord_config import Config
from discord_rest import RequestMethod
from rest_client import RESTClient
from RESTError import DiscordAPIError


async def delete_command(config, command_id):
    client = RESTClient(
        api=config.api_base_url, version=config.api_version, token=config.bot_token
    )
    await client.request(
        RequestMethod.DELETE,
        f"/applications/{config.application_id}/commands/{command_id}",
    )


if __name__ == "__main__":
    config = Config().require("bot_token", "application_id")
    try:
        asyncio.run(delete_command(config, sys.argv[1]))
    except DiscordAPIError as e:
        sys.exit(f"Unable to delete command ({e.status}): {e.raw.decode()}")
    print(f"Deleted command {sys.argv[1]}")
