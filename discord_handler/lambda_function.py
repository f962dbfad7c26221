# lambda_function.py
#
# Description
# ===========
#
# This script will be invoked by API Gateway when Discord sends an
# interaction to the bot's endpoint.
#
# Requirements
# ============
#
# The environment variable `DISCORD_PUBLIC_KEY` must be set to the public key
# of the Discord Application.  `DISCORD_BOT_TOKEN` is optional and only needed
# by commands that call back into the Discord API.

import asyncio
import base64
import json
from command_handler import CommandHandler
from discord_config import Config
from discord_interaction import InteractionParseError, InteractionResponse
from request_processor import (
    InboundRequest,
    MissingHeaderError,
    OutboundResponse,
    RequestProcessor,
    SignatureFormatError,
)
from rest_client import RESTClient

config = Config()

handler = CommandHandler(
    rest=RESTClient(
        api=config.api_base_url,
        version=config.api_version,
        token=config.bot_token,
    )
)


@handler.command("ping")
async def ping(interaction):
    return InteractionResponse.message(f"Pong! <@{interaction.user_id}>")


_processor = None


def get_processor():
    global _processor
    if _processor is None:
        config.require("public_key")
        _processor = RequestProcessor.fromPublicKey(config.public_key, handler)
    return _processor


def to_inbound_request(event):
    # Proxy integrations pass `headers` and `body`, our older mapping
    # template passed `params.header` and `rawBody`
    if "rawBody" in event:
        return InboundRequest(headers=event["params"]["header"], body=event["rawBody"])

    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        body = base64.b64decode(body)
    return InboundRequest(headers=event.get("headers") or {}, body=body)


def to_lambda_response(response):
    return {
        "statusCode": response.status,
        "headers": {"Content-Type": response.content_type},
        "body": response.body,
    }


def lambda_handler(event, context):
    print(f"in={json.dumps(event)}")
    try:
        response = asyncio.run(
            get_processor().process_request(to_inbound_request(event))
        )
    except (MissingHeaderError, SignatureFormatError, InteractionParseError) as e:
        # Malformed requests (missing headers, bad signature encoding, bad
        # JSON) are the caller's fault
        print(f"[BAD REQUEST] {e}")
        response = OutboundResponse.error("bad request", 400)
    result = to_lambda_response(response)
    print(f"out={json.dumps(result)}")
    return result
