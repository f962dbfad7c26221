"""Configuration read from the Lambda environment."""
import os


class Config:
    """
    Environment variables:
      * `DISCORD_PUBLIC_KEY` - hex encoded public key of the Discord Application
      * `DISCORD_BOT_TOKEN` - bot token for calls back into the Discord API
      * `DISCORD_APPLICATION_ID` - needed to register application commands
      * `DISCORD_API_BASE_URL` - defaults to https://discord.com/api
      * `DISCORD_API_VERSION` - defaults to 10
    """

    def __init__(self, environ=None):
        environ = os.environ if environ is None else environ
        self.public_key = environ.get("DISCORD_PUBLIC_KEY")
        self.bot_token = environ.get("DISCORD_BOT_TOKEN")
        self.application_id = environ.get("DISCORD_APPLICATION_ID")
        self.api_base_url = environ.get(
            "DISCORD_API_BASE_URL", "https://discord.com/api"
        )
        self.api_version = environ.get("DISCORD_API_VERSION", "10")

    def require(self, *names):
        """Raise a `RuntimeError` listing every one of `names` that is unset."""
        missing = [n for n in names if not getattr(self, n)]
        if missing:
            raise RuntimeError(
                "Missing configuration: "
                + ", ".join(f"DISCORD_{n.upper()}" for n in missing)
            )
        return self
