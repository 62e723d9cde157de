"""Telegram bot client setup for explbot.

Credentials come from the environment (optionally a .env file) and are
checked together, so a misconfigured deployment reports every missing
variable at once instead of failing on the first one.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv
from telethon import TelegramClient

REQUIRED_VARIABLES = ("API_ID", "API_HASH", "BOT_TOKEN")


@dataclass(frozen=True)
class BotCredentials:
    """Everything needed to sign in as the bot."""

    api_id: int
    api_hash: str
    bot_token: str
    session_name: str = "explbot"


def load_credentials(environ: Optional[Mapping[str, str]] = None) -> BotCredentials:
    """Read bot credentials, loading .env first when using os.environ."""

    if environ is None:
        load_dotenv()
        environ = os.environ

    missing = [name for name in REQUIRED_VARIABLES if not environ.get(name)]
    if missing:
        raise RuntimeError(f"Missing {', '.join(missing)} in environment")

    try:
        api_id = int(environ["API_ID"])
    except ValueError:
        raise RuntimeError("API_ID must be numeric") from None

    return BotCredentials(
        api_id=api_id,
        api_hash=environ["API_HASH"],
        bot_token=environ["BOT_TOKEN"],
        session_name=environ.get("SESSION_NAME") or "explbot",
    )


def build_client(credentials: BotCredentials) -> TelegramClient:
    """Create the Telethon client; call start(bot_token=...) to sign in."""

    logging.getLogger(__name__).info("Initializing Telegram client (session %s)", credentials.session_name)
    return TelegramClient(credentials.session_name, credentials.api_id, credentials.api_hash)
