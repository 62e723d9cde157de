"""Application entry point for the explbot glossary bot."""

from __future__ import annotations

import argparse
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint
from dotenv import load_dotenv
from telethon import events

import settings
from adapters.sqlite_store import SQLiteEntryStore
from adapters.telegram_handler import process_event
from adapters.telegram_responder import TelegramResponder
from adapters.timestamps import ZonedTimestampFormatter
from client import build_client, load_credentials
from core.commands import ExplCommands

NAME = "EXPLBOT"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, secrets: list[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = [secret for secret in secrets if secret]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _collect_redaction_values(config: dict) -> list[str]:
    redact_cfg = config.get("redact", {}) if config else {}
    if not redact_cfg.get("enabled", False):
        return []
    values = []
    for name in redact_cfg.get("patterns", []):
        value = os.getenv(name)
        if value:
            values.append(value)
    return sorted(set(values), key=len, reverse=True)


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    load_dotenv()
    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    secrets = _collect_redaction_values(config)
    formatter = _RedactingFormatter(secrets, fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/explbot.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.BASE_DIR, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _open_store() -> SQLiteEntryStore:
    return SQLiteEntryStore(settings.DB_PATH)


def _run() -> None:
    _print_banner()
    _configure_logging()
    logger = logging.getLogger(__name__)

    logger.info("Starting explbot")

    store = _open_store()
    commands = ExplCommands(
        store=store,
        format_timestamp=ZonedTimestampFormatter(settings.TIME_ZONE, settings.DATETIME_FORMAT),
        config=settings.EXPL_CONFIG,
    )
    responder = TelegramResponder(settings.PARSE_MODE)
    logger.info("Using database %s, replies as %s", settings.DB_PATH, settings.PARSE_MODE)

    credentials = load_credentials()
    client = build_client(credentials)

    @client.on(events.NewMessage(incoming=True))
    async def handler(event) -> None:
        await process_event(event, commands, responder)

    client.start(bot_token=credentials.bot_token)
    logger.info("Client connected. Listening for commands...")
    client.run_until_disconnected()


def _set_enabled(entry_id: int, enabled: bool) -> int:
    _configure_logging()
    store = _open_store()
    entry = store.get(entry_id)
    if entry is None:
        print(f"No entry with id {entry_id}.")
        return 1
    store.set_enabled(entry_id, enabled)
    state = "enabled" if enabled else "disabled"
    print(f"Entry {entry_id} ({entry.term}) is now {state}.")
    return 0


def _moderate() -> None:
    _print_banner()
    from frontend.app import ModerationApp

    ModerationApp(_open_store()).run()


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="explbot")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Start the bot")
    subparsers.add_parser("moderate", help="Launch the moderation TUI")
    enable_parser = subparsers.add_parser("enable", help="Make a disabled entry visible again")
    enable_parser.add_argument("entry_id", type=int)
    disable_parser = subparsers.add_parser("disable", help="Hide an entry without renumbering others")
    disable_parser.add_argument("entry_id", type=int)

    args = parser.parse_args(argv)
    if args.command == "moderate":
        _moderate()
        return
    if args.command in {"enable", "disable"}:
        raise SystemExit(_set_enabled(args.entry_id, args.command == "enable"))
    _run()


if __name__ == "__main__":
    main()
