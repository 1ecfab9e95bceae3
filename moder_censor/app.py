"""Entry point and wiring for the Telegram censoring bot.

Contains handlers for messages and admin commands. Custom word lists are
persisted in `moder_censor.storage` (SQLite).

Features:
- profanity detection via `Profanity.exists`; offending messages are deleted
  and reposted in censored form
- admin commands: /addword, /removeword, /allow, /disallow, /words
- public commands: /help, /check
- engine options from PROFANITY_* environment variables
- file logging with rotation
"""
from __future__ import annotations

import asyncio
import html
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from aiogram import Bot, Dispatcher
from aiogram.types import Message

from . import storage
from .moderation import Profanity
from .options import CensorType, ProfanityOptions

logger = logging.getLogger(__name__)

DB_PATH = os.environ.get("DB_PATH", None)
AUTO_DELETE_SECONDS = int(os.environ.get("AUTO_DELETE_SECONDS", "0"))

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _split_env_list(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def _load_options() -> ProfanityOptions:
    """Build engine options from PROFANITY_* environment variables."""
    defaults = ProfanityOptions()
    languages = _split_env_list(os.environ.get("PROFANITY_LANGUAGES", "")) or list(defaults.languages)
    whole_word_raw = os.environ.get("PROFANITY_WHOLE_WORD")
    whole_word = defaults.whole_word if whole_word_raw is None else whole_word_raw.strip().lower() in _TRUE_VALUES
    grawlix = os.environ.get("PROFANITY_GRAWLIX") or defaults.grawlix
    grawlix_char = os.environ.get("PROFANITY_GRAWLIX_CHAR") or defaults.grawlix_char
    if len(grawlix_char) != 1:
        logger.warning("PROFANITY_GRAWLIX_CHAR must be a single character, got %r", grawlix_char)
        grawlix_char = defaults.grawlix_char
    return ProfanityOptions(
        languages=languages,
        whole_word=whole_word,
        grawlix=grawlix,
        grawlix_char=grawlix_char,
    )


def _load_censor_type() -> CensorType:
    raw = os.environ.get("PROFANITY_CENSOR_TYPE", "").strip()
    if not raw:
        return CensorType.WORD
    try:
        return CensorType[raw.upper()]
    except KeyError:
        logger.warning("Invalid censor type in PROFANITY_CENSOR_TYPE: %s", raw)
        return CensorType.WORD


def _get_admins() -> set[int]:
    raw = os.environ.get("ADMINS", "")
    ids: set[int] = set()
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            ids.add(int(part))
        except ValueError:
            logger.warning("Invalid admin id in ADMINS: %s", part)
    return ids


def _user_display_from_message_user(u) -> str:
    """Return a sanitized display name for a user object (prefer username)."""
    if not u:
        return "user"
    username = getattr(u, "username", None)
    if username:
        return html.escape(f"@{username}")
    first = getattr(u, "first_name", "") or ""
    last = getattr(u, "last_name", "") or ""
    full = (first + " " + last).strip()
    if full:
        return html.escape(full)
    return html.escape(str(getattr(u, "id", "user")))


def _format_word_lists(engine: Profanity) -> str:
    lines: list[str] = []
    for title, words in (
        ("Blacklist", engine.blacklist),
        ("Removed", engine.removed),
        ("Whitelist", engine.whitelist),
    ):
        listed = ", ".join(html.escape(word) for word in sorted(words)) or "-"
        lines.append(f"<b>{title}:</b> {listed}")
    return "\n".join(lines)


async def _reply_with_optional_delete(orig_message: Message, text: str, parse_mode: Optional[str] = None) -> None:
    """Send an answer and optionally delete it after AUTO_DELETE_SECONDS."""
    try:
        sent = await orig_message.answer(text, parse_mode=parse_mode)
    except Exception:
        logger.exception("Failed to send reply message")
        return

    if AUTO_DELETE_SECONDS and AUTO_DELETE_SECONDS > 0:
        async def _del_after(m):
            await asyncio.sleep(AUTO_DELETE_SECONDS)
            try:
                await m.delete()
            except Exception:
                logger.debug("Auto-delete failed for bot message", exc_info=True)

        asyncio.create_task(_del_after(sent))


async def _on_message(message: Message, engine: Profanity, censor_type: CensorType) -> None:
    # ignore bots
    if message.from_user is not None and message.from_user.is_bot:
        return

    text = message.text or message.caption or ""
    if not engine.exists(text):
        return

    censored = engine.censor(text, censor_type)
    user_display = _user_display_from_message_user(message.from_user)
    try:
        await message.delete()
    except Exception:
        logger.exception("Failed to delete profane message")
        return
    await _reply_with_optional_delete(message, f"{user_display}: {html.escape(censored)}", parse_mode="HTML")
    logger.info("Censored message from user %s", getattr(message.from_user, "id", None))


async def _on_command(message: Message, engine: Profanity) -> None:
    """Handle public and admin commands.

    Commands supported: /help, /check, /addword, /removeword, /allow, /disallow, /words
    """
    text = (message.text or "").strip()
    if not text:
        return
    parts = text.split()
    cmd = parts[0].lower()
    args = parts[1:]

    if cmd == "/help":
        help_text = (
            "Available commands:\n"
            "<b>/help</b> - show this message\n"
            "<b>/check</b> &lt;text&gt; - check text for profanity\n"
            "<b>/addword</b> &lt;word&gt;... - treat words as profane (admins)\n"
            "<b>/removeword</b> &lt;word&gt;... - stop treating words as profane (admins)\n"
            "<b>/allow</b> &lt;word&gt;... - whitelist words (admins)\n"
            "<b>/disallow</b> &lt;word&gt;... - remove words from the whitelist (admins)\n"
            "<b>/words</b> - show custom word lists (admins)"
        )
        await _reply_with_optional_delete(message, help_text, parse_mode="HTML")
        return

    if cmd == "/check":
        if not args:
            await _reply_with_optional_delete(message, "Usage: /check <text>")
            return
        sample = text.split(maxsplit=1)[1]
        verdict = "contains profanity" if engine.exists(sample) else "looks clean"
        await _reply_with_optional_delete(message, f"Text {verdict}.")
        return

    if cmd not in {"/addword", "/removeword", "/allow", "/disallow", "/words"}:
        return

    user = message.from_user
    if user is None or user.id not in _get_admins():
        await _reply_with_optional_delete(message, "Only administrators can use this command.")
        return

    if cmd == "/words":
        await _reply_with_optional_delete(message, _format_word_lists(engine), parse_mode="HTML")
        return

    if not args:
        await _reply_with_optional_delete(message, f"Usage: {cmd} <word> [word...]")
        return

    if cmd == "/addword":
        engine.add_words(args)
        storage.sync_lists(engine, DB_PATH)
    elif cmd == "/removeword":
        engine.remove_words(args)
        storage.sync_lists(engine, DB_PATH)
    elif cmd == "/allow":
        engine.whitelist.add_words(args)
        storage.save_words(storage.WHITELIST, args, DB_PATH)
    else:
        engine.whitelist.remove_words(args)
        storage.delete_words(storage.WHITELIST, args, DB_PATH)

    logger.info("Admin %s ran %s %s", user.id, cmd, " ".join(args))
    await _reply_with_optional_delete(message, f"Done: {cmd[1:]} {html.escape(', '.join(args))}")


def build_engine() -> Profanity:
    """Create an engine from the environment and restore stored word lists."""
    engine = Profanity(_load_options())
    storage.restore(engine, DB_PATH)
    # fail at startup on unknown PROFANITY_LANGUAGES rather than per message
    engine.get_regex(engine.options.languages)
    return engine


async def _run_async(token: str, engine: Profanity) -> None:
    bot = Bot(token=token)
    dp = Dispatcher()
    dp["engine"] = engine
    dp["censor_type"] = _load_censor_type()

    dp.message.register(_on_command, lambda message: (message.text or "").startswith('/'))
    dp.message.register(_on_message)

    logger.info("Starting polling")
    await dp.start_polling(bot)


def _configure_logging(log_path: str = "moder_censor.log") -> None:
    root = logging.getLogger()
    if root.handlers:
        return
    root.setLevel(logging.INFO)
    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    root.addHandler(ch)

    fh = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=5, encoding="utf-8")
    fh.setFormatter(fmt)
    root.addHandler(fh)


def run(token: Optional[str] = None) -> None:
    """Run the bot. Reads BOT_TOKEN from env if not provided."""
    _configure_logging()

    storage.init_db(DB_PATH)
    engine = build_engine()

    if token is None:
        token = os.environ.get("BOT_TOKEN", "")
    if not token:
        raise RuntimeError("BOT_TOKEN environment variable is required")

    asyncio.run(_run_async(token, engine))
