"""Simple SQLite persistence for custom word lists.

Admin edits to the whitelist, blacklist and removed lists are stored here so
they survive restarts. Each helper opens a sqlite3 connection per call; the
bot issues a handful of writes per admin command, so this stays synchronous.

DB_PATH can be overridden via the DB_PATH environment variable.
"""
from __future__ import annotations

import logging
import os
import sqlite3
from datetime import datetime, timezone
from typing import Iterable

from .moderation import Profanity

logger = logging.getLogger(__name__)

DEFAULT_DB = "moder_censor.db"

WHITELIST = "whitelist"
BLACKLIST = "blacklist"
REMOVED = "removed"
LIST_NAMES = (WHITELIST, BLACKLIST, REMOVED)


def _get_db_path() -> str:
    return os.environ.get("DB_PATH", DEFAULT_DB)


def _check_list_name(list_name: str) -> None:
    if list_name not in LIST_NAMES:
        raise ValueError(f"Unknown word list: {list_name!r}")


def init_db(db_path: str | None = None) -> None:
    """Create tables if they don't exist."""
    path = db_path or _get_db_path()
    with sqlite3.connect(path) as conn:
        cur = conn.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS word_lists (
                list_name TEXT NOT NULL,
                word TEXT NOT NULL,
                added_at TEXT NOT NULL,
                PRIMARY KEY(list_name, word)
            )
            """
        )
        conn.commit()


def save_words(list_name: str, words: Iterable[str], db_path: str | None = None) -> None:
    """Store lowercased `words` in `list_name`; existing rows are kept."""
    _check_list_name(list_name)
    path = db_path or _get_db_path()
    now = datetime.now(timezone.utc).isoformat()
    rows = [(list_name, word.lower(), now) for word in words]
    with sqlite3.connect(path) as conn:
        cur = conn.cursor()
        cur.executemany(
            "INSERT OR IGNORE INTO word_lists(list_name, word, added_at) VALUES(?, ?, ?)",
            rows,
        )
        conn.commit()


def delete_words(list_name: str, words: Iterable[str], db_path: str | None = None) -> None:
    _check_list_name(list_name)
    path = db_path or _get_db_path()
    rows = [(list_name, word.lower()) for word in words]
    with sqlite3.connect(path) as conn:
        cur = conn.cursor()
        cur.executemany("DELETE FROM word_lists WHERE list_name = ? AND word = ?", rows)
        conn.commit()


def load_words(list_name: str, db_path: str | None = None) -> list[str]:
    """Return the words stored in `list_name`, sorted."""
    _check_list_name(list_name)
    path = db_path or _get_db_path()
    with sqlite3.connect(path) as conn:
        cur = conn.cursor()
        cur.execute("SELECT word FROM word_lists WHERE list_name = ? ORDER BY word", (list_name,))
        return [row[0] for row in cur.fetchall()]


def sync_lists(engine: Profanity, db_path: str | None = None) -> None:
    """Overwrite the stored blacklist and removed lists with the engine's.

    `add_words`/`remove_words` can move a word between the two lists, so both
    are rewritten after each edit.
    """
    path = db_path or _get_db_path()
    with sqlite3.connect(path) as conn:
        cur = conn.cursor()
        now = datetime.now(timezone.utc).isoformat()
        for list_name, words in ((BLACKLIST, engine.blacklist), (REMOVED, engine.removed)):
            cur.execute("DELETE FROM word_lists WHERE list_name = ?", (list_name,))
            cur.executemany(
                "INSERT INTO word_lists(list_name, word, added_at) VALUES(?, ?, ?)",
                [(list_name, word, now) for word in words],
            )
        conn.commit()


def restore(engine: Profanity, db_path: str | None = None) -> None:
    """Load every stored list into `engine`."""
    engine.whitelist.add_words(load_words(WHITELIST, db_path))
    engine.blacklist.add_words(load_words(BLACKLIST, db_path))
    engine.removed.add_words(load_words(REMOVED, db_path))
    logger.info(
        "Restored word lists: %d whitelisted, %d blacklisted, %d removed",
        len(engine.whitelist),
        len(engine.blacklist),
        len(engine.removed),
    )
