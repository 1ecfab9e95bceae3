import asyncio
from types import SimpleNamespace

import pytest

from moder_censor import app, storage
from moder_censor.moderation import Profanity
from moder_censor.options import CensorType

DATASET = {"en": ["ass", "shit", "damn"]}


class FakeMessage:
    def __init__(self, text, user_id=1, username="alice", is_bot=False):
        self.text = text
        self.caption = None
        self.from_user = SimpleNamespace(id=user_id, username=username, is_bot=is_bot)
        self.answers = []
        self.deleted = False

    async def answer(self, text, parse_mode=None):
        self.answers.append(text)
        return SimpleNamespace()

    async def delete(self):
        self.deleted = True


@pytest.fixture
def db(tmp_path, monkeypatch):
    path = str(tmp_path / "bot.db")
    storage.init_db(path)
    monkeypatch.setattr(app, "DB_PATH", path)
    monkeypatch.setattr(app, "AUTO_DELETE_SECONDS", 0)
    monkeypatch.setenv("ADMINS", "1, nope")
    return path


def test_load_options_defaults(monkeypatch):
    for name in ("PROFANITY_LANGUAGES", "PROFANITY_WHOLE_WORD", "PROFANITY_GRAWLIX", "PROFANITY_GRAWLIX_CHAR"):
        monkeypatch.delenv(name, raising=False)
    options = app._load_options()
    assert list(options.languages) == ["en"]
    assert options.whole_word is True
    assert options.grawlix == "@#$%&!"
    assert options.grawlix_char == "*"


def test_load_options_from_env(monkeypatch):
    monkeypatch.setenv("PROFANITY_LANGUAGES", "en, de,,")
    monkeypatch.setenv("PROFANITY_WHOLE_WORD", "off")
    monkeypatch.setenv("PROFANITY_GRAWLIX", "[bleep]")
    monkeypatch.setenv("PROFANITY_GRAWLIX_CHAR", "##")
    options = app._load_options()
    assert options.languages == ["en", "de"]
    assert options.whole_word is False
    assert options.grawlix == "[bleep]"
    # multi-character values fall back to the default
    assert options.grawlix_char == "*"


def test_load_censor_type(monkeypatch):
    monkeypatch.setenv("PROFANITY_CENSOR_TYPE", "word_length")
    assert app._load_censor_type() is CensorType.WORD_LENGTH
    monkeypatch.setenv("PROFANITY_CENSOR_TYPE", "bogus")
    assert app._load_censor_type() is CensorType.WORD
    monkeypatch.delenv("PROFANITY_CENSOR_TYPE")
    assert app._load_censor_type() is CensorType.WORD


def test_get_admins_skips_invalid(monkeypatch):
    monkeypatch.setenv("ADMINS", "1, 2,abc,")
    assert app._get_admins() == {1, 2}


def test_profane_message_is_reposted_censored(db):
    engine = Profanity(dataset=DATASET)
    message = FakeMessage("what the shit")
    asyncio.run(app._on_message(message, engine, CensorType.WORD_LENGTH))
    assert message.deleted
    assert message.answers == ["@alice: what the ****"]


def test_clean_message_is_left_alone(db):
    engine = Profanity(dataset=DATASET)
    message = FakeMessage("good morning")
    asyncio.run(app._on_message(message, engine, CensorType.WORD))
    assert not message.deleted
    assert message.answers == []


def test_bot_messages_are_ignored(db):
    engine = Profanity(dataset=DATASET)
    message = FakeMessage("shit", is_bot=True)
    asyncio.run(app._on_message(message, engine, CensorType.WORD))
    assert not message.deleted


def test_check_command(db):
    engine = Profanity(dataset=DATASET)
    message = FakeMessage("/check is this damn thing on", user_id=5)
    asyncio.run(app._on_command(message, engine))
    assert message.answers == ["Text contains profanity."]


def test_admin_commands_require_admin(db):
    engine = Profanity(dataset=DATASET)
    message = FakeMessage("/addword widget", user_id=5)
    asyncio.run(app._on_command(message, engine))
    assert "widget" not in engine.blacklist
    assert message.answers == ["Only administrators can use this command."]


def test_unknown_command_is_ignored(db):
    engine = Profanity(dataset=DATASET)
    message = FakeMessage("/start", user_id=5)
    asyncio.run(app._on_command(message, engine))
    assert message.answers == []


def test_word_commands_update_engine_and_storage(db):
    engine = Profanity(dataset=DATASET)

    asyncio.run(app._on_command(FakeMessage("/addword Widget"), engine))
    asyncio.run(app._on_command(FakeMessage("/removeword shit"), engine))
    asyncio.run(app._on_command(FakeMessage("/allow class"), engine))

    assert engine.exists("a widget")
    assert not engine.exists("shit")
    assert storage.load_words(storage.BLACKLIST, db) == ["widget"]
    assert storage.load_words(storage.REMOVED, db) == ["shit"]
    assert storage.load_words(storage.WHITELIST, db) == ["class"]

    asyncio.run(app._on_command(FakeMessage("/disallow class"), engine))
    assert "class" not in engine.whitelist
    assert storage.load_words(storage.WHITELIST, db) == []

    restored = app.build_engine()
    assert set(restored.blacklist) == {"widget"}
    assert set(restored.removed) == {"shit"}


def test_words_command_lists_custom_words(db):
    engine = Profanity(dataset=DATASET)
    engine.add_words(["widget"])
    message = FakeMessage("/words")
    asyncio.run(app._on_command(message, engine))
    assert "<b>Blacklist:</b> widget" in message.answers[0]
    assert "<b>Whitelist:</b> -" in message.answers[0]
