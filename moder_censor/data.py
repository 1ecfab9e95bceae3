"""Bundled word lists, keyed by language code.

Read-only: the engine filters these through its `removed` list instead of
editing them. Any mapping with the same shape can be passed to `Profanity`.
"""
from typing import Mapping, Sequence

PROFANE_WORDS: Mapping[str, Sequence[str]] = {
    "en": (
        "arse",
        "arsehole",
        "ass",
        "asshole",
        "bastard",
        "bitch",
        "bollocks",
        "bullshit",
        "butthole",
        "cock",
        "crap",
        "cunt",
        "damn",
        "dick",
        "dickhead",
        "douchebag",
        "fuck",
        "fucked",
        "fucker",
        "fucking",
        "goddamn",
        "jackass",
        "motherfucker",
        "piss",
        "prick",
        "pussy",
        "shit",
        "shitty",
        "slut",
        "twat",
        "wanker",
        "whore",
    ),
    "de": (
        "arsch",
        "arschloch",
        "fotze",
        "hure",
        "kacke",
        "scheisse",
        "scheiße",
        "schlampe",
        "wichser",
    ),
    "es": (
        "cabrón",
        "coño",
        "gilipollas",
        "joder",
        "mierda",
        "pendejo",
        "puta",
    ),
    "fr": (
        "bordel",
        "connard",
        "connasse",
        "enculé",
        "merde",
        "putain",
        "salope",
    ),
    "ru": (
        "блять",
        "говно",
        "мудак",
        "сука",
        "хуй",
    ),
}
