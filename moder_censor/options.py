"""Engine options and censor strategies."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Sequence


class CensorType(IntEnum):
    WORD = 0
    WORD_LENGTH = 1
    FIRST_CHAR = 2
    FIRST_VOWEL = 3
    ALL_VOWELS = 4


@dataclass
class ProfanityOptions:
    """Settings for a `Profanity` instance.

    - languages: default language codes used when a call passes none.
    - whole_word: only match words bounded by a word boundary or underscore.
    - grawlix: replacement for `CensorType.WORD`.
    - grawlix_char: single character used by the character-level strategies.
    """

    languages: Sequence[str] = field(default_factory=lambda: ("en",))
    whole_word: bool = True
    grawlix: str = "@#$%&!"
    grawlix_char: str = "*"
