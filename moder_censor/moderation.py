"""Profanity detection and censoring.

This module holds the matching engine used by the bot. It is deterministic and
has no I/O, so unit-tests can exercise it without starting anything.

How matching works:
- Word lists for the requested languages are combined with the custom
  blacklist (minus words in `removed`) into one alternation pattern.
- Patterns are cached per language set and dropped whenever a word list changes.
- Matching is case-insensitive. With `whole_word` the alternation is anchored
  by a word boundary or an underscore on both sides.
- Whitelisted words suppress matches that coincide with (whole-word mode) or
  overlap (partial mode) one of their occurrences.
"""
from __future__ import annotations

import dataclasses
import logging
import re
from typing import Callable, Mapping, Optional, Sequence

from .data import PROFANE_WORDS
from .errors import InvalidCensorTypeError, InvalidInputError, UnknownLanguageError
from .options import CensorType, ProfanityOptions
from .words import WordList

logger = logging.getLogger(__name__)

# characters that make a neighbouring whitelisted word "not whole"
_WORD_CHAR = re.compile(r"[\w-]")
_VOWEL = re.compile(r"[aeiou]", re.IGNORECASE)
# used when there is nothing to match at all
_NEVER = r"(?!)"


def _compile_pattern(words: Sequence[str], whole_word: bool) -> re.Pattern:
    """Compile a single case-insensitive pattern from literal `words`.

    Every word is escaped. With `whole_word` the alternation is wrapped in
    `(?:\\b|_)` on both sides, so "word" and "_word_" match but "sword" does not.
    """
    if not words:
        return re.compile(_NEVER)
    alternation = "|".join(re.escape(word) for word in words)
    if whole_word:
        pattern = rf"(?:\b|_)({alternation})(?:\b|_)"
    else:
        pattern = f"({alternation})"
    return re.compile(pattern, re.IGNORECASE)


class Profanity:
    """Profanity engine with per-instance word lists and pattern cache.

    `dataset` maps language codes to word sequences and defaults to the
    bundled `PROFANE_WORDS`. Keyword `overrides` are applied on top of
    `options`, e.g. `Profanity(whole_word=False)`.
    """

    def __init__(
        self,
        options: Optional[ProfanityOptions] = None,
        dataset: Optional[Mapping[str, Sequence[str]]] = None,
        **overrides,
    ) -> None:
        self.options = dataclasses.replace(options or ProfanityOptions(), **overrides)
        self.dataset = PROFANE_WORDS if dataset is None else dataset
        self.whitelist = WordList(self.clear_regexes)
        self.blacklist = WordList(self.clear_regexes)
        self.removed = WordList(self.clear_regexes)
        self._regexes: dict[str, re.Pattern] = {}

    def exists(self, text: str, languages: Optional[Sequence[str]] = None) -> bool:
        """Return True if `text` contains a profane word that is not whitelisted."""
        if not isinstance(text, str):
            return False
        regex = self.get_regex(self._resolve_languages(languages))
        lowercase_text = text.lower()
        for match in regex.finditer(lowercase_text):
            if not self.is_whitelisted(match.start(), match.end(), lowercase_text):
                return True
        return False

    def censor(
        self,
        text: str,
        censor_type: CensorType = CensorType.WORD,
        languages: Optional[Sequence[str]] = None,
    ) -> str:
        """Return `text` with every non-whitelisted profane word censored.

        Text outside the matches is kept as is, including its casing.
        Raises InvalidCensorTypeError for a value that is not a `CensorType`.
        """
        if not isinstance(text, str):
            return text
        censor_type = self._resolve_censor_type(censor_type)
        regex = self.get_regex(self._resolve_languages(languages))
        lowercase_text = text.lower()

        def _replace(word: str, start: int, end: int) -> str:
            if self.is_whitelisted(start, end, lowercase_text):
                return word
            return self.censor_word(word, censor_type)

        return self._replace_profanity(text, lowercase_text, _replace, regex)

    def censor_word(self, word: str, censor_type: CensorType = CensorType.WORD) -> str:
        """Apply a single censor strategy to `word`."""
        censor_type = self._resolve_censor_type(censor_type)
        grawlix_char = self.options.grawlix_char
        if censor_type is CensorType.WORD:
            underscore = "_" if "_" in word else ""
            return self.options.grawlix + underscore
        if censor_type is CensorType.WORD_LENGTH:
            return grawlix_char * len(word)
        if censor_type is CensorType.FIRST_CHAR:
            return grawlix_char + word[1:]
        count = 1 if censor_type is CensorType.FIRST_VOWEL else 0
        return _VOWEL.sub(lambda _: grawlix_char, word, count=count)

    def add_words(self, words: Sequence[str]) -> None:
        """Treat `words` as profane.

        Words previously suppressed with `remove_words` are restored; the rest
        go to the blacklist.
        """
        restored: list[str] = []
        blacklisted: list[str] = []
        for word in words:
            word = word.lower()
            if word in self.removed:
                restored.append(word)
            else:
                blacklisted.append(word)
        if restored:
            self.removed.remove_words(restored)
        if blacklisted:
            self.blacklist.add_words(blacklisted)

    def remove_words(self, words: Sequence[str]) -> None:
        """Stop treating `words` as profane.

        Custom blacklist words are dropped; anything else is recorded in
        `removed` so it is skipped even when a language list contains it.
        """
        unlisted: list[str] = []
        suppressed: list[str] = []
        for word in words:
            word = word.lower()
            if word in self.blacklist:
                unlisted.append(word)
            else:
                suppressed.append(word)
        if unlisted:
            self.blacklist.remove_words(unlisted)
        if suppressed:
            self.removed.add_words(suppressed)

    def is_whitelisted(self, match_start: int, match_end: int, text: str) -> bool:
        """Return True if a whitelisted word suppresses the match.

        `text` is the lowercased text the match offsets refer to.
        """
        for whitelisted in self.whitelist:
            index = text.find(whitelisted, max(0, match_start - len(whitelisted) + 1))
            if index == -1:
                continue
            end = index + len(whitelisted)
            if self.options.whole_word:
                if (
                    match_start == index
                    and match_end == end
                    and (match_start == 0 or not _WORD_CHAR.match(text[match_start - 1]))
                    and (match_end == len(text) or not _WORD_CHAR.match(text[match_end]))
                ):
                    return True
            elif (
                (index <= match_start < end)
                or (index < match_end <= end)
                or (match_start <= index and end <= match_end)
            ):
                return True
        return False

    def get_regex(self, languages: Sequence[str]) -> re.Pattern:
        """Return the compiled pattern for `languages`, building it on first use.

        Raises InvalidInputError when `languages` is empty and
        UnknownLanguageError when a code is missing from the dataset.
        """
        if not languages:
            raise InvalidInputError("At least one language must be provided")
        unique_languages = sorted({language.strip().lower() for language in languages})
        key = ",".join(unique_languages)
        cached = self._regexes.get(key)
        if cached is not None:
            return cached

        words: list[str] = []
        for language in unique_languages:
            language_words = self.dataset.get(language)
            if language_words is None:
                raise UnknownLanguageError(language)
            words.extend(word for word in language_words if word not in self.removed)

        regex = self._build_regex(words)
        self._regexes[key] = regex
        logger.debug("Built profanity pattern for %s (%d words)", key, len(words) + len(self.blacklist))
        return regex

    def clear_regexes(self) -> None:
        """Drop every cached pattern."""
        if self._regexes:
            logger.debug("Clearing %d cached profanity patterns", len(self._regexes))
        self._regexes.clear()

    def _build_regex(self, words: Sequence[str]) -> re.Pattern:
        return _compile_pattern([*words, *self.blacklist], self.options.whole_word)

    def _resolve_languages(self, languages: Optional[Sequence[str]]) -> Sequence[str]:
        if not languages:
            return self.options.languages
        if isinstance(languages, str):
            return [languages]
        return languages

    @staticmethod
    def _resolve_censor_type(censor_type: object) -> CensorType:
        try:
            return CensorType(censor_type)
        except ValueError:
            raise InvalidCensorTypeError(censor_type) from None

    @staticmethod
    def _replace_profanity(
        text: str,
        lowercase_text: str,
        replacer: Callable[[str, int, int], str],
        regex: re.Pattern,
    ) -> str:
        """Splice `replacer` output over every match.

        Match offsets refer to `lowercase_text` (and so to `text`); `offset`
        tracks how far `result` has drifted from them after earlier
        replacements. The word handed to `replacer` always comes from `text`.
        """
        result = text
        offset = 0
        for match in regex.finditer(lowercase_text):
            start, end = match.start(), match.end()
            original = text[start:end]
            censored = replacer(original, start, end)
            result = result[:start + offset] + censored + result[end + offset:]
            offset += len(censored) - len(original)
        return result
