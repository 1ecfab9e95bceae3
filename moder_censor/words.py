"""Word list with a change callback.

The engine keeps three of these (whitelist, blacklist, removed) and passes
its cache-clearing method as `on_change`, so any edit drops compiled patterns.
"""
from __future__ import annotations

from typing import Callable, Iterable, Iterator, Optional


class WordList:
    def __init__(self, on_change: Optional[Callable[[], None]] = None) -> None:
        # dict keeps insertion order, which is the alternation order in patterns
        self._words: dict[str, None] = {}
        self._on_change = on_change

    @property
    def words(self) -> frozenset[str]:
        return frozenset(self._words)

    def add_words(self, words: Iterable[str]) -> None:
        """Add lowercased `words`; fires the callback once if anything was new.

        Empty strings are skipped, they would match at every position.
        """
        changed = False
        for word in words:
            word = word.lower()
            if word and word not in self._words:
                self._words[word] = None
                changed = True
        if changed and self._on_change is not None:
            self._on_change()

    def remove_words(self, words: Iterable[str]) -> None:
        """Remove lowercased `words`; unknown words are ignored."""
        changed = False
        for word in words:
            word = word.lower()
            if word in self._words:
                del self._words[word]
                changed = True
        if changed and self._on_change is not None:
            self._on_change()

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.lower() in self._words

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._words))

    def __len__(self) -> int:
        return len(self._words)

    def __repr__(self) -> str:
        return f"WordList({list(self._words)!r})"
