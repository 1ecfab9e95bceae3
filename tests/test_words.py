from moder_censor.words import WordList


def _counting_list():
    calls = []
    return WordList(lambda: calls.append(1)), calls


def test_add_lowercases_and_dedupes():
    words, _ = _counting_list()
    words.add_words(["Foo", "FOO", "bar"])
    assert list(words) == ["foo", "bar"]
    assert len(words) == 2
    assert "FoO" in words


def test_callback_once_per_batch():
    words, calls = _counting_list()
    words.add_words(["a", "b", "c"])
    assert len(calls) == 1
    words.remove_words(["a", "b"])
    assert len(calls) == 2


def test_no_callback_without_change():
    words, calls = _counting_list()
    words.add_words(["a"])
    words.add_words(["A"])
    words.remove_words(["missing"])
    words.add_words([])
    assert len(calls) == 1


def test_remove_unknown_is_ignored():
    words = WordList()
    words.remove_words(["nothing"])
    assert len(words) == 0
    assert 42 not in words


def test_words_view_is_read_only_copy():
    words = WordList()
    words.add_words(["a"])
    snapshot = words.words
    words.add_words(["b"])
    assert snapshot == frozenset({"a"})


def test_empty_strings_are_skipped():
    words, calls = _counting_list()
    words.add_words(["", ""])
    assert len(words) == 0
    assert calls == []
