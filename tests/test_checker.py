from naive_gst.checker import (
    check_answer,
    check_common,
    check_positions,
    check_suffixes,
    common_substrings,
    count_overlaps,
    longest_common_substrings,
    occurrences,
    string_positions,
)
from naive_gst.suffix_tree import GeneralizedSuffixTree


def build(*strings):
    gst = GeneralizedSuffixTree()
    for s in strings:
        gst.add_string(s)
    return gst


def test_count_overlaps():
    assert count_overlaps("aaaa", "aa") == 3
    assert count_overlaps("banana", "x") == 0


def test_occurrences():
    assert occurrences("banana", "ana") == [1, 3]
    assert occurrences("banana", "x") == []


def test_common_substrings():
    assert common_substrings(["ab", "b"]) == {"b"}
    assert common_substrings([]) == set()
    assert common_substrings(["", "abc"]) == set()
    # a lone string shares nothing
    assert common_substrings(["abc"]) == set()


def test_longest_common_substrings():
    assert longest_common_substrings(["abcdef", "zabcx"]) == ["abc"]
    assert longest_common_substrings(["ab", "ba"]) == ["a", "b"]
    assert longest_common_substrings(["abc", "xyz"]) == []


def test_string_positions():
    assert string_positions(["banana", "ananas"], "ana") == {0: [1, 3], 1: [0, 2]}
    assert string_positions(["banana", "ananas"], "b") == {0: [0]}


def test_check_answer_accepts_correct_tree(capsys):
    strings = ["banana", "ananas", "bandana"]
    assert check_answer(strings, build(*strings), verbose=True)
    out = capsys.readouterr().out
    assert "[+] All suffixes found." in out
    assert "[+] All suffix positions match." in out


def test_check_common_rejects_wrong_answer(monkeypatch):
    strings = ["abcdef", "zabcx"]
    gst = build(*strings)
    monkeypatch.setattr(gst, "get_longest_common_substrings", lambda: ["bc"])
    assert not check_common(strings, gst)
    assert not check_answer(strings, gst)


def test_check_common_rejects_unsound_answer(monkeypatch):
    strings = ["abcdef", "zabcx"]
    gst = build(*strings)
    monkeypatch.setattr(gst, "get_common_substrings", lambda: ["abc", "zab"])
    assert not check_common(strings, gst, verbose=True)


def test_check_suffixes_and_positions_reject_missing_string():
    gst = build("banana")
    assert check_suffixes(["banana"], gst)
    assert not check_suffixes(["banana", "xyz"], gst, verbose=True)
    assert not check_positions(["banana", "ana"], gst)
