from __future__ import annotations

from typing import Dict, List, Set

from naive_gst.suffix_tree import GeneralizedSuffixTree


def count_overlaps(text: str, pat: str) -> int:
    n = m = 0
    while True:
        i = text.find(pat, n)
        if i == -1:
            return m
        m += 1
        n = i + 1


def occurrences(text: str, pat: str) -> List[int]:
    res = []
    n = 0
    while True:
        i = text.find(pat, n)
        if i == -1:
            return res
        res.append(i)
        n = i + 1


# 모든 문자열에 공통인 부분 문자열 (완전 탐색)
def common_substrings(strings: list[str]) -> Set[str]:
    # 문자열이 하나뿐이면 공통 부분 문자열 없음
    if len(strings) < 2:
        return set()
    shortest = min(strings, key=len)
    candidates = {shortest[i:j] for i in range(len(shortest)) for j in range(i + 1, len(shortest) + 1)}
    return {c for c in candidates if all(c in t for t in strings)}


def longest_common_substrings(strings: list[str]) -> List[str]:
    common = common_substrings(strings)
    if not common:
        return []
    k = max(len(c) for c in common)
    return sorted(c for c in common if len(c) == k)


def string_positions(strings: list[str], pat: str) -> Dict[int, List[int]]:
    res = {}
    for sid, t in enumerate(strings):
        pos = occurrences(t, pat)
        if pos:
            res[sid] = pos
    return res


def check_suffixes(strings: list[str], gst: GeneralizedSuffixTree, verbose=False) -> bool:
    for t in strings:
        for i in range(len(t)):
            if not gst.has_suffix(t[i:]):
                if verbose:
                    print(f"[!] Suffix {t[i:]!r} of {t!r} not found.")
                return False
    if verbose:
        print(f"[+] All suffixes found.")
    return True


def check_positions(strings: list[str], gst: GeneralizedSuffixTree, verbose=False) -> bool:
    for t in strings:
        for i in range(len(t)):
            expected = string_positions(strings, t[i:])
            got = gst.get_string_positions_by_index(t[i:])
            if got != expected:
                if verbose:
                    print(f"[!] Positions of {t[i:]!r}: got {got}, expected {expected}.")
                return False
    if verbose:
        print(f"[+] All suffix positions match.")
    return True


def check_common(strings: list[str], gst: GeneralizedSuffixTree, verbose=False) -> bool:
    found = gst.get_common_substrings()
    unsound = [c for c in found if not all(c in t for t in strings)]
    if unsound:
        if verbose:
            print(f"[!] Not common to all strings: {unsound}")
        return False

    expected = longest_common_substrings(strings)
    got = sorted(gst.get_longest_common_substrings())
    if got != expected:
        if verbose:
            print(f"[!] Wrong answer: longest common substrings {got}, expected {expected}.")
        return False

    if verbose:
        print(f"[+] Longest common substrings {got} are correct.")
    return True


def check_answer(strings: list[str], gst: GeneralizedSuffixTree, verbose=False) -> bool:
    if verbose:
        print(f"[new]")
        print(f"[-] strings: {strings}")

    if verbose:
        print(f"[1/3] Check that every suffix is in the tree...")
    if not check_suffixes(strings, gst, verbose):
        return False

    if verbose:
        print(f"[2/3] Check common substrings...")
    if not check_common(strings, gst, verbose):
        return False

    if verbose:
        print(f"[3/3] Check suffix positions...")
    if not check_positions(strings, gst, verbose):
        return False

    return True


if __name__ == "__main__":
    T = ["banana", "ananas"]
    gst = GeneralizedSuffixTree()
    for t in T:
        gst.add_string(t)
    print(check_answer(T, gst, verbose=True))
