"""
String similarity used for fuzzy key matching.

``similarity_percent`` scores two strings by the number of characters found in
common substrings (longest common substring first, then recursively on the
remaining left and right parts), expressed as a percentage of their combined
length. Any callable with the ``Scorer`` signature can replace it.
"""
from typing import Callable, Tuple

Scorer = Callable[[str, str], float]


def _longest_common(first: str, second: str) -> Tuple[int, int, int]:
    pos1 = pos2 = longest = 0
    for i in range(len(first)):
        for j in range(len(second)):
            k = 0
            while i + k < len(first) and j + k < len(second) and first[i + k] == second[j + k]:
                k += 1
            if k > longest:
                pos1, pos2, longest = i, j, k
    return pos1, pos2, longest


def common_chars(first: str, second: str) -> int:
    pos1, pos2, longest = _longest_common(first, second)
    if not longest:
        return 0
    total = longest
    if pos1 and pos2:
        total += common_chars(first[:pos1], second[:pos2])
    tail1, tail2 = pos1 + longest, pos2 + longest
    if tail1 < len(first) and tail2 < len(second):
        total += common_chars(first[tail1:], second[tail2:])
    return total


def similarity_percent(first: str, second: str) -> float:
    total_len = len(first) + len(second)
    if not total_len:
        return 0.0
    return common_chars(first, second) * 2 * 100.0 / total_len
