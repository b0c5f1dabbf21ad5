"""
Fuzzy key search over dictionary keys.

Scores are distances in [0, 1] where 0 is an exact match. The default
index uses difflib's ratio: score = 1 - SequenceMatcher.ratio().
"""

from difflib import SequenceMatcher
from typing import Iterable, List, Protocol, Tuple


class FuzzyIndex(Protocol):
    def search(self, query: str, limit: int = 1) -> List[Tuple[str, float]]:
        ...


class SequenceMatcherIndex:
    """
    Ranks every key by its SequenceMatcher distance to the query.

    Ties are broken alphabetically so results are deterministic.

    Scores are character-level, not word-level: a phrase sharing most of
    its characters with a key can still differ in a content word
    ("i love cats" scores 0.33 against "i love you").
    """

    def __init__(self, keys: Iterable[str]):
        self.keys = sorted(set(keys))

    def __len__(self):
        return len(self.keys)

    @staticmethod
    def distance(query: str, key: str) -> float:
        return 1.0 - SequenceMatcher(None, key, query, autojunk=False).ratio()

    def search(self, query: str, limit: int = 1) -> List[Tuple[str, float]]:
        """
        Args:
            query: Normalized query text
            limit: Maximum number of candidates

        Returns:
            (key, score) pairs, best first
        """
        if not self.keys or limit <= 0:
            return []

        matcher = SequenceMatcher(None, autojunk=False)
        matcher.set_seq2(query)
        scored = []
        for key in self.keys:
            matcher.set_seq1(key)
            scored.append((key, 1.0 - matcher.ratio()))

        scored.sort(key=lambda pair: (pair[1], pair[0]))
        return scored[:limit]


def build_index(keys: Iterable[str]) -> SequenceMatcherIndex:
    return SequenceMatcherIndex(keys)
