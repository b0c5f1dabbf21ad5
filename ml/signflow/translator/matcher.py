"""
Phrase/Word Matcher

Resolves a sentence to sign assets. A whole-phrase match always wins;
only when there is none is each simplified token looked up on its own.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union

from ..shared.config import MATCHING_CONFIG
from .dictionary import DictionaryStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhraseMatch:
    key: str
    asset_ref: str
    kind = 'phrase'

    @property
    def found(self) -> bool:
        return True

    def to_dict(self) -> Dict:
        return {'kind': self.kind, 'key': self.key, 'asset_ref': self.asset_ref, 'found': True}


@dataclass(frozen=True)
class WordMatch:
    key: str
    asset_ref: Optional[str]   # None = no sign found for this token
    original_token: str
    kind = 'word'

    @property
    def found(self) -> bool:
        return self.asset_ref is not None

    def to_dict(self) -> Dict:
        return {
            'kind': self.kind,
            'key': self.key,
            'asset_ref': self.asset_ref,
            'original_token': self.original_token,
            'found': self.found,
        }


SignLookupResult = Union[PhraseMatch, WordMatch]


class SignMatcher:
    """
    Resolves raw input and simplified tokens against a DictionaryStore.

    Tries multiple matching strategies, first applicable wins:
    1. Exact phrase match on the raw input
    2. Fuzzy phrase match (score < phrase_threshold)
    3. Per token: exact word, fuzzy word (score < word_threshold), or unresolved
    """

    def __init__(self, store: DictionaryStore,
                 phrase_threshold: Optional[float] = None,
                 word_threshold: Optional[float] = None):
        """
        Args:
            store: Loaded dictionary store
            phrase_threshold: Fuzzy phrase acceptance bound. None = use config default
            word_threshold: Fuzzy word acceptance bound. None = use config default
        """
        if phrase_threshold is None:
            phrase_threshold = MATCHING_CONFIG['phrase_threshold']
        if word_threshold is None:
            word_threshold = MATCHING_CONFIG['word_threshold']

        self.store = store
        self.phrase_threshold = phrase_threshold
        self.word_threshold = word_threshold

    def match_phrase(self, raw_input: str) -> Optional[PhraseMatch]:
        """Exact then fuzzy phrase match for the whole input."""
        asset = self.store.lookup_phrase(raw_input)
        if asset is not None:
            return PhraseMatch(key=raw_input.strip().lower(), asset_ref=asset)

        candidate = self.store.fuzzy_phrase(raw_input)
        if candidate is not None:
            key, score = candidate
            if score < self.phrase_threshold:
                logger.debug(f"Fuzzy phrase {raw_input!r} -> {key!r} ({score:.2f})")
                return PhraseMatch(key=key, asset_ref=self.store.asset_for_phrase_key(key))

        return None

    def match_word(self, token: str) -> WordMatch:
        """Exact then fuzzy word match for one token. Always returns a result."""
        asset = self.store.lookup_word(token)
        if asset is not None:
            return WordMatch(key=token, asset_ref=asset, original_token=token)

        candidate = self.store.fuzzy_word(token)
        if candidate is not None:
            key, score = candidate
            if score < self.word_threshold:
                logger.debug(f"Fuzzy word {token!r} -> {key!r} ({score:.2f})")
                return WordMatch(key=key, asset_ref=self.store.asset_for_word_key(key),
                                 original_token=token)

        return WordMatch(key=token, asset_ref=None, original_token=token)

    def resolve(self, raw_input: str, simplified_tokens: Sequence[str]) -> List[SignLookupResult]:
        """
        Resolve a sentence to sign lookup results.

        Args:
            raw_input: The sentence as entered
            simplified_tokens: Output of simplify() for that sentence

        Returns:
            A single PhraseMatch, or one WordMatch per token (same order,
            duplicates kept, unresolved tokens included)

        Raises:
            DictionaryNotReady: if the store has not finished loading
        """
        phrase = self.match_phrase(raw_input or '')
        if phrase is not None:
            return [phrase]

        return [self.match_word(token) for token in simplified_tokens]
