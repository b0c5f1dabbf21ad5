"""
Sign Dictionary Store

Holds the phrase → asset and word → asset mappings plus a fuzzy index over
each key set. Everything lives in memory; a reload replaces it wholesale.
"""

import csv
import logging
import threading
from dataclasses import dataclass, asdict
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..shared.config import MATCHING_CONFIG
from .fuzzy import FuzzyIndex, build_index

logger = logging.getLogger(__name__)

Entry = Union[Mapping[str, str], Tuple[str, str]]


class DictionaryNotReady(RuntimeError):
    """Raised when a lookup is attempted before the dictionaries have loaded."""


@dataclass
class LoadReport:
    phrases_loaded: int = 0
    words_loaded: int = 0
    skipped_rows: int = 0

    def to_dict(self) -> Dict:
        return asdict(self)


def normalize_key(text: Optional[str]) -> str:
    return (text or '').strip().lower()


class DictionaryStore:
    """
    Phrase and word dictionaries with exact and fuzzy lookup.

    Usage:
        store = DictionaryStore()
        store.load_csv("phrases.csv", "words.csv")
        store.lookup_word("Hello")      # "signs/hello.gif"
        store.fuzzy_word("helo")        # ("hello", 0.11...)
    """

    def __init__(self, index_factory: Callable[[Iterable[str]], FuzzyIndex] = build_index):
        """
        Args:
            index_factory: Builds a fuzzy index from a key set
        """
        self.index_factory = index_factory
        self._phrases: Dict[str, str] = {}
        self._words: Dict[str, str] = {}
        self._phrase_index: Optional[FuzzyIndex] = None
        self._word_index: Optional[FuzzyIndex] = None
        self._ready = threading.Event()
        self.last_report: Optional[LoadReport] = None
        self.load_error: Optional[Exception] = None

    # ========== LOADING ==========

    @staticmethod
    def _parse_entries(entries: Iterable[Entry], key_column: str) -> Tuple[Dict[str, str], int]:
        """
        Normalize raw rows into a key → asset mapping.

        Rows may be mappings (CSV rows with key_column and 'filename') or
        (key, asset) pairs. Rows missing either value are skipped.

        Returns:
            (mapping, number of skipped rows)
        """
        mapping = {}
        skipped = 0

        for row in entries:
            if isinstance(row, Mapping):
                key, asset = row.get(key_column), row.get('filename')
            elif isinstance(row, (tuple, list)) and len(row) == 2:
                key, asset = row
            else:
                skipped += 1
                continue

            try:
                key = normalize_key(key)
                asset = (asset or '').strip()
            except AttributeError:
                # Non-string values
                skipped += 1
                continue
            if not key or not asset:
                skipped += 1
                continue

            mapping[key] = asset

        return mapping, skipped

    def load(self, phrase_entries: Iterable[Entry], word_entries: Iterable[Entry]) -> LoadReport:
        """
        Replace both dictionaries and rebuild both fuzzy indexes.

        Args:
            phrase_entries: Rows with 'phrase' and 'filename', or (phrase, asset) pairs
            word_entries: Rows with 'word' and 'filename', or (word, asset) pairs

        Returns:
            LoadReport with loaded and skipped counts
        """
        phrases, skipped_phrases = self._parse_entries(phrase_entries, 'phrase')
        words, skipped_words = self._parse_entries(word_entries, 'word')

        phrase_index = self.index_factory(phrases.keys())
        word_index = self.index_factory(words.keys())

        # Swap in complete state only
        self._phrases, self._words = phrases, words
        self._phrase_index, self._word_index = phrase_index, word_index

        report = LoadReport(
            phrases_loaded=len(phrases),
            words_loaded=len(words),
            skipped_rows=skipped_phrases + skipped_words,
        )
        self.last_report = report
        self.load_error = None
        self._ready.set()

        logger.info(f"Loaded {report.phrases_loaded} phrases and {report.words_loaded} words")
        if report.skipped_rows:
            logger.warning(f"Skipped {report.skipped_rows} malformed dictionary rows")

        return report

    def load_csv(self, phrase_path: str, word_path: str) -> LoadReport:
        """Load both dictionaries from CSV files with a header row."""
        with open(phrase_path, newline='', encoding='utf-8') as phrase_file, \
                open(word_path, newline='', encoding='utf-8') as word_file:
            return self.load(csv.DictReader(phrase_file), csv.DictReader(word_file))

    def load_csv_in_background(self, phrase_path: str, word_path: str) -> threading.Thread:
        """
        Start a one-shot CSV load on a daemon thread.

        Lookups raise DictionaryNotReady until it completes. A failed load
        is recorded in `load_error` and leaves the store not ready.
        """
        def _run():
            try:
                self.load_csv(phrase_path, word_path)
            except (OSError, csv.Error, UnicodeDecodeError) as e:
                self.load_error = e
                logger.error(f"Dictionary load failed: {e}")

        thread = threading.Thread(target=_run, name='dictionary-load', daemon=True)
        thread.start()
        return thread

    @property
    def is_ready(self) -> bool:
        return self._ready.is_set()

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        return self._ready.wait(timeout)

    def _require_ready(self):
        if not self._ready.is_set():
            raise DictionaryNotReady("Sign dictionaries have not finished loading")

    # ========== LOOKUPS ==========

    def lookup_phrase(self, text: str) -> Optional[str]:
        """Exact phrase lookup."""
        self._require_ready()
        return self._phrases.get(normalize_key(text))

    def lookup_word(self, text: str) -> Optional[str]:
        """Exact word lookup."""
        self._require_ready()
        return self._words.get(normalize_key(text))

    @staticmethod
    def _best(index: Optional[FuzzyIndex], text: str) -> Optional[Tuple[str, float]]:
        if index is None:
            return None
        candidates = index.search(normalize_key(text), limit=1)
        return candidates[0] if candidates else None

    def fuzzy_phrase(self, text: str) -> Optional[Tuple[str, float]]:
        """Best fuzzy phrase candidate as (key, score), or None."""
        self._require_ready()
        return self._best(self._phrase_index, text)

    def fuzzy_word(self, text: str) -> Optional[Tuple[str, float]]:
        """Best fuzzy word candidate as (key, score), or None."""
        self._require_ready()
        return self._best(self._word_index, text)

    def asset_for_phrase_key(self, key: str) -> Optional[str]:
        self._require_ready()
        return self._phrases.get(key)

    def asset_for_word_key(self, key: str) -> Optional[str]:
        self._require_ready()
        return self._words.get(key)

    # ========== BROWSING ==========

    def phrase_keys(self) -> List[str]:
        self._require_ready()
        return sorted(self._phrases)

    def word_keys(self) -> List[str]:
        self._require_ready()
        return sorted(self._words)

    def search(self, query: str, limit: Optional[int] = None) -> List[Dict]:
        """
        Search both dictionaries by fuzzy distance.

        Returns:
            Up to `limit` candidates, best first, each with kind/key/asset/score
        """
        self._require_ready()
        if limit is None:
            limit = MATCHING_CONFIG['search_limit']

        results = []
        for kind, index, mapping in (('phrase', self._phrase_index, self._phrases),
                                     ('word', self._word_index, self._words)):
            if index is None:
                continue
            for key, score in index.search(normalize_key(query), limit=limit):
                results.append({
                    'kind': kind,
                    'key': key,
                    'asset_ref': mapping[key],
                    'score': score,
                })

        results.sort(key=lambda r: (r['score'], r['kind'], r['key']))
        return results[:limit]

    def get_stats(self) -> Dict:
        return {
            'ready': self.is_ready,
            'phrases': len(self._phrases),
            'words': len(self._words),
            'last_load': self.last_report.to_dict() if self.last_report else None,
        }
