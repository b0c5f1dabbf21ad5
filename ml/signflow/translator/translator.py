"""
Text-to-Sign Translator

Main entry point for translating English text to sign assets.
"""

import logging
from typing import Dict, List, Optional

from ..shared.config import PATHS
from .analyzer import LinguisticAnalyzer, default_analyzer
from .dictionary import DictionaryStore
from .matcher import SignMatcher
from .simplifier import NEGATION_WORDS, STOP_WORDS, extract_question_word, simplify, split_words

logger = logging.getLogger(__name__)


class SignTranslator:
    """
    Main translator class for English → sign assets.

    Usage:
        translator = SignTranslator()
        translator.load_default_dictionaries()
        result = translator.translate("The cat chases the mouse")
        # result contains simplified tokens and resolved sign assets
    """

    def __init__(self, store: Optional[DictionaryStore] = None,
                 analyzer: Optional[LinguisticAnalyzer] = None):
        """
        Initialize the translator.

        Args:
            store: Dictionary store. If None, an empty one is created.
            analyzer: Linguistic analyzer. If None, uses the process default.
        """
        self.store = store if store is not None else DictionaryStore()
        self.analyzer = analyzer
        self.matcher = SignMatcher(self.store)

    def load_default_dictionaries(self, background: bool = False):
        """Load the configured phrase and word CSVs."""
        if background:
            return self.store.load_csv_in_background(PATHS['phrases_csv'], PATHS['words_csv'])
        return self.store.load_csv(PATHS['phrases_csv'], PATHS['words_csv'])

    def _get_analyzer(self) -> LinguisticAnalyzer:
        if self.analyzer is None:
            self.analyzer = default_analyzer()
        return self.analyzer

    def simplify(self, text: str) -> List[str]:
        return simplify(text, self._get_analyzer())

    def translate(self, text: str) -> Dict:
        """
        Translate English text to a sign sequence.

        Args:
            text: English sentence or phrase

        Returns:
            Dictionary containing:
                - input: Original text
                - tokens: Simplified tokens
                - match_type: 'phrase' or 'word'
                - signs: Resolved results (asset_ref None = no sign found)
                - found / missing: Counts of resolved and unresolved signs
                - notes: Explanations of the simplification

        Raises:
            DictionaryNotReady: if dictionaries are still loading
        """
        tokens = self.simplify(text)
        results = self.matcher.resolve(text, tokens)

        signs = [r.to_dict() for r in results]
        found = sum(1 for r in results if r.found)
        match_type = results[0].kind if results else 'word'

        return {
            'input': text,
            'tokens': tokens,
            'match_type': match_type,
            'signs': signs,
            'found': found,
            'missing': len(results) - found,
            'notes': self._generate_notes(text, tokens, match_type),
        }

    def _generate_notes(self, text: str, tokens: List[str], match_type: str) -> List[str]:
        """Generate notes explaining the translation choices."""
        notes = []

        if match_type == 'phrase':
            notes.append("Matched as a whole phrase")
            return notes

        words = split_words(text or '')

        # Check for word order changes
        kept = [w for w in words if w in tokens]
        ordered_tokens = [t for t in tokens if t in words]
        if kept != ordered_tokens:
            notes.append("Word order changed from English SVO to subject-object-verb")

        dropped = [w for w in words if w in STOP_WORDS]
        if dropped:
            notes.append(f"Articles/auxiliaries dropped: {', '.join(dropped)}")

        negations = [w for w in words if w in NEGATION_WORDS]
        if negations and 'not' in tokens:
            notes.append(f"Negation signed as NOT: {', '.join(negations)}")

        question = extract_question_word(text or '')
        if question and tokens and tokens[-1] == question:
            notes.append(f"Question word moved to end: {question}")

        return notes

    def translate_batch(self, texts: List[str]) -> List[Dict]:
        """Translate multiple texts."""
        return [self.translate(text) for text in texts]

    def get_available_signs(self) -> Dict[str, List[str]]:
        """Get all phrase and word keys in the dictionaries."""
        return {
            'phrases': self.store.phrase_keys(),
            'words': self.store.word_keys(),
        }


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)

    test_sentences = [
        "The cat chases the mouse",
        "Where is the bathroom",
        "I am not happy",
        "Thank you",
        "I don't like coffee",
    ]

    translator = SignTranslator()
    translator.load_default_dictionaries()

    for sentence in test_sentences:
        print(f"\n{'='*60}")
        print(f"Input: {sentence}")
        print(f"{'='*60}")

        result = translator.translate(sentence)

        print(f"Tokens: {' '.join(result['tokens'])}")
        print(f"Signs found: {result['found']}/{len(result['signs'])}")
        for sign in result['signs']:
            print(f"  {sign['key']}: {sign['asset_ref'] or '(no sign)'}")

        if result['notes']:
            print(f"\nNotes:")
            for note in result['notes']:
                print(f"  • {note}")
