"""
Sentence Simplifier

Sign sequences use far fewer tokens than the English they come from:
- Subject-object-verb order
- NOT placed before the verb
- Question words at the end
- No articles, copulas or auxiliaries
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from ..shared.config import SIMPLIFIER_CONFIG
from .analyzer import LinguisticAnalyzer, default_analyzer

logger = logging.getLogger(__name__)

STOP_WORDS = frozenset(SIMPLIFIER_CONFIG['stop_words'])
NEGATION_WORDS = frozenset(SIMPLIFIER_CONFIG['negation_words'])
QUESTION_WORDS = tuple(SIMPLIFIER_CONFIG['question_words'])

_QUESTION_RE = re.compile(r'^\s*(' + '|'.join(QUESTION_WORDS) + r')\b')
_PUNCTUATION_RE = re.compile('[' + re.escape(SIMPLIFIER_CONFIG['strip_punctuation']) + ']')


@dataclass
class SentenceParts:
    """What the simplifier extracted from one sentence."""
    subject: str = ''
    verb: str = ''
    object: str = ''
    negated: bool = False
    question_word: str = ''

    @property
    def complete(self) -> bool:
        return bool(self.subject and self.verb and self.object)


def extract_question_word(sentence: str) -> str:
    """Return the question word the sentence starts with, or ''."""
    match = _QUESTION_RE.match(sentence.lower())
    return match.group(1) if match else ''


def split_words(sentence: str) -> List[str]:
    """Strip sentence punctuation and split on whitespace."""
    return _PUNCTUATION_RE.sub('', sentence.lower()).split()


def has_negation_word(sentence: str) -> bool:
    words = split_words(sentence)
    return any(w in NEGATION_WORDS for w in words)


def extract_parts(sentence: str, analyzer: Optional[LinguisticAnalyzer] = None) -> SentenceParts:
    """
    Pull subject, verb, object, negation and question word out of a sentence.

    Analyzer failures leave subject/verb/object empty, which sends the
    sentence down the fallback path.
    """
    sentence = sentence.lower()
    parts = SentenceParts(
        negated=has_negation_word(sentence),
        question_word=extract_question_word(sentence),
    )

    if analyzer is None:
        analyzer = default_analyzer()

    try:
        analysis = analyzer.analyze(sentence)
    except Exception as e:
        logger.warning(f"Linguistic analysis failed, using fallback: {e}")
        return parts

    parts.negated = parts.negated or analysis.negated

    if analysis.nouns:
        parts.subject = analysis.nouns[0]
        parts.object = next((n for n in analysis.nouns[1:] if n != parts.subject), '')
    if analysis.verbs:
        parts.verb = analysis.verbs[0]

    return parts


def fallback_simplify(sentence: str, question_word: str = '') -> List[str]:
    """
    Rule-based simplification: drop stop words, move negation to the end.

    Args:
        sentence: Lowercased sentence
        question_word: Question word to append, if any

    Returns:
        Simplified tokens
    """
    result = [w for w in split_words(sentence) if w not in STOP_WORDS]

    # Move the first negation to the end as a single NOT
    neg_index = next((i for i, w in enumerate(result) if w in NEGATION_WORDS), None)
    if neg_index is not None:
        del result[neg_index]
        result.append('not')

    if question_word:
        result.append(question_word)

    return result


def simplify(sentence: str, analyzer: Optional[LinguisticAnalyzer] = None) -> List[str]:
    """
    Reduce a sentence to the ordered tokens used for sign lookup.

    Sentences with a full subject, verb and object come out as
    [subject, object, (not,) verb, (question word)]. Anything else goes
    through fallback_simplify(). Never raises.

    Args:
        sentence: Free text in any case, may contain punctuation
        analyzer: Linguistic analyzer to use. None = process default

    Returns:
        List of tokens (empty for empty input)
    """
    sentence = (sentence or '').lower()
    if not sentence.strip():
        return []

    parts = extract_parts(sentence, analyzer)

    if not parts.complete:
        return fallback_simplify(sentence, parts.question_word)

    tokens = [parts.subject, parts.object, parts.verb]

    if parts.negated:
        tokens.insert(2, 'not')  # Before the verb

    if parts.question_word:
        tokens.append(parts.question_word)

    return tokens
