"""
Linguistic analyzers.

The simplifier needs only a small view of a sentence: its sentences, the
noun phrases in order, the verbs in base form, and whether it is negated.
Any tagger that can produce an Analysis can be plugged in.

Two implementations ship:
    NltkAnalyzer       - NLTK tokenizer + perceptron POS tagger + WordNet lemmas
    RuleBasedAnalyzer  - lexicon and suffix heuristics, no external data
"""

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional, Protocol, Tuple

from ..shared.config import SIMPLIFIER_CONFIG

logger = logging.getLogger(__name__)


@dataclass
class Analysis:
    """Minimal linguistic view of a text."""
    sentences: List[str] = field(default_factory=list)
    nouns: List[str] = field(default_factory=list)   # Noun phrases, in order
    verbs: List[str] = field(default_factory=list)   # Base forms, main verbs first
    negated: bool = False


class LinguisticAnalyzer(Protocol):
    def analyze(self, text: str) -> Analysis:
        ...


PRONOUNS = {
    'i', 'me', 'you', 'he', 'him', 'she', 'her', 'it', 'we', 'us', 'they', 'them',
}

# Forms of be/do/have, which only count as the verb when nothing else does
AUXILIARY_LEMMAS = {
    'am': 'be', 'is': 'be', 'are': 'be', 'was': 'be', 'were': 'be',
    'be': 'be', 'been': 'be', 'being': 'be',
    'do': 'do', 'does': 'do', 'did': 'do',
    'have': 'have', 'has': 'have', 'had': 'have',
}

NEGATION_MARKERS = {'not', "n't", 'never'}


def _split_sentences(text: str) -> List[str]:
    return [s.strip() for s in re.split(r'[.!?]+', text) if s.strip()]


def _select_verbs(verbs: List[Tuple[str, bool]]) -> List[str]:
    """
    Order verb lemmas for subject/object/verb extraction.

    Args:
        verbs: (lemma, is_auxiliary) pairs in sentence order

    Returns:
        Main verbs in order, or the auxiliaries when there is no main verb
    """
    main = [lemma for lemma, is_aux in verbs if not is_aux]
    if main:
        return main
    return [lemma for lemma, _ in verbs]


class NltkAnalyzer:
    """
    Analyzer backed by NLTK.

    Required NLTK data is downloaded on first use. If the data cannot be
    found or fetched, `available` is False and analyze() raises LookupError.
    """

    NOUN_TAGS = {'NN', 'NNS', 'NNP', 'NNPS'}

    def __init__(self, download: bool = True):
        self.available = False
        self._lemmatizer = None
        self._init_nltk(download)

    def _init_nltk(self, download: bool):
        """Initialize NLTK for tokenizing, POS tagging and lemmatizing."""
        try:
            import nltk
            from nltk.stem import WordNetLemmatizer
        except ImportError:
            logger.warning("NLTK not available. Using rule-based analysis.")
            return

        resources = [
            ('tokenizers/punkt', 'punkt'),
            ('tokenizers/punkt_tab', 'punkt_tab'),
            ('taggers/averaged_perceptron_tagger', 'averaged_perceptron_tagger'),
            ('taggers/averaged_perceptron_tagger_eng', 'averaged_perceptron_tagger_eng'),
            ('corpora/wordnet', 'wordnet'),
        ]
        for path, package in resources:
            try:
                nltk.data.find(path)
            except LookupError:
                if download:
                    nltk.download(package, quiet=True)

        # Verify the whole pipeline once; the resource names vary by NLTK version
        try:
            self._lemmatizer = WordNetLemmatizer()
            nltk.pos_tag(nltk.word_tokenize("the cat chases the mouse"))
            self._lemmatizer.lemmatize("chases", 'v')
            self.available = True
        except LookupError as e:
            logger.warning(f"NLTK data unavailable: {e}")

    def analyze(self, text: str) -> Analysis:
        if not self.available:
            raise LookupError("NLTK analyzer is not available")

        import nltk

        analysis = Analysis(sentences=nltk.sent_tokenize(text))
        verbs = []

        for sentence in analysis.sentences:
            tagged = nltk.pos_tag(nltk.word_tokenize(sentence))
            phrase = []

            for word, tag in tagged:
                word = word.lower()
                if word in NEGATION_MARKERS:
                    analysis.negated = True

                if tag in self.NOUN_TAGS:
                    phrase.append(word)
                    continue
                if phrase:
                    analysis.nouns.append(' '.join(phrase))
                    phrase = []

                if tag == 'PRP' and word in PRONOUNS:
                    analysis.nouns.append(word)
                elif tag.startswith('VB'):
                    if word in AUXILIARY_LEMMAS:
                        verbs.append((AUXILIARY_LEMMAS[word], True))
                    else:
                        verbs.append((self._lemmatizer.lemmatize(word, 'v'), False))

            if phrase:
                analysis.nouns.append(' '.join(phrase))

        analysis.verbs = _select_verbs(verbs)
        return analysis


class RuleBasedAnalyzer:
    """
    Simple rule-based tagging used when NLTK is unavailable.

    Tags come from small closed-class word lists first, then suffix rules,
    then position: an unknown word right after the subject is read as its verb.
    """

    DETERMINERS = {
        'the', 'a', 'an', 'this', 'that', 'these', 'those', 'my', 'your', 'his',
        'its', 'our', 'their', 'some', 'any', 'every', 'each', 'no',
    }

    MODALS = {'can', 'could', 'will', 'would', 'should', 'must', 'may', 'might', 'shall'}

    PREPOSITIONS = {
        'to', 'of', 'in', 'on', 'at', 'for', 'with', 'from', 'by', 'about',
        'and', 'or', 'but', 'into', 'over', 'under', 'after', 'before',
    }

    ADJECTIVES = {
        'happy', 'sad', 'angry', 'tired', 'sick', 'hungry', 'thirsty', 'hot',
        'cold', 'good', 'bad', 'big', 'small', 'new', 'old', 'fine', 'sorry',
        'ready', 'busy', 'late', 'early', 'beautiful', 'nice',
    }

    ADVERBS = {'very', 'too', 'also', 'now', 'here', 'there', 'today', 'tomorrow', 'yesterday'}

    KNOWN_VERBS = {
        'go', 'come', 'want', 'like', 'love', 'eat', 'drink', 'see', 'know',
        'think', 'say', 'tell', 'ask', 'give', 'take', 'make', 'get', 'chase',
        'play', 'read', 'write', 'help', 'need', 'run', 'walk', 'sleep', 'work',
        'learn', 'sign', 'buy', 'call', 'watch', 'speak', 'understand', 'live',
        'open', 'close', 'meet', 'find', 'bring', 'teach', 'study', 'use',
        'feel', 'hear', 'wait', 'stop', 'start', 'finish', 'visit', 'catch',
    }

    IRREGULAR_VERBS = {
        'went': 'go', 'gone': 'go', 'came': 'come', 'ate': 'eat', 'eaten': 'eat',
        'drank': 'drink', 'saw': 'see', 'seen': 'see', 'knew': 'know',
        'thought': 'think', 'said': 'say', 'told': 'tell', 'gave': 'give',
        'given': 'give', 'took': 'take', 'taken': 'take', 'made': 'make',
        'got': 'get', 'ran': 'run', 'bought': 'buy', 'wrote': 'write',
        'written': 'write', 'met': 'meet', 'slept': 'sleep', 'spoke': 'speak',
        'understood': 'understand', 'found': 'find', 'brought': 'bring',
        'taught': 'teach', 'felt': 'feel', 'heard': 'hear', 'caught': 'catch',
    }

    def __init__(self):
        negation_words = set(SIMPLIFIER_CONFIG['negation_words'])
        question_words = set(SIMPLIFIER_CONFIG['question_words'])
        self.negation_words = negation_words | NEGATION_MARKERS
        self.question_words = question_words | {'which', 'whose', 'whom'}

    def lemmatize(self, word: str) -> str:
        """Reduce an inflected verb to its base form."""
        if word in self.IRREGULAR_VERBS:
            return self.IRREGULAR_VERBS[word]
        if word in AUXILIARY_LEMMAS:
            return AUXILIARY_LEMMAS[word]
        if word in self.KNOWN_VERBS:
            return word

        for suffix in ('ing', 'ed'):
            if word.endswith(suffix) and len(word) > len(suffix) + 2:
                stem = word[:-len(suffix)]
                if stem in self.KNOWN_VERBS:
                    return stem
                if stem + 'e' in self.KNOWN_VERBS:
                    return stem + 'e'
                # Doubled consonant: running -> run, stopped -> stop
                if len(stem) > 2 and stem[-1] == stem[-2] and stem[:-1] in self.KNOWN_VERBS:
                    return stem[:-1]
                if suffix == 'ed' and stem.endswith('i'):
                    return stem[:-1] + 'y'
                return stem

        if word.endswith('ies') and len(word) > 4:
            return word[:-3] + 'y'
        if word.endswith('s') and word[:-1] in self.KNOWN_VERBS:
            return word[:-1]
        if word.endswith('es') and word[:-2] in self.KNOWN_VERBS:
            return word[:-2]
        if word.endswith(('ches', 'shes', 'sses', 'xes', 'zes')):
            return word[:-2]
        if word.endswith('s') and not word.endswith('ss'):
            return word[:-1]
        return word

    def _is_verb_form(self, word: str) -> bool:
        if word in self.IRREGULAR_VERBS or word in self.KNOWN_VERBS:
            return True
        return self.lemmatize(word) in self.KNOWN_VERBS

    def tag(self, words: List[str]) -> List[Tuple[str, str]]:
        """Tag words with coarse classes: PRON DET AUX MD NEG WH PREP ADJ ADV VERB NOUN."""
        tagged = []
        seen_verb = False

        for word in words:
            previous_word, previous = tagged[-1] if tagged else (None, None)

            if word in PRONOUNS:
                tag = 'PRON'
            elif word in self.negation_words:
                tag = 'NEG'
            elif word in self.question_words:
                tag = 'WH'
            elif word in self.DETERMINERS:
                tag = 'DET'
            elif word in AUXILIARY_LEMMAS:
                tag = 'AUX'
            elif word in self.MODALS:
                tag = 'MD'
            elif word in self.PREPOSITIONS:
                tag = 'PREP'
            elif word in self.ADJECTIVES:
                tag = 'ADJ'
            elif word in self.ADVERBS:
                tag = 'ADV'
            elif previous_word == 'to' and self._is_verb_form(word):
                tag = 'VERB'
            elif previous in ('DET', 'ADJ', 'PREP'):
                tag = 'NOUN'
            elif word.endswith('ly'):
                tag = 'ADV'
            elif self._is_verb_form(word):
                tag = 'VERB'
            elif word.endswith(('ing', 'ed')) and previous in ('AUX', 'MD', 'NEG'):
                tag = 'VERB'
            elif not seen_verb and previous in ('NOUN', 'PRON'):
                tag = 'VERB'
            else:
                tag = 'NOUN'

            if tag == 'VERB':
                seen_verb = True
            tagged.append((word, tag))

        return tagged

    def analyze(self, text: str) -> Analysis:
        analysis = Analysis(sentences=_split_sentences(text))
        verbs = []

        for sentence in analysis.sentences:
            words = re.findall(r"[\w']+", sentence.lower())
            phrase = []

            for word, tag in self.tag(words):
                if tag == 'NEG':
                    analysis.negated = True

                if tag == 'NOUN':
                    phrase.append(word)
                    continue
                if phrase:
                    analysis.nouns.append(' '.join(phrase))
                    phrase = []

                if tag == 'PRON':
                    analysis.nouns.append(word)
                elif tag == 'VERB':
                    verbs.append((self.lemmatize(word), False))
                elif tag == 'AUX':
                    verbs.append((AUXILIARY_LEMMAS[word], True))

            if phrase:
                analysis.nouns.append(' '.join(phrase))

        analysis.verbs = _select_verbs(verbs)
        return analysis


def default_analyzer(preference: Optional[str] = None) -> LinguisticAnalyzer:
    """
    Return the process-wide analyzer.

    NLTK is preferred; the rule-based analyzer is used when NLTK or its
    data is unavailable, or when configured with 'rules'.
    """
    if preference is None:
        preference = SIMPLIFIER_CONFIG['analyzer']
    return _build_analyzer(preference)


@lru_cache(maxsize=None)
def _build_analyzer(preference: str) -> LinguisticAnalyzer:
    """One analyzer per resolved preference, built on first request."""
    if preference == 'nltk':
        analyzer = NltkAnalyzer()
        if analyzer.available:
            logger.info("Using NLTK linguistic analyzer")
            return analyzer
        logger.warning("Falling back to rule-based linguistic analyzer")

    return RuleBasedAnalyzer()
