"""
Text-to-Sign Translator

Converts English text to sign asset sequences.

Pipeline:
    English Text → Analyze → Simplify (SOV) → Phrase/Word Match → Sign Assets
"""

from .analyzer import Analysis, NltkAnalyzer, RuleBasedAnalyzer, default_analyzer
from .dictionary import DictionaryNotReady, DictionaryStore, LoadReport
from .matcher import PhraseMatch, SignMatcher, WordMatch
from .simplifier import simplify
from .translator import SignTranslator

__all__ = [
    'Analysis', 'NltkAnalyzer', 'RuleBasedAnalyzer', 'default_analyzer',
    'DictionaryNotReady', 'DictionaryStore', 'LoadReport',
    'PhraseMatch', 'SignMatcher', 'WordMatch',
    'simplify', 'SignTranslator',
]
