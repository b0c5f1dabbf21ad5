"""Tests for sentence simplification."""

import pytest

from signflow.translator.analyzer import Analysis, RuleBasedAnalyzer
from signflow.translator.simplifier import (
    extract_question_word,
    fallback_simplify,
    simplify,
)


class StubAnalyzer:
    """Returns a fixed analysis regardless of input."""

    def __init__(self, nouns=(), verbs=(), negated=False):
        self.analysis = Analysis(sentences=['stub'], nouns=list(nouns),
                                 verbs=list(verbs), negated=negated)

    def analyze(self, text):
        return self.analysis


class BrokenAnalyzer:
    def analyze(self, text):
        raise RuntimeError("tagger crashed")


@pytest.fixture
def rules():
    return RuleBasedAnalyzer()


class TestSubjectObjectVerb:

    def test_svo_becomes_sov(self, rules):
        assert simplify("the cat chases the mouse", rules) == ["cat", "mouse", "chase"]

    def test_input_case_is_ignored(self, rules):
        assert simplify("The Cat CHASES the Mouse.", rules) == ["cat", "mouse", "chase"]

    def test_pronouns_are_noun_phrases(self, rules):
        assert simplify("I love you", rules) == ["i", "you", "love"]

    def test_negation_inserted_before_verb(self, rules):
        assert simplify("I don't like cats", rules) == ["i", "cats", "not", "like"]

    def test_question_word_appended_after_verb(self):
        analyzer = StubAnalyzer(nouns=["you", "food"], verbs=["eat"])
        assert simplify("what you eat food", analyzer) == ["you", "food", "eat", "what"]

    def test_negation_and_question_both_apply(self):
        analyzer = StubAnalyzer(nouns=["dog", "meat"], verbs=["eat"], negated=True)
        assert simplify("why dog not eat meat", analyzer) == ["dog", "meat", "not", "eat", "why"]

    def test_not_inserted_once_for_multiple_cues(self):
        analyzer = StubAnalyzer(nouns=["he", "cats"], verbs=["like"], negated=True)
        tokens = simplify("he never does not like cats", analyzer)
        assert tokens.count("not") == 1
        assert tokens == ["he", "cats", "not", "like"]

    def test_object_must_differ_from_subject(self):
        analyzer = StubAnalyzer(nouns=["cat", "cat"], verbs=["see"])
        # No distinct object, so the fallback path is taken
        assert simplify("cat see cat", analyzer) == ["cat", "see", "cat"]

    def test_deterministic(self, rules):
        sentence = "the dog eats the food"
        assert simplify(sentence, rules) == simplify(sentence, rules)


class TestFallback:

    def test_negation_moved_to_end(self, rules):
        assert simplify("i am not happy", rules) == ["i", "happy", "not"]

    def test_negation_never_duplicated(self, rules):
        tokens = simplify("i am not happy", rules)
        assert tokens.count("not") == 1

    def test_question_word_appended(self, rules):
        tokens = simplify("what is your name", rules)
        assert tokens[-1] == "what"
        assert "is" not in tokens

    def test_question_word_must_be_sentence_initial(self, rules):
        tokens = simplify("is what your name", rules)
        assert tokens == ["what", "your", "name"]

    def test_sentence_without_nouns_uses_fallback(self, rules):
        assert simplify("run", rules) == ["run"]

    def test_punctuation_and_stop_words_removed(self):
        assert fallback_simplify("the dog, a cat and the mouse!") == ["dog", "cat", "mouse"]

    def test_contracted_negation_becomes_not(self):
        assert fallback_simplify("i can't swim") == ["i", "swim", "not"]

    def test_only_first_negation_moved(self):
        assert fallback_simplify("never say never") == ["say", "never", "not"]

    def test_empty_input(self, rules):
        assert simplify("", rules) == []
        assert simplify("   ", rules) == []

    def test_analyzer_failure_degrades_to_fallback(self):
        assert simplify("the cat chases the mouse", BrokenAnalyzer()) == ["cat", "chases", "mouse"]

    @pytest.mark.parametrize("sentence", [
        "!!!", "?", "a the an", "12 34", "ünïcödé wörds", "don't", "how", "  what  ",
    ])
    def test_never_raises(self, rules, sentence):
        assert isinstance(simplify(sentence, rules), list)


class TestQuestionWords:

    @pytest.mark.parametrize("sentence,expected", [
        ("what is this", "what"),
        ("Where is the bathroom", "where"),
        ("who are you", "who"),
        ("when do we eat", "when"),
        ("why", "why"),
        ("how are you", "how"),
        ("is what your name", ""),
        ("however it works", ""),
        ("tell me what you want", ""),
    ])
    def test_extract_question_word(self, sentence, expected):
        assert extract_question_word(sentence) == expected
