"""Tests for the linguistic analyzers."""

import pytest

from signflow.translator import analyzer as analyzer_module
from signflow.translator.analyzer import NltkAnalyzer, RuleBasedAnalyzer, default_analyzer
from signflow.translator.simplifier import simplify


@pytest.fixture
def rules():
    return RuleBasedAnalyzer()


class TestRuleBasedLemmatizer:

    @pytest.mark.parametrize("word,expected", [
        ("chases", "chase"),
        ("goes", "go"),
        ("watches", "watch"),
        ("studies", "study"),
        ("studied", "study"),
        ("running", "run"),
        ("stopped", "stop"),
        ("liked", "like"),
        ("went", "go"),
        ("ate", "eat"),
        ("is", "be"),
        ("does", "do"),
        ("eat", "eat"),
    ])
    def test_lemmatize(self, rules, word, expected):
        assert rules.lemmatize(word) == expected


class TestRuleBasedTagging:

    def test_tags_simple_sentence(self, rules):
        tags = [tag for _, tag in rules.tag(["the", "cat", "chases", "the", "mouse"])]
        assert tags == ["DET", "NOUN", "VERB", "DET", "NOUN"]

    def test_word_after_determiner_is_noun(self, rules):
        tags = dict(rules.tag(["my", "family"]))
        assert tags["family"] == "NOUN"

    def test_verb_after_to(self, rules):
        tags = dict(rules.tag(["i", "want", "to", "eat"]))
        assert tags["want"] == "VERB"
        assert tags["eat"] == "VERB"

    def test_unknown_word_after_subject_is_verb(self, rules):
        tags = dict(rules.tag(["the", "dog", "barks"]))
        assert tags["barks"] == "VERB"


class TestRuleBasedAnalysis:

    def test_nouns_and_verbs(self, rules):
        analysis = rules.analyze("the cat chases the mouse")
        assert analysis.nouns == ["cat", "mouse"]
        assert analysis.verbs == ["chase"]
        assert not analysis.negated

    def test_compound_noun_phrase(self, rules):
        analysis = rules.analyze("the dog eats cat food")
        assert analysis.nouns == ["dog", "cat food"]
        assert analysis.verbs == ["eat"]

    def test_main_verb_preferred_over_auxiliary(self, rules):
        analysis = rules.analyze("does the dog eat meat")
        assert analysis.verbs == ["eat"]

    def test_copula_used_when_no_main_verb(self, rules):
        analysis = rules.analyze("i am happy")
        assert analysis.verbs == ["be"]
        assert analysis.nouns == ["i"]

    def test_negation(self, rules):
        assert rules.analyze("i do not like tea").negated
        assert rules.analyze("we never go home").negated
        assert not rules.analyze("we go home").negated

    def test_sentences_split(self, rules):
        analysis = rules.analyze("hello there. how are you?")
        assert analysis.sentences == ["hello there", "how are you"]

    def test_empty_text(self, rules):
        analysis = rules.analyze("")
        assert analysis.nouns == []
        assert analysis.verbs == []


class TestNltkAnalyzer:

    @pytest.fixture
    def nltk_analyzer(self):
        pytest.importorskip("nltk")
        analyzer = NltkAnalyzer(download=False)
        if not analyzer.available:
            pytest.skip("NLTK data not installed")
        return analyzer

    def test_finds_nouns(self, nltk_analyzer):
        analysis = nltk_analyzer.analyze("the dog eats the food")
        assert "dog" in analysis.nouns

    def test_negation(self, nltk_analyzer):
        assert nltk_analyzer.analyze("the dog does not eat the food").negated
        assert nltk_analyzer.analyze("the dog doesn't eat").negated

    def test_unavailable_analyzer_raises_lookup_error(self):
        analyzer = NltkAnalyzer.__new__(NltkAnalyzer)
        analyzer.available = False
        with pytest.raises(LookupError):
            analyzer.analyze("anything")


# Fixed tags for sentences fed through a data-free NLTK pipeline
TAGGED = {
    "the cat chases the mouse": ["DT", "NN", "VBZ", "DT", "NN"],
    "i love you": ["PRP", "VBP", "PRP"],
    "the dog does n't eat cat food": ["DT", "NN", "VBZ", "RB", "VB", "NN", "NN"],
    "my cat is happy": ["PRP$", "NN", "VBZ", "JJ"],
    "where does the dog eat meat": ["WRB", "VBZ", "DT", "NN", "VB", "NN"],
}

LEMMAS = {"chases": "chase", "eats": "eat", "loves": "love"}


class FakeLemmatizer:
    def lemmatize(self, word, pos='n'):
        return LEMMAS.get(word, word)


@pytest.fixture
def tagged_nltk(monkeypatch):
    """NltkAnalyzer wired to fixed tags instead of downloaded models."""
    nltk = pytest.importorskip("nltk")

    def word_tokenize(text):
        return text.replace("n't", " n't").split()

    def pos_tag(tokens):
        tags = TAGGED[' '.join(tokens)]
        return list(zip(tokens, tags))

    monkeypatch.setattr(nltk, "sent_tokenize", lambda text: [text])
    monkeypatch.setattr(nltk, "word_tokenize", word_tokenize)
    monkeypatch.setattr(nltk, "pos_tag", pos_tag)

    analyzer = NltkAnalyzer.__new__(NltkAnalyzer)
    analyzer.available = True
    analyzer._lemmatizer = FakeLemmatizer()
    return analyzer


class TestNltkTagMapping:

    def test_nouns_and_lemmatized_verb(self, tagged_nltk):
        analysis = tagged_nltk.analyze("the cat chases the mouse")
        assert analysis.nouns == ["cat", "mouse"]
        assert analysis.verbs == ["chase"]
        assert not analysis.negated

    def test_personal_pronouns_are_nouns(self, tagged_nltk):
        analysis = tagged_nltk.analyze("i love you")
        assert analysis.nouns == ["i", "you"]
        assert analysis.verbs == ["love"]

    def test_possessive_is_not_a_noun(self, tagged_nltk):
        analysis = tagged_nltk.analyze("my cat is happy")
        assert analysis.nouns == ["cat"]
        assert analysis.verbs == ["be"]

    def test_contracted_negation_and_auxiliary(self, tagged_nltk):
        analysis = tagged_nltk.analyze("the dog doesn't eat cat food")
        assert analysis.negated
        assert analysis.nouns == ["dog", "cat food"]
        assert analysis.verbs == ["eat"]

    @pytest.mark.parametrize("sentence,expected", [
        ("the cat chases the mouse", ["cat", "mouse", "chase"]),
        ("i love you", ["i", "you", "love"]),
        ("the dog doesn't eat cat food", ["dog", "cat food", "not", "eat"]),
        ("where does the dog eat meat", ["dog", "meat", "eat", "where"]),
    ])
    def test_simplify_through_nltk_mapping(self, tagged_nltk, sentence, expected):
        assert simplify(sentence, tagged_nltk) == expected


class TestNltkSimplification:

    @pytest.fixture
    def nltk_analyzer(self):
        pytest.importorskip("nltk")
        analyzer = NltkAnalyzer(download=False)
        if not analyzer.available:
            pytest.skip("NLTK data not installed")
        return analyzer

    @pytest.mark.parametrize("sentence,expected", [
        ("the cat chases the mouse", ["cat", "mouse", "chase"]),
        ("the dog does not eat the food", ["dog", "food", "not", "eat"]),
        ("where does the dog eat meat", ["dog", "meat", "eat", "where"]),
    ])
    def test_sentences(self, nltk_analyzer, sentence, expected):
        assert simplify(sentence, nltk_analyzer) == expected


class TestDefaultAnalyzer:

    @pytest.fixture
    def counted_nltk(self, monkeypatch):
        built = []

        class CountingNltkAnalyzer:
            available = True

            def __init__(self):
                built.append(self)

        monkeypatch.setattr(analyzer_module, "NltkAnalyzer", CountingNltkAnalyzer)
        analyzer_module._build_analyzer.cache_clear()
        yield built
        analyzer_module._build_analyzer.cache_clear()

    def test_one_instance_per_preference(self, counted_nltk):
        nltk_first = default_analyzer("nltk")
        rules_first = default_analyzer("rules")
        assert default_analyzer("nltk") is nltk_first
        assert default_analyzer("rules") is rules_first
        assert isinstance(rules_first, RuleBasedAnalyzer)
        assert len(counted_nltk) == 1

    def test_unavailable_nltk_falls_back(self, monkeypatch):
        class MissingNltkAnalyzer:
            available = False

        monkeypatch.setattr(analyzer_module, "NltkAnalyzer", MissingNltkAnalyzer)
        analyzer_module._build_analyzer.cache_clear()
        try:
            assert isinstance(default_analyzer("nltk"), RuleBasedAnalyzer)
        finally:
            analyzer_module._build_analyzer.cache_clear()
