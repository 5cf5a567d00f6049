import pytest

from nerkit import gazetteer
from nerkit.gazetteer import FreeBaseFeature, FreeBaseMatcher
from nerkit.process_data import read_corpus
from nerkit.resources import LexiconStore
from nerkit.structures import Feature

LEXICONS = {
    "freebase_2502.txt3": "Berlin\tLOC\nBerlin Mitte\tLOC\nDeutsche Bank\tORG\n",
    "vornameList.txt": "Angela\nKlaus\n",
    "nachnamenList.txt": "Merkel\n",
    "dbpediaLocationList.txt": "Berlin\n",
    "suffixClassList.txt": "ung\tNOUN\nburg\tPLACE\nhamburg\tCITY\n",
    "clark10m256": "Berlin\t3\t17\n",
    "200k_2d_wordlists": "Berlin\tHamburg\tBerlins\tStadt\tOrt\n",
    "topicCluster50.txt": "Berlin\tT50\n",
    "topicCluster.txt": "Berlin\tT100\n",
}


@pytest.fixture
def store(make_store):
    return make_store(LEXICONS)


def test_longest_ngram_wins(store) -> None:
    matcher = FreeBaseMatcher(store)

    assert matcher.match(["Berlin", "Mitte"]) == ["B-LOC", "I-LOC"]


def test_single_word_match_and_none(store) -> None:
    matcher = FreeBaseMatcher(store)

    assert matcher.match(["Wir", "lieben", "Berlin"]) == ["none", "none", "B-LOC"]


def test_containment_is_substring_based(store) -> None:
    matcher = FreeBaseMatcher(store)

    # "in" is a substring of the matching 1-gram "Berlin" without starting it.
    assert matcher.match(["in", "Berlin"]) == ["I-LOC", "B-LOC"]


def test_token_inside_a_multiword_entry(store) -> None:
    matcher = FreeBaseMatcher(store)

    tags = matcher.match(["Die", "Deutsche", "Bank", "zahlt"])

    assert tags == ["none", "B-ORG", "I-ORG", "none"]


def test_reader_stores_freebase_tags_on_tokens(store) -> None:
    document = read_corpus("Berlin\tB-LOC\nMitte\tI-LOC\n\nHallo\tO\n", freebase=FreeBaseMatcher(store))

    assert [t.freebase for t in document.tokens] == ["B-LOC", "I-LOC", "none"]
    assert [t.freebase for t in document.sentences[0].tokens] == ["B-LOC", "I-LOC"]
    assert FreeBaseFeature().apply(document.sentences[0], 1) == [Feature("FreeBase", "I-LOC")]


def test_freebase_feature_without_matcher(sentence_of) -> None:
    assert FreeBaseFeature().apply(sentence_of("Berlin"), 0) == [Feature("FreeBase", "none")]


def test_membership_lists_use_true_and_false(store, sentence_of) -> None:
    sentence = sentence_of("Angela", "Merkel", "aus", "Berlin")

    assert gazetteer.first_names(store).apply(sentence, 0) == [Feature("DBVorNamen", "true")]
    assert gazetteer.first_names(store).apply(sentence, 1) == [Feature("DBVorNamen", "false")]
    assert gazetteer.last_names(store).apply(sentence, 1) == [Feature("DBNachNamen", "true")]
    assert gazetteer.dbpedia_locations(store).apply(sentence, 3) == [Feature("DBLocation", "true")]


def test_class_lexicons_use_na(store, sentence_of) -> None:
    sentence = sentence_of("Berlin", "und")

    assert gazetteer.clark_pos_induction(store).apply(sentence, 0) == [Feature("ClarkPosInduction", "17")]
    assert gazetteer.similar_word(store, 3).apply(sentence, 0) == [Feature("SIMWO3", "Stadt")]
    assert gazetteer.topic_class(store, 50).apply(sentence, 0) == [Feature("TopicClass50", "T50")]
    assert gazetteer.topic_class(store, 100).apply(sentence, 1) == [Feature("TopicClass100", "NA")]


def test_suffix_class_prefers_the_longest_suffix(store) -> None:
    extractor = gazetteer.suffix_classes(store)

    assert extractor.lookup("Hamburg") == "PLACE"
    assert extractor.lookup("hamburg") == "CITY"
    assert extractor.lookup("Zeitung") == "NOUN"
    assert extractor.lookup("Haus") == "NA"


def test_lookup_is_idempotent(store, sentence_of) -> None:
    sentence = sentence_of("Unbekannt", "Berlin")
    extractor = gazetteer.topic_class(store, 100)

    first = [extractor.apply(sentence, i) for i in range(2)]
    second = [extractor.apply(sentence, i) for i in range(2)]

    assert first == second == [[Feature("TopicClass100", "NA")], [Feature("TopicClass100", "T100")]]


def test_missing_resource_falls_back_to_sentinel(tmp_path, sentence_of) -> None:
    store = LexiconStore(tmp_path / "missing.zip")
    sentence = sentence_of("Angela")

    assert gazetteer.first_names(store).apply(sentence, 0) == [Feature("DBVorNamen", "false")]
    assert FreeBaseMatcher(store).match(["Angela"]) == ["none"]
