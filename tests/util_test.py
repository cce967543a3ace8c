from spacy.tokens import Doc
from spacy.vocab import Vocab

from depmatch.rule import compile_pattern
from depmatch.util import sentence_from_span, split_sentences


def make_doc():
    # Two sentences: "John gave Mary a book . She smiled ."
    words = ["John", "gave", "Mary", "a", "book", ".", "She", "smiled", "."]
    heads = [1, 1, 1, 4, 1, 1, 7, 7, 7]
    deps = ["nsubj", "ROOT", "dative", "det", "dobj", "punct", "nsubj", "ROOT", "punct"]
    return Doc(Vocab(), words=words, heads=heads, deps=deps)


def test_sentence_from_doc():
    sentence = sentence_from_span(make_doc())
    deps = sentence.dependencies

    assert sentence.words[:5] == ("John", "gave", "Mary", "a", "book")
    assert deps.outgoing_edges(1) == ((0, 'nsubj'), (2, 'dative'), (4, 'dobj'), (5, 'punct'))
    assert deps.incoming_edges(1) == ()
    assert deps.incoming_edges(3) == ((4, 'det'),)


def test_split_sentences_offsets():
    spans = list(split_sentences(make_doc()))
    assert len(spans) == 2

    second = sentence_from_span(spans[1])
    assert second.words == ("She", "smiled", ".")
    assert second.dependencies.outgoing_edges(1) == ((0, 'nsubj'), (2, 'punct'))


def test_rule_on_spacy_sentence():
    first = sentence_from_span(next(split_sentences(make_doc())))
    rule = compile_pattern('trigger: gave\nsubject: nsubj\nrecipient: dative\nthing: dobj\nwhich: dobj det')
    assert rule.find_all_matches(first) == [{'subject': 0, 'recipient': 2, 'thing': 4, 'which': 3}]


def test_unparsed_doc_has_no_edges():
    doc = Doc(Vocab(), words=["just", "words"])
    spans = list(split_sentences(doc))
    assert len(spans) == 1
    sentence = sentence_from_span(spans[0])
    assert list(sentence.dependencies.edges()) == []
