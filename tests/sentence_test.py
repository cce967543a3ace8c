import pytest

from depmatch.sentence import DependencyGraph, Sentence


def test_edges_recorded_in_both_directions(gave_sentence):
    deps = gave_sentence.dependencies
    assert deps.outgoing_edges(1) == ((0, 'nsubj'), (2, 'iobj'), (4, 'dobj'))
    assert deps.incoming_edges(4) == ((1, 'dobj'),)
    assert deps.incoming_edges(1) == ()
    assert deps.outgoing_edges(3) == ()


def test_cycles_are_allowed():
    deps = DependencyGraph.from_edges(2, [(0, 1, 'a'), (1, 0, 'b')])
    assert deps.outgoing_edges(1) == ((0, 'b'),)
    assert deps.incoming_edges(1) == ((0, 'a'),)


def test_out_of_range_edge():
    with pytest.raises(ValueError):
        DependencyGraph.from_edges(2, [(0, 2, 'dobj')])


def test_graph_size_must_match_words():
    with pytest.raises(ValueError):
        Sentence(["a", "b"], DependencyGraph.from_edges(3, []))


def test_sentence_without_graph():
    sentence = Sentence(["Hello", "world"])
    assert sentence.dependencies is None
    assert sentence.words == ("Hello", "world")
    assert sentence.text == "Hello world"
    assert len(sentence) == 2


def test_graph_edges_roundtrip(gave_sentence):
    deps = gave_sentence.dependencies
    assert DependencyGraph.from_edges(len(deps), deps.edges()) == deps
