import pytest

from depmatch.sentence import DependencyGraph, Sentence

GAVE_WORDS = ["John", "gave", "Mary", "a", "book"]
GAVE_EDGES = [
    (1, 0, 'nsubj'),
    (1, 2, 'iobj'),
    (1, 4, 'dobj'),
    (4, 3, 'det'),
]


@pytest.fixture
def gave_sentence():
    return Sentence(GAVE_WORDS, DependencyGraph.from_edges(len(GAVE_WORDS), GAVE_EDGES))


@pytest.fixture
def conj_sentence():
    # I eat pizza and salad, with both objects attached to the verb by conj.
    words = ["I", "eat", "pizza", "and", "salad"]
    edges = [
        (1, 0, 'nsubj'),
        (1, 2, 'conj'),
        (1, 4, 'conj'),
        (4, 3, 'cc'),
    ]
    return Sentence(words, DependencyGraph.from_edges(len(words), edges))


@pytest.fixture
def chain_sentence():
    # The cat of the old lady sleeps
    words = ["The", "cat", "of", "the", "old", "lady", "sleeps"]
    edges = [
        (1, 0, 'det'),
        (1, 5, 'nmod_of'),
        (5, 2, 'case'),
        (5, 3, 'det'),
        (5, 4, 'amod'),
        (6, 1, 'nsubj'),
    ]
    return Sentence(words, DependencyGraph.from_edges(len(words), edges))
