from typing import Union

import spacy
from spacy.tokens import Doc, Span

from depmatch.sentence import DependencyGraph, Sentence

SPACY_MODEL = "en_core_web_sm"

__NLP = None


def get_nlp():
    global __NLP
    if __NLP is None:
        __NLP = spacy.load(SPACY_MODEL)
    return __NLP


def is_root(token):
    return token.head.i == token.i or token.dep_ == 'ROOT'


def sentence_from_span(span: Union[Doc, Span]) -> Sentence:
    """Convert one parsed spaCy sentence into a :class:`Sentence`.

    Each non-root token contributes the edge ``head -> token`` labeled with
    its dependency. Indexes are relative to the start of the span; heads
    outside the span are dropped.
    """
    offset = span[0].i if len(span) else 0
    edges = []

    for token in span:
        if is_root(token):
            continue
        head = token.head.i - offset
        if not 0 <= head < len(span):
            continue
        edges.append((head, token.i - offset, token.dep_))

    return Sentence(
        words=tuple(token.text for token in span),
        dependencies=DependencyGraph.from_edges(len(span), edges),
        tags=tuple(token.tag_ for token in span),
        lemmas=tuple(token.lemma_ for token in span),
    )


def split_sentences(doc: Doc):
    if doc.has_annotation('SENT_START') or doc.has_annotation('DEP'):
        yield from doc.sents
    else:
        yield doc[:]


__all__ = ['SPACY_MODEL', 'get_nlp', 'is_root', 'sentence_from_span', 'split_sentences']
