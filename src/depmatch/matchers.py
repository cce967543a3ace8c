import re
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Sequence, Tuple, Union

from depmatch.errors import PreconditionError
from depmatch.sentence import DependencyGraph, Edge, Sentence


class Direction(IntEnum):
    INCOMING = 0
    OUTGOING = 1


@dataclass(frozen=True)
class ExactLabelMatcher:
    label: str

    def matches(self, edges: Sequence[Edge]) -> List[int]:
        return [i for i, label in edges if label == self.label]

    def to_expression(self):
        return self.label


@dataclass(frozen=True)
class RegexLabelMatcher:
    pattern: re.Pattern

    def matches(self, edges: Sequence[Edge]) -> List[int]:
        return [i for i, label in edges if self.pattern.search(label) is not None]

    def to_expression(self):
        return '/%s/' % self.pattern.pattern


LabelMatcher = Union[ExactLabelMatcher, RegexLabelMatcher]


def get_dependencies(sentence: Sentence, operation: str) -> DependencyGraph:
    if sentence.dependencies is None:
        raise PreconditionError('%s: no dependency graph present in sentence %r' % (operation, sentence.text))
    return sentence.dependencies


class _Composable:
    def then(self, other: 'DependencyMatcher') -> 'PathMatcher':
        return PathMatcher(self, other)


@dataclass(frozen=True)
class HopMatcher(_Composable):
    matcher: LabelMatcher
    direction: Direction = Direction.OUTGOING

    def find_from(self, sentence: Sentence, i: int) -> Optional[int]:
        deps = get_dependencies(sentence, 'HopMatcher.find_from')

        if self.direction == Direction.INCOMING:
            edges = deps.incoming_edges(i)
        elif self.direction == Direction.OUTGOING:
            edges = deps.outgoing_edges(i)
        else:
            raise ValueError('invalid direction')

        candidates = self.matcher.matches(edges)

        # Zero or several candidates are both a non-match.
        if len(candidates) == 1:
            return candidates[0]
        return None

    @property
    def hops(self) -> Tuple['HopMatcher', ...]:
        return (self,)

    def to_expression(self):
        prefix = '<' if self.direction == Direction.INCOMING else '>'
        return prefix + self.matcher.to_expression()


@dataclass(frozen=True)
class PathMatcher(_Composable):
    lhs: 'DependencyMatcher'
    rhs: 'DependencyMatcher'

    def find_from(self, sentence: Sentence, i: int) -> Optional[int]:
        j = self.lhs.find_from(sentence, i)
        if j is None:
            return None
        return self.rhs.find_from(sentence, j)

    @property
    def hops(self) -> Tuple[HopMatcher, ...]:
        return self.lhs.hops + self.rhs.hops

    def to_expression(self):
        return ' '.join(hop.to_expression() for hop in self.hops)


DependencyMatcher = Union[HopMatcher, PathMatcher]


@dataclass(frozen=True)
class TriggerMatcher:
    word: str

    def find_all_in(self, sentence: Sentence) -> List[int]:
        return [i for i, word in enumerate(sentence.words) if word == self.word]


__all__ = ['Direction', 'ExactLabelMatcher', 'RegexLabelMatcher', 'LabelMatcher',
           'HopMatcher', 'PathMatcher', 'DependencyMatcher', 'TriggerMatcher',
           'get_dependencies']
