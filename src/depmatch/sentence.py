from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

Edge = Tuple[int, str]


class DependencyGraph:
    """Labeled directed graph over the token indexes of one sentence.

    For every token the graph keeps the edges leaving it and the edges
    entering it, each as ``(neighbor index, label)`` pairs in insertion order.
    """

    def __init__(self, outgoing: Sequence[Sequence[Edge]], incoming: Sequence[Sequence[Edge]]):
        if len(outgoing) != len(incoming):
            raise ValueError('outgoing and incoming edge lists differ in size')
        self._outgoing = tuple(tuple(edges) for edges in outgoing)
        self._incoming = tuple(tuple(edges) for edges in incoming)

    @classmethod
    def from_edges(cls, size: int, edges: Iterable[Tuple[int, int, str]]) -> 'DependencyGraph':
        outgoing: List[List[Edge]] = [[] for _ in range(size)]
        incoming: List[List[Edge]] = [[] for _ in range(size)]

        for head, dependent, label in edges:
            if not 0 <= head < size or not 0 <= dependent < size:
                raise ValueError('edge %d -> %d out of range for %d tokens' % (head, dependent, size))
            outgoing[head].append((dependent, label))
            incoming[dependent].append((head, label))

        return cls(outgoing, incoming)

    def __len__(self):
        return len(self._outgoing)

    def outgoing_edges(self, i: int) -> Tuple[Edge, ...]:
        return self._outgoing[i]

    def incoming_edges(self, i: int) -> Tuple[Edge, ...]:
        return self._incoming[i]

    def edges(self):
        for head, edges in enumerate(self._outgoing):
            for dependent, label in edges:
                yield head, dependent, label

    def __eq__(self, other):
        if not isinstance(other, DependencyGraph):
            return NotImplemented
        return self._outgoing == other._outgoing and self._incoming == other._incoming

    def __hash__(self):
        return hash((self._outgoing, self._incoming))

    def __repr__(self):
        return 'DependencyGraph(%r)' % list(self.edges())


@dataclass(frozen=True)
class Sentence:
    words: Tuple[str, ...]
    dependencies: Optional[DependencyGraph] = None
    tags: Optional[Tuple[str, ...]] = field(default=None, compare=False)
    lemmas: Optional[Tuple[str, ...]] = field(default=None, compare=False)

    def __post_init__(self):
        # Accept any sequence of words but store a tuple.
        object.__setattr__(self, 'words', tuple(self.words))
        if self.dependencies is not None and len(self.dependencies) != len(self.words):
            raise ValueError('dependency graph has %d tokens but sentence has %d words'
                             % (len(self.dependencies), len(self.words)))

    def __len__(self):
        return len(self.words)

    @property
    def text(self):
        return ' '.join(self.words)

    def __str__(self):
        return self.text


__all__ = ['Edge', 'DependencyGraph', 'Sentence']
