"""Search candidates and the priority frontier used by the Dijkstra engines.

A candidate is one endpoint of a partial path: a node, the accumulated weight
from its search root, and a reference to the candidate it was expanded from.
Candidates from one search direction form a tree rooted at the search origin;
many children may share the same parent and a candidate never changes after
creation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from heapq import heappop, heappush
from itertools import count
from typing import Iterator, List, Optional, Tuple

from kspath.lib.algorithms.base import Cost, NodeID


@dataclass(frozen=True, eq=False)
class SearchCandidate:
    """
    Endpoint of a partial path produced during one search run.

    Attributes:
        node: The node reached by this candidate.
        weight: Accumulated weight from the search root to `node`.
        parent: The candidate this one was expanded from, or None for the root.
    """

    node: NodeID
    weight: Cost
    parent: Optional[SearchCandidate] = None

    def child(self, node: NodeID, edge_weight: Cost) -> SearchCandidate:
        """Create a candidate one edge further from the root."""
        return SearchCandidate(node, self.weight + edge_weight, self)

    def iter_to_root(self) -> Iterator[SearchCandidate]:
        """Yield this candidate, then each ancestor up to the search root."""
        current: Optional[SearchCandidate] = self
        while current is not None:
            yield current
            current = current.parent

    def chain_from_root(self) -> List[SearchCandidate]:
        """Return the candidate chain ordered root first."""
        chain = list(self.iter_to_root())
        chain.reverse()
        return chain

    def __repr__(self) -> str:
        parent_node = self.parent.node if self.parent is not None else None
        return (
            f"SearchCandidate(node={self.node!r}, weight={self.weight}, "
            f"parent={parent_node!r})"
        )


@dataclass(frozen=True)
class SearchSolution:
    """
    A joined pair of forward and backward candidates.

    The forward candidate is rooted at the start node, the backward candidate at
    the end node; both refer to the same join node.

    Attributes:
        forward: Terminal candidate of the forward search tree.
        backward: Terminal candidate of the backward search tree.
    """

    forward: SearchCandidate
    backward: SearchCandidate

    @property
    def weight(self) -> Cost:
        """Total weight of the joined path."""
        return self.forward.weight + self.backward.weight

    @property
    def join_node(self) -> NodeID:
        return self.forward.node


@dataclass
class Frontier:
    """
    Min-priority queue of search candidates keyed by accumulated weight.

    Entries are never removed eagerly: a node may be queued several times and
    callers skip stale entries when they pop an already settled node. Equal
    weights pop in insertion order.
    """

    _heap: List[Tuple[Cost, int, SearchCandidate]] = field(
        default_factory=list, repr=False
    )
    _counter: Iterator[int] = field(default_factory=count, repr=False)

    def push(self, candidate: SearchCandidate) -> None:
        heappush(self._heap, (candidate.weight, next(self._counter), candidate))

    def pop(self) -> SearchCandidate:
        """
        Remove and return the lowest-weight candidate.

        Raises:
            IndexError: If the frontier is empty.
        """
        return heappop(self._heap)[2]

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
