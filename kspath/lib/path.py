from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Any, Dict, Iterator, List, NamedTuple, Optional, Sequence, Tuple

from kspath.lib.algorithms.base import Cost, EdgeTuple, NodeID
from kspath.lib.algorithms.candidate import SearchSolution
from kspath.lib.graph import GraphObject


class PathElement(NamedTuple):
    """
    A node on a path together with the cumulative weight from the path's start.
    """

    node: NodeID
    weight: Cost


def _drop_cycles(elements: List[PathElement]) -> List[PathElement]:
    """
    Cut out any cycle between repeated visits of a node.

    The two halves of a bidirectional solution may share a node besides the
    join node when zero-weight edges are involved. Later weights are lowered
    by the weight of the removed cycle.
    """
    result: List[PathElement] = []
    position: Dict[NodeID, int] = {}
    shift: Cost = 0
    for node, weight in elements:
        weight -= shift
        pos = position.get(node)
        if pos is not None:
            shift += weight - result[pos].weight
            for dropped in result[pos + 1 :]:
                del position[dropped.node]
            del result[pos + 1 :]
            continue
        position[node] = len(result)
        result.append(PathElement(node, weight))
    return result


@dataclass(frozen=True)
class Path:
    """
    Represents a single path through the graph.

    Paths are immutable values. Operations that decompose or splice paths return
    new instances.

    Attributes:
        elements (Tuple[PathElement, ...]):
            Ordered path elements, root first. Each element carries the
            cumulative weight from the first element, so the first weight is 0
            and the last one is the total weight of the path.
        start_node (NodeID):
            Label of the node the path was requested from.
        end_node (NodeID):
            Label of the node the path was requested to.
    """

    elements: Tuple[PathElement, ...]
    start_node: NodeID
    end_node: NodeID

    def __post_init__(self) -> None:
        if not self.elements:
            raise ValueError("A path must contain at least one element.")

    @classmethod
    def from_solution(
        cls, solution: SearchSolution, start_node: NodeID, end_node: NodeID
    ) -> Path:
        """
        Reconstruct a flat path from a joined forward/backward candidate pair.

        The forward chain is emitted root first with its own weights. The
        backward chain stores distances to the end node, so each node after the
        join point is re-weighted by adding the weight of the backward edge just
        traversed. The join node appears exactly once.

        Args:
            solution: The joined candidates.
            start_node: Label of the start node.
            end_node: Label of the end node.

        Returns:
            A new Path from the forward root to the backward root.
        """
        elements = [
            PathElement(cand.node, cand.weight)
            for cand in solution.forward.chain_from_root()
        ]
        weight = solution.forward.weight
        prev_remaining = solution.backward.weight
        back = solution.backward.parent
        while back is not None:
            weight += prev_remaining - back.weight
            elements.append(PathElement(back.node, weight))
            prev_remaining = back.weight
            back = back.parent
        return cls(tuple(_drop_cycles(elements)), start_node, end_node)

    @classmethod
    def from_nodes(cls, nodes: Sequence[NodeID], graph: GraphObject) -> Path:
        """
        Build a path from a node sequence, looking up edge weights in `graph`.

        Raises:
            ValueError: If `nodes` is empty.
            KeyError: If two consecutive nodes are not connected.
        """
        if not nodes:
            raise ValueError("A path must contain at least one element.")
        elements = [PathElement(nodes[0], 0)]
        for src, dst in zip(nodes, nodes[1:]):
            weight = elements[-1].weight + graph.edge_weight(src, dst)
            elements.append(PathElement(dst, weight))
        return cls(tuple(elements), nodes[0], nodes[-1])

    def __getitem__(self, idx: int) -> PathElement:
        return self.elements[idx]

    def __iter__(self) -> Iterator[PathElement]:
        return iter(self.elements)

    def __len__(self) -> int:
        """
        Return the number of elements (nodes) in the path.
        """
        return len(self.elements)

    def __lt__(self, other: Any) -> bool:
        """
        Compare two paths based on their total weight.

        Returns NotImplemented if `other` is not a Path.
        """
        if not isinstance(other, Path):
            return NotImplemented
        return self.weight < other.weight

    def __repr__(self) -> str:
        return f"Path({'-'.join(str(n) for n in self.nodes_seq)}, weight={self.weight})"

    @property
    def weight(self) -> Cost:
        """Total weight of the path (weight of the last element)."""
        return self.elements[-1].weight

    @cached_property
    def nodes_seq(self) -> Tuple[NodeID, ...]:
        """
        Return a tuple of node IDs in order along the path.
        """
        return tuple(element.node for element in self.elements)

    def last_node(self) -> PathElement:
        return self.elements[-1]

    def root_paths(self) -> List[Path]:
        """
        Return all proper non-empty prefixes of this path, shortest first.

        A path with n elements has n - 1 root paths; the i-th holds the first
        i + 1 elements. Each root path keeps the original start label and ends
        at its own last node.
        """
        return list(self.iter_root_paths())

    def iter_root_paths(self) -> Iterator[Path]:
        """Lazily yield the same prefixes as `root_paths`."""
        for size in range(1, len(self.elements)):
            yield Path(
                self.elements[:size], self.start_node, self.elements[size - 1].node
            )

    def includes_path(self, other: Path) -> bool:
        """
        Check whether `other`'s node sequence is a prefix of this path's.

        Weights are not compared.
        """
        if len(other.elements) > len(self.elements):
            return False
        return self.nodes_seq[: len(other.elements)] == other.nodes_seq

    def outgoing_edge_for_sub_path(self, sub_path: Path) -> Optional[EdgeTuple]:
        """
        Return the edge this path takes right after `sub_path`.

        Args:
            sub_path: A candidate prefix of this path.

        Returns:
            (last node of sub_path, next node of this path), or None if
            `sub_path` is not a prefix or this path does not continue past it.
        """
        size = len(sub_path.elements)
        if size >= len(self.elements) or not self.includes_path(sub_path):
            return None
        return self.elements[size - 1].node, self.elements[size].node

    def merge_with(self, other: Path) -> Path:
        """
        Splice `other` onto the end of this path.

        Weights of `other` are shifted so that its first element weighs as much
        as this path's last element. If `other` starts at this path's last node,
        the shared junction element is kept only once.

        Args:
            other: Suffix path, normally starting at this path's last node.

        Returns:
            A new Path from this path's start to `other`'s end.
        """
        last = self.elements[-1]
        offset = last.weight - other.elements[0].weight
        suffix = other.elements
        if suffix[0].node == last.node:
            suffix = suffix[1:]
        merged = self.elements + tuple(
            PathElement(element.node, element.weight + offset) for element in suffix
        )
        return Path(merged, self.start_node, other.end_node)

    def validate(self) -> None:
        """
        Check the path invariants.

        Raises:
            ValueError: If the first weight is not 0, weights decrease along
                the path, or a node is repeated.
        """
        if self.elements[0].weight != 0:
            raise ValueError(
                f"Path must start at weight 0, got {self.elements[0].weight}."
            )
        for prev, curr in zip(self.elements, self.elements[1:]):
            if curr.weight < prev.weight:
                raise ValueError(
                    f"Path weight decreases from {prev.node!r} ({prev.weight}) "
                    f"to {curr.node!r} ({curr.weight})."
                )
        seen = set()
        for node in self.nodes_seq:
            if node in seen:
                raise ValueError(f"Path visits node {node!r} more than once.")
            seen.add(node)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the path to a JSON-friendly dictionary.
        """
        return {
            "start": self.start_node,
            "end": self.end_node,
            "weight": self.weight,
            "nodes": list(self.nodes_seq),
            "elements": [
                {"node": element.node, "weight": element.weight}
                for element in self.elements
            ],
        }
