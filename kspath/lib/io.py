from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Tuple, TypeVar, Union

import yaml

from kspath.config import SearchConfig
from kspath.lib.algorithms.base import NodeID
from kspath.lib.graph import COST_ATTR, StrictDiGraph

V = TypeVar("V")


def graph_to_node_link(graph: StrictDiGraph) -> Dict[str, Any]:
    """
    Converts a StrictDiGraph into a node-link dict representation.

    This representation is suitable for JSON serialization.

    The returned dict has the following structure:
        {
            "graph": { ... top-level graph attributes ... },
            "nodes": [
                {"id": node_id, "attr": { ... node attributes ... }},
                ...
            ],
            "links": [
                {
                    "source": <indexed_node>,
                    "target": <indexed_node>,
                    "attr": { ... edge attributes, including "cost" ... }
                },
                ...
            ]
        }

    Args:
        graph: The StrictDiGraph to convert.

    Returns:
        A dict containing the 'graph' attributes, list of 'nodes', and list of 'links'.
    """
    node_dict = graph.get_nodes()
    node_list = list(node_dict.keys())
    node_map = {node_id: i for i, node_id in enumerate(node_list)}

    return {
        "graph": dict(graph.graph),
        "nodes": [
            {"id": node_id, "attr": dict(node_dict[node_id])} for node_id in node_list
        ],
        "links": [
            {
                "source": node_map[src],
                "target": node_map[dst],
                "attr": dict(edge_attrs),
            }
            for (src, dst), edge_attrs in graph.get_edges().items()
        ],
    }


def node_link_to_graph(
    data: Dict[str, Any], cost_attr: str = COST_ATTR
) -> StrictDiGraph:
    """
    Reconstructs a StrictDiGraph from its node-link dict representation.

    Expected input format is the one produced by `graph_to_node_link`. Links
    refer to nodes by their index in the "nodes" list. The edge weight is read
    from the `cost_attr` entry of each link's "attr" mapping (default 1).

    Args:
        data: A dict representing the node-link structure.
        cost_attr: Edge attribute holding the weight.

    Returns:
        A StrictDiGraph reconstructed from the provided data.

    Raises:
        ValueError: If a link refers to an unknown node index or carries an
            invalid cost.
    """
    graph_attrs = data.get("graph", {})
    graph = StrictDiGraph(**graph_attrs)

    node_map: Dict[int, NodeID] = {}
    for idx, node_obj in enumerate(data.get("nodes", [])):
        node_id = node_obj["id"]
        graph.add_node(node_id, **node_obj.get("attr", {}))
        node_map[idx] = node_id

    for edge_obj in data.get("links", []):
        try:
            src_id = node_map[edge_obj["source"]]
            dst_id = node_map[edge_obj["target"]]
        except KeyError as exc:
            raise ValueError(f"Link {edge_obj!r} refers to an unknown node.") from exc
        edge_attr = dict(edge_obj.get("attr", {}))
        cost = edge_attr.pop(cost_attr, 1)
        # The selected attribute becomes the stored cost
        edge_attr.pop(COST_ATTR, None)
        graph.add_edge(src_id, dst_id, cost=cost, **edge_attr)

    return graph


def normalize_yaml_dict_keys(data: Dict[Any, V]) -> Dict[str, V]:
    """Normalize dictionary keys from YAML parsing to ensure consistent string keys.

    YAML 1.1 boolean keys (e.g., true, false, yes, no, on, off) get converted to
    Python True/False boolean values. This function converts them to predictable
    string representations ("True"/"False") and ensures all keys are strings.

    Args:
        data: Dictionary that may contain boolean or other non-string keys
            from YAML parsing.

    Returns:
        Dictionary with all keys converted to strings.

    Examples:
        >>> normalize_yaml_dict_keys({True: "value1", "normal": "value2", 7: "x"})
        {'True': 'value1', 'normal': 'value2', '7': 'x'}
    """
    return {str(key): value for key, value in data.items()}


def _add_node_once(graph: StrictDiGraph, node: NodeID) -> None:
    if node not in graph:
        graph.add_node(node)


def _parse_edge(
    edge: Any, cost_attr: str
) -> Tuple[NodeID, NodeID, Any, Dict[str, Any]]:
    if isinstance(edge, dict):
        attrs = dict(edge)
        try:
            src = attrs.pop("source")
            dst = attrs.pop("target")
        except KeyError:
            raise ValueError(
                f"Edge mapping {edge!r} must have 'source' and 'target' keys."
            ) from None
        cost = attrs.pop(cost_attr, 1)
        attrs.pop(COST_ATTR, None)
        return src, dst, cost, attrs
    if isinstance(edge, (list, tuple)) and len(edge) in (2, 3):
        cost = edge[2] if len(edge) == 3 else 1
        return edge[0], edge[1], cost, {}
    raise ValueError(
        f"Edge entry {edge!r} must be [source, target], [source, target, cost] "
        "or a mapping."
    )


def graph_from_dict(data: Dict[str, Any], cost_attr: str = COST_ATTR) -> StrictDiGraph:
    """
    Build a StrictDiGraph from a graph document section.

    Two layouts are accepted. A mapping with a "links" key is read as the
    node-link format (see `node_link_to_graph`). Otherwise the edge-list
    layout is expected:

        nodes:            # optional: list of ids or mapping id -> attributes
          - A
          - B
        edges:
          - [A, B, 2]     # [source, target] or [source, target, cost]
          - {source: B, target: C, cost: 1, label: x}

    Nodes referenced only by edges are created implicitly.

    Args:
        data: Parsed graph mapping.
        cost_attr: Edge attribute holding the weight.

    Returns:
        A new StrictDiGraph.

    Raises:
        ValueError: If the mapping is malformed, an edge is repeated or a cost
            is invalid.
    """
    if not isinstance(data, dict):
        raise ValueError("Graph section must be a mapping")
    if "links" in data:
        return node_link_to_graph(data, cost_attr=cost_attr)

    unknown = sorted(str(key) for key in data if key not in ("nodes", "edges"))
    if unknown:
        raise ValueError(f"Unknown graph keys: {', '.join(unknown)}")

    graph = StrictDiGraph()
    nodes = data.get("nodes") or []
    if isinstance(nodes, dict):
        for node, attrs in nodes.items():
            graph.add_node(node, **(attrs or {}))
    elif isinstance(nodes, list):
        for node in nodes:
            graph.add_node(node)
    else:
        raise ValueError("'nodes' must be a list or a mapping")

    edges = data.get("edges") or []
    if not isinstance(edges, list):
        raise ValueError("'edges' must be a list")
    for edge in edges:
        src, dst, cost, attrs = _parse_edge(edge, cost_attr)
        _add_node_once(graph, src)
        _add_node_once(graph, dst)
        graph.add_edge(src, dst, cost=cost, **attrs)
    return graph


def load_graph_document(text: str) -> Tuple[StrictDiGraph, SearchConfig]:
    """
    Parse a YAML (or JSON) graph document.

    The document is a mapping with a required "graph" section (see
    `graph_from_dict`) and an optional "search" section parsed into a
    `SearchConfig`. Its `cost_attr` selects the edge weight attribute.

    Raises:
        ValueError: If the document is not a mapping or any section is invalid.
        yaml.YAMLError: If the text is not valid YAML.
    """
    data = yaml.safe_load(text)
    if not isinstance(data, dict):
        raise ValueError("Graph document must be a YAML mapping")
    data = normalize_yaml_dict_keys(data)

    unknown = sorted(key for key in data if key not in ("graph", "search"))
    if unknown:
        raise ValueError(f"Unknown top-level keys: {', '.join(unknown)}")
    if "graph" not in data:
        raise ValueError("Graph document has no 'graph' section")

    config = SearchConfig.from_dict(data.get("search"))
    graph = graph_from_dict(data["graph"], cost_attr=config.cost_attr)
    return graph, config


def load_graph_file(path: Union[str, Path]) -> Tuple[StrictDiGraph, SearchConfig]:
    """
    Read and parse a graph document from `path`.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the document is invalid.
    """
    text = Path(path).read_text(encoding="utf-8")
    return load_graph_document(text)


def graph_summary(graph: StrictDiGraph) -> Dict[str, Any]:
    """Return node/edge counts and cost range of `graph`."""
    costs: List[Any] = [attrs[COST_ATTR] for attrs in graph.get_edges().values()]
    return {
        "nodes": graph.number_of_nodes(),
        "edges": graph.number_of_edges(),
        "min_cost": min(costs) if costs else None,
        "max_cost": max(costs) if costs else None,
    }
