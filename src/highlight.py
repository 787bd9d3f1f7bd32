"""Which nodes and connections to emphasise around a selected person or pet."""

import logging
from dataclasses import dataclass

import networkx as nx

from graph import OWNER_OF, PARENT_OF, SPOUSE_OF, build_graph, related
from models import Connection, FamilyTreeData, NodeId, Position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Highlight:
    selected_id: str | None
    connected: frozenset[str]

    @property
    def active(self) -> bool:
        return self.selected_id is not None

    def is_emphasized(self, node_id: str) -> bool:
        return not self.active or node_id in self.connected

    def _endpoint_connected(self, node_id: NodeId, positions: dict[NodeId, Position]) -> bool:
        pos = positions.get(node_id)
        if pos is not None and pos.is_anchor:
            return any(m in self.connected for m in pos.member_ids)
        return node_id in self.connected

    def is_connection_emphasized(self, connection: Connection, positions: dict[NodeId, Position]) -> bool:
        """
        True when both endpoints are connected to the selection.

        An anchor endpoint counts as connected when any member of its unit is.
        """
        if not self.active:
            return True
        return self._endpoint_connected(connection.from_id, positions) and self._endpoint_connected(
            connection.to_id, positions
        )


def resolve_highlight(G: nx.DiGraph, selected_id: str | None) -> Highlight:
    """
    Connected set for a selection on the relationship graph.

    For a person: the person, parents, spouse, children and pets. For a pet:
    the pet and its owner. With no selection (or an id not in the graph)
    every node is connected.
    """
    if selected_id is None or selected_id not in G:
        if selected_id is not None:
            logger.debug("Selected id %r not in tree; highlighting everything", selected_id)
        return Highlight(None, frozenset(G.nodes))

    connected = {selected_id}
    if G.nodes[selected_id].get("node_type") == "pet":
        connected.update(related(G, selected_id, OWNER_OF, incoming=True))
    else:
        connected.update(related(G, selected_id, PARENT_OF, incoming=True))
        connected.update(related(G, selected_id, SPOUSE_OF))
        connected.update(related(G, selected_id, SPOUSE_OF, incoming=True))
        connected.update(related(G, selected_id, PARENT_OF))
        connected.update(related(G, selected_id, OWNER_OF))

    return Highlight(selected_id, frozenset(connected))


def highlight_for(data: FamilyTreeData, selected_id: str | None) -> Highlight:
    """Build the relationship graph for `data` and resolve the selection on it."""
    return resolve_highlight(build_graph(data), selected_id)
