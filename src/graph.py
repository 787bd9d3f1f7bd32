"""NetworkX graph building and operations."""

import logging

import networkx as nx

from errors import CycleError
from models import FamilyTreeData

logger = logging.getLogger(__name__)

PARENT_OF = "PARENT_OF"
SPOUSE_OF = "SPOUSE_OF"
OWNER_OF = "OWNER_OF"


def build_graph(data: FamilyTreeData) -> nx.DiGraph:
    """
    Build a NetworkX directed graph from the tree data.

    Person and pet ids become nodes. Edges carry a `relationship_type`:
    PARENT_OF (parent -> child), SPOUSE_OF (member -> spouse) and
    OWNER_OF (owner -> pet). References to ids that are not in the data are
    skipped; `validation.validate_tree` reports them.
    """
    G = nx.DiGraph()

    for m in data.members:
        G.add_node(
            m.id,
            node_type="person",
            person_name=m.display_name,
            generation=m.generation,
            birth_year=m.birth_year,
            death_year=m.death_year,
        )
    for pet in data.pets:
        G.add_node(pet.id, node_type="pet", pet_name=pet.name, species=pet.species)

    def is_person(node_id):
        return node_id in G and G.nodes[node_id]["node_type"] == "person"

    def is_pet(node_id):
        return node_id in G and G.nodes[node_id]["node_type"] == "pet"

    for m in data.members:
        if m.spouse_id and is_person(m.spouse_id) and m.spouse_id != m.id:
            G.add_edge(m.id, m.spouse_id, relationship_type=SPOUSE_OF)

    for m in data.members:
        for parent_id in m.parent_ids:
            if is_person(parent_id):
                G.add_edge(parent_id, m.id, relationship_type=PARENT_OF)
        for child_id in m.child_ids:
            if is_person(child_id):
                G.add_edge(m.id, child_id, relationship_type=PARENT_OF)

    for pet in data.pets:
        if is_person(pet.owner_id):
            G.add_edge(pet.owner_id, pet.id, relationship_type=OWNER_OF)
    for m in data.members:
        for pet_id in m.pet_ids:
            if is_pet(pet_id):
                G.add_edge(m.id, pet_id, relationship_type=OWNER_OF)

    return G


def related(G: nx.DiGraph, node_id: str, relationship_type: str, incoming: bool = False) -> list[str]:
    """Neighbours of `node_id` joined by edges of one relationship type."""
    if incoming:
        edges = G.in_edges(node_id, data="relationship_type")
        return [u for u, _, rel in edges if rel == relationship_type]
    edges = G.out_edges(node_id, data="relationship_type")
    return [v for _, v, rel in edges if rel == relationship_type]


def parent_graph(G: nx.DiGraph) -> nx.DiGraph:
    """Sub-graph holding only the PARENT_OF edges (every person node kept)."""
    P = nx.DiGraph()
    P.add_nodes_from(n for n, t in G.nodes(data="node_type") if t == "person")
    P.add_edges_from(
        (u, v) for u, v, rel in G.edges(data="relationship_type") if rel == PARENT_OF
    )
    return P


def find_parent_cycles(G: nx.DiGraph) -> list[list[str]]:
    """
    Find parent-child cycles, breaking each one as it is found.

    Returns the cycles in discovery order. The graph passed in is not changed.
    """
    P = parent_graph(G)
    cycles: list[list[str]] = []
    while True:
        try:
            cycle = nx.find_cycle(P, orientation="original")
        except nx.NetworkXNoCycle:
            break
        cycles.append([edge[0] for edge in cycle])
        # Drop the closing edge so the next search can make progress
        u, v = cycle[-1][0], cycle[-1][1]
        P.remove_edge(u, v)
    return cycles


def assign_generations(G: nx.DiGraph) -> tuple[dict[str, int], list[CycleError]]:
    """
    Derive a generation index for every person from the PARENT_OF edges.

    Generation is the longest parent chain above a person, so the oldest
    ancestors are generation 0. Spouses who married into the tree (no parents
    of their own) are moved to their partner's generation. Cycle edges are
    dropped and reported.

    Returns:
        (generation by person id, cycle issues)
    """
    P = parent_graph(G)
    issues: list[CycleError] = []
    for cycle_nodes in find_parent_cycles(G):
        issues.append(CycleError(cycle_nodes))
        logger.warning("Ignoring parent cycle %s", cycle_nodes)
        P.remove_edge(cycle_nodes[-1], cycle_nodes[0])

    order = list(nx.topological_sort(P))

    def propagate(gens: dict[str, int]) -> None:
        for node in order:
            parents = list(P.predecessors(node))
            if parents:
                gens[node] = max(gens.get(node, 0), max(gens[p] + 1 for p in parents))
            else:
                gens.setdefault(node, 0)

    generations: dict[str, int] = {}
    propagate(generations)

    spouse_pairs = [
        (u, v) for u, v, rel in G.edges(data="relationship_type") if rel == SPOUSE_OF
    ]
    for _ in range(len(spouse_pairs) + 1):
        changed = False
        for u, v in spouse_pairs:
            for married_in, partner in ((u, v), (v, u)):
                if P.in_degree(married_in) == 0 and generations[married_in] < generations[partner]:
                    generations[married_in] = generations[partner]
                    changed = True
        if not changed:
            break
        propagate(generations)

    return generations, issues
