"""Validation of family tree data before layout."""

import logging

import networkx as nx

from errors import (
    CycleError,
    DataQualityIssue,
    EmptyInputError,
    GenerationMismatchError,
    InvalidTreeDataError,
    MissingReferenceError,
)
from graph import build_graph, find_parent_cycles
from models import FamilyMember, FamilyTreeData, Pet

logger = logging.getLogger(__name__)


def check_types(data: FamilyTreeData) -> None:
    """Raise InvalidTreeDataError if `data` is not shaped like tree data."""
    if not isinstance(data, FamilyTreeData):
        raise InvalidTreeDataError(f"Expected FamilyTreeData, got {type(data).__name__}")

    for m in data.members:
        if not isinstance(m, FamilyMember):
            raise InvalidTreeDataError(f"Expected FamilyMember, got {type(m).__name__}")
        if not isinstance(m.id, str) or not m.id:
            raise InvalidTreeDataError(f"Member id must be a non-empty string, got {m.id!r}")
        if isinstance(m.generation, bool) or not isinstance(m.generation, int):
            raise InvalidTreeDataError(f"Member {m.id!r} has non-integer generation {m.generation!r}")
        for ids in (m.parent_ids, m.child_ids, m.pet_ids):
            if isinstance(ids, str) or not all(isinstance(i, str) for i in ids):
                raise InvalidTreeDataError(f"Member {m.id!r} has malformed id list {ids!r}")
        if m.spouse_id is not None and not isinstance(m.spouse_id, str):
            raise InvalidTreeDataError(f"Member {m.id!r} has malformed spouseId {m.spouse_id!r}")

    for pet in data.pets:
        if not isinstance(pet, Pet):
            raise InvalidTreeDataError(f"Expected Pet, got {type(pet).__name__}")
        if not isinstance(pet.id, str) or not pet.id:
            raise InvalidTreeDataError(f"Pet id must be a non-empty string, got {pet.id!r}")
        if not isinstance(pet.owner_id, str):
            raise InvalidTreeDataError(f"Pet {pet.id!r} has malformed ownerId {pet.owner_id!r}")


def validate_tree(data: FamilyTreeData, G: nx.DiGraph | None = None) -> list[DataQualityIssue]:
    """
    Validate the family tree data for:
    - Empty input
    - Dangling spouse, parent, child, pet, owner and root references
    - Spouse links that are not reciprocated
    - Cycles in parent-child relationships
    - Generations that disagree with the parents' generations

    Nothing here is fatal; the layout engine works around every issue.

    Returns a list of issues, in a deterministic order.
    """
    issues: list[DataQualityIssue] = []

    if not data.members:
        issues.append(EmptyInputError())

    members = {}
    for m in data.members:
        if m.id in members:
            issues.append(DataQualityIssue(m.id, f"Duplicate member id {m.id!r}; keeping the first"))
        else:
            members[m.id] = m
    pets = {}
    for p in data.pets:
        if p.id in pets or p.id in members:
            issues.append(DataQualityIssue(p.id, f"Duplicate pet id {p.id!r}; keeping the first"))
        else:
            pets[p.id] = p

    for m in data.members:
        if m.spouse_id and m.spouse_id not in members:
            issues.append(MissingReferenceError(m.id, "spouseId", m.spouse_id))
        elif m.spouse_id:
            spouse = members[m.spouse_id]
            if spouse.spouse_id != m.id:
                issues.append(
                    DataQualityIssue(
                        m.id, f"{m.id}.spouseId is {m.spouse_id} but {m.spouse_id}.spouseId is {spouse.spouse_id}"
                    )
                )
        for parent_id in m.parent_ids:
            if parent_id not in members:
                issues.append(MissingReferenceError(m.id, "parentIds", parent_id))
        for child_id in m.child_ids:
            if child_id not in members:
                issues.append(MissingReferenceError(m.id, "childIds", child_id))
        for pet_id in m.pet_ids:
            if pet_id not in pets:
                issues.append(MissingReferenceError(m.id, "petIds", pet_id))

    for pet in data.pets:
        if pet.owner_id not in members:
            issues.append(MissingReferenceError(pet.id, "ownerId", pet.owner_id))

    for root_id in data.root_member_ids:
        if root_id not in members:
            issues.append(MissingReferenceError(root_id, "rootMemberIds", root_id))

    if G is None:
        G = build_graph(data)
    for cycle_nodes in find_parent_cycles(G):
        issues.append(CycleError(cycle_nodes))

    for m in data.members:
        if m.generation < 0:
            issues.append(GenerationMismatchError(m.id, m.generation))
            continue
        parent_gens = [members[p].generation for p in m.parent_ids if p in members]
        if parent_gens:
            expected = max(parent_gens) + 1
            if m.generation != expected:
                issues.append(GenerationMismatchError(m.id, m.generation, expected))

    for issue in issues:
        logger.warning("%s", issue.message)

    return issues
