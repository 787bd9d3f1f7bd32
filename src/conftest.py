import os

import pytest

os.environ.setdefault("MPLBACKEND", "Agg")

from models import FamilyMember, FamilyTreeData, Pet  # noqa: E402


def person(member_id, generation, spouse=None, parents=(), children=(), pets=(), first=None):
    return FamilyMember(
        id=member_id,
        first_name=first or member_id,
        last_name="Test",
        generation=generation,
        spouse_id=spouse,
        parent_ids=tuple(parents),
        child_ids=tuple(children),
        pet_ids=tuple(pets),
    )


@pytest.fixture
def three_generations() -> FamilyTreeData:
    """James & Dorothy -> {Michael & Sarah, Elizabeth & Carlos} -> {Emma, Noah, Sofia}; Max owned by James."""
    members = (
        person("james", 0, spouse="dorothy", children=("michael", "elizabeth"), pets=("max",), first="James"),
        person("dorothy", 0, spouse="james", children=("michael", "elizabeth"), first="Dorothy"),
        person("michael", 1, spouse="sarah", parents=("james", "dorothy"), children=("emma", "noah"), first="Michael"),
        person("sarah", 1, spouse="michael", children=("emma", "noah"), first="Sarah"),
        person("elizabeth", 1, spouse="carlos", parents=("james", "dorothy"), children=("sofia",), first="Elizabeth"),
        person("carlos", 1, spouse="elizabeth", children=("sofia",), first="Carlos"),
        person("emma", 2, parents=("michael", "sarah"), first="Emma"),
        person("noah", 2, parents=("michael", "sarah"), first="Noah"),
        person("sofia", 2, parents=("elizabeth", "carlos"), first="Sofia"),
    )
    pets = (Pet("max", "Max", "dog", "james"),)
    return FamilyTreeData(members=members, pets=pets, root_member_ids=("james", "dorothy"))


@pytest.fixture
def cross_branch_marriage() -> FamilyTreeData:
    """X (child of A1 & A2) marries Y (child of B1 & B2)."""
    members = (
        person("a1", 0, spouse="a2", children=("x",)),
        person("a2", 0, spouse="a1", children=("x",)),
        person("b1", 0, spouse="b2", children=("y",)),
        person("b2", 0, spouse="b1", children=("y",)),
        person("x", 1, spouse="y", parents=("a1", "a2")),
        person("y", 1, spouse="x", parents=("b1", "b2")),
    )
    return FamilyTreeData(members=members, root_member_ids=("a1", "a2", "b1", "b2"))


@pytest.fixture
def dangling_parent() -> FamilyTreeData:
    members = (
        person("root", 0),
        person("lost", 1, parents=("ghost",)),
    )
    return FamilyTreeData(members=members, root_member_ids=("root",))


@pytest.fixture
def orphan_with_children() -> FamilyTreeData:
    """A rooted line with three grandchildren beside an orphan whose parent is missing."""
    members = (
        person("r", 0, children=("k",)),
        person("k", 1, parents=("r",), children=("k1", "k2", "k3")),
        person("k1", 2, parents=("k",)),
        person("k2", 2, parents=("k",)),
        person("k3", 2, parents=("k",)),
        person("o", 1, parents=("ghost",), children=("o1", "o2")),
        person("o1", 2, parents=("o",)),
        person("o2", 2, parents=("o",)),
    )
    return FamilyTreeData(members=members, root_member_ids=("r",))


@pytest.fixture
def distant_branch_marriage() -> FamilyTreeData:
    """X (child of A) marries Y (child of B); V and her four children sit between A and B."""
    members = (
        person("a", 0, children=("x",)),
        person("v", 0, children=("v1", "v2", "v3", "v4")),
        person("b", 0, children=("y",)),
        *(person(f"v{i}", 1, parents=("v",)) for i in range(1, 5)),
        person("x", 1, spouse="y", parents=("a",)),
        person("y", 1, spouse="x", parents=("b",)),
    )
    return FamilyTreeData(members=members, root_member_ids=("a", "v", "b"))
