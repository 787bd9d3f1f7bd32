"""Tests for generation grouping and unit building."""

import pytest

from conftest import person
from errors import CycleError, InvalidTreeDataError
from generations import group_by_generation
from models import UnitKind
from units import build_units


def _build(members):
    generations = group_by_generation(members)
    return build_units(generations, {m.id: m for m in members})


def test_generations_sorted_and_keep_input_order():
    members = [person("c", 2), person("a", 0), person("b2", 1), person("b1", 1)]
    generations = group_by_generation(members)

    assert [g.index for g in generations] == [0, 1, 2]
    assert [m.id for m in generations[1].members] == ["b2", "b1"]


def test_non_integer_generation_is_programmer_error():
    with pytest.raises(InvalidTreeDataError):
        group_by_generation([person("a", "0")])


def test_couple_forms_one_unit(three_generations):
    index = _build(three_generations.members)

    assert [u.member_ids for u in index.units] == [
        ("james", "dorothy"),
        ("michael", "sarah"),
        ("elizabeth", "carlos"),
        ("emma",),
        ("noah",),
        ("sofia",),
    ]
    assert index.unit_of_member["sarah"] == index.unit_of_member["michael"]


def test_every_member_in_exactly_one_unit(three_generations):
    index = _build(three_generations.members)
    seen = [m for u in index.units for m in u.member_ids]

    assert sorted(seen) == sorted(m.id for m in three_generations.members)
    assert all(1 <= len(u.members) <= 2 for u in index.units)


def test_parent_unit_kinds(three_generations, cross_branch_marriage, dangling_parent):
    index = _build(three_generations.members)
    assert index[0].kind is UnitKind.ORPHAN
    assert index[1].parent_unit_ids == (0,)
    assert index[1].kind is UnitKind.NORMAL

    merged = _build(cross_branch_marriage.members)
    xy = merged[merged.unit_of_member["x"]]
    assert xy.member_ids == ("x", "y")
    assert xy.parent_unit_ids == (0, 1)
    assert xy.kind is UnitKind.MERGED

    dangling = _build(dangling_parent.members)
    assert dangling[dangling.unit_of_member["lost"]].kind is UnitKind.ORPHAN


def test_cross_generation_spouse_not_merged():
    members = [person("old", 0, spouse="young"), person("young", 1, spouse="old")]
    index = _build(members)

    assert [u.member_ids for u in index.units] == [("old",), ("young",)]


def test_children_lookup(three_generations):
    index = _build(three_generations.members)

    assert [u.member_ids for u in index.children_of(0)] == [("michael", "sarah"), ("elizabeth", "carlos")]
    assert [u.member_ids for u in index.single_parent_children(1)] == [("emma",), ("noah",)]
    assert index.merged_children(0) == []


def test_self_parent_is_ignored_as_cycle():
    members = [person("a", 0, spouse="b", parents=("b",)), person("b", 0, spouse="a")]
    index = _build(members)

    assert index[0].parent_unit_ids == ()
    assert any(isinstance(i, CycleError) for i in index.issues)
