"""Grouping of members into layout units (single members and couples)."""

import logging
from dataclasses import dataclass, field

from errors import CycleError
from generations import Generation
from models import FamilyMember, Unit, UnitKind

logger = logging.getLogger(__name__)


@dataclass
class UnitIndex:
    """Arena of units with the lookups the later layout stages need."""

    units: list[Unit] = field(default_factory=list)
    by_generation: dict[int, list[int]] = field(default_factory=dict)
    unit_of_member: dict[str, int] = field(default_factory=dict)
    child_unit_ids: dict[int, list[int]] = field(default_factory=dict)
    issues: list = field(default_factory=list)

    def __getitem__(self, unit_id: int) -> Unit:
        return self.units[unit_id]

    def __len__(self) -> int:
        return len(self.units)

    def in_generation(self, generation: int) -> list[Unit]:
        return [self.units[i] for i in self.by_generation.get(generation, [])]

    def children_of(self, unit_id: int) -> list[Unit]:
        """Units of the next generation that list `unit_id` as a parent unit."""
        return [self.units[i] for i in self.child_unit_ids.get(unit_id, [])]

    def single_parent_children(self, unit_id: int) -> list[Unit]:
        return [u for u in self.children_of(unit_id) if u.kind is UnitKind.NORMAL]

    def merged_children(self, unit_id: int) -> list[Unit]:
        return [u for u in self.children_of(unit_id) if u.kind is UnitKind.MERGED]

    def descends_from(self, member: FamilyMember, unit_id: int) -> bool:
        """True if one of the member's parents belongs to the given unit."""
        return any(p in self.units[unit_id].member_ids for p in member.parent_ids)


def build_units(generations: list[Generation], members_by_id: dict[str, FamilyMember]) -> UnitIndex:
    """
    Merge each member with an optional same-generation spouse into a unit.

    Generations are processed oldest first, so a unit's parent units already
    exist when it is built. A spouse in another generation is not merged; the
    member is laid out alone.
    """
    index = UnitIndex()

    for gen in generations:
        visited: set[str] = set()
        index.by_generation[gen.index] = []

        for member in gen.members:
            if member.id in visited:
                continue
            unit_members = [member]
            visited.add(member.id)

            if member.spouse_id and member.spouse_id != member.id:
                spouse = members_by_id.get(member.spouse_id)
                if spouse is not None and spouse.generation == gen.index and spouse.id not in visited:
                    unit_members.append(spouse)
                    visited.add(spouse.id)

            unit_id = len(index.units)
            parent_unit_ids = _resolve_parent_units(index, unit_members, gen.index)
            unit = Unit(
                id=unit_id,
                generation=gen.index,
                members=tuple(unit_members),
                parent_unit_ids=parent_unit_ids,
            )
            index.units.append(unit)
            index.by_generation[gen.index].append(unit_id)
            for m in unit_members:
                index.unit_of_member[m.id] = unit_id
            for parent_unit_id in parent_unit_ids:
                index.child_unit_ids.setdefault(parent_unit_id, []).append(unit_id)

    logger.debug("Built %d units over %d generations", len(index.units), len(generations))
    return index


def _resolve_parent_units(index: UnitIndex, unit_members: list[FamilyMember], generation: int) -> tuple[int, ...]:
    own_ids = {m.id for m in unit_members}
    found: set[int] = set()

    for m in unit_members:
        for parent_id in m.parent_ids:
            if parent_id in own_ids:
                # Parent is the member itself or its spouse
                index.issues.append(CycleError([m.id, parent_id]))
                logger.warning("Ignoring parent %s of %s: loops back into the same unit", parent_id, m.id)
                continue
            parent_unit_id = index.unit_of_member.get(parent_id)
            if parent_unit_id is None:
                continue
            if index.units[parent_unit_id].generation == generation - 1:
                found.add(parent_unit_id)

    return tuple(sorted(found))
