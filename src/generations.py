"""Grouping of members by declared generation."""

from dataclasses import dataclass

from errors import InvalidTreeDataError
from models import FamilyMember


@dataclass(frozen=True)
class Generation:
    index: int
    members: tuple[FamilyMember, ...]


def group_by_generation(members) -> list[Generation]:
    """Partition members by generation, oldest first, keeping input order within each."""
    groups: dict[int, list[FamilyMember]] = {}
    for m in members:
        if isinstance(m.generation, bool) or not isinstance(m.generation, int):
            raise InvalidTreeDataError(
                f"Member {m.id!r} has non-integer generation {m.generation!r}"
            )
        groups.setdefault(m.generation, []).append(m)

    return [Generation(index, tuple(groups[index])) for index in sorted(groups)]
