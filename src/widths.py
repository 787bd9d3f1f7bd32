"""Horizontal space needed by each unit and its descendants."""

import logging
from dataclasses import dataclass

from errors import CycleError
from models import LayoutConfig, Unit
from units import UnitIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChildSlot:
    """One entry of a parent unit's row of children.

    A reservation stands in for the share of a merged child's width that this
    parent budgets for; the merged unit itself is positioned elsewhere.
    """

    unit: Unit
    width: float
    reservation: bool = False


class SubtreeWidthCalculator:
    """
    Memoised subtree widths.

    width(unit) = max(base width, sum of child slot widths + sibling gaps).
    Child slots are the single-parent child units plus, for every merged child,
    a reservation of width(merged) / number of its parent units.
    """

    def __init__(self, index: UnitIndex, config: LayoutConfig):
        self.index = index
        self.config = config
        self._widths: dict[int, float] = {}
        self._visiting: set[int] = set()
        self.issues: list[CycleError] = []

    def base_width(self, unit: Unit) -> float:
        if unit.is_couple:
            return self.config.node_width * 2 + self.config.couple_gap
        return self.config.node_width

    def width(self, unit_id: int) -> float:
        if unit_id in self._widths:
            return self._widths[unit_id]

        unit = self.index[unit_id]
        if unit_id in self._visiting:
            self.issues.append(CycleError(list(unit.member_ids)))
            logger.warning("Unit %s re-entered while measuring; counting base width only", unit.member_ids)
            return self.base_width(unit)

        self._visiting.add(unit_id)
        try:
            slots = self.child_slots(unit_id)
            width = max(self.base_width(unit), self.slots_width(slots))
        finally:
            self._visiting.discard(unit_id)

        self._widths[unit_id] = width
        return width

    def child_slots(self, unit_id: int) -> list[ChildSlot]:
        slots = [ChildSlot(u, self.width(u.id)) for u in self.index.single_parent_children(unit_id)]
        for merged in self.index.merged_children(unit_id):
            share = self.width(merged.id) / len(merged.parent_unit_ids)
            slots.append(ChildSlot(merged, share, reservation=True))
        return slots

    def slots_width(self, slots: list[ChildSlot]) -> float:
        if not slots:
            return 0.0
        return sum(s.width for s in slots) + self.config.sibling_gap * (len(slots) - 1)

    def compute_all(self) -> dict[int, float]:
        for unit in self.index.units:
            self.width(unit.id)
        return dict(self._widths)
