"""
Family tree layout: positions for every person and pet, plus the connections
between them.

The pipeline, leaves first:
1) Group members by generation.
2) Merge members with a same-generation spouse into units.
3) Measure the width each unit's subtree needs.
4) Place units row by row: roots left to right, then children centred under
   their parent unit, cross-branch couples between their parent units, and
   orphans at the right edge.
5) Hang pets under their owners and size the canvas.

Every call is a full, deterministic recomputation; the input is never mutated.
"""

import logging

from errors import DataQualityIssue
from generations import Generation, group_by_generation
from graph import build_graph
from models import (
    AnchorKey,
    Connection,
    ConnectionKind,
    Dimensions,
    FamilyTreeData,
    LayoutConfig,
    LayoutResult,
    NodeKind,
    Position,
    Unit,
    UnitKind,
)
from units import UnitIndex, build_units
from validation import check_types, validate_tree
from widths import ChildSlot, SubtreeWidthCalculator

logger = logging.getLogger(__name__)


class PositionAssigner:
    """Places units generation by generation and records their connections."""

    def __init__(self, data: FamilyTreeData, index: UnitIndex, widths: SubtreeWidthCalculator, config: LayoutConfig):
        self.data = data
        self.index = index
        self.widths = widths
        self.config = config
        self.positions: dict = {}
        self.connections: list[Connection] = []
        self.unit_centers: dict[int, float] = {}
        self.unit_rows: dict[int, float] = {}
        # Subtree spans (left, right) of the units placed on each row
        self.row_spans: dict[float, list[tuple[float, float]]] = {}

    # ---------- units ----------

    def place_unit(self, unit: Unit, center_x: float, y: float) -> None:
        """Place the unit's member node(s) symmetrically around `center_x`."""
        self.unit_centers[unit.id] = center_x
        self.unit_rows[unit.id] = y
        half = self.widths.width(unit.id) / 2
        self.row_spans.setdefault(y, []).append((center_x - half, center_x + half))

        if unit.is_couple:
            m1, m2 = unit.members
            offset = self.config.couple_gap / 2 + self.config.node_width / 2
            self.positions[m1.id] = Position(m1.id, center_x - offset, y, NodeKind.PERSON)
            self.positions[m2.id] = Position(m2.id, center_x + offset, y, NodeKind.PERSON)
            self.connections.append(Connection(m1.id, m2.id, ConnectionKind.SPOUSE))
        else:
            m = unit.members[0]
            self.positions[m.id] = Position(m.id, center_x, y, NodeKind.PERSON)

    def anchor_for(self, parent_unit_id: int) -> AnchorKey:
        key = AnchorKey(parent_unit_id)
        if key not in self.positions:
            parent = self.index[parent_unit_id]
            self.positions[key] = Position(
                key,
                self.unit_centers[parent_unit_id],
                self.unit_rows[parent_unit_id],
                NodeKind.ANCHOR,
                member_ids=parent.member_ids,
            )
        return key

    def row_y(self, row_index: int) -> float:
        return self.config.start_y + row_index * self.config.row_height

    def place_generations(self, generations: list[Generation]) -> None:
        for row_index, gen in enumerate(generations):
            y = self.row_y(row_index)
            if row_index == 0:
                self.place_roots(self.index.in_generation(gen.index), y)
            else:
                self.place_descendants(self.index.in_generation(gen.index), y)

    def place_roots(self, units: list[Unit], y: float) -> None:
        root_order = {member_id: i for i, member_id in enumerate(self.data.root_member_ids)}

        def root_key(unit: Unit) -> int:
            ranks = [root_order[m] for m in unit.member_ids if m in root_order]
            return min(ranks) if ranks else len(root_order)

        x = self.config.start_x
        for unit in sorted(units, key=root_key):
            width = self.widths.width(unit.id)
            self.place_unit(unit, x + width / 2, y)
            x += width + self.config.branch_gap

    def place_descendants(self, units: list[Unit], y: float) -> None:
        by_parent: dict[int, list[Unit]] = {}
        merged: list[Unit] = []
        orphans: list[Unit] = []

        for unit in units:
            if unit.kind is UnitKind.ORPHAN:
                orphans.append(unit)
            elif unit.kind is UnitKind.NORMAL:
                by_parent.setdefault(unit.parent_unit_ids[0], []).append(unit)
            else:
                merged.append(unit)

        for parent_unit_id in by_parent:
            self.place_sibling_group(parent_unit_id, y)
        for unit in merged:
            self.place_merged(unit, y)
        for unit in orphans:
            self.place_orphan(unit, y)

    def place_sibling_group(self, parent_unit_id: int, y: float) -> None:
        """Centre a parent's child row under the parent, left to right."""
        parent_center = self.unit_centers[parent_unit_id]
        slots = self.widths.child_slots(parent_unit_id)

        # Merged-width reservations go on the side facing the merged unit
        left: list[ChildSlot] = []
        right: list[ChildSlot] = []
        siblings: list[ChildSlot] = []
        for slot in slots:
            if not slot.reservation:
                siblings.append(slot)
            elif self.merged_center(slot.unit) < parent_center:
                left.append(slot)
            else:
                right.append(slot)
        ordered = left + siblings + right

        anchor = self.anchor_for(parent_unit_id)
        cursor = parent_center - self.widths.slots_width(ordered) / 2
        for slot in ordered:
            if not slot.reservation:
                self.place_unit(slot.unit, cursor + slot.width / 2, y)
                target = self.descendant_member(slot.unit, parent_unit_id)
                self.connections.append(Connection(anchor, target, ConnectionKind.PARENT_CHILD))
            cursor += slot.width + self.config.sibling_gap

    def descendant_member(self, unit: Unit, parent_unit_id: int) -> str:
        for m in unit.members:
            if self.index.descends_from(m, parent_unit_id):
                return m.id
        return unit.members[0].id

    def merged_center(self, unit: Unit) -> float:
        centers = [self.unit_centers[p] for p in unit.parent_unit_ids]
        return sum(centers) / len(centers)

    def free_center(self, center_x: float, width: float, y: float) -> float:
        """
        Nearest centre at or right of `center_x` where a subtree of `width`
        clears every span already on row `y` by at least the sibling gap.
        """
        gap = self.config.sibling_gap
        spans = sorted(self.row_spans.get(y, []))
        moved = True
        while moved:
            moved = False
            for lo, hi in spans:
                if center_x - width / 2 < hi + gap and center_x + width / 2 > lo - gap:
                    center_x = hi + gap + width / 2
                    moved = True
        return center_x

    def place_merged(self, unit: Unit, y: float) -> None:
        """
        Centre a cross-branch couple between all of its parent units.

        Parent units that are not neighbours can have other subtrees between
        them; the couple is then pushed right until it clears them.
        """
        desired = self.merged_center(unit)
        center_x = self.free_center(desired, self.widths.width(unit.id), y)
        if center_x != desired:
            logger.debug("Moved merged unit %s from x=%.0f to x=%.0f", unit.member_ids, desired, center_x)
        self.place_unit(unit, center_x, y)

        # One connection per parent unit per member actually descended from it
        for parent_unit_id in unit.parent_unit_ids:
            anchor = self.anchor_for(parent_unit_id)
            for m in unit.members:
                if self.index.descends_from(m, parent_unit_id):
                    self.connections.append(Connection(anchor, m.id, ConnectionKind.PARENT_CHILD))

    def rightmost_edge(self) -> float | None:
        """Right edge of the widest-reaching subtree placed so far, on any row."""
        rights = [hi for spans in self.row_spans.values() for _, hi in spans]
        if not rights:
            return None
        return max(rights)

    def place_orphan(self, unit: Unit, y: float) -> None:
        edge = self.rightmost_edge()
        left = self.config.start_x if edge is None else edge + self.config.branch_gap
        width = self.widths.width(unit.id)
        self.place_unit(unit, left + width / 2, y)

    # ---------- pets ----------

    def place_pets(self, stray_row: float) -> None:
        """Fan pets out beneath their owners; pets without an owner get their own row."""
        pets = self.data.pets

        by_owner: dict[str, list] = {}
        for pet in pets:
            by_owner.setdefault(pet.owner_id, []).append(pet)

        step = self.config.pet_size + self.config.pet_spacing
        stray_x = self.config.start_x + self.config.pet_size / 2
        for pet in pets:
            owner = self.positions.get(pet.owner_id)
            if owner is None or owner.kind is not NodeKind.PERSON:
                self.positions[pet.id] = Position(pet.id, stray_x, stray_row, NodeKind.PET)
                stray_x += step
                continue

            siblings = by_owner[pet.owner_id]
            i = siblings.index(pet)
            x = owner.x + (i - (len(siblings) - 1) / 2) * step
            self.positions[pet.id] = Position(pet.id, x, owner.y + self.config.pet_offset_y, NodeKind.PET)
            self.connections.append(Connection(pet.owner_id, pet.id, ConnectionKind.PET_OWNER))

    # ---------- canvas ----------

    def dimensions(self) -> Dimensions:
        max_x = 0.0
        max_y = 0.0
        for pos in self.positions.values():
            if pos.kind is NodeKind.PERSON:
                max_x = max(max_x, pos.x + self.config.node_width / 2)
                max_y = max(max_y, pos.y + self.config.node_height)
            elif pos.kind is NodeKind.PET:
                max_x = max(max_x, pos.x + self.config.pet_size / 2)
                max_y = max(max_y, pos.y + self.config.pet_size)

        return Dimensions(
            width=max(max_x + self.config.canvas_margin, self.config.min_canvas_width),
            height=max_y + self.config.canvas_margin,
        )


def _unique_by_id(records) -> tuple:
    seen: set[str] = set()
    unique = []
    for r in records:
        if r.id not in seen:
            seen.add(r.id)
            unique.append(r)
    return tuple(unique)


def compute_layout(data: FamilyTreeData, config: LayoutConfig | None = None) -> LayoutResult:
    """
    Lay out a family tree.

    Args:
        data: members, pets and root member ids
        config: spacing constants (defaults to LayoutConfig())

    Returns:
        A LayoutResult with a position for every member and pet, anchors for
        parent units with children, the connection list, canvas dimensions and
        any data-quality issues found on the way.

    Raises:
        InvalidTreeDataError: if `data` is not well-typed. Problems in the
        genealogy itself are never raised; they are returned as issues.
    """
    check_types(data)
    config = config or LayoutConfig()

    graph = build_graph(data)
    issues: list[DataQualityIssue] = validate_tree(data, graph)

    if not data.members:
        return LayoutResult(issues=issues)

    members = _unique_by_id(data.members)
    pets = tuple(p for p in _unique_by_id(data.pets) if p.id not in {m.id for m in members})
    clean = FamilyTreeData(members=members, pets=pets, root_member_ids=tuple(data.root_member_ids))

    generations = group_by_generation(clean.members)
    index = build_units(generations, {m.id: m for m in members})
    widths = SubtreeWidthCalculator(index, config)
    widths.compute_all()

    assigner = PositionAssigner(clean, index, widths, config)
    assigner.place_generations(generations)
    assigner.place_pets(stray_row=assigner.row_y(len(generations)))

    for issue in index.issues + widths.issues:
        if issue not in issues:
            issues.append(issue)

    result = LayoutResult(
        positions=assigner.positions,
        connections=assigner.connections,
        dimensions=assigner.dimensions(),
        units=tuple(index.units),
        issues=issues,
    )
    logger.debug(
        "Laid out %d units, %d positions, %d connections on a %.0fx%.0f canvas",
        len(index),
        len(result.positions),
        len(result.connections),
        result.dimensions.width,
        result.dimensions.height,
    )
    return result
