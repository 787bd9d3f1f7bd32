"""Data classes for family tree entities and layout results."""

from dataclasses import dataclass, field
from enum import Enum

from errors import DataQualityIssue


@dataclass(frozen=True)
class FamilyMember:
    id: str
    first_name: str
    last_name: str
    generation: int  # 0 = oldest shown, increases going down
    nickname: str | None = None
    birth_year: int | None = None
    death_year: int | None = None
    spouse_id: str | None = None
    parent_ids: tuple[str, ...] = ()
    child_ids: tuple[str, ...] = ()
    pet_ids: tuple[str, ...] = ()
    has_memorial: bool = False
    memorial_id: str | None = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Pet:
    id: str
    name: str
    species: str  # dog, cat, bird, horse, other
    owner_id: str
    birth_year: int | None = None
    death_year: int | None = None
    has_memorial: bool = False
    memorial_id: str | None = None


@dataclass(frozen=True)
class FamilyTreeData:
    members: tuple[FamilyMember, ...] = ()
    pets: tuple[Pet, ...] = ()
    root_member_ids: tuple[str, ...] = ()


class UnitKind(Enum):
    ORPHAN = "orphan"
    NORMAL = "normal"
    MERGED = "merged"


@dataclass(frozen=True)
class Unit:
    """A single member or a couple, grouped for layout only."""

    id: int  # arena index, creation order
    generation: int
    members: tuple[FamilyMember, ...]
    parent_unit_ids: tuple[int, ...] = ()

    @property
    def kind(self) -> UnitKind:
        if not self.parent_unit_ids:
            return UnitKind.ORPHAN
        if len(self.parent_unit_ids) == 1:
            return UnitKind.NORMAL
        return UnitKind.MERGED

    @property
    def member_ids(self) -> tuple[str, ...]:
        return tuple(m.id for m in self.members)

    @property
    def is_couple(self) -> bool:
        return len(self.members) == 2


@dataclass(frozen=True, order=True)
class AnchorKey:
    """Key of the synthetic point a unit's child connections start from."""

    unit_id: int


NodeId = str | AnchorKey


class NodeKind(Enum):
    PERSON = "person"
    PET = "pet"
    ANCHOR = "anchor"


@dataclass(frozen=True)
class Position:
    id: NodeId
    x: float  # horizontal centre of the node
    y: float  # top of the node
    kind: NodeKind
    member_ids: tuple[str, ...] = ()  # anchors only

    @property
    def is_anchor(self) -> bool:
        return self.kind is NodeKind.ANCHOR


class ConnectionKind(Enum):
    SPOUSE = "spouse"
    PARENT_CHILD = "parent-child"
    PET_OWNER = "pet-owner"


@dataclass(frozen=True)
class Connection:
    from_id: NodeId
    to_id: str
    kind: ConnectionKind


@dataclass(frozen=True)
class Dimensions:
    width: float
    height: float


@dataclass(frozen=True)
class LayoutConfig:
    node_width: float = 120.0
    node_height: float = 100.0
    vertical_gap: float = 100.0  # space between generations
    sibling_gap: float = 40.0
    couple_gap: float = 20.0
    branch_gap: float = 80.0  # space between family branches
    pet_size: float = 60.0
    pet_spacing: float = 10.0
    pet_offset_y: float = 120.0
    start_x: float = 80.0
    start_y: float = 60.0
    canvas_margin: float = 150.0
    min_canvas_width: float = 900.0

    @property
    def row_height(self) -> float:
        return self.node_height + self.vertical_gap


@dataclass
class LayoutResult:
    positions: dict[NodeId, Position] = field(default_factory=dict)
    connections: list[Connection] = field(default_factory=list)
    dimensions: Dimensions = field(default_factory=lambda: Dimensions(0.0, 0.0))
    units: tuple[Unit, ...] = ()
    issues: list[DataQualityIssue] = field(default_factory=list)

    def real_positions(self) -> dict[str, Position]:
        return {k: p for k, p in self.positions.items() if not p.is_anchor}

    def anchors(self) -> dict[AnchorKey, Position]:
        return {k: p for k, p in self.positions.items() if p.is_anchor}

    def connections_of(self, kind: ConnectionKind) -> list[Connection]:
        return [c for c in self.connections if c.kind is kind]

    def to_dict(self) -> dict:
        """JSON-ready form; anchors are written as {"anchor": unit_id}."""

        def ref(node_id):
            if isinstance(node_id, AnchorKey):
                return {"anchor": node_id.unit_id}
            return node_id

        return {
            "positions": [
                {"id": ref(p.id), "x": p.x, "y": p.y, "kind": p.kind.value}
                for p in self.positions.values()
            ],
            "connections": [
                {"fromId": ref(c.from_id), "toId": c.to_id, "kind": c.kind.value}
                for c in self.connections
            ],
            "dimensions": {"width": self.dimensions.width, "height": self.dimensions.height},
            "issues": [{"kind": type(i).__name__, "id": i.member_id, "message": i.message} for i in self.issues],
        }
