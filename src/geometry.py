"""Drawable line geometry for layout connections."""

from dataclasses import dataclass

from models import Connection, ConnectionKind, LayoutConfig, LayoutResult, NodeId


@dataclass(frozen=True)
class Segment:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class ConnectionPath:
    kind: ConnectionKind
    from_id: NodeId
    to_ids: tuple[str, ...]
    segments: tuple[Segment, ...]
    dashed: bool = False

    @property
    def d(self) -> str:
        return to_svg_path(self.segments)


def _fmt(value: float) -> str:
    return f"{value:g}"


def to_svg_path(segments) -> str:
    """SVG path data ("M x y L x y ...") for a run of straight segments."""
    parts = []
    for s in segments:
        parts.append(f"M {_fmt(s.x1)} {_fmt(s.y1)} L {_fmt(s.x2)} {_fmt(s.y2)}")
    return " ".join(parts)


def spouse_path(result: LayoutResult, connection: Connection, config: LayoutConfig) -> ConnectionPath | None:
    """Horizontal bar between the facing inner edges of the two spouses."""
    a = result.positions.get(connection.from_id)
    b = result.positions.get(connection.to_id)
    if a is None or b is None:
        return None

    left, right = (a, b) if a.x <= b.x else (b, a)
    y = a.y + config.node_height / 2
    segment = Segment(left.x + config.node_width / 2, y, right.x - config.node_width / 2, y)
    return ConnectionPath(ConnectionKind.SPOUSE, connection.from_id, (connection.to_id,), (segment,))


def parent_child_path(
    result: LayoutResult, anchor_id: NodeId, child_ids: list[str], config: LayoutConfig
) -> ConnectionPath | None:
    """
    Tree-shaped path from a parent anchor to its children.

    A drop from the parent's bottom centre to mid-gap, a sibling bar across
    the children when there is more than one, and a stem down to each child.
    """
    anchor = result.positions.get(anchor_id)
    if anchor is None:
        return None
    children = [result.positions[c] for c in child_ids if c in result.positions]
    if not children:
        return None

    start_y = anchor.y + config.node_height
    mid_y = start_y + config.vertical_gap / 2

    segments = [Segment(anchor.x, start_y, anchor.x, mid_y)]
    if len(children) > 1:
        xs = sorted(c.x for c in children)
        segments.append(Segment(xs[0], mid_y, xs[-1], mid_y))
    for child in children:
        segments.append(Segment(child.x, mid_y, child.x, child.y))

    return ConnectionPath(
        ConnectionKind.PARENT_CHILD,
        anchor_id,
        tuple(c.id for c in children),
        tuple(segments),
    )


def pet_path(result: LayoutResult, connection: Connection, config: LayoutConfig) -> ConnectionPath | None:
    """Dashed tether from the owner's bottom centre to the pet's top centre."""
    owner = result.positions.get(connection.from_id)
    pet = result.positions.get(connection.to_id)
    if owner is None or pet is None:
        return None

    segment = Segment(owner.x, owner.y + config.node_height, pet.x, pet.y)
    return ConnectionPath(ConnectionKind.PET_OWNER, connection.from_id, (connection.to_id,), (segment,), dashed=True)


def build_connection_paths(result: LayoutResult, config: LayoutConfig | None = None) -> list[ConnectionPath]:
    """
    Convert a layout's connections into drawable paths.

    Spouse bars come first, then one tree per parent anchor (in the order the
    anchors first appear), then pet tethers.
    """
    config = config or LayoutConfig()
    paths: list[ConnectionPath] = []

    for conn in result.connections_of(ConnectionKind.SPOUSE):
        path = spouse_path(result, conn, config)
        if path is not None:
            paths.append(path)

    groups: dict[NodeId, list[str]] = {}
    for conn in result.connections_of(ConnectionKind.PARENT_CHILD):
        groups.setdefault(conn.from_id, []).append(conn.to_id)
    for anchor_id, child_ids in groups.items():
        path = parent_child_path(result, anchor_id, child_ids, config)
        if path is not None:
            paths.append(path)

    for conn in result.connections_of(ConnectionKind.PET_OWNER):
        path = pet_path(result, conn, config)
        if path is not None:
            paths.append(path)

    return paths
