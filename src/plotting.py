"""Visualization functions for computed family tree layouts."""

import logging
from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.patches import Circle, FancyBboxPatch
import pydot

from geometry import build_connection_paths
from highlight import Highlight, highlight_for
from models import Connection, ConnectionKind, FamilyTreeData, LayoutConfig, LayoutResult, NodeKind

logger = logging.getLogger(__name__)

LINE_COLOR = "#6b8e6b"
PET_LINE_COLOR = "#b38f1f"
MEMORIAL_FILL = "#e8f0e8"
PET_FILL = "#f5ecd0"
DIMMED = 0.2


def _lifespan(birth_year, death_year) -> str:
    if not birth_year:
        return ""
    return f"{birth_year} - {death_year}" if death_year else str(birth_year)


def _path_emphasized(highlight: Highlight, path, result: LayoutResult) -> bool:
    return any(
        highlight.is_connection_emphasized(Connection(path.from_id, to_id, path.kind), result.positions)
        for to_id in path.to_ids
    )


def plot_layout(
    data: FamilyTreeData,
    result: LayoutResult,
    output_path: Path | None = None,
    selected_id: str | None = None,
    config: LayoutConfig | None = None,
):
    """
    Draw a computed layout with matplotlib.

    People are rounded boxes, pets are circles, and connections are drawn from
    the connection geometry. When `selected_id` is given, everything outside
    its connected set is dimmed.

    Args:
        data: The tree the layout was computed from
        result: Output of layout.compute_layout
        output_path: Path to save the image (PNG/SVG/PDF). If None, displays interactively.
        selected_id: Optional person or pet to highlight
        config: The LayoutConfig used for the layout
    """
    config = config or LayoutConfig()
    highlight = highlight_for(data, selected_id)
    members = {m.id: m for m in data.members}
    pets = {p.id: p for p in data.pets}

    width = max(result.dimensions.width, 1.0)
    height = max(result.dimensions.height, 1.0)
    fig, ax = plt.subplots(figsize=(width / 100, height / 100))
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)  # screen coordinates: y grows downwards
    ax.set_aspect("equal")
    ax.axis("off")

    for path in build_connection_paths(result, config):
        alpha_scale = 1.0 if _path_emphasized(highlight, path, result) else DIMMED
        if path.dashed:
            style = {"color": PET_LINE_COLOR, "linewidth": 1.5, "linestyle": (0, (4, 4)), "alpha": 0.5}
        elif path.kind is ConnectionKind.SPOUSE:
            style = {"color": LINE_COLOR, "linewidth": 3, "alpha": 0.7}
        else:
            style = {"color": LINE_COLOR, "linewidth": 2, "alpha": 0.6}
        style["alpha"] *= alpha_scale
        for s in path.segments:
            ax.plot([s.x1, s.x2], [s.y1, s.y2], solid_capstyle="round", **style)

    for node_id, pos in result.positions.items():
        if pos.kind is NodeKind.ANCHOR:
            continue
        alpha = 1.0 if highlight.is_emphasized(node_id) else DIMMED

        if pos.kind is NodeKind.PET:
            pet = pets[node_id]
            radius = config.pet_size / 2
            ax.add_patch(
                Circle((pos.x, pos.y + radius), radius, facecolor=PET_FILL, edgecolor=PET_LINE_COLOR, alpha=alpha)
            )
            ax.text(pos.x, pos.y + radius, pet.name, ha="center", va="center", fontsize=6, alpha=alpha)
            continue

        member = members[node_id]
        ax.add_patch(
            FancyBboxPatch(
                (pos.x - config.node_width / 2, pos.y),
                config.node_width,
                config.node_height,
                boxstyle="round,pad=0,rounding_size=8",
                facecolor=MEMORIAL_FILL if member.has_memorial else "white",
                edgecolor=LINE_COLOR,
                linewidth=2.5 if node_id == selected_id else 1,
                alpha=alpha,
            )
        )
        label = f"{member.first_name}\n{member.last_name}\n{_lifespan(member.birth_year, member.death_year)}"
        ax.text(
            pos.x, pos.y + config.node_height / 2, label.strip(), ha="center", va="center", fontsize=7, alpha=alpha
        )

    fig.tight_layout()

    if output_path:
        fig.savefig(output_path, dpi=100, bbox_inches="tight")
        logger.info("Layout saved to %s", output_path)
        plt.close(fig)
    else:
        plt.show()


def layout_to_dot(data: FamilyTreeData, result: LayoutResult) -> pydot.Dot:
    """
    Export a computed layout as a Graphviz graph with pinned node positions.

    Positions are in points with the y axis flipped for Graphviz; render with
    `neato -n2` to keep them.
    """
    members = {m.id: m for m in data.members}
    pets = {p.id: p for p in data.pets}
    height = result.dimensions.height

    P = pydot.Dot(graph_type="digraph")
    P.set("layout", "neato")
    P.set("splines", "ortho")

    def node_name(node_id) -> str:
        if isinstance(node_id, str):
            return node_id
        return f"anchor_{node_id.unit_id}"

    for node_id, pos in result.positions.items():
        pin = f"{pos.x:g},{height - pos.y:g}!"
        if pos.kind is NodeKind.ANCHOR:
            P.add_node(pydot.Node(node_name(node_id), shape="point", width="0.1", height="0.1", label="", pos=pin))
        elif pos.kind is NodeKind.PET:
            pet = pets[node_id]
            P.add_node(
                pydot.Node(node_id, label=pet.name, shape="circle", style="filled", fillcolor="lightyellow", pos=pin)
            )
        else:
            m = members[node_id]
            label = f"{m.first_name}\n{m.last_name}\n{_lifespan(m.birth_year, m.death_year)}"
            P.add_node(
                pydot.Node(
                    node_id,
                    label=label,
                    shape="box",
                    style="rounded,filled",
                    fillcolor="lightgreen" if m.has_memorial else "white",
                    fontsize="10",
                    pos=pin,
                )
            )

    for conn in result.connections:
        if conn.kind is ConnectionKind.SPOUSE:
            P.add_edge(pydot.Edge(node_name(conn.from_id), conn.to_id, dir="none", color="darkgray"))
        elif conn.kind is ConnectionKind.PET_OWNER:
            P.add_edge(pydot.Edge(node_name(conn.from_id), conn.to_id, dir="none", style="dashed", color="goldenrod"))
        else:
            P.add_edge(pydot.Edge(node_name(conn.from_id), conn.to_id, color="darkgray"))

    return P
