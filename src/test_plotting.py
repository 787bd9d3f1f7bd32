"""Tests for the matplotlib preview and the Graphviz export."""

from demo import generate_demo_family_tree
from layout import compute_layout
from models import NodeKind
from plotting import layout_to_dot, plot_layout


def test_layout_to_dot_pins_every_node():
    data = generate_demo_family_tree()
    result = compute_layout(data)
    P = layout_to_dot(data, result)

    assert len(P.get_nodes()) == len(result.positions)
    assert len(P.get_edges()) == len(result.connections)

    anchors = [p for p in result.positions.values() if p.kind is NodeKind.ANCHOR]
    anchor_node = P.get_node(f"anchor_{anchors[0].id.unit_id}")[0]
    assert anchor_node.get("shape") == "point"

    g1 = result.positions["g1"]
    assert P.get_node("g1")[0].get("pos").strip('"') == f"{g1.x:g},{result.dimensions.height - g1.y:g}!"


def test_dot_edges_styled_by_kind(three_generations):
    P = layout_to_dot(three_generations, compute_layout(three_generations))

    pet_edge = P.get_edge("james", "max")[0]
    assert pet_edge.get("style") == "dashed"
    spouse_edge = P.get_edge("james", "dorothy")[0]
    assert spouse_edge.get("dir") == "none"


def test_plot_layout_writes_image(tmp_path, three_generations):
    output = tmp_path / "tree.png"

    plot_layout(three_generations, compute_layout(three_generations), output, selected_id="emma")

    assert output.exists()
    assert output.stat().st_size > 0
