"""Tests for the highlight resolver."""

from graph import build_graph
from highlight import highlight_for, resolve_highlight
from layout import compute_layout
from models import AnchorKey, Connection, ConnectionKind


def test_no_selection_highlights_everything(three_generations):
    highlight = highlight_for(three_generations, None)

    everyone = {m.id for m in three_generations.members} | {p.id for p in three_generations.pets}
    assert highlight.connected == everyone
    assert not highlight.active
    assert all(highlight.is_emphasized(i) for i in everyone)


def test_person_selection(three_generations):
    highlight = highlight_for(three_generations, "james")

    assert highlight.connected == {"james", "dorothy", "michael", "elizabeth", "max"}
    assert highlight.is_emphasized("elizabeth")
    assert not highlight.is_emphasized("emma")


def test_child_selection_includes_parents(three_generations):
    highlight = highlight_for(three_generations, "emma")

    assert highlight.connected == {"emma", "michael", "sarah"}


def test_pet_selection_includes_owner(three_generations):
    highlight = highlight_for(three_generations, "max")

    assert highlight.connected == {"max", "james"}


def test_unknown_selection_highlights_everything(three_generations):
    highlight = highlight_for(three_generations, "nobody")

    assert not highlight.active
    assert highlight.is_emphasized("emma")


def test_resolver_is_pure(three_generations):
    G = build_graph(three_generations)

    assert resolve_highlight(G, "sarah") == resolve_highlight(G, "sarah")
    assert resolve_highlight(G, None) == resolve_highlight(G, None)


def test_connection_emphasis(three_generations):
    result = compute_layout(three_generations)
    highlight = highlight_for(three_generations, "emma")

    to_emma = Connection(AnchorKey(1), "emma", ConnectionKind.PARENT_CHILD)
    to_noah = Connection(AnchorKey(1), "noah", ConnectionKind.PARENT_CHILD)
    to_michael = Connection(AnchorKey(0), "michael", ConnectionKind.PARENT_CHILD)
    parents = Connection("michael", "sarah", ConnectionKind.SPOUSE)

    assert highlight.is_connection_emphasized(to_emma, result.positions)
    assert not highlight.is_connection_emphasized(to_noah, result.positions)
    assert not highlight.is_connection_emphasized(to_michael, result.positions)
    assert highlight.is_connection_emphasized(parents, result.positions)

    nothing_selected = highlight_for(three_generations, None)
    assert all(nothing_selected.is_connection_emphasized(c, result.positions) for c in result.connections)
