import pytest

import regnfa.graph as graph
from regnfa.builder import compile_regex
from regnfa.description import AutomatonDescription
from regnfa.graph import (
    build_pda_graph,
    build_pydot_graph,
    pda_labels,
    render_png_with_dot,
    to_dot,
)

PDA = {
    "alphabet": ["x", "y"],
    "start": 1,
    "accept": [4],
    "transitions": [[1, 2], [2, 2], [2, 3], [3, 3], [3, 4]],
}


def edges_of(G):
    return sorted(
        (e.get_source(), e.get_destination(), (e.get("label") or "").strip('"'))
        for e in G.get_edges()
    )


def shape(G, name):
    return G.get_node(name)[0].get("shape")


def test_nfa_graph_nodes_and_edges():
    G = build_pydot_graph(compile_regex("ab"))
    assert shape(G, "start") == "point"
    assert shape(G, "q3") == "doublecircle"
    assert shape(G, "q1") == "circle"
    assert edges_of(G) == [
        ("q1", "q2", "a"),
        ("q2", "q3", "b"),
        ("start", "q1", ""),
    ]


def test_one_edge_per_symbol():
    G = build_pydot_graph(compile_regex("(ab)*|c"))
    labels = [e for e in edges_of(G) if e[:2] == ("q4", "q1")]
    assert labels == [("q4", "q1", "a"), ("q4", "q1", "c")]


def test_dot_text_is_well_formed():
    text = to_dot(build_pydot_graph(compile_regex("(a|b)*c")))
    assert text.lstrip().startswith("digraph")
    assert text.count("{") == text.count("}")
    assert "start -> q1" in text
    assert "doublecircle" in text


def test_pda_labels_follow_edge_position():
    pda = AutomatonDescription.from_mapping(PDA).to_edge_automaton()
    labels = [pda_labels(pda, t) for t in pda.transitions]
    assert labels == [
        [("e", "e", "$")],
        [("x", "e", "x"), ("y", "e", "y")],
        [("e", "e", "e")],
        [("x", "x", "e"), ("y", "y", "e")],
        [("e", "$", "e")],
    ]


def test_pda_body_state_is_configurable():
    pda = AutomatonDescription.from_mapping(PDA).to_edge_automaton()
    loop_on_3 = pda.transitions[3]
    assert pda_labels(pda, loop_on_3, body_state=3) == [("x", "e", "x"), ("y", "e", "y")]


def test_pda_graph_edges():
    pda = AutomatonDescription.from_mapping(PDA).to_edge_automaton()
    G = build_pda_graph(pda)
    assert ("q1", "q2", "e, e -> $") in edges_of(G)
    assert ("q3", "q4", "e, $ -> e") in edges_of(G)
    assert shape(G, "q4") == "doublecircle"
    # state 5 has no edge and is not drawn
    assert G.get_node("q5") == []


def test_render_png_needs_dot(monkeypatch, tmp_path):
    monkeypatch.setattr(graph.shutil, "which", lambda name: None)
    with pytest.raises(RuntimeError, match="dot"):
        render_png_with_dot(build_pydot_graph(compile_regex("a")), str(tmp_path / "a.png"))
