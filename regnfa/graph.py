"""
DOT output for automata (pydot) and PNG rendering through Graphviz 'dot'.

- States are named q<n>.
- A point-shaped 'start' node points at the start state.
- Accept states are double circles, the rest plain circles.
- One edge per symbol of each transition.
"""

import shutil
import subprocess
from typing import Iterable, List, Tuple

import pydot

from .automaton import Automaton, Transition
from .description import DEFAULT_BODY_STATE
from .simulate import EMPTY

START_NODE = "start"
BOTTOM = "$"


def node_name(state: int) -> str:
    return f"q{state}"


def _drawn_states(automaton: Automaton) -> List[int]:
    used = {automaton.start} | set(automaton.accept)
    for t in automaton.transitions:
        used.update((t.source, t.target))
    return [s for s in automaton.states if s in used]


def _base_graph(automaton: Automaton) -> pydot.Dot:
    G = pydot.Dot(graph_type="digraph", rankdir="LR")
    G.set_node_defaults(shape="circle")

    G.add_node(pydot.Node(START_NODE, shape="point"))
    states = _drawn_states(automaton)
    for s in states:
        if automaton.is_accept(s):
            G.add_node(pydot.Node(node_name(s), shape="doublecircle"))
    for s in states:
        if not automaton.is_accept(s):
            G.add_node(pydot.Node(node_name(s), shape="circle"))

    G.add_edge(pydot.Edge(START_NODE, node_name(automaton.start)))
    return G


def _add_labeled(G: pydot.Dot, t: Transition, labels: Iterable[str]):
    for label in labels:
        G.add_edge(pydot.Edge(node_name(t.source), node_name(t.target), label=label))


def build_pydot_graph(automaton: Automaton) -> pydot.Dot:
    G = _base_graph(automaton)
    for t in automaton.transitions:
        _add_labeled(G, t, t.symbols)
    return G


def pda_labels(automaton: Automaton, t: Transition,
               body_state: int = DEFAULT_BODY_STATE) -> List[Tuple[str, str, str]]:
    """(read, pop, push) triples for one edge of the PDA drawing."""
    if t.source == automaton.start:
        return [(EMPTY, EMPTY, BOTTOM)]
    if automaton.is_accept(t.target):
        return [(EMPTY, BOTTOM, EMPTY)]
    if not t.is_loop:
        return [(EMPTY, EMPTY, EMPTY)]
    if t.source == body_state:
        return [(x, EMPTY, x) for x in automaton.alphabet]
    return [(x, x, EMPTY) for x in automaton.alphabet]


def build_pda_graph(automaton: Automaton, body_state: int = DEFAULT_BODY_STATE) -> pydot.Dot:
    """Edges are labeled 'read, pop -> push'; the stack itself is not modeled."""
    G = _base_graph(automaton)
    for t in automaton.transitions:
        labels = [f"{r}, {pop} -> {push}" for r, pop, push in pda_labels(automaton, t, body_state)]
        _add_labeled(G, t, labels)
    return G


def to_dot(G: pydot.Dot) -> str:
    return G.to_string()


def render_png_with_dot(G: pydot.Dot, out_png: str):
    """
    Render to PNG by piping the DOT text into the 'dot' executable.
    """
    dot_exe = shutil.which("dot")
    if not dot_exe:
        raise RuntimeError("Graphviz 'dot' is not on PATH.")

    proc = subprocess.run(
        [dot_exe, "-Tpng", "-o", out_png],
        input=to_dot(G).encode("utf-8"),
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE
    )
    if proc.returncode != 0:
        raise RuntimeError(f"dot failed:\n{proc.stderr.decode('utf-8', errors='replace')}")
