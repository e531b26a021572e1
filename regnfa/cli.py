"""
Command line front end.

    regnfa regex [file]      compile a regex to an NFA, draw it, test a string
    regnfa dfa file.yaml     load a DFA table, draw it, test a string
    regnfa edges file.yaml   list and draw an edge-list graph
    regnfa pda file.yaml     draw a PDA with stack labels
"""

import argparse
import sys
from typing import List, Optional

import yaml

from .automaton import Automaton
from .builder import compile_regex
from .description import AutomatonDescription
from .errors import AutomatonError
from .graph import build_pda_graph, build_pydot_graph, render_png_with_dot, to_dot
from .simulate import simulate


def read_regex(filename: Optional[str]) -> str:
    if filename is None:
        print("User input required: ")
        return input().rstrip("\r\n")
    with open(filename, 'r', encoding='utf-8') as f:
        return f.read().rstrip("\r\n")


def read_word(word: Optional[str]) -> str:
    if word is not None:
        return word
    print("Please enter a string:")
    w = input()
    print()
    return w


def dump_automaton(automaton: Automaton):
    """Internal structure to stderr."""
    for state in automaton.state_graph():
        print(state, file=sys.stderr)
    for t in automaton.transitions:
        print(t, file=sys.stderr)


def write_graph(G, png: Optional[str]):
    print(to_dot(G))
    if png:
        render_png_with_dot(G, png)
        print(f"Graph saved to {png}")


def run_word(automaton: Automaton, word: Optional[str]) -> bool:
    result = simulate(automaton, read_word(word))

    print("Transition steps:")
    for step in result.steps:
        print(step)
    print()
    if result.accepted:
        print("The string is accepted by the graph.")
    else:
        print("The string is not accepted by the graph.")
    return result.accepted


# ===============================
# Subcommands
# ===============================
def cmd_regex(args) -> int:
    nfa = compile_regex(read_regex(args.file))
    if args.verbose:
        dump_automaton(nfa)
    write_graph(build_pydot_graph(nfa), args.png)
    run_word(nfa, args.word)
    return 0


def cmd_dfa(args) -> int:
    dfa = AutomatonDescription.from_file(args.file).to_dfa()
    if args.verbose:
        dump_automaton(dfa)
    write_graph(build_pydot_graph(dfa), args.png)
    run_word(dfa, args.word)
    return 0


def cmd_edges(args) -> int:
    graph = AutomatonDescription.from_file(args.file).to_edge_automaton()
    if args.verbose:
        dump_automaton(graph)
    print("g by nodes:")
    for line in graph.edge_listing():
        print(line)
    print()
    write_graph(build_pydot_graph(graph), args.png)
    return 0


def cmd_pda(args) -> int:
    desc = AutomatonDescription.from_file(args.file)
    pda = desc.to_edge_automaton()
    if args.verbose:
        dump_automaton(pda)
    body = args.body_state if args.body_state is not None else desc.body_state
    write_graph(build_pda_graph(pda, body_state=body), args.png)
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="regnfa",
        description="Regex to NFA compiler and DFA/NFA/PDA simulator with Graphviz output",
    )
    sub = p.add_subparsers(dest="command", required=True)

    def common(sp, png=True):
        sp.add_argument("-v", "--verbose", action="store_true",
                        help="Dump the internal automaton to stderr")
        if png:
            sp.add_argument("--png", help="Also render the graph to this PNG file")

    r = sub.add_parser("regex", help="Compile a regular expression into an NFA")
    r.add_argument("file", nargs="?", help="File holding the expression (prompted if omitted)")
    r.add_argument("--word", help="String to test (prompted if omitted)")
    common(r)
    r.set_defaults(func=cmd_regex)

    d = sub.add_parser("dfa", help="Simulate a DFA transition table")
    d.add_argument("file", help="YAML DFA description")
    d.add_argument("--word", help="String to test (prompted if omitted)")
    common(d)
    d.set_defaults(func=cmd_dfa)

    e = sub.add_parser("edges", help="List and draw an edge-list graph")
    e.add_argument("file", help="YAML description with [from, to] transitions")
    common(e)
    e.set_defaults(func=cmd_edges)

    k = sub.add_parser("pda", help="Draw a PDA with stack operation labels")
    k.add_argument("file", help="YAML description with [from, to] transitions")
    k.add_argument("--body-state", type=int, help="State whose self-loop pushes symbols")
    common(k)
    k.set_defaults(func=cmd_pda)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    try:
        return args.func(args)
    except AutomatonError as e:
        print(f"Error: {e}")
    except (OSError, yaml.YAMLError) as e:
        print(f"Error: {e}")
    except EOFError:
        print("Error: no input")
    return 1
