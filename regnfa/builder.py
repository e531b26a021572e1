"""
NFA construction from simplified chains.

State 1 is the start state shared by every chain. A star-wrapped chain does
not get a private loop state: its repetition path re-enters state 1 through a
free edge, which is what makes state 1 accepting for those chains.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .automaton import Automaton, Transition
from .regex import (
    Chain,
    check_regex,
    normalize_regex,
    regex_alphabet,
    simplify_chains,
    split_alternation,
)

START_STATE = 1


@dataclass
class _Group:
    entry: List[int]
    first: int
    ends: List[int] = field(default_factory=list)


def _unique(items: Iterable) -> list:
    out = []
    for x in items:
        if x not in out:
            out.append(x)
    return out


def _add(transitions: List[Transition], t: Transition):
    if t not in transitions:
        transitions.append(t)


def entry_symbols(emitted: Iterable[Transition]) -> Tuple[str, ...]:
    """Symbols read on the transitions leaving the start state."""
    symbols = []
    for t in emitted:
        if t.source == START_STATE and not t.free:
            symbols.extend(t.symbols)
    return tuple(_unique(symbols))


def _emit_chain(body: str, next_state: int) -> Tuple[List[Transition], List[int], int]:
    """Transitions for one chain body, its final frontier and the next free state."""
    transitions: List[Transition] = []
    frontier = [START_STATE]
    last_state = START_STATE
    groups: List[_Group] = []
    closed: Optional[_Group] = None
    prev = ''

    for ch in body:
        if ch == '(':
            groups.append(_Group(entry=list(frontier), first=len(transitions)))
        elif ch == '|':
            g = groups[-1]
            g.ends.extend(frontier)
            frontier = list(g.entry)
        elif ch == ')':
            g = groups.pop()
            g.ends.extend(frontier)
            frontier = _unique(g.ends)
            closed = g
        elif ch == '*':
            if prev == ')':
                # repeat the group: every end re-reads the group's first symbols
                heads = _unique(
                    (t.target, t.symbols) for t in transitions[closed.first:]
                    if t.source in closed.entry and not t.free
                )
                for end in frontier:
                    for target, symbols in heads:
                        _add(transitions, Transition(end, target, symbols))
                # zero repetitions: what follows is also reachable from the entry
                frontier = _unique(frontier + closed.entry)
            else:
                _add(transitions, Transition(last_state, last_state, (prev,)))
        else:
            n = next_state
            next_state += 1
            for f in frontier:
                _add(transitions, Transition(f, n, (ch,)))
            frontier = [n]
            last_state = n
        prev = ch

    return transitions, frontier, next_state


def build_nfa(chains: Sequence[Union[str, Chain]],
              alphabet: Optional[Sequence[str]] = None,
              next_state: int = START_STATE + 1) -> Tuple[Automaton, int]:
    """
    Build the NFA for already simplified chains.

    Returns the automaton and the next unallocated state number.
    """
    chains = [c if isinstance(c, Chain) else Chain(c) for c in chains]
    if alphabet is None:
        alphabet = regex_alphabet(''.join(c.body for c in chains))

    built = []
    for chain in chains:
        emitted, frontier, next_state = _emit_chain(chain.body, next_state)
        built.append((chain, emitted, frontier))
    entries = entry_symbols(t for _, emitted, _ in built for t in emitted)

    transitions: List[Transition] = []
    accept = set()
    for chain, emitted, frontier in built:
        for t in emitted:
            _add(transitions, t)
        if chain.starred:
            for end in frontier:
                if end != START_STATE:
                    _add(transitions, Transition(end, START_STATE, entries, free=True))
            accept.add(START_STATE)
        accept.update(frontier)

    nfa = Automaton(
        alphabet=tuple(alphabet),
        start=START_STATE,
        accept=frozenset(accept),
        transitions=transitions,
        states=tuple(range(START_STATE, next_state)),
    )
    return nfa, next_state


def parse_regex(regex: str) -> List[Chain]:
    """Validate, normalize, split and simplify ``regex``."""
    check_regex(regex)
    text = normalize_regex(regex)
    if text != regex:
        check_regex(text)
    return simplify_chains(split_alternation(text))


def compile_regex(regex: str) -> Automaton:
    chains = parse_regex(regex)
    nfa, _ = build_nfa(chains, alphabet=regex_alphabet(regex))
    return nfa
