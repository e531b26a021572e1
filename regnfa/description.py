"""
Pre-built automata read from YAML documents.

Two layouts share the same fields (``alphabet``, ``start``, ``accept``,
``transitions``):

* table: one row per state, one column per alphabet symbol, each value the
  destination state (1 relative). Used for DFAs.
* edges: one ``[from, to]`` pair per row. Used for plain graphs and for the
  PDA drawing; ``states`` may list the states explicitly.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .automaton import Automaton, Transition
from .errors import InvalidAutomatonDescription

DEFAULT_BODY_STATE = 2


def _as_int(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAutomatonDescription(f"{what} must be an integer, got {value!r}")
    return value


def _as_alphabet(value: Any) -> List[str]:
    if isinstance(value, str):
        symbols = list(value)
    elif isinstance(value, (list, tuple)):
        symbols = [str(v) for v in value]
    else:
        raise InvalidAutomatonDescription("alphabet must be a list of symbols")
    for s in symbols:
        if len(s) != 1:
            raise InvalidAutomatonDescription(f"Alphabet symbol {s!r} is not a single character")
    if len(set(symbols)) != len(symbols):
        raise InvalidAutomatonDescription("Alphabet contains duplicate symbols")
    return symbols


@dataclass
class AutomatonDescription:
    alphabet: List[str]
    start: int
    accept: List[int]
    transitions: List[List[int]]
    states: Optional[List[int]] = None
    body_state: int = DEFAULT_BODY_STATE

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "AutomatonDescription":
        if not isinstance(data, dict):
            raise InvalidAutomatonDescription("Automaton description must be a mapping")
        missing = [k for k in ("alphabet", "start", "accept", "transitions") if k not in data]
        if missing:
            raise InvalidAutomatonDescription(f"Missing field(s): {', '.join(missing)}")

        rows = data["transitions"]
        if not isinstance(rows, list) or not all(isinstance(r, list) for r in rows):
            raise InvalidAutomatonDescription("transitions must be a list of lists")
        accept = data["accept"]
        if not isinstance(accept, list):
            accept = [accept]
        states = data.get("states")

        return cls(
            alphabet=_as_alphabet(data["alphabet"]),
            start=_as_int(data["start"], "start"),
            accept=[_as_int(a, "accept state") for a in accept],
            transitions=[[_as_int(v, "transition state") for v in row] for row in rows],
            states=None if states is None else [_as_int(s, "state") for s in states],
            body_state=_as_int(data.get("body_state", DEFAULT_BODY_STATE), "body_state"),
        )

    @classmethod
    def from_file(cls, filename: str) -> "AutomatonDescription":
        with open(filename, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        return cls.from_mapping(data)

    # ---------- validation ----------
    def _check_defined(self):
        if not self.alphabet:
            raise InvalidAutomatonDescription("Alphabet is empty")
        if not self.transitions:
            raise InvalidAutomatonDescription("Transition table is empty")
        if not self.accept:
            raise InvalidAutomatonDescription("No accept states")

    def _check_range(self, value: int, n_states: int, what: str):
        if value < 1 or value > n_states:
            raise InvalidAutomatonDescription(f"{what}({value}), is not valid")

    def validate_table(self):
        self._check_defined()
        n_states = len(self.transitions)
        for rnum, row in enumerate(self.transitions, start=1):
            if len(row) != len(self.alphabet):
                raise InvalidAutomatonDescription(
                    f"Wrong number of columns({len(row)}) in row {rnum}, "
                    f"should be {len(self.alphabet)}"
                )
        for rnum, row in enumerate(self.transitions, start=1):
            for cnum, state in enumerate(row, start=1):
                if state < 1 or state > n_states:
                    raise InvalidAutomatonDescription(
                        f"Invalid transition state({state}) in row {rnum}, column {cnum}"
                    )
        self._check_range(self.start, n_states, "Start state")
        for a in self.accept:
            self._check_range(a, n_states, "Accept state")

    def edge_states(self) -> Sequence[int]:
        if self.states is not None:
            return self.states
        return range(1, len(self.transitions) + 1)

    def validate_edges(self):
        self._check_defined()
        known = set(self.edge_states())
        for rnum, row in enumerate(self.transitions, start=1):
            if len(row) != 2:
                raise InvalidAutomatonDescription(
                    f"Wrong number of columns({len(row)}) in row {rnum}, should be 2"
                )
            for state in row:
                if state not in known:
                    raise InvalidAutomatonDescription(
                        f"Invalid transition state({state}) in row {rnum}"
                    )
        if self.start not in known:
            raise InvalidAutomatonDescription(f"Start state({self.start}), is not valid")
        for a in self.accept:
            if a not in known:
                raise InvalidAutomatonDescription(f"Accept state({a}), is not valid")

    # ---------- conversion ----------
    def to_dfa(self) -> Automaton:
        self.validate_table()
        transitions = [
            Transition(n, target, (symbol,))
            for n, row in enumerate(self.transitions, start=1)
            for symbol, target in zip(self.alphabet, row)
        ]
        dfa = Automaton(
            alphabet=tuple(self.alphabet),
            start=self.start,
            accept=frozenset(self.accept),
            transitions=transitions,
            states=tuple(range(1, len(self.transitions) + 1)),
        )
        dfa.validate()
        return dfa

    def to_edge_automaton(self) -> Automaton:
        """Edges carry every alphabet symbol; only the structure matters here."""
        self.validate_edges()
        transitions = [Transition(a, b, tuple(self.alphabet)) for a, b in self.transitions]
        graph = Automaton(
            alphabet=tuple(self.alphabet),
            start=self.start,
            accept=frozenset(self.accept),
            transitions=transitions,
            states=tuple(sorted(set(self.edge_states()))),
        )
        graph.validate()
        return graph
