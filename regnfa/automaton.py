"""
State/transition model shared by the builder, the simulator and the exporter.

- States are plain integers (1 relative).
- A transition may carry several symbols.
- ``free`` transitions are the return edges of a star group to the start
  state; the simulator follows them without consuming input.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Tuple

from .errors import InvalidAutomatonDescription


@dataclass(frozen=True)
class Transition:
    source: int
    target: int
    symbols: Tuple[str, ...]
    free: bool = False

    @property
    def is_loop(self) -> bool:
        return self.source == self.target


@dataclass
class State:
    id: int
    is_accept: bool
    neighbours: List[int] = field(default_factory=list)


@dataclass
class Automaton:
    alphabet: Tuple[str, ...]
    start: int
    accept: FrozenSet[int]
    transitions: List[Transition]
    states: Tuple[int, ...]

    def is_accept(self, state: int) -> bool:
        return state in self.accept

    def outgoing(self, state: int) -> List[Transition]:
        return [t for t in self.transitions if t.source == state]

    def free_return(self, state: int):
        """First free edge leaving ``state``, or None."""
        for t in self.outgoing(state):
            if t.free:
                return t
        return None

    def validate(self):
        known = set(self.states)
        if self.start not in known:
            raise InvalidAutomatonDescription(f"Start state({self.start}), is not valid")
        for s in sorted(self.accept):
            if s not in known:
                raise InvalidAutomatonDescription(f"Accept state({s}), is not valid")
        for n, t in enumerate(self.transitions, start=1):
            for end in (t.source, t.target):
                if end not in known:
                    raise InvalidAutomatonDescription(
                        f"Invalid transition state({end}) in transition {n}"
                    )
            for sym in t.symbols:
                if sym not in self.alphabet:
                    raise InvalidAutomatonDescription(
                        f"Symbol '{sym}' of transition {n} is not in the alphabet"
                    )

    def state_graph(self) -> List[State]:
        """One record per state with the states it shares an edge with."""
        records: Dict[int, State] = {
            s: State(s, self.is_accept(s)) for s in self.states
        }
        for t in self.transitions:
            records[t.source].neighbours.append(t.target)
            if not t.is_loop:
                records[t.target].neighbours.append(t.source)
        return [records[s] for s in self.states]

    def edge_listing(self) -> List[str]:
        """Edges as text, accept states wrapped in parentheses."""

        def name(s: int) -> str:
            return f"({s})" if self.is_accept(s) else str(s)

        lines = [f" -> {self.start}"]
        for t in self.transitions:
            lines.append(f"{name(t.source)} -> {name(t.target)}")
        return lines
