"""
Replays an input string against an automaton.

Only one current state is tracked: when several transitions match, the first
one in transition order wins and nothing is backtracked. A run that finds no
transition is stuck; it is rejected because fewer symbols were consumed than
the input holds.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .automaton import Automaton, Transition
from .errors import InvalidInput

EMPTY = "e"


@dataclass(frozen=True)
class Step:
    source: int
    symbol: str
    target: int
    free: bool = False

    def __str__(self):
        symbol = EMPTY if self.free else self.symbol
        return f"d(q{self.source}, {symbol}) -> q{self.target}"


@dataclass
class SimulationResult:
    word: str
    final_state: int
    accepted: bool
    steps: List[Step] = field(default_factory=list)

    @property
    def consumed(self) -> int:
        return sum(1 for s in self.steps if not s.free)

    @property
    def stuck(self) -> bool:
        return self.consumed < len(self.word)


def check_input_alphabet(automaton: Automaton, word: str) -> None:
    for ch in word:
        if ch not in automaton.alphabet:
            raise InvalidInput(ch)


def _match(automaton: Automaton, state: int, symbol: str) -> Optional[Transition]:
    for t in automaton.outgoing(state):
        if not t.free and symbol in t.symbols:
            return t
    return None


def simulate(automaton: Automaton, word: str) -> SimulationResult:
    check_input_alphabet(automaton, word)

    current = automaton.start
    steps: List[Step] = []
    for ch in word:
        t = _match(automaton, current, ch)
        if t is None:
            back = automaton.free_return(current)
            if back is not None:
                steps.append(Step(current, ch, back.target, free=True))
                current = back.target
                t = _match(automaton, current, ch)
        if t is None:
            break
        steps.append(Step(current, ch, t.target))
        current = t.target

    consumed = sum(1 for s in steps if not s.free)
    accepted = automaton.is_accept(current) and consumed == len(word)
    return SimulationResult(word, current, accepted, steps)


def accepts(automaton: Automaton, w: str) -> bool:
    return simulate(automaton, w).accepted
