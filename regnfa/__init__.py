from .automaton import Automaton, State, Transition
from .builder import build_nfa, compile_regex, parse_regex
from .description import AutomatonDescription
from .errors import (
    AutomatonError,
    InvalidAutomatonDescription,
    InvalidExpression,
    InvalidInput,
)
from .graph import build_pda_graph, build_pydot_graph, to_dot
from .regex import Chain, check_regex, simplify_chains, split_alternation
from .simulate import SimulationResult, Step, accepts, check_input_alphabet, simulate

__version__ = "0.1.0"
