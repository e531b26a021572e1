"""Exceptions raised by the compiler, the description loader and the simulator."""


class AutomatonError(ValueError):
    pass


class InvalidExpression(AutomatonError):
    """Malformed regular expression (bad characters, operators or parentheses)."""


class InvalidAutomatonDescription(AutomatonError):
    """Pre-built automaton whose table or state references are inconsistent."""


class InvalidInput(AutomatonError):
    """Input string containing a symbol outside the automaton's alphabet."""

    def __init__(self, symbol: str):
        super().__init__(f"'{symbol}' is not in the alphabet")
        self.symbol = symbol
