"""
Front end of the compiler: validation, top-level splitting and simplification
of the restricted regex language (symbols, concatenation, '|', '*', groups).
"""

import re
import string
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from .errors import InvalidExpression

# ===============================
# Character classes
# ===============================
OPERATORS = {'|', '*'}
GROUPING = {'(', ')'}
ACCEPTED_CHARS = set(string.ascii_letters + string.digits) | OPERATORS | GROUPING | {' '}

FIRST_REJECT = {')', '|', '*', ' '}
AFTER_OPEN_OR_BAR_REJECT = {')', '|', '*'}
END_REJECT = {'(', '|'}


@dataclass(frozen=True)
class Chain:
    """One concatenation chain; ``starred`` stands for an outer ``( ... )*``."""
    body: str
    starred: bool = False

    def __str__(self):
        return f"({self.body})*" if self.starred else self.body


# ===============================
# Lexical guard
# ===============================
def check_regex(regex: str) -> None:
    if not regex:
        raise InvalidExpression("Regular Expression is empty.")
    if regex[0] in FIRST_REJECT:
        raise InvalidExpression(f"Regular Expression cannot start with '{regex[0]}'.")

    for ch in regex:
        if ch not in ACCEPTED_CHARS:
            raise InvalidExpression(f"{ch} is not an accepted character.")

    for a, b in zip(regex, regex[1:]):
        if a in ('(', '|') and b in AFTER_OPEN_OR_BAR_REJECT:
            raise InvalidExpression(f"'{a}' cannot be immediately followed by '{b}'.")
        if a == '*' and b == '*':
            raise InvalidExpression("'*' cannot be immediately followed by '*'.")

    if regex[-1] in END_REJECT:
        raise InvalidExpression(f"Regular Expression cannot end on '{regex[-1]}'.")

    stack = []
    for ch in regex:
        if ch == '(':
            stack.append(ch)
        elif ch == ')':
            if not stack:
                raise InvalidExpression("Parentheses are not valid.")
            stack.pop()
    if stack:
        raise InvalidExpression("Parentheses are not valid.")


def normalize_regex(s: str) -> str:
    return re.sub(r"\s+", "", s)


def regex_alphabet(regex: str) -> List[str]:
    """Symbols of the expression, in order of first appearance."""
    alphabet: List[str] = []
    for ch in regex:
        if ch in OPERATORS or ch in GROUPING or ch.isspace():
            continue
        if ch not in alphabet:
            alphabet.append(ch)
    return alphabet


# ===============================
# Splitting
# ===============================
def split_alternation(regex: str) -> List[str]:
    """Split on '|' outside of any group. Always returns at least one chain."""
    chains: List[str] = []
    current: List[str] = []
    depth = 0
    for ch in regex:
        if ch == '(':
            depth += 1
            current.append(ch)
        elif ch == ')':
            depth -= 1
            current.append(ch)
        elif ch == '|' and depth == 0:
            chains.append(''.join(current))
            current = []
        else:
            current.append(ch)
    chains.append(''.join(current))
    return chains


def matching_close(body: str, open_at: int = 0) -> Optional[int]:
    """Index of the ')' closing the '(' at ``open_at``."""
    depth = 0
    for i in range(open_at, len(body)):
        if body[i] == '(':
            depth += 1
        elif body[i] == ')':
            depth -= 1
            if depth == 0:
                return i
    return None


def _is_wrapped(body: str) -> bool:
    return len(body) >= 2 and body[0] == '(' and matching_close(body) == len(body) - 1


def _is_star_wrapped(body: str) -> bool:
    return (len(body) >= 3 and body[0] == '(' and body[-1] == '*'
            and matching_close(body) == len(body) - 2)


# ===============================
# Simplification
# ===============================
def simplify_chains(chains: Iterable[Union[str, Chain]]) -> List[Chain]:
    """
    Flatten wholly parenthesized chains until none is left.

    ``(...)`` is unwrapped and re-split; ``(...)*`` is unwrapped, each
    alternative simplified and re-wrapped as a starred chain. Chains that are
    kept come first, rewritten ones are appended in order.
    """
    items = [c if isinstance(c, Chain) else Chain(c) for c in chains]
    retain = [c.starred or not (_is_wrapped(c.body) or _is_star_wrapped(c.body))
              for c in items]

    rewritten: List[Chain] = []
    for chain, keep in zip(items, retain):
        if keep:
            continue
        if _is_star_wrapped(chain.body):
            rewritten.extend(_simplify_star(chain.body))
        else:
            rewritten.extend(_simplify_group(chain.body))

    kept = [c for c, keep in zip(items, retain) if keep]
    return kept + rewritten


def _simplify_group(body: str) -> List[Chain]:
    inner = body[1:-1]
    return simplify_chains(split_alternation(inner))


def _simplify_star(body: str) -> List[Chain]:
    inner = body[1:-2]
    pieces = simplify_chains(split_alternation(inner))
    return [Chain(p.body, starred=True) for p in pieces]
