"""
Exceptions raised by the grammar package.
"""
from typing import List


class GrammarError(Exception):
    """Base class for all grammar errors."""


class UnknownSymbolError(GrammarError, ValueError):
    """A symbol was used where a declared non-terminal is required."""

    def __init__(self, symbol, message: str = None):
        self.symbol = symbol
        super().__init__(message or f"Symbol {symbol!s} is not a non-terminal of the grammar")


class InvalidGrammarError(GrammarError, ValueError):
    """A grammar violates one or more structural invariants."""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        details = "; ".join(self.problems)
        super().__init__(f"Invalid grammar ({len(self.problems)} problem(s)): {details}")


class GrammarFormatError(GrammarError, ValueError):
    """A grammar file could not be read."""


class UnknownExampleError(GrammarError, KeyError):
    """No built-in example grammar has the requested name."""

    def __init__(self, name: str, available: List[str]):
        self.name = name
        self.available = list(available)
        super().__init__(f"Unknown example grammar '{name}' (available: {', '.join(self.available)})")

    def __str__(self) -> str:
        return self.args[0]
