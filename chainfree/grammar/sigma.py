"""
Sigma-set computation: closure of a non-terminal under chain rules.

    sigma(A) = { B in V_N | A =>* B using only chain rules }

The closure always contains A itself. It is computed as a fixed point: every
pass over the production list adds the targets of chain rules leaving the
current set, until a full pass adds nothing.
"""
from typing import FrozenSet, Iterable, List, Tuple

from chainfree.grammar.errors import UnknownSymbolError
from chainfree.grammar.model import Grammar, Symbol, SymbolLike, as_symbol
from chainfree.logger import app_logger


class SigmaSetComputer:
    """Computes sigma-sets over one (immutable) grammar."""

    def __init__(self, grammar: Grammar):
        self.grammar = grammar
        self._non_terminals = frozenset(grammar.non_terminals)
        # Unit edges in production order; anything else can never extend a closure
        self._edges: List[Tuple[Symbol, Symbol]] = [
            (rule.left, rule.right.left)
            for rule in grammar.rules
            if len(rule.right) == 1 and rule.right.left in self._non_terminals
        ]

    def _require_non_terminal(self, symbol: SymbolLike) -> Symbol:
        symbol = as_symbol(symbol)
        if symbol.is_empty or symbol not in self._non_terminals:
            raise UnknownSymbolError(symbol)
        return symbol

    def expand(self, members: Iterable[Symbol]) -> List[Symbol]:
        """Run one closure pass and return the symbols it would add.

        A sigma-set is a fixed point exactly when this returns an empty list.
        """
        seen = set(members)
        added = []
        for left, target in self._edges:
            if left not in seen or target == left or target in seen:
                continue
            seen.add(target)
            added.append(target)
        return added

    def closure(self, symbol: SymbolLike) -> Tuple[Symbol, ...]:
        """Sigma-set of ``symbol`` in discovery order, ``symbol`` first."""
        symbol = self._require_non_terminal(symbol)

        result = [symbol]
        passes = 0
        while True:
            passes += 1
            added = self.expand(result)
            if not added:
                break
            result.extend(added)

        app_logger.debug(f"sigma({symbol}) = {{{', '.join(str(s) for s in result)}}} after {passes} pass(es)")
        return tuple(result)

    def compute(self, symbol: SymbolLike) -> FrozenSet[Symbol]:
        """Sigma-set of ``symbol`` as a set."""
        return frozenset(self.closure(symbol))


def sigma_set(grammar: Grammar, non_terminal: SymbolLike) -> FrozenSet[Symbol]:
    """Set of non-terminals reachable from ``non_terminal`` through chain rules.

    Raises:
        UnknownSymbolError: ``non_terminal`` is not in ``grammar.non_terminals``.
    """
    return SigmaSetComputer(grammar).compute(non_terminal)
