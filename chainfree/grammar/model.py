"""
Grammar data model: symbols, chains, production rules and grammars.

All values are immutable. Transformations build new values instead of
mutating their input, so a Grammar can be shared freely between callers.
"""
from dataclasses import dataclass, field, replace
from functools import cached_property, total_ordering
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple, Union


@total_ordering
@dataclass(frozen=True)
class Symbol:
    """A terminal or non-terminal identifier.

    ``Symbol(None)`` is the "no symbol" sentinel (exported as ``EMPTY``). It is
    a separate variant rather than a reserved string, so it can never be
    mistaken for a real grammar symbol.
    """
    text: Optional[str]

    def __post_init__(self):
        if self.text is None:
            return
        if not isinstance(self.text, str):
            raise TypeError(f"Symbol text must be a string, got {type(self.text).__name__}")
        if not self.text:
            raise ValueError("Symbol text must not be empty; use EMPTY for the sentinel")

    @property
    def is_empty(self) -> bool:
        return self.text is None

    def _sort_key(self) -> Tuple[bool, str]:
        return (self.text is not None, self.text or "")

    def __lt__(self, other: 'Symbol') -> bool:
        if not isinstance(other, Symbol):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        return self.text if self.text is not None else "<empty>"


EMPTY = Symbol(None)

SymbolLike = Union[Symbol, str]


def as_symbol(value: SymbolLike) -> Symbol:
    """Coerce a string (or an existing Symbol) to a Symbol."""
    if isinstance(value, Symbol):
        return value
    return Symbol(value)


def symbols(names: str) -> Tuple[Symbol, ...]:
    """Build several symbols from a whitespace separated string, e.g. ``symbols("A B C")``."""
    return tuple(Symbol(name) for name in names.split())


@dataclass(frozen=True)
class Chain:
    """An ordered sequence of symbols: the right-hand side of a rule."""
    symbols: Tuple[Symbol, ...] = ()

    def __post_init__(self):
        items = self.symbols
        if isinstance(items, (Symbol, str)):
            items = (items,)
        items = tuple(as_symbol(item) for item in items)
        if any(item.is_empty for item in items):
            raise ValueError("The empty sentinel cannot appear inside a chain")
        object.__setattr__(self, 'symbols', items)

    @classmethod
    def of(cls, *items: SymbolLike) -> 'Chain':
        return cls(tuple(items))

    def __len__(self) -> int:
        return len(self.symbols)

    def __iter__(self):
        return iter(self.symbols)

    def __getitem__(self, index):
        return self.symbols[index]

    @property
    def left(self) -> Symbol:
        """First symbol, or EMPTY for the empty chain."""
        return self.symbols[0] if self.symbols else EMPTY

    @property
    def right(self) -> Symbol:
        """Last symbol, or EMPTY for the empty chain."""
        return self.symbols[-1] if self.symbols else EMPTY

    def __str__(self) -> str:
        if not self.symbols:
            return "ε"
        sep = "" if all(len(s.text) == 1 for s in self.symbols) else " "
        return sep.join(s.text for s in self.symbols)


@dataclass(frozen=True)
class Rule:
    """A production ``left -> right``."""
    left: Symbol
    right: Chain = field(default_factory=Chain)

    def __post_init__(self):
        left = as_symbol(self.left)
        if left.is_empty:
            raise ValueError("A rule's left side cannot be the empty sentinel")
        right = self.right if isinstance(self.right, Chain) else Chain(self.right)
        object.__setattr__(self, 'left', left)
        object.__setattr__(self, 'right', right)

    @classmethod
    def of(cls, left: SymbolLike, *right: SymbolLike) -> 'Rule':
        """Shorthand: ``Rule.of("A", "A", "a", "B")`` is ``A -> AaB``."""
        return cls(as_symbol(left), Chain(tuple(right)))

    def is_chain_rule(self, non_terminals: Iterable[Symbol]) -> bool:
        """True for a unit production: exactly one right symbol, and it is a non-terminal."""
        if len(self.right) != 1:
            return False
        if not isinstance(non_terminals, (set, frozenset)):
            non_terminals = frozenset(non_terminals)
        return self.right.left in non_terminals

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'left': self.left.text,
            'right': [s.text for s in self.right],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Rule':
        """Create from dictionary"""
        right = data.get('right') or []
        if isinstance(right, str):
            right = right.split()
        return cls(Symbol(str(data['left'])), Chain(tuple(str(s) for s in right)))

    def __str__(self) -> str:
        return f"{self.left} -> {self.right}"


def _unique(items: Iterable[SymbolLike]) -> Tuple[Symbol, ...]:
    """Ordered tuple of distinct symbols, first occurrence wins."""
    seen = {}
    for item in items:
        seen.setdefault(as_symbol(item), None)
    return tuple(seen)


@dataclass(frozen=True)
class Grammar:
    """A context-free grammar G = (V_T, V_N, P, S).

    ``terminals`` and ``non_terminals`` behave as sets but keep their
    declaration order, which fixes the enumeration order of every algorithm
    run over the grammar. ``rules`` is an ordered tuple and may hold
    duplicates. Invariants are not checked here; see ``validation``.
    """
    terminals: Tuple[Symbol, ...]
    non_terminals: Tuple[Symbol, ...]
    rules: Tuple[Rule, ...]
    start: Symbol

    def __post_init__(self):
        object.__setattr__(self, 'terminals', _unique(self.terminals))
        object.__setattr__(self, 'non_terminals', _unique(self.non_terminals))
        object.__setattr__(self, 'rules', tuple(self.rules))
        object.__setattr__(self, 'start', as_symbol(self.start))

    @cached_property
    def non_terminal_set(self) -> FrozenSet[Symbol]:
        """V_N as a frozenset, built once per grammar for membership tests."""
        return frozenset(self.non_terminals)

    def is_terminal(self, symbol: Symbol) -> bool:
        return symbol in self.terminals

    def is_non_terminal(self, symbol: Symbol) -> bool:
        return symbol in self.non_terminal_set

    def is_chain_rule(self, rule: Rule) -> bool:
        return rule.is_chain_rule(self.non_terminal_set)

    def chain_rules(self) -> List[Rule]:
        return [rule for rule in self.rules if self.is_chain_rule(rule)]

    def rules_for(self, symbol: SymbolLike) -> List[Rule]:
        """All rules whose left side is ``symbol``, in production order."""
        symbol = as_symbol(symbol)
        return [rule for rule in self.rules if rule.left == symbol]

    def with_rules(self, rules: Iterable[Rule]) -> 'Grammar':
        """Copy of this grammar with the production list replaced."""
        return replace(self, rules=tuple(rules))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON/YAML serialization"""
        return {
            'terminals': [s.text for s in self.terminals],
            'non_terminals': [s.text for s in self.non_terminals],
            'rules': [rule.to_dict() for rule in self.rules],
            'start': self.start.text,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Grammar':
        """Create from dictionary"""
        return cls(
            terminals=tuple(Symbol(str(t)) for t in data.get('terminals') or []),
            non_terminals=tuple(Symbol(str(n)) for n in data.get('non_terminals') or []),
            rules=tuple(Rule.from_dict(r) for r in data.get('rules') or []),
            start=Symbol(str(data['start'])),
        )
