"""
Plain-text rendering of grammars, in the usual textbook notation:

    V_T = { a, i }
    V_N = { A, B, C, D, S }
    P = {
      A -> AaB | i,
      S -> AC
    }
    S = S
"""
from typing import Dict, Iterable, List, Optional

from chainfree.config import config
from chainfree.grammar.model import Chain, Grammar, Rule, Symbol


def _empty_marker(marker: Optional[str]) -> str:
    if marker is not None:
        return marker
    return config.get('formatting.empty_marker', 'ε')


def format_symbols(items: Iterable[Symbol]) -> str:
    """Render a symbol collection as ``{ a, b }``, keeping its order."""
    names = [str(s) for s in items]
    if not names:
        return "{ }"
    return "{ " + ", ".join(names) + " }"


def format_chain(chain: Chain, empty_marker: str = None) -> str:
    """Concatenate single-character symbols, space-separate longer ones."""
    if len(chain) == 0:
        return _empty_marker(empty_marker)
    return str(chain)


def format_rule(rule: Rule, empty_marker: str = None) -> str:
    return f"{rule.left} -> {format_chain(rule.right, empty_marker)}"


def group_rules(rules: Iterable[Rule]) -> Dict[Symbol, List[Chain]]:
    """Right-hand sides per left symbol, left symbols in sorted order."""
    grouped: Dict[Symbol, List[Chain]] = {}
    for rule in rules:
        grouped.setdefault(rule.left, []).append(rule.right)
    return {left: grouped[left] for left in sorted(grouped)}


def format_rules(rules: Iterable[Rule], empty_marker: str = None) -> str:
    """Render rules grouped by left side, alternatives joined with ``|``."""
    grouped = group_rules(rules)
    if not grouped:
        return "{ }"

    lines = []
    for left, chains in grouped.items():
        alternatives = " | ".join(format_chain(c, empty_marker) for c in chains)
        lines.append(f"  {left} -> {alternatives}")
    return "{\n" + ",\n".join(lines) + "\n}"


def format_grammar(grammar: Grammar, empty_marker: str = None) -> str:
    """Render the four components of a grammar, one per line."""
    return "\n".join([
        f"V_T = {format_symbols(grammar.terminals)}",
        f"V_N = {format_symbols(grammar.non_terminals)}",
        f"P = {format_rules(grammar.rules, empty_marker)}",
        f"S = {grammar.start}",
    ])
