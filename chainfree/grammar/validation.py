"""
Structural checks for grammars built or loaded by callers.

The algorithms assume a well-formed grammar and do not re-check it; these
helpers are for the code that constructs grammars (file loading, the CLI).
"""
from typing import List

from chainfree.grammar.errors import InvalidGrammarError
from chainfree.grammar.model import Grammar, Rule


def find_problems(grammar: Grammar) -> List[str]:
    """Return a description of every invariant the grammar violates."""
    problems = []
    terminals = set(grammar.terminals)
    non_terminals = set(grammar.non_terminals)

    overlap = sorted(terminals & non_terminals)
    if overlap:
        problems.append(
            f"Symbols declared both terminal and non-terminal: {', '.join(str(s) for s in overlap)}"
        )

    if any(s.is_empty for s in terminals | non_terminals):
        problems.append("The empty sentinel cannot be declared as a grammar symbol")

    if grammar.start not in non_terminals:
        problems.append(f"Start symbol {grammar.start} is not a non-terminal")

    declared = terminals | non_terminals
    for index, rule in enumerate(grammar.rules):
        if rule.left not in non_terminals:
            problems.append(f"Rule {index} ({rule}): left side {rule.left} is not a non-terminal")
        undeclared = [s for s in rule.right if s not in declared]
        if undeclared:
            names = ', '.join(str(s) for s in dict.fromkeys(undeclared))
            problems.append(f"Rule {index} ({rule}): undeclared symbol(s) {names}")

    return problems


def validate_grammar(grammar: Grammar) -> Grammar:
    """Return the grammar unchanged, or raise InvalidGrammarError listing its problems."""
    problems = find_problems(grammar)
    if problems:
        raise InvalidGrammarError(problems)
    return grammar


def empty_productions(grammar: Grammar) -> List[Rule]:
    """Rules with an empty right-hand side.

    Chain-rule elimination assumes there are none; they are representable, so
    this is reported rather than rejected.
    """
    return [rule for rule in grammar.rules if len(rule.right) == 0]
