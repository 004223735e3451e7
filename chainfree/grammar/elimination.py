"""
Chain-rule (unit production) elimination.

Every non-chain rule ``B -> x`` is copied to each non-terminal A with
``B in sigma(A)``, after which the direct chain rules ``A -> B`` are redundant
and dropped. The generated language is unchanged for grammars without empty
productions.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Tuple

from chainfree.grammar.model import Chain, Grammar, Rule, Symbol
from chainfree.grammar.sigma import SigmaSetComputer
from chainfree.logger import app_logger


@dataclass(frozen=True)
class EliminationResult:
    """Outcome of one elimination run, with the intermediate bookkeeping."""
    grammar: Grammar
    sigma_sets: Dict[Symbol, FrozenSet[Symbol]]
    rules_to_skip: Tuple[Rule, ...]
    rules_to_add: Tuple[Rule, ...]
    removed_rules: Tuple[Rule, ...] = field(default=())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'grammar': self.grammar.to_dict(),
            'sigma_sets': {
                a.text: [s.text for s in sorted(sigma)]
                for a, sigma in self.sigma_sets.items()
            },
            'rules_to_skip': [rule.to_dict() for rule in self.rules_to_skip],
            'rules_to_add': [rule.to_dict() for rule in self.rules_to_add],
            'removed_rules': [rule.to_dict() for rule in self.removed_rules],
        }


class ChainRuleEliminator:
    """Rewrites a grammar's productions so that no chain rules remain."""

    def __init__(self, deduplicate: bool = False):
        """
        Args:
            deduplicate: drop structurally identical rules from the result,
                keeping the first occurrence. Does not change the language.
        """
        self.deduplicate = deduplicate

    def compute_closures(self, grammar: Grammar) -> Dict[Symbol, Tuple[Symbol, ...]]:
        """Sigma-set of every non-terminal in discovery order, keyed in V_N order."""
        computer = SigmaSetComputer(grammar)
        return {a: computer.closure(a) for a in grammar.non_terminals}

    def compute_sigma_sets(self, grammar: Grammar) -> Dict[Symbol, FrozenSet[Symbol]]:
        """Sigma-set of every non-terminal, keyed in V_N order."""
        return {a: frozenset(closure) for a, closure in self.compute_closures(grammar).items()}

    def _rules_to_skip(self, grammar: Grammar,
                       closures: Dict[Symbol, Tuple[Symbol, ...]]) -> List[Rule]:
        """Direct chain rules ``A -> B`` for every ``B`` in sigma(A) other than A.

        Listed per non-terminal in V_N order, targets in the order the
        closure discovered them.
        """
        skip = []
        for a in grammar.non_terminals:
            for s in closures[a]:
                if s == a:
                    continue
                skip.append(Rule(a, Chain((s,))))
        return skip

    def _rules_to_add(self, grammar: Grammar,
                      sigma_sets: Dict[Symbol, FrozenSet[Symbol]]) -> List[Rule]:
        """Copies of each non-chain rule ``B -> x`` under every A with B in sigma(A)."""
        add = []
        for b in grammar.non_terminals:
            inheritors = [
                a for a in grammar.non_terminals
                if a != b and b in sigma_sets[a]
            ]
            if not inheritors:
                continue
            for rule in grammar.rules:
                if rule.left != b or grammar.is_chain_rule(rule):
                    continue
                for a in inheritors:
                    add.append(Rule(a, rule.right))
        return add

    def eliminate(self, grammar: Grammar) -> EliminationResult:
        """Remove chain rules from ``grammar``; the input is left untouched."""
        closures = self.compute_closures(grammar)
        sigma_sets = {a: frozenset(closure) for a, closure in closures.items()}
        app_logger.info(f"Computed sigma sets for {len(sigma_sets)} non-terminals")

        rules_to_skip = self._rules_to_skip(grammar, closures)
        rules_to_add = self._rules_to_add(grammar, sigma_sets)

        skip = set(rules_to_skip)
        kept = []
        removed = []
        for rule in grammar.rules:
            if rule in skip:
                removed.append(rule)
            else:
                kept.append(rule)

        new_rules = kept + rules_to_add
        if self.deduplicate:
            before = len(new_rules)
            new_rules = list(dict.fromkeys(new_rules))
            app_logger.debug(f"Deduplication dropped {before - len(new_rules)} rule(s)")

        app_logger.info(
            f"Removed {len(removed)} chain rule(s), synthesized {len(rules_to_add)} rule(s); "
            f"{len(grammar.rules)} -> {len(new_rules)} productions"
        )

        return EliminationResult(
            grammar=grammar.with_rules(new_rules),
            sigma_sets=sigma_sets,
            rules_to_skip=tuple(rules_to_skip),
            rules_to_add=tuple(rules_to_add),
            removed_rules=tuple(removed),
        )


def remove_chain_rules(grammar: Grammar) -> Grammar:
    """Equivalent grammar without chain rules. Duplicated rules are kept."""
    return ChainRuleEliminator().eliminate(grammar).grammar
