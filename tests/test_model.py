import dataclasses

import pytest

from chainfree.grammar import EMPTY, Chain, Grammar, Rule, Symbol, symbols


def test_symbols_compare_by_text():
    assert Symbol("A") == Symbol("A")
    assert Symbol("A") != Symbol("B")
    assert hash(Symbol("A")) == hash(Symbol("A"))


def test_symbol_order_is_lexicographic_with_sentinel_first():
    a, b, c = symbols("b a c")
    assert sorted([a, b, c]) == [Symbol("a"), Symbol("b"), Symbol("c")]
    assert sorted([Symbol("a"), EMPTY]) == [EMPTY, Symbol("a")]


def test_sentinel_is_distinct_from_any_text():
    assert EMPTY.is_empty
    assert EMPTY != Symbol("empty")
    assert not Symbol("empty").is_empty


def test_symbol_rejects_empty_text():
    with pytest.raises(ValueError):
        Symbol("")


def test_symbol_rejects_non_string():
    with pytest.raises(TypeError):
        Symbol(1)


def test_chain_ends():
    chain = Chain.of("A", "a", "B")
    assert len(chain) == 3
    assert chain.left == Symbol("A")
    assert chain.right == Symbol("B")


def test_empty_chain_ends_are_the_sentinel():
    chain = Chain()
    assert len(chain) == 0
    assert chain.left == EMPTY
    assert chain.right == EMPTY


def test_chain_order_matters():
    assert Chain.of("A", "B") != Chain.of("B", "A")
    assert Chain.of("A", "B") == Chain((Symbol("A"), Symbol("B")))


def test_chain_from_single_symbol():
    assert Chain(Symbol("A")) == Chain.of("A")


def test_chain_rejects_sentinel():
    with pytest.raises(ValueError):
        Chain((Symbol("A"), EMPTY))


def test_chain_text():
    assert str(Chain.of("A", "a", "B")) == "AaB"
    assert str(Chain.of("expr", "+", "term")) == "expr + term"


def test_rule_structural_equality():
    assert Rule.of("A", "B") == Rule(Symbol("A"), Chain.of("B"))
    assert Rule.of("A", "B") != Rule.of("A", "B", "B")
    assert len({Rule.of("A", "B"), Rule.of("A", "B")}) == 1


def test_rule_with_no_right_side_is_empty_production():
    rule = Rule.of("C")
    assert len(rule.right) == 0
    assert str(rule) == "C -> ε"


def test_chain_rule_requires_single_non_terminal():
    non_terminals = symbols("A B")
    assert Rule.of("A", "B").is_chain_rule(non_terminals)
    assert not Rule.of("A", "b").is_chain_rule(non_terminals)
    assert not Rule.of("A", "B", "B").is_chain_rule(non_terminals)
    assert not Rule.of("A").is_chain_rule(non_terminals)


def test_rule_dict_form():
    rule = Rule.of("A", "A", "a", "B")
    assert rule.to_dict() == {'left': 'A', 'right': ['A', 'a', 'B']}
    assert Rule.from_dict(rule.to_dict()) == rule
    assert Rule.from_dict({'left': 'A', 'right': 'A a B'}) == rule


def test_grammar_symbol_sets_drop_duplicates_keeping_order():
    g = Grammar(terminals=("a", "b", "a"), non_terminals=("S", "A", "S"), rules=(), start="S")
    assert g.terminals == symbols("a b")
    assert g.non_terminals == symbols("S A")
    assert g.start == Symbol("S")


def test_grammar_keeps_duplicate_rules(paired_chains):
    rules = paired_chains.rules + paired_chains.rules[:1]
    g = paired_chains.with_rules(rules)
    assert len(g.rules) == len(paired_chains.rules) + 1


def test_grammar_is_immutable(paired_chains):
    with pytest.raises(dataclasses.FrozenInstanceError):
        paired_chains.rules = ()


def test_with_rules_returns_new_grammar(paired_chains):
    g = paired_chains.with_rules([Rule.of("S", "a")])
    assert g is not paired_chains
    assert g.rules == (Rule.of("S", "a"),)
    assert g.terminals == paired_chains.terminals
    assert g.non_terminals == paired_chains.non_terminals
    assert g.start == paired_chains.start
    assert len(paired_chains.rules) == 7


def test_grammar_queries(paired_chains):
    assert paired_chains.chain_rules() == [Rule.of("A", "B"), Rule.of("C", "D")]
    assert paired_chains.rules_for("A") == [Rule.of("A", "B"), Rule.of("A", "A", "a", "B")]
    assert paired_chains.is_terminal(Symbol("a"))
    assert paired_chains.is_non_terminal(Symbol("A"))
    assert not paired_chains.is_non_terminal(Symbol("a"))


def test_grammar_dict_form(paired_chains):
    data = paired_chains.to_dict()
    assert data['start'] == 'S'
    assert data['terminals'] == ['a', 'i']
    assert data['rules'][0] == {'left': 'S', 'right': ['A', 'C']}
    assert Grammar.from_dict(data) == paired_chains


def test_non_terminal_set_is_built_once(paired_chains):
    members = paired_chains.non_terminal_set
    assert isinstance(members, frozenset)
    assert members == set(paired_chains.non_terminals)
    assert paired_chains.non_terminal_set is members
    # not part of equality or of copies
    assert paired_chains.with_rules(paired_chains.rules) == paired_chains


def test_chain_rule_test_accepts_any_iterable(paired_chains):
    rule = Rule.of("A", "B")
    assert rule.is_chain_rule(paired_chains.non_terminal_set)
    assert rule.is_chain_rule(list(paired_chains.non_terminals))
    assert rule.is_chain_rule(s for s in paired_chains.non_terminals)
    assert not rule.is_chain_rule([Symbol("A")])
    assert paired_chains.chain_rules() == [Rule.of("A", "B"), Rule.of("C", "D")]
