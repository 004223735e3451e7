"""
chainfree: chain-rule (unit production) elimination for context-free grammars.
"""
from chainfree.grammar import (ChainRuleEliminator, Chain, Grammar, Rule, Symbol,
                               remove_chain_rules, sigma_set)

__version__ = "0.1.0"

__all__ = ['ChainRuleEliminator', 'Chain', 'Grammar', 'Rule', 'Symbol',
           'remove_chain_rules', 'sigma_set']
