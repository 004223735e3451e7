"""
Grammar package initialization.
"""
from .model import EMPTY, Chain, Grammar, Rule, Symbol, symbols
from .errors import (GrammarError, GrammarFormatError, InvalidGrammarError,
                     UnknownExampleError, UnknownSymbolError)
from .sigma import SigmaSetComputer, sigma_set
from .elimination import ChainRuleEliminator, EliminationResult, remove_chain_rules
from .validation import empty_productions, find_problems, validate_grammar
from .formatting import format_grammar, format_rule, format_rules, format_symbols
from .loader import load_grammar, save_grammar
from .examples import get_example, list_examples

__all__ = [
    'EMPTY', 'Chain', 'Grammar', 'Rule', 'Symbol', 'symbols',
    'GrammarError', 'GrammarFormatError', 'InvalidGrammarError', 'UnknownExampleError', 'UnknownSymbolError',
    'SigmaSetComputer', 'sigma_set',
    'ChainRuleEliminator', 'EliminationResult', 'remove_chain_rules',
    'empty_productions', 'find_problems', 'validate_grammar',
    'format_grammar', 'format_rule', 'format_rules', 'format_symbols',
    'load_grammar', 'save_grammar',
    'get_example', 'list_examples',
]
