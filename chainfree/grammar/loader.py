"""
Reading and writing grammar files.

Supported formats, chosen by file suffix:

- ``.json`` / ``.yaml`` / ``.yml``: a mapping with ``terminals``,
  ``non_terminals``, ``rules`` (``{left: A, right: [a, B]}``) and ``start``.
- ``.cfg`` / ``.txt``: NLTK CFG notation (``S -> A 'a' | B``); quoted items
  are terminals, the start symbol is the left side of the first production.
"""
import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from nltk.grammar import CFG, Nonterminal, Production, is_nonterminal

from chainfree.grammar.errors import GrammarFormatError
from chainfree.grammar.model import Chain, Grammar, Rule, Symbol
from chainfree.grammar.validation import empty_productions, validate_grammar
from chainfree.logger import app_logger

JSON_SUFFIXES = {'.json'}
YAML_SUFFIXES = {'.yaml', '.yml'}
NLTK_SUFFIXES = {'.cfg', '.txt'}


def grammar_from_dict(data: Dict[str, Any]) -> Grammar:
    """Build a grammar from its mapping form, reporting bad structure as GrammarFormatError."""
    if not isinstance(data, dict):
        raise GrammarFormatError(f"Expected a mapping at the top level, got {type(data).__name__}")
    if 'start' not in data:
        raise GrammarFormatError("Missing required key 'start'")
    for key in ('terminals', 'non_terminals', 'rules'):
        if data.get(key) is not None and not isinstance(data[key], list):
            raise GrammarFormatError(f"'{key}' must be a list, got {type(data[key]).__name__}")
    for index, rule in enumerate(data.get('rules') or []):
        if not isinstance(rule, dict):
            raise GrammarFormatError(
                f"Rule {index} must be a mapping with 'left' and 'right', got {rule!r}"
            )
    try:
        return Grammar.from_dict(data)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise GrammarFormatError(f"Malformed grammar mapping: {e}") from e


def from_nltk(cfg: CFG) -> Grammar:
    """Convert an ``nltk.CFG`` into a Grammar.

    Symbol sets are collected from the productions in order of appearance:
    left sides first, then right-side non-terminals.
    """
    non_terminals = [Symbol(str(cfg.start().symbol()))]
    terminals = []
    rules = []

    for production in cfg.productions():
        non_terminals.append(Symbol(str(production.lhs().symbol())))

    for production in cfg.productions():
        right = []
        for item in production.rhs():
            if is_nonterminal(item):
                symbol = Symbol(str(item.symbol()))
                non_terminals.append(symbol)
            else:
                symbol = Symbol(str(item))
                terminals.append(symbol)
            right.append(symbol)
        rules.append(Rule(Symbol(str(production.lhs().symbol())), Chain(tuple(right))))

    return Grammar(
        terminals=tuple(terminals),
        non_terminals=tuple(non_terminals),
        rules=tuple(rules),
        start=Symbol(str(cfg.start().symbol())),
    )


def parse_nltk_grammar(text: str) -> Grammar:
    """Parse NLTK CFG notation."""
    try:
        cfg = CFG.fromstring(text)
    except ValueError as e:
        raise GrammarFormatError(f"Invalid CFG notation: {e}") from e
    return from_nltk(cfg)


def to_nltk(grammar: Grammar) -> CFG:
    """Convert a Grammar into an ``nltk.CFG``.

    Symbols that no production mentions are not representable in NLTK's
    model and are dropped.
    """
    productions = []
    for rule in grammar.rules:
        right = [
            Nonterminal(s.text) if grammar.is_non_terminal(s) else s.text
            for s in rule.right
        ]
        productions.append(Production(Nonterminal(rule.left.text), right))
    return CFG(Nonterminal(grammar.start.text), productions)


def format_nltk_grammar(grammar: Grammar) -> str:
    """NLTK CFG notation, start symbol's productions first so it reads back as the start."""
    cfg = to_nltk(grammar)
    start = cfg.start()
    productions = sorted(cfg.productions(), key=lambda p: p.lhs() != start)
    return "\n".join(str(p).rstrip() for p in productions) + "\n"


def load_grammar(path: Union[str, Path], validate: bool = True) -> Grammar:
    """Load a grammar file, dispatching on its suffix.

    Args:
        path: File to read
        validate: Check structural invariants and raise InvalidGrammarError on failure

    Returns:
        The loaded grammar
    """
    path = Path(path)
    suffix = path.suffix.lower()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise GrammarFormatError(f"Cannot read grammar file {path}: {e}") from e

    if suffix in JSON_SUFFIXES:
        try:
            grammar = grammar_from_dict(json.loads(text))
        except json.JSONDecodeError as e:
            raise GrammarFormatError(f"Invalid JSON in {path}: {e}") from e
    elif suffix in YAML_SUFFIXES:
        try:
            grammar = grammar_from_dict(yaml.safe_load(text))
        except yaml.YAMLError as e:
            raise GrammarFormatError(f"Invalid YAML in {path}: {e}") from e
    elif suffix in NLTK_SUFFIXES:
        grammar = parse_nltk_grammar(text)
    else:
        raise GrammarFormatError(f"Unsupported grammar file type '{suffix}' for {path}")

    if validate:
        validate_grammar(grammar)

    empty = empty_productions(grammar)
    if empty:
        # Callers decide how to surface this; the CLI prints its own warning
        app_logger.info(
            f"{path}: {len(empty)} empty production(s) ({', '.join(str(r) for r in empty)}); "
            f"chain-rule elimination assumes there are none"
        )

    app_logger.info(f"Loaded grammar from {path}: {len(grammar.non_terminals)} non-terminals, "
                    f"{len(grammar.terminals)} terminals, {len(grammar.rules)} rules")
    return grammar


def save_grammar(grammar: Grammar, path: Union[str, Path]) -> str:
    """Write a grammar to ``path`` in the format implied by its suffix."""
    path = Path(path)
    suffix = path.suffix.lower()
    path.parent.mkdir(parents=True, exist_ok=True)

    if suffix in JSON_SUFFIXES:
        content = json.dumps(grammar.to_dict(), indent=2, ensure_ascii=False) + "\n"
    elif suffix in YAML_SUFFIXES:
        content = yaml.safe_dump(grammar.to_dict(), sort_keys=False, allow_unicode=True)
    elif suffix in NLTK_SUFFIXES:
        content = format_nltk_grammar(grammar)
    else:
        raise GrammarFormatError(f"Unsupported grammar file type '{suffix}' for {path}")

    with open(path, 'w', encoding='utf-8') as f:
        f.write(content)

    app_logger.info(f"Saved grammar with {len(grammar.rules)} rules to {path}")
    return str(path)
