"""
Built-in example grammars used by the demo command and the tests.
"""
from typing import Callable, Dict, List, Tuple

from chainfree.grammar.errors import UnknownExampleError
from chainfree.grammar.model import Grammar, Rule, symbols


def intro() -> Grammar:
    """A chain-rule cycle A -> C -> A next to ordinary productions."""
    a, b, c = symbols("a b c")
    A, B, C, S = symbols("A B C S")
    return Grammar(
        terminals=(a, b, c),
        non_terminals=(A, B, C, S),
        rules=(
            Rule.of(S, B, A),
            Rule.of(A, C),
            Rule.of(A, a, c),
            Rule.of(B, b),
            Rule.of(C, A),
        ),
        start=S,
    )


def assignment() -> Grammar:
    """Assignment statements: both A and B reduce to F by a chain rule."""
    colon, equals, lparen, rparen, i = symbols(": = ( ) i")
    A, B, L, P, F, Q, S = symbols("A B L P F Q S")
    return Grammar(
        terminals=(i, colon, equals, lparen, rparen),
        non_terminals=(A, B, L, P, F, Q, S),
        rules=(
            Rule.of(S, L, A),
            Rule.of(S, L, B),
            Rule.of(L, P, colon, equals),
            Rule.of(L, Q, colon, equals),
            Rule.of(P, i),
            Rule.of(A, F),
            Rule.of(Q, i),
            Rule.of(B, F),
            Rule.of(F, Q, lparen, i, rparen),
        ),
        start=S,
    )


def paired_chains() -> Grammar:
    """Two independent chain rules A -> B and C -> D."""
    a, i = symbols("a i")
    A, B, C, D, S = symbols("A B C D S")
    return Grammar(
        terminals=(a, i),
        non_terminals=(A, B, C, D, S),
        rules=(
            Rule.of(S, A, C),
            Rule.of(A, B),
            Rule.of(A, A, a, B),
            Rule.of(B, i),
            Rule.of(C, D),
            Rule.of(C, D, a, C),
            Rule.of(D, i),
        ),
        start=S,
    )


def nested_binary() -> Grammar:
    """Two chain rules into C, which has an empty production."""
    one, zero = symbols("1 0")
    A, B, C, S = symbols("A B C S")
    return Grammar(
        terminals=(one, zero),
        non_terminals=(A, B, C, S),
        rules=(
            Rule.of(S, one, A),
            Rule.of(S, B, zero),
            Rule.of(A, one, A),
            Rule.of(A, C),
            Rule.of(B, B, zero),
            Rule.of(B, C),
            Rule.of(C, one, C, zero),
            Rule.of(C),
        ),
        start=S,
    )


def expression() -> Grammar:
    """Sums and products: S -> T -> P is a chain of length two."""
    plus, times, i = symbols("+ * i")
    P, T, S = symbols("P T S")
    return Grammar(
        terminals=(plus, times, i),
        non_terminals=(P, T, S),
        rules=(
            Rule.of(S, T, plus, P),
            Rule.of(S, T),
            Rule.of(T, T, times, P),
            Rule.of(T, P),
            Rule.of(P, i),
        ),
        start=S,
    )


def alternatives() -> Grammar:
    """The start symbol is only a choice between A and B."""
    one, zero, a, b = symbols("1 0 a b")
    A, B, S = symbols("A B S")
    return Grammar(
        terminals=(one, zero, a, b),
        non_terminals=(A, B, S),
        rules=(
            Rule.of(S, A),
            Rule.of(S, B),
            Rule.of(A, one, A, zero),
            Rule.of(A, one, a, zero),
            Rule.of(B, one, B, zero, zero),
            Rule.of(B, one, b, zero, zero),
        ),
        start=S,
    )


def cycle() -> Grammar:
    """A three-step chain-rule cycle A -> B -> C -> A with one terminal rule."""
    a, = symbols("a")
    A, B, C = symbols("A B C")
    return Grammar(
        terminals=(a,),
        non_terminals=(A, B, C),
        rules=(
            Rule.of(A, B),
            Rule.of(B, C),
            Rule.of(C, A),
            Rule.of(A, a),
        ),
        start=A,
    )


EXAMPLES: Dict[str, Callable[[], Grammar]] = {
    'intro': intro,
    'assignment': assignment,
    'paired-chains': paired_chains,
    'nested-binary': nested_binary,
    'expression': expression,
    'alternatives': alternatives,
    'cycle': cycle,
}


def list_examples() -> List[Tuple[str, str]]:
    """Names and one-line descriptions of the built-in grammars."""
    return [(name, factory.__doc__.strip()) for name, factory in EXAMPLES.items()]


def get_example(name: str) -> Grammar:
    """Build the named example grammar."""
    try:
        factory = EXAMPLES[name]
    except KeyError:
        raise UnknownExampleError(name, list(EXAMPLES)) from None
    return factory()
