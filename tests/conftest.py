import os
from collections import deque

import pytest

# Keep test runs from writing log files
os.environ.setdefault("CHAINFREE_LOG_FILE", "")

from chainfree.grammar import examples  # noqa: E402


def derive_strings(grammar, max_len):
    """All terminal strings of length <= max_len derivable from the start symbol.

    Breadth-first leftmost derivation. Only valid for grammars without empty
    productions, where sentential forms never shrink.
    """
    non_terminals = set(grammar.non_terminals)
    start = (grammar.start,)
    seen = {start}
    queue = deque([start])
    words = set()

    while queue:
        form = queue.popleft()
        index = next((i for i, s in enumerate(form) if s in non_terminals), None)
        if index is None:
            words.add(tuple(s.text for s in form))
            continue
        for rule in grammar.rules_for(form[index]):
            new_form = form[:index] + rule.right.symbols + form[index + 1:]
            if len(new_form) > max_len or new_form in seen:
                continue
            seen.add(new_form)
            queue.append(new_form)

    return words


@pytest.fixture
def language():
    return derive_strings


@pytest.fixture
def paired_chains():
    return examples.paired_chains()


@pytest.fixture
def cycle():
    return examples.cycle()


@pytest.fixture
def expression():
    return examples.expression()
