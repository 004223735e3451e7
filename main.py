"""
Main CLI interface for the chain-rule elimination toolkit.
Loads a grammar (file or built-in example) -> computes sigma sets -> removes chain rules -> prints or saves the result.
"""
import sys
import json
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.panel import Panel

from chainfree import __version__
from chainfree.config import config
from chainfree.logger import app_logger
from chainfree.grammar import (ChainRuleEliminator, EliminationResult, Grammar, GrammarError,
                               SigmaSetComputer, empty_productions, format_grammar, format_rule,
                               format_rules, format_symbols, get_example, list_examples,
                               load_grammar, save_grammar, validate_grammar)

console = Console()


def _resolve_grammar(file: Optional[str], example: Optional[str]) -> Grammar:
    """Load the grammar named by --file or --example, exiting with an error message otherwise."""
    if file and example:
        console.print("[red]❌ Use either --file or --example, not both[/red]")
        sys.exit(2)
    if not file and not example:
        console.print("[red]❌ No grammar given. Use --file or --example[/red]")
        sys.exit(2)

    try:
        if file:
            return load_grammar(file)
        return validate_grammar(get_example(example))
    except GrammarError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        app_logger.error(f"Could not load grammar: {e}")
        sys.exit(1)


def grammar_options(func):
    """Attach the shared --file / --example options."""
    func = click.option('--example', '-e', help='Name of a built-in example grammar')(func)
    func = click.option('--file', '-f', 'file', type=click.Path(exists=True, dir_okay=False),
                        help='Grammar file (.json, .yaml, .yml, .cfg, .txt)')(func)
    return func


def _print_grammar(grammar: Grammar, title: str):
    console.print(Panel(escape(format_grammar(grammar)), title=escape(title), expand=False))


def _sigma_table(sigma_sets, title: str = "Sigma Sets") -> Table:
    table = Table(title=title)
    table.add_column("Non-terminal", style="cyan")
    table.add_column("σ", style="green")
    for symbol, sigma in sigma_sets.items():
        table.add_row(escape(str(symbol)), escape(format_symbols(sorted(sigma))))
    return table


def _print_result(result: EliminationResult, original: Grammar):
    _print_grammar(original, "Input Grammar")
    console.print(_sigma_table(result.sigma_sets))
    console.print(f"[yellow]to skip[/yellow] = {escape(format_rules(result.rules_to_skip))}")
    console.print(f"[yellow]to add[/yellow] = {escape(format_rules(result.rules_to_add))}")
    _print_grammar(result.grammar, "Without Chain Rules")


def _warn_empty_productions(grammar: Grammar):
    empty = empty_productions(grammar)
    if empty:
        rules = escape(', '.join(format_rule(r) for r in empty))
        console.print(
            f"[yellow]⚠️  Grammar has empty productions ({rules}); "
            f"the result may not generate the same language[/yellow]"
        )


@click.group()
@click.version_option(version=__version__)
def cli():
    """Chain-rule elimination for context-free grammars: compute sigma sets
    and rewrite a grammar so that no unit productions A -> B remain."""
    pass


@cli.command()
@grammar_options
def show(file: Optional[str], example: Optional[str]):
    """Print a grammar."""
    grammar = _resolve_grammar(file, example)
    _print_grammar(grammar, file or example)

    table = Table(title="Grammar Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Terminals", str(len(grammar.terminals)))
    table.add_row("Non-terminals", str(len(grammar.non_terminals)))
    table.add_row("Rules", str(len(grammar.rules)))
    table.add_row("Chain Rules", str(len(grammar.chain_rules())))
    console.print(table)


@cli.command()
@grammar_options
@click.option('--symbol', '-s', multiple=True, help='Only show these non-terminals')
def sigma(file: Optional[str], example: Optional[str], symbol: tuple):
    """Compute the sigma set of every non-terminal."""
    grammar = _resolve_grammar(file, example)
    computer = SigmaSetComputer(grammar)

    targets = list(symbol) if symbol else [s.text for s in grammar.non_terminals]
    try:
        sigma_sets = {name: computer.compute(name) for name in targets}
    except (GrammarError, ValueError) as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        sys.exit(1)

    console.print(_sigma_table(sigma_sets))


@cli.command()
@grammar_options
@click.option('--output', '-o', type=click.Path(dir_okay=False),
              help='Save the rewritten grammar (.json, .yaml, .yml, .cfg, .txt)')
@click.option('--report', '-r', type=click.Path(dir_okay=False),
              help='Save the full elimination report as JSON')
@click.option('--dedupe/--no-dedupe', default=None,
              help='Drop duplicate rules from the result (default from config)')
def remove_chains(file: Optional[str], example: Optional[str], output: Optional[str],
                  report: Optional[str], dedupe: Optional[bool]):
    """Remove chain rules from a grammar."""
    console.print("[bold blue]🔧 Removing Chain Rules[/bold blue]")

    grammar = _resolve_grammar(file, example)
    _warn_empty_productions(grammar)

    if dedupe is None:
        dedupe = bool(config.get('elimination.deduplicate', False))

    eliminator = ChainRuleEliminator(deduplicate=dedupe)
    result = eliminator.eliminate(grammar)
    _print_result(result, grammar)

    if output:
        try:
            saved = save_grammar(result.grammar, output)
        except GrammarError as e:
            console.print(f"[red]❌ {escape(str(e))}[/red]")
            sys.exit(1)
        console.print(f"[green]✅ Saved rewritten grammar to {saved}[/green]")

    if report:
        Path(report).parent.mkdir(parents=True, exist_ok=True)
        with open(report, 'w', encoding='utf-8') as f:
            json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)
        console.print(f"[green]✅ Saved elimination report to {report}[/green]")

    console.print(
        f"[green]✅ Removed {len(result.removed_rules)} chain rules, "
        f"added {len(result.rules_to_add)} rules[/green]"
    )


@cli.command()
@click.option('--dedupe/--no-dedupe', default=None,
              help='Drop duplicate rules from the results (default from config)')
def demo(dedupe: Optional[bool]):
    """Remove chain rules from every built-in example grammar."""
    if dedupe is None:
        dedupe = bool(config.get('elimination.deduplicate', False))
    eliminator = ChainRuleEliminator(deduplicate=dedupe)

    for name, description in list_examples():
        console.print(Panel.fit(f"[bold green]{name}[/bold green]\n{description}", border_style="green"))
        grammar = get_example(name)
        _warn_empty_productions(grammar)
        _print_result(eliminator.eliminate(grammar), grammar)


@cli.command()
def examples():
    """List the built-in example grammars."""
    table = Table(title="Built-in Grammars")
    table.add_column("Name", style="cyan")
    table.add_column("Description", style="white")
    for name, description in list_examples():
        table.add_row(name, description)
    console.print(table)


if __name__ == '__main__':
    cli()
