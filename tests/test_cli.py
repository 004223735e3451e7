import json

from click.testing import CliRunner

from chainfree.grammar import Rule, load_grammar, save_grammar
from main import cli


def test_examples_command():
    result = CliRunner().invoke(cli, ["examples"])
    assert result.exit_code == 0
    assert "paired-chains" in result.output


def test_show_example():
    result = CliRunner().invoke(cli, ["show", "--example", "paired-chains"])
    assert result.exit_code == 0
    assert "V_N = { A, B, C, D, S }" in result.output
    assert "Chain Rules" in result.output


def test_sigma_command():
    result = CliRunner().invoke(cli, ["sigma", "-e", "paired-chains"])
    assert result.exit_code == 0
    assert "{ A, B }" in result.output
    assert "{ C, D }" in result.output


def test_sigma_unknown_symbol():
    result = CliRunner().invoke(cli, ["sigma", "-e", "cycle", "-s", "Z"])
    assert result.exit_code == 1
    assert "not a non-terminal" in result.output


def test_remove_chains_saves_result(tmp_path):
    output = tmp_path / "out.json"
    report = tmp_path / "report.json"
    result = CliRunner().invoke(cli, ["remove-chains", "-e", "paired-chains",
                                      "-o", str(output), "-r", str(report)])
    assert result.exit_code == 0, result.output
    assert "Removed 2 chain rules" in result.output

    grammar = load_grammar(output)
    assert Rule.of("A", "i") in grammar.rules
    assert Rule.of("A", "B") not in grammar.rules

    data = json.loads(report.read_text(encoding="utf-8"))
    assert data["sigma_sets"]["A"] == ["A", "B"]


def test_remove_chains_from_file(tmp_path, cycle):
    source = tmp_path / "cycle.yaml"
    save_grammar(cycle, source)
    output = tmp_path / "out.cfg"
    result = CliRunner().invoke(cli, ["remove-chains", "-f", str(source), "-o", str(output)])
    assert result.exit_code == 0, result.output
    assert set(load_grammar(output).rules) == {Rule.of("A", "a"), Rule.of("B", "a"), Rule.of("C", "a")}


def test_remove_chains_dedupe_flag(tmp_path):
    source = tmp_path / "dup.json"
    source.write_text(json.dumps({
        "terminals": ["x"], "non_terminals": ["A", "B"],
        "rules": [{"left": "A", "right": ["B"]}, {"left": "A", "right": ["x"]},
                  {"left": "B", "right": ["x"]}],
        "start": "A",
    }), encoding="utf-8")
    output = tmp_path / "out.json"
    result = CliRunner().invoke(cli, ["remove-chains", "-f", str(source), "-o", str(output), "--dedupe"])
    assert result.exit_code == 0, result.output
    assert len(load_grammar(output).rules) == 2


def test_empty_productions_warning():
    result = CliRunner().invoke(cli, ["remove-chains", "-e", "nested-binary"])
    assert result.exit_code == 0
    assert "empty productions" in result.output


def test_demo_runs_every_example():
    result = CliRunner().invoke(cli, ["demo"])
    assert result.exit_code == 0, result.output
    assert "alternatives" in result.output
    assert "Without Chain Rules" in result.output


def test_grammar_source_is_required():
    result = CliRunner().invoke(cli, ["show"])
    assert result.exit_code == 2
    assert "No grammar given" in result.output


def test_unknown_example_name():
    result = CliRunner().invoke(cli, ["show", "-e", "nope"])
    assert result.exit_code == 1
    assert "Unknown example grammar" in result.output


def test_invalid_grammar_file(tmp_path):
    source = tmp_path / "bad.json"
    source.write_text(json.dumps({"terminals": [], "non_terminals": ["A"], "rules": [], "start": "S"}),
                      encoding="utf-8")
    result = CliRunner().invoke(cli, ["show", "-f", str(source)])
    assert result.exit_code == 1
    assert "Invalid grammar" in result.output


def test_malformed_rules_in_grammar_file(tmp_path):
    source = tmp_path / "g.json"
    source.write_text(json.dumps({"non_terminals": ["S"], "rules": ["S -> a"], "start": "S"}),
                      encoding="utf-8")
    result = CliRunner().invoke(cli, ["show", "-f", str(source)])
    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "must be a mapping" in result.output


def test_sigma_empty_symbol_name():
    result = CliRunner().invoke(cli, ["sigma", "-e", "cycle", "-s", ""])
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Symbol text must not be empty" in result.output


def test_remove_chains_warns_once_about_empty_productions(tmp_path):
    source = tmp_path / "empty.json"
    source.write_text(json.dumps({
        "terminals": ["a"], "non_terminals": ["S", "A"],
        "rules": [{"left": "S", "right": ["A"]}, {"left": "A", "right": []},
                  {"left": "A", "right": ["a"]}], "start": "S",
    }), encoding="utf-8")
    result = CliRunner().invoke(cli, ["remove-chains", "-f", str(source)])
    assert result.exit_code == 0, result.output
    assert result.output.count("empty production") == 1
