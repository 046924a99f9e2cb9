from sharinggen.cli import main


def test_cli_writes_nested_source(tmp_path):
    out = tmp_path / "sharing.java"
    dot = tmp_path / "tree.dot"
    assert main(["right", "left", "-o", str(out), "--dot", str(dot)]) == 0
    text = out.read_text()
    assert text.startswith("if (right < value) {")
    assert dot.read_text().startswith("digraph sharing {")


def test_cli_methods_to_stdout(capsys):
    assert main(["up", "--style", "methods", "--method-prefix", "level"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("protected long level1(")


def test_cli_verify(capsys):
    assert main(["right", "left", "--verify", "--range", "0", "4"]) == 0
    assert "verified 125 assignments" in capsys.readouterr().err


def test_cli_rejects_duplicates(capsys):
    assert main(["up", "up"]) == 2
    assert "duplicate" in capsys.readouterr().err


def test_cli_custom_pivot(capsys):
    assert main(["n", "--pivot", "center"]) == 0
    assert "if (n < center) {" in capsys.readouterr().out


def test_cli_skips_stats_when_info_is_off(monkeypatch, capsys):
    import sharinggen.cli as cli
    from sharinggen.compiler.synthesizer import DecisionTree

    def boom(*args, **kwargs):
        raise AssertionError("stats computed for a discarded log line")

    monkeypatch.setattr(cli, "tree_stats", boom)
    monkeypatch.setattr(DecisionTree, "leaves", boom)
    assert main(["right", "left", "up", "--log-level", "warning"]) == 0
    assert capsys.readouterr().out.startswith("if (right < value) {")


def test_cli_reports_stats_at_info(monkeypatch, capsys):
    import sharinggen.cli as cli

    calls = []
    real = cli.tree_stats
    monkeypatch.setattr(cli, "tree_stats", lambda tree: calls.append(tree) or real(tree))
    assert main(["up", "--log-level", "info"]) == 0
    assert len(calls) == 1
    cli.get_sharinggen_logger("warning")
