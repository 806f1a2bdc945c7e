import logging

import pytest

from seqmap import repl


def _feed(monkeypatch, lines):
    it = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)


def test_errors_do_not_end_the_session(monkeypatch, capsys):
    _feed(monkeypatch, ["SET a 1;", "ADD a 2;", "FROB;", "LIST;", ".exit", "SET never 1;"])
    repl.main([])

    out = capsys.readouterr().out.splitlines()
    assert "OK (inserted)" in out
    assert "ERROR: The key already exists in the SeqMap: 'a'" in out
    assert any(line.startswith("ERROR: Unrecognized statement") for line in out)
    assert '    "key": "a",' in out
    assert out[-1] == "(1 rows)"


def test_statement_spans_lines_until_semicolon(monkeypatch, capsys):
    _feed(monkeypatch, ["SET b", "2", ";", "GET b; LEN;"])
    repl.main([])

    out = capsys.readouterr().out.splitlines()
    assert out[1:] == ["OK (inserted)", "2", "1"]


def test_eof_ends_session_and_empty_list_prints_zero_rows(monkeypatch, capsys):
    _feed(monkeypatch, ["KEYS;"])
    repl.main([])

    out = capsys.readouterr().out.splitlines()
    assert out[-1] == "(0 rows)"


def test_log_level_option(monkeypatch):
    seen = {}
    monkeypatch.setattr(repl.logging, "basicConfig", lambda **kw: seen.update(kw))
    _feed(monkeypatch, [])

    repl.main(["--log-level", "DEBUG"])
    assert seen["level"] == logging.DEBUG

    with pytest.raises(SystemExit):
        repl.main(["--log-level", "LOUD"])
