# tests/test_cli.py
"""Tests for the CLI: local corpus commands and lookup formatting."""

import json

import pytest

from wordbook.cli.commands.lookup import format_result
from wordbook.cli.main import main


def test_format_found():
    lines = format_result({
        "word": "hello",
        "status": "found",
        "saved": True,
        "entry": {
            "word": "hello",
            "pronunciation": "həˈləʊ",
            "senses": [{"partOfSpeech": "noun", "text": "a greeting"}],
            "examples": ["hello there"],
        },
    })
    assert "★" in lines[0]
    assert "/həˈləʊ/" in lines[0]
    assert "1." in lines[1] and "a greeting" in lines[1]
    assert "hello there" in lines[2]


def test_format_not_found():
    assert format_result({"word": "zzzqx", "status": "not_found"}) == ["✗ No definition for 'zzzqx'"]


def test_format_unavailable():
    lines = format_result({"word": "bird", "status": "unavailable", "reason": "bad shard"})
    assert "unavailable" in lines[0]


def test_corpus_split_and_check(tmp_path, capsys):
    source = tmp_path / "dict.json"
    source.write_text(json.dumps({"Hello": ["a greeting"], "cat": ["a feline"], "3D": ["solid"]}))
    out = tmp_path / "shards"

    main(["corpus", "split", str(source), str(out)])
    assert "Wrote 3 shards (3 words)" in capsys.readouterr().out
    assert sorted(p.name for p in out.iterdir()) == ["c.json", "h.json", "misc.json"]

    main(["corpus", "check", str(out)])
    output = capsys.readouterr().out
    assert "✓ h" in output
    assert "Total: 3 words" in output


def test_corpus_check_fails_on_bad_shard(tmp_path, capsys):
    (tmp_path / "b.json").write_text("{oops")
    with pytest.raises(SystemExit) as exc:
        main(["corpus", "check", str(tmp_path)])
    assert exc.value.code == 1
    assert "✗ b" in capsys.readouterr().out


def test_corpus_split_missing_source(tmp_path):
    with pytest.raises(SystemExit):
        main(["corpus", "split", str(tmp_path / "nope.json"), str(tmp_path / "out")])
