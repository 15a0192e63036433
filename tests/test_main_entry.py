import pytest

pytest.importorskip("PyQt5")

from letter_match.main import parse_args


def test_parse_args_defaults(monkeypatch):
    monkeypatch.delenv("LETTER_MATCH_LOG_LEVEL", raising=False)
    monkeypatch.delenv("LETTER_MATCH_LOG_PATH", raising=False)

    args = parse_args([])

    assert args.log_level == "INFO"
    assert args.log_file is None
    assert args.debug is False
    assert args.letters is None
    assert args.seed is None


def test_parse_args_overrides(monkeypatch):
    monkeypatch.setenv("LETTER_MATCH_LOG_LEVEL", "WARNING")

    args = parse_args(["--letters", "6", "--seed", "3", "--config", "x.ini", "--debug"])

    assert args.log_level == "WARNING"
    assert args.letters == 6
    assert args.seed == 3
    assert args.config == "x.ini"
    assert args.debug is True
