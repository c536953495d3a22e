import io

import pytest

from secret_token_uri.cli import EXIT_CONFIG, EXIT_INVALID, EXIT_OK, main


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    for name in (
        "API_KEY",
        "SECRET_TOKEN_CONFIG_FILE",
        "SECRET_TOKEN_SOURCE_ENV",
        "SECRET_TOKEN_LOG_LEVEL",
        "SECRET_TOKEN_REVEAL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_encode_command(capsys):
    assert main(["encode", "hello world"]) == EXIT_OK
    assert capsys.readouterr().out == "secret-token:hello%20world\n"


def test_encode_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("Łódź\n"))
    assert main(["encode", "-"]) == EXIT_OK
    assert capsys.readouterr().out == "secret-token:%C5%81%C3%B3d%C5%BA\n"


def test_decode_command(capsys):
    assert main(["decode", "secret-token:hello%20world"]) == EXIT_OK
    assert capsys.readouterr().out == "hello world\n"


def test_decode_hex(capsys):
    assert main(["decode", "--hex", "secret-token:%a1%00"]) == EXIT_OK
    assert capsys.readouterr().out == "a100\n"


def test_decode_invalid(capsys):
    assert main(["decode", "secret-token:abc%zz"]) == EXIT_INVALID
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "invalid_escape" in captured.err


def test_env_command_masks_uri(monkeypatch, capsys):
    monkeypatch.setenv("API_KEY", "secret-token:E92FB7EB%20foo")
    assert main(["env"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "The URI: secret-token:****" in out
    assert "E92FB7EB" not in out
    assert "The decoded token: ****" in out


def test_env_command_reveal(monkeypatch, capsys):
    monkeypatch.setenv("DEPLOY_KEY", "secret-token:abc")
    assert main(["env", "DEPLOY_KEY", "--reveal"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "The URI: secret-token:abc" in out
    assert "The decoded token: abc" in out


def test_env_command_uses_configured_variable(monkeypatch, capsys, tmp_path):
    config = tmp_path / "config.yaml"
    monkeypatch.setenv("DB_PASSWORD", "secret-token:s3cr3t")
    config.write_text("source_env: DB_PASSWORD\nreveal: true\n", encoding="utf-8")
    assert main(["--config", str(config), "env"]) == EXIT_OK
    assert "The decoded token: s3cr3t" in capsys.readouterr().out


def test_env_command_invalid_uri(monkeypatch, capsys):
    monkeypatch.setenv("API_KEY", "plain-password")
    assert main(["env"]) == EXIT_INVALID
    out = capsys.readouterr().out
    assert "The URI: ****" in out
    assert "The URI is invalid, cannot decode the token" in out


def test_env_command_unset_variable(capsys):
    assert main(["env"]) == EXIT_INVALID
    assert "Cannot read environment variable API_KEY" in capsys.readouterr().err


def test_bad_configuration(capsys, tmp_path):
    assert main(["--config", str(tmp_path / "missing.yaml"), "encode", "x"]) == EXIT_CONFIG
    assert "Invalid configuration" in capsys.readouterr().err


def test_unknown_log_level_falls_back(capsys):
    assert main(["--log-level", "LOUD", "encode", "x"]) == EXIT_OK
    captured = capsys.readouterr()
    assert captured.out == "secret-token:x\n"
    assert "Falling back to WARNING" in captured.err


def test_decode_rejects_surrounding_whitespace(capsys):
    assert main(["decode", "secret-token:abc "]) == EXIT_INVALID
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "invalid_character" in captured.err
