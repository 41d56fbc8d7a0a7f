"""
Unit tests for the subprocess wrapper.
"""

import logging
import sys

import pytest

from twogc_installer.errors import CommandError
from twogc_installer.lib.command import REDACTED, redact_argv, run_cmd


def _py(code):
    return [sys.executable, "-c", code]


class TestRunCmd:
    def test_captures_output(self):
        r = run_cmd(_py("print('hello')"))

        assert r.returncode == 0
        assert r.stdout.strip() == "hello"

    def test_nonzero_exit_raises_when_checked(self):
        with pytest.raises(CommandError) as exc:
            run_cmd(_py("import sys; sys.exit(3)"))
        assert exc.value.returncode == 3

    def test_nonzero_exit_returned_when_unchecked(self):
        r = run_cmd(_py("import sys; sys.exit(3)"), check=False)
        assert r.returncode == 3

    def test_missing_executable_raises(self, tmp_path):
        with pytest.raises(CommandError):
            run_cmd([str(tmp_path / "does-not-exist")], check=False)

    def test_timeout_raises(self):
        with pytest.raises(CommandError, match="timed out"):
            run_cmd(_py("import time; time.sleep(5)"), check=False, timeout=0.2)

    def test_dry_run_does_not_execute(self, tmp_path):
        marker = tmp_path / "ran"
        r = run_cmd(_py(f"open({str(marker)!r}, 'w').close()"), dry_run=True)

        assert r.returncode == 0
        assert not marker.exists()

    def test_child_inherits_environment(self, monkeypatch):
        monkeypatch.setenv("TWOGC_TEST_MARKER", "inherited")
        r = run_cmd(_py("import os; print(os.environ['TWOGC_TEST_MARKER'])"))

        assert r.stdout.strip() == "inherited"

    def test_does_not_accept_env_or_stdin(self):
        with pytest.raises(TypeError):
            run_cmd(_py("pass"), env={"A": "1"})
        with pytest.raises(TypeError):
            run_cmd(_py("pass"), input_text="x")

    def test_secrets_are_not_logged(self, caplog):
        caplog.set_level(logging.INFO, logger="twogc_installer.lib.command")

        run_cmd(["cloudflared.exe", "service", "install", "s3cret"], secrets=["s3cret"], dry_run=True)

        assert "s3cret" not in caplog.text
        assert REDACTED in caplog.text

    def test_secrets_are_not_in_error_messages(self):
        with pytest.raises(CommandError) as exc:
            run_cmd(_py("import sys; sys.exit(1)") + ["s3cret"], secrets=["s3cret"])
        assert "s3cret" not in str(exc.value)


def test_redact_argv_ignores_empty_secrets():
    assert redact_argv(["a", "", "b"], secrets=[""]) == ["a", "", "b"]
    assert redact_argv(["a", "tok"], secrets=["tok"]) == ["a", REDACTED]
