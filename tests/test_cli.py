"""Tests for the command-line front end."""

import threading

import pytest

from src import cli
from src.tailer import Watcher


class StopAfter:
    """Shutdown stand-in that asks the loop to exit after n checks."""

    def __init__(self, checks: int):
        self.checks = checks

    @property
    def should_exit(self) -> bool:
        self.checks -= 1
        return self.checks < 0


class TestResolveConfig:
    """Tests for argument and environment merging."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        monkeypatch.delenv("TAILER_POLL_INTERVAL", raising=False)
        monkeypatch.delenv("TAILER_CHUNK_SIZE", raising=False)

    def test_defaults(self):
        args = cli.build_parser().parse_args(["app.log"])
        config, interval = cli.resolve_config(args)
        assert interval == cli.DEFAULT_INTERVAL
        assert config.poll_interval == cli.DEFAULT_INTERVAL

    def test_interval_argument(self):
        args = cli.build_parser().parse_args(["app.log", "--interval", "5"])
        config, interval = cli.resolve_config(args)
        assert interval == 5.0
        assert config.poll_interval == 5.0

    def test_interval_from_environment(self, monkeypatch):
        monkeypatch.setenv("TAILER_POLL_INTERVAL", "3")
        args = cli.build_parser().parse_args(["app.log"])
        config, interval = cli.resolve_config(args)
        assert interval == 3.0

    def test_pull_mode(self):
        args = cli.build_parser().parse_args(["app.log", "--pull", "--interval", "2"])
        config, interval = cli.resolve_config(args)
        assert config.poll_interval is None
        assert interval == 2.0

    def test_negative_interval(self):
        args = cli.build_parser().parse_args(["app.log", "--interval", "-1"])
        with pytest.raises(ValueError):
            cli.resolve_config(args)

    def test_negative_interval_pull_mode(self):
        args = cli.build_parser().parse_args(["app.log", "--pull", "--interval", "-1"])
        with pytest.raises(ValueError):
            cli.resolve_config(args)

    @pytest.mark.parametrize("extra", [[], ["--pull"]])
    def test_zero_interval(self, extra):
        args = cli.build_parser().parse_args(["app.log", "--interval", "0", *extra])
        with pytest.raises(ValueError):
            cli.resolve_config(args)

    def test_main_rejects_bad_pull_interval(self, log_file):
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(log_file), "--pull", "--interval", "-1"])
        assert exc_info.value.code == 2


class TestCommands:
    """Tests for the tail loops."""

    def test_missing_file(self, tmp_path):
        assert cli.main([str(tmp_path / "missing.log")]) == 1

    def test_pull_writes_new_bytes(self, log_file, capsysbinary):
        log_file.write_bytes(b"hello\n")
        watcher = Watcher(log_file)

        code = cli.cmd_pull(watcher, 0, StopAfter(2))

        assert code == 0
        assert capsysbinary.readouterr().out == b"hello\n"

    def test_pull_lost_file(self, log_file):
        watcher = Watcher(log_file)
        log_file.unlink()
        assert cli.cmd_pull(watcher, 0, StopAfter(5)) == 1

    def test_push_until_lost(self, log_file, capsysbinary):
        log_file.write_bytes(b"hello\n")
        remover = threading.Timer(0.3, log_file.unlink)

        with Watcher(log_file, poll_interval=0.05) as watcher:
            remover.start()
            code = cli.cmd_push(watcher, StopAfter(1000))

        remover.join()
        assert code == 1
        assert capsysbinary.readouterr().out == b"hello\n"

    def test_push_shutdown(self, log_file):
        with Watcher(log_file, poll_interval=0.05) as watcher:
            assert cli.cmd_push(watcher, StopAfter(1)) == 0
