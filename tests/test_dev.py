"""
Tests for the dev mode reloader

The child process is replaced by a fake; no bot is started.
"""
import io
import time
from types import SimpleNamespace

import dev


class FakeProcess:
    def __init__(self):
        self.stdout = io.StringIO()
        self.terminated = False
        self.returncode = None

    def poll(self):
        return self.returncode

    def terminate(self):
        self.terminated = True
        self.returncode = -15

    def wait(self, timeout=None):
        return self.returncode


class RecordingRunner(dev.ReloadingProcess):
    def __init__(self):
        super().__init__("gd_level_finder.bot")
        self.starts = 0

    def start(self):
        self.starts += 1
        self.process = FakeProcess()
        self.last_restart = time.monotonic()


def _save(path: str = "gd_level_finder/core/filters.py"):
    return SimpleNamespace(is_directory=False, event_type="modified", src_path=path)


class TestReloadingProcess:
    """Test restart scheduling and child cleanup."""

    def test_save_outside_window_restarts_now(self):
        runner = RecordingRunner()
        runner.start()
        runner.last_restart -= dev.RESTART_DEBOUNCE_SECONDS + 1

        runner.on_any_event(_save())
        assert runner.starts == 2
        assert runner.pending is None

    def test_save_inside_window_restarts_later(self, monkeypatch):
        """Test a quick second save is reloaded after the window, not dropped."""
        monkeypatch.setattr(dev, "RESTART_DEBOUNCE_SECONDS", 0.05)
        runner = RecordingRunner()
        runner.start()

        runner.on_any_event(_save())
        runner.on_any_event(_save())
        timer = runner.pending
        assert runner.starts == 1
        assert timer is not None

        timer.join(timeout=2)
        assert runner.starts == 2
        assert runner.pending is None

    def test_unwatched_files_ignored(self):
        runner = RecordingRunner()
        runner.start()
        runner.last_restart -= dev.RESTART_DEBOUNCE_SECONDS + 1

        runner.on_any_event(_save("notes.txt"))
        runner.on_any_event(SimpleNamespace(is_directory=True, event_type="modified", src_path="gd_level_finder"))
        assert runner.starts == 1

    def test_stop_closes_pipe(self):
        runner = RecordingRunner()
        runner.start()
        process = runner.process

        runner.stop()
        assert process.terminated
        assert process.stdout.closed

        runner.stop()

    def test_pump_after_restart_is_quiet(self, capsys):
        runner = RecordingRunner()
        runner.start()
        runner.stop()

        runner.pump_output()
        assert capsys.readouterr().out == ""
