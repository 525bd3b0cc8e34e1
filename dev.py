#!/usr/bin/env python3
"""
Dev mode for the Discord bot

Runs `python -m gd_level_finder.bot` and restarts it whenever package code
or the local .env changes.
"""
import subprocess
import sys
import threading
import time
from pathlib import Path
from watchdog.observers import Observer
from watchdog.events import FileSystemEvent, FileSystemEventHandler

ROOT = Path(__file__).parent
PACKAGE_DIR = ROOT / "gd_level_finder"
WATCHED_SUFFIXES = (".py", ".env")

# Editors emit several events per save
RESTART_DEBOUNCE_SECONDS = 1.0
STOP_TIMEOUT_SECONDS = 5.0


class ReloadingProcess(FileSystemEventHandler):
    """Child process that is replaced when a watched file changes."""

    def __init__(self, module: str):
        self.command = [sys.executable, "-m", module]
        self.process = None
        self.last_restart = 0.0
        self.exit_reported = False
        self.lock = threading.Lock()
        self.pending = None  # deferred restart timer

    def start(self):
        print(f"$ {' '.join(self.command)}")
        self.process = subprocess.Popen(
            self.command,
            cwd=ROOT,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            bufsize=1
        )
        self.last_restart = time.monotonic()
        self.exit_reported = False
        print(f"Started (PID: {self.process.pid}), watching {PACKAGE_DIR.name}/ and .env")

    def stop(self):
        """Terminate the child, killing it if it ignores SIGTERM."""
        if self.process is None or self.process.stdout.closed:
            return
        if self.process.poll() is None:
            self.process.terminate()
        try:
            self.process.wait(timeout=STOP_TIMEOUT_SECONDS)
        except subprocess.TimeoutExpired:
            self.process.kill()
            self.process.wait()
        finally:
            self.process.stdout.close()

    def on_any_event(self, event: FileSystemEvent):
        if event.is_directory or event.event_type not in ("modified", "created", "moved"):
            return
        path = getattr(event, "dest_path", "") or event.src_path
        if not str(path).endswith(WATCHED_SUFFIXES):
            return
        print(f"\n{Path(path).name} changed")
        with self.lock:
            wait = RESTART_DEBOUNCE_SECONDS - (time.monotonic() - self.last_restart)
            if wait <= 0:
                self.restart()
            elif self.pending is None:
                # Too soon after the last restart: reload once the window closes
                self.pending = threading.Timer(wait, self.restart_pending)
                self.pending.daemon = True
                self.pending.start()

    def restart(self):
        print("Restarting...")
        self.stop()
        self.start()

    def restart_pending(self):
        with self.lock:
            self.pending = None
            self.restart()

    def pump_output(self):
        """Forward one line of child output; report an unexpected exit."""
        process = self.process
        try:
            line = process.stdout.readline()
        except ValueError:
            # Pipe closed by a restart
            return
        if line:
            print(line, end='')
        elif process.poll() is not None:
            if process is self.process and not self.exit_reported:
                self.exit_reported = True
                print(f"Process exited with code {process.returncode}; waiting for changes...")
            time.sleep(0.5)


def main():
    print("gd-level-finder dev mode (Ctrl+C to stop)\n")

    runner = ReloadingProcess("gd_level_finder.bot")
    runner.start()

    observer = Observer()
    observer.schedule(runner, str(PACKAGE_DIR), recursive=True)
    observer.schedule(runner, str(ROOT), recursive=False)
    observer.start()

    try:
        while True:
            runner.pump_output()
    except KeyboardInterrupt:
        print("\nStopping...")
    finally:
        observer.stop()
        runner.stop()

    observer.join()


if __name__ == "__main__":
    main()
