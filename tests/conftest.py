"""Pytest configuration for sbatchomatic tests.

No test ever reaches a real scheduler: the ``fake_sbatch`` fixture replaces
:class:`subprocess.Popen` with a recorder that keeps the command line and
the script written to stdin.
"""

import io
import subprocess

import pytest

from sbatchomatic import load_config


class _Pipe(io.StringIO):
    """StringIO that remembers its content after ``close()``."""

    captured = ""

    def close(self):
        self.captured = self.getvalue()
        super().close()


class SbatchRecorder:
    """Collects every fake ``sbatch`` invocation."""

    def __init__(self):
        self.calls = []
        self.returncode = 0

    @property
    def last(self):
        return self.calls[-1]

    @property
    def script(self):
        pipe = self.last["stdin"]
        return None if pipe is None else pipe.captured


@pytest.fixture
def cfg(monkeypatch):
    """Packaged default configuration, unaffected by the caller's env."""
    monkeypatch.delenv("SBATCHOMATIC_CONFIG", raising=False)
    return load_config()


@pytest.fixture
def fake_sbatch(monkeypatch):
    """Replace :class:`subprocess.Popen` and return the recorder."""
    recorder = SbatchRecorder()

    class FakePopen:
        def __init__(self, cmd, stdin=None, **kwargs):
            self.cmd = cmd
            self.stdin = _Pipe() if stdin == subprocess.PIPE else None
            recorder.calls.append({"cmd": cmd, "stdin": self.stdin, "kwargs": kwargs})

        def wait(self):
            return recorder.returncode

    monkeypatch.setattr(subprocess, "Popen", FakePopen)
    monkeypatch.delenv("SBATCHOMATIC_CONFIG", raising=False)
    return recorder
