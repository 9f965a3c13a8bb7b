import sys
import textwrap
from pathlib import Path

import pytest

from graph_augment.config import Config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's GRAPH_AUGMENT_* settings out of the tests."""
    for name in ("GRAPH_AUGMENT_DISABLED", "GRAPH_AUGMENT_TIMEOUT_MS",
                 "GRAPH_AUGMENT_COMMAND", "GRAPH_AUGMENT_DEBUG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def indexed_project(tmp_path):
    """A project directory with an index marker at its root."""
    project = tmp_path / "project"
    (project / ".gitnexus").mkdir(parents=True)
    return project


@pytest.fixture
def plain_project(tmp_path):
    project = tmp_path / "plain"
    project.mkdir()
    return project


@pytest.fixture
def fake_collaborator(tmp_path):
    """
    Write a stand-in collaborator script and return a factory for its argv.

    The script answers `augment <token>` on stderr, printing junk on stdout
    the way the real engine does.
    """
    def make(stderr_text="", exit_code=0, sleep=0.0):
        script = tmp_path / f"collaborator_{abs(hash((stderr_text, exit_code, sleep)))}.py"
        script.write_text(textwrap.dedent(f"""\
            import sys, time
            if sys.argv[1:2] != ["augment"] or len(sys.argv) != 3:
                sys.exit(64)
            time.sleep({sleep!r})
            sys.stdout.write("native module banner\\n")
            sys.stderr.write({stderr_text!r})
            sys.exit({exit_code!r})
        """), encoding="utf-8")
        return [sys.executable, str(script)]

    return make


@pytest.fixture
def config():
    return Config()
