"""
Shared test fixtures and configuration.
"""

import json
import logging
import signal
from pathlib import Path

import pytest

from rollbar_wizard.core import context
from rollbar_wizard.core.models.config import WizardConfig
from rollbar_wizard.ui.cli import signals

SERVER_TOKEN = "a1" * 16
CLIENT_TOKEN = "b2" * 16


@pytest.fixture(autouse=True)
def _restore_process_state(monkeypatch):
    """Undo signal handlers, project root and logging changes made by a test."""
    saved_int = signal.getsignal(signal.SIGINT)
    saved_term = signal.getsignal(signal.SIGTERM)
    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level
    monkeypatch.setattr(context, "_project_root", None)

    yield

    signal.signal(signal.SIGINT, saved_int)
    signal.signal(signal.SIGTERM, saved_term)
    signals._installed = False
    root_logger.handlers[:] = saved_handlers
    root_logger.setLevel(saved_level)


@pytest.fixture
def make_project(tmp_path: Path):
    """Factory building a Next.js project skeleton under ``tmp_path``.

    Args (all keyword):
        dirs:       directories to create (``"app"``, ``"src/pages"``...)
        files:      {relative path: content}
        typescript: write an empty-ish tsconfig.json
        esm:        set ``"type": "module"`` in package.json
        package:    replace the whole package.json dict
        extra_deps: merged into ``dependencies``
    """

    def _make(
        *,
        dirs=(),
        files=None,
        typescript=False,
        esm=False,
        package=None,
        extra_deps=None,
    ) -> Path:
        if package is None:
            package = {
                "name": "demo-app",
                "version": "0.1.0",
                "private": True,
                "scripts": {"dev": "next dev", "build": "next build"},
                "dependencies": {"next": "^14.2.3", "react": "^18.3.1", **(extra_deps or {})},
            }
            if esm:
                package["type"] = "module"
        (tmp_path / "package.json").write_text(json.dumps(package, indent=2) + "\n")
        if typescript:
            (tmp_path / "tsconfig.json").write_text(
                json.dumps({"compilerOptions": {"strict": True}, "exclude": ["node_modules"]}, indent=2)
                + "\n"
            )
        for d in dirs:
            (tmp_path / d).mkdir(parents=True, exist_ok=True)
        for rel, content in (files or {}).items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return tmp_path

    return _make


@pytest.fixture
def wizard_config() -> WizardConfig:
    return WizardConfig(
        server_access_token=SERVER_TOKEN,
        client_access_token=CLIENT_TOKEN,
        environment="production",
        enable_deployment=True,
        code_version="1.4.2",
        enable_sourcemaps=True,
        enable_replay=True,
        router_type="app",
        create_example_page=False,
    )


class FakeRunner:
    """Records package-manager invocations instead of running them."""

    def __init__(self, returncode: int = 0, missing: bool = False):
        self.calls: list[list[str]] = []
        self.returncode = returncode
        self.missing = missing

    def __call__(self, args: list[str], cwd: Path) -> int:
        self.calls.append(list(args))
        if self.missing:
            raise FileNotFoundError(args[0])
        return self.returncode


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def runner_factory():
    return FakeRunner


def _snapshot(root: Path) -> dict[str, bytes]:
    return {
        str(p.relative_to(root)): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def snapshot():
    """Every file under a directory, keyed by relative path."""
    return _snapshot
