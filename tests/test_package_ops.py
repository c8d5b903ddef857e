"""
Tests for package manager commands and subprocess outcomes.
"""

from pathlib import Path

import pytest

from rollbar_wizard.core.services.package_ops import (
    install_command,
    install_packages,
    package_name,
    sync_command,
    sync_lockfile,
)


class TestCommands:
    @pytest.mark.parametrize(
        "manager, dev, expected",
        [
            ("npm", False, ["npm", "install", "rollbar"]),
            ("npm", True, ["npm", "install", "--save-dev", "rollbar"]),
            ("yarn", False, ["yarn", "add", "rollbar"]),
            ("yarn", True, ["yarn", "add", "--dev", "rollbar"]),
            ("pnpm", False, ["pnpm", "add", "rollbar"]),
        ],
    )
    def test_install_command(self, manager, dev, expected):
        assert install_command(["rollbar"], manager, dev=dev) == expected

    def test_sync_command(self):
        assert sync_command("npm") == ["npm", "install"]
        assert sync_command("yarn") == ["yarn", "install", "--frozen-lockfile=false"]

    @pytest.mark.parametrize(
        "spec, name",
        [
            ("rollbar@^3.0.0-rc.1", "rollbar"),
            ("@rollbar/react", "@rollbar/react"),
            ("@types/glob@^8.0.0", "@types/glob"),
            ("glob", "glob"),
        ],
    )
    def test_package_name(self, spec, name):
        assert package_name(spec) == name


class TestOutcomes:
    def test_success(self, tmp_path: Path, fake_runner):
        outcome = install_packages(tmp_path, ["rollbar"], "npm", runner=fake_runner)
        assert outcome.status == "patched"
        assert outcome.path == "package.json"
        assert fake_runner.calls == [["npm", "install", "rollbar"]]

    def test_nothing_to_install(self, tmp_path: Path, fake_runner):
        outcome = install_packages(tmp_path, [], "npm", runner=fake_runner)
        assert outcome.status == "skipped"
        assert fake_runner.calls == []

    def test_non_zero_exit(self, tmp_path: Path, runner_factory):
        outcome = sync_lockfile(tmp_path, "pnpm", runner=runner_factory(returncode=2), phase="sourcemaps")
        assert outcome.status == "warned"
        assert outcome.phase == "sourcemaps"
        assert "exited with code 2" in outcome.message
        assert outcome.snippet == "pnpm install --no-frozen-lockfile"

    def test_missing_executable(self, tmp_path: Path, runner_factory):
        outcome = install_packages(tmp_path, ["rollbar"], "yarn", runner=runner_factory(missing=True))
        assert outcome.status == "warned"
        assert "yarn is not installed" in outcome.message

    def test_os_error(self, tmp_path: Path):
        def runner(args, cwd):
            raise PermissionError("denied")

        outcome = install_packages(tmp_path, ["rollbar"], "npm", runner=runner)
        assert outcome.status == "warned"
        assert "denied" in outcome.message
