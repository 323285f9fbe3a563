"""Unit tests for the command-line entry point."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from ai_gateway_launcher import cli
from ai_gateway_launcher.runtime import Architecture, OSIdentifier, RuntimeEnvironment


@pytest.fixture
def run_main(launcher_config):
    """Run cli.main() against a captured environment and return the exit code.

    ``launch`` is replaced by a mock that exits 0 so nothing is spawned.
    """

    def _run(environment: RuntimeEnvironment, argv=None, launch=None):
        launch_mock = launch or MagicMock(side_effect=SystemExit(0))
        with patch.object(cli, "load_config", return_value=launcher_config), patch.object(
            RuntimeEnvironment, "capture", return_value=environment
        ), patch.object(cli, "launch", launch_mock):
            with pytest.raises(SystemExit) as excinfo:
                cli.main(argv)
        return excinfo.value.code, launch_mock

    return _run


class TestScenarios:
    """End-to-end decisions from host facts to exit status."""

    def test_macos_arm64_launches_with_args(self, run_main, environment_factory, launcher_config):
        env = environment_factory(os_id=OSIdentifier.MACOS, arch=Architecture.ARM64)

        code, launch = run_main(env, ["--help"])

        assert code == 0
        launch.assert_called_once_with(
            "ai-gateway-macos",
            ["--help"],
            base_dir=launcher_config.delegate_dir,
            banner="🚀 Starting AI Gateway...",
        )

    def test_child_status_propagates(self, run_main, linux_x64):
        code, _ = run_main(linux_x64, [], launch=MagicMock(side_effect=SystemExit(17)))

        assert code == 17

    def test_old_runtime_exits_1_before_filesystem(self, run_main, environment_factory, capsys):
        env = environment_factory(version="3.8.10", os_id=OSIdentifier.OTHER)

        with patch("ai_gateway_launcher.runtime.types.ExecutableLocation.probe") as probe:
            code, launch = run_main(env, ["--help"])

        assert code == 1
        launch.assert_not_called()
        probe.assert_not_called()
        err = capsys.readouterr().err
        assert "❌ Error: Python 3.10.0 or higher is required." in err
        assert "Current version: 3.8.10" in err

    def test_linux_arm_prints_guidance_and_exits_0(self, run_main, environment_factory, capsys):
        env = environment_factory(
            os_id=OSIdentifier.LINUX,
            arch=Architecture.from_machine("arm"),
            raw_os="linux",
            raw_arch="arm",
        )

        code, launch = run_main(env, ["--help"])

        assert code == 0
        launch.assert_not_called()
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "⚠️  No prebuilt binary available: Linux architecture not prebuilt" in captured.err
        assert "Supported Linux architectures: x64" in captured.err
        assert "❌" not in captured.err

    def test_unknown_os_prints_guidance_and_exits_0(self, run_main, environment_factory, capsys):
        env = environment_factory(os_id=OSIdentifier.OTHER, raw_os="win32")

        code, launch = run_main(env)

        assert code == 0
        launch.assert_not_called()
        assert "platform not supported" in capsys.readouterr().err

    def test_missing_binary_end_to_end(self, launcher_config, linux_x64, capsys):
        """Resolved but absent: exit 1 naming the exact expected path."""
        with patch.object(cli, "load_config", return_value=launcher_config), patch.object(
            RuntimeEnvironment, "capture", return_value=linux_x64
        ):
            with pytest.raises(SystemExit) as excinfo:
                cli.main([])

        assert excinfo.value.code == 1
        expected: Path = launcher_config.delegate_dir / "ai-gateway-linux"
        assert f"Binary not found at {expected}" in capsys.readouterr().err


class TestArguments:
    """The launcher has no flags of its own."""

    def test_defaults_to_sys_argv(self, run_main, linux_x64):
        with patch.object(cli.sys, "argv", ["ai-gateway", "--version", "-v"]):
            _, launch = run_main(linux_x64)

        assert launch.call_args.args[1] == ["--version", "-v"]

    def test_launcher_looking_flags_are_forwarded(self, run_main, linux_x64):
        _, launch = run_main(linux_x64, ["--help", "--log-level", "debug"])

        assert launch.call_args.args[1] == ["--help", "--log-level", "debug"]

    def test_banner_disabled_by_config(self, run_main, linux_x64, launcher_config):
        launcher_config.launcher.show_banner = False

        _, launch = run_main(linux_x64, [])

        assert launch.call_args.kwargs["banner"] is None
