"""Tests for CLI routing and the error boundary (cli/app.py).

``build_service`` is replaced with a service wired to in-memory fakes,
so no yarn process or file system access happens.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import patch

import pytest
from conftest import MemoryCacheStore, StaticManifest, fake_gateway

from yarn_ws.cli import app as app_module
from yarn_ws.cli import exit_codes
from yarn_ws.cli.app import cli, main
from yarn_ws.core.models import SELECTED_COMMANDS_KEY, SELECTED_WORKSPACE_KEY
from yarn_ws.core.workspace_service import WorkspaceService
from yarn_ws.exceptions import (
    NoWorkspaceSelectedError,
    NoWorkspacesFoundError,
    ToolNotInstalledError,
    UnknownWorkspaceError,
    YarnWsError,
)


@pytest.fixture(autouse=True)
def _quiet_logging() -> Any:
    with patch("yarn_ws.cli.app.configure_logging"):
        yield


@pytest.fixture
def use_service(monkeypatch: pytest.MonkeyPatch) -> Any:
    """Route ``build_service`` to the given service."""

    def _use(service: WorkspaceService) -> WorkspaceService:
        monkeypatch.setattr("yarn_ws.infra.build_service", lambda settings: service)
        return service

    return _use


# ---------------------------------------------------------------------------
# info
# ---------------------------------------------------------------------------

class TestInfo:
    def test_prints_tree(
        self, service: WorkspaceService, use_service: Any,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        use_service(service)
        assert main(["info"]) == exit_codes.SUCCESS
        assert "monorepo (root)" in capsys.readouterr().out

    def test_yarn_missing_raises(self, sample_workspaces: dict[str, Any], use_service: Any) -> None:
        use_service(
            WorkspaceService.from_components(
                fake_gateway(sample_workspaces, installed=False),
                MemoryCacheStore(),
                StaticManifest(),
            )
        )
        with pytest.raises(ToolNotInstalledError):
            main(["info"])


# ---------------------------------------------------------------------------
# list / commands / current
# ---------------------------------------------------------------------------

class TestList:
    def test_lists_workspaces(
        self, service: WorkspaceService, use_service: Any,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        use_service(service)
        assert main(["list"]) == exit_codes.SUCCESS
        out = capsys.readouterr().out
        for name in ("utils", "core", "web", "docs"):
            assert name in out


class TestCommands:
    def test_named_workspace(
        self, service: WorkspaceService, use_service: Any,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        use_service(service)
        assert main(["commands", "core"]) == exit_codes.SUCCESS
        assert capsys.readouterr().out.split() == ["build", "lint", "test"]

    def test_selected_workspace(
        self, service: WorkspaceService, use_service: Any,
        store: MemoryCacheStore, capsys: pytest.CaptureFixture[str],
    ) -> None:
        store.data[SELECTED_WORKSPACE_KEY] = "web"
        use_service(service)
        assert main(["commands"]) == exit_codes.SUCCESS
        assert capsys.readouterr().out.split() == ["dev", "build"]

    def test_nothing_selected(self, service: WorkspaceService, use_service: Any) -> None:
        use_service(service)
        with pytest.raises(NoWorkspaceSelectedError):
            main(["commands"])

    def test_unknown_workspace(self, service: WorkspaceService, use_service: Any) -> None:
        use_service(service)
        with pytest.raises(UnknownWorkspaceError):
            main(["commands", "nope"])


class TestCurrent:
    def test_nothing_selected(
        self, service: WorkspaceService, use_service: Any,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        use_service(service)
        assert main(["current"]) == exit_codes.SUCCESS
        assert "No workspace selected" in capsys.readouterr().err

    def test_shows_selection(
        self, service: WorkspaceService, use_service: Any,
        store: MemoryCacheStore, capsys: pytest.CaptureFixture[str],
    ) -> None:
        store.data.update({SELECTED_WORKSPACE_KEY: "web", SELECTED_COMMANDS_KEY: ["dev"]})
        use_service(service)
        assert main(["current"]) == exit_codes.SUCCESS
        assert capsys.readouterr().out.split() == ["web", "dev"]


# ---------------------------------------------------------------------------
# select
# ---------------------------------------------------------------------------

class TestSelect:
    def test_named(
        self, service: WorkspaceService, use_service: Any, store: MemoryCacheStore,
    ) -> None:
        use_service(service)
        assert main(["select", "core"]) == exit_codes.SUCCESS
        assert store.data[SELECTED_WORKSPACE_KEY] == "core"

    def test_interactive(
        self, service: WorkspaceService, use_service: Any, store: MemoryCacheStore,
    ) -> None:
        use_service(service)
        with patch(
            "yarn_ws.cli.workspace_prompt.prompt_workspace_selection", return_value="web",
        ) as mock_prompt:
            assert main(["select"]) == exit_codes.SUCCESS

        offered = [info.name for info in mock_prompt.call_args.args[0]]
        assert offered == ["utils", "core", "web", "docs"]
        assert store.data[SELECTED_WORKSPACE_KEY] == "web"

    def test_unknown(
        self, service: WorkspaceService, use_service: Any, store: MemoryCacheStore,
    ) -> None:
        use_service(service)
        with pytest.raises(UnknownWorkspaceError):
            main(["select", "unknown"])
        assert store.saves == []

    def test_no_workspaces(self, use_service: Any) -> None:
        use_service(
            WorkspaceService.from_components(
                fake_gateway({}), MemoryCacheStore(), StaticManifest(),
            )
        )
        with pytest.raises(NoWorkspacesFoundError):
            main(["select", "web"])


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------

class TestRun:
    def test_exit_code_of_script(
        self, service: WorkspaceService, use_service: Any, store: MemoryCacheStore,
    ) -> None:
        store.data.update({SELECTED_WORKSPACE_KEY: "web", SELECTED_COMMANDS_KEY: ["dev"]})
        use_service(service)
        service.gateway.run_command.return_value = 7

        assert main(["run", "dev", "--port", "3000"]) == 7
        service.gateway.run_command.assert_called_once_with("web", "dev", ["--port", "3000"])


# ---------------------------------------------------------------------------
# doctor routing
# ---------------------------------------------------------------------------

@patch("yarn_ws.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
def test_doctor_routed(mock_doctor: Any) -> None:
    assert main(["doctor"]) == exit_codes.SUCCESS
    mock_doctor.assert_called_once()


# ---------------------------------------------------------------------------
# Error boundary
# ---------------------------------------------------------------------------

class TestErrorBoundary:
    def test_known_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        def boom() -> int:
            raise YarnWsError("Cannot find yarn workspaces!", hint="Run from the root.")

        monkeypatch.setattr(app_module, "main", boom)
        with pytest.raises(SystemExit) as exc_info:
            cli()

        assert exc_info.value.code == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert "Cannot find yarn workspaces!" in err
        assert "Run from the root." in err

    def test_keyboard_interrupt(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def interrupt() -> int:
            raise KeyboardInterrupt

        monkeypatch.setattr(app_module, "main", interrupt)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.KEYBOARD_INTERRUPT

    def test_unexpected_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        def crash() -> int:
            raise RuntimeError("kaboom")

        monkeypatch.setattr(app_module, "main", crash)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.UNEXPECTED_ERROR
        assert "RuntimeError: kaboom" in capsys.readouterr().err

    def test_success_exit_code(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(app_module, "main", lambda: exit_codes.SUCCESS)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Names that look like Rich markup
# ---------------------------------------------------------------------------

class TestMarkupInNames:
    @pytest.fixture
    def bracketed(self, use_service: Any, store: MemoryCacheStore) -> WorkspaceService:
        return use_service(
            WorkspaceService.from_components(
                fake_gateway(
                    {"lib[x]": {}, "app": {"workspaceDependencies": ["lib[x]"]}},
                    {"lib[x]": ["build[dev]", "test[/x]"]},
                ),
                store,
                StaticManifest(),
            )
        )

    def test_commands_printed_verbatim(
        self, bracketed: WorkspaceService, capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert main(["commands", "lib[x]"]) == exit_codes.SUCCESS
        assert capsys.readouterr().out.split() == ["build[dev]", "test[/x]"]

    def test_select_and_current(
        self, bracketed: WorkspaceService, capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert main(["select", "lib[x]"]) == exit_codes.SUCCESS
        captured = capsys.readouterr()
        assert "lib[x]" in captured.err
        assert captured.out.split() == ["build[dev]", "test[/x]"]

        assert main(["current"]) == exit_codes.SUCCESS
        assert capsys.readouterr().out.split() == ["lib[x]", "build[dev]", "test[/x]"]

    def test_list_and_info(
        self, bracketed: WorkspaceService, capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert main(["list"]) == exit_codes.SUCCESS
        assert "lib[x]" in capsys.readouterr().out

        assert main(["info"]) == exit_codes.SUCCESS
        assert "lib[x]" in capsys.readouterr().out

    def test_error_message_with_closing_tag(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        def boom() -> int:
            raise YarnWsError("Cannot find workspace [/x]!", hint="Known: [bold]a")

        monkeypatch.setattr(app_module, "main", boom)
        with pytest.raises(SystemExit) as exc_info:
            cli()

        assert exc_info.value.code == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert "Cannot find workspace [/x]!" in err
        assert "Known: [bold]a" in err
