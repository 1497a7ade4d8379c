"""Tests for waypost.cli — entrypoint, router resolution, route listing."""

import textwrap
from pathlib import Path

import pytest

from waypost.cli import main
from waypost.cli._resolve import resolve_router
from waypost.router import Router

APP_SOURCE = textwrap.dedent(
    """
    from waypost import Router

    router = Router()

    @router.get("/users/{id}")
    def show_user(request, response, user_id):
        pass

    @router.post("/users")
    def create_user(request, response):
        pass

    def create_router():
        return router

    not_a_router = 42
    """
)


@pytest.fixture
def app_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    (tmp_path / "waypost_cli_app.py").write_text(APP_SOURCE)
    monkeypatch.syspath_prepend(str(tmp_path))
    return "waypost_cli_app"


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_routes_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "--help"])
        assert exc_info.value.code == 0


class TestCLIMissingArgs:
    def test_routes_missing_router(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes"])
        assert exc_info.value.code == 2


class TestCLINoCommand:
    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert "waypost" in captured.out


class TestResolveRouter:
    def test_default_attribute(self, app_module: str) -> None:
        assert isinstance(resolve_router(app_module), Router)

    def test_factory(self, app_module: str) -> None:
        assert isinstance(resolve_router(f"{app_module}:create_router"), Router)

    def test_wrong_type(self, app_module: str) -> None:
        with pytest.raises(TypeError, match="not a waypost.Router"):
            resolve_router(f"{app_module}:not_a_router")

    def test_missing_attribute(self, app_module: str) -> None:
        with pytest.raises(AttributeError):
            resolve_router(f"{app_module}:missing")

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_router("waypost_no_such_module:router")


class TestRoutesCommand:
    def test_lists_routes(self, app_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", app_module])

        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[0].split() == ["METHOD", "PATH", "HANDLER"]
        assert set(lines[1]) == {"-"}
        assert "/users/{id}" in out
        assert "show_user" in out
        assert "create_user" in out

    def test_method_filter(self, app_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", app_module, "--method", "post"])

        out = capsys.readouterr().out
        assert "create_user" in out
        assert "show_user" not in out

    def test_no_matching_routes(self, app_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", app_module, "--method", "DELETE"])

        assert "No routes registered." in capsys.readouterr().out

    def test_bad_import_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "waypost_no_such_module:router"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err
