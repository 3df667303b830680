"""Tests for trailhead.cli — entrypoint, route listing, and matching."""

import sys
import types

import pytest

from trailhead.cli import main
from trailhead.cli._resolve import resolve_routes
from trailhead.routing.router import Router


def home() -> str:
    return "home"


def user(id: str) -> str:
    return id


def new_user() -> str:
    return "new"


@pytest.fixture
def _fake_routes_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module exposing route tables on sys.modules."""
    mod = types.ModuleType("_fake_trailhead_routes")
    mod.routes = {"/": home, "/users/:id": user, "/users/new": new_user}  # type: ignore[attr-defined]
    mod.make_routes = lambda: {"/x": home}  # type: ignore[attr-defined]
    mod.not_routes = "just a string"  # type: ignore[attr-defined]
    mod.bad = {"/a/*/b": home}  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_trailhead_routes", mod)


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    @pytest.mark.parametrize("command", ["routes", "match"])
    def test_subcommand_help_exits_zero(self, command: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([command, "--help"])
        assert exc_info.value.code == 0

    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "trailhead" in capsys.readouterr().out

    def test_match_missing_path(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["match", "_fake_trailhead_routes"])
        assert exc_info.value.code == 2


@pytest.mark.usefixtures("_fake_routes_module")
class TestResolveRoutes:
    def test_default_attribute(self) -> None:
        assert set(resolve_routes("_fake_trailhead_routes")) == {"/", "/users/:id", "/users/new"}

    def test_factory(self) -> None:
        assert list(resolve_routes("_fake_trailhead_routes:make_routes")) == ["/x"]

    def test_router_instance(self, monkeypatch: pytest.MonkeyPatch) -> None:
        module = sys.modules["_fake_trailhead_routes"]
        monkeypatch.setattr(module, "app", Router({"/r": home}), raising=False)
        assert list(resolve_routes("_fake_trailhead_routes:app")) == ["/r"]

    def test_wrong_type(self) -> None:
        with pytest.raises(TypeError, match="not a route mapping"):
            resolve_routes("_fake_trailhead_routes:not_routes")

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_routes("nonexistent_module_xyz:routes")


@pytest.mark.usefixtures("_fake_routes_module")
class TestCommands:
    def test_routes_ranked(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_trailhead_routes"])
        lines = capsys.readouterr().out.splitlines()

        assert lines[0].split() == ["PATTERN", "SCORE", "HANDLER"]
        patterns = [line.split()[0] for line in lines[2:]]
        assert patterns == ["/users/new", "/users/:id", "/"]

    def test_routes_with_basepath(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_trailhead_routes:make_routes", "--basepath", "/app"])
        assert "/app/x" in capsys.readouterr().out

    def test_match(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["match", "_fake_trailhead_routes", "/users/42"])
        out = capsys.readouterr().out

        assert "pattern: /users/:id" in out
        assert "handler: user" in out
        assert "param:   id = '42'" in out

    def test_match_prefers_static(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["match", "_fake_trailhead_routes", "/users/new"])
        assert "pattern: /users/new" in capsys.readouterr().out

    def test_no_match_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["match", "_fake_trailhead_routes", "/nowhere/at/all"])
        assert exc_info.value.code == 1
        assert "No route matches" in capsys.readouterr().err

    def test_invalid_pattern_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "_fake_trailhead_routes:bad"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err
