"""Tests for the peep CLI: script loading and route listing."""

import sys
import textwrap
from pathlib import Path

import pytest

from peep.app import App
from peep.cli import main
from peep.cli._resolve import load_script

SCRIPT = textwrap.dedent(
    """
    from peep import less

    less.activate()

    def login():
        return "login"

    get("/person/:name", lambda: "Hello " + named("name"))
    post("/login", "login")
    route("/any", login)

    application = run()
    """
)


@pytest.fixture
def script(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "greeter.py"
    path.write_text(SCRIPT)
    monkeypatch.delitem(sys.modules, "peep_script_greeter", raising=False)
    return path


class TestLoadScript:
    def test_returns_activated_app(self, script: Path) -> None:
        app = load_script(str(script))
        assert isinstance(app, App)
        assert len(app.routes) == 3
        assert app.frozen

    def test_plain_app_attribute(self, tmp_path: Path) -> None:
        path = tmp_path / "plain.py"
        path.write_text("from peep.app import App\napplication = App()\n")
        assert isinstance(load_script(str(path)), App)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="No such script"):
            load_script(str(tmp_path / "nope.py"))

    def test_no_app(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.py"
        path.write_text("x = 1\n")
        with pytest.raises(TypeError, match="did not call activate"):
            load_script(str(path))


class TestRoutesCommand:
    def test_lists_routes_in_order(self, script: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", str(script)])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["METHOD", "PATH", "DESTINATION"]
        assert lines[2].split()[:2] == ["GET", "/person/:name"]
        assert lines[3].split() == ["POST", "/login", "'login'"]
        assert lines[4].split() == ["ANY", "/any", "login"]

    def test_missing_script_exits(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", str(tmp_path / "nope.py")])
        assert exc_info.value.code == 1
        assert "Error: No such script" in capsys.readouterr().err

    def test_no_routes(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "bare.py"
        path.write_text("from peep import less\nless.activate()\n")
        main(["routes", str(path)])
        assert "No routes registered." in capsys.readouterr().out


class TestMain:
    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "usage: peep" in capsys.readouterr().out

    def test_run_serves_loaded_app(
        self, script: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        served: list[tuple] = []
        monkeypatch.setattr(App, "serve", lambda self, host=None, port=None: served.append((host, port)))
        main(["run", str(script), "--port", "9001"])
        assert served == [(None, 9001)]
