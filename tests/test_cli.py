"""Tests for the gower CLI: app resolution, ``run`` and ``routes``."""

import itertools
from unittest.mock import patch

import pytest

from gower.app import App
from gower.cli import main
from gower.cli._resolve import resolve_app
from gower.errors import ConfigurationError

_counter = itertools.count()

APP_SOURCE = """
from gower import App

app = App()

@app.get(r"/")
def index(ctx):
    ctx.write("home")

@app.post(r"/items/(\\d+)")
def update_item(ctx):
    ctx.write("ok")

def make_app():
    return App()

not_an_app = 42
"""


@pytest.fixture
def app_module(tmp_path, monkeypatch) -> str:
    """Write an importable app module and return its (unique) name."""
    name = f"cli_app_{next(_counter)}"
    (tmp_path / f"{name}.py").write_text(APP_SOURCE)
    monkeypatch.syspath_prepend(str(tmp_path))
    return name


class TestResolveApp:
    def test_module_and_attribute(self, app_module) -> None:
        app = resolve_app(f"{app_module}:app")
        assert isinstance(app, App)

    def test_default_attribute(self, app_module) -> None:
        assert isinstance(resolve_app(app_module), App)

    def test_factory(self, app_module) -> None:
        assert isinstance(resolve_app(f"{app_module}:make_app"), App)

    def test_missing_module(self) -> None:
        with pytest.raises(ConfigurationError, match="Cannot import"):
            resolve_app("no_such_module_anywhere:app")

    def test_missing_attribute(self, app_module) -> None:
        with pytest.raises(ConfigurationError, match="no attribute"):
            resolve_app(f"{app_module}:missing")

    def test_not_an_app(self, app_module) -> None:
        with pytest.raises(ConfigurationError, match="not a gower.App"):
            resolve_app(f"{app_module}:not_an_app")


class TestRunCommand:
    def test_flags_applied(self, app_module) -> None:
        with patch("gower.server.runner.run_server") as run_server:
            main(["run", f"{app_module}:app", "--port", "9001", "--debug", "--no-color"])

        run_server.assert_called_once()
        app = run_server.call_args.args[0]
        assert app.config.port == 9001
        assert app.config.debug is True
        assert app.config.colored_log is False
        assert run_server.call_args.kwargs["app_path"] == f"{app_module}:app"

    def test_unset_flags_keep_config(self, app_module) -> None:
        with patch("gower.server.runner.run_server") as run_server:
            main(["run", f"{app_module}:app"])

        app = run_server.call_args.args[0]
        assert app.config.port == 8000
        assert app.config.template_dir == "www/templates"

    def test_bad_import_exits(self, capsys) -> None:
        with patch("gower.server.runner.run_server") as run_server:
            with pytest.raises(SystemExit) as exc_info:
                main(["run", "no_such_module_anywhere:app"])

        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err
        run_server.assert_not_called()

    def test_no_command_prints_help(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 0
        assert "usage" in capsys.readouterr().out


class TestRoutesCommand:
    def test_lists_in_match_order(self, app_module, capsys) -> None:
        main(["routes", f"{app_module}:app"])

        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 2
        assert lines[0].startswith("GET ")
        assert "/" in lines[0]
        assert lines[0].endswith("-> index")
        assert lines[1].startswith("POST")
        assert r"/items/(\d+)" in lines[1]

    def test_no_routes(self, app_module, capsys) -> None:
        main(["routes", f"{app_module}:make_app"])

        assert capsys.readouterr().out.strip() == "No routes registered."
