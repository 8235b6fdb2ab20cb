"""Tests for the simpleweb CLI."""

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from simpleweb import __version__
from simpleweb.cli import app
from tests.helpers.app import registry


runner = CliRunner()


@pytest.mark.unit
class TestCLI:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_routes_lists_registrations(self) -> None:
        result = runner.invoke(
            app, ["routes", "tests.helpers.app:registry"], env={"COLUMNS": "200"}
        )

        assert result.exit_code == 0, result.output
        for expected in ("/widgets", "/jobs", "/orders", "typed_sync", "Order"):
            assert expected in result.output

    def test_routes_rejects_bad_target_format(self) -> None:
        result = runner.invoke(app, ["routes", "tests.helpers.app"])

        assert result.exit_code != 0
        assert "module:attribute" in result.output

    def test_routes_rejects_missing_module(self) -> None:
        result = runner.invoke(app, ["routes", "no_such_module_xyz:registry"])

        assert result.exit_code != 0

    def test_routes_rejects_non_registry(self) -> None:
        result = runner.invoke(app, ["routes", "tests.helpers.app:not_a_registry"])

        assert result.exit_code != 0
        assert "HandlerRegistry" in result.output

    def test_serve_runs_uvicorn_with_app(self) -> None:
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(
                app, ["serve", "tests.helpers.app:registry", "--port", "9001"]
            )

        assert result.exit_code == 0, result.output
        mock_run.assert_called_once()
        args, kwargs = mock_run.call_args
        assert args[0].state.dispatcher.registry is registry
        assert kwargs["port"] == 9001
        assert kwargs["host"] == "127.0.0.1"
