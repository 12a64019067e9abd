"""
Integration tests for the CLI commands.
"""

import pytest
from typer.testing import CliRunner

from web_step_engine.main import app


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run in an empty directory so no local config is picked up."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def bindings_file(workdir):
    path = workdir / "bindings.yaml"
    path.write_text(
        "search form/locator: id\n"
        "search form/locator/id: search\n"
        "search field/locator: name\n"
        "search field/locator/name: q\n"
        "search field/locator/name/container: search form\n"
        "page title/javascript: document.title\n"
        "greeting/text: hello\n"
    )
    return path


class TestCLIValidate:
    """Test the 'validate' CLI command."""
    
    def test_validate_help(self, runner):
        result = runner.invoke(app, ["validate", "--help"])
        assert result.exit_code == 0
        assert "Resolve every element locator" in result.stdout
    
    def test_validate_success(self, runner, bindings_file):
        result = runner.invoke(app, ["validate", str(bindings_file)])
        
        assert result.exit_code == 0
        assert "All 2 locator(s) resolved" in result.stdout
    
    def test_validate_failure(self, runner, workdir):
        path = workdir / "bindings.yaml"
        path.write_text(
            "search field/locator: name\n"
            "search button/locator: id\n"
            "search button/locator/id: go\n"
        )
        
        result = runner.invoke(app, ["validate", str(path)])
        
        assert result.exit_code == 1
        assert "1 of 2 locator(s) failed to resolve" in result.stdout
    
    def test_validate_missing_file(self, runner, workdir):
        result = runner.invoke(app, ["validate", str(workdir / "missing.yaml")])
        
        assert result.exit_code == 1
        assert "not found" in result.stdout


class TestCLIResolve:
    """Test the 'resolve' CLI command."""
    
    def test_resolve_text(self, runner, bindings_file):
        result = runner.invoke(app, ["resolve", str(bindings_file), "greeting"])
        
        assert result.exit_code == 0
        assert result.stdout.strip().endswith("hello")
    
    def test_resolve_javascript_placeholder(self, runner, bindings_file):
        result = runner.invoke(app, ["resolve", str(bindings_file), "page title"])
        
        assert result.exit_code == 0
        assert "$[javascript:document.title]" in result.stdout
    
    def test_resolve_element_expression(self, runner, bindings_file):
        result = runner.invoke(app, ["resolve", str(bindings_file), "search field"])
        
        assert result.exit_code == 0
        assert result.stdout.strip().endswith("q")
    
    def test_resolve_unbound(self, runner, bindings_file):
        result = runner.invoke(app, ["resolve", str(bindings_file), "nothing"])
        
        assert result.exit_code == 1
        assert "Unbound reference" in result.stdout


class TestCLIVersion:
    
    def test_version(self, runner):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "Web Step Engine" in result.stdout
