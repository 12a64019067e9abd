"""
Tests for WebContext lifecycle and wiring.
"""

import pytest

from web_step_engine.engine import WebContext
from web_step_engine.exceptions import UnboundAttributeError
from web_step_engine.reporting import ScreenshotManager


class TestExecute:
    """Test dry-run aware execution."""
    
    def test_runs_function(self, context):
        assert context.execute(lambda: "ran", "placeholder") == "ran"
    
    def test_returns_placeholder_in_dry_run(self, dry_run_context):
        calls = []
        assert dry_run_context.execute(lambda: calls.append(1), "placeholder") == "placeholder"
        assert calls == []


class TestProperties:
    """Test property lookups."""
    
    def test_interpolate_property(self, context):
        assert context.interpolate("env=${env}") == "env=test"
    
    def test_interpolate_binding(self, context):
        context.store.set("name/text", "Gwen")
        assert context.interpolate("Hi $[name]") == "Hi Gwen"
    
    def test_missing_property(self, context):
        with pytest.raises(UnboundAttributeError):
            context.interpolate("${no such property}")


class TestLifecycle:
    """Test navigation, reset and close."""
    
    def test_driver_started_lazily(self, context, mock_driver):
        assert not context.session.is_started
        context.navigate_to("https://example.com")
        assert context.session.is_started
        assert mock_driver.current_url == "https://example.com"
    
    def test_navigate_clears_page_scopes(self, context):
        context.store.add_scope("home page")
        context.store.set("field", "value")
        
        context.navigate_to("https://example.com/other")
        
        assert context.store.get_optional("field") is None
    
    def test_reset_closes_browser_keeps_feature_scope(self, context, mock_driver):
        context.store.set("kept", "yes")
        context.store.add_scope("home page")
        context.navigate_to("https://example.com")
        
        context.reset()
        
        assert mock_driver.quit_called
        assert not context.session.is_started
        assert context.store.get("kept") == "yes"
    
    def test_end_feature_clears_everything(self, context):
        context.store.set("kept", "yes")
        context.end_feature()
        assert context.store.get_optional("kept") is None
    
    def test_close_without_browser(self, context, mock_driver):
        context.close()
        assert not mock_driver.quit_called
    
    def test_context_manager_closes(self, settings, mock_driver):
        with WebContext(settings=settings, driver_factory=lambda: mock_driver) as ctx:
            ctx.navigate_to("https://example.com")
        assert mock_driver.quit_called


class TestAttachments:
    """Test screenshot and URL attachments."""
    
    def test_current_url_attachment(self, settings, make_context, mock_driver, tmp_path):
        screenshots = ScreenshotManager(tmp_path, "run_1")
        ctx = make_context(settings, screenshots=screenshots)
        mock_driver.current_url = "https://example.com/results"
        
        assert ctx.capture_current_url() == "https://example.com/results"
        
        attachment = screenshots.get_attachments()[0]
        assert attachment.name == "the current URL"
        assert attachment.path.read_text() == "https://example.com/results"
    
    def test_error_attachments(self, settings, make_context, mock_driver, tmp_path):
        screenshots = ScreenshotManager(tmp_path, "run_1")
        ctx = make_context(settings, screenshots=screenshots)
        ctx.navigate_to("https://example.com")
        
        ctx.add_error_attachments()
        
        attachment = screenshots.get_attachments()[0]
        assert attachment.is_error
        assert attachment.path.exists()
    
    def test_no_error_attachments_without_browser(self, settings, make_context, mock_driver, tmp_path):
        screenshots = ScreenshotManager(tmp_path, "run_1")
        ctx = make_context(settings, screenshots=screenshots)
        
        ctx.add_error_attachments()
        
        assert screenshots.get_attachments() == []
    
    def test_create_uses_output_dir(self, settings, tmp_path):
        settings = settings.merge_with({"run": {"output_dir": str(tmp_path)}})
        
        ctx = WebContext.create(settings, run_id="run_1")
        
        assert ctx.screenshots.output_dir == tmp_path / "run_1"
        assert ctx.screenshots.output_dir.is_dir()
