"""
Tests for screenshot and attachment capture.
"""

from web_step_engine.reporting import ScreenshotManager


class TestScreenshotManager:
    """Test ScreenshotManager."""
    
    def test_creates_run_directory(self, tmp_path):
        manager = ScreenshotManager(tmp_path, "run_123")
        assert (tmp_path / "run_123").is_dir()
        assert manager.get_attachments() == []
    
    def test_capture(self, tmp_path, mock_driver):
        manager = ScreenshotManager(tmp_path, "run_123")
        
        attachment = manager.capture(mock_driver, description="After login")
        
        assert attachment.path.exists()
        assert attachment.path.suffix == ".png"
        assert attachment.path.name.startswith("001-screenshot-")
        assert attachment.description == "After login"
        assert not attachment.is_error
    
    def test_error_capture(self, tmp_path, mock_driver):
        manager = ScreenshotManager(tmp_path, "run_123")
        attachment = manager.capture(mock_driver, is_error=True)
        assert attachment.is_error
        assert attachment.path.name.startswith("001-error-screenshot-")
    
    def test_text_attachment(self, tmp_path):
        manager = ScreenshotManager(tmp_path, "run_123")
        
        first = manager.add_attachment("the current URL", "txt", "https://example.com")
        second = manager.add_attachment("the current URL", "txt", "https://example.com/2")
        
        assert first.path.read_text() == "https://example.com"
        assert first.path.name.startswith("001-the-current-url-")
        assert second.path.name.startswith("002-")
        assert [a.path for a in manager.get_attachments()] == [first.path, second.path]
