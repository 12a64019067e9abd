"""
Reporting module - Screenshots and attachments captured during runs.
"""

from web_step_engine.reporting.screenshot_manager import ScreenshotManager, Attachment

__all__ = [
    "ScreenshotManager",
    "Attachment",
]
