"""
Tests for the wait engine.
"""

import time

import pytest
from selenium.common.exceptions import WebDriverException

from web_step_engine.config import Settings
from web_step_engine.exceptions import HardTimeout

# Scheduling allowance on top of the documented bound.
JITTER = 0.5


@pytest.fixture
def wait_settings():
    return Settings(web={"wait_seconds": 2, "throttle_msecs": 100})


@pytest.fixture
def waits(wait_settings, make_context):
    ctx = make_context(wait_settings)
    yield ctx.waits
    ctx.close()


class TestWaitUntil:
    """Test wait_until."""
    
    def test_condition_already_true(self, waits):
        started = time.monotonic()
        waits.wait_until(lambda: True)
        assert time.monotonic() - started < 1
    
    def test_condition_becomes_true(self, waits):
        calls = []
        
        def condition():
            calls.append(1)
            return len(calls) >= 3
        
        waits.wait_until(condition)
        assert len(calls) == 3
    
    def test_timeout(self, waits):
        """Test a false condition times out within the budget plus one throttle interval."""
        started = time.monotonic()
        
        with pytest.raises(HardTimeout) as exc_info:
            waits.wait_until(lambda: False, reason="Waiting for nothing")
        
        elapsed = time.monotonic() - started
        assert elapsed >= 2
        assert elapsed < 2 + 0.1 + JITTER
        assert exc_info.value.timeout_seconds == 2
        assert exc_info.value.reason == "Waiting for nothing"
        assert "Waiting for nothing" in str(exc_info.value)
    
    def test_explicit_timeout(self, waits):
        started = time.monotonic()
        with pytest.raises(HardTimeout):
            waits.wait_until(lambda: False, timeout_seconds=1)
        assert time.monotonic() - started < 1 + 0.1 + JITTER
    
    def test_transient_error_retried_once(self, waits):
        """Test one transient error followed by success costs exactly one retry."""
        calls = []
        
        def condition():
            calls.append(1)
            if len(calls) == 1:
                raise WebDriverException("script failed mid-navigation")
            return True
        
        waits.wait_until(condition)
        assert len(calls) == 2
    
    def test_persistent_transient_error_bounded_by_budget(self, waits):
        """Test driver errors that never clear are re-raised once time runs out."""
        started = time.monotonic()
        
        def condition():
            raise WebDriverException("still failing")
        
        with pytest.raises(WebDriverException, match="still failing"):
            waits.wait_until(condition, timeout_seconds=1)
        
        elapsed = time.monotonic() - started
        assert elapsed >= 1
        assert elapsed < 1 + 0.1 + JITTER
    
    def test_reason_logged(self, waits, caplog):
        with caplog.at_level("INFO", logger="web_step_engine.engine.waits"):
            waits.wait_until(lambda: True, reason="Waiting until ready")
        assert "Waiting until ready" in caplog.text
