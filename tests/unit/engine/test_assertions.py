"""
Tests for binding comparisons.
"""

import pytest

from web_step_engine.engine import compare_values
from web_step_engine.exceptions import AssertionFailedError, ResourceNotFound


class TestCompareValues:
    """Test compare_values operators."""
    
    @pytest.mark.parametrize("expected,actual,operator,result", [
        ("cats", "cats", "be", True),
        ("cats", "dogs", "be", False),
        ("at", "cats", "contain", True),
        ("ca", "cats", "start with", True),
        ("ts", "cats", "end with", True),
        ("ts", "cats", "start with", False),
        (r"c\w+s", "cats", "match regex", True),
        (r"c\w", "cats", "match regex", False),
        ("//b", "<a><b>x</b></a>", "match xpath", True),
        ("//c", "<a><b>x</b></a>", "match xpath", False),
        ("$.a", '{"a": 1}', "match json path", True),
        ("$.b", '{"a": 1}', "match json path", False),
        ("$.a", "not json", "match json path", False),
    ])
    def test_operators(self, expected, actual, operator, result):
        assert compare_values(expected, actual, operator) is result
    
    def test_negate(self):
        assert compare_values("cats", "dogs", "be", negate=True) is True
        assert compare_values("cats", "cats", "be", negate=True) is False
    
    def test_unknown_operator(self):
        with pytest.raises(ValueError):
            compare_values("a", "a", "resemble")


class TestCompare:
    """Test polling comparisons."""
    
    def test_passes(self, context):
        context.store.set("greeting", "hello")
        context.assertions.compare("greeting", "hello", lambda: context.get_attribute("greeting"), "be")
    
    def test_passes_once_value_settles(self, context):
        values = iter(["loading", "loading", "done"])
        context.assertions.compare("status", "done", lambda: next(values), "be")
    
    def test_fails_with_message(self, context):
        context.store.set("greeting", "hello")
        
        with pytest.raises(AssertionFailedError) as exc_info:
            context.assertions.compare(
                "greeting", "bye", lambda: context.get_attribute("greeting"), "be", timeout_seconds=1
            )
        
        assert str(exc_info.value) == "Expected greeting to be 'bye' but got 'hello'"
        assert exc_info.value.actual == "hello"
    
    def test_negated_failure_message(self, context):
        with pytest.raises(AssertionFailedError) as exc_info:
            context.assertions.compare("greeting", "hello", lambda: "hello", "contain", negate=True, timeout_seconds=1)
        
        assert str(exc_info.value) == "Expected greeting to not contain 'hello' but got 'hello'"
    
    def test_none_never_matches(self, context):
        with pytest.raises(AssertionFailedError):
            context.assertions.compare("greeting", "", lambda: None, "be", timeout_seconds=1)
    
    def test_unbound_value_fails_assertion(self, context):
        with pytest.raises(AssertionFailedError):
            context.assertions.compare("missing", "x", lambda: context.get_attribute("missing"), "be")
    
    def test_missing_file_propagates(self, context, tmp_path):
        """Test a missing file is reported as such rather than as a failed comparison."""
        context.store.set("data/file", str(tmp_path / "missing.txt"))
        
        with pytest.raises(ResourceNotFound):
            context.assertions.compare("data", "x", lambda: context.get_attribute("data"), "be")
    
    def test_unknown_operator(self, context):
        with pytest.raises(ValueError):
            context.assertions.compare("greeting", "x", lambda: "x", "resemble")
