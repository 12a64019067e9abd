"""
Tests for reference interpolation.
"""

import pytest

from web_step_engine.evaluation import has_references, interpolate
from web_step_engine.exceptions import ResolutionDepthError


def resolver_for(values):
    def resolve(name):
        return values[name]
    return resolve


class TestInterpolate:
    """Test ${property} and $[binding] substitution."""
    
    def test_binding_reference(self):
        assert interpolate("Hello $[name]!", resolver_for({"name": "World"})) == "Hello World!"
    
    def test_property_reference_uses_property_resolver(self):
        result = interpolate(
            "${env}-$[name]",
            resolver_for({"name": "binding"}),
            resolver_for({"env": "prod"}),
        )
        assert result == "prod-binding"
    
    def test_nested_references(self):
        """Test substituted values are interpolated in turn."""
        values = {"greeting": "Hello $[name]", "name": "World"}
        assert interpolate("$[greeting]!", resolver_for(values)) == "Hello World!"
    
    def test_text_without_references_unchanged(self):
        assert interpolate("plain text", resolver_for({})) == "plain text"
    
    def test_circular_references_raise(self):
        """Test a reference cycle fails with a depth error instead of recursing forever."""
        values = {"a": "$[b]", "b": "$[a]"}
        with pytest.raises(ResolutionDepthError):
            interpolate("$[a]", resolver_for(values), max_depth=8)
    
    @pytest.mark.parametrize("placeholder", [
        "$[javascript:document.title]",
        "$[sysproc:hostname]",
        "$[xpath://a]",
        "$[regex:(\\d+)]",
        "$[json path:$.a]",
        "$[file:data.txt]",
        "$[url:the current URL]",
        "$[selection:country text]",
    ])
    def test_dry_run_placeholders_left_alone(self, placeholder):
        assert interpolate(placeholder, resolver_for({})) == placeholder
        assert not has_references(placeholder)
    
    def test_has_references(self):
        assert has_references("${a}")
        assert has_references("$[a]")
        assert not has_references("no refs")
