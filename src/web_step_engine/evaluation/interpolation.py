"""
String interpolation of bound references.

Two reference forms are substituted:
- `${name}` - a property (settings or environment)
- `$[name]` - a bound attribute from the visible scopes

Substituted values are themselves interpolated, so references may nest.
Nesting is bounded by `max_depth` so that circular references fail with a
descriptive error instead of exhausting the stack.
"""

import re
from typing import Callable, Optional

from web_step_engine.exceptions import ResolutionDepthError

Resolver = Callable[[str], str]

PROPERTY_PATTERN = re.compile(r"\$\{([^}]+)\}")

# Dry-run placeholders such as $[javascript:...] are left as they are.
BINDING_PATTERN = re.compile(
    r"\$\[(?!(?:javascript|sysproc|xpath|regex|json path|file|url|selection):)([^\]]+)\]"
)


def interpolate(
    template: str,
    resolver: Resolver,
    property_resolver: Optional[Resolver] = None,
    max_depth: int = 32,
) -> str:
    """
    Replace `${...}` and `$[...]` references in a template.
    
    Args:
        template: Text that may contain references
        resolver: Resolves `$[name]` references
        property_resolver: Resolves `${name}` references (defaults to `resolver`)
        max_depth: Maximum nesting of references
        
    Returns:
        The interpolated string
        
    Raises:
        ResolutionDepthError: If references nest deeper than `max_depth`
        
    Example:
        >>> interpolate("Hello $[name]!", {"name": "World"}.__getitem__)
        'Hello World!'
    """
    return _interpolate(template, resolver, property_resolver or resolver, max_depth, 0)


def has_references(text: str) -> bool:
    """Check if text contains references to interpolate."""
    return bool(PROPERTY_PATTERN.search(text) or BINDING_PATTERN.search(text))


def _interpolate(
    template: str,
    resolver: Resolver,
    property_resolver: Resolver,
    max_depth: int,
    depth: int,
) -> str:
    if depth > max_depth:
        raise ResolutionDepthError(template, max_depth)
    
    def nested(value: str) -> str:
        return _interpolate(value, resolver, property_resolver, max_depth, depth + 1)
    
    result = PROPERTY_PATTERN.sub(lambda m: nested(property_resolver(m.group(1))), template)
    return BINDING_PATTERN.sub(lambda m: nested(resolver(m.group(1))), result)
