"""
Regex extraction.
"""

import re

from web_step_engine.exceptions import EvaluationError


def extract_by_regex(expression: str, source: str) -> str:
    """
    Extract the first match of a regex from source text.
    
    Returns the first capture group when the expression has one,
    otherwise the whole match.
    
    Raises:
        EvaluationError: If the expression is invalid or does not match
    """
    try:
        match = re.search(expression, source)
    except re.error as e:
        raise EvaluationError(f"Invalid regex '{expression}': {e}", "regex", expression) from e
    if match is None:
        raise EvaluationError(
            f"Regex match '{expression}' not found in '{source}'", "regex", expression
        )
    return match.group(1) if match.re.groups else match.group(0)
