"""
JSON path evaluation.
"""

import json
from typing import Any

from jsonpath_ng import parse
from jsonpath_ng.exceptions import JSONPathError

from web_step_engine.exceptions import EvaluationError


def evaluate_json_path(expression: str, source: str) -> str:
    """
    Apply a JSON path expression to JSON source text.
    
    A single scalar match is returned as plain text; objects, arrays and
    multiple matches are returned as JSON.
    
    Raises:
        EvaluationError: If the source is not JSON, the expression is invalid,
            or nothing matches
    """
    try:
        data = json.loads(source)
    except json.JSONDecodeError as e:
        raise EvaluationError(
            f"Cannot apply JSON path '{expression}' to non-JSON source", "json path", expression
        ) from e
    try:
        matches = [match.value for match in parse(expression).find(data)]
    except JSONPathError as e:
        raise EvaluationError(
            f"Invalid JSON path '{expression}': {e}", "json path", expression
        ) from e
    
    if not matches:
        raise EvaluationError(f"JSON path '{expression}' not found", "json path", expression)
    if len(matches) == 1:
        return _to_text(matches[0])
    return json.dumps(matches)


def _to_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)
