"""
Binding Assertions - Compare bound values against expectations.
"""

from typing import Callable, Optional, TYPE_CHECKING
import logging
import re

from web_step_engine.browsers.session import TRANSIENT_ERRORS
from web_step_engine.evaluation import XMLNodeType, evaluate_json_path, evaluate_xpath
from web_step_engine.exceptions import (
    AssertionFailedError,
    EvaluationError,
    ResourceNotFound,
    WebStepEngineError,
)

if TYPE_CHECKING:
    from web_step_engine.engine.context import WebContext

logger = logging.getLogger(__name__)

OPERATORS = (
    "be",
    "contain",
    "start with",
    "end with",
    "match regex",
    "match xpath",
    "match json path",
)


def compare_values(expected: str, actual: str, operator: str, negate: bool = False) -> bool:
    """
    Compare an actual value with an expected value.
    
    Args:
        expected: Expected value, regex, XPath or JSON path
        actual: Actual value
        operator: One of `OPERATORS`
        negate: Invert the result
        
    Returns:
        Whether the comparison holds
        
    Raises:
        ValueError: If the operator is unknown
    """
    if operator == "be":
        result = actual == expected
    elif operator == "contain":
        result = expected in actual
    elif operator == "start with":
        result = actual.startswith(expected)
    elif operator == "end with":
        result = actual.endswith(expected)
    elif operator == "match regex":
        result = re.fullmatch(expected, actual) is not None
    elif operator == "match xpath":
        result = evaluate_xpath(expected, actual, XMLNodeType.TEXT) != ""
    elif operator == "match json path":
        try:
            result = evaluate_json_path(expected, actual) != ""
        except EvaluationError:
            result = False
    else:
        raise ValueError(f"Unsupported comparison operator: {operator}")
    return not result if negate else result


class BindingAssertions:
    """Polling comparisons for bound values."""
    
    def __init__(self, context: "WebContext"):
        self._context = context
    
    def compare(
        self,
        name: str,
        expected: str,
        actual: Callable[[], Optional[str]],
        operator: str,
        negate: bool = False,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        """
        Wait until a bound value satisfies a comparison.
        
        The actual value is re-read on every poll, so values that settle after
        a page update still pass.
        
        Args:
            name: Name reported in the failure message
            expected: Expected value
            actual: Reads the current actual value
            operator: Comparison operator
            negate: Expect the comparison not to hold
            timeout_seconds: Wait budget (defaults to `web.wait_seconds`)
            
        Raises:
            AssertionFailedError: If the comparison never holds
            ResourceNotFound: If the actual value is bound to a missing file
        """
        if operator not in OPERATORS:
            raise ValueError(f"Unsupported comparison operator: {operator}")
        
        actual_value: Optional[str] = ""
        
        def holds() -> bool:
            nonlocal actual_value
            actual_value = actual()
            if actual_value is None:
                return False
            return compare_values(expected, actual_value, operator, negate)
        
        try:
            self._context.wait_until(holds, timeout_seconds=timeout_seconds)
        except ResourceNotFound:
            raise
        except (WebStepEngineError,) + TRANSIENT_ERRORS as e:
            message = (
                f"Expected {name} to {'not ' if negate else ''}{operator} "
                f"'{expected}' but got '{actual_value}'"
            )
            logger.debug(f"{message} ({type(e).__name__}: {e})")
            raise AssertionFailedError(message, name, expected, actual_value) from e
