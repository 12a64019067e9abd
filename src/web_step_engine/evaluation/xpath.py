"""
XPath evaluation against XML (or HTML) source text.
"""

from enum import Enum
from typing import Any
import logging

from lxml import etree, html

from web_step_engine.exceptions import EvaluationError

logger = logging.getLogger(__name__)


class XMLNodeType(Enum):
    """What an XPath evaluation returns."""
    TEXT = "text"
    NODE = "node"
    NODESET = "nodeset"


def evaluate_xpath(expression: str, source: str, target_type: XMLNodeType | str) -> str:
    """
    Apply an XPath expression to XML source.
    
    Args:
        expression: XPath expression
        source: XML document (HTML is accepted when it is not well-formed XML)
        target_type: `text` for the string value of the first match, `node`
            for the first matching node serialized, `nodeset` for all matches
            serialized one per line
        
    Returns:
        The evaluated result as a string
        
    Raises:
        EvaluationError: If the source cannot be parsed, the expression is
            invalid, or a node was required but nothing matched
    """
    try:
        target = XMLNodeType(target_type.strip()) if isinstance(target_type, str) else target_type
    except ValueError as e:
        raise EvaluationError(
            f"Unsupported XPath target type '{target_type}' (expected text, node or nodeset)",
            "xpath",
            expression,
        ) from e
    root = _parse(source, expression)
    try:
        result = root.xpath(expression)
    except etree.XPathError as e:
        raise EvaluationError(f"Invalid XPath '{expression}': {e}", "xpath", expression) from e
    
    if target == XMLNodeType.TEXT:
        value = _to_text(result)
    elif target == XMLNodeType.NODE:
        nodes = _as_list(result)
        if not nodes:
            raise EvaluationError(f"No node found for XPath '{expression}'", "xpath", expression)
        value = _serialize(nodes[0])
    else:
        value = "\n".join(_serialize(node) for node in _as_list(result))
    
    logger.debug(f"evaluate_xpath({expression}, {target.value})='{value}'")
    return value


def _parse(source: str, expression: str) -> Any:
    text = source.strip()
    try:
        return etree.fromstring(text.encode("utf-8"))
    except etree.XMLSyntaxError:
        try:
            return html.fromstring(text)
        except (etree.ParserError, ValueError) as e:
            raise EvaluationError(
                f"Cannot apply XPath '{expression}' to unparseable source", "xpath", expression
            ) from e


def _as_list(result: Any) -> list:
    return result if isinstance(result, list) else [result]


def _to_text(result: Any) -> str:
    if isinstance(result, list):
        if not result:
            return ""
        result = result[0]
    if isinstance(result, bool):
        return "true" if result else "false"
    if isinstance(result, float):
        return str(int(result)) if result.is_integer() else str(result)
    if isinstance(result, etree._Element):
        return "".join(result.itertext())
    return str(result)


def _serialize(node: Any) -> str:
    if isinstance(node, etree._Element):
        return etree.tostring(node, encoding="unicode", with_tail=False)
    return _to_text(node)
