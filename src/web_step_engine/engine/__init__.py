"""
Engine module - Binding resolution and resilient browser interaction.
"""

from web_step_engine.engine.locator import LocatorBinding, LocatorResolver
from web_step_engine.engine.attributes import (
    BoundAttribute,
    LiteralValue,
    TextValue,
    ScriptValue,
    XPathValue,
    RegexValue,
    JsonPathValue,
    SysProcValue,
    FileValue,
    AttributeResolver,
    parse_bound_attribute,
)
from web_step_engine.engine.interactor import ElementInteractor
from web_step_engine.engine.waits import WaitEngine
from web_step_engine.engine.coordinator import BindAndWait
from web_step_engine.engine.actions import ElementActions, ScrollTo
from web_step_engine.engine.assertions import BindingAssertions, compare_values
from web_step_engine.engine.context import WebContext

__all__ = [
    "LocatorBinding",
    "LocatorResolver",
    "BoundAttribute",
    "LiteralValue",
    "TextValue",
    "ScriptValue",
    "XPathValue",
    "RegexValue",
    "JsonPathValue",
    "SysProcValue",
    "FileValue",
    "AttributeResolver",
    "parse_bound_attribute",
    "ElementInteractor",
    "WaitEngine",
    "BindAndWait",
    "ElementActions",
    "ScrollTo",
    "BindingAssertions",
    "compare_values",
    "WebContext",
]
