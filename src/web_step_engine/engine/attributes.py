"""
Attribute Value Resolver - Resolve the value bound to a name.

A name can be bound in several ways. The first matching, non-empty entry
in the visible scopes decides how the value is produced:

    name                      literal value
    name/text                 literal value
    name/javascript           script result
    name/xpath/source         XPath over another bound value
    name/xpath/expression
    name/xpath/targetType
    name/regex/source         regex extraction from another bound value
    name/regex/expression
    name/json path/source     JSON path over another bound value
    name/json path/expression
    name/sysproc              trimmed output of a system command
    name/file                 contents of a file

When nothing is bound, the value falls back to settings properties and
environment variables, then to the text of the element located by `name`.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional, Tuple, TYPE_CHECKING
import logging
import re

from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support.ui import Select

from web_step_engine.browsers.session import TRANSIENT_ERRORS
from web_step_engine.evaluation import (
    evaluate_json_path,
    evaluate_xpath,
    extract_by_regex,
    read_file,
    run_process,
)
from web_step_engine.exceptions import (
    LocatorBindingNotFound,
    ResolutionDepthError,
    ResourceNotFound,
    UnboundAttributeError,
    WebStepEngineError,
)

if TYPE_CHECKING:
    from web_step_engine.engine.context import WebContext
    from web_step_engine.engine.locator import LocatorBinding

logger = logging.getLogger(__name__)

CURRENT_URL = "the current URL"

ELEMENT_TEXT_SCRIPT = (
    "(function(element){return element.innerText || element.textContent || ''})(arguments[0]);"
)


# ==================== Bound attribute variants ====================

@dataclass(frozen=True)
class BoundAttribute:
    """A value bound to a name, tagged by how it is produced."""
    name: str


@dataclass(frozen=True)
class LiteralValue(BoundAttribute):
    value: str


@dataclass(frozen=True)
class TextValue(BoundAttribute):
    value: str


@dataclass(frozen=True)
class ScriptValue(BoundAttribute):
    source: str


@dataclass(frozen=True)
class XPathValue(BoundAttribute):
    source: str
    expression: str
    target_type: str


@dataclass(frozen=True)
class RegexValue(BoundAttribute):
    source: str
    expression: str


@dataclass(frozen=True)
class JsonPathValue(BoundAttribute):
    source: str
    expression: str


@dataclass(frozen=True)
class SysProcValue(BoundAttribute):
    command: str


@dataclass(frozen=True)
class FileValue(BoundAttribute):
    path: str


def attribute_key_pattern(name: str) -> "re.Pattern[str]":
    """Pattern matching every key that can bind a value to `name`."""
    return re.compile(
        rf"{re.escape(name)}(/(text|javascript|xpath.+|regex.+|json path.+|sysproc|file))?"
    )


def parse_bound_attribute(
    name: str,
    entries: Iterable[Tuple[str, str]],
) -> Optional[BoundAttribute]:
    """
    Build the bound attribute for a name from store entries.
    
    Args:
        name: Attribute name
        entries: Visible `(key, value)` entries in lookup order
        
    Returns:
        The first matching key whose newest value is non-empty, or None when
        nothing is bound. A blank rebinding hides older values of its key.
        
    Raises:
        UnboundAttributeError: If an xpath, regex or json path binding is
            missing one of its fields
    """
    fields: Dict[str, str] = {}
    for key, value in entries:
        fields.setdefault(key, value)
    
    pattern = attribute_key_pattern(name)
    found = next(
        ((key, value) for key, value in fields.items() if value != "" and pattern.fullmatch(key)),
        None,
    )
    if found is None:
        return None
    
    def field(kind: str, sub_field: str) -> str:
        key = f"{name}/{kind}/{sub_field}"
        if key not in fields:
            raise UnboundAttributeError(key)
        return fields[key]
    
    key, value = found
    suffix = key[len(name):]
    if suffix == "":
        return LiteralValue(name, value)
    if suffix == "/text":
        return TextValue(name, value)
    if suffix == "/javascript":
        return ScriptValue(name, value)
    if suffix.startswith("/xpath"):
        return XPathValue(
            name,
            source=field("xpath", "source"),
            expression=field("xpath", "expression"),
            target_type=field("xpath", "targetType"),
        )
    if suffix.startswith("/regex"):
        return RegexValue(name, source=field("regex", "source"), expression=field("regex", "expression"))
    if suffix.startswith("/json path"):
        return JsonPathValue(
            name,
            source=field("json path", "source"),
            expression=field("json path", "expression"),
        )
    if suffix == "/sysproc":
        return SysProcValue(name, value)
    return FileValue(name, value)


def stringify_script_result(result: Any) -> str:
    """Render a script result the way javascript would."""
    if result is None:
        return ""
    if isinstance(result, bool):
        return "true" if result else "false"
    return str(result)


# ==================== Resolver ====================

class AttributeResolver:
    """
    Resolve bound values through the layered lookup chain.
    
    Example:
        >>> context.store.set("greeting/text", "hello")
        >>> context.attributes.get_attribute("greeting")
        'hello'
    """
    
    def __init__(self, context: "WebContext"):
        self._context = context
    
    def get_bound_reference_value(self, name: str) -> str:
        """
        Get the value of a bound reference.
        
        The live text of the element located by `name` is preferred when a
        locator is bound. `the current URL` is captured fresh from the browser.
        Otherwise the value comes from `get_attribute`.
        """
        context = self._context
        with context.resolving(name):
            if name == CURRENT_URL:
                context.capture_current_url()
            value = None if context.is_dry_run else self._live_text(name)
            if value is None:
                value = self.get_attribute(name)
        logger.debug(f"get_bound_reference_value({name})='{value}'")
        return value
    
    def get_attribute(self, name: str) -> str:
        """
        Get a bound attribute value from the visible scopes.
        
        Raises:
            UnboundAttributeError: If no lookup in the chain yields a value
            ResourceNotFound: If the name is bound to a file that is missing
        """
        context = self._context
        with context.resolving(name):
            attribute = parse_bound_attribute(name, context.store.visible_entries_with_prefix(name))
            if attribute is not None:
                value = self._evaluate(attribute)
            else:
                value = self._fallback(name)
        logger.debug(f"get_attribute({name})='{value}'")
        return value
    
    def get_element_text(self, binding: "LocatorBinding") -> Optional[str]:
        """
        Read the text of a located element.
        
        Tries the element text, then its `text` and `value` attributes, then
        its innerText/textContent. The result is bound as `<element>/text`.
        """
        context = self._context
        
        def read(element: WebElement) -> Optional[str]:
            text = element.text or element.get_attribute("text") or element.get_attribute("value")
            if not text:
                text = context.session.execute_script(ELEMENT_TEXT_SCRIPT, element)
            context.bind_and_wait(binding.element, "text", text or "")
            return text
        
        value = context.with_element(binding, read)
        logger.debug(f"get_element_text({binding.element})='{value}'")
        return value
    
    def get_element_selection(self, name: str, selection: str) -> str:
        """
        Get the selected option text(s) or value(s) of a dropdown.
        
        Args:
            name: Dropdown element name
            selection: `text` for option text, anything else for option values
            
        Returns:
            Selected entries joined by commas, also bound as
            `<name>/selectedText` or `<name>/selectedValue`
        """
        placeholder = f"$[selection:{name} {selection}]"
        if selection.strip() == "text":
            return self._context.execute(lambda: self._selected_text(name), placeholder)
        return self._context.execute(lambda: self._selected_value(name), placeholder)
    
    def bound_attribute_or_selection(self, element: str, selection: Optional[str]) -> Callable[[], str]:
        """
        Build a thunk reading an element value or one of its selections.
        
        With a selection, a value bound to `<element> <selection>` wins and
        the dropdown selection is read only when nothing is bound.
        """
        def read() -> str:
            if selection is None:
                return self.get_bound_reference_value(element)
            try:
                return self.get_bound_reference_value(f"{element} {selection.strip()}")
            except UnboundAttributeError:
                return self.get_element_selection(element, selection)
        return read
    
    # ==================== Evaluation ====================
    
    def _evaluate(self, attribute: BoundAttribute) -> str:
        context = self._context
        name = attribute.name
        
        if isinstance(attribute, (LiteralValue, TextValue)):
            return attribute.value
        
        if isinstance(attribute, ScriptValue):
            script = context.interpolate(attribute.source)
            return context.execute(
                lambda: stringify_script_result(context.session.execute_script(f"return {script}")),
                f"$[javascript:{attribute.source}]",
            )
        
        if isinstance(attribute, XPathValue):
            source = self._source(attribute.source)
            target_type = context.interpolate(attribute.target_type)
            expression = context.interpolate(attribute.expression)
            return context.execute(
                lambda: evaluate_xpath(expression, source, target_type),
                f"$[xpath:{expression}]",
            )
        
        if isinstance(attribute, RegexValue):
            source = self._source(attribute.source)
            expression = context.interpolate(attribute.expression)
            return context.execute(
                lambda: extract_by_regex(expression, source),
                f"$[regex:{expression}]",
            )
        
        if isinstance(attribute, JsonPathValue):
            source = self._source(attribute.source)
            expression = context.interpolate(attribute.expression)
            return context.execute(
                lambda: evaluate_json_path(expression, source),
                f"$[json path:{expression}]",
            )
        
        if isinstance(attribute, SysProcValue):
            command = context.interpolate(attribute.command)
            return context.execute(lambda: run_process(command), f"$[sysproc:{attribute.command}]")
        
        if isinstance(attribute, FileValue):
            path = context.interpolate(attribute.path)
            return context.execute(lambda: read_file(path, name), f"$[file:{attribute.path}]")
        
        raise TypeError(f"Unknown bound attribute: {attribute!r}")
    
    def _source(self, reference: str) -> str:
        """Resolve the bound value an xpath/regex/json path binding reads from."""
        return self._context.interpolate(self.get_bound_reference_value(reference))
    
    def _fallback(self, name: str) -> str:
        context = self._context
        value = context.default_value(name)
        if value is not None:
            return value
        
        try:
            binding = context.get_locator_binding(name)
        except LocatorBindingNotFound:
            raise UnboundAttributeError(name, context.store.current.scope_type) from None
        
        if context.is_dry_run:
            return binding.expression
        try:
            text = self.get_element_text(binding)
        except TRANSIENT_ERRORS as e:
            raise UnboundAttributeError(name, context.store.current.scope_type) from e
        if not text:
            raise UnboundAttributeError(name, context.store.current.scope_type)
        return text
    
    def _live_text(self, name: str) -> Optional[str]:
        """Text of the element located by `name`, or None if it cannot be read."""
        context = self._context
        try:
            return self.get_element_text(context.get_locator_binding(name))
        except (ResourceNotFound, ResolutionDepthError):
            raise
        except (WebStepEngineError,) + TRANSIENT_ERRORS as e:
            logger.debug(f"Could not read text of {name}: {e}")
            return None
    
    # ==================== Dropdowns ====================
    
    def _selected_text(self, name: str) -> str:
        context = self._context
        binding = context.get_locator_binding(name)
        
        def read(element: WebElement) -> str:
            options = Select(element).all_selected_options
            text = ",".join(option.text for option in options)
            if not text:
                text = ",".join(option.get_attribute("text") or "" for option in options)
            context.bind_and_wait(binding.element, "selectedText", text)
            return text
        
        value = context.with_element(binding, read)
        logger.debug(f"get_selected_element_text({name})='{value}'")
        return value
    
    def _selected_value(self, name: str) -> str:
        context = self._context
        binding = context.get_locator_binding(name)
        
        def read(element: WebElement) -> str:
            options = Select(element).all_selected_options
            value = ",".join(option.get_attribute("value") or "" for option in options)
            context.bind_and_wait(binding.element, "selectedValue", value)
            return value
        
        value = context.with_element(binding, read)
        logger.debug(f"get_selected_element_value({name})='{value}'")
        return value
