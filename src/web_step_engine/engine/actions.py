"""
Element Actions - Typing, selecting, clicking and scrolling.

Every action runs through the element interactor and records its result with
bind-and-wait, so `search field/type` holds what was typed into the search
field and any configured post-action wait is honored.
"""

from enum import Enum
from typing import TYPE_CHECKING
import logging
import time

from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.common.keys import Keys
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support.ui import Select

if TYPE_CHECKING:
    from web_step_engine.engine.context import WebContext
    from web_step_engine.engine.locator import LocatorBinding

logger = logging.getLogger(__name__)

CLICK_SCRIPT = (
    "(function(element){try{element.focus(); element.click(); return true;}"
    "catch(err){return false;}})(arguments[0]);"
)

SCROLL_SCRIPT = (
    "var elem = arguments[0]; if (typeof elem !== 'undefined' && elem != null) "
    "{{ elem.scrollIntoView({align_to_top}); }}"
)

HIGHLIGHT_SCRIPT = (
    "element = arguments[0]; type = element.getAttribute('type'); "
    "if (('radio' == type || 'checkbox' == type) && "
    "element.parentElement.getElementsByTagName('input').length == 1) "
    "{{ element = element.parentElement; }} "
    "original_style = element.getAttribute('style'); "
    "element.setAttribute('style', original_style + '; {style}'); "
    "setTimeout(function() {{ element.setAttribute('style', original_style); }}, {msecs});"
)

SUPPORTED_ACTIONS = ("click", "submit", "check", "uncheck")


class ScrollTo(str, Enum):
    """Where a scrolled element ends up in the viewport."""
    TOP = "top"
    BOTTOM = "bottom"


class ElementActions:
    """Actions performed on located elements."""
    
    def __init__(self, context: "WebContext"):
        self._context = context

    def _bind_change(self, name: str, action: str, value: str) -> None:
        """Bind an action that changes the element, blanking its captured text."""
        # Empty values are skipped by lookups, so the next read goes live
        self._context.store.set(f"{name}/text", "")
        self._context.bind_and_wait(name, action, value)

    # ==================== Text input ====================
    
    def send_keys(
        self,
        binding: "LocatorBinding",
        value: str,
        clear_first: bool = False,
        send_enter: bool = False,
    ) -> None:
        """
        Type a value into an element.
        
        Args:
            binding: Locator binding of the field
            value: Text to type
            clear_first: Clear the field before typing
            send_enter: Press Enter after typing
        """
        context = self._context
        element_name = binding.element
        
        def type_into(element: WebElement) -> None:
            if clear_first:
                self._clear(element, element_name)
            element.send_keys(value)
            self._bind_change(element_name, "type", value)
            if send_enter:
                element.send_keys(Keys.RETURN)
                self._bind_change(element_name, "enter", "true")
        
        context.with_element(binding, type_into)
    
    def clear_text(self, binding: "LocatorBinding") -> None:
        self._context.with_element(binding, lambda element: self._clear(element, binding.element))
    
    def _clear(self, element: WebElement, name: str) -> None:
        element.clear()
        self._bind_change(name, "clear", "true")
    
    # ==================== Dropdowns ====================
    
    def select_by_visible_text(self, binding: "LocatorBinding", value: str) -> None:
        def select(element: WebElement) -> None:
            logger.debug(f"Selecting '{value}' in {binding.element} by text")
            Select(element).select_by_visible_text(value)
            self._bind_change(binding.element, "select", value)
        
        self._context.with_element(binding, select)
    
    def select_by_value(self, binding: "LocatorBinding", value: str) -> None:
        def select(element: WebElement) -> None:
            logger.debug(f"Selecting '{value}' in {binding.element} by value")
            Select(element).select_by_value(value)
            self._bind_change(binding.element, "select", value)
        
        self._context.with_element(binding, select)
    
    def select_by_index(self, binding: "LocatorBinding", index: int) -> None:
        """Select an option by its zero-based index."""
        def select(element: WebElement) -> None:
            logger.debug(f"Selecting option in {binding.element} by index: {index}")
            dropdown = Select(element)
            dropdown.select_by_index(index)
            self._bind_change(binding.element, "select", dropdown.first_selected_option.text)
        
        self._context.with_element(binding, select)
    
    # ==================== Clicks and checks ====================
    
    def perform_action(self, action: str, binding: "LocatorBinding") -> None:
        """
        Click, submit, check or uncheck an element.
        
        A script bound to `<element>/action/<action>/javascript` replaces the
        native action. It runs with the element available as `element`.
        
        Raises:
            ValueError: If the action is not supported
        """
        context = self._context
        script = context.store.get_optional(f"{binding.element}/action/{action}/javascript")
        if script:
            context.with_element(
                binding,
                lambda element: context.execute_script(
                    f"(function(element) {{ {script} }})(arguments[0])", element
                ),
                action=action,
            )
        else:
            if action not in SUPPORTED_ACTIONS:
                raise ValueError(f"Unsupported action: {action}")
            context.with_element(binding, lambda element: self._apply(action, element), action=action)
        self._bind_change(binding.element, action, "true")
    
    def _apply(self, action: str, element: WebElement) -> None:
        if action == "click":
            if not self._context.execute_script_predicate(CLICK_SCRIPT, element):
                element.click()
        elif action == "submit":
            element.submit()
        elif action == "check":
            if not element.is_selected():
                element.send_keys(Keys.SPACE)
        elif action == "uncheck":
            if element.is_selected():
                element.send_keys(Keys.SPACE)
    
    def perform_action_in(
        self,
        action: str,
        binding: "LocatorBinding",
        context_binding: "LocatorBinding",
    ) -> None:
        """
        Perform an action on an element reached through another element.
        
        The mouse moves over the context element first, which opens hover
        menus before the target is clicked.
        """
        if action not in ("click", "check", "uncheck"):
            raise ValueError(f"Unsupported action: {action}")
        context = self._context
        
        def in_context(context_element: WebElement) -> None:
            def on_target(element: WebElement) -> None:
                def perform(driver) -> None:
                    chain = ActionChains(driver).move_to_element(context_element).move_to_element(element)
                    if action == "click":
                        chain.click()
                    elif action == "check" and not element.is_selected():
                        chain.send_keys(Keys.SPACE)
                    elif action == "uncheck" and element.is_selected():
                        chain.send_keys(Keys.SPACE)
                    chain.perform()
                
                context.session.with_driver(perform)
                self._bind_change(binding.element, action, "true")
            
            context.with_element(binding, on_target, action=action)
        
        context.with_element(context_binding, in_context, action=action)
    
    # ==================== Viewport ====================
    
    def scroll_into_view(self, binding: "LocatorBinding", scroll_to: ScrollTo = ScrollTo.TOP) -> None:
        self._context.with_element(binding, lambda element: self.scroll_element_into_view(element, scroll_to))
    
    def scroll_element_into_view(self, element: WebElement, scroll_to: ScrollTo = ScrollTo.TOP) -> None:
        align_to_top = "true" if ScrollTo(scroll_to) == ScrollTo.TOP else "false"
        self._context.execute_script(SCROLL_SCRIPT.format(align_to_top=align_to_top), element)
    
    def highlight(self, element: WebElement) -> None:
        """
        Briefly restyle an element so it stands out in screenshots.
        
        Lasts `web.throttle_msecs`; does nothing when the throttle is zero.
        """
        web = self._context.settings.web
        msecs = web.throttle_msecs
        if msecs <= 0:
            return
        self._context.session.execute_script(
            HIGHLIGHT_SCRIPT.format(style=web.highlight_style, msecs=msecs),
            element,
            take_screenshot=web.capture_screenshots_highlighting,
        )
        time.sleep(msecs / 1000)
    
    # ==================== Reads ====================
    
    def wait_for_text(self, binding: "LocatorBinding") -> bool:
        """True when the element currently has non-empty text."""
        return bool(self._context.attributes.get_element_text(binding))
    
    def get_title(self) -> str:
        title = self._context.session.title
        self._context.bind_and_wait("page", "title", title)
        return title
