"""
Configuration models for the console menu.

Menu options can be constructed programmatically or loaded from YAML,
together with the item list, as a ``MenuDefinition``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from console_menu.errors import ConfigurationError
from console_menu.models import MenuItem

if TYPE_CHECKING:
    from console_menu.models import TextSource

DEFAULT_HELP_MESSAGE = "Type a hotkey or use Down/Up arrows then Enter to choose an item."


def get_default_design_id() -> int:
    """Get the default glyph design from the environment, defaulting to 1."""
    val = os.environ.get("CONSOLE_MENU_DESIGN", "1").strip()
    try:
        design_id = int(val)
    except ValueError:
        return 1
    return design_id if design_id >= 1 else 1


@dataclass
class MenuOptions:
    """
    Options for one menu invocation.

    Example YAML:
        header: Test menu
        border: true
        page_size: 5
        help_message: Pick one
        design_id: 6
    """

    header: str | None = None  # Text above the items
    border: bool = False  # Draw a box around the menu
    page_size: int = 0  # Max visible items; 0 disables scrolling
    help_message: TextSource = DEFAULT_HELP_MESSAGE  # Footer, overridable per item
    show_keypress: bool = False  # Keypress inspection panel
    design_id: int = field(default_factory=get_default_design_id)  # Built-in glyph table
    design_string: str | None = None  # Literal 25-glyph table, wins over design_id
    clear_on_exit: bool = False  # Erase the menu once resolved

    def __post_init__(self) -> None:
        if isinstance(self.page_size, bool) or not isinstance(self.page_size, int):
            raise ConfigurationError(f"page_size must be an integer, got {self.page_size!r}")
        if self.page_size < 0:
            raise ConfigurationError(f"page_size must not be negative, got {self.page_size}")

    @property
    def paging(self) -> bool:
        return self.page_size > 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MenuOptions:
        """Create options from a dictionary.  Unknown keys are ignored."""
        help_message = data.get("help_message")
        return cls(
            header=data.get("header"),
            border=bool(data.get("border", False)),
            page_size=data.get("page_size", 0) or 0,
            help_message=DEFAULT_HELP_MESSAGE if help_message is None else help_message,
            show_keypress=bool(data.get("show_keypress", False)),
            design_id=data.get("design_id") or get_default_design_id(),
            design_string=data.get("design_string"),
            clear_on_exit=bool(data.get("clear_on_exit", False)),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> MenuOptions:
        """Load options from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.from_dict(_require_mapping(data or {}, "options"))

    @classmethod
    def from_yaml_string(cls, content: str) -> MenuOptions:
        """Load options from a YAML string."""
        data = yaml.safe_load(content)
        return cls.from_dict(_require_mapping(data or {}, "options"))

    def to_dict(self) -> dict[str, Any]:
        """Convert options to a dictionary."""
        return {
            "header": self.header,
            "border": self.border,
            "page_size": self.page_size,
            "help_message": None if callable(self.help_message) else self.help_message,
            "show_keypress": self.show_keypress,
            "design_id": self.design_id,
            "design_string": self.design_string,
            "clear_on_exit": self.clear_on_exit,
        }


@dataclass
class MenuDefinition:
    """
    A complete menu: items plus options.

    Example YAML:
        options:
          header: Test menu
          border: true
        items:
          - {hotkey: "1", title: One}
          - {separator: true}
          - {hotkey: "2", title: Two, selected: true, command: deploy}
    """

    items: list[MenuItem] = field(default_factory=list)
    options: MenuOptions = field(default_factory=MenuOptions)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MenuDefinition:
        raw_items = data.get("items") or []
        if not isinstance(raw_items, list):
            raise ConfigurationError("'items' must be a list")
        items = []
        for raw in raw_items:
            items.append(MenuItem.from_dict(_require_mapping(raw, "item")))
        options = MenuOptions.from_dict(_require_mapping(data.get("options") or {}, "options"))
        return cls(items=items, options=options)

    @classmethod
    def from_yaml_string(cls, content: str) -> MenuDefinition:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid menu YAML: {e}") from e
        return cls.from_dict(_require_mapping(data or {}, "menu"))


def load_menu(path: str | Path) -> MenuDefinition:
    """Load a menu definition from a YAML file."""
    content = Path(path).read_text(encoding="utf-8")
    return MenuDefinition.from_yaml_string(content)


def _require_mapping(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigurationError(f"Expected a mapping for {what}, got {type(value).__name__}")
    return value
