from dataclasses import dataclass
from typing import List, Optional


@dataclass
class MenuConfig:
    """Configuration for building and rendering a menu."""

    active_route: Optional[str] = None  # Route of the current request
    dropdown: bool = True  # Mechanical dropdown, used by attribute hooks
    dropdown_class: str = "dropdown"
    show_children: bool = True  # Render submenus
    only_children: bool = False  # Only render the submenu of the active top-level item
    only_classes: Optional[List[str]] = None
    ignore_classes: Optional[List[str]] = None

    def __post_init__(self):
        if not self.only_classes:
            self.only_classes = None
        if not self.ignore_classes:
            self.ignore_classes = None
