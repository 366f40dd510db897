from .config import MenuConfig
from .models import MenuItem
from .node import MenuNode, MenuTree
from .menu import Menu
from .sources import SourceRegistry, StaticMenu, JsonMenu, HtmlMenu

__all__ = [
    "MenuConfig",
    "MenuItem",
    "MenuNode",
    "MenuTree",
    "Menu",
    "SourceRegistry",
    "StaticMenu",
    "JsonMenu",
    "HtmlMenu",
]
