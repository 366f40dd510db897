import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from bs4 import BeautifulSoup, Tag

from ..config import MenuConfig
from ..menu import Menu

logger = logging.getLogger(__name__)

SEPARATOR_CLASSES = ("divider", "separator")
LIST_TAGS = ["ul", "ol"]
_ANCHOR_DATA = {"data-icon": "icon", "data-slug": "slug", "data-component": "component"}


class HtmlMenu(Menu):
    """
    Menu read from nested list markup.

    The first element matching ``selector`` is searched for a ``<ul>`` (or
    ``<ol>``); each ``<li>`` becomes a record and nested lists become its
    children.
    """

    def __init__(self, html: str, selector: str = "nav", config: Optional[MenuConfig] = None):
        super().__init__(config)
        self.html = html
        self.selector = selector

    @classmethod
    def from_file(
        cls, path: Union[str, Path], selector: str = "nav", config: Optional[MenuConfig] = None
    ) -> "HtmlMenu":
        with open(path, "r", encoding="utf-8") as f:
            return cls(f.read(), selector=selector, config=config)

    def prepare_items(self) -> List[Dict[str, Any]]:
        soup = BeautifulSoup(self.html, "html.parser")

        container = soup.select_one(self.selector)
        if container is None:
            logger.warning(f"No element matches menu selector '{self.selector}'")
            return []

        menu_list = container if container.name in LIST_TAGS else container.find(LIST_TAGS)
        if menu_list is None:
            logger.warning(f"No menu list found in '{self.selector}'")
            return []

        return self._walk_list(menu_list)

    def _walk_list(self, menu_list: Tag) -> List[Dict[str, Any]]:
        return [self._parse_item(li) for li in menu_list.find_all("li", recursive=False)]

    def _parse_item(self, li: Tag) -> Dict[str, Any]:
        """Build a record from a list item."""
        classes = li.get("class") or []

        if any(name in SEPARATOR_CLASSES for name in classes):
            return {
                "separator": True,
                "title": _own_text(li),
                "class": " ".join(classes),
            }

        item: Dict[str, Any] = {"id": li.get("id"), "class": " ".join(classes)}

        anchor = self._find_anchor(li)
        if anchor is not None:
            item["title"] = anchor.get_text().strip()
            item["link"] = anchor.get("href", "")
            item["target"] = anchor.get("target", "").lstrip("_")
            item["home"] = anchor.has_attr("data-home")

            params = {}
            for name, value in anchor.attrs.items():
                if name == "data-modal":
                    item["modal"] = value or True
                elif name in _ANCHOR_DATA:
                    item[_ANCHOR_DATA[name]] = value
                elif name.startswith("data-") and name != "data-home":
                    params[name[5:]] = value
            item["params"] = params
        else:
            item["title"] = _own_text(li)

        submenu = li.find(LIST_TAGS)
        if submenu is not None:
            item["children"] = self._walk_list(submenu)

        return item

    @staticmethod
    def _find_anchor(li: Tag) -> Optional[Tag]:
        # First link of the item itself, not of its submenu
        for anchor in li.find_all("a"):
            if anchor.find_parent("li") is li:
                return anchor
        return None


def _own_text(li: Tag) -> str:
    """Text placed directly in the list item, ignoring nested elements."""
    return " ".join(
        text.strip() for text in li.find_all(string=True, recursive=False) if text.strip()
    )
