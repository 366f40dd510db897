from typing import Any, Optional, Sequence

from ..config import MenuConfig
from ..menu import Menu


class StaticMenu(Menu):
    """Menu built from records held in memory."""

    def __init__(self, items: Sequence[Any] = (), config: Optional[MenuConfig] = None):
        super().__init__(config)
        self.items = list(items)

    def prepare_items(self):
        return self.items
