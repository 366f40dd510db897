import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from ..config import MenuConfig
from ..menu import Menu

logger = logging.getLogger(__name__)


class JsonMenu(Menu):
    """
    Menu read from a JSON file.

    The file holds either a list of records or an object with an "items" list.
    """

    def __init__(self, path: Union[str, Path], config: Optional[MenuConfig] = None):
        super().__init__(config)
        self.path = Path(path)

    def prepare_items(self) -> List[Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {self.path}: {e}") from e

        if isinstance(data, dict):
            data = data.get("items")

        if not isinstance(data, list):
            raise ValueError(f"{self.path} must hold a list of menu items")

        logger.debug(f"Loaded {len(data)} menu items from {self.path}")
        return data
