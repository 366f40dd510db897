import logging
from pathlib import Path
from typing import Dict, List, Sequence, Type

from ..menu import Menu

logger = logging.getLogger(__name__)

class SourceRegistry:
    """Registry for menu item sources."""

    _sources: Dict[str, Type[Menu]] = {}
    _suffixes: Dict[str, str] = {}

    @classmethod
    def register(cls, name: str, source_class: Type[Menu], suffixes: Sequence[str] = ()) -> None:
        """
        Register a menu source.

        Args:
            name (str): Name of the source
            source_class (Type[Menu]): The Menu subclass implementing prepare_items
            suffixes (Sequence[str]): File suffixes this source reads
        """
        if not (isinstance(source_class, type) and issubclass(source_class, Menu)):
            raise TypeError(f"Source '{name}' must be a Menu subclass")

        cls._sources[name] = source_class
        for suffix in suffixes:
            cls._suffixes[suffix.lower()] = name
        logger.debug(f"Registered menu source: {name}")

    @classmethod
    def get(cls, name: str) -> Type[Menu]:
        """
        Get a registered source class by name.

        Raises:
            ValueError: If no source is registered under that name
        """
        try:
            return cls._sources[name]
        except KeyError:
            raise ValueError(
                f"Unknown menu source '{name}' (available: {', '.join(cls.list_sources())})"
            ) from None

    @classmethod
    def for_path(cls, path: str) -> Type[Menu]:
        """Get the source class reading files with the suffix of ``path``."""
        suffix = Path(path).suffix.lower()
        if suffix not in cls._suffixes:
            raise ValueError(f"No menu source reads '{suffix or path}' files")

        name = cls._suffixes[suffix]
        logger.debug(f"Using {name} source for {path}")
        return cls._sources[name]

    @classmethod
    def list_sources(cls) -> List[str]:
        """
        List all registered sources.

        Returns:
            List[str]: Names of registered sources
        """
        return list(cls._sources.keys())
