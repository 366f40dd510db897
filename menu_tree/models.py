from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional

_STRING_FIELDS = ("title", "link", "classes", "icon", "target", "slug", "component")


@dataclass
class MenuItem:
    """A flat menu record, as produced by an item source."""

    title: str = ""
    link: str = ""
    id: Optional[str] = None
    classes: str = ""
    icon: str = ""
    target: str = ""
    slug: str = ""
    component: str = ""
    modal: Any = ""
    home: bool = False
    params: Dict[str, Any] = field(default_factory=dict)
    children: List["MenuItem"] = field(default_factory=list)
    separator: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MenuItem":
        """
        Parse a record from a mapping.

        Args:
            data (Mapping[str, Any]): Record fields; "class" is accepted for "classes"

        Returns:
            MenuItem: The parsed record

        Raises:
            ValueError: If the mapping or one of its fields is malformed
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Menu item must be a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        if "class" in data and "classes" not in values:
            values["classes"] = data["class"]

        for name in _STRING_FIELDS:
            if name in values:
                if values[name] is None:
                    values[name] = ""
                elif not isinstance(values[name], str):
                    raise ValueError(f"Menu item field '{name}' must be a string")

        params = values.get("params")
        if params is None:
            values["params"] = {}
        elif not isinstance(params, Mapping):
            raise ValueError("Menu item field 'params' must be a mapping")
        else:
            values["params"] = dict(params)

        children = values.get("children")
        if children is None:
            values["children"] = []
        elif not isinstance(children, (list, tuple)):
            raise ValueError("Menu item field 'children' must be a list")
        else:
            values["children"] = [cls.coerce(child) for child in children]

        values["home"] = bool(values.get("home", False))
        values["separator"] = bool(values.get("separator", False))

        return cls(**values)

    @classmethod
    def coerce(cls, value: Any) -> "MenuItem":
        """Return ``value`` as a MenuItem, parsing mappings."""
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls.from_dict(value)
        raise TypeError(f"Expected a MenuItem or a mapping, got {type(value).__name__}")

    def has_children(self) -> bool:
        return len(self.children) > 0
