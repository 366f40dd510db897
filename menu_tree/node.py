import logging
import re
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from .utils import amp_replace, merge_classes, split_classes

logger = logging.getLogger(__name__)

_EXTERNAL_LINK = re.compile(r"https?://")
_TARGETS = ("blank", "parent", "self")


class MenuNode:
    """
    A single menu entry.

    Nodes live in a MenuTree arena and reference each other by index: a node
    knows the index of its parent and the ordered indexes of its children.
    Setters return the node so they can be chained.
    """

    def __init__(self):
        self.title = ""
        self.link = ""
        self.id: Optional[str] = None
        self.classes = ""
        self.target = ""
        self.slug = ""
        self.component = ""
        self.icon = ""
        self.modal: Any = ""
        self.root = False
        self.separator = False
        self.home = False
        self.active = False
        self.params: Dict[str, Any] = {}

        self.tree: Optional["MenuTree"] = None
        self.index: Optional[int] = None
        self.parent_index: Optional[int] = None
        self.child_indexes: List[int] = []

    def __repr__(self):
        return f"<MenuNode {self.index}: {self.title!r} link={self.link!r}>"

    def set_root(self) -> "MenuNode":
        """Mark the node as the root of its tree."""
        self.root = True
        self.id = "root"
        self.title = "ROOT"
        return self

    def set_separator(self) -> "MenuNode":
        self.separator = True
        return self

    def set_title(self, title: str) -> "MenuNode":
        self.title = title
        return self

    def set_link(self, link: str) -> "MenuNode":
        self.link = amp_replace(link)
        return self

    def set_id(self, id: Optional[str]) -> "MenuNode":
        self.id = id
        return self

    def set_class(self, classes: Union[str, Iterable[str], None], merge: bool = False) -> "MenuNode":
        """
        Set the node classes.

        Args:
            classes: Space separated class names (or a list of them)
            merge (bool): Keep the current classes and append the new ones
        """
        if merge:
            self.classes = merge_classes(self.classes, classes)
        else:
            self.classes = merge_classes(classes)
        return self

    def set_target(self, target: str) -> "MenuNode":
        self.target = target
        return self

    def set_slug(self, slug: str) -> "MenuNode":
        self.slug = slug
        return self

    def set_component(self, component: str) -> "MenuNode":
        self.component = component
        return self

    def set_icon(self, icon: str) -> "MenuNode":
        self.icon = icon
        return self

    def set_modal(self, modal: Any) -> "MenuNode":
        self.modal = modal
        return self

    def set_home(self, home: bool) -> "MenuNode":
        self.home = bool(home)
        return self

    def set_params(self, params: Mapping[str, Any]) -> "MenuNode":
        """Merge key/value options into the node params."""
        if not isinstance(params, Mapping):
            raise TypeError(f"Node params must be a mapping, got {type(params).__name__}")
        self.params.update(params)
        return self

    def set_active(self) -> "MenuNode":
        """Set the node as active, along with its ancestors below the root."""
        self.active = True

        parent = self.get_parent()
        if parent is not None and not parent.is_root():
            parent.set_active()

        return self

    def set_parent(self, parent: "MenuNode") -> "MenuNode":
        """
        Attach this node as the last child of ``parent``.

        A node attached elsewhere is detached from its previous parent first,
        so a node is only ever listed under a single parent.

        Raises:
            TypeError: If ``parent`` is not a MenuNode
            ValueError: If the attachment would break the tree
        """
        if not isinstance(parent, MenuNode):
            raise TypeError(f"Parent must be a MenuNode, got {type(parent).__name__}")
        if parent is self:
            raise ValueError("A node cannot be its own parent")
        if self.root:
            raise ValueError("The root node cannot have a parent")
        if parent.tree is None:
            raise ValueError("Parent node does not belong to a menu tree")
        if self.tree is not None and self.tree is not parent.tree:
            raise ValueError("Nodes belong to different menu trees")

        parent.tree.add(self)

        if self.parent_index == parent.index:
            return self

        if parent.is_descendant_of(self):
            raise ValueError(f"Cannot attach {self!r} below its own descendant {parent!r}")

        previous = self.get_parent()
        if previous is not None:
            logger.debug(f"Detaching {self!r} from {previous!r}")
            previous.child_indexes.remove(self.index)

        parent.child_indexes.append(self.index)
        self.parent_index = parent.index
        return self

    def add_child(self, child: "MenuNode") -> "MenuNode":
        """Attach ``child`` as the last child of this node."""
        if not isinstance(child, MenuNode):
            raise TypeError(f"Child must be a MenuNode, got {type(child).__name__}")
        child.set_parent(self)
        return self

    def get_title(self) -> str:
        return self.title

    def get_link(self) -> str:
        return self.link

    def get_id(self) -> Optional[str]:
        return self.id

    def get_class(self) -> str:
        return self.classes

    def get_component(self) -> str:
        return self.component

    def get_slug(self) -> str:
        return self.slug

    def get_target(self) -> str:
        return self.target

    def get_icon(self) -> str:
        return self.icon

    def get_modal(self) -> Any:
        return self.modal

    def get_params(self) -> Dict[str, Any]:
        return self.params

    def get_param(self, key: str, default: Any = None) -> Any:
        return self.params.get(key, default)

    def get_parent(self) -> Optional["MenuNode"]:
        if self.parent_index is None or self.tree is None:
            return None
        return self.tree.node(self.parent_index)

    def get_children(self) -> List["MenuNode"]:
        if self.tree is None:
            return []
        return [self.tree.node(index) for index in self.child_indexes]

    def get_depth(self) -> int:
        """Number of ancestors between this node and the top of the tree (root is 0)."""
        depth = 0
        parent = self.get_parent()
        while parent is not None:
            depth += 1
            parent = parent.get_parent()
        return depth

    def is_root(self) -> bool:
        return self.root is True

    def is_separator(self) -> bool:
        return self.separator is True

    def is_active(self) -> bool:
        return self.active is True

    def is_home(self) -> bool:
        return self.home is True

    def is_modal(self) -> bool:
        return bool(self.modal)

    def is_internal(self) -> bool:
        """A link is internal unless it is a bare "#" or an http(s) URL."""
        return self.link != "#" and not _EXTERNAL_LINK.search(self.link)

    def is_descendant_of(self, node: "MenuNode") -> bool:
        parent = self.get_parent()
        while parent is not None:
            if parent is node:
                return True
            parent = parent.get_parent()
        return False

    def has_children(self) -> bool:
        return len(self.child_indexes) > 0

    def has_parent(self) -> bool:
        return self.parent_index is not None

    def has_class(self, classes: Union[str, Iterable[str], None]) -> bool:
        """
        Test if this node has at least one of the given classes.

        Args:
            classes: A class name or a list of class names

        Returns:
            bool: True if one of the classes was found, or if no class was given
        """
        if not classes:
            return True
        if isinstance(classes, str):
            classes = [classes]

        wanted = set(classes)
        return any(token in wanted for token in split_classes(self.classes))

    def get_attr_target(self) -> Optional[str]:
        """Target attribute value ("_blank", "_parent", "_self") or None."""
        if self.target in _TARGETS:
            return f"_{self.target}"
        return None

    def get_route(self) -> Optional[str]:
        if self.link and self.link != "#":
            return self.link
        return None

    def build_id(self) -> "MenuNode":
        """Derive the id from the link path: "/docs/api?x=1" gives "docs-api"."""
        if self.link not in ("", "#"):
            path = self.link.split("?", 1)[0]
            parts = [part for part in path.split("/") if part.strip()]
            self.id = "-".join(parts)
        return self

    def walk(self) -> Iterator["MenuNode"]:
        """Yield every descendant, depth-first, in child order."""
        for child in self.get_children():
            yield child
            yield from child.walk()


class MenuTree:
    """Arena holding every node of a menu, addressed by index."""

    def __init__(self):
        self._nodes: List[MenuNode] = []
        self.root = self.add(MenuNode().set_root())

    def __len__(self):
        return len(self._nodes)

    def __iter__(self) -> Iterator[MenuNode]:
        return iter(self._nodes)

    def add(self, node: MenuNode) -> MenuNode:
        """Register ``node`` in the arena and return it."""
        if not isinstance(node, MenuNode):
            raise TypeError(f"Expected a MenuNode, got {type(node).__name__}")
        if node.tree is self:
            return node
        if node.tree is not None:
            raise ValueError(f"{node!r} already belongs to another menu tree")

        node.tree = self
        node.index = len(self._nodes)
        self._nodes.append(node)
        return node

    def node(self, index: int) -> MenuNode:
        return self._nodes[index]

    def walk(self) -> Iterator[MenuNode]:
        """Yield every node below the root, depth-first."""
        return self.root.walk()
