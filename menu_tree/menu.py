import copy
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .config import MenuConfig
from .models import MenuItem
from .node import MenuNode, MenuTree

logger = logging.getLogger(__name__)

WILDCARD_COMPONENT = "_"

ItemCallback = Callable[[MenuItem], Any]
NodeCallback = Callable[[MenuNode], Any]


class Menu(ABC):
    """
    Base class for menus.

    Subclasses supply the flat item records through ``prepare_items``. The
    menu turns them into a node tree, marks the path matching the active
    route and exports the tree as plain dictionaries for templates.
    """

    def __init__(self, config: Optional[MenuConfig] = None):
        """
        Initialize the menu.

        Args:
            config (Optional[MenuConfig]): Configuration for the menu
        """
        self.config = config or MenuConfig()
        self.tree = MenuTree()
        self.node_parser_callbacks: Dict[str, ItemCallback] = {}
        self.node_active_callback: Optional[NodeCallback] = None
        self.node_title_callback: Optional[NodeCallback] = None
        self.node_route_callback: Optional[NodeCallback] = None

    @classmethod
    def create(cls, *args, **kwargs) -> "Menu":
        return cls(*args, **kwargs)

    @property
    def root(self) -> MenuNode:
        return self.tree.root

    def set_active_route(self, active_route: Optional[str]) -> "Menu":
        self.config.active_route = active_route
        return self

    def set_dropdown(self, dropdown: bool) -> "Menu":
        self.config.dropdown = bool(dropdown)
        return self

    def set_dropdown_class(self, dropdown_class: str) -> "Menu":
        self.config.dropdown_class = dropdown_class
        return self

    def set_show_children(self, show_children: bool) -> "Menu":
        self.config.show_children = bool(show_children)
        return self

    def set_only_children(self, only_children: bool) -> "Menu":
        self.config.only_children = bool(only_children)
        return self

    def set_only_classes(self, only_classes: Optional[Iterable[str]]) -> "Menu":
        self.config.only_classes = _class_list(only_classes, "only_classes")
        return self

    def set_ignore_classes(self, ignore_classes: Optional[Iterable[str]]) -> "Menu":
        self.config.ignore_classes = _class_list(ignore_classes, "ignore_classes")
        return self

    def set_node_parser_callback(self, component: str, callback: ItemCallback) -> "Menu":
        """
        Set the record parser for a component.

        Args:
            component (str): Component the callback applies to, "_" for any component
            callback (ItemCallback): Receives a MenuItem, returns the record to build

        Returns:
            Menu: The menu itself
        """
        _check_callable(callback, "node parser")
        if component in self.node_parser_callbacks:
            logger.debug(f"Replacing node parser callback for component '{component}'")
        self.node_parser_callbacks[component] = callback
        return self

    def set_node_active_callback(self, callback: Optional[NodeCallback]) -> "Menu":
        self.node_active_callback = _check_callable(callback, "node active")
        return self

    def set_node_title_callback(self, callback: Optional[NodeCallback]) -> "Menu":
        self.node_title_callback = _check_callable(callback, "node title")
        return self

    def set_node_route_callback(self, callback: Optional[NodeCallback]) -> "Menu":
        self.node_route_callback = _check_callable(callback, "node route")
        return self

    def set_menu(self) -> "Menu":
        """Rebuild the node tree from ``prepare_items`` and mark the active nodes."""
        # Parser callbacks work on copies of the source records
        items = [copy.deepcopy(MenuItem.coerce(item)) for item in self.prepare_items()]

        self.tree = MenuTree()
        self.append_items(items, self.tree.root)
        self.set_active_items(self.tree.root)

        logger.debug(
            f"Built menu with {len(self.tree) - 1} nodes "
            f"for route {self.config.active_route!r}"
        )
        return self

    def to_template(self) -> List[Dict[str, Any]]:
        """
        Export the menu for display.

        With ``only_children`` enabled, the children of the first active
        top-level node are exported instead of the top-level nodes.

        Returns:
            List[Dict[str, Any]]: The rendered items, in menu order
        """
        parent = self.root

        if self.config.only_children:
            for node in parent.get_children():
                if node.is_active():
                    parent = node
                    break

        items = []
        for node in parent.get_children():
            item = self.render(node)
            if item:
                items.append(item)
        return items

    def find(self, predicate: Callable[[MenuNode], bool]) -> List[MenuNode]:
        """Return the nodes of the current tree matching ``predicate``, depth-first."""
        return [node for node in self.tree.walk() if predicate(node)]

    def active_nodes(self) -> List[MenuNode]:
        return self.find(MenuNode.is_active)

    @abstractmethod
    def prepare_items(self) -> Sequence[Any]:
        """Return the flat item records (MenuItem instances or mappings)."""

    def append_items(self, items: Iterable[MenuItem], parent: MenuNode) -> None:
        """
        Create nodes for ``items`` below ``parent``, recursing into submenus.

        Separator records never get children.
        """
        for item in items:
            item = MenuItem.coerce(self.node_parser(item))

            if item.separator:
                node = (
                    MenuNode()
                    .set_class(item.classes)
                    .set_separator()
                    .set_title(item.title)
                )
                parent.add_child(node)
                continue

            node = (
                MenuNode()
                .set_title(item.title)
                .set_link(item.link)
                .set_id(item.id)
                .set_class(item.classes)
                .set_icon(item.icon)
                .set_target(item.target)
                .set_slug(item.slug)
                .set_component(item.component)
                .set_modal(item.modal)
                .set_home(item.home)
                .set_params(item.params)
            )
            parent.add_child(node)

            if item.has_children():
                self.append_items(item.children, node)

    def set_active_items(self, parent: MenuNode) -> None:
        """Mark the nodes below ``parent`` matching the active route."""
        for node in parent.get_children():
            if node.has_children():
                self.set_active_items(node)

            if self.is_active_item(node):
                logger.debug(f"Active menu node: {node!r}")
                node.set_active()

    def is_active_item(self, node: MenuNode) -> bool:
        """
        Check if a node matches the active route.

        Args:
            node (MenuNode): The node to check

        Returns:
            bool: True if the node is active
        """
        if not isinstance(node, MenuNode):
            raise TypeError(f"Expected a MenuNode, got {type(node).__name__}")

        if not node.is_internal():
            return False

        link = node.get_link()
        if link and link == self.config.active_route:
            return True

        if node.is_separator():
            return False

        if link == "" and self.config.active_route == "/":
            return True

        if self.node_active_callback is not None:
            return bool(self.node_active_callback(node))

        return False

    def render(self, node: MenuNode) -> Optional[Dict[str, Any]]:
        """
        Render a node and its submenu.

        Args:
            node (MenuNode): The node to render

        Returns:
            Optional[Dict[str, Any]]: The item, or None if the node is filtered out
        """
        if not isinstance(node, MenuNode):
            raise TypeError(f"Expected a MenuNode, got {type(node).__name__}")

        if self.config.only_classes and not node.has_class(self.config.only_classes):
            logger.debug(f"Skipping {node!r}: no class in {self.config.only_classes}")
            return None

        if self.config.ignore_classes and node.has_class(self.config.ignore_classes):
            logger.debug(f"Skipping {node!r}: ignored class in {self.config.ignore_classes}")
            return None

        container_attrs, link_attrs = self.node_parse_attributes(node)

        item: Dict[str, Any] = {}
        if container_attrs:
            item["container_attrs"] = container_attrs
        if link_attrs:
            item["link_attrs"] = link_attrs

        item["home"] = node.is_home()
        item["separator"] = node.is_separator()
        item["active"] = node.is_active()
        item["modal"] = node.is_modal()
        item["slug"] = node.get_slug()
        item["route"] = self.node_route(node)
        item["icon"] = node.get_icon()
        item["target"] = node.get_target()
        item["id"] = node.get_id()
        item["title"] = self.node_title(node)

        if self.config.show_children and node.has_children():
            children = []
            for child in node.get_children():
                child_item = self.render(child)
                if child_item:
                    children.append(child_item)

            if children:
                item["children"] = children

        return item

    def node_parser(self, item: MenuItem) -> Any:
        """Apply the parser callback registered for the item component, if any."""
        callback = self.node_parser_callbacks.get(item.component)
        if callback is None:
            callback = self.node_parser_callbacks.get(WILDCARD_COMPONENT)
        if callback is None:
            return item
        return callback(item)

    def node_title(self, node: MenuNode) -> str:
        if self.node_title_callback is not None:
            return self.node_title_callback(node)
        return node.get_title()

    def node_route(self, node: MenuNode) -> Optional[str]:
        if self.node_route_callback is not None:
            return self.node_route_callback(node)
        return node.get_route()

    def node_parse_attributes(self, node: MenuNode) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        """Container and link attributes for a node. Override to add some."""
        return {}, {}


def _check_callable(callback, name):
    if callback is not None and not callable(callback):
        raise TypeError(f"The {name} callback must be callable, got {type(callback).__name__}")
    return callback


def _class_list(classes, name):
    if classes is None:
        return None
    if isinstance(classes, str) or not isinstance(classes, (list, tuple, set, frozenset)):
        raise TypeError(f"{name} must be a list of class names, got {type(classes).__name__}")
    return list(classes) or None
