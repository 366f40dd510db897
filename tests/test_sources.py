import json
import pytest

from menu_tree.config import MenuConfig
from menu_tree.menu import Menu
from menu_tree.sources import HtmlMenu, JsonMenu, SourceRegistry, StaticMenu

NAV_HTML = """
<html>
  <body>
    <nav class="main">
      <ul>
        <li id="home"><a href="/" data-home>Home</a></li>
        <li class="has-sub">
          <a href="/docs" data-icon="book" data-component="docs">Docs</a>
          <ul>
            <li><a href="/docs/api" target="_blank" data-version="2">API</a></li>
          </ul>
        </li>
        <li class="divider"></li>
        <li>Plain</li>
      </ul>
    </nav>
  </body>
</html>
"""

RECORDS = [
    {"title": "Home", "link": "", "home": True},
    {"title": "Docs", "link": "/docs", "children": [{"title": "API", "link": "/docs/api"}]},
]


@pytest.fixture
def json_file(tmp_path):
    path = tmp_path / "menu.json"
    path.write_text(json.dumps(RECORDS), encoding="utf-8")
    return path


def test_json_menu(json_file):
    menu = JsonMenu(json_file, MenuConfig(active_route="/docs/api")).set_menu()
    rendered = menu.to_template()

    assert [item["title"] for item in rendered] == ["Home", "Docs"]
    assert rendered[1]["active"] is True
    assert rendered[1]["children"][0]["route"] == "/docs/api"


def test_json_menu_items_object(tmp_path):
    path = tmp_path / "menu.json"
    path.write_text(json.dumps({"items": RECORDS}), encoding="utf-8")

    assert len(JsonMenu(path).prepare_items()) == 2


@pytest.mark.parametrize("content", ["{not json", json.dumps({"title": "Home"}), "42"])
def test_json_menu_invalid_content(tmp_path, content):
    path = tmp_path / "menu.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError):
        JsonMenu(path).set_menu()


def test_html_menu_records():
    items = HtmlMenu(NAV_HTML, selector="nav.main").prepare_items()

    assert len(items) == 4

    home, docs, divider, plain = items
    assert home["id"] == "home"
    assert home["link"] == "/"
    assert home["home"] is True
    assert home["title"] == "Home"

    assert docs["class"] == "has-sub"
    assert docs["icon"] == "book"
    assert docs["component"] == "docs"
    assert docs["children"][0]["title"] == "API"
    assert docs["children"][0]["target"] == "blank"
    assert docs["children"][0]["params"] == {"version": "2"}

    assert divider["separator"] is True
    assert divider["class"] == "divider"

    assert plain["title"] == "Plain"
    assert "link" not in plain


def test_html_menu_renders():
    menu = HtmlMenu(NAV_HTML, config=MenuConfig(active_route="/docs/api")).set_menu()
    rendered = menu.to_template()

    assert [item["title"] for item in rendered] == ["Home", "Docs", "", "Plain"]
    assert rendered[1]["active"] is True
    assert rendered[1]["children"][0]["active"] is True
    assert rendered[2]["separator"] is True


def test_html_menu_from_file(tmp_path):
    path = tmp_path / "nav.html"
    path.write_text(NAV_HTML, encoding="utf-8")

    menu = HtmlMenu.from_file(path, selector="nav")
    assert len(menu.prepare_items()) == 4


@pytest.mark.parametrize("html", ["<div>No menu</div>", "<nav><p>Empty</p></nav>"])
def test_html_menu_without_list(html):
    assert HtmlMenu(html).set_menu().to_template() == []


def test_static_menu():
    menu = StaticMenu(RECORDS).set_active_route("/").set_menu()
    assert menu.to_template()[0]["active"] is True


def test_registry_lists_builtin_sources():
    assert {"static", "json", "html"} <= set(SourceRegistry.list_sources())
    assert SourceRegistry.get("json") is JsonMenu
    assert SourceRegistry.get("html") is HtmlMenu


@pytest.mark.parametrize(
    "path,source_class",
    [("menu.json", JsonMenu), ("nav.HTML", HtmlMenu), ("nav.htm", HtmlMenu)],
)
def test_registry_for_path(path, source_class):
    assert SourceRegistry.for_path(path) is source_class


def test_registry_errors():
    with pytest.raises(ValueError):
        SourceRegistry.get("yaml")
    with pytest.raises(ValueError):
        SourceRegistry.for_path("menu.txt")
    with pytest.raises(TypeError):
        SourceRegistry.register("bad", dict)


def test_registry_register_custom_source():
    class ListMenu(Menu):
        def prepare_items(self):
            return [{"title": "Only"}]

    SourceRegistry.register("list", ListMenu, suffixes=(".lst",))
    try:
        assert SourceRegistry.get("list") is ListMenu
        assert SourceRegistry.for_path("menu.lst") is ListMenu
    finally:
        SourceRegistry._sources.pop("list")
        SourceRegistry._suffixes.pop(".lst")


def test_html_menu_bare_modal_attribute():
    """A data-modal attribute without a value still flags the item as modal."""
    html = (
        '<nav><ul>'
        '<li><a href="#" data-modal>Login</a></li>'
        '<li><a href="#" data-modal="signup">Sign up</a></li>'
        '<li><a href="/about">About</a></li>'
        '</ul></nav>'
    )
    menu = HtmlMenu(html)
    items = menu.prepare_items()

    assert items[0]["modal"] is True
    assert items[1]["modal"] == "signup"
    assert "modal" not in items[2]
    assert [item["modal"] for item in menu.set_menu().to_template()] == [True, True, False]


def test_html_separator_title_ignores_nested_text():
    html = (
        '<nav><ul>'
        '<li class="divider">Section<ul><li><a href="/hidden">Hidden</a></li></ul></li>'
        '</ul></nav>'
    )
    items = HtmlMenu(html).prepare_items()

    assert items == [{"separator": True, "title": "Section", "class": "divider"}]
