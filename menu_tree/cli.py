#!/usr/bin/env python3
import click
import json
import logging
import sys
from typing import Optional, Tuple

from .config import MenuConfig
from .sources import HtmlMenu, SourceRegistry


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


@click.group()
def cli():
    """Menu Tree CLI - Build navigation menus and export them for templates."""
    pass


@cli.command()
@click.argument("source_file", type=click.Path(exists=True, dir_okay=False))
@click.option("-r", "--route", default=None, help="Active route of the current request")
@click.option(
    "-s",
    "--source",
    type=click.Choice(["json", "html"]),
    default=None,
    help="Source format (guessed from the file suffix by default)",
)
@click.option("--selector", default="nav", help="CSS selector of the menu container (html)")
@click.option(
    "--only-children",
    is_flag=True,
    help="Only render the submenu of the active top-level item",
)
@click.option(
    "--only-class", "only_classes", multiple=True, help="Only render items with this class"
)
@click.option(
    "--ignore-class", "ignore_classes", multiple=True, help="Skip items with this class"
)
@click.option("--no-children", is_flag=True, help="Do not render submenus")
@click.option("-i", "--indent", default=2, help="JSON indentation")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
def render(
    source_file: str,
    route: Optional[str],
    source: Optional[str],
    selector: str,
    only_children: bool,
    only_classes: Tuple[str, ...],
    ignore_classes: Tuple[str, ...],
    no_children: bool,
    indent: int,
    verbose: bool,
):
    """Build the menu described in SOURCE_FILE and print it as JSON."""
    setup_logging(verbose)
    logger = logging.getLogger(__name__)

    try:
        config = MenuConfig(
            active_route=route,
            show_children=not no_children,
            only_children=only_children,
            only_classes=list(only_classes),
            ignore_classes=list(ignore_classes),
        )

        if source:
            source_class = SourceRegistry.get(source)
        else:
            source_class = SourceRegistry.for_path(source_file)

        if source_class is HtmlMenu:
            menu = HtmlMenu.from_file(source_file, selector=selector, config=config)
        else:
            menu = source_class(source_file, config=config)

        items = menu.set_menu().to_template()
        click.echo(json.dumps(items, indent=indent, ensure_ascii=False))
        return 0

    except Exception as e:
        logger.error(f"Failed to render menu: {str(e)}")
        return 1


@cli.command()
def sources():
    """List the available menu sources."""
    for name in SourceRegistry.list_sources():
        click.echo(name)
    return 0


def main():
    return cli(standalone_mode=False) or 0


if __name__ == "__main__":
    sys.exit(main())
