from .registry import SourceRegistry
from .static import StaticMenu
from .json_file import JsonMenu
from .html import HtmlMenu

# Register built-in sources
SourceRegistry.register('static', StaticMenu)
SourceRegistry.register('json', JsonMenu, suffixes=('.json',))
SourceRegistry.register('html', HtmlMenu, suffixes=('.html', '.htm'))

__all__ = ['SourceRegistry', 'StaticMenu', 'JsonMenu', 'HtmlMenu']
