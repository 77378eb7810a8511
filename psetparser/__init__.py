"""psetparser library

Reads IFC property and quantity set definitions from the html pages of the
IFC documentation.
"""
from importlib.metadata import version

from psetparser.kernel.enum_cache import EnumerationCache
from psetparser.parser import HtmlPsetDefinitionParser, ParserSession
from psetparser.settings import ParserSettings


try:
    __version__ = version("psetparser")
except Exception:
    __version__ = "unknown"
