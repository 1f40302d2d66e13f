"""
md2html: single-pass Markdown to HTML converter.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    md2html README.md -o README.html

Library Usage:
    from md2html import TagConfig, convert

    html = convert("# Title\\n\\nSome *emphasis*.\\n")
    html = convert(text, TagConfig(bold=("<b>", "</b>")))
"""

from .config import ConfigError, TagConfig
from .exceptions import ConvertError, HighlightError
from .highlight import Highlighter, escape_highlighter
from .parser import ConvertFileError, convert, convert_file

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "convert",
    "convert_file",
    # Configuration
    "TagConfig",
    "Highlighter",
    "escape_highlighter",
    # Exceptions
    "ConfigError",
    "ConvertError",
    "ConvertFileError",
    "HighlightError",
    # Version
    "__version__",
]
