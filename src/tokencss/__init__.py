"""
tokencss: exported design tokens to a normalized CSS theme.

Typical use::

    from tokencss import build_from_documents

    build = build_from_documents([("light.json", text)])
    print(build.theme_css)
"""

from ._version import __version__
from .config import PipelineConfig, load_config
from .errors import ConfigError, DocumentParseError, TokenCssError, WarningKind
from .models import BuildWarning, Entry, Mode, Namespace, Primitive, Token, TokenSet
from .pipeline import ThemeBuild, build_from_directory, build_from_documents, build_theme

__all__ = [
    "__version__",
    "BuildWarning",
    "ConfigError",
    "DocumentParseError",
    "Entry",
    "Mode",
    "Namespace",
    "PipelineConfig",
    "Primitive",
    "ThemeBuild",
    "Token",
    "TokenCssError",
    "TokenSet",
    "WarningKind",
    "build_from_directory",
    "build_from_documents",
    "build_theme",
    "load_config",
]
