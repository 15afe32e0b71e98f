"""Working-copy root detection and caching."""

from .cache import RootCache
from .resolver import RootResolver, containing_directory, parse_root_path

__all__ = ["RootCache", "RootResolver", "containing_directory", "parse_root_path"]
