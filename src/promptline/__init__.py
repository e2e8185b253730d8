"""promptline: a one-line shell status prompt with budget-aware path shortening."""

from promptline.prettify import InvalidPathError, compress_middle, prettify_path

__version__ = "0.1.0"

__all__ = ["InvalidPathError", "compress_middle", "prettify_path"]
