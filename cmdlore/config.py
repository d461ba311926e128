"""
cmdlore configuration: where scripts live and how categories are derived.

CatalogConfig carries
- path: base folder of the scripts inside their repository. Folder
  categories are computed from the segments below it.
- ignore: folder names (case-insensitive) that never become a category
  segment, e.g. "scripts" or "src".
- depth: how many folder segments (1..5) make up a folder category.
- prefer_folder: folder categories win over pattern categories when true;
  pattern categories win when false.

Two ways to build one
- CatalogConfig(...): strict. Wrong types raise TypeError, out-of-range depth
  raises ValueError.
- CatalogConfig.parse(options): lenient, for string options coming from a
  command line or a query string. Depth is clamped, garbage falls back to
  defaults, ignore is comma-separated, preferFolder is true unless "0".
"""
from collections.abc import Iterable, Mapping

from .utils import *

DEFAULT_PATH = "functions"
DEFAULT_DEPTH = 2
DEFAULT_IGNORE = (
    "functions",
    "function",
    "scripts",
    "script",
    "src",
    "source",
    "powershell",
    "pwsh",
    "ps",
    "bin",
    "build",
    ".github",
    ".vscode",
    "lib",
    "modules",
    "module",
    "samples",
    "examples",
    "test",
    "tests",
    "docs",
    "documentation",
)
MIN_DEPTH = 1
MAX_DEPTH = 5


class CatalogConfig:
    __slots__ = ("_path", "_ignore", "_depth", "_prefer_folder")

    path = mirror("path")
    ignore = mirror("ignore")
    depth = mirror("depth")
    prefer_folder = mirror("prefer_folder")

    def __init__(self, path=DEFAULT_PATH, /, ignore=DEFAULT_IGNORE, depth=DEFAULT_DEPTH, prefer_folder=True):
        if not isinstance(path, str):
            raise TypeError("catalog-config 'path' must be a string")
        if isinstance(ignore, str) or not isinstance(ignore, Iterable):
            raise TypeError("catalog-config 'ignore' must be an iterable of strings")
        ignore = tuple(ignore)
        if not all(isinstance(name, str) for name in ignore):
            raise TypeError("catalog-config 'ignore' must be an iterable of strings")
        if not isinstance(depth, int) or isinstance(depth, bool):
            raise TypeError("catalog-config 'depth' must be an integer")
        if not MIN_DEPTH <= depth <= MAX_DEPTH:
            raise ValueError(f"catalog-config 'depth' must be between {MIN_DEPTH} and {MAX_DEPTH}")
        if not isinstance(prefer_folder, bool):
            raise TypeError("catalog-config 'prefer_folder' must be a boolean")

        self._path = slashed(path)
        self._ignore = frozenset(name.strip().lower() for name in ignore if name.strip())
        self._depth = depth
        self._prefer_folder = prefer_folder

    @classmethod
    def parse(cls, options, /):
        """
        Build a config from string options, never failing on bad values.

        Recognized keys: path, ignore, depth, preferFolder. Unknown keys are
        ignored.
        """
        if not isinstance(options, Mapping):
            raise TypeError("CatalogConfig.parse() argument must be a mapping")

        try:
            depth = int(options.get("depth") or DEFAULT_DEPTH)
        except ValueError:
            depth = DEFAULT_DEPTH
        if ignore := options.get("ignore"):
            ignore = [name.strip() for name in ignore.split(",")]
        else:
            ignore = DEFAULT_IGNORE

        return cls(
            options.get("path") or DEFAULT_PATH,
            ignore=[name for name in ignore if name],
            depth=max(MIN_DEPTH, min(MAX_DEPTH, depth or DEFAULT_DEPTH)),
            prefer_folder=options.get("preferFolder", "1") != "0",
        )

    def __repr__(self):
        return "catalog-config(path=%r, ignore=%r, depth=%r, prefer_folder=%r)" % (
            self._path,
            tuple(sorted(self._ignore)),
            self._depth,
            self._prefer_folder,
        )

    def __rich_repr__(self):
        yield "path", self._path
        yield "ignore", tuple(sorted(self._ignore))
        yield "depth", self._depth
        yield "prefer_folder", self._prefer_folder


__all__ = (
    "CatalogConfig",
    "DEFAULT_PATH",
    "DEFAULT_DEPTH",
    "DEFAULT_IGNORE",
)
