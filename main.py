import sys
from pathlib import Path

from rich.pretty import pprint

from cmdlore import *

__shell__ = True
__prog__ = "cmdlore"


def collect(root, /):
    """
    Yield (logical path, text) for every *.ps1 file under root.
    """
    root = Path(root)
    for file in sorted(root.rglob("*.ps1")):
        yield file.relative_to(root).as_posix(), file.read_text(encoding="utf-8", errors="replace")


def main(argv=None, /):
    argv = sys.argv[1:] if argv is None else argv
    root = argv[0] if argv else "."
    options = dict(argument.partition("=")[::2] for argument in argv[1:])
    groups = build_catalog(CatalogConfig.parse(options), collect(root))
    pprint(groups, expand_all=True)
    return groups


if __name__ == '__main__':
    main()
