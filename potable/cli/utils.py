import sys
from pathlib import Path
from typing import Optional

from potable.po import Catalog, parse_string
from potable.settings import POTABLE_TRACEBACK_LIMIT


def read_catalog(path) -> Catalog:
    path = Path(path)
    # utf-8-sig drops a leading byte order mark
    with path.open(encoding="utf-8-sig") as f:
        source = f.read()
    return parse_string(source, str(path))


def write_output(output: str, output_path: Optional[str]) -> None:
    if output_path:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(output)
    else:
        sys.stdout.write(output)


def locale_from_path(path) -> Optional[str]:
    """
    Guess the locale of a catalog laid out as `<locale>/LC_MESSAGES/<domain>.po`.
    """
    parent = Path(path).parent
    if parent.name == "LC_MESSAGES" and parent.parent.name:
        return parent.parent.name
    return None


def set_traceback_limit(traceback_limit: Optional[int], verbose: bool = False) -> None:
    if traceback_limit is not None:
        sys.tracebacklimit = traceback_limit
    elif POTABLE_TRACEBACK_LIMIT is not None:
        sys.tracebacklimit = POTABLE_TRACEBACK_LIMIT
    elif verbose:
        sys.tracebacklimit = 1000
    else:
        # Python usually defaults sys.tracebacklimit to 1000. We use a default
        # setting of zero so error printouts only show the annotated catalog
        # excerpt.
        sys.tracebacklimit = 0
