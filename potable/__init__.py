from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _version

from potable.interpolation import placeholders, render
from potable.lookup import Translations
from potable.merge import ChangeSummary, MergeResult, merge, new_catalog
from potable.plural import form_count, form_index
from potable.po import dump, parse_string, serialize
from potable.settings import MergePolicy, ObsoletePolicy

__version__: str
try:
    __version__ = _version(__name__)
except PackageNotFoundError:
    from potable.version import version

    __version__ = version

parse = parse_string

__all__ = [
    "ChangeSummary",
    "MergePolicy",
    "MergeResult",
    "ObsoletePolicy",
    "Translations",
    "dump",
    "form_count",
    "form_index",
    "merge",
    "new_catalog",
    "parse",
    "parse_string",
    "placeholders",
    "render",
    "serialize",
]
