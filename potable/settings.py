import math
import os
import re
from dataclasses import dataclass
from typing import Any, Optional

from potable.exceptions import PolicyException
from potable.utils import StringEnum

POTABLE_ERROR_CONTEXT_LINES = int(os.environ.get("POTABLE_ERROR_CONTEXT_LINES", "1"))
POTABLE_ERROR_LINE_NUMBERS = os.environ.get("POTABLE_ERROR_LINE_NUMBERS", "1") == "1"

POTABLE_TRACEBACK_LIMIT: Optional[int]

_tb_limit_str = os.environ.get("POTABLE_TRACEBACK_LIMIT")
if _tb_limit_str is not None:
    POTABLE_TRACEBACK_LIMIT = int(_tb_limit_str)
else:
    POTABLE_TRACEBACK_LIMIT = None


DEFAULT_FUZZY_THRESHOLD = 0.8

_NPLURALS_RE = re.compile(r"nplurals\s*=\s*(\d+)")


class ObsoletePolicy(StringEnum):
    MARK_AS_OBSOLETE = "mark_as_obsolete"
    DELETE = "delete"

    @classmethod
    def from_string(cls, val):
        match val:
            case "mark_as_obsolete" | "mark":
                return cls.MARK_AS_OBSOLETE
            case "delete":
                return cls.DELETE
        raise PolicyException(
            f"unrecognized on_obsolete value: {val!r} (expected one of {', '.join(cls.values())})"
        )

    @classmethod
    def default(cls):
        return cls.MARK_AS_OBSOLETE


def read_nplurals(plural_forms: Optional[str]) -> Optional[int]:
    """
    Extract the ``nplurals=N`` count from a Plural-Forms header value, or
    return None when the value does not carry one.
    """
    if plural_forms is None:
        return None
    m = _NPLURALS_RE.search(plural_forms)
    if m is None:
        return None
    return int(m.group(1))


@dataclass
class MergePolicy:
    on_obsolete: ObsoletePolicy = ObsoletePolicy.MARK_AS_OBSOLETE
    fuzzy: bool = True
    fuzzy_threshold: float = DEFAULT_FUZZY_THRESHOLD
    store_previous_message_on_fuzzy_match: bool = False
    # None means: derive the header from the target locale
    plural_forms_header: Optional[str] = None
    locale: Optional[str] = None
    plural_rules: Optional[Any] = None

    def __post_init__(self):
        if isinstance(self.on_obsolete, str):
            self.on_obsolete = ObsoletePolicy.from_string(self.on_obsolete)
        if not isinstance(self.on_obsolete, ObsoletePolicy):
            raise PolicyException(f"invalid on_obsolete value: {self.on_obsolete!r}")

        threshold = self.fuzzy_threshold
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise PolicyException(f"fuzzy_threshold must be a number, got {threshold!r}")
        if math.isnan(threshold) or not 0.0 <= threshold <= 1.0:
            raise PolicyException(f"fuzzy_threshold must be between 0.0 and 1.0, got {threshold}")
        self.fuzzy_threshold = float(threshold)

        if self.plural_forms_header is not None:
            nplurals = read_nplurals(self.plural_forms_header)
            if nplurals is None or nplurals < 1:
                raise PolicyException(
                    f"invalid plural_forms_header {self.plural_forms_header!r}: "
                    "expected a positive `nplurals=N`"
                )

    @classmethod
    def from_dict(cls, data):
        return cls(**data)
