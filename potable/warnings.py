import warnings
from typing import Optional

from potable.exceptions import _BasePotableException


class PotableWarning(_BasePotableException, Warning):
    pass


# print a warning
def potable_warn(warning: PotableWarning | str, location=None):
    if isinstance(warning, str):
        warning = PotableWarning(warning, location)
    warnings.warn(warning, stacklevel=2)


def set_warnings_filter(warnings_control: Optional[str]):
    if warnings_control == "error":
        warnings_filter = "error"
    elif warnings_control == "none":
        warnings_filter = "ignore"
    else:
        assert warnings_control is None  # sanity
        warnings_filter = "default"

    if warnings_control is not None:
        # warnings.simplefilter only adds to the warnings filters,
        # so we should clear warnings filter between calls to simplefilter()
        warnings.resetwarnings()

    warnings.simplefilter(warnings_filter, category=PotableWarning)  # type: ignore[arg-type]


class MalformedHeader(PotableWarning):
    """
    A header line of the catalog is not of the form `Key: value`
    """

    pass


class PluralFormsMismatch(PotableWarning):
    """
    Warn if an entry carries plural forms outside the locale's form count
    """

    pass


class PlaceholderMismatch(PotableWarning):
    """
    Warn if a translation uses placeholders its source string does not have
    """

    pass
