#!/usr/bin/env python3
import argparse
import sys
import warnings
from typing import Optional

import potable
from potable.cli.utils import read_catalog, set_traceback_limit
from potable.exceptions import PotableException
from potable.plural import form_count
from potable.po import Catalog
from potable.settings import read_nplurals
from potable.validation import check_placeholders, validate_plural_forms
from potable.warnings import PotableWarning, set_warnings_filter


def _parse_cli_args():
    return _parse_args(sys.argv[1:])


def _parse_args(argv):
    warnings.simplefilter("always")

    parser = argparse.ArgumentParser(description="Check translation catalogs for errors")
    parser.add_argument("input_files", help="Catalogs (.po/.pot) to check", nargs="+")
    parser.add_argument("--version", action="version", version=potable.__version__)
    parser.add_argument(
        "--locale", help="Check plural forms against this locale instead of the `Language` header"
    )
    parser.add_argument(
        "-W",
        help="Turn warnings into errors, or silence them",
        choices=["error", "none"],
        dest="warnings_control",
    )
    parser.add_argument(
        "--traceback-limit",
        help="Set the traceback limit for error messages",
        type=int,
    )

    args = parser.parse_args(argv)

    set_traceback_limit(args.traceback_limit)
    if args.warnings_control is not None:
        set_warnings_filter(args.warnings_control)

    failed = 0
    for path in args.input_files:
        try:
            check_file(path, args.locale)
        except (PotableException, PotableWarning) as e:
            failed += 1
            print(f"{path}: {e}", file=sys.stderr)

    if failed:
        sys.exit(1)


def plural_form_count(catalog: Catalog, locale: Optional[str] = None) -> int:
    """
    The number of plural forms a catalog is expected to use: that of the
    given locale, then that of its `Language` header, then the count in its
    `Plural-Forms` header.
    """
    locale = locale or catalog.headers.get("Language") or None
    if locale is None:
        nplurals = read_nplurals(catalog.headers.get("Plural-Forms"))
        if nplurals is not None:
            return nplurals
    return form_count(locale)


def check_file(path, locale: Optional[str] = None) -> Catalog:
    catalog = read_catalog(path)
    validate_plural_forms(catalog, plural_form_count(catalog, locale))
    check_placeholders(catalog)
    return catalog


if __name__ == "__main__":
    _parse_cli_args()
