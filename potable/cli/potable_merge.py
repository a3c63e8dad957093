#!/usr/bin/env python3
import argparse
import dataclasses
import sys
import warnings
from pathlib import Path
from typing import Optional

import potable
from potable.cli.utils import locale_from_path, read_catalog, set_traceback_limit, write_output
from potable.merge import MergeResult, merge, new_catalog
from potable.po import dump
from potable.settings import DEFAULT_FUZZY_THRESHOLD, MergePolicy, ObsoletePolicy
from potable.warnings import set_warnings_filter


def _parse_cli_args():
    return _parse_args(sys.argv[1:])


def _parse_args(argv):
    warnings.simplefilter("always")

    parser = argparse.ArgumentParser(
        description="Merge a translation catalog with an updated template catalog",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("old", help="Translation catalog (.po). Created if it does not exist")
    parser.add_argument("new", help="Template catalog (.pot)")
    parser.add_argument("--version", action="version", version=potable.__version__)
    parser.add_argument(
        "-o", help="Write the merged catalog here instead of stdout", dest="output_path"
    )
    parser.add_argument(
        "--locale",
        help="Target locale. Defaults to the `Language` header of OLD, or to the\n"
        "<locale> part of an OLD path shaped like <locale>/LC_MESSAGES/<domain>.po",
    )
    parser.add_argument(
        "--on-obsolete",
        help="What to do with entries that are no longer in the template",
        choices=ObsoletePolicy.values(),
        default=ObsoletePolicy.default().value,
        dest="on_obsolete",
    )
    parser.add_argument(
        "--fuzzy-threshold",
        help=f"Minimum msgid similarity for a fuzzy match (default {DEFAULT_FUZZY_THRESHOLD})",
        type=float,
        default=DEFAULT_FUZZY_THRESHOLD,
        dest="fuzzy_threshold",
    )
    parser.add_argument("--no-fuzzy", help="Do not look for fuzzy matches", action="store_true")
    parser.add_argument(
        "--store-previous",
        help="Record the previous msgid (#| comments) on fuzzy matches",
        action="store_true",
        dest="store_previous",
    )
    parser.add_argument(
        "--plural-forms",
        help="Plural-Forms header to write, e.g. 'nplurals=2; plural=(n != 1);'",
        dest="plural_forms",
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
    parser.add_argument("-v", "--verbose", help="Print the merge settings", action="store_true")

    args = parser.parse_args(argv)

    set_traceback_limit(args.traceback_limit, args.verbose)
    if args.warnings_control is not None:
        set_warnings_filter(args.warnings_control)

    policy = MergePolicy(
        on_obsolete=args.on_obsolete,
        fuzzy=not args.no_fuzzy,
        fuzzy_threshold=args.fuzzy_threshold,
        store_previous_message_on_fuzzy_match=args.store_previous,
        plural_forms_header=args.plural_forms,
        locale=args.locale,
    )

    if args.verbose:
        print(f"cli specified: `{policy}`", file=sys.stderr)

    result = merge_files(args.old, args.new, policy)
    write_output(dump(result.catalog), args.output_path)
    print(f"{args.old}: {result.summary}", file=sys.stderr)
    return result


def merge_files(old_path, new_path, policy: Optional[MergePolicy] = None) -> MergeResult:
    """
    Merge the catalog at ``old_path`` with the template at ``new_path``. If
    there is no catalog at ``old_path``, a new one is created from the
    template.
    """
    template = read_catalog(new_path)
    if Path(old_path).exists():
        return merge(read_catalog(old_path), template, policy)

    if policy is None:
        policy = MergePolicy()
    if policy.locale is None:
        policy = dataclasses.replace(policy, locale=locale_from_path(old_path))
    return new_catalog(template, policy)


if __name__ == "__main__":
    _parse_cli_args()
