#!/usr/bin/env python3
# -*- coding: UTF-8 -*-
import sys

from potable.cli import potable_check, potable_merge

if __name__ == "__main__":
    allowed_subcommands = ("--merge", "--check")

    if len(sys.argv) <= 1 or sys.argv[1] not in allowed_subcommands:
        # default (no args, no switch in first arg): run potable_merge
        potable_merge._parse_cli_args()
    else:
        # pop switch and forward args to subcommand
        subcommand = sys.argv.pop(1)
        if subcommand == "--check":
            potable_check._parse_cli_args()
        else:
            potable_merge._parse_cli_args()
