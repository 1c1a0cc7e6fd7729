"""Replacer preview CLI command."""

import argparse


def cmd_replace(args: argparse.Namespace) -> int:
    from rpkgtests.replacers import Replacers

    replacers = Replacers.parse(args.replacers)
    for value in args.values:
        print(f"  {value} -> {replacers.apply(value)}")
    return 0
