"""Command line interface for rpkgtests.

Usage:
    rpkgtests create-test-modules [--config <path>] [--parent-dir <dir>] [--rpkg-pom <path>]
                                  [--templates <uri>] [--artifact-id-replacers <spec>]
                                  [--dir-replacers <spec>] [--no-clean] [--plugin-version <v>]
                                  [--test-jar <gav>]... [--test-jar-file <jar>]... [--dry-run]
    rpkgtests sync-modules <pom> [<module>...] [--dry-run]
    rpkgtests modules list <pom>
    rpkgtests replace <spec> <value>...
"""

import argparse
import sys
from pathlib import Path

from rpkgtests import __version__
from rpkgtests.cli.generate import cmd_create_test_modules
from rpkgtests.cli.modules import cmd_modules_list, cmd_sync_modules
from rpkgtests.cli.replace import cmd_replace
from rpkgtests.errors import RpkgtestsError
from rpkgtests.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rpkgtests",
        description="Generate Maven modules that run repackaged test jars",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log debug output to stderr",
    )
    sub = parser.add_subparsers(dest="command")

    # create-test-modules
    gen = sub.add_parser(
        "create-test-modules", help="Generate one module per test jar",
    )
    gen.add_argument(
        "--config", default=None,
        help="Path to rpkgtests.yaml (default: $RPKGTESTS_CONFIG or ./rpkgtests.yaml)",
    )
    gen.add_argument(
        "--parent-dir", type=Path, default=None,
        help="Directory to generate the test modules under",
    )
    gen.add_argument(
        "--rpkg-pom", type=Path, default=None,
        help="pom.xml of the module producing the repackaged jars",
    )
    gen.add_argument(
        "--templates", default=None,
        help="Templates URI base (package:/... or file:...)",
    )
    gen.add_argument(
        "--artifact-id-replacers", default=None,
        help="/pattern/replacement/ list deriving module artifactIds",
    )
    gen.add_argument(
        "--dir-replacers", default=None,
        help="/pattern/replacement/ list deriving module directory names",
    )
    gen.add_argument(
        "--no-clean", action="store_true",
        help="Keep existing module directories instead of deleting them first",
    )
    gen.add_argument(
        "--plugin-version", default=None,
        help="rpkgtests-maven-plugin version to put in the rpkg module",
    )
    gen.add_argument(
        "--test-jar", action="append", default=None, metavar="GAV",
        help="groupId:artifactId[:version] of a test jar (repeatable)",
    )
    gen.add_argument(
        "--test-jar-file", action="append", default=None, metavar="JAR",
        help="Path to a test jar file (repeatable)",
    )
    gen.add_argument(
        "--dry-run", action="store_true",
        help="Report without writing or deleting anything",
    )

    # sync-modules
    sync = sub.add_parser(
        "sync-modules", help="Rewrite the managed <modules> region of a pom.xml",
    )
    sync.add_argument("pom", type=Path, help="Path to the parent pom.xml")
    sync.add_argument("modules", nargs="*", help="Module directory names, in order")
    sync.add_argument("--encoding", default="utf-8")
    sync.add_argument(
        "--dry-run", action="store_true",
        help="Report without writing",
    )

    # modules
    mod = sub.add_parser("modules", help="Managed <modules> region operations")
    mod_sub = mod.add_subparsers(dest="subcommand")
    mod_list = mod_sub.add_parser("list", help="List generated modules of a pom.xml")
    mod_list.add_argument("pom", type=Path, help="Path to the parent pom.xml")
    mod_list.add_argument("--encoding", default="utf-8")

    # replace
    rep = sub.add_parser(
        "replace", help="Preview what a replacer list does to some values",
    )
    rep.add_argument("replacers", help="/pattern/replacement/ list")
    rep.add_argument("values", nargs="+", help="Values to apply the replacers to")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(args.verbose)

    dispatch = {
        ("create-test-modules", ""): cmd_create_test_modules,
        ("sync-modules", ""): cmd_sync_modules,
        ("modules", "list"): cmd_modules_list,
        ("replace", ""): cmd_replace,
    }

    subcommand: str | None = getattr(args, "subcommand", None)
    handler = dispatch.get((args.command, subcommand or ""))
    if not handler:
        parser.parse_args([args.command, "--help"])
        return 0

    try:
        return handler(args)
    except (RpkgtestsError, FileNotFoundError) as e:
        print(f"  ERROR: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
