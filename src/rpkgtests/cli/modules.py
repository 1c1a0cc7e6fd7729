"""Managed <modules> region CLI commands."""

import argparse


def cmd_sync_modules(args: argparse.Namespace) -> int:
    from rpkgtests.modules.sync import sync_modules_file

    action = sync_modules_file(args.pom, args.modules, args.encoding, args.dry_run)
    if args.dry_run:
        print(f"  [DRY RUN] {args.pom}: would be {action}")
    else:
        print(f"  {args.pom}: {action}")
    return 0


def cmd_modules_list(args: argparse.Namespace) -> int:
    from rpkgtests.errors import GenerationIOError
    from rpkgtests.modules.region import read_modules

    try:
        text = args.pom.read_bytes().decode(args.encoding)
    except OSError as e:
        raise GenerationIOError(f"Could not read {args.pom}: {e}", args.pom) from e

    modules = read_modules(text, args.pom)
    print(f"Found {len(modules)} generated modules in {args.pom}:\n")
    for m in modules:
        print(f"  {m}")
    return 0
