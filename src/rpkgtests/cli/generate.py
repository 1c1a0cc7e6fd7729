"""create-test-modules CLI command."""

import argparse
from pathlib import Path


def _load_config(args: argparse.Namespace):
    from rpkgtests.config import config_from_mapping, default_config_path, load_config
    from rpkgtests.errors import ConfigError

    if args.config or default_config_path().is_file():
        return load_config(args.config)
    # No file: everything must come from the command line
    if not args.rpkg_pom:
        raise ConfigError(
            f"No {default_config_path()} found; pass --config or at least --rpkg-pom"
        )
    return config_from_mapping({"rpkg_module_pom_xml_path": args.rpkg_pom}, Path.cwd())


def cmd_create_test_modules(args: argparse.Namespace) -> int:
    from rpkgtests.generate import generate_test_modules

    config = _load_config(args).replace(
        test_modules_parent_dir=args.parent_dir.resolve() if args.parent_dir else None,
        rpkg_module_pom_xml_path=args.rpkg_pom.resolve() if args.rpkg_pom else None,
        templates_uri_base=args.templates,
        test_module_artifact_id_replacers=args.artifact_id_replacers,
        test_module_dir_replacers=args.dir_replacers,
        clean=False if args.no_clean else None,
        rpkgtests_plugin_version=args.plugin_version,
        test_jars=tuple(args.test_jar) if args.test_jar else None,
        test_jar_files=tuple(args.test_jar_file) if args.test_jar_file else None,
    )

    result = generate_test_modules(config, dry_run=args.dry_run)

    prefix = "[DRY RUN] " if result["dry_run"] else ""
    print(f"  {prefix}Test Module Generation Results")
    print(f"  {'─' * 40}")
    print(f"  Modules:   {len(result['modules'])}")
    for m in result["modules"]:
        print(f"    - {m}")
    print(f"  Deleted:   {len(result['deleted'])}")
    print(f"  Generated: {len(result['generated'])}")
    print(f"  {result['parent']}: {result['action']}")
    return 0
