"""Generate one Maven module per test jar and list them in the parent pom.xml.

The generation process:
1. Resolve the test jars and read the parent and rpkg module poms
2. Parse the artifactId and directory replacers, derive the directory names
3. Optionally delete previously generated module directories
4. Render <parent>/<dir>/pom.xml for every test jar
5. Render the rpkg module pom.xml once
6. Sync the managed <modules> region of the parent pom.xml

Any failure aborts the run. Re-running converges, so nothing is retried.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from rpkgtests.config import GenerateConfig
from rpkgtests.errors import ConfigError, GenerationIOError
from rpkgtests.modules.sync import sync_modules_file
from rpkgtests.replacers import Replacers
from rpkgtests.templates import RPKG_MODULE_TEMPLATE, RUN_TESTS_MODULE_TEMPLATE
from rpkgtests.templates.loader import create_environment
from rpkgtests.templates.render import TemplateParams, eval_template
from rpkgtests.testjar.discover import discover_test_jars
from rpkgtests.testjar.model import TestJar

log = logging.getLogger(__name__)

PARENT_RELATIVE_PATH = "../pom.xml"


def find_generated_modules(parent_dir: Path) -> list[Path]:
    """Subdirectories of parent_dir that contain a pom.xml."""
    try:
        children = sorted(parent_dir.iterdir())
    except OSError as e:
        raise GenerationIOError(f"Could not walk {parent_dir}: {e}", parent_dir) from e
    return [p for p in children if p.is_dir() and (p / "pom.xml").is_file()]


def clean_generated_modules(parent_dir: Path, dry_run: bool = False) -> list[Path]:
    """Delete every module directory under parent_dir.

    Raises:
        GenerationIOError: On the first directory that can't be deleted.
    """
    deleted = []
    for module_dir in find_generated_modules(parent_dir):
        if not dry_run:
            try:
                shutil.rmtree(module_dir)
            except OSError as e:
                raise GenerationIOError(f"Could not delete {module_dir}: {e}", module_dir) from e
        log.info("Deleted %s", module_dir)
        deleted.append(module_dir)
    return deleted


def module_dir_name(dir_replacers: Replacers, artifact_id: str) -> str:
    """Directory name of the module generated for artifact_id.

    Raises:
        ConfigError: If the replacers yield an empty name, "." or "..", or a
            name containing a path separator.
    """
    name = dir_replacers.apply(artifact_id)
    if name in ("", ".", "..") or "/" in name or "\\" in name:
        raise ConfigError(
            f"Directory replacers turn '{artifact_id}' into '{name}', which is not a directory name"
        )
    return name


def resolve_test_jars(config: GenerateConfig) -> list[TestJar]:
    """Test jars configured in config, failing if there are none."""
    jars = discover_test_jars(config.test_jars, config.test_jar_files, config.basedir)
    if not jars:
        raise ConfigError("No test jars configured; set test-jars or test-jar-files")
    return jars


def generate_test_modules(
    config: GenerateConfig,
    test_jars: Sequence[TestJar] | None = None,
    dry_run: bool = False,
) -> dict[str, Any]:
    """Run one generation.

    Args:
        config: Generation settings.
        test_jars: Test jars to generate modules for. Discovered from
            config when omitted.
        dry_run: Report what would change without touching the filesystem.

    Returns:
        Dict with the module names, the generated and deleted paths, the
        parent pom.xml path and the action taken on it.
    """
    jars = tuple(test_jars) if test_jars is not None else tuple(resolve_test_jars(config))
    if not jars:
        raise ConfigError("No test jars to generate modules for")

    parent_dir = config.parent_dir
    parent_pom_path = config.parent_pom_path
    parent_pom = TestJar.read(parent_pom_path, config.encoding)
    artifact_id_replacers = Replacers.parse(config.test_module_artifact_id_replacers)
    dir_replacers = Replacers.parse(config.test_module_dir_replacers)
    rpkg_pom = TestJar.read(config.rpkg_module_pom_xml_path, config.encoding)
    module_dirs = [module_dir_name(dir_replacers, jar.artifact_id) for jar in jars]

    deleted: list[Path] = []
    if config.clean:
        deleted = clean_generated_modules(parent_dir, dry_run)

    env = create_environment(config.basedir, config.templates_uri_base)

    modules: list[str] = []
    generated: list[str] = []
    for jar, dir_name in zip(jars, module_dirs):
        artifact_id = artifact_id_replacers.apply(jar.artifact_id)
        module_dir = parent_dir / dir_name
        modules.append(dir_name)
        pom_xml_path = module_dir / "pom.xml"
        generated.append(str(pom_xml_path))
        log.info("Generating %s for %s", pom_xml_path, jar.gav)
        if dry_run:
            continue

        try:
            module_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise GenerationIOError(f"Could not create {module_dir}: {e}", module_dir) from e
        params = TemplateParams(
            parent=parent_pom,
            parent_relative_path=PARENT_RELATIVE_PATH,
            run_tests_module=parent_pom.with_artifact_id(artifact_id),
            rpkg_module=rpkg_pom,
            test_jar=jar,
            test_jars=jars,
            rpkgtests_plugin_version=config.rpkgtests_plugin_version,
        )
        eval_template(env, RUN_TESTS_MODULE_TEMPLATE, pom_xml_path, params, config.encoding)

    rpkg_params = TemplateParams(
        parent=parent_pom,
        parent_relative_path=PARENT_RELATIVE_PATH,
        run_tests_module=None,
        rpkg_module=rpkg_pom,
        test_jar=None,
        test_jars=jars,
        rpkgtests_plugin_version=config.rpkgtests_plugin_version,
    )
    generated.append(str(config.rpkg_module_pom_xml_path))
    if not dry_run:
        eval_template(env, RPKG_MODULE_TEMPLATE, config.rpkg_module_pom_xml_path, rpkg_params, config.encoding)

    action = sync_modules_file(parent_pom_path, modules, config.encoding, dry_run)

    return {
        "modules": modules,
        "generated": generated,
        "deleted": [str(p) for p in deleted],
        "parent": str(parent_pom_path),
        "action": action,
        "dry_run": dry_run,
    }
