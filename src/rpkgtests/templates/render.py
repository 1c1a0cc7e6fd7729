"""Render a generated pom.xml from a named template."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from jinja2 import Environment, TemplateError, TemplateNotFound

from rpkgtests.errors import GenerationIOError, RenderError
from rpkgtests.testjar.model import TestJar

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TemplateParams:
    """Data model handed to the templates.

    run_tests_module and test_jar are None when rendering the rpkg module.
    """

    parent: TestJar
    parent_relative_path: str
    run_tests_module: TestJar | None
    rpkg_module: TestJar
    test_jar: TestJar | None
    test_jars: tuple[TestJar, ...]
    rpkgtests_plugin_version: str | None

    def as_context(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def eval_template(
    env: Environment,
    template_name: str,
    dest: Path,
    params: TemplateParams,
    encoding: str = "utf-8",
) -> None:
    """Render template_name with params and write the result to dest.

    Raises:
        RenderError: If the template is missing or fails to evaluate.
        GenerationIOError: If dest can't be written.
    """
    try:
        template = env.get_template(template_name)
        content = template.render(params.as_context())
    except TemplateNotFound as e:
        raise RenderError(f"Template {template_name} not found", template_name) from e
    except TemplateError as e:
        raise RenderError(f"Could not render {template_name} into {dest}: {e}", template_name) from e

    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(content.encode(encoding))
    except OSError as e:
        raise GenerationIOError(f"Could not write {dest}: {e}", dest) from e
    log.debug("Rendered %s into %s", template_name, dest)
