"""Tests for template lookup and rendering."""

from pathlib import Path

import pytest
from jinja2 import ChoiceLoader, PackageLoader

from rpkgtests.errors import ConfigError, RenderError
from rpkgtests.templates import RPKG_MODULE_TEMPLATE, RUN_TESTS_MODULE_TEMPLATE
from rpkgtests.templates.loader import (
    DEFAULT_TEMPLATES_URI_BASE,
    create_environment,
    create_template_loader,
)
from rpkgtests.templates.render import TemplateParams, eval_template
from rpkgtests.testjar.model import TestJar

PARENT = TestJar("org.acme", "acme-tests", "1.0.0-SNAPSHOT")
RPKG = TestJar("org.acme", "acme-tests-rpkg", "1.0.0-SNAPSHOT")
FOO = TestJar("org.acme", "foo-tests", "1.0.0")
BAR = TestJar("org.acme", "bar-tests", "1.0.0")


def _module_params(**overrides):
    values = dict(
        parent=PARENT,
        parent_relative_path="../pom.xml",
        run_tests_module=PARENT.with_artifact_id("foo-run-tests"),
        rpkg_module=RPKG,
        test_jar=FOO,
        test_jars=(FOO, BAR),
        rpkgtests_plugin_version="0.4.0",
    )
    values.update(overrides)
    return TemplateParams(**values)


class TestLoader:
    def test_default_is_bundled(self, tmp_path):
        loader = create_template_loader(tmp_path, DEFAULT_TEMPLATES_URI_BASE)
        assert isinstance(loader, PackageLoader)

    def test_file_override_chains_to_bundled(self, tmp_path):
        loader = create_template_loader(tmp_path, "file:templates")
        assert isinstance(loader, ChoiceLoader)
        assert len(loader.loaders) == 2

    def test_unknown_scheme(self, tmp_path):
        with pytest.raises(ConfigError, match="only values starting with"):
            create_template_loader(tmp_path, "http://example.com/templates")

    def test_missing_package_dir(self, tmp_path):
        with pytest.raises(ConfigError):
            create_template_loader(tmp_path, "package:/no-such-templates")

    def test_bundled_templates_present(self, tmp_path):
        env = create_environment(tmp_path)
        assert env.get_template(RUN_TESTS_MODULE_TEMPLATE)
        assert env.get_template(RPKG_MODULE_TEMPLATE)

    def test_override_falls_back_per_template(self, tmp_path):
        custom = tmp_path / "templates"
        custom.mkdir()
        (custom / RUN_TESTS_MODULE_TEMPLATE).write_text("custom {{ test_jar.artifact_id }}\n")
        env = create_environment(tmp_path, "file:templates")

        assert env.get_template(RUN_TESTS_MODULE_TEMPLATE).render(test_jar=FOO) == "custom foo-tests\n"
        assert "<project" in env.get_template(RPKG_MODULE_TEMPLATE).render(
            _module_params(run_tests_module=None, test_jar=None).as_context()
        )


class TestEvalTemplate:
    def test_run_tests_module(self, tmp_path):
        dest = tmp_path / "foo" / "pom.xml"
        eval_template(create_environment(tmp_path), RUN_TESTS_MODULE_TEMPLATE, dest, _module_params())
        content = dest.read_text()
        assert "<artifactId>foo-run-tests</artifactId>" in content
        assert "<relativePath>../pom.xml</relativePath>" in content
        assert "<version>1.0.0-SNAPSHOT</version>" in content
        assert "<classifier>foo-tests</classifier>" in content
        assert content.endswith("</project>\n")

    def test_rpkg_module_lists_all_jars(self, tmp_path):
        dest = tmp_path / "rpkg" / "pom.xml"
        params = _module_params(run_tests_module=None, test_jar=None)
        eval_template(create_environment(tmp_path), RPKG_MODULE_TEMPLATE, dest, params)
        content = dest.read_text()
        assert "<artifactId>acme-tests-rpkg</artifactId>" in content
        assert content.index("<artifactId>foo-tests</artifactId>") < content.index(
            "<artifactId>bar-tests</artifactId>"
        )
        assert "<version>0.4.0</version>" in content

    def test_version_omitted_when_absent(self, tmp_path):
        dest = tmp_path / "pom.xml"
        params = _module_params(parent=TestJar("org.acme", "acme-tests"))
        eval_template(create_environment(tmp_path), RUN_TESTS_MODULE_TEMPLATE, dest, params)
        parent_block = dest.read_text().split("</parent>")[0]
        assert "<version>" not in parent_block

    def test_missing_template(self, tmp_path):
        env = create_environment(tmp_path)
        with pytest.raises(RenderError, match="not found") as exc_info:
            eval_template(env, "nope.xml", tmp_path / "pom.xml", _module_params())
        assert exc_info.value.template == "nope.xml"

    def test_undefined_variable(self, tmp_path):
        custom = tmp_path / "templates"
        custom.mkdir()
        (custom / RUN_TESTS_MODULE_TEMPLATE).write_text("{{ no_such_variable }}")
        env = create_environment(tmp_path, "file:templates")
        dest = tmp_path / "out" / "pom.xml"
        with pytest.raises(RenderError):
            eval_template(env, RUN_TESTS_MODULE_TEMPLATE, dest, _module_params())
        assert not dest.exists()

    def test_rpkg_template_rejects_module_fields(self, tmp_path):
        # run_tests_module is None for the rpkg module; templates touching it fail loudly
        custom = tmp_path / "templates"
        custom.mkdir()
        (custom / RPKG_MODULE_TEMPLATE).write_text("{{ test_jar.artifact_id }}")
        env = create_environment(tmp_path, "file:templates")
        params = _module_params(run_tests_module=None, test_jar=None)
        with pytest.raises(RenderError):
            eval_template(env, RPKG_MODULE_TEMPLATE, tmp_path / "pom.xml", params)
