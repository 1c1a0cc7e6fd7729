"""Shared test fixtures for rpkgtests."""

import shutil
from pathlib import Path

import pytest

from rpkgtests.config import GenerateConfig
from rpkgtests.testjar.model import TestJar

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def project(tmp_path):
    """A Maven project with a tests/ aggregator and a tests/rpkg module."""
    tests_dir = tmp_path / "tests"
    (tests_dir / "rpkg").mkdir(parents=True)
    shutil.copy(FIXTURES / "parent-pom.xml", tests_dir / "pom.xml")
    shutil.copy(FIXTURES / "rpkg-pom.xml", tests_dir / "rpkg" / "pom.xml")
    return tmp_path


@pytest.fixture
def config(project):
    return GenerateConfig(
        basedir=project,
        test_modules_parent_dir=project / "tests",
        rpkg_module_pom_xml_path=project / "tests" / "rpkg" / "pom.xml",
        test_module_artifact_id_replacers="/-tests$/-run-tests/",
        test_module_dir_replacers="/-tests$//",
        rpkgtests_plugin_version="0.4.0",
    )


@pytest.fixture
def jars():
    return [
        TestJar("org.acme", "foo-tests", "1.0.0"),
        TestJar("org.acme", "bar-tests", "1.0.0"),
    ]
