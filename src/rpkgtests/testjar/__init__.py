"""Test jar module: the artifacts modules are generated for."""

from rpkgtests.testjar.model import TestJar
from rpkgtests.testjar.discover import discover_test_jars, parse_gav, read_test_jar_file

__all__ = ["TestJar", "discover_test_jars", "parse_gav", "read_test_jar_file"]
