"""Template lookup and rendering for the generated pom.xml files.

Templates are Jinja2. The bundled set lives in the package under
create-test-modules-templates/; a custom templates URI base takes
precedence per template and falls back to the bundled set.
"""

RUN_TESTS_MODULE_TEMPLATE = "run-tests-module-pom.xml"
RPKG_MODULE_TEMPLATE = "rpkg-module-pom.xml"
