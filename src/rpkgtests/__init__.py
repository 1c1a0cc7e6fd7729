"""rpkgtests: generate Maven modules that run repackaged test jars.

Each discovered test jar gets its own sibling module directory with a
generated pom.xml, and the parent pom.xml's <modules> list is kept in sync
through a marker-delimited managed region.
"""

__version__ = "0.4.0"
