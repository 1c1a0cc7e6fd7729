"""Managed <modules> list in a parent pom.xml.

Generated modules are listed between two comment markers:

    <modules>
        <!-- START: modules generated by rpkgtests-maven-plugin -->
        <module>foo-tests</module>
        <!-- END: modules generated by rpkgtests-maven-plugin -->
    </modules>

Everything outside the markers is left untouched, so the rest of the
<modules> element and the file can be edited by hand.
"""

# Marker constants used by region and sync
MODULES_START = "<!-- START: modules generated by rpkgtests-maven-plugin -->"
MODULES_END = "<!-- END: modules generated by rpkgtests-maven-plugin -->"
