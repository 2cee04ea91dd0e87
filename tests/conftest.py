"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages and
provides a two-module project with an analysis report.
"""

import sys
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of jqagate modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("jqagate"):
        del sys.modules[module_name]

REPORT = """\
<jqassistant-report>
  <group id="default">
    <concept id="test:Concept">
      <description>TestConcept</description>
      <status>failure</status>
    </concept>
    <constraint id="test:Constraint">
      <description>TestConstraint</description>
      <result>
        <columns count="2" primary="Type">
          <column>Type</column>
          <column>Field</column>
        </columns>
        <rows count="3">
          <row>
            <column name="Type">
              <element language="Java">Type</element>
              <source name="com/acme/Bar.class" line="16"/>
              <value>com.acme.Bar</value>
            </column>
            <column name="Field"><value>value</value></column>
          </row>
          <row>
            <column name="Type">
              <element language="Java">Type</element>
              <source name="com/acme/Baz.class" line="3"/>
              <value>com.acme.Baz</value>
            </column>
            <column name="Field"><value>other</value></column>
          </row>
          <row>
            <column name="Type"><value>unknown</value></column>
            <column name="Field"><value>none</value></column>
          </row>
        </rows>
      </result>
      <status>failure</status>
    </constraint>
  </group>
</jqassistant-report>
"""


@pytest.fixture
def multi_module_project(tmp_path: Path) -> Path:
    """Project root with module-a (Bar) and module-b (Baz) and a report under target/."""
    root = tmp_path / "project"
    for module, type_name in (("module-a", "Bar"), ("module-b", "Baz")):
        src = root / module / "src" / "main" / "java" / "com" / "acme"
        src.mkdir(parents=True)
        (src / f"{type_name}.java").write_text(f"package com.acme;\nclass {type_name} {{}}\n")
    report = root / "target" / "jqassistant" / "jqassistant-report.xml"
    report.parent.mkdir(parents=True)
    report.write_text(REPORT)
    return root
