"""XML report reader.

Structure (namespaces are ignored):
<jqassistant-report>
  <group id="default" date="...">
    <concept id="java:WriteField">
      <description>...</description>
      <result>
        <columns count="1" primary="Value">
          <column>Value</column>
        </columns>
        <rows count="1">
          <row>
            <column name="Value">
              <element language="Java">WriteField</element>
              <source name="com/acme/Bar.class" line="16"/>
              <value>com.acme.Bar#value</value>
            </column>
          </row>
        </rows>
      </result>
      <status>success</status>
      <severity level="2">major</severity>
    </concept>
    <constraint id="...">...</constraint>
  </group>
</jqassistant-report>

The primary column may also be flagged on the header itself:
<column primary="true">Value</column>.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import structlog

from jqagate.core.errors import ReportError
from jqagate.report.models import (
    Column,
    Finding,
    Group,
    Report,
    ResultSet,
    Row,
    RuleKind,
    RuleResult,
    RuleStatus,
    Severity,
    SourceRef,
)

logger = structlog.get_logger()

_RULE_TAGS: dict[str, RuleKind] = {
    "concept": RuleKind.CONCEPT,
    "constraint": RuleKind.CONSTRAINT,
}


def _local(tag: str) -> str:
    """Strip an ``{namespace}`` prefix from an element tag."""
    return tag.rsplit("}", 1)[-1]


def _child(elem: ET.Element, name: str) -> ET.Element | None:
    for child in elem:
        if _local(child.tag) == name:
            return child
    return None


def _children(elem: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in elem if _local(child.tag) == name]


def _text(elem: ET.Element | None) -> str:
    if elem is None or elem.text is None:
        return ""
    return elem.text.strip()


def _parse_int(value: str | None, element: str) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError as e:
        raise ReportError.invalid_value(element, value, "expected an integer") from e


def _parse_status(value: str, rule_id: str) -> RuleStatus:
    if not value:
        # Older reports omit the status; a recorded rule without it succeeded
        return RuleStatus.SUCCESS
    try:
        return RuleStatus(value.lower())
    except ValueError as e:
        raise ReportError.invalid_value("status", value, f"unknown status for rule '{rule_id}'") from e


def _parse_source_ref(column: ET.Element) -> SourceRef | None:
    element = _child(column, "element")
    source = _child(column, "source")
    if element is None or source is None:
        return None
    language = element.get("language", "")
    name = source.get("name", "")
    if not language or not name:
        return None
    line = _parse_int(source.get("line"), "source") or 0
    if line < 0:
        logger.warning("negative_line", source=name, line=line)
        line = 0
    return SourceRef(language=language, symbolic_path=name, element=_text(element), line=line)


def _parse_primary_column(columns: ET.Element | None) -> str | None:
    if columns is None:
        return None
    primary = columns.get("primary")
    if primary:
        return primary
    for header in _children(columns, "column"):
        if header.get("primary", "").lower() == "true":
            return _text(header)
    return None


def _parse_row(row: ET.Element) -> Row:
    columns: list[Column] = []
    for column in _children(row, "column"):
        columns.append(
            Column(
                name=column.get("name", ""),
                value=_text(_child(column, "value")),
                source_ref=_parse_source_ref(column),
            )
        )
    return Row(columns=tuple(columns))


def _parse_result(result: ET.Element | None) -> ResultSet | None:
    if result is None:
        return None
    rows_elem = _child(result, "rows")
    rows = tuple(_parse_row(r) for r in _children(rows_elem, "row")) if rows_elem is not None else ()
    return ResultSet(primary_column=_parse_primary_column(_child(result, "columns")), rows=rows)


def _parse_severity(elem: ET.Element | None) -> Severity | None:
    if elem is None:
        return None
    return Severity(name=_text(elem), level=_parse_int(elem.get("level"), "severity"))


def _parse_rule(elem: ET.Element, kind: RuleKind) -> RuleResult:
    rule_id = elem.get("id", "")
    if not rule_id:
        raise ReportError.invalid_value(kind.value, "", "missing 'id' attribute")
    return RuleResult(
        kind=kind,
        id=rule_id,
        description=_text(_child(elem, "description")),
        status=_parse_status(_text(_child(elem, "status")), rule_id),
        severity=_parse_severity(_child(elem, "severity")),
        result=_parse_result(_child(elem, "result")),
    )


def parse_report(root: ET.Element) -> Report:
    """Build a Report from a parsed XML document root."""
    groups: list[Group] = []
    for group in root.iter():
        if _local(group.tag) != "group":
            continue
        rules = [
            _parse_rule(child, _RULE_TAGS[_local(child.tag)])
            for child in group
            if _local(child.tag) in _RULE_TAGS
        ]
        groups.append(Group(id=group.get("id", ""), rules=tuple(rules)))
    return Report(groups=groups)


def read_report(path: Path) -> Report:
    """Read an XML report file.

    Raises:
        ReportError: If the file is missing or is not a well-formed report.
    """
    if not path.is_file():
        raise ReportError.not_found(str(path))

    try:
        tree = ET.parse(path)
    except ET.ParseError as e:
        raise ReportError.malformed(str(path), str(e)) from e

    report = parse_report(tree.getroot())
    logger.info(
        "report_loaded",
        path=str(path),
        groups=len(report.groups),
        concepts=len(report.concepts),
        constraints=len(report.constraints),
    )
    return report


def select_findings(report: Report) -> list[Finding]:
    """Pick the rules that produce issues.

    - concepts that failed or matched nothing could not be applied;
    - violated constraints carry their result rows.
    """
    findings: list[Finding] = []
    for rule in report.rules:
        if rule.kind == RuleKind.CONCEPT:
            if rule.status == RuleStatus.FAILURE or (
                rule.status != RuleStatus.SKIPPED and rule.row_count == 0
            ):
                findings.append(Finding(kind=rule.kind, id=rule.id, description=rule.description))
        elif rule.status not in (RuleStatus.SUCCESS, RuleStatus.SKIPPED) and rule.row_count > 0:
            findings.append(
                Finding(
                    kind=rule.kind,
                    id=rule.id,
                    description=rule.description,
                    result=rule.result,
                )
            )
    return findings
