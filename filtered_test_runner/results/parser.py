"""Parser for NUnit 3 style test results documents.

Structure:
<test-run total="3" passed="1" failed="1" skipped="1"
          start-time="..." end-time="..." duration="0.5">
  <test-suite type="Assembly" name="...">
    <test-suite type="TestFixture" name="...">
      <test-case name="..." result="Passed" duration="0.1"/>
      <test-case name="..." result="Failed" duration="0.2">
        <failure>
          <message>...</message>
          <stack-trace>...</stack-trace>
        </failure>
      </test-case>
    </test-suite>
  </test-suite>
</test-run>
"""

import logging
import math
import xml.etree.ElementTree as ET
from collections.abc import Iterator

from filtered_test_runner.errors import MalformedDocumentError
from filtered_test_runner.models.result import FailedTestDetail, RunOutcome

log = logging.getLogger(__name__)

FAILURE_RESULTS = frozenset({"failed", "failure", "error"})


def parse_test_results(document: str) -> RunOutcome:
    """Parse a test results document into a run outcome.

    Root counters ``total``, ``passed``, ``failed`` and ``duration`` are
    required; ``skipped`` defaults to 0 and the timestamps to empty strings.
    The document's own ``total`` is kept even if it differs from the sum of
    the other counters.

    Raises:
        MalformedDocumentError: If the document is empty, not well-formed,
            or lacks a valid required attribute

    """
    if document is None or not document.strip():
        raise MalformedDocumentError("Test results document is empty")

    try:
        root = ET.fromstring(document)
    except ET.ParseError as e:
        raise MalformedDocumentError(f"Test results XML is not well-formed: {e}") from e

    total = _required_int(root, "total")
    passed = _required_int(root, "passed")
    failed = _required_int(root, "failed")
    skipped = _optional_int(root, "skipped")
    duration = _required_float(root, "duration")

    failed_details = [
        _failed_detail(case, suite_name)
        for case, suite_name in _iter_test_cases(root, "")
        if case.get("result", "").strip().lower() in FAILURE_RESULTS
    ]

    outcome = RunOutcome(
        total=total,
        passed=passed,
        failed=failed,
        skipped=skipped,
        duration_seconds=duration,
        start_time=root.get("start-time", ""),
        end_time=root.get("end-time", ""),
        failed_details=tuple(failed_details),
    )

    log.debug(
        "Parsed test results: %d total, %d failed test case(s) captured",
        outcome.total,
        len(outcome.failed_details),
    )
    return outcome


def _iter_test_cases(
    element: ET.Element, suite_name: str
) -> Iterator[tuple[ET.Element, str]]:
    """Yield test cases in document order with their nearest suite name."""
    for child in element:
        if child.tag == "test-case":
            yield child, suite_name
        elif child.tag == "test-suite":
            yield from _iter_test_cases(child, child.get("name", ""))
        else:
            yield from _iter_test_cases(child, suite_name)


def _failed_detail(case: ET.Element, suite_name: str) -> FailedTestDetail:
    failure = case.find("failure")
    return FailedTestDetail(
        test_name=case.get("name", ""),
        test_suite=suite_name,
        failure_message=_child_text(failure, "message"),
        stack_trace=_child_text(failure, "stack-trace"),
        duration_seconds=_optional_float(case, "duration"),
        result_label=case.get("result", ""),
    )


def _child_text(element: ET.Element | None, tag: str) -> str:
    if element is None:
        return ""
    child = element.find(tag)
    if child is None or child.text is None:
        return ""
    return child.text.strip()


def _required_attribute(element: ET.Element, name: str) -> str:
    value = element.get(name)
    if value is None or not value.strip():
        raise MalformedDocumentError(
            f"Missing required attribute '{name}' on <{element.tag}>"
        )
    return value.strip()


def _parse_int(element: ET.Element, name: str, value: str) -> int:
    # int() also accepts "1_000" and non-ASCII digits; only plain digits are valid
    if not (value.isascii() and value.isdigit()):
        raise MalformedDocumentError(
            f"Attribute '{name}' on <{element.tag}> is not a non-negative integer: "
            f"{value!r}"
        )
    return int(value)


def _parse_float(element: ET.Element, name: str, value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        number = math.nan

    if "_" in value or not math.isfinite(number) or number < 0:
        raise MalformedDocumentError(
            f"Attribute '{name}' on <{element.tag}> is not a non-negative number: "
            f"{value!r}"
        )
    return number


def _required_int(element: ET.Element, name: str) -> int:
    return _parse_int(element, name, _required_attribute(element, name))


def _optional_int(element: ET.Element, name: str) -> int:
    value = element.get(name)
    if value is None or not value.strip():
        return 0
    return _parse_int(element, name, value.strip())


def _required_float(element: ET.Element, name: str) -> float:
    return _parse_float(element, name, _required_attribute(element, name))


def _optional_float(element: ET.Element, name: str) -> float:
    value = element.get(name)
    if value is None or not value.strip():
        return 0.0
    return _parse_float(element, name, value.strip())
