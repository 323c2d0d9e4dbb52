#!/usr/bin/env python3
"""
Validate that docs/test_scenarios_business_summary.md stays in sync with
tests/test_integration_scenarios.py.

Scenario classes and their test methods are read from the test module's
syntax tree; the summary references them as **Test Class**: `TestX` and
**Test Method**: `test_x`.

Missing documentation is an error (exit 1). Documentation for scenarios that
no longer exist is a warning.

Run: python scripts/validate_test_docs_sync.py
"""

import ast
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
TEST_FILE = PROJECT_ROOT / "tests" / "test_integration_scenarios.py"
DOC_FILE = PROJECT_ROOT / "docs" / "test_scenarios_business_summary.md"

CLASS_REF = re.compile(r"\*\*Test Class\*\*:\s*`(Test\w+)`")
METHOD_REF = re.compile(r"\*\*Test Method\*\*:\s*`(test_\w+)`")


def collect_scenarios(test_file: Path) -> dict[str, list[str]]:
    """Map each Test* class in the module to its test_* methods."""
    tree = ast.parse(test_file.read_text(encoding="utf-8"))
    return {
        node.name: [
            item.name
            for item in node.body
            if isinstance(item, ast.FunctionDef) and item.name.startswith("test_")
        ]
        for node in tree.body
        if isinstance(node, ast.ClassDef) and node.name.startswith("Test")
    }


def collect_documented(doc_file: Path) -> tuple[set[str], set[str]]:
    content = doc_file.read_text(encoding="utf-8")
    return set(CLASS_REF.findall(content)), set(METHOD_REF.findall(content))


@dataclass
class SyncReport:
    scenarios: dict[str, list[str]]
    missing_classes: set[str] = field(default_factory=set)
    missing_methods: set[str] = field(default_factory=set)
    stale_classes: set[str] = field(default_factory=set)
    stale_methods: set[str] = field(default_factory=set)

    @property
    def in_sync(self) -> bool:
        return not (self.missing_classes or self.missing_methods or self.stale_classes or self.stale_methods)


def check_sync(test_file: Path = TEST_FILE, doc_file: Path = DOC_FILE) -> SyncReport:
    scenarios = collect_scenarios(test_file)
    doc_classes, doc_methods = collect_documented(doc_file)
    methods = {m for names in scenarios.values() for m in names}

    return SyncReport(
        scenarios=scenarios,
        missing_classes=set(scenarios) - doc_classes,
        missing_methods=methods - doc_methods,
        stale_classes=doc_classes - set(scenarios),
        stale_methods=doc_methods - methods,
    )


def main() -> int:
    for path in (TEST_FILE, DOC_FILE):
        if not path.exists():
            print(f"❌ File not found: {path}")
            return 1

    report = check_sync()
    _, doc_methods = collect_documented(DOC_FILE)

    print("=" * 60)
    print("Scenario Documentation Sync")
    print("=" * 60)
    print(f"Scenario classes: {len(report.scenarios)}")
    print(f"Scenario methods: {sum(len(m) for m in report.scenarios.values())}")

    for label, names in (("Missing class", report.missing_classes), ("Missing method", report.missing_methods)):
        for name in sorted(names):
            print(f"❌ {label}: {name}")
    for label, names in (("Stale class", report.stale_classes), ("Stale method", report.stale_methods)):
        for name in sorted(names):
            print(f"⚠️  {label}: {name}")

    if report.in_sync:
        print("\n✅ Every scenario is documented")

    print("\nCoverage:")
    for cls, methods in sorted(report.scenarios.items()):
        print(f"  {'✅' if cls not in report.missing_classes else '❌'} {cls}")
        for method in methods:
            print(f"      {'✅' if method in doc_methods else '❌'} {method}")

    return 1 if report.missing_classes or report.missing_methods else 0


if __name__ == "__main__":
    sys.exit(main())
