#!/usr/bin/env python3
"""
Local Declaration Validation Runner

Validate sample or custom declarations from the command line.

Usage:
    customs-validate [--sample SAMPLE_NAME] [--file PATH] [--fix] [--json]

Examples:
    customs-validate                          # Validate all samples
    customs-validate --sample total_mismatch  # Validate one sample
    customs-validate --file decl.json --fix   # Apply auto-fixes, then re-validate
    customs-validate --list                   # List available samples
"""

import argparse
import json
import sys

from pydantic import ValidationError

from customs_sim.models.customs import DeclarationRecord, ValidationReport
from customs_sim.samples import SAMPLE_DECLARATIONS
from customs_sim.validation import FieldPathError, apply_auto_fixes, create_validator, status_message

SEVERITY_ICONS = {"critical": "🔴", "warning": "🟡", "suggestion": "🔵"}


def print_report(report: ValidationReport) -> None:
    print(f"\n{'─' * 50}")
    print("VALIDATION REPORT")
    print(f"{'─' * 50}")
    print(status_message(report.overall_status))
    print(f"Overall Status: {report.overall_status.value.upper()}")
    print(f"Checks Passed: {report.passed_count}/{report.total_checks}")
    print(f"Customs Ready: {'YES' if report.customs_ready else 'No'}")
    print(f"Validation Time: {report.validation_time * 1000:.1f}ms")

    for finding in report.findings:
        icon = SEVERITY_ICONS.get(finding.severity.value, "⚪")
        fix = f" [auto-fix → {finding.fix_value}]" if finding.auto_fix else ""
        print(f"  {icon} {finding.field}: {finding.error}{fix}")
        print(f"     {finding.suggestion}")


def run_declaration(name: str, data: dict, fix: bool = False, as_json: bool = False) -> ValidationReport:
    """Validate one declaration, optionally applying every auto-fix and re-validating."""
    engine = create_validator()
    record = DeclarationRecord.model_validate(data)

    if not as_json:
        print(f"\n{'=' * 70}")
        print(f"Validating: {name}")
        print(f"{'=' * 70}")
        print(f"Consignor: {record.consignor_consignee or 'N/A'}")
        print(f"Goods: {len(record.goods)} item(s)")
        for i, item in enumerate(record.goods[:3], 1):
            print(f"  {i}. {(item.goods_name_spec or 'Unknown')[:40]} (HS: {item.goods_code or '?'})")
        print(f"Total Value: {record.total_amount_foreign} {record.currency or '?'}")

    report = engine.validate(record)

    if fix:
        fixable = [f for f in report.findings if f.auto_fix]
        if fixable:
            record = apply_auto_fixes(record, fixable)
            if not as_json:
                print_report(report)
                print(f"\nApplied {len(fixable)} auto-fix(es), re-validating...")
            report = engine.validate(record)

    if as_json:
        output = report.model_dump(mode="json", by_alias=True)
        if fix:
            output["declaration"] = record.model_dump(mode="json", by_alias=True)
        print(json.dumps(output, ensure_ascii=False, indent=2))
    else:
        print_report(report)

    return report


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Validate customs export declarations locally")
    parser.add_argument('--sample', type=str, help="Validate a specific sample declaration")
    parser.add_argument('--file', '-f', type=str, help="Validate a declaration from a JSON file")
    parser.add_argument('--fix', action='store_true', help="Apply all auto-fixes and re-validate")
    parser.add_argument('--json', action='store_true', help="Print the report as JSON")
    parser.add_argument('--list', '-l', action='store_true', help="List available samples")

    args = parser.parse_args(argv)

    if args.list:
        print("Available samples:")
        for key, sample in SAMPLE_DECLARATIONS.items():
            print(f"  {key}: {sample['name']}")
        return 0

    if args.file:
        try:
            with open(args.file, 'r', encoding='utf-8') as f:
                targets = [(args.file, json.load(f))]
        except (OSError, json.JSONDecodeError) as e:
            print(f"Could not read declaration: {e}", file=sys.stderr)
            return 2
    elif args.sample:
        if args.sample not in SAMPLE_DECLARATIONS:
            print(f"Unknown sample: {args.sample}", file=sys.stderr)
            print(f"Available: {', '.join(SAMPLE_DECLARATIONS.keys())}", file=sys.stderr)
            return 2
        sample = SAMPLE_DECLARATIONS[args.sample]
        targets = [(sample["name"], sample["data"])]
    else:
        targets = [(sample["name"], sample["data"]) for sample in SAMPLE_DECLARATIONS.values()]

    all_ready = True
    for name, data in targets:
        try:
            report = run_declaration(name, data, fix=args.fix, as_json=args.json)
        except ValidationError as e:
            print(f"Invalid declaration {name}:\n{e}", file=sys.stderr)
            return 2
        except FieldPathError as e:
            print(f"Auto-fix failed for {name}: {e}", file=sys.stderr)
            return 2
        all_ready = all_ready and report.customs_ready

    return 0 if all_ready else 1


if __name__ == "__main__":
    sys.exit(main())
