"""
Customs Declaration Validation Engine

Runs the three validation stages over one declaration and aggregates their
findings into a ValidationReport:

    ┌──────────────────┐
    │   Declaration    │
    └────────┬─────────┘
     ┌───────┼────────┐
     ▼       ▼        ▼
   Field   Logic  Compliance
     │       │        │
     └───────┼────────┘
             ▼  merge + classify by severity
    ┌──────────────────┐
    │ ValidationReport │
    └──────────────────┘

The stages are pure functions of the same immutable record and run in a fixed
order (field, logic, compliance); that order is also the presentation order
within each severity bucket.

Usage:
    from customs_sim.validation import create_validator

    engine = create_validator()
    report = engine.validate(record)
    if not report.customs_ready:
        fixed = engine.apply_auto_fix(record, report.errors[0])
"""
import logging
import time
from typing import List, Optional

from customs_sim.models.customs import (
    DeclarationRecord,
    Finding,
    OverallStatus,
    Severity,
    ValidationReport,
)
from customs_sim.services.rule_tables import RuleTables, get_rule_tables
from customs_sim.validation.autofix import apply_auto_fix
from customs_sim.validation.compliance import ComplianceChecker
from customs_sim.validation.data_logic import DataLogicChecker
from customs_sim.validation.field_integrity import FieldIntegrityChecker

logger = logging.getLogger('customsim.validation')

SYSTEM_FAULT_FINDING = Finding(
    field='system',
    error='校验系统发生错误',
    suggestion='请重试或联系技术支持',
    severity=Severity.CRITICAL,
)

STATUS_MESSAGES = {
    OverallStatus.PASS: '🎉 校验通过，可以提交申报',
    OverallStatus.WARNING: '⚠️ 存在警告，建议优化后申报',
    OverallStatus.ERROR: '❌ 存在严重错误，需修复后申报',
}


def status_message(status) -> str:
    """User-facing verdict line for an overall status"""
    try:
        return STATUS_MESSAGES[OverallStatus(status)]
    except ValueError:
        return '校验状态未知'


class CustomsValidationEngine:
    """Coordinates the field, logic and compliance checkers"""

    def __init__(self, tables: Optional[RuleTables] = None):
        self.tables = tables or get_rule_tables()
        self.checkers = (
            FieldIntegrityChecker(self.tables),
            DataLogicChecker(self.tables),
            ComplianceChecker(self.tables),
        )

    def validate(self, record: DeclarationRecord) -> ValidationReport:
        """
        Validate a declaration.

        Never raises: an unexpected fault inside a checker is logged and
        reported as a single critical ``system`` finding.

        Args:
            record: The declaration to check

        Returns:
            ValidationReport with findings partitioned by severity
        """
        start_time = time.perf_counter()

        try:
            all_findings: List[Finding] = []
            for checker in self.checkers:
                all_findings.extend(checker.check(record))

            errors = tuple(f for f in all_findings if f.severity == Severity.CRITICAL)
            warnings = tuple(f for f in all_findings if f.severity == Severity.WARNING)
            suggestions = tuple(f for f in all_findings if f.severity == Severity.SUGGESTION)

            if errors:
                overall_status = OverallStatus.ERROR
            elif warnings:
                overall_status = OverallStatus.WARNING
            else:
                overall_status = OverallStatus.PASS

            # passed_count is not clamped and goes negative when findings exceed the estimate
            total_checks = self.calculate_total_checks(record)
            passed_count = total_checks - len(all_findings)

            report = ValidationReport(
                overall_status=overall_status,
                validation_time=time.perf_counter() - start_time,
                errors=errors,
                warnings=warnings,
                suggestions=suggestions,
                passed_count=passed_count,
                total_checks=total_checks,
                customs_ready=not errors,
            )
        except Exception as e:
            logger.error(f"❌ Validation engine fault: {e}", exc_info=True)
            return ValidationReport(
                overall_status=OverallStatus.ERROR,
                validation_time=time.perf_counter() - start_time,
                errors=(SYSTEM_FAULT_FINDING,),
                passed_count=0,
                total_checks=0,
                customs_ready=False,
            )

        logger.info(
            f"Validated declaration: {report.overall_status.value.upper()} "
            f"({len(report.errors)} error(s), {len(report.warnings)} warning(s), "
            f"{len(report.suggestions)} suggestion(s), "
            f"{report.passed_count}/{report.total_checks} checks passed, "
            f"{report.validation_time * 1000:.1f}ms)"
        )
        return report

    def apply_auto_fix(self, record: DeclarationRecord, finding: Finding) -> DeclarationRecord:
        return apply_auto_fix(record, finding)

    def calculate_total_checks(self, record: DeclarationRecord) -> int:
        """Number of checks attempted, as estimated from the declaration's shape"""
        counts = self.tables.check_counts
        total = counts.get('base', 15)
        total += len(record.goods) * counts.get('per_goods_line', 8)
        if record.gross_weight and record.net_weight:
            total += counts.get('weights', 2)
        if record.exchange_rate:
            total += counts.get('exchange_rate', 1)
        return total


def create_validator(tables: Optional[RuleTables] = None) -> CustomsValidationEngine:
    """Create a validation engine over the given (or configured) rule tables"""
    return CustomsValidationEngine(tables)
