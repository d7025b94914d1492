"""
Stage 2: data logic checks

Cross-field arithmetic and physical consistency. Monetary comparisons use
relative tolerances with the denominator floored at ``min_denominator``.
"""
import logging
from typing import List

from customs_sim.models.customs import DeclarationRecord, Finding, Severity
from customs_sim.services.rule_tables import RuleTables
from customs_sim.validation.field_path import goods_path

logger = logging.getLogger('customsim.validation.logic')


def _display(value: float) -> str:
    """Render 10.0 as '10' and 10.5 as '10.5'"""
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


class DataLogicChecker:
    """Weights, totals, unit prices and exchange rate plausibility"""

    name = 'data_logic'

    def __init__(self, tables: RuleTables):
        self.tables = tables

    def relative_error(self, expected: float, actual: float) -> float:
        return abs(expected - actual) / max(expected, self.tables.min_denominator)

    def check(self, record: DeclarationRecord) -> List[Finding]:
        findings: List[Finding] = []
        findings.extend(self._check_weights(record))
        findings.extend(self._check_total_amount(record))
        findings.extend(self._check_goods_lines(record))
        findings.extend(self._check_exchange_rate(record))
        logger.debug(f"{self.name}: {len(findings)} finding(s)")
        return findings

    def _check_weights(self, record: DeclarationRecord) -> List[Finding]:
        gross, net = record.gross_weight, record.net_weight
        if not (gross and net):
            return []

        if gross < net:
            return [Finding(
                field='grossWeight',
                error="毛重不能小于净重",
                suggestion=f"请检查重量填写，当前净重：{_display(net)}kg",
                severity=Severity.CRITICAL,
            )]

        packaging_ratio = (gross - net) / net
        if packaging_ratio > self.tables.packaging_ratio_limit:
            return [Finding(
                field='grossWeight',
                error="包装重量过高，可能存在填写错误",
                suggestion=f"包装重量占比{packaging_ratio * 100:.1f}%，建议检查重量数据",
                severity=Severity.WARNING,
            )]
        return []

    def _check_total_amount(self, record: DeclarationRecord) -> List[Finding]:
        declared_total = record.total_amount_foreign
        if declared_total is None:
            # reported as a missing required field
            return []

        calculated_total = sum(item.quantity * item.unit_price for item in record.goods)
        if self.relative_error(calculated_total, declared_total) > self.tables.total_amount_tolerance:
            return [Finding(
                field='totalAmountForeign',
                error=f"总价计算不符：计算值{calculated_total:.2f} vs 申报值{_display(declared_total)}",
                suggestion=f"建议修正总价为：{calculated_total:.2f}",
                severity=Severity.CRITICAL,
                auto_fix=True,
                fix_value=round(calculated_total, 2),
            )]
        return []

    def _check_goods_lines(self, record: DeclarationRecord) -> List[Finding]:
        findings: List[Finding] = []
        for index, item in enumerate(record.goods):
            if item.unit_price <= 0:
                findings.append(Finding(
                    field=goods_path(index, 'unitPrice'),
                    error=f"商品{index + 1}单价必须大于0",
                    suggestion="请检查单价填写",
                    severity=Severity.CRITICAL,
                ))

            if item.quantity <= 0:
                findings.append(Finding(
                    field=goods_path(index, 'quantity'),
                    error=f"商品{index + 1}数量必须大于0",
                    suggestion="请检查数量填写",
                    severity=Severity.CRITICAL,
                ))

            item_total = item.quantity * item.unit_price
            if self.relative_error(item_total, item.total_price) > self.tables.line_total_tolerance:
                findings.append(Finding(
                    field=goods_path(index, 'totalPrice'),
                    error=f"商品{index + 1}总价计算错误",
                    suggestion=f"建议修正为：{item_total:.2f}",
                    severity=Severity.WARNING,
                    auto_fix=True,
                    fix_value=round(item_total, 2),
                ))
        return findings

    def _check_exchange_rate(self, record: DeclarationRecord) -> List[Finding]:
        rate = record.exchange_rate
        band = self.tables.exchange_rate_bands.get(record.currency or '')
        if not rate or band is None:
            return []

        low, high = band
        if rate < low or rate > high:
            return [Finding(
                field='exchangeRate',
                error=f"{record.currency}汇率可能不合理",
                suggestion="请检查汇率是否为当日海关汇率",
                severity=Severity.WARNING,
            )]
        return []
