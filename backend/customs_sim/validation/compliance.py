"""
Stage 3: regulatory compliance checks

Category-specific declaration elements keyed off the commodity code prefix,
plus supervision mode and transport document consistency.
"""
import logging
from typing import List

from customs_sim.models.customs import DeclarationRecord, Finding, Severity
from customs_sim.services.rule_tables import RuleTables
from customs_sim.validation.field_path import goods_path

logger = logging.getLogger('customsim.validation.compliance')


class ComplianceChecker:
    """Heuristic regulatory conventions; never offers an automatic fix"""

    name = 'compliance'

    def __init__(self, tables: RuleTables):
        self.tables = tables

    def check(self, record: DeclarationRecord) -> List[Finding]:
        findings: List[Finding] = []

        for index, item in enumerate(record.goods):
            if not item.goods_code:
                continue
            text = item.goods_name_spec or ''
            for rule in self.tables.category_rules:
                if rule.matches(item.goods_code) and not rule.is_described(text):
                    findings.append(Finding(
                        field=goods_path(index, 'goodsNameSpec'),
                        error=rule.error.format(item=index + 1, label=rule.label),
                        suggestion=rule.suggestion.format(item=index + 1, label=rule.label),
                        severity=Severity.WARNING,
                    ))

        if (
            record.supervision_mode == self.tables.general_trade_code
            and record.total_amount_foreign is not None
            and record.total_amount_foreign < self.tables.general_trade_min_amount
        ):
            mode_name = self.tables.supervision_modes.get(record.supervision_mode, '一般贸易')
            findings.append(Finding(
                field='supervisionMode',
                error=f"{mode_name}方式申报金额过低",
                suggestion="金额较小的货物建议选择其他监管方式",
                severity=Severity.SUGGESTION,
            ))

        if record.bill_no and not record.transport_name:
            findings.append(Finding(
                field='transportName',
                error="已填写提运单号但缺少运输工具名称",
                suggestion="请补充运输工具名称信息",
                severity=Severity.WARNING,
            ))

        logger.debug(f"{self.name}: {len(findings)} finding(s)")
        return findings
