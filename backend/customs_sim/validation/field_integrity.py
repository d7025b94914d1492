"""
Stage 1: field integrity checks

Required fields present, commodity codes and goods names well-formed,
transport mode and currency drawn from the customs code tables.
"""
import logging
import re
from typing import List

from customs_sim.models.customs import DeclarationRecord, Finding, Severity
from customs_sim.services.rule_tables import RuleTables
from customs_sim.validation.field_path import goods_path

logger = logging.getLogger('customsim.validation.fields')

GOODS_CODE_LENGTH = 13
GOODS_CODE_RE = re.compile(r'[0-9]{13}')

# (wire name, attribute, display name)
REQUIRED_FIELDS = (
    ('consignorConsignee', 'consignor_consignee', '收发货人'),
    ('exportPort', 'export_port', '出口口岸'),
    ('transportMode', 'transport_mode', '运输方式'),
    ('declareDate', 'declare_date', '申报日期'),
    ('currency', 'currency', '币制'),
    ('totalAmountForeign', 'total_amount_foreign', '外币总价'),
)


class FieldIntegrityChecker:
    """Presence and format checks that look at one field at a time"""

    name = 'field_integrity'

    def __init__(self, tables: RuleTables):
        self.tables = tables

    def check(self, record: DeclarationRecord) -> List[Finding]:
        findings: List[Finding] = []

        for field_name, attr, label in REQUIRED_FIELDS:
            # empty string and zero count as missing
            if not getattr(record, attr):
                findings.append(Finding(
                    field=field_name,
                    error=f"{label}为必填项，不能为空",
                    suggestion=f"请填写{label}信息",
                    severity=Severity.CRITICAL,
                ))

        for index, item in enumerate(record.goods):
            code = item.goods_code
            if code:
                if not GOODS_CODE_RE.fullmatch(code):
                    can_pad = len(code) < GOODS_CODE_LENGTH
                    findings.append(Finding(
                        field=goods_path(index, 'goodsCode'),
                        error=f"商品{index + 1}的HS编码格式错误，必须为13位数字",
                        suggestion="请检查商品编码格式，例如：1234567890123",
                        severity=Severity.CRITICAL,
                        auto_fix=can_pad,
                        fix_value=code.rjust(GOODS_CODE_LENGTH, '0') if can_pad else None,
                    ))
            else:
                findings.append(Finding(
                    field=goods_path(index, 'goodsCode'),
                    error=f"商品{index + 1}缺少HS编码",
                    suggestion="请填写13位商品编码",
                    severity=Severity.CRITICAL,
                ))

            if not item.goods_name_spec or not item.goods_name_spec.strip():
                findings.append(Finding(
                    field=goods_path(index, 'goodsNameSpec'),
                    error=f"商品{index + 1}缺少商品名称/规格型号",
                    suggestion="请填写详细的商品名称和规格",
                    severity=Severity.CRITICAL,
                ))

        if record.transport_mode and record.transport_mode not in self.tables.transport_modes:
            findings.append(Finding(
                field='transportMode',
                error="运输方式代码不符合海关标准",
                suggestion=f"请选择有效的运输方式代码({self._code_range(self.tables.transport_modes)})",
                severity=Severity.WARNING,
            ))

        if record.currency and record.currency not in self.tables.currencies:
            findings.append(Finding(
                field='currency',
                error="币制代码不符合海关标准",
                suggestion=f"请选择有效的币制代码({'/'.join(self.tables.currencies[:3])}等)",
                severity=Severity.WARNING,
            ))

        logger.debug(f"{self.name}: {len(findings)} finding(s)")
        return findings

    @staticmethod
    def _code_range(codes) -> str:
        keys = sorted(codes)
        if not keys:
            return ''
        return f"{keys[0]}-{keys[-1]}" if len(keys) > 1 else keys[0]
