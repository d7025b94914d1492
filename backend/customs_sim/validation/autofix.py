"""
Auto-fix application.

Applies the correction carried by a finding to a declaration, returning a new
record with exactly one field replaced.
"""
import logging
from typing import Iterable, Type

from pydantic import BaseModel

from customs_sim.models.customs import DeclarationRecord, Finding, GoodsLine
from customs_sim.validation.field_path import FieldPathError, TopLevelField, parse_field_path

logger = logging.getLogger('customsim.validation.autofix')


def _attribute_name(model: Type[BaseModel], name: str) -> str:
    """Resolve a wire (camelCase) or attribute name to the model attribute"""
    for attr, info in model.model_fields.items():
        if name == attr or name == info.alias:
            return attr
    raise FieldPathError(f"Unknown {model.__name__} field: {name!r}")


def apply_auto_fix(record: DeclarationRecord, finding: Finding) -> DeclarationRecord:
    """
    Apply one finding's correction.

    Args:
        record: Declaration the finding was produced for
        finding: Finding carrying ``auto_fix`` and ``fix_value``

    Returns:
        A new DeclarationRecord, or ``record`` itself when the finding has no fix

    Raises:
        FieldPathError: If the finding's field path cannot be resolved
        ValidationError: If the fix value is not valid for the target field
    """
    if not finding.auto_fix or finding.fix_value is None:
        return record

    ref = parse_field_path(finding.field)

    if isinstance(ref, TopLevelField):
        attr = _attribute_name(DeclarationRecord, ref.name)
        if attr == 'goods':
            raise FieldPathError("Goods lines cannot be replaced as a whole")
        logger.info(f"Auto-fix {ref.path}: {getattr(record, attr)!r} -> {finding.fix_value!r}")
        return DeclarationRecord.model_validate({**record.model_dump(), attr: finding.fix_value})

    if ref.index >= len(record.goods):
        raise FieldPathError(
            f"Goods line {ref.index} out of range ({len(record.goods)} line(s) declared)"
        )

    attr = _attribute_name(GoodsLine, ref.subfield)
    line = record.goods[ref.index]
    logger.info(f"Auto-fix {ref.path}: {getattr(line, attr)!r} -> {finding.fix_value!r}")

    goods = list(record.goods)
    goods[ref.index] = GoodsLine.model_validate({**line.model_dump(), attr: finding.fix_value})
    return record.model_copy(update={'goods': tuple(goods)})


def apply_auto_fixes(record: DeclarationRecord, findings: Iterable[Finding]) -> DeclarationRecord:
    """Apply every auto-fixable finding in order"""
    for finding in findings:
        record = apply_auto_fix(record, finding)
    return record
