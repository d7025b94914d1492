"""
Customs Declaration Validation

Components:
- field_integrity.py: required fields and code formats
- data_logic.py: weights, totals and exchange rate plausibility
- compliance.py: category declaration elements and policy checks
- engine.py: coordinator producing a ValidationReport
- autofix.py: applies a finding's correction to a declaration
"""

from .autofix import apply_auto_fix, apply_auto_fixes
from .compliance import ComplianceChecker
from .data_logic import DataLogicChecker
from .engine import CustomsValidationEngine, create_validator, status_message
from .field_integrity import FieldIntegrityChecker
from .field_path import (
    FieldPathError,
    FieldRef,
    GoodsLineField,
    TopLevelField,
    parse_field_path,
)

__all__ = [
    # Coordinator
    "CustomsValidationEngine",
    "create_validator",
    "status_message",

    # Checkers
    "FieldIntegrityChecker",
    "DataLogicChecker",
    "ComplianceChecker",

    # Auto-fix
    "apply_auto_fix",
    "apply_auto_fixes",
    "FieldPathError",
    "FieldRef",
    "GoodsLineField",
    "TopLevelField",
    "parse_field_path",
]
