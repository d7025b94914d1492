"""
Customs Rule Table Service

Loads the customs code tables and rule thresholds from YAML.
Used by the declaration checkers and the code lookup endpoint.
"""

import logging
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from customs_sim.config import config

logger = logging.getLogger('customsim.rules')


class RuleTableError(ValueError):
    """Raised when the rule table file is missing or incomplete"""


@dataclass(frozen=True)
class CategoryRule:
    """Goods category identified by HS code prefix, with required specification keywords"""
    name: str
    label: str
    prefixes: Tuple[str, ...]
    keywords: Tuple[str, ...]
    error: str
    suggestion: str

    def matches(self, goods_code: str) -> bool:
        return any(goods_code.startswith(prefix) for prefix in self.prefixes)

    def is_described(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


@dataclass(frozen=True)
class RuleTables:
    """Immutable customs code tables and thresholds"""
    transport_modes: Mapping[str, str]
    supervision_modes: Mapping[str, str]
    currencies: Tuple[str, ...]
    units: Tuple[str, ...]
    countries: Mapping[str, str]
    category_rules: Tuple[CategoryRule, ...]
    general_trade_code: str
    general_trade_min_amount: float
    total_amount_tolerance: float
    line_total_tolerance: float
    packaging_ratio_limit: float
    min_denominator: float
    exchange_rate_bands: Mapping[str, Tuple[float, float]]
    check_counts: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))

    def to_dict(self) -> Dict[str, Any]:
        """Code tables for form dropdowns"""
        return {
            'transportModes': dict(self.transport_modes),
            'supervisionModes': dict(self.supervision_modes),
            'currencies': list(self.currencies),
            'units': list(self.units),
            'countries': dict(self.countries),
        }


REQUIRED_SECTIONS = (
    'transport_modes',
    'supervision_modes',
    'currencies',
    'category_rules',
    'general_trade',
    'tolerances',
    'exchange_rate_bands',
    'check_counts',
)


def _str_mapping(data: Dict[Any, Any]) -> Mapping[str, str]:
    # YAML keys like 1 or 0110 must stay string codes
    return MappingProxyType({str(k): str(v) for k, v in (data or {}).items()})


def parse_rule_tables(data: Dict[str, Any]) -> RuleTables:
    """
    Build RuleTables from a parsed YAML document.

    Args:
        data: Mapping as returned by yaml.safe_load

    Returns:
        RuleTables instance

    Raises:
        RuleTableError: If a required section or key is missing
    """
    if not isinstance(data, dict):
        raise RuleTableError("Rule tables must be a mapping")

    missing = [name for name in REQUIRED_SECTIONS if name not in data]
    if missing:
        raise RuleTableError(f"Rule tables missing sections: {', '.join(missing)}")

    try:
        categories = tuple(
            CategoryRule(
                name=rule['name'],
                label=rule.get('label', rule['name']),
                prefixes=tuple(str(p) for p in rule['prefixes']),
                keywords=tuple(rule['keywords']),
                error=rule['error'],
                suggestion=rule['suggestion'],
            )
            for rule in data['category_rules']
        )
        bands = {}
        for currency, band in data['exchange_rate_bands'].items():
            low, high = band
            bands[str(currency)] = (float(low), float(high))

        tolerances = data['tolerances']
        general_trade = data['general_trade']
        return RuleTables(
            transport_modes=_str_mapping(data['transport_modes']),
            supervision_modes=_str_mapping(data['supervision_modes']),
            currencies=tuple(str(c) for c in data['currencies']),
            units=tuple(str(u) for u in data.get('units', [])),
            countries=_str_mapping(data.get('countries', {})),
            category_rules=categories,
            general_trade_code=str(general_trade['code']),
            general_trade_min_amount=float(general_trade['min_amount']),
            total_amount_tolerance=float(tolerances['total_amount']),
            line_total_tolerance=float(tolerances['line_total']),
            packaging_ratio_limit=float(tolerances['packaging_ratio']),
            min_denominator=float(tolerances['min_denominator']),
            exchange_rate_bands=MappingProxyType(bands),
            check_counts=MappingProxyType({str(k): int(v) for k, v in data['check_counts'].items()}),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise RuleTableError(f"Invalid rule tables: {e}") from e


def load_rule_tables(path: Optional[str] = None) -> RuleTables:
    """Load rule tables from a YAML file (configured file when path is None)"""
    path = path or config.rules_file()
    if not os.path.exists(path):
        raise RuleTableError(f"Rule table file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise RuleTableError(f"Rule table file is not valid YAML: {path}: {e}") from e

    tables = parse_rule_tables(data)
    logger.info(
        f"Loaded rule tables from {path}: {len(tables.transport_modes)} transport modes, "
        f"{len(tables.currencies)} currencies, {len(tables.category_rules)} goods categories"
    )
    return tables


# Singleton instance
_tables_instance: Optional[RuleTables] = None


def get_rule_tables() -> RuleTables:
    """
    Get or load the configured rule tables.

    Raises:
        RuntimeError: If the configured rule file cannot be loaded
    """
    global _tables_instance

    if _tables_instance is None:
        try:
            _tables_instance = load_rule_tables()
        except RuleTableError as e:
            logger.error(f"Failed to load rule tables: {e}")
            raise RuntimeError(
                f"Customs rule tables unavailable. "
                f"Check CUSTOMS_RULES_FILE ({config.rules_file()}).\n"
                f"Original error: {e}"
            ) from e

    return _tables_instance


def reset_rule_tables() -> None:
    """Drop the cached tables so the next call reloads the configured file"""
    global _tables_instance
    _tables_instance = None
