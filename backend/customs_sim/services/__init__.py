"""
Services Package
Customs rule table loading
"""

from .rule_tables import (
    CategoryRule,
    RuleTableError,
    RuleTables,
    get_rule_tables,
    load_rule_tables,
    parse_rule_tables,
    reset_rule_tables,
)

__all__ = [
    'CategoryRule',
    'RuleTableError',
    'RuleTables',
    'get_rule_tables',
    'load_rule_tables',
    'parse_rule_tables',
    'reset_rule_tables',
]
