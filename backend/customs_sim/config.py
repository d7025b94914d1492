"""
Configuration Management
Loads and validates environment variables
"""
import os
from typing import Optional

DEFAULT_RULES_FILE = os.path.join(os.path.dirname(__file__), 'rules', 'customs_rules.yaml')


class Config:
    # Customs rule tables (code tables, keyword lists, tolerances)
    CUSTOMS_RULES_FILE: Optional[str] = os.getenv('CUSTOMS_RULES_FILE')

    FLASK_ENV: str = os.getenv('FLASK_ENV', 'development')
    FLASK_DEBUG: bool = os.getenv('FLASK_DEBUG', 'False').lower() == 'true'

    MAX_CONTENT_LENGTH: int = int(os.getenv('MAX_CONTENT_LENGTH', str(2 * 1024 * 1024)))

    @classmethod
    def rules_file(cls) -> str:
        """Path of the rule table file in use - packaged default unless overridden"""
        return os.getenv('CUSTOMS_RULES_FILE') or cls.CUSTOMS_RULES_FILE or DEFAULT_RULES_FILE

    @classmethod
    def is_custom_rules(cls) -> bool:
        """Check if a rule table file other than the packaged one is configured"""
        return os.path.abspath(cls.rules_file()) != os.path.abspath(DEFAULT_RULES_FILE)

config = Config()
