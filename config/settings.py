"""Configuration management for the ATM ledger."""
import logging
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv


@dataclass
class Settings:
    """Configuration settings for the ATM host program.

    Every field has a default, so the ATM runs without any environment.
    """

    # Logging Configuration
    log_path: str = 'atm.log'
    log_level: str = 'INFO'

    # Ledger Configuration
    ledger_encoding: str = 'utf-8'

    # Business Rules
    max_amount: int = 1_000_000_000_000  # 1T

    # Console Configuration
    prompt: str = 'atm> '

    @classmethod
    def load(cls) -> 'Settings':
        """Load settings from environment variables and a .env file.

        Returns:
            Settings: A Settings instance with values from environment variables.

        Raises:
            ValueError: If ATM_LOG_LEVEL is not a known logging level
                or ATM_MAX_AMOUNT is not a positive integer.
        """
        load_dotenv(find_dotenv(usecwd=True))
        defaults = cls()

        log_level = os.getenv('ATM_LOG_LEVEL', defaults.log_level).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"ATM_LOG_LEVEL must be a logging level, got {log_level!r}")

        raw_max = os.getenv('ATM_MAX_AMOUNT', str(defaults.max_amount)).replace('_', '')
        if not raw_max.isdecimal() or int(raw_max) == 0:
            raise ValueError(f"ATM_MAX_AMOUNT must be a positive integer, got {raw_max!r}")

        return cls(
            log_path=os.getenv('ATM_LOG_PATH', defaults.log_path),
            log_level=log_level,
            ledger_encoding=os.getenv('ATM_LEDGER_ENCODING', defaults.ledger_encoding),
            max_amount=int(raw_max),
            prompt=os.getenv('ATM_PROMPT', defaults.prompt),
        )
