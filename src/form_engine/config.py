"""
Configuration module for the form engine.

Handles environment variables and default settings.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


@dataclass
class FormEngineConfig:
    """Configuration settings for the form engine."""

    # Rule compiler settings
    strict_rule_types: bool = False  # Raise on mismatched or valueless rules instead of ignoring them

    # Formula evaluation limits
    max_expression_length: int = 1000
    max_expression_depth: int = 64

    @classmethod
    def from_env(cls) -> "FormEngineConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()

        return cls(
            strict_rule_types=os.getenv("FORM_ENGINE_STRICT_RULE_TYPES", str(_defaults.strict_rule_types).lower()).lower() == "true",
            max_expression_length=int(os.getenv("FORM_ENGINE_MAX_EXPRESSION_LENGTH", str(_defaults.max_expression_length))),
            max_expression_depth=int(os.getenv("FORM_ENGINE_MAX_EXPRESSION_DEPTH", str(_defaults.max_expression_depth))),
        )


config = FormEngineConfig.from_env()


def get_config() -> FormEngineConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> FormEngineConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config
