"""
Contract Validation Module

Модуль для валидации JSON контрактов конфигурации geoarea.
"""

from .validators import (
    AreaConfigValidator,
    ContractValidator,
    SchemaLoader,
    SpheroidValidator,
    accumulator_from_config,
    load_area_config,
    load_spheroid,
    validate_area_config,
    validate_spheroid,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "SpheroidValidator",
    "AreaConfigValidator",
    # Functions
    "validate_spheroid",
    "validate_area_config",
    "load_spheroid",
    "load_area_config",
    "accumulator_from_config",
]
