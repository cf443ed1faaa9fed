"""
JSON Schema Contract Validators

Модуль для валидации JSON конфигурации согласно JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам,
затем строит доменные объекты (Spheroid, AreaConfig).

Схемы (geoarea/core/contracts/schema/):
- spheroid.json     — определение эллипсоида
- area_config.json  — конфигурация расчёта площади
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator

from geoarea.area.accumulator import AreaAccumulator, AreaConfig
from geoarea.core.domain.spheroid import WGS84, Spheroid

logger = logging.getLogger(__name__)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в каталоге schema/ рядом с этим модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'spheroid')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        return self.validator.iter_errors(data)


class SpheroidValidator(ContractValidator):
    """Валидатор для spheroid контракта."""

    def __init__(self):
        super().__init__("spheroid")


class AreaConfigValidator(ContractValidator):
    """Валидатор для area_config контракта."""

    def __init__(self):
        super().__init__("area_config")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_spheroid(data: Dict[str, Any]) -> None:
    """
    Валидация spheroid данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    SpheroidValidator().validate(data)


def validate_area_config(data: Dict[str, Any]) -> None:
    """
    Валидация area_config данных (включая вложенный spheroid).

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    AreaConfigValidator().validate(data)
    if "spheroid" in data:
        validate_spheroid(data["spheroid"])


def load_spheroid(data: Dict[str, Any]) -> Spheroid:
    """
    Spheroid из JSON-совместимого dict.

    Допускает flattening или inverse_flattening (но не оба).

    Args:
        data: Определение эллипсоида

    Returns:
        Spheroid

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    validate_spheroid(data)

    fields = dict(data)
    inverse_flattening = fields.pop("inverse_flattening", None)
    if inverse_flattening is not None:
        fields["flattening"] = 1.0 / inverse_flattening

    return Spheroid(**fields)


def load_area_config(data: Dict[str, Any]) -> tuple[AreaConfig, Spheroid]:
    """
    AreaConfig и Spheroid из JSON-совместимого dict.

    Отсутствующий spheroid → WGS84.

    Returns:
        (AreaConfig, Spheroid)

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    validate_area_config(data)

    fields = dict(data)
    spheroid_data = fields.pop("spheroid", None)
    if spheroid_data is None:
        logger.debug("area_config without spheroid, using %s", WGS84.name)
        spheroid = WGS84
    else:
        spheroid = load_spheroid(spheroid_data)

    return AreaConfig(**fields), spheroid


def accumulator_from_config(data: Dict[str, Any]) -> AreaAccumulator:
    """AreaAccumulator по JSON-конфигурации."""
    config, spheroid = load_area_config(data)
    return AreaAccumulator(config, spheroid)
