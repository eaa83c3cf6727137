"""Static game data - card, enemy and stage templates."""

from .templates import (
    Catalog,
    CardTemplate,
    EnemyTemplate,
    StageDescriptor,
    StageTier,
    UnknownCardError,
    UnknownEnemyError,
    UnknownStageError,
)
from .validation import validate_catalog, CatalogValidationError, ValidationResult

__all__ = [
    "Catalog",
    "CardTemplate",
    "EnemyTemplate",
    "StageDescriptor",
    "StageTier",
    "UnknownCardError",
    "UnknownEnemyError",
    "UnknownStageError",
    "validate_catalog",
    "CatalogValidationError",
    "ValidationResult",
]
