"""
Catalog Validation - Consistency checks for static game data.

Validates that:
1. Required fields are present
2. References are valid (stage enemies, next stages, deck card ids)
3. Numeric fields are non-negative
4. The campaign has a reachable starting stage
"""

from __future__ import annotations
from dataclasses import dataclass

from .templates import Catalog, CardTemplate, EnemyTemplate, StageDescriptor


class CatalogValidationError(Exception):
    """Raised when catalog validation fails."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Catalog validation failed with {len(errors)} error(s)")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str]
    warnings: list[str]


def validate_catalog(catalog: Catalog, raise_on_error: bool = False) -> ValidationResult:
    """
    Validate a complete catalog.

    Returns ValidationResult with errors and warnings.
    Raises CatalogValidationError if raise_on_error=True and errors exist.
    """
    errors: list[str] = []
    warnings: list[str] = []

    for card_id, card in catalog.cards.items():
        errors.extend(_validate_card(card_id, card))

    for name, enemy in catalog.enemies.items():
        errors.extend(_validate_enemy(name, enemy))

    for stage_id, stage in catalog.stages.items():
        errors.extend(_validate_stage(stage_id, stage, catalog))

    # Deck references
    for card_id in catalog.starter_deck:
        if card_id not in catalog.cards:
            errors.append(f"Starter deck references unknown card '{card_id}'")
    for card_id in catalog.reward_pool:
        if card_id not in catalog.cards:
            errors.append(f"Reward pool references unknown card '{card_id}'")

    if not catalog.first_stage:
        errors.append("first_stage is required")
    elif catalog.first_stage not in catalog.stages:
        errors.append(f"first_stage '{catalog.first_stage}' is not a known stage")

    # Warnings for incomplete catalogs
    if not catalog.starter_deck:
        warnings.append("Starter deck is empty - battles will draw nothing")
    if not catalog.reward_pool:
        warnings.append("Reward pool is empty - victories offer no cards")
    unreachable = _unreachable_stages(catalog)
    if unreachable:
        warnings.append(f"Unreachable stages: {', '.join(sorted(unreachable))}")

    if raise_on_error and errors:
        raise CatalogValidationError(errors)

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _validate_card(card_id: str, card: CardTemplate) -> list[str]:
    """Validate a single card template."""
    errors = []
    if not card.card_id:
        errors.append("Card has empty ID")
    elif card.card_id != card_id:
        errors.append(f"Card key '{card_id}' does not match card_id '{card.card_id}'")
    if not card.name:
        errors.append(f"Card '{card_id}' has empty name")

    for attr in ("cost", "damage", "block", "heal", "energy", "hits", "self_damage"):
        if getattr(card, attr) < 0:
            errors.append(f"Card '{card_id}' has negative {attr}")

    return errors


def _validate_enemy(name: str, enemy: EnemyTemplate) -> list[str]:
    """Validate a single enemy template."""
    errors = []
    if enemy.name != name:
        errors.append(f"Enemy key '{name}' does not match name '{enemy.name}'")
    if enemy.health <= 0:
        errors.append(f"Enemy '{name}' must have positive health")
    if enemy.attack < 0 or enemy.defense < 0:
        errors.append(f"Enemy '{name}' has negative attack or defense")
    return errors


def _validate_stage(stage_id: str, stage: StageDescriptor, catalog: Catalog) -> list[str]:
    """Validate stage references."""
    errors = []
    if stage.stage_id != stage_id:
        errors.append(f"Stage key '{stage_id}' does not match stage_id '{stage.stage_id}'")
    if not stage.enemies:
        errors.append(f"Stage '{stage_id}' has no enemies")
    for enemy_name in stage.enemies:
        if enemy_name not in catalog.enemies:
            errors.append(f"Stage '{stage_id}' references unknown enemy '{enemy_name}'")
    for next_id in stage.next_stages:
        if next_id not in catalog.stages:
            errors.append(f"Stage '{stage_id}' links to unknown stage '{next_id}'")
    return errors


def _unreachable_stages(catalog: Catalog) -> set[str]:
    """Stages that cannot be reached from first_stage."""
    if catalog.first_stage not in catalog.stages:
        return set()
    seen = {catalog.first_stage}
    frontier = [catalog.first_stage]
    while frontier:
        stage = catalog.stages[frontier.pop()]
        for next_id in stage.next_stages:
            if next_id in catalog.stages and next_id not in seen:
                seen.add(next_id)
                frontier.append(next_id)
    return set(catalog.stages) - seen
