from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from realstat.core.logging import logger
from realstat.schemas.simulation import SimulationInput

NEGATIVE_MESSAGE = "must not be negative"


@dataclass(frozen=True)
class FieldRange:
    field: str
    minimum: Optional[float]
    maximum: Optional[float]
    message: str

    def check(self, value: float) -> Optional[str]:
        if self.minimum is not None and value < self.minimum:
            return self.message
        if self.maximum is not None and value > self.maximum:
            return self.message
        return None


NON_NEGATIVE_FIELDS: Sequence[str] = (
    "purchase_price",
    "equity_ratio",
    "loan_rate",
    "loan_term",
    "monthly_rent",
    "deposit",
    "maintenance_cost",
    "property_tax",
    "expected_appreciation",
    "holding_period",
    "vacancy_rate",
)

# Range checks run after the sign check and replace its message
FIELD_RANGES: Sequence[FieldRange] = (
    FieldRange("purchase_price", None, 10_000_000, "purchase price must be at most 10,000,000 (1000억원)"),
    FieldRange("equity_ratio", 0, 100, "equity ratio must be between 0 and 100%"),
    FieldRange("loan_rate", 0, 30, "loan rate must be between 0 and 30%"),
    FieldRange("loan_term", 1, 50, "loan term must be between 1 and 50 years"),
    FieldRange("holding_period", 1, 50, "holding period must be between 1 and 50 years"),
    FieldRange("vacancy_rate", 0, 100, "vacancy rate must be between 0 and 100%"),
    FieldRange("expected_appreciation", None, 100, "expected appreciation must be at most 100% per year"),
)


def validate_inputs(inputs: SimulationInput) -> Dict[str, str]:
    """Return field-keyed warnings for out-of-range values.

    Warnings are advisory; callers may still simulate the same input.
    """
    warnings: Dict[str, str] = {}

    for field in NON_NEGATIVE_FIELDS:
        if getattr(inputs, field) < 0:
            warnings[field] = NEGATIVE_MESSAGE

    for rule in FIELD_RANGES:
        message = rule.check(getattr(inputs, rule.field))
        if message:
            warnings[rule.field] = message

    if warnings:
        logger.debug("Simulation input warnings: %s", warnings)
    return warnings
