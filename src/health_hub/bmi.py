"""
BMI Engine.

Computes Body Mass Index from height and weight, classifies it, and
keeps the signed-in user's profile and BMI history in step with the
backend.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .errors import InputValidationError
from .models import BMIEntry

logger = logging.getLogger(__name__)

BMI_HISTORY_DISPLAY_LIMIT = 10


class BMICategory(str, Enum):
    """WHO adult BMI bands."""

    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal weight"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


@dataclass(frozen=True)
class BMIResult:
    """Outcome of one BMI calculation."""

    bmi: float
    category: BMICategory
    height: float
    weight: float

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "bmi": self.bmi,
            "category": self.category.value,
            "height": self.height,
            "weight": self.weight,
        }


def calculate_bmi(height_cm: float, weight_kg: float) -> float:
    """BMI rounded to one decimal place."""
    return round(weight_kg / (height_cm / 100) ** 2, 1)


def classify_bmi(bmi: float) -> BMICategory:
    """Map a BMI value to its category; lower bounds are inclusive."""
    if bmi < 18.5:
        return BMICategory.UNDERWEIGHT
    if bmi < 25:
        return BMICategory.NORMAL
    if bmi < 30:
        return BMICategory.OVERWEIGHT
    return BMICategory.OBESE


def evaluate_bmi(height_cm: Optional[float], weight_kg: Optional[float]) -> BMIResult:
    """
    Validate inputs and compute BMI with its category.

    The category is taken from the rounded value, so 18.46 reads as 18.5
    and is classified Normal weight.

    Raises:
        InputValidationError: height or weight missing, not finite or not positive
    """
    if not height_cm or not weight_kg:
        raise InputValidationError("Please enter both height and weight")
    if not math.isfinite(height_cm) or not math.isfinite(weight_kg):
        raise InputValidationError("Height and weight must be finite numbers")
    if height_cm <= 0 or weight_kg <= 0:
        raise InputValidationError("Height and weight must be positive numbers")

    bmi = calculate_bmi(height_cm, weight_kg)
    return BMIResult(bmi=bmi, category=classify_bmi(bmi), height=height_cm, weight=weight_kg)


class BMIEngine:
    """BMI calculation tied to the remote profile and history log."""

    def __init__(self, client, history_limit: int = BMI_HISTORY_DISPLAY_LIMIT):
        self.client = client
        self.history_limit = history_limit

    async def submit(self, height_cm: Optional[float], weight_kg: Optional[float]) -> BMIResult:
        """
        Compute BMI and, for a signed-in user, store it on the profile.

        Each call writes to the backend, which appends a history entry;
        repeated submissions are not deduplicated.
        """
        result = evaluate_bmi(height_cm, weight_kg)

        session = self.client.session
        if session.is_authenticated:
            await self.client.put(
                "/users/bmi", json={"height": result.height, "weight": result.weight}
            )
            session.set_current_bmi(result.bmi)
            logger.info(f"[BMI] Updated profile BMI to {result.bmi} ({result.category.value})")
        else:
            logger.debug("[BMI] No signed-in user; result not persisted")

        return result

    async def history(self, limit: Optional[int] = None) -> List[BMIEntry]:
        """Most recent BMI entries, newest first, at most ``limit`` of them."""
        limit = limit or self.history_limit
        body = await self.client.get("/users/bmi-history", params={"limit": limit})
        return parse_bmi_history(body, limit)


def parse_bmi_history(body, limit: int = BMI_HISTORY_DISPLAY_LIMIT) -> List[BMIEntry]:
    """Parse a history response and keep the first ``limit`` valid rows in source order."""
    if isinstance(body, dict):
        body = body.get("history") or body.get("data") or []
    if not isinstance(body, list):
        return []

    entries = []
    for row in body:
        if len(entries) >= limit:
            break
        if not isinstance(row, dict) or row.get("bmi") is None:
            continue
        try:
            entries.append(BMIEntry.model_validate(row))
        except ValueError as e:
            logger.warning(f"[BMI] Skipping malformed history entry: {e}")
    return entries
