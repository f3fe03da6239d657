"""BMI models."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BMIRequest(BaseModel):
    """Height in centimetres and weight in kilograms."""

    height: Optional[float] = None
    weight: Optional[float] = None


class BMIResponse(BaseModel):
    """Computed BMI with its category."""

    model_config = ConfigDict(populate_by_name=True)

    bmi: float
    category: str
    height: float
    weight: float
    persisted: bool = False
    current_bmi: Optional[float] = Field(default=None, alias="currentBMI")
