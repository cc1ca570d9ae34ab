from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class RecipeRequest(BaseModel):
    ingredients: Optional[list[str]] = None
    dietaryRestrictions: Optional[str] = None
    medicalConditions: Optional[str] = None


class PlanRequest(BaseModel):
    ingredients: Optional[list[str]] = None
    dietaryRestrictions: Optional[str] = None
    medicalConditions: Optional[str] = None
    targetWeight: Optional[float] = Field(default=None, gt=0)
    targetTimeframe: Optional[float] = Field(default=None, gt=0)


class HealthProfileRequest(BaseModel):
    gender: str = Field(..., min_length=1)
    age: float = Field(..., gt=0)
    weight: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    activityLevel: str = Field(..., min_length=1)


class ImageAnalysisRequest(BaseModel):
    imageBase64: Optional[str] = None
    imageMimeType: Optional[str] = None


class ShoppingListRequest(BaseModel):
    mealPlanMarkdown: Optional[str] = None


class EmailRequest(BaseModel):
    recipient: Optional[str] = None
    subject: Optional[str] = None
    body: Optional[str] = None
