# namu/app/routers/generate.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from google.genai import types
from starlette.responses import Response

from namu.app.deps import get_generator
from namu.app.schemas.generate import (
    HealthProfileRequest,
    ImageAnalysisRequest,
    PlanRequest,
    RecipeRequest,
    ShoppingListRequest,
)
from namu.services import prompts
from namu.services.errors import ValidationError
from namu.services.gemini_client import TextGenerator, image_part, user_content
from namu.services.health_metrics import compute_metrics
from namu.services.stream_relay import relay

log = logging.getLogger("generate")
router = APIRouter(prefix="/api", tags=["generate"])

# Message for bodies that fail schema validation, keyed by path
INVALID_BODY_MESSAGES = {
    "/api/generate-recipe": "Please provide ingredients.",
    "/api/generate-plan": "Missing or malformed ingredients list.",
    "/api/analyze-health": "Missing or malformed health profile.",
    "/api/analyze-image": "Missing image data.",
    "/api/generate-shopping-list": "Missing mealPlanMarkdown in request body",
}


def _clean_ingredients(value: Optional[list[str]]) -> Optional[list[str]]:
    if value is None:
        return None
    return [item.strip() for item in value if item and item.strip()]


@router.post("/generate-recipe")
async def generate_recipe(
    payload: RecipeRequest,
    generator: TextGenerator = Depends(get_generator),
) -> Response:
    ingredients = _clean_ingredients(payload.ingredients)
    if not ingredients:
        raise ValidationError("Please provide ingredients.")

    prompt = prompts.recipe_prompt(
        ingredients,
        payload.dietaryRestrictions,
        payload.medicalConditions,
    )
    return await relay(
        generator.stream_text([prompt]),
        endpoint="generate-recipe",
        error_message="Failed to generate recipe. Check server logs for details.",
    )


@router.post("/generate-plan")
async def generate_plan(
    payload: PlanRequest,
    generator: TextGenerator = Depends(get_generator),
) -> Response:
    ingredients = _clean_ingredients(payload.ingredients)
    if ingredients is None:
        raise ValidationError("Missing or malformed ingredients list.")

    prompt = prompts.plan_prompt(
        ingredients,
        payload.dietaryRestrictions,
        payload.medicalConditions,
        payload.targetWeight,
        payload.targetTimeframe,
    )
    return await relay(
        generator.stream_text([prompt]),
        endpoint="generate-plan",
        error_message="Failed to generate plan. Check server logs for details.",
    )


@router.post("/analyze-health")
async def analyze_health(
    payload: HealthProfileRequest,
    generator: TextGenerator = Depends(get_generator),
) -> Response:
    metrics = compute_metrics(
        payload.gender,
        payload.age,
        payload.weight,
        payload.height,
        payload.activityLevel,
    )
    log.info(
        "generate.health_metrics tdee=%s bmi=%s category=%s",
        metrics.tdee,
        metrics.bmi_display,
        metrics.bmi_category,
    )
    prompt = prompts.health_prompt(
        payload.gender,
        payload.age,
        payload.weight,
        payload.height,
        payload.activityLevel,
        metrics,
    )
    return await relay(
        generator.stream_text([prompt]),
        endpoint="analyze-health",
        error_message="Failed to generate health analysis.",
    )


@router.post("/analyze-image")
async def analyze_image(
    payload: ImageAnalysisRequest,
    generator: TextGenerator = Depends(get_generator),
) -> Response:
    if not payload.imageBase64 or not payload.imageMimeType:
        raise ValidationError("Missing image data.")

    image = image_part(payload.imageMimeType, payload.imageBase64)
    contents = [user_content(image, types.Part.from_text(text=prompts.IMAGE_ANALYSIS_PROMPT))]
    return await relay(
        generator.stream_text(contents),
        endpoint="analyze-image",
        error_message="Failed to analyze image.",
    )


@router.post("/generate-shopping-list")
async def generate_shopping_list(
    payload: ShoppingListRequest,
    generator: TextGenerator = Depends(get_generator),
) -> Response:
    if not payload.mealPlanMarkdown or not payload.mealPlanMarkdown.strip():
        raise ValidationError("Missing mealPlanMarkdown in request body")

    prompt = prompts.shopping_list_prompt(payload.mealPlanMarkdown)
    contents = [user_content(types.Part.from_text(text=prompt))]
    return await relay(
        generator.stream_text(contents),
        endpoint="generate-shopping-list",
        error_message="Internal Server Error while generating the list",
    )
