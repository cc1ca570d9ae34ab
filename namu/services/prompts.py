from __future__ import annotations

from typing import Iterable, Optional

from namu.services.health_metrics import HealthMetrics


def health_constraints(*constraints: Optional[str]) -> str:
    cleaned = [c.strip() for c in constraints if c and c.strip()]
    return "; ".join(cleaned) or "None"


def recipe_prompt(
    ingredients: Iterable[str],
    dietary_restrictions: Optional[str] = None,
    medical_conditions: Optional[str] = None,
) -> str:
    constraints = health_constraints(dietary_restrictions, medical_conditions)
    return (
        "You are a professional chef who is also highly knowledgeable in nutritional science.\n"
        f"The user has the following ingredients: {', '.join(ingredients)}.\n\n"
        f"Health constraints: {constraints}. **CRITICAL INSTRUCTION**: Ensure the generated recipe "
        "strictly complies with these constraints (e.g., if Diabetic, no high sugar ingredients). "
        "If a condition is highly sensitive, add a small, one-sentence disclaimer at the end of the "
        "recipe recommending professional consultation.\n\n"
        "Generate ONE unique recipe that uses as many of the provided ingredients as possible.\n"
        "Format your response strictly using Markdown with these headings: 'Recipe Title', "
        "'Ingredients', 'Instructions', and 'Estimated Time'.\n"
        "Be concise and highly practical.\n"
    )


def plan_prompt(
    ingredients: Iterable[str],
    dietary_restrictions: Optional[str] = None,
    medical_conditions: Optional[str] = None,
    target_weight: Optional[float] = None,
    target_timeframe: Optional[float] = None,
) -> str:
    user_ingredients = ", ".join(ingredients)
    constraints = health_constraints(dietary_restrictions, medical_conditions)
    if target_weight and target_timeframe:
        goal = (
            f"The user's goal is to reach {target_weight:g}kg in {target_timeframe:g} weeks. "
            "Your plan MUST create a calorie deficit/surplus appropriate for this goal, assuming a "
            "daily calorie need provided by your maintenance calculations."
        )
    else:
        goal = "Generate a plan based on maintenance calories."

    return (
        "You are a professional nutritionist and meal planner.\n"
        f"The user has provided a list of core ingredients: {user_ingredients}.\n\n"
        f"{goal}\n"
        "Generate a comprehensive 7-day meal plan (Monday to Sunday) that includes a suggested "
        "Breakfast, Lunch, and Dinner for each day.\n\n"
        "**CRITICAL INSTRUCTION**: Every single meal listed in the plan MUST prominently feature one "
        f"or more ingredients from the user's provided list ({user_ingredients}). DO NOT introduce any "
        "major ingredients (like primary proteins or vegetables) that are NOT in the provided list, "
        "unless they are common pantry staples (salt, pepper, oil, water).\n\n"
        "Provide an approximate calorie count (in kcal) for every meal, enclosed in parentheses at the "
        'end of the meal description (e.g., "Scrambled eggs with tomato and pork (350 kcal)"). The '
        "total daily calorie count must align with the weight goal specified above.\n\n"
        f"Health constraints: {constraints}. Ensure the entire plan strictly complies with these "
        "constraints.\n\n"
        "Format the plan STRICTLY as a Markdown Table with FIVE columns. Do not include any text "
        "before or after the table.\n"
        "| Day | Breakfast | Lunch | Dinner | Total Daily Calories |\n"
        "| --- | --- | --- | --- | --- |\n"
        "| Monday | ... | ... | ... | (Approx. XXXX kcal) |\n"
        "(Continue for Tuesday through Sunday)\n"
    )


def health_prompt(
    gender: str,
    age: float,
    weight: float,
    height: float,
    activity_level: str,
    metrics: HealthMetrics,
) -> str:
    return (
        "You are a highly qualified virtual health and nutrition coach. Analyze the following user "
        "profile and metrics:\n"
        f"- **Gender:** {gender}\n"
        f"- **Age:** {age:g}\n"
        f"- **Weight:** {weight:g} kg\n"
        f"- **Height:** {height:g} cm\n"
        f"- **Activity:** {activity_level}\n"
        f"- **Calculated TDEE (Maintenance Calories):** {metrics.tdee} calories\n"
        f"- **Calculated BMI:** {metrics.bmi_display}\n\n"
        "Provide a brief analysis in Markdown format. Include the following sections:\n"
        "1. **Summary of Metrics:** State the user's BMI category (Underweight, Normal, Overweight, Obese).\n"
        f"2. **Estimated Daily Calorie Needs:** State the maintenance ({metrics.tdee} kcal) and provide "
        "recommended calorie ranges for both weight loss and weight gain.\n"
        "3. **Personalized Dietary Focus:** Give 3 actionable, non-medical, diet-related tips tailored "
        "to their profile and activity level.\n"
        "4. **Disclaimer:** End with a strong reminder that this is an AI recommendation, not "
        "professional medical advice.\n"
    )


IMAGE_ANALYSIS_PROMPT = (
    "Analyze this image of food. Identify the main components (e.g., chicken, rice, broccoli) and "
    "estimate the total calorie count and serving size.\n"
    "Provide the output STRICTLY in Markdown with the following sections:\n"
    "### Calorie Estimate, ### Main Ingredients, and ### Nutritional Note.\n"
    "Be conservative with your calorie estimate.\n"
)


def shopping_list_prompt(meal_plan_markdown: str) -> str:
    return (
        "From the following weekly meal plan in markdown format, please extract a single, "
        "comprehensive shopping list with all ingredients and their total quantities consolidated. "
        "Return the list as a clean markdown bulleted list. Only return the list, nothing else.\n\n"
        "MEAL PLAN:\n"
        "---\n"
        f"{meal_plan_markdown}\n"
        "---\n"
    )
