"""Template-based meal recommendations sized to the remaining daily targets."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from nutrition_planner.domain.nutrition import MacroProfile
from nutrition_planner.domain.recommendations import (
    MealRecommendation,
    MealRecommendationRequest,
    MealTemplate,
    MealType,
    RecommendationType,
    TimeOfDay,
    Urgency,
)
from nutrition_planner.rounding import round_int

MIN_PORTION = 0.5
MAX_PORTION = 2.0
MAX_TEMPLATE_STRETCH = 1.5
HIGH_PROTEIN_RATIO = 0.4
HIGH_PROTEIN_GRAMS = 20
LOW_CALORIE_REMAINING = 300
LIGHT_OPTION_CALORIES = 100
LIGHT_SNACK_CALORIES = 200
SUBSTANTIAL_MEAL_CALORIES = 500
OVERSIZED_PORTION_CALORIES = 300
URGENT_PROTEIN_GRAMS = 25
SMALL_PORTION = 0.8
LARGE_PORTION = 1.3

_MEAT_WORDS = ("chicken", "beef", "turkey", "salmon", "tuna", "meat")
_ANIMAL_PRODUCT_WORDS = ("egg", "cheese", "yogurt", "milk")
_DAIRY_WORDS = ("cheese", "yogurt", "milk")
_GLUTEN_WORDS = ("bread", "oats", "tortilla", "wheat")
_URGENCY_ORDER = {Urgency.HIGH: 0, Urgency.MEDIUM: 1, Urgency.LOW: 2}
_MEAL_FOR_TIME = {
    TimeOfDay.MORNING: MealType.BREAKFAST,
    TimeOfDay.AFTERNOON: MealType.LUNCH,
    TimeOfDay.EVENING: MealType.DINNER,
}


def _template(  # noqa: PLR0913
    name: str,
    description: str,
    macros: tuple[float, float, float, float],
    ingredients: tuple[str, ...],
    prep_time: int,
    difficulty: str = "easy",
) -> MealTemplate:
    calories, protein, carbs, fats = macros
    return MealTemplate(
        name=name,
        description=description,
        base=MacroProfile(calories, protein, carbs, fats),
        ingredients=ingredients,
        prep_time=prep_time,
        difficulty=difficulty,
    )


MEAL_TEMPLATES: Mapping[
    RecommendationType, Mapping[MealType, tuple[MealTemplate, ...]]
] = MappingProxyType(
    {
        RecommendationType.HIGH_PROTEIN: {
            MealType.BREAKFAST: (
                _template(
                    "Greek Yogurt Protein Bowl",
                    "Creamy Greek yogurt topped with fresh berries and nuts",
                    (300, 25, 20, 8),
                    ("Greek yogurt", "berries", "nuts", "protein powder"),
                    5,
                ),
                _template(
                    "Veggie Scrambled Eggs",
                    "Fluffy scrambled eggs with fresh vegetables",
                    (250, 20, 8, 15),
                    ("eggs", "spinach", "bell peppers", "cheese"),
                    10,
                ),
                _template(
                    "Protein Smoothie",
                    "Nutrient-packed smoothie with protein powder and greens",
                    (280, 30, 25, 6),
                    ("protein powder", "banana", "spinach", "almond milk"),
                    5,
                ),
            ),
            MealType.LUNCH: (
                _template(
                    "Grilled Chicken Salad",
                    "Fresh salad with lean grilled chicken breast",
                    (350, 35, 15, 12),
                    ("chicken breast", "mixed greens", "cherry tomatoes", "olive oil"),
                    15,
                ),
                _template(
                    "Tuna and White Bean Bowl",
                    "Protein-rich bowl with tuna and fiber-packed beans",
                    (320, 28, 25, 8),
                    ("canned tuna", "white beans", "cucumber", "lemon"),
                    8,
                ),
            ),
            MealType.DINNER: (
                _template(
                    "Baked Salmon with Vegetables",
                    "Omega-3 rich salmon with roasted vegetables",
                    (400, 35, 20, 18),
                    ("salmon fillet", "broccoli", "sweet potato", "olive oil"),
                    25,
                    "medium",
                ),
                _template(
                    "Lean Beef Stir-fry",
                    "Quick stir-fry with lean protein and colorful vegetables",
                    (380, 32, 25, 15),
                    ("lean beef", "mixed vegetables", "brown rice", "soy sauce"),
                    20,
                    "medium",
                ),
            ),
            MealType.SNACK: (
                _template(
                    "Cottage Cheese with Fruit",
                    "High-protein snack with fresh fruit",
                    (150, 15, 12, 4),
                    ("cottage cheese", "berries", "almonds"),
                    2,
                ),
            ),
        },
        RecommendationType.BALANCED: {
            MealType.BREAKFAST: (
                _template(
                    "Overnight Oats",
                    "Creamy overnight oats with natural sweetness",
                    (320, 12, 45, 10),
                    ("oats", "milk", "chia seeds", "banana"),
                    5,
                ),
                _template(
                    "Avocado Toast with Egg",
                    "Nutritious toast topped with creamy avocado and protein",
                    (350, 15, 30, 18),
                    ("whole grain bread", "avocado", "egg", "tomato"),
                    8,
                ),
            ),
            MealType.LUNCH: (
                _template(
                    "Quinoa Buddha Bowl",
                    "Colorful bowl with complete protein and healthy fats",
                    (380, 16, 50, 12),
                    ("quinoa", "chickpeas", "roasted vegetables", "tahini"),
                    20,
                    "medium",
                ),
                _template(
                    "Turkey and Hummus Wrap",
                    "Satisfying wrap with lean protein and fiber",
                    (340, 22, 35, 12),
                    ("whole wheat tortilla", "turkey", "hummus", "vegetables"),
                    5,
                ),
            ),
            MealType.DINNER: (
                _template(
                    "Chicken and Rice Bowl",
                    "Balanced meal with lean protein and complex carbs",
                    (420, 28, 45, 12),
                    ("chicken thigh", "brown rice", "steamed broccoli", "sesame oil"),
                    30,
                    "medium",
                ),
            ),
            MealType.SNACK: (
                _template(
                    "Apple with Almond Butter",
                    "Classic combination of fiber and healthy fats",
                    (180, 6, 20, 8),
                    ("apple", "almond butter"),
                    2,
                ),
            ),
        },
        RecommendationType.LOW_CALORIE: {
            MealType.BREAKFAST: (
                _template(
                    "Veggie Egg White Scramble",
                    "Light and protein-rich breakfast with vegetables",
                    (150, 18, 8, 3),
                    ("egg whites", "spinach", "mushrooms", "bell peppers"),
                    8,
                ),
            ),
            MealType.LUNCH: (
                _template(
                    "Large Garden Salad with Chicken",
                    "Filling salad with lean protein and lots of vegetables",
                    (250, 25, 15, 8),
                    ("mixed greens", "grilled chicken", "cucumber", "light dressing"),
                    10,
                ),
            ),
            MealType.DINNER: (
                _template(
                    "Zucchini Noodles with Turkey Meatballs",
                    "Low-carb alternative with spiralized vegetables",
                    (280, 25, 12, 12),
                    ("zucchini", "lean ground turkey", "marinara sauce", "herbs"),
                    25,
                    "medium",
                ),
            ),
            MealType.SNACK: (
                _template(
                    "Cucumber with Hummus",
                    "Refreshing and light snack with plant protein",
                    (80, 4, 8, 4),
                    ("cucumber", "hummus"),
                    2,
                ),
            ),
        },
    }
)


def determine_recommendation_type(
    request: MealRecommendationRequest,
) -> RecommendationType:
    """Classify what kind of meal best fits the remaining targets."""
    remaining = request.remaining_targets
    protein_ratio = remaining.protein * 4 / max(remaining.calories, 1)
    if protein_ratio > HIGH_PROTEIN_RATIO or remaining.protein > HIGH_PROTEIN_GRAMS:
        return RecommendationType.HIGH_PROTEIN
    if remaining.calories < LOW_CALORIE_REMAINING and request.goal_type == "lose":
        return RecommendationType.LOW_CALORIE
    return RecommendationType.BALANCED


def meal_type_for_time_of_day(
    time_of_day: TimeOfDay, meal_type: MealType | None = None
) -> MealType:
    """Use the requested meal type, else infer it from the time of day."""
    if meal_type:
        return meal_type
    return _MEAL_FOR_TIME.get(time_of_day, MealType.SNACK)


def calculate_portion_multiplier(target_calories: float, base_calories: float) -> float:
    """Scale factor from a template portion to the target, kept within 0.5x-2x."""
    if base_calories == 0:
        return 1.0
    return max(MIN_PORTION, min(MAX_PORTION, target_calories / base_calories))


def adjust_nutrition_for_portion(base: MacroProfile, multiplier: float) -> MacroProfile:
    """Scale template macros and round them to whole numbers."""
    scaled = base.scale(multiplier)
    return MacroProfile(
        calories=round_int(scaled.calories),
        protein=round_int(scaled.protein),
        carbs=round_int(scaled.carbs),
        fats=round_int(scaled.fats),
    )


def portion_guidance(multiplier: float) -> str:
    if multiplier < SMALL_PORTION:
        return "Use smaller portions than typical serving sizes"
    if multiplier > LARGE_PORTION:
        return "Use larger portions or add extra ingredients"
    return "Use standard serving sizes"


def filter_by_dietary_restrictions(
    templates: Sequence[MealTemplate], restrictions: Sequence[str]
) -> list[MealTemplate]:
    """Drop templates with an ingredient excluded by any restriction."""
    if not restrictions:
        return list(templates)
    return [
        template
        for template in templates
        if not any(
            _violates(restriction, [item.lower() for item in template.ingredients])
            for restriction in restrictions
        )
    ]


def _violates(restriction: str, ingredients: list[str]) -> bool:
    restriction = restriction.lower().strip()
    if "vegetarian" in restriction:
        banned: tuple[str, ...] = _MEAT_WORDS
    elif "vegan" in restriction:
        banned = _MEAT_WORDS + _ANIMAL_PRODUCT_WORDS
    elif "dairy" in restriction:
        banned = _DAIRY_WORDS
    elif "gluten" in restriction:
        banned = _GLUTEN_WORDS
    else:
        banned = (restriction,)
    return any(word in ingredient for ingredient in ingredients for word in banned)


@dataclass
class MealRecommendationEngine:
    """Picks template meals and scales them to the remaining targets."""

    templates: Mapping[
        RecommendationType, Mapping[MealType, tuple[MealTemplate, ...]]
    ] = field(default_factory=lambda: MEAL_TEMPLATES)
    limit: int = 3

    def generate(self, request: MealRecommendationRequest) -> list[MealRecommendation]:
        """Return recommendations ordered by urgency, most urgent first."""
        recommendation_type = determine_recommendation_type(request)
        meal_type = meal_type_for_time_of_day(request.time_of_day, request.meal_type)
        pool = self.templates[recommendation_type]
        candidates = pool.get(meal_type) or pool[MealType.SNACK]
        allowed = filter_by_dietary_restrictions(
            candidates, request.dietary_restrictions
        )

        remaining = request.remaining_targets
        recommendations = [
            self._recommend(template, request, recommendation_type, meal_type)
            for template in allowed[: self.limit]
        ]
        if (
            remaining.calories < LIGHT_OPTION_CALORIES
            and request.time_of_day == TimeOfDay.EVENING
        ):
            recommendations.append(_light_evening_option())
        return sorted(recommendations, key=lambda rec: _URGENCY_ORDER[rec.urgency])

    def _recommend(
        self,
        template: MealTemplate,
        request: MealRecommendationRequest,
        recommendation_type: RecommendationType,
        meal_type: MealType,
    ) -> MealRecommendation:
        remaining = request.remaining_targets
        target = min(remaining.calories, template.base.calories * MAX_TEMPLATE_STRETCH)
        multiplier = calculate_portion_multiplier(target, template.base.calories)
        nutrition = adjust_nutrition_for_portion(template.base, multiplier)
        return MealRecommendation(
            kind="snack" if meal_type == MealType.SNACK else "meal",
            name=template.name,
            description=template.description,
            nutrition=nutrition,
            reasoning=_reasoning(meal_type, nutrition, remaining, recommendation_type),
            urgency=_urgency(remaining, nutrition),
            ingredients=list(template.ingredients),
            preparation_time=template.prep_time,
            difficulty=template.difficulty,
            portion_guidance=portion_guidance(multiplier),
        )


def quick_suggestions(remaining: MacroProfile, time_of_day: TimeOfDay) -> list[str]:
    """Short one-line nudges for the coach based on what's left today."""
    suggestions: list[str] = []
    if remaining.protein > HIGH_PROTEIN_GRAMS:
        suggestions.append(
            f"Add {round_int(remaining.protein)}g protein to your next meal"
        )
        suggestions.append("Consider a protein-rich snack")
    if remaining.calories > SUBSTANTIAL_MEAL_CALORIES:
        suggestions.append("You have room for a substantial meal")
        if time_of_day == TimeOfDay.EVENING:
            suggestions.append("Perfect time for a balanced dinner")
    elif remaining.calories < LIGHT_SNACK_CALORIES:
        suggestions.append("Choose a light snack or small portion")
        suggestions.append("Focus on nutrient-dense options")

    if time_of_day == TimeOfDay.MORNING:
        suggestions.append("Start with a protein-rich breakfast")
    elif time_of_day == TimeOfDay.AFTERNOON:
        suggestions.append("Consider a balanced lunch")
    else:
        suggestions.append("End the day with a satisfying dinner")
    return suggestions[:4]


def format_recommendations(recommendations: Sequence[MealRecommendation]) -> str:
    """Render recommendations as a plain-text coach message."""
    if not recommendations:
        return (
            "I don't have specific meal recommendations right now, but I can help "
            "you make good choices based on your remaining targets."
        )
    lines = ["Here are some meal suggestions based on your current nutrition targets:"]
    for index, rec in enumerate(recommendations, start=1):
        lines.append("")
        lines.append(
            f"{index}. {rec.name} ({rec.nutrition.calories:.0f} cal, "
            f"{rec.nutrition.protein:.0f}g protein)"
        )
        lines.append(f"   {rec.description}")
        lines.append(f"   {rec.reasoning}")
        if rec.preparation_time:
            lines.append(f"   {rec.preparation_time} minutes, {rec.difficulty}")
        if rec.portion_guidance:
            lines.append(f"   {rec.portion_guidance}")
    return "\n".join(lines)


def _reasoning(
    meal_type: MealType,
    nutrition: MacroProfile,
    remaining: MacroProfile,
    recommendation_type: RecommendationType,
) -> str:
    reasoning = (
        f"This {meal_type} provides {nutrition.protein:.0f}g protein and "
        f"{nutrition.calories:.0f} calories. "
    )
    if recommendation_type == RecommendationType.HIGH_PROTEIN:
        return reasoning + (
            f"High in protein to help you reach your {remaining.protein:g}g "
            "protein target."
        )
    if recommendation_type == RecommendationType.LOW_CALORIE:
        return reasoning + (
            f"Light option that fits well within your remaining "
            f"{remaining.calories:g} calories."
        )
    return reasoning + (
        "Balanced nutrition to support your goals while staying within your "
        "calorie target."
    )


def _urgency(remaining: MacroProfile, nutrition: MacroProfile) -> Urgency:
    if (
        remaining.calories < LIGHT_SNACK_CALORIES
        and nutrition.calories > OVERSIZED_PORTION_CALORIES
    ):
        return Urgency.LOW
    if (
        remaining.protein > URGENT_PROTEIN_GRAMS
        and nutrition.protein > HIGH_PROTEIN_GRAMS
    ):
        return Urgency.HIGH
    return Urgency.MEDIUM


def _light_evening_option() -> MealRecommendation:
    return MealRecommendation(
        kind="adjustment",
        name="Light Evening Option",
        description="Consider a small, protein-rich snack or herbal tea",
        nutrition=MacroProfile(calories=50, protein=5, carbs=5, fats=2),
        reasoning=(
            "You're close to your calorie goal. A light option will help you "
            "stay on track."
        ),
        urgency=Urgency.MEDIUM,
        ingredients=["Greek yogurt", "berries", "herbal tea"],
        preparation_time=2,
        difficulty="easy",
    )
