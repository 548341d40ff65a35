"""Phase-specific nutrition and exercise suggestions, plus health facts.

Content is static and served in-process.  Phases without dedicated
content (``predicted_period``, unknown names) get the general set.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from lunara.cycle.projector import PhaseLabel

logger = logging.getLogger("lunara.cycle.guidance")

DEFAULT_KEY = "default"


@dataclass(frozen=True)
class ExerciseSuggestion:
    name: str
    description: str
    image_seed: str = ""

    @property
    def summary(self) -> str:
        return f"{self.name}: {self.description}"


@dataclass
class NutritionRecommendations:
    """Food suggestions for one phase.

    Attributes:
        phase:            Phase value the suggestions were requested for.
        food_suggestions: Foods to favour during the phase.
    """

    phase: str
    food_suggestions: list[str] = field(default_factory=list)


@dataclass
class ExerciseRecommendations:
    """Exercise suggestions for one phase.

    Attributes:
        phase:                Phase value the suggestions were requested for.
        exercise_suggestions: ``"Name: description"`` strings.
        detailed_suggestions: The same suggestions as structured records.
    """

    phase: str
    exercise_suggestions: list[str] = field(default_factory=list)
    detailed_suggestions: list[ExerciseSuggestion] = field(default_factory=list)


@dataclass(frozen=True)
class MenstrualFact:
    fact: str


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------

PHASE_FOODS: dict[str, list[str]] = {
    PhaseLabel.menstrual.value: [
        "Iron-rich foods (Spinach, Lentils)",
        "Vitamin C (Oranges, Berries)",
        "Hydrating foods (Cucumber, Watermelon)",
        "Ginger Tea for cramps",
    ],
    PhaseLabel.follicular.value: [
        "Lean Protein (Chicken, Tofu, Fish)",
        "Complex Carbohydrates (Quinoa, Oats, Brown Rice)",
        "Flax Seeds for hormone balance",
        "Cruciferous Vegetables (Broccoli, Kale)",
    ],
    PhaseLabel.ovulation.value: [
        "Antioxidant-rich foods (Berries, Dark Chocolate)",
        "Fiber (Whole Grains, Beans, Vegetables)",
        "Healthy Fats (Avocado, Nuts, Seeds)",
        "Zinc-rich foods (Oysters, Pumpkin Seeds)",
    ],
    PhaseLabel.luteal.value: [
        "Magnesium (Pumpkin Seeds, Almonds, Dark Leafy Greens)",
        "B Vitamins (Leafy Greens, Eggs, Legumes)",
        "Calcium & Vitamin D (Yogurt, Fortified Milk, Salmon)",
        "Complex Carbs for stable energy (Sweet Potatoes)",
    ],
    DEFAULT_KEY: [
        "Focus on a balanced diet with whole foods.",
        "Stay hydrated by drinking plenty of water.",
        "Listen to your body's cravings in moderation.",
    ],
}

PHASE_EXERCISES: dict[str, list[ExerciseSuggestion]] = {
    PhaseLabel.menstrual.value: [
        ExerciseSuggestion("Restorative Yoga", "Focus on gentle poses, breathing, and relaxation.", "yoga_restorative"),
        ExerciseSuggestion("Light Walking", "Easy-paced walks, listen to your body.", "walking_gentle"),
        ExerciseSuggestion("Stretching", "Focus on relieving tension, especially in the lower back and hips.", "stretching"),
        ExerciseSuggestion("Mindful Movement", "Slow, intentional movements like Tai Chi.", "tai_chi"),
    ],
    PhaseLabel.follicular.value: [
        ExerciseSuggestion("Brisk Walking or Jogging", "Increase pace and duration as energy builds.", "jogging_brisk"),
        ExerciseSuggestion("Dancing", "Energetic and fun cardio.", "dance_cardio"),
        ExerciseSuggestion("Circuit Training", "Combine light strength and cardio exercises.", "circuit_light"),
        ExerciseSuggestion("Hiking", "Enjoy nature with moderate intensity.", "hiking"),
    ],
    PhaseLabel.ovulation.value: [
        ExerciseSuggestion("High-Intensity Interval Training (HIIT)", "Maximize effort during peak energy.", "hiit_intense"),
        ExerciseSuggestion("Running or Sprinting", "Push your limits if you feel up to it.", "sprinting"),
        ExerciseSuggestion("Power Yoga", "Dynamic and challenging yoga flow.", "yoga_power"),
        ExerciseSuggestion("Team Sports", "Engage in competitive and social activities.", "team_sports"),
    ],
    PhaseLabel.luteal.value: [
        ExerciseSuggestion("Strength Training", "Focus on compound movements with moderate weights.", "strength_compound"),
        ExerciseSuggestion("Pilates", "Build core strength and improve posture.", "pilates_core"),
        ExerciseSuggestion("Swimming", "Low-impact cardio that's easy on the joints.", "swimming_laps"),
        ExerciseSuggestion("Steady-State Cardio", "Moderate intensity cardio like cycling or elliptical.", "cycling_moderate"),
    ],
    DEFAULT_KEY: [
        ExerciseSuggestion("Listen to Your Body", "Adjust intensity based on how you feel each day.", "listening"),
        ExerciseSuggestion("Stay Consistent", "Aim for regular movement throughout your cycle.", "consistency"),
        ExerciseSuggestion("Prioritize Recovery", "Include rest days and stretching.", "recovery"),
    ],
}

FACTS: tuple[str, ...] = (
    "The average menstrual cycle is typically around 28 days, but cycles ranging "
    "from 21 to 35 days are also considered normal.",
    "Menstruation is a natural process involving the shedding of the uterine "
    "lining when pregnancy does not occur.",
    "Ovulation, the release of an egg from the ovary, usually happens about "
    "midway through the menstrual cycle.",
    "Hormonal fluctuations throughout the cycle can affect mood, energy levels, "
    "and physical symptoms.",
    "Tracking your cycle can help you understand your body better and predict "
    "fertile windows or period start dates.",
    "Period poverty, the lack of access to menstrual products and education, "
    "affects millions worldwide.",
    "The color and consistency of menstrual blood can vary and provide clues "
    "about hormonal health.",
    "Exercise and a balanced diet can help manage symptoms like cramps and bloating.",
    "Stress can sometimes impact the regularity and timing of your menstrual cycle.",
    "It's a myth that you can't get pregnant during your period, though the "
    "chances are lower.",
)


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def _phase_key(phase: PhaseLabel | str) -> str:
    if isinstance(phase, PhaseLabel):
        return phase.value
    return str(phase).strip().lower().replace(" ", "_")


def nutrition_for(phase: PhaseLabel | str) -> NutritionRecommendations:
    """Return food suggestions for ``phase``, falling back to the general set."""
    key = _phase_key(phase)
    foods = PHASE_FOODS.get(key)
    if foods is None:
        logger.debug("No nutrition content for phase %r; using defaults", key)
        foods = PHASE_FOODS[DEFAULT_KEY]
    return NutritionRecommendations(phase=key, food_suggestions=list(foods))


def exercise_for(phase: PhaseLabel | str) -> ExerciseRecommendations:
    """Return exercise suggestions for ``phase``, falling back to the general set."""
    key = _phase_key(phase)
    suggestions = PHASE_EXERCISES.get(key)
    if suggestions is None:
        logger.debug("No exercise content for phase %r; using defaults", key)
        suggestions = PHASE_EXERCISES[DEFAULT_KEY]
    return ExerciseRecommendations(
        phase=key,
        exercise_suggestions=[s.summary for s in suggestions],
        detailed_suggestions=list(suggestions),
    )


def random_fact(rng: random.Random | None = None) -> MenstrualFact:
    """Pick one health fact.  Pass ``rng`` for a deterministic choice."""
    chooser = rng or random
    return MenstrualFact(fact=chooser.choice(FACTS))
