from __future__ import annotations

from types import MappingProxyType

from speaking_report.models.assessment import PerformanceTier, StyleTier

FEEDBACK_CATEGORIES = ("overall", "pronunciation", "fluency", "vocabulary", "grammar")

_FEEDBACK_TABLE = {
    "overall": {
        PerformanceTier.EXCELLENT: (
            "Excellent performance! You demonstrate exceptional speaking abilities "
            "with strong control across all areas."
        ),
        PerformanceTier.VERY_GOOD: (
            "Very good performance! You show strong speaking skills with minor "
            "areas for improvement."
        ),
        PerformanceTier.GOOD: (
            "Good performance with noticeable competence, though some inaccuracies "
            "are present."
        ),
        PerformanceTier.MODERATE: (
            "Moderate performance. You can communicate but need significant "
            "improvement in several areas."
        ),
        PerformanceTier.NEEDS_IMPROVEMENT: (
            "Needs improvement. Focus on building fundamental speaking skills "
            "across all areas."
        ),
    },
    "pronunciation": {
        PerformanceTier.EXCELLENT: (
            "Excellent pronunciation with clear and accurate articulation of sounds."
        ),
        PerformanceTier.VERY_GOOD: (
            "Very good pronunciation with occasional minor errors that don't "
            "impede understanding."
        ),
        PerformanceTier.GOOD: (
            "Good pronunciation but some sounds need improvement for better clarity."
        ),
        PerformanceTier.MODERATE: (
            "Pronunciation needs work; some words are unclear and may affect "
            "comprehension."
        ),
        PerformanceTier.NEEDS_IMPROVEMENT: (
            "Significant pronunciation challenges affecting overall clarity and "
            "understanding."
        ),
    },
    "fluency": {
        PerformanceTier.EXCELLENT: (
            "Excellent fluency with natural speech flow and minimal hesitation."
        ),
        PerformanceTier.VERY_GOOD: (
            "Very good fluency with smooth delivery and only occasional pauses."
        ),
        PerformanceTier.GOOD: (
            "Good fluency though some hesitation and unnatural pauses are noticeable."
        ),
        PerformanceTier.MODERATE: (
            "Fluency needs improvement; frequent hesitation affects the natural "
            "flow of speech."
        ),
        PerformanceTier.NEEDS_IMPROVEMENT: (
            "Significant fluency issues with many pauses and disrupted speech flow."
        ),
    },
    "vocabulary": {
        PerformanceTier.EXCELLENT: (
            "Excellent vocabulary range with precise and sophisticated word choices."
        ),
        PerformanceTier.VERY_GOOD: (
            "Very good vocabulary with appropriate word selection and variety."
        ),
        PerformanceTier.GOOD: (
            "Good vocabulary but limited range; occasional difficulty expressing "
            "complex ideas."
        ),
        PerformanceTier.MODERATE: (
            "Vocabulary needs expansion; basic words used, limiting expression."
        ),
        PerformanceTier.NEEDS_IMPROVEMENT: (
            "Limited vocabulary significantly restricts communication ability."
        ),
    },
    "grammar": {
        PerformanceTier.EXCELLENT: (
            "Excellent grammatical accuracy with sophisticated sentence structures."
        ),
        PerformanceTier.VERY_GOOD: (
            "Very good grammar with minor errors that don't impede communication."
        ),
        PerformanceTier.GOOD: (
            "Good grammar but some errors in complex structures are noticeable."
        ),
        PerformanceTier.MODERATE: (
            "Grammar needs improvement; errors are frequent and may affect clarity."
        ),
        PerformanceTier.NEEDS_IMPROVEMENT: (
            "Significant grammatical issues affecting overall comprehension."
        ),
    },
}

FEEDBACK_TABLE = MappingProxyType(
    {category: MappingProxyType(messages) for category, messages in _FEEDBACK_TABLE.items()}
)


class UnknownCategoryError(LookupError):
    def __init__(self, category: str) -> None:
        super().__init__(category)
        self.category = category

    def __str__(self) -> str:
        allowed = ", ".join(FEEDBACK_CATEGORIES)
        return f"Unknown feedback category {self.category!r} (expected one of: {allowed})"


def classify_score(score: float) -> PerformanceTier:
    if score >= 8.0:
        return PerformanceTier.EXCELLENT
    if score >= 7.0:
        return PerformanceTier.VERY_GOOD
    if score >= 6.0:
        return PerformanceTier.GOOD
    if score >= 5.0:
        return PerformanceTier.MODERATE
    return PerformanceTier.NEEDS_IMPROVEMENT


def style_tier_of(score: float) -> StyleTier:
    # Color bands are tuned separately from the feedback tiers.
    if score >= 8.0:
        return StyleTier.EXCELLENT
    if score >= 7.0:
        return StyleTier.GOOD
    if score >= 6.0:
        return StyleTier.FAIR
    return StyleTier.POOR


def feedback_for(score: float, category: str = "overall") -> str:
    try:
        messages = FEEDBACK_TABLE[category]
    except KeyError:
        raise UnknownCategoryError(category) from None
    return messages[classify_score(score)]
