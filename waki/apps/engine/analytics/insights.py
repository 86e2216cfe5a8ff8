"""Rule-based insights and the recommendations they unlock."""

from __future__ import annotations

from typing import List, Sequence

from waki.libs.schemas import Insight, JournalStats, MoodTrend

MOOD_LOOKBACK = 7
POSITIVE_THRESHOLD = 0.5
SUPPORT_THRESHOLD = -0.3
CONSISTENCY_THRESHOLD = 5
GRATEFUL_MOODS = {"grateful", "happy"}
MAX_RECOMMENDATIONS = 3

POSITIVE_MOMENTUM = "Positive Momentum"
EMOTIONAL_SUPPORT = "Emotional Support"
CONSISTENT_JOURNALING = "Consistent Journaling"
GRATITUDE_PRACTICE = "Gratitude Practice"

SUPPORT_RECOMMENDATIONS = (
    "Try a 5-minute meditation before your next journal entry",
    "Consider reaching out to a friend or loved one today",
)
PRODUCTIVITY_RECOMMENDATIONS = (
    "Challenge yourself to explore a new topic in tomorrow's entry",
    "Try voice journaling for a different perspective",
)
DEFAULT_RECOMMENDATIONS = (
    "Set a new goal to track your progress",
    "Review your past entries to see how far you've come",
    "Try journaling at a different time of day",
)


def generate_insights(mood_trends: Sequence[MoodTrend], stats: JournalStats) -> List[Insight]:
    insights: List[Insight] = []

    if len(mood_trends) > MOOD_LOOKBACK:
        recent = mood_trends[-MOOD_LOOKBACK:]
        avg_sentiment = sum(trend.sentiment for trend in recent) / len(recent)
        if avg_sentiment > POSITIVE_THRESHOLD:
            insights.append(
                Insight(
                    type="mood",
                    title=POSITIVE_MOMENTUM,
                    description="Your mood has been consistently positive this week. Keep up the great energy!",
                    icon="\N{GLOWING STAR}",
                )
            )
        if avg_sentiment < SUPPORT_THRESHOLD:
            insights.append(
                Insight(
                    type="mood",
                    title=EMOTIONAL_SUPPORT,
                    description=(
                        "Your recent entries suggest you might be going through a tough time. "
                        "Remember to be kind to yourself."
                    ),
                    icon="\N{BLUE HEART}",
                )
            )

    if stats.this_week >= CONSISTENCY_THRESHOLD:
        insights.append(
            Insight(
                type="productivity",
                title=CONSISTENT_JOURNALING,
                description=f"You've made {stats.this_week} entries this week. Great consistency!",
                icon="\N{CHART WITH UPWARDS TREND}",
            )
        )

    if stats.most_common_mood in GRATEFUL_MOODS:
        insights.append(
            Insight(
                type="wellbeing",
                title=GRATITUDE_PRACTICE,
                description="Your gratitude practice is showing positive results in your overall mood.",
                icon="\N{PERSON WITH FOLDED HANDS}",
            )
        )

    return insights


def generate_recommendations(insights: Sequence[Insight]) -> List[str]:
    recommendations: List[str] = []

    if any(insight.type == "mood" and insight.title == EMOTIONAL_SUPPORT for insight in insights):
        recommendations.extend(SUPPORT_RECOMMENDATIONS)

    if any(insight.type == "productivity" for insight in insights):
        recommendations.extend(PRODUCTIVITY_RECOMMENDATIONS)

    if not recommendations:
        recommendations.extend(DEFAULT_RECOMMENDATIONS)

    return recommendations[:MAX_RECOMMENDATIONS]


__all__ = [
    "CONSISTENT_JOURNALING",
    "DEFAULT_RECOMMENDATIONS",
    "EMOTIONAL_SUPPORT",
    "GRATITUDE_PRACTICE",
    "POSITIVE_MOMENTUM",
    "PRODUCTIVITY_RECOMMENDATIONS",
    "SUPPORT_RECOMMENDATIONS",
    "generate_insights",
    "generate_recommendations",
]
