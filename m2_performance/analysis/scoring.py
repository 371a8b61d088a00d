"""Performance score and letter grade."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Tuple

from ..models.data_models import PerformanceScore, Priority, Recommendation


HIGH_WEIGHT = 8.0
MEDIUM_WEIGHT = 3.0
LOW_WEIGHT = 0.5

# Deductions past this point are multiplied by PENALTY_FACTOR
PENALTY_THRESHOLD = 20.0
PENALTY_FACTOR = 1.5

GRADE_BANDS = [
    (95, "A+"),
    (90, "A"),
    (85, "A-"),
    (80, "B+"),
    (75, "B"),
    (70, "B-"),
    (65, "C+"),
    (60, "C"),
    (55, "C-"),
    (50, "D+"),
    (45, "D"),
]


class ScoringEngine:
    """Derive a 0-100 score from recommendation counts."""
    
    def deduction(self, high: int, medium: int, low: int) -> float:
        """Weighted deduction including the progressive penalty."""
        deduction = high * HIGH_WEIGHT + medium * MEDIUM_WEIGHT + low * LOW_WEIGHT
        if deduction > PENALTY_THRESHOLD:
            deduction = PENALTY_THRESHOLD + (deduction - PENALTY_THRESHOLD) * PENALTY_FACTOR
        return deduction
    
    def calculate_score(self, high: int, medium: int, low: int) -> float:
        """Score rounded to one decimal place.
        
        Args:
            high: Number of high priority recommendations
            medium: Number of medium priority recommendations
            low: Number of low priority recommendations
            
        Returns:
            Score between 0.0 and 100.0
        """
        if high == 0 and medium == 0 and low == 0:
            return 100.0
        
        score = max(0.0, 100.0 - self.deduction(high, medium, low))
        # Half-up, so 64.25 reports as 64.3
        return float(Decimal(repr(score)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
    
    def grade_for(self, score: float) -> str:
        """Letter grade for a score, inclusive lower bounds."""
        for lower_bound, grade in GRADE_BANDS:
            if score >= lower_bound:
                return grade
        return "F"
    
    def count_priorities(self, recommendations: Iterable[Recommendation]) -> Tuple[int, int, int]:
        """Return (high, medium, low) counts."""
        high = medium = low = 0
        for recommendation in recommendations:
            if recommendation.priority == Priority.HIGH:
                high += 1
            elif recommendation.priority == Priority.MEDIUM:
                medium += 1
            else:
                low += 1
        return high, medium, low
    
    def score_counts(self, high: int, medium: int, low: int) -> PerformanceScore:
        score = self.calculate_score(high, medium, low)
        return PerformanceScore(
            score=score,
            grade=self.grade_for(score),
            high=high,
            medium=medium,
            low=low
        )
    
    def score_recommendations(self, recommendations: Iterable[Recommendation]) -> PerformanceScore:
        """Score a final recommendation list."""
        return self.score_counts(*self.count_priorities(recommendations))
