from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SimilarityResult:
    """
    Component scores for one (model-generated, rule-based) pair.

    overall_similarity stays None until the classifier applies weights.
    """
    title_similarity: float
    description_similarity: float
    category_similarity: float
    overall_similarity: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "titleSimilarity": self.title_similarity,
            "descriptionSimilarity": self.description_similarity,
            "categorySimilarity": self.category_similarity,
            "overallSimilarity": self.overall_similarity,
        }
