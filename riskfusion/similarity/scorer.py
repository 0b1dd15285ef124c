"""
Lexical similarity between two risks.

The text metric is shared tokens over the larger token set, not Jaccard.
The default thresholds and weights assume this exact formula.
"""
from typing import Optional, Set

from riskfusion.models.risk import Risk
from riskfusion.models.similarity_result import SimilarityResult

# Tokens of this length or shorter are discarded
MIN_TOKEN_LENGTH = 3


def tokenize(text: Optional[str]) -> Set[str]:
    return {
        token
        for token in (text or "").lower().split()
        if len(token) > MIN_TOKEN_LENGTH
    }


def text_similarity(text_a: Optional[str], text_b: Optional[str]) -> float:
    tokens_a = tokenize(text_a)
    tokens_b = tokenize(text_b)

    if not tokens_a or not tokens_b:
        return 0.0

    shared = len(tokens_a & tokens_b)
    return shared / max(len(tokens_a), len(tokens_b))


def category_similarity(category_a: Optional[str], category_b: Optional[str]) -> float:
    return 1.0 if (category_a or "").lower() == (category_b or "").lower() else 0.0


def score_similarity(risk_a: Risk, risk_b: Risk) -> SimilarityResult:
    """
    Raw component scores for a pair of risks. Pure and total.
    """
    return SimilarityResult(
        title_similarity=text_similarity(risk_a.title, risk_b.title),
        description_similarity=text_similarity(risk_a.description, risk_b.description),
        category_similarity=category_similarity(risk_a.category, risk_b.category),
    )
