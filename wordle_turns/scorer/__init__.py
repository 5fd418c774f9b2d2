from .weights import (
    BaseWeighting,
    UniformWeighting,
    ReasonableWeighting,
    REGISTRY,
    REASONABLE_WEIGHT,
    create_weighting,
    get_weighting_ids,
)
from .parallel import (
    GuessScorer,
    ScoreMap,
    DEFAULT_SHARDS,
    TIE_EPSILON,
    partition_shards,
    score,
    rank_guesses,
    top_guesses,
)

__all__ = [
    "BaseWeighting", "UniformWeighting", "ReasonableWeighting", "REGISTRY", "REASONABLE_WEIGHT",
    "create_weighting", "get_weighting_ids",
    "GuessScorer", "ScoreMap", "DEFAULT_SHARDS", "TIE_EPSILON", "partition_shards", "score",
    "rank_guesses", "top_guesses",
]
