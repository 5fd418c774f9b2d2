from __future__ import annotations
from typing import Dict, FrozenSet, Iterable, List, Type

# Weight applied to "reasonable" answers by ReasonableWeighting.
REASONABLE_WEIGHT = 3.0

# ---- Global weighting registry ----
REGISTRY: Dict[str, Type["BaseWeighting"]] = {}


def register(cls: Type["BaseWeighting"]) -> Type["BaseWeighting"]:
    """
    Decorator: @register on a weighting class adds it to REGISTRY by its `id`.
    """
    wid = getattr(cls, "id", None)
    if not wid:
        raise ValueError(f"{cls.__name__} must define a non-empty `id`")
    if wid in REGISTRY:
        raise ValueError(f"Duplicate weighting id: {wid}")
    REGISTRY[wid] = cls
    return cls


# ---- Base class that weightings inherit ----
class BaseWeighting:
    """
    Prior weight of each answer in the scorer's expectation.

    Weights must be positive. Instances are shipped to scorer workers, so
    subclasses should hold plain picklable state only.
    """
    id = "base"
    name = "Base"

    def weight(self, answer: str) -> float:
        raise NotImplementedError("Override in subclass")


@register
class UniformWeighting(BaseWeighting):
    """Every answer equally likely."""
    id = "uniform"
    name = "Uniform"

    def weight(self, answer: str) -> float:
        return 1.0


@register
class ReasonableWeighting(BaseWeighting):
    """
    Answers in a curated "reasonable" set count `factor` times as much as the
    rest. Useful when the answer pool is a loose superset of likely answers.
    """
    id = "reasonable"
    name = "Reasonable answers weighted"

    def __init__(self, reasonable: Iterable[str] = (), factor: float = REASONABLE_WEIGHT):
        if factor <= 0:
            raise ValueError(f"factor must be positive; got {factor}")
        self.reasonable: FrozenSet[str] = frozenset(reasonable)
        self.factor = float(factor)

    def weight(self, answer: str) -> float:
        return self.factor if answer in self.reasonable else 1.0


def create_weighting(weighting_id: str, **kwargs) -> BaseWeighting:
    """
    Factory: instantiate a registered weighting by id.
    """
    try:
        cls = REGISTRY[weighting_id]
    except KeyError as e:
        raise ValueError(
            f"Unknown weighting id: {weighting_id}. Available: {sorted(REGISTRY.keys())}") from e
    return cls(**kwargs)


def get_weighting_ids() -> List[str]:
    """
    Return all registered weighting ids (sorted for stable CLI help).
    """
    return sorted(REGISTRY.keys())
