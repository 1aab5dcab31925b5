"""
Domain Weighting & Aggregator
app/scoring/domain_weighting.py

Weights each normalized dimension score by the domain's priority set and
computes the weighted mean.

Formula:
    weight_i = 2 if dimension_i ∈ priority(domain) else 1
    weighted_mean = Σ (normalized_i × weight_i) / Σ weight_i

An empty dimension list is a fatal precondition failure. An unknown domain
falls back to an empty priority set.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Mapping, Sequence, Tuple

import structlog

from app.core.exceptions import AggregationPreconditionError
from app.scoring.axis_normalizer import normalize_axis_score
from app.scoring.scoring_config import ScoringConfig
from app.scoring.utils import weighted_mean

logger = structlog.get_logger(__name__)

BASE_WEIGHT = 1
PRIORITY_WEIGHT = 2


@dataclass(frozen=True)
class WeightedDimensionScore:
    """Audit entry: what each dimension contributed."""
    dimension_id: str
    normalized_score: Decimal   # [0, 100]
    weight: int                 # 1 or 2

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dimensionId": self.dimension_id,
            "normalizedScore": float(self.normalized_score),
            "weight": self.weight,
        }


@dataclass(frozen=True)
class AggregationResult:
    """Output of DomainWeightingAggregator.aggregate()."""
    domain: str
    domain_known: bool
    priority_dimensions: Tuple[str, ...]
    weighted_scores: Tuple[WeightedDimensionScore, ...]
    weighted_mean: Decimal      # [0, 100] quantized to 0.0001, for reporting
    unrounded_mean: Decimal     # same mean before quantization; the final score rounds this


class DomainWeightingAggregator:
    """Apply per-domain priority weights and aggregate."""

    def __init__(self, config: ScoringConfig):
        self.config = config

    def priority_dimensions(self, domain: str) -> Tuple[str, ...]:
        profile = self.config.get_domain(domain)
        return profile.priority_dimensions if profile else ()

    def compute_weights(
        self, domain: str, dimensions: Sequence[Mapping[str, Any]]
    ) -> Dict[str, int]:
        """Weight per dimension id: 2 for priority dimensions, else 1."""
        priority = set(self.priority_dimensions(domain))
        return {
            d["dimensionId"]: PRIORITY_WEIGHT if d["dimensionId"] in priority else BASE_WEIGHT
            for d in dimensions
        }

    def aggregate(
        self, domain: str, dimensions: Sequence[Mapping[str, Any]]
    ) -> AggregationResult:
        """
        Args:
            domain: Domain id from the normalized assessment.
            dimensions: Normalized dimension records (dimensionId, score, ...).

        Returns:
            AggregationResult with the weighted mean and per-dimension breakdown.

        Raises:
            AggregationPreconditionError: dimensions is empty.
        """
        if not dimensions:
            raise AggregationPreconditionError(domain)

        weights = self.compute_weights(domain, dimensions)

        weighted: List[WeightedDimensionScore] = [
            WeightedDimensionScore(
                dimension_id=d["dimensionId"],
                normalized_score=normalize_axis_score(d["score"]),
                weight=weights[d["dimensionId"]],
            )
            for d in dimensions
        ]

        weights_dec = [Decimal(w.weight) for w in weighted]
        unrounded = weighted_mean(
            [normalize_axis_score(d["score"], places=None) for d in dimensions],
            weights_dec,
            places=None,
        )
        mean = unrounded.quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP)

        logger.debug(
            "dimensions_aggregated",
            domain=domain,
            dimension_count=len(weighted),
            total_weight=sum(w.weight for w in weighted),
            weighted_mean=float(mean),
        )

        return AggregationResult(
            domain=domain,
            domain_known=self.config.get_domain(domain) is not None,
            priority_dimensions=self.priority_dimensions(domain),
            weighted_scores=tuple(weighted),
            weighted_mean=mean,
            unrounded_mean=unrounded,
        )
