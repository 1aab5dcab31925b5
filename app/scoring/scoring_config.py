"""
Scoring Configuration
app/scoring/scoring_config.py

Static dimension set and per-domain priority weighting.

The configuration is read once (built-in default or a JSON file named by
SCORING_CONFIG_PATH) and injected into AuthorityScoreCalculator. It is frozen
after construction; every priority dimension must reference a defined
dimension or construction fails with ScoringConfigurationError.

JSON layout (validated by ScoringConfigFile):
    {
      "dimensions": [{"id": "...", "label": "...", "description": "...",
                      "scale": [-3, 3]}],
      "domains": {
        "<domain id>": {"modality": "text", "description": "...",
                        "priority_dimensions": ["..."]}
      }
    }
"""

import json
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, Field, ValidationError

from app.core.exceptions import ScoringConfigurationError
from app.models.enumerations import Dimension, Modality

SCORE_MIN = -3
SCORE_MAX = 3


@dataclass(frozen=True)
class DimensionDefinition:
    """One scored axis of the analyzed communication."""
    id: str
    label: str
    description: str = ""
    min_score: int = SCORE_MIN
    max_score: int = SCORE_MAX


@dataclass(frozen=True)
class DomainProfile:
    """Content category and the dimensions it weights double."""
    id: str
    modality: Modality = Modality.TEXT
    description: str = ""
    priority_dimensions: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ScoringConfig:
    """Read-only dimension set plus domain profiles."""
    dimensions: Tuple[DimensionDefinition, ...]
    domains: Tuple[DomainProfile, ...]

    def __post_init__(self):
        if not self.dimensions:
            raise ScoringConfigurationError("At least one dimension must be defined")

        ids = [d.id for d in self.dimensions]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ScoringConfigurationError(
                f"Duplicate dimension ids: {', '.join(duplicates)}"
            )

        for dim in self.dimensions:
            if (dim.min_score, dim.max_score) != (SCORE_MIN, SCORE_MAX):
                raise ScoringConfigurationError(
                    f"Dimension {dim.id} must use the fixed range "
                    f"[{SCORE_MIN}, {SCORE_MAX}]"
                )

        known = set(ids)
        seen_domains = set()
        for domain in self.domains:
            if domain.id in seen_domains:
                raise ScoringConfigurationError(f"Duplicate domain id: {domain.id}")
            seen_domains.add(domain.id)
            unknown = [p for p in domain.priority_dimensions if p not in known]
            if unknown:
                raise ScoringConfigurationError(
                    f"domains.{domain.id}.priority_dimensions contains invalid "
                    f"dimension id: {', '.join(unknown)}"
                )

    @property
    def dimension_ids(self) -> Tuple[str, ...]:
        return tuple(d.id for d in self.dimensions)

    @property
    def default_dimension_id(self) -> str:
        return self.dimensions[0].id

    def get_dimension(self, dimension_id: str) -> Optional[DimensionDefinition]:
        for dim in self.dimensions:
            if dim.id == dimension_id:
                return dim
        return None

    def get_domain(self, domain_id: str) -> Optional[DomainProfile]:
        for domain in self.domains:
            if domain.id == domain_id:
                return domain
        return None

    def domains_for(self, modality: Modality) -> List[DomainProfile]:
        return [d for d in self.domains if d.modality == modality]


# ---------------------------------------------------------------------------
# Built-in product configuration
# ---------------------------------------------------------------------------

_DEFAULT_DIMENSIONS: List[Tuple[Dimension, str, str]] = [
    (Dimension.ASSUMPTIVE_STATE, "Assumptive State",
     "Speaks from assumed outcome rather than hope or doubt."),
    (Dimension.BUYER_SELLER_POSITION, "Buyer/Seller Position",
     "Positions the subject as the one choosing, not the one chasing."),
    (Dimension.IDENTITY_VS_TACTIC, "Identity vs Tactic",
     "Authority comes from who the subject is, not from scripted tactics."),
    (Dimension.INTERNAL_SALE, "Internal Sale",
     "The subject is visibly convinced of their own offer."),
    (Dimension.WIN_WIN_INTEGRITY, "Win/Win Integrity",
     "The exchange is framed as mutually beneficial."),
    (Dimension.PERSUASION_STYLE, "Persuasion Style",
     "Invites agreement instead of pressuring or pleading."),
    (Dimension.PEDESTALIZATION, "Pedestalization",
     "Avoids placing the audience above the subject."),
    (Dimension.SELF_TRUST_VS_PERMISSION, "Self-Trust vs Permission",
     "Acts on own judgment rather than seeking approval."),
    (Dimension.FIELD_STRENGTH, "Field Strength",
     "Overall presence and coherence of the communication."),
]

_DEFAULT_DOMAINS: List[Tuple[str, Modality, str, Tuple[Dimension, ...]]] = [
    ("generic", Modality.TEXT, "Any written communication",
     (Dimension.ASSUMPTIVE_STATE, Dimension.BUYER_SELLER_POSITION,
      Dimension.WIN_WIN_INTEGRITY)),
    ("sales_email", Modality.TEXT, "Outbound or follow-up sales message",
     (Dimension.BUYER_SELLER_POSITION, Dimension.INTERNAL_SALE,
      Dimension.WIN_WIN_INTEGRITY, Dimension.PERSUASION_STYLE)),
    ("dating_message", Modality.TEXT, "Personal or dating-app message",
     (Dimension.PEDESTALIZATION, Dimension.SELF_TRUST_VS_PERMISSION,
      Dimension.ASSUMPTIVE_STATE)),
    ("leadership_update", Modality.TEXT, "Update addressed to a team or organization",
     (Dimension.IDENTITY_VS_TACTIC, Dimension.FIELD_STRENGTH,
      Dimension.ASSUMPTIVE_STATE)),
    ("social_post", Modality.TEXT, "Public social media post",
     (Dimension.FIELD_STRENGTH, Dimension.IDENTITY_VS_TACTIC,
      Dimension.PERSUASION_STYLE)),
    ("profile_photo", Modality.IMAGE, "Individual profile or headshot image",
     (Dimension.ASSUMPTIVE_STATE, Dimension.PEDESTALIZATION,
      Dimension.FIELD_STRENGTH, Dimension.BUYER_SELLER_POSITION)),
    ("team_photo", Modality.IMAGE, "Group or team image",
     (Dimension.FIELD_STRENGTH, Dimension.WIN_WIN_INTEGRITY)),
    ("landing_page_hero", Modality.IMAGE, "Landing page hero section",
     (Dimension.BUYER_SELLER_POSITION, Dimension.PERSUASION_STYLE,
      Dimension.FIELD_STRENGTH)),
    ("social_post_image", Modality.IMAGE, "Image attached to a social post",
     (Dimension.FIELD_STRENGTH, Dimension.PEDESTALIZATION)),
]


@lru_cache
def default_scoring_config() -> ScoringConfig:
    return ScoringConfig(
        dimensions=tuple(
            DimensionDefinition(id=dim.value, label=label, description=desc)
            for dim, label, desc in _DEFAULT_DIMENSIONS
        ),
        domains=tuple(
            DomainProfile(
                id=domain_id,
                modality=modality,
                description=desc,
                priority_dimensions=tuple(d.value for d in priority),
            )
            for domain_id, modality, desc, priority in _DEFAULT_DOMAINS
        ),
    )


# ---------------------------------------------------------------------------
# JSON loading
# ---------------------------------------------------------------------------

class DimensionEntry(BaseModel):
    id: str = Field(..., min_length=1)
    label: Optional[str] = None
    description: Optional[str] = None
    scale: Tuple[int, int] = (SCORE_MIN, SCORE_MAX)


class DomainEntry(BaseModel):
    modality: Modality = Modality.TEXT
    description: Optional[str] = None
    priority_dimensions: List[str] = Field(default_factory=list)


class ScoringConfigFile(BaseModel):
    """On-disk form of a ScoringConfig."""

    dimensions: List[DimensionEntry]
    domains: Dict[str, DomainEntry]


def scoring_config_from_dict(data: Any) -> ScoringConfig:
    """Build a ScoringConfig from its JSON document form."""
    try:
        document = ScoringConfigFile.model_validate(data)
    except ValidationError as e:
        raise ScoringConfigurationError(f"Scoring config is invalid: {e}") from e

    return ScoringConfig(
        dimensions=tuple(
            DimensionDefinition(
                id=d.id,
                label=d.label or d.id,
                description=d.description or "",
                min_score=d.scale[0],
                max_score=d.scale[1],
            )
            for d in document.dimensions
        ),
        domains=tuple(
            DomainProfile(
                id=domain_id,
                modality=entry.modality,
                description=entry.description or "",
                priority_dimensions=tuple(entry.priority_dimensions),
            )
            for domain_id, entry in document.domains.items()
        ),
    )


def load_scoring_config(path: Union[str, Path]) -> ScoringConfig:
    """Load and validate a scoring config JSON file."""
    config_path = Path(path)
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ScoringConfigurationError(f"Scoring config not found: {config_path}")
    except json.JSONDecodeError as e:
        raise ScoringConfigurationError(f"Scoring config is not valid JSON: {e}")
    return scoring_config_from_dict(data)


def scoring_config_to_dict(config: ScoringConfig) -> Dict[str, Any]:
    return {
        "dimensions": [
            {
                "id": d.id,
                "label": d.label,
                "description": d.description,
                "scale": [d.min_score, d.max_score],
            }
            for d in config.dimensions
        ],
        "domains": {
            d.id: {
                "modality": d.modality.value,
                "description": d.description,
                "priority_dimensions": list(d.priority_dimensions),
            }
            for d in config.domains
        },
    }
