from enum import Enum

class Modality(str, Enum):
    TEXT = "text"
    IMAGE = "image"

class RelationalState(str, Enum):
    WIN_WIN = "win_win"      # fully aligned
    NEUTRAL = "neutral"
    WIN_LOSE = "win_lose"    # one-sided
    LOSE_LOSE = "lose_lose"  # fully adversarial

class Band(str, Enum):
    STRONG_NEGATIVE = "strong_negative"
    MILD_NEGATIVE = "mild_negative"
    NEUTRAL = "neutral"
    MILD_POSITIVE = "mild_positive"
    STRONG_POSITIVE = "strong_positive"

class OverallLabel(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    MIXED = "mixed"

class Dimension(str, Enum):
    ASSUMPTIVE_STATE = "assumptive_state"
    BUYER_SELLER_POSITION = "buyer_seller_position"
    IDENTITY_VS_TACTIC = "identity_vs_tactic"
    INTERNAL_SALE = "internal_sale"
    WIN_WIN_INTEGRITY = "win_win_integrity"
    PERSUASION_STYLE = "persuasion_style"
    PEDESTALIZATION = "pedestalization"
    SELF_TRUST_VS_PERMISSION = "self_trust_vs_permission"
    FIELD_STRENGTH = "field_strength"


POSITIVE_BANDS = frozenset({Band.MILD_POSITIVE, Band.STRONG_POSITIVE})
NEGATIVE_BANDS = frozenset({Band.MILD_NEGATIVE, Band.STRONG_NEGATIVE})

class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    FLAT = "flat"
