"""
Intent normalization.

Rescales a four-bucket intent vector on an arbitrary scale (typically raw
model output) to integers summing to exactly 100 and picks the dominant
bucket. Rounding error is pushed onto ``buy_soon`` rather than spread
proportionally, so repeated runs and stored analyses stay comparable.
"""

from typing import Any, Dict, Mapping, Union

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from salesbuddy.analysis.metrics import round_half_up
from salesbuddy.models.entities import IntentBucket, IntentScore

# Tie-break order for the primary bucket.
BUCKET_ORDER = ("buy_now", "buy_soon", "later", "no_fit")

BUCKET_LABELS: Dict[str, IntentBucket] = {
    "buy_now": IntentBucket.BUY_NOW,
    "buy_soon": IntentBucket.BUY_SOON,
    "later": IntentBucket.LATER,
    "no_fit": IntentBucket.NO_FIT,
}

REMAINDER_BUCKET = "buy_soon"


class RawIntent(BaseModel):
    """
    Unnormalized intent vector.

    Accepts camelCase or snake_case keys. Missing, non-numeric and negative
    values are read as 0; unknown keys (such as a model-supplied
    ``primary``) are ignored.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    buy_now: float = 0.0
    buy_soon: float = 0.0
    later: float = 0.0
    no_fit: float = 0.0

    @field_validator("buy_now", "buy_soon", "later", "no_fit", mode="before")
    @classmethod
    def coerce_magnitude(cls, v: Any) -> float:
        """Read anything that is not a non-negative number as 0."""
        if isinstance(v, bool) or v is None:
            return 0.0
        try:
            value = float(v)
        except (TypeError, ValueError):
            return 0.0
        if value != value or value < 0 or value == float("inf"):
            return 0.0
        return value


def pick_primary(scaled: Mapping[str, int]) -> IntentBucket:
    """Return the largest bucket; earlier buckets win ties."""
    best = BUCKET_ORDER[0]
    for key in BUCKET_ORDER[1:]:
        if scaled[key] > scaled[best]:
            best = key
    return BUCKET_LABELS[best]


def normalize_intent(raw: Union[RawIntent, Mapping[str, Any], None]) -> IntentScore:
    """
    Normalize an intent vector so the buckets sum to exactly 100.

    Args:
        raw: RawIntent or mapping with buyNow/buySoon/later/noFit values

    Returns:
        IntentScore with integer buckets and the primary bucket

    Example:
        >>> normalize_intent({"buyNow": 1, "buySoon": 1, "later": 1, "noFit": 0})
        IntentScore(buy_now=33, buy_soon=34, later=33, no_fit=0, primary=<IntentBucket.BUY_SOON: 'BuySoon'>)
    """
    if raw is None:
        raw = RawIntent()
    elif not isinstance(raw, RawIntent):
        raw = RawIntent.model_validate(dict(raw))

    values = {key: getattr(raw, key) for key in BUCKET_ORDER}
    total = sum(values.values()) or 1

    scaled = {key: round_half_up(value / total * 100) for key, value in values.items()}

    remainder = 100 - sum(scaled.values())
    if remainder != 0:
        scaled[REMAINDER_BUCKET] = max(0, scaled[REMAINDER_BUCKET] + remainder)

    # Clamping buy_soon at 0 can leave an overshoot; take it from the largest bucket.
    surplus = sum(scaled.values()) - 100
    if surplus > 0:
        largest = max(BUCKET_ORDER, key=lambda key: scaled[key])
        scaled[largest] -= surplus

    return IntentScore(
        buy_now=scaled["buy_now"],
        buy_soon=scaled["buy_soon"],
        later=scaled["later"],
        no_fit=scaled["no_fit"],
        primary=pick_primary(scaled),
    )
