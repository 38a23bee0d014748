"""Configuration for basket analysis runs."""

from __future__ import annotations

from dataclasses import dataclass


DEFAULT_THRESHOLD = 0.05
DEFAULT_TOP_ITEMS = 10

BASKET_KEY_FIELDS: tuple[str, ...] = (
    "date",
    "дата",
    "Date",
    "DATE",
    "datum",
    "fecha",
)

ITEM_FIELDS: tuple[str, ...] = (
    "product",
    "продукт",
    "Product",
    "PRODUCT",
    "item",
    "артикул",
    "name",
    "име",
)


@dataclass(frozen=True)
class AnalysisConfig:
    """Explicit settings for one engine instance.

    ``threshold`` is the minimum co-occurrence frequency a combination needs to
    be reported. ``default_basket_key`` is used for records with no resolvable
    basket key; when left as ``None`` those records share one unkeyed basket.
    """

    threshold: float = DEFAULT_THRESHOLD
    top_items: int = DEFAULT_TOP_ITEMS
    default_basket_key: str | None = None

    def __post_init__(self) -> None:
        validate_threshold(self.threshold)
        if isinstance(self.top_items, bool) or not isinstance(self.top_items, int) or self.top_items < 1:
            raise ValueError(f"top_items must be a positive integer, got {self.top_items!r}")
        if self.default_basket_key is not None and not str(self.default_basket_key).strip():
            raise ValueError("default_basket_key cannot be blank")


def validate_threshold(threshold: float) -> float:
    """Return ``threshold`` if it lies in ``(0, 1]``, else raise ``ValueError``."""

    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
        raise ValueError(f"Threshold must be a number, got {threshold!r}")
    if not 0 < threshold <= 1:
        raise ValueError(f"Threshold must be in (0, 1], got {threshold}")
    return float(threshold)
