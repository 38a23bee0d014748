"""Field resolution for basket keys and item identities."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from basketlens.config import BASKET_KEY_FIELDS, ITEM_FIELDS
from basketlens.models import Record

UNKNOWN_ITEM = "unknown"


@dataclass(frozen=True)
class FieldResolver:
    """Ordered candidate tables used to pull semantic fields out of a record.

    The first candidate that is present with a non-blank value wins. Callers
    with schemas outside the built-in English/Bulgarian names can build their
    own resolver or load one through :class:`ResolutionProfileLoader`.
    """

    basket_key_fields: tuple[str, ...] = BASKET_KEY_FIELDS
    item_fields: tuple[str, ...] = ITEM_FIELDS
    name: str = "default"

    def resolve_basket_key(self, record: Record) -> str | None:
        """Return the record's basket key, or ``None`` when nothing matches."""

        value = self._pick(record, self.basket_key_fields)
        return None if value is None else str(value)

    def resolve_item(self, record: Record) -> str:
        """Return the record's item identity.

        Falls back to the value of the record's first field when no candidate
        matches.
        """

        value = self._pick(record, self.item_fields)
        if value is not None:
            return str(value)

        for first_value in record.values():
            if _has_value(first_value):
                return str(first_value)
            break

        return UNKNOWN_ITEM

    @staticmethod
    def _pick(record: Record, candidates: tuple[str, ...]) -> Any:
        for candidate in candidates:
            if candidate not in record:
                continue
            value = record[candidate]
            if _has_value(value):
                return value
        return None


def _has_value(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


class ResolutionProfileLoader:
    """Load named field-resolution profiles from JSON files."""

    def __init__(self, profiles_dir: str | Path | None = None) -> None:
        if profiles_dir is None:
            profiles_dir = Path(__file__).resolve().parent / "profiles"
        self.profiles_dir = Path(profiles_dir)

    def list_profiles(self) -> list[str]:
        """List available resolution profiles."""

        return sorted(path.stem for path in self.profiles_dir.glob("*.json"))

    def load(self, profile_name_or_path: str | Path) -> FieldResolver:
        """Load a resolver by profile name or explicit JSON path."""

        path = self._resolve_path(profile_name_or_path)
        payload = json.loads(path.read_text(encoding="utf-8"))
        return self._parse(payload, default_name=path.stem)

    def _resolve_path(self, profile_name_or_path: str | Path) -> Path:
        requested = Path(profile_name_or_path)
        if requested.suffix == ".json" and requested.exists():
            return requested

        candidate = self.profiles_dir / f"{requested}.json"
        if candidate.exists():
            return candidate

        raise FileNotFoundError(
            f"Resolution profile not found: {profile_name_or_path}. "
            f"Available: {', '.join(self.list_profiles())}"
        )

    @staticmethod
    def _parse(payload: dict[str, Any], *, default_name: str) -> FieldResolver:
        basket_key_fields = _clean_candidates(payload.get("basket_key_fields", BASKET_KEY_FIELDS))
        item_fields = _clean_candidates(payload.get("item_fields", ITEM_FIELDS))

        if not item_fields:
            raise ValueError(f"Resolution profile {default_name!r} defines no item fields")

        return FieldResolver(
            basket_key_fields=basket_key_fields,
            item_fields=item_fields,
            name=str(payload.get("name", default_name)),
        )


def _clean_candidates(candidates: Any) -> tuple[str, ...]:
    if isinstance(candidates, str):
        candidates = [candidates]
    return tuple(
        str(column).strip()
        for column in candidates
        if str(column).strip()
    )
