"""Profile loading for raw variant feed preparation."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from covidprep.config import NULL_TOKEN, USA_REGION, WEEKLY_INTERVAL, WEIGHTED_MODEL

REPO_ROOT = Path(__file__).resolve().parents[3]
PROFILE_SCHEMA_PATH = REPO_ROOT / "schemas" / "variant_feed_profile.schema.json"


@dataclass(frozen=True)
class VariantFeedProfile:
    """How raw feed columns map onto canonical variant fields, plus feed sentinels."""

    name: str
    field_candidates: dict[str, tuple[str, ...]] = field(default_factory=dict)
    description: str = ""
    region: str | None = USA_REGION
    model_kind: str = WEIGHTED_MODEL
    interval_kind: str = WEEKLY_INTERVAL
    null_token: str = NULL_TOKEN

    def candidates_for(self, field_name: str) -> tuple[str, ...]:
        """Return ordered source-column candidates for a canonical field.

        The canonical name itself is always the last resort.
        """

        candidates = self.field_candidates.get(field_name, ())
        if field_name in candidates:
            return candidates
        return (*candidates, field_name)


class VariantFeedProfileLoader:
    """Load feed profiles from ``config/profiles``."""

    def __init__(self, profiles_dir: str | Path | None = None) -> None:
        if profiles_dir is None:
            profiles_dir = REPO_ROOT / "config" / "profiles"
        self.profiles_dir = Path(profiles_dir)
        self._validator: Draft202012Validator | None = None

    def list_profiles(self) -> list[str]:
        """List available feed profiles."""

        return sorted(path.stem for path in self.profiles_dir.glob("*.json"))

    def load(self, profile_name_or_path: str | Path) -> VariantFeedProfile:
        """Load profile by name or explicit JSON path.

        Raises ``jsonschema.ValidationError`` when the JSON does not match
        ``schemas/variant_feed_profile.schema.json``.
        """

        path = self._resolve_path(profile_name_or_path)
        payload = json.loads(path.read_text())
        self._schema_validator().validate(payload)
        return self._parse(payload)

    def _schema_validator(self) -> Draft202012Validator:
        if self._validator is None:
            schema = json.loads(PROFILE_SCHEMA_PATH.read_text())
            Draft202012Validator.check_schema(schema)
            self._validator = Draft202012Validator(schema)
        return self._validator

    def _resolve_path(self, profile_name_or_path: str | Path) -> Path:
        requested = Path(profile_name_or_path)
        if requested.exists():
            return requested

        candidate = self.profiles_dir / f"{requested}.json"
        if candidate.exists():
            return candidate

        raise FileNotFoundError(
            f"Feed profile not found: {profile_name_or_path}. "
            f"Available: {', '.join(self.list_profiles())}"
        )

    def _parse(self, payload: dict[str, Any]) -> VariantFeedProfile:
        field_candidates = {
            field_name: tuple(str(column).strip() for column in candidates)
            for field_name, candidates in payload.get("field_candidates", {}).items()
        }

        return VariantFeedProfile(
            name=str(payload["name"]),
            description=str(payload.get("description", "")),
            field_candidates=field_candidates,
            region=payload.get("region", USA_REGION),
            model_kind=str(payload.get("model_kind", WEIGHTED_MODEL)),
            interval_kind=str(payload.get("interval_kind", WEEKLY_INTERVAL)),
            null_token=str(payload.get("null_token", NULL_TOKEN)),
        )
