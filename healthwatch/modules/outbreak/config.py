import json
from pathlib import Path

import structlog
from pydantic import Field, field_validator

from healthwatch.shared.constants import Role
from healthwatch.shared.schemas import CamelModel

log = structlog.get_logger()

SYSTEM_CREATOR_ID = "00000000-0000-0000-0000-000000000000"


class OutbreakRulesConfig(CamelModel):
    version: str = "default-v1"
    window_hours: int = Field(default=24, ge=1)

    cluster_min_cases: int = Field(default=3, ge=1)

    seasonal_min_cases: int = Field(default=2, ge=1)
    monsoon_months: list[int] = Field(default_factory=lambda: [7, 8, 9])
    seasonal_keywords: list[str] = Field(
        default_factory=lambda: ["diarrhea", "cholera", "loose motions", "vomiting"]
    )
    seasonal_label: str = "water-borne diseases"

    ph_min: float = 6.5
    turbidity_max: float = 5.0

    target_roles: list[Role] = Field(
        default_factory=lambda: [Role.OFFICIAL, Role.COMMUNITY, Role.VILLAGER],
        min_length=1,
    )
    fallback_creator_id: str = SYSTEM_CREATOR_ID

    @field_validator("monsoon_months")
    @classmethod
    def validate_months(cls, value: list[int]) -> list[int]:
        if any(month < 1 or month > 12 for month in value):
            raise ValueError("monsoon months must be between 1 and 12")
        return value

    @field_validator("seasonal_keywords")
    @classmethod
    def lowercase_keywords(cls, value: list[str]) -> list[str]:
        keywords = [keyword.strip().lower() for keyword in value if keyword.strip()]
        if not keywords:
            raise ValueError("at least one seasonal keyword is required")
        return keywords


DEFAULT_RULES = OutbreakRulesConfig()

DEFAULT_RULES_PATH = Path(__file__).resolve().parent / "outbreak_rules.json"


def load_rules(path: Path) -> OutbreakRulesConfig:
    try:
        payload = json.loads(path.read_text())
        return OutbreakRulesConfig.model_validate(payload)
    except FileNotFoundError:
        log.info("outbreak rules file not found, using defaults", path=str(path))
        return DEFAULT_RULES
    except Exception as exc:
        log.warning(
            "outbreak rules load failed, using defaults", path=str(path), error=str(exc)
        )
        return DEFAULT_RULES
