from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError
from .logging_config import LOG_FORMATS, LOG_LEVELS
from .registry import rule_factory
from .rule import PricingRule

load_dotenv()


@dataclass(frozen=True)
class PricingSettings:
    log_level: str = "info"
    log_format: str = "console"


def get_pricing_settings() -> PricingSettings:
    """
    Load runtime settings from environment variables (a local `.env` is honoured).

    Reads PRICING_LOG_LEVEL and PRICING_LOG_FORMAT.
    """
    log_level = os.getenv("PRICING_LOG_LEVEL", "info").strip().lower()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"PRICING_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}.")
    log_format = os.getenv("PRICING_LOG_FORMAT", "console").strip().lower()
    if log_format not in LOG_FORMATS:
        raise ValueError(f"PRICING_LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}.")
    return PricingSettings(log_level=log_level, log_format=log_format)


class RuleSpec(BaseModel):
    type: str
    options: Dict[str, Any] = Field(default_factory=dict)
    enabled: bool = True


class PricingConfig(BaseModel):
    """A rule set as stored in a JSON or YAML file.

    Example (YAML)::

        rules:
          - type: bulk
            options: {min_quantity: 5, percent: 10}
          - type: coupon
            options: {code: SAVE20, percent: 20, min_order_amount: 100}
    """

    rules: List[RuleSpec] = Field(default_factory=list)


def load_pricing_config(path: Union[str, Path]) -> PricingConfig:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Pricing config file not found: {path}")

    text = path.read_text()
    suffix = path.suffix.lower()
    if suffix == ".json":
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Pricing config {path} is not valid JSON: {exc}") from exc
    elif suffix in (".yaml", ".yml"):
        try:
            raw = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValidationError(f"Pricing config {path} is not valid YAML: {exc}") from exc
    else:
        raise ValidationError(f"Unsupported pricing config format '{suffix}' (expected .json, .yaml or .yml).")

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValidationError("Pricing config must contain a top-level object.")
    try:
        return PricingConfig.model_validate(raw)
    except PydanticValidationError as exc:
        raise ValidationError(
            f"Invalid pricing config {path}: {exc.error_count()} error(s).",
            errors=exc.errors(include_url=False),
        ) from exc


def build_rules(config: PricingConfig) -> List[PricingRule]:
    return [rule_factory.create(spec.type, spec.options) for spec in config.rules if spec.enabled]
