"""
Variant plan resolution.

Callers may send a JSON array of variant objects with a compression request.
A usable array becomes the plan as-is; anything else (nothing sent, malformed
JSON, a non-array value, an empty array) falls back to the default plan.
Bad configuration never fails the request.
"""
import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import ValidationError

from imagelab.models.variants import LossType, VariantSpec

# Set up logging
logger = logging.getLogger(__name__)

DEFAULT_VARIANT_PLAN = (
    VariantSpec(format="jpeg", quality=0.2, label="JPEG (quality 0.2)", loss_type=LossType.LOSSY),
    VariantSpec(format="jpeg", quality=0.5, label="JPEG (quality 0.5)", loss_type=LossType.LOSSY),
    VariantSpec(format="jpeg", quality=0.8, label="JPEG (quality 0.8)", loss_type=LossType.LOSSY),
    VariantSpec(format="webp", quality=0.5, label="WebP (quality 0.5)", loss_type=LossType.LOSSY),
    VariantSpec(format="webp", quality=0.8, label="WebP (quality 0.8)", loss_type=LossType.LOSSY),
    VariantSpec(format="avif", quality=0.5, label="AVIF (quality 0.5)", loss_type=LossType.LOSSY),
    VariantSpec(format="avif", quality=0.8, label="AVIF (quality 0.8)", loss_type=LossType.LOSSY),
    VariantSpec(format="png", quality=1.0, label="PNG (lossless)", loss_type=LossType.LOSSLESS),
)


class ConfigStatus(str, Enum):
    ABSENT = "absent"
    PARSED = "parsed"
    PARSE_FAILED = "parse_failed"


class PlanSource(str, Enum):
    CALLER = "caller"
    DEFAULT = "default"


@dataclass(frozen=True)
class ConfigParseResult:
    """Outcome of reading the caller's variant configuration"""
    status: ConfigStatus
    value: Any = None
    error: Optional[str] = None


@dataclass(frozen=True)
class PlanResolution:
    """Resolved variant plan and where it came from"""
    specs: List[VariantSpec]
    source: PlanSource

    def __iter__(self):
        return iter(self.specs)

    def __len__(self):
        return len(self.specs)


def parse_variant_config(raw: Any) -> ConfigParseResult:
    """
    Read caller configuration without ever raising.

    Args:
        raw: None, JSON text/bytes, or already decoded data

    Returns:
        ConfigParseResult with status absent, parsed or parse_failed
    """
    if raw is None:
        return ConfigParseResult(ConfigStatus.ABSENT)

    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.warning(f"Could not decode variant config, using the default plan: {e}")
            return ConfigParseResult(ConfigStatus.PARSE_FAILED, error=str(e))

    if not isinstance(raw, str):
        return ConfigParseResult(ConfigStatus.PARSED, value=raw)

    if not raw.strip():
        return ConfigParseResult(ConfigStatus.ABSENT)

    try:
        value = json.loads(raw)
    except ValueError as e:
        logger.warning(f"Could not parse variant config, using the default plan: {e}")
        return ConfigParseResult(ConfigStatus.PARSE_FAILED, error=str(e))

    return ConfigParseResult(ConfigStatus.PARSED, value=value)


def _build_specs(entries: list) -> List[VariantSpec]:
    specs = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            logger.warning(f"Skipping variant config entry {index}: expected an object, got {type(entry).__name__}")
            continue
        try:
            specs.append(VariantSpec.model_validate(entry))
        except ValidationError as e:
            logger.warning(f"Skipping invalid variant config entry {index}: {e}")
    return specs


def resolve_variant_plan(config: Union[ConfigParseResult, Any] = None) -> PlanResolution:
    """
    Build the ordered list of variant specs for one compression job.

    Args:
        config: A ConfigParseResult, JSON text, decoded data, or None

    Returns:
        PlanResolution holding the caller's specs, or the default plan
    """
    if not isinstance(config, ConfigParseResult):
        config = parse_variant_config(config)

    if config.status is ConfigStatus.PARSED:
        if isinstance(config.value, list) and config.value:
            specs = _build_specs(config.value)
            if specs:
                return PlanResolution(specs=specs, source=PlanSource.CALLER)
            logger.warning("No usable entries in variant config, using the default plan")
        else:
            logger.info("Variant config is not a non-empty array, using the default plan")

    return PlanResolution(specs=list(DEFAULT_VARIANT_PLAN), source=PlanSource.DEFAULT)
