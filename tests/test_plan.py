"""Tests for variant plan resolution."""
from imagelab.core.plan import (
    DEFAULT_VARIANT_PLAN,
    ConfigStatus,
    PlanSource,
    parse_variant_config,
    resolve_variant_plan,
)
from imagelab.models.variants import LossType, VariantSpec

DEFAULT_ORDER = [
    ("jpeg", 0.2), ("jpeg", 0.5), ("jpeg", 0.8),
    ("webp", 0.5), ("webp", 0.8),
    ("avif", 0.5), ("avif", 0.8),
    ("png", 1.0),
]


def test_default_plan_order():
    plan = resolve_variant_plan(None)
    assert plan.source is PlanSource.DEFAULT
    assert [(spec.format, spec.quality) for spec in plan] == DEFAULT_ORDER
    assert len(plan) == 8


def test_default_plan_loss_types():
    loss_types = [spec.loss_type for spec in DEFAULT_VARIANT_PLAN]
    assert loss_types == [LossType.LOSSY] * 7 + [LossType.LOSSLESS]


def test_malformed_json_falls_back_to_default():
    parsed = parse_variant_config("[{not json")
    assert parsed.status is ConfigStatus.PARSE_FAILED
    assert parsed.error

    plan = resolve_variant_plan("[{not json")
    assert plan.source is PlanSource.DEFAULT
    assert [(spec.format, spec.quality) for spec in plan] == DEFAULT_ORDER


def test_blank_config_is_absent():
    assert parse_variant_config(None).status is ConfigStatus.ABSENT
    assert parse_variant_config("   ").status is ConfigStatus.ABSENT


def test_non_array_and_empty_array_use_default():
    assert resolve_variant_plan('{"format": "png"}').source is PlanSource.DEFAULT
    assert resolve_variant_plan("[]").source is PlanSource.DEFAULT
    assert resolve_variant_plan("42").source is PlanSource.DEFAULT


def test_caller_plan_used_verbatim():
    plan = resolve_variant_plan('[{"format": "WEBP", "quality": 60, "label": "WebP 60", "lossType": "lossless"}]')
    assert plan.source is PlanSource.CALLER
    (spec,) = plan.specs
    assert spec.format == "webp"
    assert spec.quality == 60
    assert spec.label == "WebP 60"
    assert spec.loss_type is LossType.LOSSLESS


def test_missing_fields_get_defaults():
    plan = resolve_variant_plan([{}, {"format": "png"}])
    jpeg, png = plan.specs
    assert jpeg.format == "jpeg"
    assert jpeg.quality == 0.8
    assert jpeg.label == "JPEG (quality=0.8)"
    assert jpeg.loss_type is LossType.LOSSY
    assert png.loss_type is LossType.LOSSLESS


def test_invalid_values_are_coerced():
    spec = VariantSpec.model_validate({"format": "avif", "quality": "high", "lossType": "sometimes"})
    assert spec.quality == 0.8
    assert spec.loss_type is LossType.LOSSY
    assert VariantSpec.model_validate({"quality": "0.5"}).quality == 0.5


def test_unknown_format_kept_in_plan():
    """Unknown formats are classified, then skipped when the plan runs."""
    plan = resolve_variant_plan([{"format": "bmp"}, {"format": "png"}])
    assert [spec.format for spec in plan] == ["bmp", "png"]
    assert not plan.specs[0].is_supported
    assert plan.specs[0].loss_type is LossType.LOSSY
    assert plan.specs[1].is_supported


def test_non_object_entries_are_skipped():
    plan = resolve_variant_plan([1, "jpeg", None, {"format": "webp"}])
    assert [spec.format for spec in plan] == ["webp"]


def test_no_usable_entries_use_default():
    assert resolve_variant_plan([1, 2]).source is PlanSource.DEFAULT


def test_parsed_result_is_accepted():
    parsed = parse_variant_config('[{"format": "png"}]')
    assert parsed.status is ConfigStatus.PARSED
    assert [spec.format for spec in resolve_variant_plan(parsed)] == ["png"]


def test_format_whitespace_is_trimmed():
    """Padded format names still select the encoder."""
    spec = VariantSpec.model_validate({"format": " PNG "})
    assert spec.format == "png"
    assert spec.is_supported
