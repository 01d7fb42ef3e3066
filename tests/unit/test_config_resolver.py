"""Unit tests for insights configuration loading."""

import pytest

from jobtrail.contexts.insights.charts import ChartMetric
from jobtrail.contexts.insights.config_resolver import (
    InsightsConfig,
    apply_overrides,
    load_insights_config,
)
from jobtrail.contexts.insights.exceptions import InvalidConfigError
from jobtrail.contexts.tracking import SIX_STAGE_PIPELINE


@pytest.mark.unit
def test_defaults():
    """Test default insights settings."""
    config = InsightsConfig()

    assert config.metric == "applications"
    assert config.label_length == 15
    assert config.thresholds.interview_rate == 20.0
    assert config.thresholds.success_rate == 5.0
    assert config.thresholds.min_applications_for_review == 5
    assert config.chart_metric is ChartMetric.APPLICATIONS


@pytest.mark.unit
def test_yaml_file_merges_over_defaults(tmp_path):
    """Test merging a partial YAML file over the defaults."""
    config_file = tmp_path / "insights.yaml"
    config_file.write_text(
        "pipeline: six_stage\n"
        "metric: success_rate\n"
        "thresholds:\n"
        "  interview_rate: 25\n",
        encoding="utf-8",
    )

    config = load_insights_config(config_file)

    assert isinstance(config, InsightsConfig)
    assert config.pipeline_variant is SIX_STAGE_PIPELINE
    assert config.chart_metric is ChartMetric.SUCCESS_RATE
    assert config.thresholds.interview_rate == 25.0
    assert config.thresholds.success_rate == 5.0
    assert config.label_length == 15


@pytest.mark.unit
def test_unknown_key_is_rejected(tmp_path):
    """Test that unknown config keys raise InvalidConfigError."""
    config_file = tmp_path / "insights.yaml"
    config_file.write_text("colour: blue\n", encoding="utf-8")

    with pytest.raises(InvalidConfigError) as excinfo:
        load_insights_config(config_file)

    assert excinfo.value.config_path == config_file


@pytest.mark.unit
def test_unknown_metric_is_rejected(tmp_path):
    """Test that an unknown chart metric raises InvalidConfigError."""
    config_file = tmp_path / "insights.yaml"
    config_file.write_text("metric: offers\n", encoding="utf-8")

    with pytest.raises(InvalidConfigError, match="Unknown metric 'offers'"):
        load_insights_config(config_file)


@pytest.mark.unit
def test_out_of_range_threshold_is_rejected(tmp_path):
    """Test that thresholds outside 0-100 are rejected."""
    config_file = tmp_path / "insights.yaml"
    config_file.write_text("thresholds:\n  success_rate: 150\n", encoding="utf-8")

    with pytest.raises(InvalidConfigError, match="within 0-100"):
        load_insights_config(config_file)


@pytest.mark.unit
def test_missing_file(tmp_path):
    """Test error handling for a missing config file."""
    with pytest.raises(FileNotFoundError):
        load_insights_config(tmp_path / "absent.yaml")


@pytest.mark.unit
def test_overrides_replace_top_level_and_threshold_values():
    """Test applying CLI overrides to a config copy."""
    base = InsightsConfig()

    config = apply_overrides(
        base,
        pipeline="six_stage",
        metric=ChartMetric.INTERVIEW_RATE,
        success_rate=2.5,
        label_length=None,
    )

    assert config.pipeline == "six_stage"
    assert config.metric == "interview_rate"
    assert config.thresholds.success_rate == 2.5
    assert config.label_length == 15
    # The original is left untouched
    assert base.metric == "applications"
    assert base.thresholds.success_rate == 5.0


@pytest.mark.unit
def test_overrides_reject_unknown_keys_and_values():
    """Test that bad overrides raise InvalidConfigError."""
    with pytest.raises(InvalidConfigError, match="Unknown config key"):
        apply_overrides(InsightsConfig(), colour="blue")

    with pytest.raises(InvalidConfigError, match="Unknown pipeline"):
        apply_overrides(InsightsConfig(), pipeline="seven_stage")
