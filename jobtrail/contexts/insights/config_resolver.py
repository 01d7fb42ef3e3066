"""
Insights configuration resolution.

Loads an optional YAML config file and merges it over structured defaults.
Only the keys being changed need to appear in the file:

    pipeline: six_stage
    metric: success_rate
    thresholds:
      interview_rate: 25

Examples:
    >>> config = load_insights_config(Path("insights.yaml"))
    >>> config = apply_overrides(config, metric="interview_rate")
"""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from jobtrail.contexts.insights.charts import ChartMetric
from jobtrail.contexts.insights.defaults import DEFAULT_LABEL_LENGTH, DEFAULT_METRIC
from jobtrail.contexts.insights.exceptions import InvalidConfigError
from jobtrail.contexts.insights.recommendations import RecommendationThresholds
from jobtrail.contexts.tracking import PipelineVariant, get_pipeline
from jobtrail.contexts.tracking.pipeline import DEFAULT_PIPELINE_NAME

load_dotenv()
CONFIG_PATH = os.getenv("JOBTRAIL_CONFIG")


@dataclass
class InsightsConfig:
    """
    Caller-supplied settings for one analytics computation.

    Attributes:
        pipeline: Pipeline variant name ("five_stage" or "six_stage")
        metric: Chart metric name ("applications", "success_rate", "interview_rate")
        label_length: Chart label truncation length
        thresholds: Recommendation rule cut-offs
    """

    pipeline: str = DEFAULT_PIPELINE_NAME
    metric: str = DEFAULT_METRIC
    label_length: int = DEFAULT_LABEL_LENGTH
    thresholds: RecommendationThresholds = field(default_factory=RecommendationThresholds)

    @property
    def pipeline_variant(self) -> PipelineVariant:
        return get_pipeline(self.pipeline)

    @property
    def chart_metric(self) -> ChartMetric:
        return ChartMetric(self.metric)


def validate_config(config: InsightsConfig, config_path: Optional[Path] = None) -> InsightsConfig:
    """
    Check names and ranges in a config.

    Raises:
        InvalidConfigError: On unknown pipeline or metric, or out-of-range values
    """
    try:
        config.pipeline_variant
    except ValueError as e:
        raise InvalidConfigError(str(e), config_path) from e

    try:
        config.chart_metric
    except ValueError as e:
        options = [m.value for m in ChartMetric]
        raise InvalidConfigError(
            f"Unknown metric '{config.metric}'. Available metrics: {options}", config_path
        ) from e

    if config.label_length < 1:
        raise InvalidConfigError("label_length must be at least 1", config_path)

    thresholds = config.thresholds
    for name in ("interview_rate", "success_rate"):
        value = getattr(thresholds, name)
        if not 0 <= value <= 100:
            raise InvalidConfigError(
                f"thresholds.{name} must be within 0-100, got {value}", config_path
            )
    if thresholds.min_applications_for_review < 1:
        raise InvalidConfigError(
            "thresholds.min_applications_for_review must be at least 1", config_path
        )

    return config


def load_insights_config(config_path: Path = None) -> InsightsConfig:
    """
    Load insights settings, merging a YAML file over the defaults.

    Args:
        config_path: Optional YAML file (defaults to JOBTRAIL_CONFIG env variable;
                     with neither, plain defaults are returned)

    Returns:
        Validated InsightsConfig

    Raises:
        FileNotFoundError: If the config file doesn't exist
        InvalidConfigError: If the file has unknown keys, wrong types or bad values
    """
    if config_path is None and CONFIG_PATH:
        config_path = Path(CONFIG_PATH)

    if config_path is None:
        return validate_config(InsightsConfig())

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        base = OmegaConf.structured(InsightsConfig)
        merged = OmegaConf.merge(base, OmegaConf.load(config_path))
        config = OmegaConf.to_object(merged)
    except OmegaConfBaseException as e:
        raise InvalidConfigError(f"Invalid insights config: {e}", config_path) from e

    return validate_config(config, config_path)


def apply_overrides(config: InsightsConfig, **overrides) -> InsightsConfig:
    """
    Return a copy of config with top-level or threshold values replaced.

    None values are ignored so CLI options can be passed straight through.
    Threshold names (interview_rate, success_rate, min_applications_for_review)
    update the nested thresholds.

    Raises:
        InvalidConfigError: On unknown keys or invalid resulting values
    """
    top_level = {}
    threshold_changes = {}
    threshold_names = set(RecommendationThresholds.__dataclass_fields__)

    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(value, ChartMetric):
            value = value.value
        if key in threshold_names:
            threshold_changes[key] = value
        elif key in InsightsConfig.__dataclass_fields__ and key != "thresholds":
            top_level[key] = value
        else:
            raise InvalidConfigError(f"Unknown config key '{key}'")

    thresholds = replace(config.thresholds, **threshold_changes)
    return validate_config(replace(config, thresholds=thresholds, **top_level))
