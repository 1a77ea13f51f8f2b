"""
Configuration management for shapeblend.

Loads YAML configuration with sensible defaults for every engine stage.
"""

import os
from dataclasses import dataclass, field

import yaml


@dataclass
class ResampleConfig:
    """Configuration for arc-length resampling."""
    count: int = 256


@dataclass
class BlendConfig:
    """Configuration for point-wise blending."""
    weight: float = 0.5  # 0 = first shape, 1 = second shape


@dataclass
class OutputConfig:
    """Configuration for curve synthesis and output sizing."""
    target_size: float = 360.0
    fit_fraction: float = 0.85
    tension: float = 0.5
    precision: int = 2


@dataclass
class ProjectionConfig:
    """Configuration for the map projection shared by both shapes."""
    name: str = "natural_earth1"  # "natural_earth1", "equal_earth" or "equirectangular"
    width: float = 900.0
    height: float = 520.0
    padding: float = 8.0


@dataclass
class StrokeConfig:
    """Configuration for SVG path styling."""
    width: float = 1.5
    color: str = "#111111"
    fill: str = "none"


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: str = None
    json_output: bool = False


@dataclass
class HybridConfig:
    """Complete engine configuration."""
    resample: ResampleConfig = field(default_factory=ResampleConfig)
    blend: BlendConfig = field(default_factory=BlendConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    projection: ProjectionConfig = field(default_factory=ProjectionConfig)
    stroke: StrokeConfig = field(default_factory=StrokeConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)


SECTIONS = ("resample", "blend", "output", "projection", "stroke", "tracing")


def load_config(config_path=None):
    """
    Load configuration from YAML file.

    Falls back to defaults for any missing values.
    """
    config = HybridConfig()

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config = _merge_config(config, yaml_data)

    return config


def _merge_config(config, yaml_data):
    """Merge YAML data into config dataclass, ignoring unknown keys."""
    for section in SECTIONS:
        values = yaml_data.get(section)
        if not isinstance(values, dict):
            continue
        target = getattr(config, section)
        for key, value in values.items():
            if hasattr(target, key):
                setattr(target, key, value)

    return config


def config_to_dict(config):
    """Plain nested dict view of a config, in section order."""
    return {
        section: dict(vars(getattr(config, section)))
        for section in SECTIONS
    }


def save_default_config(path):
    """Save default configuration to YAML file for reference."""
    yaml_data = config_to_dict(HybridConfig())

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)
