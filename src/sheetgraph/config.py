"""
Global Configuration and Defaults.

Centralizes the limits and layout constants used across ingestion, sizing,
layout and search. Values can be overridden from an optional YAML file and
a couple of environment variables.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from .core.exceptions import ConfigError

logger = logging.getLogger(__name__)

# --- Ingestion Limits ---
# Workbooks larger than this are rejected before decoding
MAX_WORKBOOK_BYTES = 5 * 1024 * 1024

# Spreadsheet row number of the header on every sheet
HEADER_ROW = 1

# --- Layout ---
RANK_DIRECTION = "LR"
NODE_SEPARATION = 50.0
RANK_SEPARATION = 80.0

# --- Node Sizing ---
FONT = "14px sans-serif"
MIN_NODE_WIDTH = 80.0
MAX_NODE_WIDTH = 600.0
NODE_PADDING = 24.0
MIN_NODE_HEIGHT = 40.0
LINE_HEIGHT = 20.0
# Average advance of a 14px sans-serif glyph
AVERAGE_CHAR_WIDTH = 7.5

# --- Search ---
SEARCH_DEBOUNCE_SECONDS = 0.3

DEFAULT_CONFIG_PATH = Path("sheetgraph.yaml")

ENV_MAX_WORKBOOK_BYTES = "SHEETGRAPH_MAX_WORKBOOK_BYTES"
ENV_DEBOUNCE_SECONDS = "SHEETGRAPH_DEBOUNCE_SECONDS"


class IngestSettings(BaseModel):
    max_workbook_bytes: int = Field(default=MAX_WORKBOOK_BYTES, gt=0)


class LayoutSettings(BaseModel):
    rank_direction: str = RANK_DIRECTION
    node_separation: float = Field(default=NODE_SEPARATION, ge=0)
    rank_separation: float = Field(default=RANK_SEPARATION, ge=0)


class SizingSettings(BaseModel):
    font: str = FONT
    min_width: float = Field(default=MIN_NODE_WIDTH, gt=0)
    max_width: float = Field(default=MAX_NODE_WIDTH, gt=0)
    padding: float = Field(default=NODE_PADDING, ge=0)
    min_height: float = Field(default=MIN_NODE_HEIGHT, gt=0)
    line_height: float = Field(default=LINE_HEIGHT, gt=0)
    char_width: float = Field(default=AVERAGE_CHAR_WIDTH, gt=0)


class SearchSettings(BaseModel):
    debounce_seconds: float = Field(default=SEARCH_DEBOUNCE_SECONDS, ge=0)


class Settings(BaseModel):
    """All tunables, grouped the way the YAML file is laid out."""
    ingest: IngestSettings = Field(default_factory=IngestSettings)
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    sizing: SizingSettings = Field(default_factory=SizingSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)


def load_settings(path: Optional[Path] = None) -> Settings:
    """
    Load settings from YAML (if present) and apply environment overrides.

    Args:
        path: Explicit config file. When omitted, ``sheetgraph.yaml`` in the
            working directory is used if it exists.

    Raises:
        ConfigError: If the file is unreadable, not a mapping, or holds
            invalid values.
    """
    config_path = path or DEFAULT_CONFIG_PATH
    data = {}

    if config_path.exists():
        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read config {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config {config_path} must be a mapping")
        logger.debug(f"Loaded settings from {config_path}")
    elif path is not None:
        raise ConfigError(f"Config file not found: {path}")

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e

    return _apply_env_overrides(settings)


def _apply_env_overrides(settings: Settings) -> Settings:
    max_bytes = os.getenv(ENV_MAX_WORKBOOK_BYTES)
    debounce = os.getenv(ENV_DEBOUNCE_SECONDS)

    try:
        if max_bytes:
            settings.ingest = IngestSettings(max_workbook_bytes=int(max_bytes))
        if debounce:
            settings.search = SearchSettings(debounce_seconds=float(debounce))
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid environment override: {e}") from e

    return settings
