"""Configuration helpers for the drawing engine."""

from __future__ import annotations

import copy
from dataclasses import dataclass


@dataclass
class EngineConfig:
    standard_gap: float = 20.0
    part_gap: float = 10.0
    margin_factor: float = 1.3
    default_extent: float = 100.0
    unit_factor: float = 10.0  # cm -> mm
    snap_threshold: float = 5.0
    endpoint_grab_threshold: float = 5.0
    min_zoom: float = 0.1
    max_zoom: float = 10.0


_ENGINE_CONFIG = EngineConfig()


def get_engine_config() -> EngineConfig:
    return copy.deepcopy(_ENGINE_CONFIG)


def set_engine_config(config: EngineConfig) -> None:
    global _ENGINE_CONFIG
    _ENGINE_CONFIG = copy.deepcopy(config)
