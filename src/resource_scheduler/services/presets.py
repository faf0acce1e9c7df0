"""Industry presets for the utilization policy and loaders."""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from typing import Any

from pydantic import BaseModel

from resource_scheduler.core.config import get_settings
from resource_scheduler.schemas.utilization import IndustryPreset, UtilizationSettings


class PresetCatalog(BaseModel):
    version: str
    presets: dict[IndustryPreset, dict[str, Any]]


def _load_presets_from_json() -> PresetCatalog:
    with resources.files("resource_scheduler.services.data").joinpath("utilization_presets.json").open(
        "r", encoding="utf-8"
    ) as handle:
        payload = json.load(handle)
    return PresetCatalog.model_validate(payload)


@lru_cache(maxsize=1)
def load_preset_catalog() -> PresetCatalog:
    """Return the preset catalog bundled with the package."""

    return _load_presets_from_json()


def preset_to_config(
    preset: IndustryPreset | str, base: UtilizationSettings | None = None
) -> UtilizationSettings:
    """Return the policy for *preset*, layered over *base* (or the defaults).

    Fields a preset does not mention keep their value from *base*. The custom
    preset returns *base* unchanged.
    """

    preset = IndustryPreset(preset)
    base = base or UtilizationSettings()
    if preset is IndustryPreset.CUSTOM:
        return base
    overrides = load_preset_catalog().presets[preset]
    return UtilizationSettings.model_validate({**base.model_dump(), **overrides})


def default_utilization_settings() -> UtilizationSettings:
    """Build the shared policy from the preset named in application settings."""

    return preset_to_config(get_settings().utilization_preset)


__all__ = ["PresetCatalog", "default_utilization_settings", "load_preset_catalog", "preset_to_config"]
