from enum import Enum
from typing import Any, Tuple
import json
import os
from pydantic import BaseModel, Field, field_validator
from loguru import logger
from .events import Signal

# --- Generic Settings Models ---
class GeneralSettings(BaseModel):
    debug_mode: bool = True
    log_dir: str = "logs"

# --- Link Appearance ---
class LinkStyleSettings(BaseModel):
    color: Tuple[int, int, int, int] = (255, 155, 0, 255)
    width: int = 2
    selected_color: Tuple[int, int, int, int] = (255, 180, 180, 255)
    selected_width: int = 3

# --- Routing / Interaction ---
class OrphanDropPolicy(str, Enum):
    """What happens to a never-bound link released over nothing."""
    DESTROY = "destroy"
    KEEP_PENDING = "keep_pending"

class RoutingSettings(BaseModel):
    spline_tension: float = 0.5
    hit_radius: float = 8.0       # endpoint hit test, scene units
    pick_tolerance: float = 4.0   # distance from a link path that still grabs it
    curve_samples: int = 24       # flattening steps per segment when picking
    orphan_drop_policy: OrphanDropPolicy = OrphanDropPolicy.DESTROY

    @field_validator("spline_tension")
    @classmethod
    def _tension_in_range(cls, value: float) -> float:
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"spline_tension must lie in [0, 1], got {value}")
        return value

    @field_validator("curve_samples")
    @classmethod
    def _samples_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("curve_samples must be at least 1")
        return value

class AppConfig(BaseModel):
    general: GeneralSettings = Field(default_factory=GeneralSettings)
    link_style: LinkStyleSettings = Field(default_factory=LinkStyleSettings)
    routing: RoutingSettings = Field(default_factory=RoutingSettings)

# --- Manager ---
class ConfigManager:
    """
    Manages editor configuration with persistence and reactivity.
    """
    def __init__(self, filepath: str = "config.json"):
        self.filepath = filepath
        self._data = AppConfig()
        self.on_changed = Signal("ConfigChanged")
        self._load()

    @property
    def data(self) -> AppConfig:
        return self._data

    def update(self, section: str, key: str, value: Any):
        """Update a setting, validate via Pydantic, autosave, and emit change event."""
        if not hasattr(self._data, section):
            raise ValueError(f"Invalid section: {section}")

        section_obj = getattr(self._data, section)
        if not isinstance(section_obj, BaseModel) or key not in type(section_obj).model_fields:
            raise ValueError(f"Invalid key: {key} in section {section}")

        # Re-validate the whole section so field validators run on the new value
        validated = type(section_obj).model_validate({**section_obj.model_dump(), key: value})
        setattr(self._data, section, validated)
        self._save()
        self.on_changed.emit(section, key, getattr(validated, key))

    def get(self, section: str, key: str) -> Any:
        section_obj = getattr(self._data, section)
        return getattr(section_obj, key)

    def _load(self):
        """Load settings from JSON or TOML file if present; otherwise keep defaults."""
        if os.path.isfile(self.filepath):
            try:
                if self.filepath.endswith('.toml'):
                    import tomllib
                    with open(self.filepath, "rb") as f:
                        raw = tomllib.load(f)
                else:
                    with open(self.filepath, "r", encoding="utf-8") as f:
                        raw = json.load(f)
                self._data = AppConfig.model_validate(raw)
            except Exception as e:
                logger.error(f"Failed to load config from {self.filepath}: {e}")
                self._save()
        else:
            self._save()

    def _save(self):
        """Persist current config to JSON file."""
        if self.filepath.endswith('.toml'):
            # tomllib is read-only; TOML files are treated as hand-edited input
            return
        try:
            dirname = os.path.dirname(self.filepath)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            with open(self.filepath, "w", encoding="utf-8") as f:
                json.dump(self._data.model_dump(mode="json"), f, indent=4)
        except Exception as e:
            logger.error(f"Failed to save config to {self.filepath}: {e}")
