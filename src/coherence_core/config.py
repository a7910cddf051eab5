"""
Configuration for the Coherence Map.

Layout and highlight constants live in dataclasses so the canvas, the
simulation and the tests read the same values. Runtime options (data file,
LLM provider, log level) come from environment variables.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_DATA_FILE = DATA_DIR / "standards.json"
DEFAULT_IMAGE_BASE_URL = "https://storage.googleapis.com/hidoe-math-standards/images/"

GRADES = ("Kindergarten", "Grade 1", "Grade 2")


@dataclass
class LayoutSettings:
    """Force simulation tuning."""
    link_distance: float = 280.0
    charge_strength: float = -2200.0
    collision_radius: float = 140.0
    center_strength: float = 1.0
    velocity_decay: float = 0.4

    # Cooling schedule (alpha decays to alpha_min in ~300 ticks)
    alpha_min: float = 0.001
    alpha_decay: float = field(default=0.0)
    drag_alpha_target: float = 0.1

    # Termination
    settle_budget_s: float = 4.0
    energy_threshold: float = 0.5

    # Frame pacing for the cooperative tick loop
    frame_interval_ms: int = 16

    def __post_init__(self):
        if not self.alpha_decay:
            self.alpha_decay = 1 - self.alpha_min ** (1 / 300)


@dataclass
class ViewportSettings:
    """Pan/zoom limits and animation timings."""
    scale_extent: Tuple[float, float] = (0.1, 4.0)
    focus_scale: float = 1.2
    focus_duration_s: float = 0.8
    reset_duration_s: float = 0.75
    zoom_duration_s: float = 0.25
    zoom_in_factor: float = 1.5
    zoom_out_factor: float = 0.7
    wheel_factor: float = 1.25


@dataclass
class HighlightSettings:
    """Opacity and line weights used by the highlight compositor."""
    dim_opacity: float = 0.15
    edge_dim_opacity: float = 0.05

    selected_stroke: float = 5.0
    related_stroke: float = 3.0
    search_stroke: float = 4.0
    plain_stroke: float = 2.0

    edge_neutral_width: float = 2.0
    edge_related_width: float = 4.0
    edge_muted_width: float = 1.0


@dataclass
class AppConfig:
    """Runtime configuration, normally read from the environment."""
    data_file: Path = DEFAULT_DATA_FILE
    default_grade: str = "Kindergarten"
    llm_provider: Optional[str] = None   # "claude", "gemini" or None = first available
    llm_model: Optional[str] = None
    log_level: str = "INFO"
    log_file: Optional[str] = None
    image_base_url: str = DEFAULT_IMAGE_BASE_URL

    layout: LayoutSettings = field(default_factory=LayoutSettings)
    viewport: ViewportSettings = field(default_factory=ViewportSettings)
    highlight: HighlightSettings = field(default_factory=HighlightSettings)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build a config from COHERENCE_* environment variables."""
        config = cls()

        data_file = os.environ.get("COHERENCE_DATA_FILE")
        if data_file:
            config.data_file = Path(data_file).expanduser()

        config.default_grade = os.environ.get("COHERENCE_GRADE", config.default_grade)
        config.llm_provider = os.environ.get("COHERENCE_LLM_PROVIDER") or None
        config.llm_model = os.environ.get("COHERENCE_LLM_MODEL") or None
        config.log_level = os.environ.get("COHERENCE_LOG_LEVEL", config.log_level)
        config.log_file = os.environ.get("COHERENCE_LOG_FILE") or None
        config.image_base_url = os.environ.get(
            "COHERENCE_IMAGE_BASE_URL", config.image_base_url
        )
        return config
