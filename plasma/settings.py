"""
Plasma Settings - Rendering, output and genetic configuration
Rendering settings can be loaded from a YAML file and overridden on the command line
"""

import yaml
from pathlib import Path
from typing import Dict, Optional, Any, Union
from dataclasses import dataclass, asdict
from enum import Enum

from .genetics import Genome, Population


# ============================================================================
# Rendering
# ============================================================================

@dataclass
class RenderingSettings:
    """How frames are rendered and colored"""

    dithering: bool = False
    frames_per_second: float = 16.0
    loop_duration: float = 60.0     # seconds per animation cycle
    palette_size: Optional[int] = None  # None: one palette entry per lookup table slot
    width: int = 640
    height: int = 480

    # Push outermost palette entries to the gradient's extremes before clustering.
    # None follows `dithering`.
    maximize_range: Optional[bool] = None

    def __post_init__(self):
        if self.frames_per_second <= 0:
            raise ValueError(f"frames_per_second must be positive, got {self.frames_per_second}")
        if self.loop_duration <= 0:
            raise ValueError(f"loop_duration must be positive, got {self.loop_duration}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Size must be positive, got {self.width}x{self.height}")
        if self.palette_size is not None and not 2 <= self.palette_size <= 65535:
            raise ValueError(f"palette_size must be 2-65535, got {self.palette_size}")

    @property
    def effective_maximize_range(self) -> bool:
        if self.maximize_range is None:
            return self.dithering
        return self.maximize_range

    @property
    def frame_count(self) -> int:
        """Frames in one full animation loop"""
        return max(1, round(self.loop_duration * self.frames_per_second))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for YAML serialization"""
        return {k: v for k, v in asdict(self).items() if v is not None}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RenderingSettings':
        """Create from dictionary, ignoring unknown keys"""
        # Accept the short names used on the command line
        aliases = {'fps': 'frames_per_second', 'palette': 'palette_size'}
        data = {aliases.get(k, k): v for k, v in data.items()}

        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_fields}

        return cls(**filtered)

    @classmethod
    def for_file_output(cls) -> 'RenderingSettings':
        """Defaults for rendering to a GIF"""
        return cls(
            dithering=True,
            frames_per_second=10.0,
            loop_duration=60.0,
            palette_size=64,
            width=320,
            height=240,
        )

    @classmethod
    def for_interactive(cls) -> 'RenderingSettings':
        """Defaults for the live window"""
        return cls()


def load_rendering_settings(
    path: Union[str, Path],
    defaults: Optional[RenderingSettings] = None,
) -> RenderingSettings:
    """
    Load rendering settings from a YAML mapping.

    Keys not present in the file keep their values from defaults.
    """
    with open(path, 'r') as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping of settings, got {type(data).__name__}")

    base = asdict(defaults) if defaults is not None else {}
    base.update(data)
    return RenderingSettings.from_dict(base)


def save_rendering_settings(settings: RenderingSettings, path: Union[str, Path]) -> Path:
    path = Path(path)
    with open(path, 'w') as f:
        yaml.dump(settings.to_dict(), f, default_flow_style=False, sort_keys=False)
    return path


# ============================================================================
# Output / Genetics
# ============================================================================

class OutputMode(Enum):
    FILE = "file"
    INTERACTIVE = "interactive"


@dataclass
class OutputSettings:
    mode: OutputMode = OutputMode.INTERACTIVE
    path: Optional[str] = None
    verbose: bool = False

    def __post_init__(self):
        if self.mode == OutputMode.FILE and not self.path:
            raise ValueError("File output needs a path")


@dataclass
class GeneticSettings:
    """Starting genome and the population it breeds with"""
    genome: Genome
    population: Population


@dataclass
class PlasmaSettings:
    genetics: GeneticSettings
    rendering: RenderingSettings
    output: OutputSettings
