"""
Difficulty Preset Loader - YAML configuration loading with Pydantic validation.

Presets live as ``<name>.yaml`` files in the game's presets/ directory and
validate into FlappyConfig. A preset only needs the values it changes;
everything else keeps the classic defaults.

Examples:
    >>> loader = PresetLoader()
    >>> config = loader.load_preset("hard")
    >>> config.name
    'Hard'
    >>> loader.list_available_presets()
    ['easy', 'hard', 'normal']
"""

from pathlib import Path
from typing import List, Optional

import yaml

from models import FlappyConfig
from skyflap.logging import get_logger

from ..config import PRESETS_DIR

log = get_logger('presets')


class PresetLoader:
    """Loads and validates difficulty presets from YAML files.

    Attributes:
        presets_dir: Directory containing preset YAML files
    """

    def __init__(self, presets_dir: Optional[Path] = None):
        self.presets_dir = Path(presets_dir) if presets_dir is not None else PRESETS_DIR

    def load_preset(self, name: str) -> FlappyConfig:
        """Load and validate a preset.

        Args:
            name: Preset name (file name without .yaml)

        Returns:
            Validated FlappyConfig

        Raises:
            FileNotFoundError: If the preset file doesn't exist
            yaml.YAMLError: If the YAML syntax is malformed
            pydantic.ValidationError: If the content is invalid
        """
        yaml_path = self.presets_dir / f"{name}.yaml"

        if not yaml_path.exists():
            raise FileNotFoundError(
                f"Difficulty preset '{name}' not found. "
                f"Expected file: {yaml_path}"
            )

        with open(yaml_path, 'r') as f:
            config_dict = yaml.safe_load(f) or {}

        config = FlappyConfig(**config_dict)
        log.debug("Loaded preset %s from %s", name, yaml_path)
        return config

    def list_available_presets(self) -> List[str]:
        """Preset names found in presets_dir, sorted."""
        if not self.presets_dir.exists():
            return []
        return sorted(f.stem for f in self.presets_dir.glob("*.yaml"))

    def preset_exists(self, name: str) -> bool:
        return (self.presets_dir / f"{name}.yaml").exists()
