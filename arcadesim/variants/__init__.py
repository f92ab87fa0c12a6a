"""
Variant presets - YAML engine configurations validated with Pydantic.

Each `<name>.yaml` next to this module describes one arcade variant
(shooter, dodger, flappy, clicker). User files with the same schema load
through load_config_file().

Examples:
    >>> config = load_variant("shooter")
    >>> config.field.width
    400
    >>> list_variants()
    ['clicker', 'dodger', 'flappy', 'shooter']
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError

from arcadesim.logging import get_logger
from arcadesim.models import EngineConfig

log = get_logger('variants')

VARIANTS_DIR = Path(__file__).parent


def load_config_file(path: Union[str, Path]) -> EngineConfig:
    """Load and validate an engine configuration from a YAML file.

    Args:
        path: YAML file to read

    Returns:
        Validated EngineConfig

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the YAML is malformed or fails validation
    """
    yaml_path = Path(path)
    if not yaml_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

    try:
        with open(yaml_path, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML file '{yaml_path}': {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Invalid configuration in '{yaml_path}': expected a mapping")

    try:
        return EngineConfig(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid engine configuration in '{yaml_path}':\n{e}") from e


class VariantLoader:
    """Discovers and loads variant presets from a directory.

    Attributes:
        variants_dir: Directory holding the variant YAML files
    """

    def __init__(self, variants_dir: Optional[Path] = None):
        self.variants_dir = Path(variants_dir) if variants_dir is not None else VARIANTS_DIR

    def path_for(self, variant: str) -> Path:
        return self.variants_dir / f"{variant}.yaml"

    def load(self, variant: str) -> EngineConfig:
        """Load a variant by name.

        Raises:
            FileNotFoundError: If no such variant exists
            ValueError: If its YAML is invalid
        """
        yaml_path = self.path_for(variant)
        if not yaml_path.exists():
            raise FileNotFoundError(
                f"Variant '{variant}' not found. "
                f"Available: {', '.join(self.list_available()) or 'none'}"
            )
        return load_config_file(yaml_path)

    def list_available(self) -> List[str]:
        """Variant names, sorted."""
        if not self.variants_dir.exists():
            log.warning("Variants directory not found: %s", self.variants_dir)
            return []
        return sorted(f.stem for f in self.variants_dir.glob("*.yaml"))

    def exists(self, variant: str) -> bool:
        return self.path_for(variant).exists()

    def info(self, variant: str) -> Dict[str, Any]:
        """Name and description without full validation."""
        yaml_path = self.path_for(variant)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Variant '{variant}' not found")

        with open(yaml_path, 'r') as f:
            data = yaml.safe_load(f) or {}

        return {
            'name': data.get('name', variant),
            'description': data.get('description', ''),
        }


_default_loader = VariantLoader()


def load_variant(variant: str) -> EngineConfig:
    """Load a bundled variant preset."""
    return _default_loader.load(variant)


def list_variants() -> List[str]:
    """Names of the bundled variant presets."""
    return _default_loader.list_available()


__all__ = ['VariantLoader', 'load_variant', 'list_variants', 'load_config_file', 'VARIANTS_DIR']
