"""Configuration management for Thought Clusters."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


@dataclass
class ClusteringConfig:
    """Clustering engine configuration."""
    similarity_threshold: float = 0.15  # Merge only when best pair is strictly above this
    min_cluster_size: int = 2
    max_keywords: int = 5
    label_keywords: int = 3
    max_thoughts: int = 500  # Input-size cap; the merge loop is O(n^3)

    @classmethod
    def from_env(cls, base: "ClusteringConfig | None" = None) -> "ClusteringConfig":
        """Apply environment variable overrides on top of a base config."""
        config = base or cls()
        threshold = os.getenv("THOUGHT_CLUSTERS_SIMILARITY_THRESHOLD")
        min_size = os.getenv("THOUGHT_CLUSTERS_MIN_CLUSTER_SIZE")
        max_thoughts = os.getenv("THOUGHT_CLUSTERS_MAX_THOUGHTS")

        return cls(
            similarity_threshold=float(threshold) if threshold else config.similarity_threshold,
            min_cluster_size=int(min_size) if min_size else config.min_cluster_size,
            max_keywords=config.max_keywords,
            label_keywords=config.label_keywords,
            max_thoughts=int(max_thoughts) if max_thoughts else config.max_thoughts,
        )


@dataclass
class OutputConfig:
    """Output configuration."""
    directory: str = "./output"
    format: str = "table"  # table / markdown / json


@dataclass
class Config:
    """Main configuration container."""
    clustering: ClusteringConfig = field(default_factory=ClusteringConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def _dict_to_dataclass(data: dict[str, Any], cls: type) -> Any:
    """Convert a dictionary to a dataclass instance, ignoring unknown keys."""
    if not data:
        return cls()

    field_names = set(cls.__dataclass_fields__)
    kwargs = {key: value for key, value in data.items() if key in field_names}
    return cls(**kwargs)


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, looks for
            config/local.yaml then config/default.yaml.

    Returns:
        Config object with all settings. Environment overrides are applied
        to the clustering section.
    """
    if config_path is None:
        local_config = Path("config/local.yaml")
        default_config = Path("config/default.yaml")

        if local_config.exists():
            config_path = local_config
        elif default_config.exists():
            config_path = default_config
        else:
            return Config(clustering=ClusteringConfig.from_env())

    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        data = yaml.safe_load(f) or {}

    clustering = _dict_to_dataclass(data.get("clustering", {}), ClusteringConfig)

    return Config(
        clustering=ClusteringConfig.from_env(clustering),
        output=_dict_to_dataclass(data.get("output", {}), OutputConfig),
    )


def ensure_directories(config: Config) -> None:
    """Ensure required directories exist."""
    output_dir = Path(config.output.directory)
    output_dir.mkdir(parents=True, exist_ok=True)


# Global config instance (lazy loaded)
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(config_path: str | Path | None = None) -> Config:
    """Reload configuration from file."""
    global _config
    _config = load_config(config_path)
    return _config
