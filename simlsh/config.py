"""
Configuration for fingerprint computation.

A ``FingerprintConfig`` names the pluggable stages of the pipeline by string
so it can be stored in YAML and handed to ``Fingerprinter.from_config``.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .errors import ConfigurationError
from .pipeline.aggregator import DEFAULT_BATCH_SIZE
from .pipeline.digests import get_digest
from .pipeline.tokenizers import TOKENIZERS

DEFAULT_CONFIG_NAME = ".simlsh.yml"


@dataclass
class FingerprintConfig:
    """
    Parameters of one fingerprint pipeline.

    ``shingle_width`` of 1 selects bag-of-words mode. ``stopwords`` enables
    the stop-word filter when non-empty.
    """

    shingle_width: int = 3
    tokenizer: str = "words"
    digest: str = "md5"
    shingle_joiner: str = " "
    batch_size: int = DEFAULT_BATCH_SIZE
    stopwords: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate configuration parameters."""
        if (not isinstance(self.shingle_width, int) or isinstance(self.shingle_width, bool)
                or self.shingle_width < 1):
            raise ConfigurationError(
                f"shingle_width must be a positive integer, got {self.shingle_width!r}",
                parameter="shingle_width",
                value=self.shingle_width,
            )

        if self.tokenizer not in TOKENIZERS:
            raise ConfigurationError(
                f"tokenizer must be one of {sorted(TOKENIZERS)}, got {self.tokenizer!r}",
                parameter="tokenizer",
                value=self.tokenizer,
            )

        # Raises ConfigurationError for unknown algorithms
        get_digest(self.digest)

        if (not isinstance(self.batch_size, int) or isinstance(self.batch_size, bool)
                or self.batch_size < 1):
            raise ConfigurationError(
                f"batch_size must be a positive integer, got {self.batch_size!r}",
                parameter="batch_size",
                value=self.batch_size,
            )

        if not isinstance(self.shingle_joiner, str):
            raise ConfigurationError(
                "shingle_joiner must be a string",
                parameter="shingle_joiner",
                value=self.shingle_joiner,
            )

        if (not isinstance(self.stopwords, list)
                or not all(isinstance(word, str) for word in self.stopwords)):
            raise ConfigurationError(
                f"stopwords must be a list of strings, got {self.stopwords!r}",
                parameter="stopwords",
                value=self.stopwords,
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "shingle_width": self.shingle_width,
            "tokenizer": self.tokenizer,
            "digest": self.digest,
            "shingle_joiner": self.shingle_joiner,
            "batch_size": self.batch_size,
            "stopwords": list(self.stopwords),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FingerprintConfig":
        """Create from dictionary representation."""
        unknown = set(data) - {f for f in cls.__dataclass_fields__}
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {sorted(unknown)}",
                details={"unknown": sorted(unknown)},
            )
        return cls(
            shingle_width=data.get("shingle_width", 3),
            tokenizer=data.get("tokenizer", "words"),
            digest=data.get("digest", "md5"),
            shingle_joiner=data.get("shingle_joiner", " "),
            batch_size=data.get("batch_size", DEFAULT_BATCH_SIZE),
            stopwords=data.get("stopwords") or [],
        )

    def save_to_file(self, file_path: Union[str, Path]) -> None:
        """Save configuration to YAML file."""
        file_path = Path(file_path)

        # Create directory if it doesn't exist
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, "w", encoding="utf-8") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    @classmethod
    def load_from_file(cls, file_path: Union[str, Path]) -> "FingerprintConfig":
        """Load configuration from YAML file."""
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(
                    f"Invalid YAML in {file_path}: {e}",
                    details={"path": str(file_path)},
                ) from e

        if data is not None and not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration in {file_path} must be a mapping",
                details={"path": str(file_path)},
            )
        return cls.from_dict(data or {})

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get the default configuration file path."""
        # Look for config in current directory, then home directory
        current_dir_config = Path(DEFAULT_CONFIG_NAME)
        if current_dir_config.exists():
            return current_dir_config

        return Path.home() / DEFAULT_CONFIG_NAME

    @classmethod
    def load_or_default(
        cls, config_path: Optional[Union[str, Path]] = None
    ) -> "FingerprintConfig":
        """
        Load configuration from file or return default if not found.

        An explicitly given path must exist.
        """
        if config_path:
            return cls.load_from_file(config_path)

        default_path = cls.get_default_config_path()
        if default_path.exists():
            return cls.load_from_file(default_path)

        return cls()
