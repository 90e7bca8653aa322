"""Compression configuration models."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from verdant.core.errors import UnsupportedFormatError


class CompressionLevel(str, Enum):
    """Ordinal compression tier. Each tier extends the transforms of the one below."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    EXTREME = "extreme"

    @property
    def rank(self) -> int:
        return _LEVEL_ORDER.index(self)

    def at_least(self, other: "CompressionLevel") -> bool:
        """True when this tier is ``other`` or above."""
        return self.rank >= other.rank


_LEVEL_ORDER = [
    CompressionLevel.LOW,
    CompressionLevel.MEDIUM,
    CompressionLevel.HIGH,
    CompressionLevel.EXTREME,
]


class TargetModel(str, Enum):
    """Model the output is tuned for."""

    CLAUDE = "claude"
    GPT = "gpt"
    COPILOT = "copilot"
    OTHER = "other"

    @classmethod
    def from_name(cls, name: str) -> "TargetModel":
        """Resolve a model name, falling back to ``OTHER`` for unknown names."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            return cls.OTHER


class OutputFormat(str, Enum):
    """Serialization of the compressed corpus."""

    MARKDOWN = "markdown"
    VRD = "vrd"

    @property
    def extension(self) -> str:
        return "vrd" if self is OutputFormat.VRD else "md"

    @classmethod
    def parse(cls, value: "str | OutputFormat") -> "OutputFormat":
        """
        Parse a format name. ``md`` is accepted as an alias of markdown.

        Raises:
            UnsupportedFormatError: For any other name (json, yaml, ...)
        """
        if isinstance(value, OutputFormat):
            return value
        name = str(value).strip().lower()
        if name == "md":
            return cls.MARKDOWN
        try:
            return cls(name)
        except ValueError:
            raise UnsupportedFormatError(str(value)) from None


class CompressionConfig(BaseModel):
    """Immutable configuration snapshot for one compression run."""

    model_config = ConfigDict(frozen=True)

    level: CompressionLevel = CompressionLevel.MEDIUM
    target_model: TargetModel = TargetModel.CLAUDE
    ai_mode: bool = False
    remove_emojis: bool = True
    chronological: bool = True
    output_format: OutputFormat = OutputFormat.MARKDOWN
    chunk: bool = False
    max_lines: int = Field(default=800, ge=1, description="Line budget per chunk")

    @field_validator("target_model", mode="before")
    @classmethod
    def validate_target_model(cls, v):
        """Map unknown model names to ``other`` instead of rejecting them."""
        if isinstance(v, str):
            return TargetModel.from_name(v)
        return v

    @field_validator("output_format", mode="before")
    @classmethod
    def validate_output_format(cls, v):
        """Accept ``md``; unsupported formats abort with UnsupportedFormatError."""
        return OutputFormat.parse(v)

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def extreme_enabled(self) -> bool:
        """Whether the article/abbreviation/symbol substitutions are active."""
        return self.level is CompressionLevel.EXTREME or self.ai_mode


class CLIConfig(BaseSettings):
    """Defaults for the ``verdant`` command line.

    Values come from ``VERDANT_*`` environment variables, a ``.env`` file or
    ``~/.verdant/config.yaml``; command-line options override all of them.
    """

    model_config = SettingsConfigDict(
        env_prefix="VERDANT_",
        env_file=".env",
        extra="ignore",
    )

    output: str = "compressed"
    level: CompressionLevel = CompressionLevel.MEDIUM
    model: str = "claude"
    format: str = "md"
    max_lines: int = Field(default=800, ge=1)
    chronological: bool = True
    remove_emojis: bool = True
    ai_mode: bool = False
    color: bool = True
    log_file: Path | None = None

    @classmethod
    def load_from_file(cls, config_path: Path | None = None) -> "CLIConfig":
        """Load configuration from a YAML file, falling back to defaults."""
        import yaml

        if config_path is None:
            config_path = Path.home() / ".verdant" / "config.yaml"

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}
            return cls(**config_data)
        except (OSError, yaml.YAMLError, ValueError):
            # If config file is invalid, return default config
            return cls()


__all__ = [
    "CompressionLevel",
    "TargetModel",
    "OutputFormat",
    "CompressionConfig",
    "CLIConfig",
]
