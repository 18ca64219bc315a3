"""Decoder configuration for the Minol receiver.

The values here describe how the host capture pipeline has to demodulate
the radio before handing rows to the decoder (FSK PCM at 868.3 MHz with a
30.52 µs bit period). Frame recovery itself does not read them.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .frame import DecodedRecord

RECORD_FIELDS = tuple(DecodedRecord.model_fields)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class DecoderConfig(BaseModel):
    """Registration parameters of the Minol decoder.

    Pulse widths and the reset limit are in microseconds, as the host
    demodulator expects them.
    """

    model_config = ConfigDict(extra="allow", validate_assignment=True)

    name: str = Field("Minol", min_length=1, description="Decoder name")
    modulation: Literal["FSK_PCM"] = Field(
        "FSK_PCM", description="Modulation expected from the demodulator"
    )
    frequency: float = Field(868.3e6, gt=0, description="Carrier frequency in Hz")
    short_width: float = Field(30.52, gt=0, description="Short pulse width in us")
    long_width: float = Field(30.52, gt=0, description="Long pulse width in us")
    reset_limit: float = Field(1000, gt=0, description="Gap ending a row in us")
    output_fields: List[str] = Field(
        default_factory=lambda: ["model", "raw", "mic"],
        description="Fields of every emitted record, in output order",
    )
    log_level: Optional[LogLevel] = Field(
        None, description="Package log level applied when a decoder is built"
    )

    extra: Dict[str, Any] = Field(
        default_factory=dict, description="Custom user-defined parameters"
    )

    @field_validator("output_fields")
    @classmethod
    def validate_output_fields(cls, v: List[str]) -> List[str]:
        if len(set(v)) != len(v):
            raise ValueError(f"Duplicate output fields: {v}")
        unknown = [name for name in v if name not in RECORD_FIELDS]
        if unknown:
            raise ValueError(
                f"Unknown output fields: {unknown}. Valid: {list(RECORD_FIELDS)}"
            )
        return v

    @property
    def bit_rate(self) -> float:
        """Bit rate in Hz implied by the PCM short pulse width."""
        return 1e6 / self.short_width

    @classmethod
    def from_yaml(cls, path: str) -> "DecoderConfig":
        """Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            DecoderConfig instance
        """
        import yaml

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        extra = data.pop("extra", {})
        config = cls(**data)
        config.extra.update(extra)
        return config

    def to_yaml(self, path: str):
        """Save configuration to YAML file.

        Args:
            path: Path where YAML file will be saved
        """
        import yaml

        data = self.model_dump()

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a parameter value, checking extra dict if not in main fields."""
        if hasattr(self, key):
            return getattr(self, key)
        return self.extra.get(key, default)

    def set(self, key: str, value: Any):
        """Set a parameter value, using extra dict for custom parameters."""
        if hasattr(self, key):
            setattr(self, key, value)
        else:
            self.extra[key] = value


# ============================================================================
# Global Configuration Context
# ============================================================================

_global_config: Optional[DecoderConfig] = None


def set_config(config: DecoderConfig):
    """Set the global decoder configuration.

    Args:
        config: DecoderConfig instance to use globally
    """
    global _global_config
    _global_config = config


def get_config() -> Optional[DecoderConfig]:
    """Get the current global decoder configuration, or None if not set."""
    return _global_config


def clear_config():
    """Clear the global configuration."""
    global _global_config
    _global_config = None


def require_config() -> DecoderConfig:
    """Get the current config, raising an error if not set.

    Returns:
        Current DecoderConfig instance

    Raises:
        RuntimeError: If no config is currently set
    """
    config = get_config()
    if config is None:
        raise RuntimeError(
            "No decoder configuration is set. Please call set_config(config) first."
        )
    return config
