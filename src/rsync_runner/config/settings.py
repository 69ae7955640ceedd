"""Configuration settings and models for the rsync runner."""

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ..errors import ConfigurationError

# Positional argument layout
MIN_NUMBER_OF_ARGS = 5
MAX_NUMBER_OF_ARGS = 7

# Data unit conversions
BYTES_IN_KB = 1024
KB_IN_MB = BYTES_IN_KB

DEFAULT_THRESHOLD_KB = 4 * KB_IN_MB


def _format_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic error into a single readable line."""
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get('loc', ())) or "settings"
        messages.append(f"{location}: {item.get('msg')}")
    return "; ".join(messages)


class InvocationSettings(BaseModel):
    """Everything one run needs, taken from the command line."""
    model_config = ConfigDict(frozen=True)

    sync_from_path: str
    tool_executable_path: str
    tool_flags: str
    from_path: str
    to_path: str
    tool_log_path: Optional[str] = None
    clean_log_path: Optional[str] = None

    @field_validator('sync_from_path', 'tool_executable_path', 'from_path', 'to_path')
    @classmethod
    def validate_required_path(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('must not be empty')
        return v

    @field_validator('tool_log_path', 'clean_log_path')
    @classmethod
    def validate_optional_path(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError('must not be empty when given')
        return v

    @model_validator(mode='after')
    def validate_log_pair(self) -> "InvocationSettings":
        if (self.tool_log_path is None) != (self.clean_log_path is None):
            raise ValueError('tool log path and clean log path must be given together')
        return self

    @property
    def reconcile_logs(self) -> bool:
        """True when both log paths were supplied."""
        return self.tool_log_path is not None and self.clean_log_path is not None

    @classmethod
    def from_args(cls, args: Sequence[str]) -> "InvocationSettings":
        """Build settings from positional arguments in their fixed order.

        Args:
            args: sync from path, tool exe, tool flags, from path, to path,
                and optionally tool log path and clean log path

        Returns:
            Validated settings

        Raises:
            ConfigurationError: If the argument count or any value is invalid
        """
        count = len(args)
        if count < MIN_NUMBER_OF_ARGS:
            raise ConfigurationError(
                f"Expected at least {MIN_NUMBER_OF_ARGS} arguments, got {count}"
            )
        if count == MIN_NUMBER_OF_ARGS + 1:
            raise ConfigurationError(
                "The tool log path and the clean log path must both be given"
            )
        if count > MAX_NUMBER_OF_ARGS:
            raise ConfigurationError(
                f"Expected at most {MAX_NUMBER_OF_ARGS} arguments, got {count}"
            )

        values = list(args) + [None] * (MAX_NUMBER_OF_ARGS - count)
        try:
            return cls(
                sync_from_path=values[0],
                tool_executable_path=values[1],
                tool_flags=values[2],
                from_path=values[3],
                to_path=values[4],
                tool_log_path=values[5],
                clean_log_path=values[6],
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid arguments: {_format_validation_error(e)}") from e

    def describe(self) -> Dict[str, Optional[str]]:
        """Field names and values, in argument order."""
        return {
            'Sync from path': self.sync_from_path,
            'Tool executable': self.tool_executable_path,
            'Tool flags': self.tool_flags,
            'Tool from path': self.from_path,
            'Tool to path': self.to_path,
            'Tool log path': self.tool_log_path,
            'Clean log path': self.clean_log_path,
        }


class RunnerOptions(BaseModel):
    """Tunables that are not part of the positional arguments."""
    threshold_kb: int = Field(default=DEFAULT_THRESHOLD_KB, ge=0)
    log_settle_seconds: float = Field(default=3.0, ge=0)
    deletion_marker: str = "deleting"
    excluded_suffixes: List[str] = Field(default_factory=lambda: [".ini"])
    excluded_names: List[str] = Field(default_factory=lambda: ["Thumbs.db"])
    pause_on_error: bool = True
    window_width: int = Field(default=110, ge=1)
    window_height: int = Field(default=30, ge=1)

    @field_validator('deletion_marker')
    @classmethod
    def validate_deletion_marker(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('deletion_marker must not be empty')
        return v.lower()

    @classmethod
    def from_yaml(cls, config_path: Union[str, Path]) -> "RunnerOptions":
        """Load options from YAML file."""
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            try:
                config_data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Could not parse {config_path}: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"{config_path} must contain a mapping of options")

        try:
            return cls(**config_data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid options in {config_path}: {_format_validation_error(e)}"
            ) from e

    def to_yaml(self, config_path: Union[str, Path]) -> None:
        """Save options to YAML file."""
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False, indent=2)
