"""audiolex Configuration.

Includes:
- EngineSettings: Engine and command line settings with environment variable support

Environment Variables:
    AUDIOLEX_MAX_INPUT_LENGTH: Characters analysed before input is truncated
    AUDIOLEX_DEBUG: Enable DEBUG logging in the command line front end
    AUDIOLEX_OUTPUT_FORMAT: Default command line output ("table" or "json")
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Engine configuration with environment variable support.

    Configuration is loaded from environment variables with AUDIOLEX_ prefix.
    For example, AUDIOLEX_MAX_INPUT_LENGTH sets max_input_length.

    Scoring weights and thresholds are not configurable.

    Precedence (highest to lowest):
        1. Environment variables (AUDIOLEX_*)
        2. Config file (.audiolex/config.yaml)
        3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="AUDIOLEX_",
        extra="ignore",
    )

    max_input_length: int = Field(default=50_000, gt=0)
    debug: bool = False
    output_format: Literal["table", "json"] = "table"

    @classmethod
    def load(cls, path: Path) -> "EngineSettings":
        """Load settings from .audiolex/config.yaml if it exists.

        Values already set through the environment are not overridden.

        Args:
            path: Directory holding the .audiolex folder

        Returns:
            EngineSettings with file values applied (or defaults if no file exists)
        """
        from ruamel.yaml import YAML

        config_file = path / ".audiolex" / "config.yaml"
        if not config_file.exists():
            return cls()

        yaml = YAML(typ="safe")
        with config_file.open() as f:
            data = yaml.load(f) or {}

        # Fields already set from the environment keep their values
        from_env = cls().model_fields_set
        file_values = {
            key: value
            for key, value in dict(data).items()
            if key in cls.model_fields and key not in from_env
        }
        return cls(**file_values)

    def save(self, path: Path) -> None:
        """Save settings to .audiolex/config.yaml under path."""
        from ruamel.yaml import YAML

        config_dir = path / ".audiolex"
        config_dir.mkdir(parents=True, exist_ok=True)
        config_file = config_dir / "config.yaml"

        yaml = YAML()
        yaml.default_flow_style = False

        with config_file.open("w") as f:
            yaml.dump(self.model_dump(), f)


__all__ = ["EngineSettings"]
