"""Configuration models."""

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    DotEnvSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from xmldupes.config.exceptions import InvalidConfigurationError, MissingConfigurationError
from xmldupes.scanner.rules import DEFAULT_CLASS_THRESHOLDS, DEFAULT_THRESHOLD, ThresholdRules

ENV_FILES = [".env.xmldupes", ".env"]


class XmlDupesConfig(BaseSettings):
    """Configuration for xmldupes application."""

    # Document layout
    view_object_tag: str = Field(
        default="ViewObject",
        description="Tag name of the elements whose ids are tallied",
    )
    property_tag: str = Field(
        default="PROPERTY",
        description="Tag name of the property elements nested in a view object",
    )
    id_property: str = Field(
        default="ObjectId",
        description="Value of the property 'name' attribute that holds the id",
    )
    classname_attribute: str = Field(
        default="classname",
        description="Attribute of the view object holding its class name",
    )

    # Reporting thresholds
    default_threshold: int = Field(
        default=DEFAULT_THRESHOLD,
        description="An id is reported when its count exceeds this value",
    )
    class_thresholds: dict[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_CLASS_THRESHOLDS),
        description="Per-class threshold overrides (JSON object in env)",
    )

    # Input handling
    require_xml_extension: bool = Field(
        default=True,
        description="Reject input files that do not end with .xml",
    )

    model_config = SettingsConfigDict(
        env_file=ENV_FILES,
        env_file_encoding="utf-8",
        env_prefix="XMLDUPES_",
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(
        self,
        _env_file: str | Path | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize configuration.

        Args:
            _env_file: Optional path to custom env file (use env_file for public API)
            **kwargs: Additional configuration values

        Raises:
            MissingConfigurationError: If a custom env file is given but does not exist
        """
        env_file = kwargs.pop("env_file", _env_file)

        if env_file is not None:
            env_path = Path(env_file)
            if not env_path.exists():
                raise MissingConfigurationError(f"Environment file not found: {env_file}")
            kwargs["_custom_env_file"] = env_path

        super().__init__(**kwargs)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Use the custom env file, when one was passed, instead of the default dotenv files.

        Args:
            settings_cls: The settings class being instantiated
            init_settings: Settings from __init__ arguments
            env_settings: Settings from environment variables
            dotenv_settings: Settings from .env files
            file_secret_settings: Settings from secret files

        Returns:
            Tuple of settings sources in priority order
        """
        # init_kwargs exists at runtime but is missing from the type stubs
        init_kwargs = init_settings.init_kwargs  # type: ignore[attr-defined]
        custom_env_path = init_kwargs.get("_custom_env_file")

        if custom_env_path is not None:
            custom_dotenv = DotEnvSettingsSource(
                settings_cls,
                env_file=custom_env_path,
                env_file_encoding="utf-8",
            )
            return (init_settings, custom_dotenv, env_settings, file_secret_settings)

        return (init_settings, env_settings, dotenv_settings, file_secret_settings)

    @field_validator("view_object_tag", "property_tag", "id_property", "classname_attribute")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject blank tag and attribute names.

        Args:
            v: Name value

        Returns:
            Name with surrounding whitespace removed

        Raises:
            InvalidConfigurationError: If the name is empty
        """
        v = v.strip()
        if not v:
            raise InvalidConfigurationError("Tag and attribute names must not be empty")
        return v

    @field_validator("default_threshold")
    @classmethod
    def validate_default_threshold(cls, v: int) -> int:
        """Ensure the default threshold is not negative."""
        if v < 0:
            raise InvalidConfigurationError(f"default_threshold must be >= 0, got {v}")
        return v

    @field_validator("class_thresholds")
    @classmethod
    def validate_class_thresholds(cls, v: dict[str, int]) -> dict[str, int]:
        """Ensure every per-class threshold is not negative."""
        negative = {name: value for name, value in v.items() if value < 0}
        if negative:
            raise InvalidConfigurationError(f"class_thresholds must be >= 0, got {negative}")
        return v

    @property
    def threshold_rules(self) -> ThresholdRules:
        """Build the reporting rules from the configured thresholds.

        Returns:
            ThresholdRules instance
        """
        return ThresholdRules(default=self.default_threshold, overrides=self.class_thresholds)

    @staticmethod
    def find_env_file() -> Path | None:
        """Find the environment file being used.

        Checks for .env.xmldupes and .env in current directory in that order.

        Returns:
            Path to the env file if found, None otherwise
        """
        for env_file in ENV_FILES:
            path = Path(env_file)
            if path.exists():
                return path.absolute()
        return None
