"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use ALLMANIZE_ prefix (e.g., ALLMANIZE_INDENT_UNIT="  ").

Settings can also be loaded from a .env file in the working directory.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use ALLMANIZE_ prefix.

    Examples:
        ALLMANIZE_INDENT_UNIT="\t"
        ALLMANIZE_TEMPLATE_GLOB="**/*.component.html"
        ALLMANIZE_DEBUG_MODE=true
    """

    model_config = SettingsConfigDict(
        env_prefix="ALLMANIZE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Engine configuration
    indent_unit: str = Field(
        default="    ",
        description="Whitespace added once per open directive block",
    )

    # File selection
    template_glob: str = Field(
        default="**/*.html",
        description="Glob (relative to inputdir) selecting template files to reformat",
    )

    file_encoding: str = Field(
        default="utf-8",
        description="Encoding used to read and write template files",
    )

    debug_mode: bool = Field(
        default=False,
        description="Force trace-level output regardless of -v count",
    )

    @field_validator("indent_unit")
    @classmethod
    def indentUnit_check(cls, value: str) -> str:
        if not value or value.strip():
            raise ValueError("indent_unit must be a non-empty whitespace string")
        return value

    def indent_unitWidth(self) -> int:
        """
        Width of one indentation unit, in characters.

        Example:
            >>> settings = AppSettings()
            >>> settings.indent_unitWidth()
            4
        """
        return len(self.indent_unit)


# Singleton instance - import this in your code
appsettings = AppSettings()
