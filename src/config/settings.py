"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use SCRIPTLET_ prefix (e.g., SCRIPTLET_SKIP_MALFORMED=false).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use SCRIPTLET_ prefix.

    Examples:
        SCRIPTLET_ENGINE_NAME=corelibs
        SCRIPTLET_ENGINE_VERSION=2.1.0
        SCRIPTLET_SKIP_MALFORMED=false
    """

    model_config = SettingsConfigDict(
        env_prefix="SCRIPTLET_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Rule syntax configuration
    scriptlet_marker: str = Field(
        default="//scriptlet",
        description="Marker preceding the directive text in a scriptlet rule",
    )

    script_rule_mask: str = Field(
        default="#%#",
        description="Separator between the domain prefix and the body of a script rule",
    )

    script_exception_mask: str = Field(
        default="#@%#",
        description="Separator of a whitelist (exception) script rule",
    )

    comment_prefix: str = Field(
        default="!",
        description="Lines of a filter list starting with this prefix are comments",
    )

    # Engine identification merged into scriptlet parameters
    engine_name: str = Field(
        default="extension",
        description="Engine identifier passed along with parsed scriptlet parameters",
    )

    engine_version: str = Field(
        default="1.0.0",
        description="Engine version passed along with parsed scriptlet parameters",
    )

    # Loading configuration
    skip_malformed: bool = Field(
        default=True,
        description="Skip malformed scriptlet rules instead of aborting the whole list",
    )

    debug_mode: bool = Field(
        default=False,
        description="Enable debug output during loading",
    )

    def mask_select(self, whitelist: bool) -> str:
        """
        Return the rule mask separating domains from the rule body.

        Args:
            whitelist: True for exception rules

        Returns:
            Exception mask for whitelist rules, script mask otherwise

        Example:
            >>> settings = AppSettings()
            >>> settings.mask_select(True)
            '#@%#'
        """
        return self.script_exception_mask if whitelist else self.script_rule_mask


# Singleton instance - import this in your code
appsettings = AppSettings()
