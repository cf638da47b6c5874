"""Runtime configuration for the Testable reporting client."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven settings, read once when the reporter is built.

    Every value is optional: a missing result file switches reporting to the
    console and a missing region disables name prefixing.
    """

    model_config = SettingsConfigDict(
        env_prefix="TESTABLE_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    result_file: str | None = None
    region_name: str | None = None
    global_client_index: str | None = None
    iteration: str | None = None
    smoke_test: bool = False
    log_level: str = "WARNING"
    output_dir: str | None = Field(
        default=None,
        validation_alias=AliasChoices("OUTPUT_DIR", "output_dir"),
        description="Directory where test artifacts should be written.",
    )
    proxy_autoconfig_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("PROXY_AUTOCONFIG_URL", "proxy_autoconfig_url"),
        description="PAC URL that browser drivers should route through.",
    )


def load_settings() -> Settings:
    return Settings()
