"""
Configuration management for Instamojo SDK.

This module provides InstamojoSettings class that handles all SDK configuration
with support for environment variables, .env files, and sensible defaults.

Environment variables are automatically loaded with INSTAMOJO_ prefix.
Example: INSTAMOJO_APP_ID=your_app_id
"""

from pydantic import Field
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class InstamojoSettings(BaseSettings):
    """
    Configuration settings for Instamojo SDK with environment variable support.

    This class automatically loads configuration from:
    - Environment variables (with INSTAMOJO_ prefix)
    - .env files
    - Default values for optional settings

    Credentials (token, username, password) are deliberately not part of the
    settings; they are passed per run to :class:`instamojo_sdk.auth.Session`.

    Example:
        # From environment
        export INSTAMOJO_APP_ID=your_app_id
        export INSTAMOJO_TIMEOUT=10.0

        # In code
        settings = InstamojoSettings()
    """

    app_id: str | None = Field(default=None, description="Application identifier")
    base_url: str = "https://www.instamojo.com/api/"
    api_version: str = "1"
    timeout: float = 30.0
    transport: str = "httpx"  # default, can be 'aiohttp' or 'requests'

    model_config = SettingsConfigDict(
        env_prefix="INSTAMOJO_", env_file=".env", extra="ignore"
    )
