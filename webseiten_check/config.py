"""
Centralized configuration for Webseiten-Check
All environment variables and settings are defined here
"""

from functools import lru_cache
from typing import Optional, Tuple
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Provides centralized configuration with validation and defaults.
    """

    # ======================
    # API Configuration
    # ======================
    ANTHROPIC_API_KEY: str = Field(default="", description="Anthropic API key")
    ANTHROPIC_MODEL: str = Field(
        default="claude-sonnet-4-20250514",
        description="Claude model to use for scoring"
    )
    MAX_TOKENS: int = Field(default=2000, description="Max tokens for Claude response")
    SCORING_TIMEOUT: float = Field(
        default=60.0,
        description="Timeout in seconds for a single scoring call"
    )

    # ======================
    # Lead Capture Configuration
    # ======================
    LEAD_WEBHOOK_URL: Optional[str] = Field(
        default=None,
        description="Spreadsheet webhook receiving captured leads (logged only if unset)"
    )
    LEAD_WEBHOOK_TIMEOUT: float = Field(
        default=10.0,
        description="Timeout in seconds for the lead webhook call"
    )

    # ======================
    # Browser Configuration
    # ======================
    BROWSER_PROFILE: str = Field(
        default="auto",
        description="Browser acquisition profile: auto, local or serverless"
    )
    VERCEL: Optional[str] = Field(default=None, description="Set by the Vercel runtime")
    AWS_LAMBDA_FUNCTION_VERSION: Optional[str] = Field(
        default=None,
        description="Set by the AWS Lambda runtime"
    )
    CHROMIUM_EXECUTABLE_PATH: Optional[str] = Field(
        default=None,
        description="Path to a trimmed Chromium binary for the serverless profile"
    )
    CHROMIUM_PACK_URL: Optional[str] = Field(
        default=None,
        description="Remote tarball with a trimmed Chromium binary (serverless profile)"
    )
    BROWSER_LAUNCH_TIMEOUT: int = Field(
        default=15,
        description="Timeout for launching browser in seconds"
    )
    NAVIGATION_TIMEOUT: int = Field(
        default=20,
        description="Timeout for page navigation in seconds"
    )

    # ======================
    # Capture Configuration
    # ======================
    VIEWPORT_WIDTH: int = Field(default=1280, description="Browser viewport width")
    VIEWPORT_HEIGHT: int = Field(default=1200, description="Browser viewport height")
    MAX_SCREENSHOT_DIMENSION: int = Field(
        default=7500,
        description="Maximum screenshot dimension in pixels"
    )
    MAX_PAGE_TEXT_CHARS: int = Field(
        default=5000,
        description="Page text sent to the model is truncated to this length"
    )

    # ======================
    # Text Check Configuration
    # ======================
    MIN_TEXT_WORDS: int = Field(default=20, description="Minimum words for a text check")
    MAX_TEXT_WORDS: int = Field(default=500, description="Maximum words accepted by the form")
    MAX_TEXT_INPUT_CHARS: int = Field(
        default=8000,
        description="Submitted text is truncated to this length before scoring"
    )

    # ======================
    # Report Configuration
    # ======================
    CTA_THRESHOLD_LOW: int = Field(
        default=50,
        description="Scores below this get the urgent call-to-action"
    )
    CTA_THRESHOLD_HIGH: int = Field(
        default=80,
        description="Scores at or above this get the strong call-to-action"
    )
    KI_CTA_THRESHOLD_URGENT: int = Field(
        default=6,
        description="Text check: kiScores at or above this get the urgent call-to-action"
    )
    KI_CTA_THRESHOLD_POTENTIAL: int = Field(
        default=4,
        description="Text check: kiScores at or above this get the potential call-to-action"
    )
    ACCESSIBILITY_WARNING_THRESHOLD: int = Field(
        default=70,
        description="Accessibility scores below this show the legal warning"
    )
    BOOKING_URL: str = Field(
        default="https://calendly.com/satzstrategie",
        description="Booking link used by the call-to-action blocks"
    )

    # ======================
    # Runtime Configuration
    # ======================
    ENVIRONMENT: str = Field(
        default="production",
        description="development adds stack traces to error responses"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    @property
    def is_serverless(self) -> bool:
        """True when a deployment platform marker is present"""
        return bool(self.VERCEL or self.AWS_LAMBDA_FUNCTION_VERSION)

    @property
    def browser_profile(self) -> str:
        """Resolve the browser profile, honoring platform markers for 'auto'"""
        profile = self.BROWSER_PROFILE.strip().lower()
        if profile in ("local", "serverless"):
            return profile
        return "serverless" if self.is_serverless else "local"

    @property
    def cta_thresholds(self) -> Tuple[int, int]:
        return self.CTA_THRESHOLD_LOW, self.CTA_THRESHOLD_HIGH

    @property
    def ki_cta_thresholds(self) -> Tuple[int, int]:
        return self.KI_CTA_THRESHOLD_URGENT, self.KI_CTA_THRESHOLD_POTENTIAL

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"  # Allow extra env vars in .env file


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings instance (FastAPI dependency)"""
    return Settings()
