"""
Centralized application configuration
"""
import json
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Storefront API settings, read from the environment and .env"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # API Settings
    API_TITLE: str = "Aspire Manifest API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Storefront backend for Aspire Manifest"
    LOG_LEVEL: str = "INFO"

    # CORS - Can be string (comma-separated) or JSON array
    # Example: "http://localhost:5173,https://aspiremanifest.com" or '["http://localhost:5173"]'
    ALLOWED_ORIGINS: Optional[str] = "http://localhost:5173,http://localhost:8080"

    # Supabase
    SUPABASE_URL: str = ""
    SUPABASE_SERVICE_ROLE_KEY: str = ""
    SUPABASE_JWT_SECRET: str = ""

    # Employee access
    EMPLOYEE_ACCESS_PASSWORD: str = ""
    EMPLOYEE_TOKEN_SECRET: str = ""
    EMPLOYEE_TOKEN_TTL_HOURS: int = 24

    # Shopify Storefront API
    SHOPIFY_STORE_DOMAIN: str = ""
    SHOPIFY_STOREFRONT_TOKEN: str = ""
    SHOPIFY_API_VERSION: str = "2025-07"

    # Email (Resend)
    RESEND_API_KEY: str = ""
    EMAIL_FROM: str = "Aspire Manifest <noreply@aspiremanifest.com>"
    SUPPORT_EMAIL: str = "support@aspiremanifest.com"

    # AI recommendations
    ANTHROPIC_API_KEY: str = ""
    CLAUDE_MODEL: str = "claude-haiku-4-5-20251001"

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        if not self.ALLOWED_ORIGINS:
            return ["http://localhost:5173"]

        # Try JSON parse first (for array format)
        try:
            origins = json.loads(self.ALLOWED_ORIGINS)
            if isinstance(origins, list):
                return origins
        except (json.JSONDecodeError, ValueError):
            pass

        # Fall back to comma-separated string
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    def get_token_secret(self) -> str:
        """HMAC secret for employee tokens, falling back to the service role key"""
        return self.EMPLOYEE_TOKEN_SECRET or self.SUPABASE_SERVICE_ROLE_KEY


settings = Settings()
