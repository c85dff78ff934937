"""
Application settings, read from the environment and .env
"""
from pydantic_settings import BaseSettings
from typing import List, Literal, Optional


class Settings(BaseSettings):
    """Kisan API settings"""

    # API Settings
    API_TITLE: str = "Kisan API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Marketplace API connecting purchasers, vendors and admin"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Backend-as-a-service (Supabase)
    SUPABASE_URL: str = ""
    SUPABASE_ANON_KEY: str = ""
    SUPABASE_SERVICE_ROLE_KEY: str = ""

    # Image hosting (Cloudinary unsigned uploads)
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_UPLOAD_PRESET: str = ""
    PLACEHOLDER_IMAGE: str = "assets/placeholder.png"

    # Auth
    AUTH_SECRET: str = ""
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    ADMIN_EMAIL: str = ""
    ADMIN_PASSWORD: str = ""

    # Order workflow
    # "strict" enforces the fulfillment transition table, "permissive" accepts any label
    ORDER_STATUS_POLICY: Literal["strict", "permissive"] = "strict"
    IDEMPOTENCY_TTL_SECONDS: int = 600
    LOGIN_RATE_LIMIT: int = 10

    # Vendor console
    SESSION_FILE: str = "~/.kisan/vendor_session.json"

    # CORS - Can be string (comma-separated) or JSON array
    # Example: "http://localhost:8081,https://yourdomain.com" or '["http://localhost:8081"]'
    ALLOWED_ORIGINS: Optional[str] = "http://localhost:8081,http://localhost:19006"

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        if not self.ALLOWED_ORIGINS:
            return ["http://localhost:8081"]

        # Try JSON parse first (for array format)
        import json
        try:
            origins = json.loads(self.ALLOWED_ORIGINS)
            if isinstance(origins, list):
                return origins
        except (json.JSONDecodeError, ValueError):
            pass

        # Fall back to comma-separated string
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
