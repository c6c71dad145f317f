"""
Application settings loaded from environment variables.
"""

from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Server ───────────────────────────────────────────────────────────
    planp_env: str = "development"
    planp_host: str = "0.0.0.0"
    planp_port: int = 8080
    planp_allowed_origins: List[str] = ["http://localhost:3000"]
    debug: bool = False

    app_name: str = "PlanP Backend"
    app_version: str = "1.0.0"

    # ── Database ─────────────────────────────────────────────────────────
    database_url: Optional[str] = None   # full SQLAlchemy URL, overrides MYSQL_*
    mysql_host: str = "localhost"
    mysql_port: int = 3306
    mysql_database: str = "planp_db"
    mysql_username: str = "root"
    mysql_password: str = ""
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_pool_recycle: int = 3600

    # ── Security ─────────────────────────────────────────────────────────
    jwt_secret_key: str = "planp-secret-key-change-in-production"
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "planp-backend"
    access_token_expiry_seconds: int = 3600          # 1 hour
    refresh_token_expiry_seconds: int = 604800       # 7 days
    bcrypt_rounds: int = 12
    min_password_strength: int = 40

    # ── Google OAuth ─────────────────────────────────────────────────────
    google_userinfo_url: str = "https://www.googleapis.com/oauth2/v2/userinfo"
    google_timeout_seconds: float = 10.0

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def sqlalchemy_url(self) -> str:
        """
        Return the async SQLAlchemy URL.

        ``DATABASE_URL`` wins when set; otherwise the MySQL parts are
        assembled into an ``aiomysql`` URL.
        """
        if self.database_url:
            return self.database_url
        auth = self.mysql_username
        if self.mysql_password:
            auth = f"{auth}:{self.mysql_password}"
        return (
            f"mysql+aiomysql://{auth}@{self.mysql_host}:{self.mysql_port}"
            f"/{self.mysql_database}?charset=utf8mb4"
        )

    @property
    def is_production(self) -> bool:
        return self.planp_env.lower() == "production"


config = Settings()
