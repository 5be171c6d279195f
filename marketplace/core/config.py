from pydantic_settings import BaseSettings
from typing import List, Union
import os
import json


class Settings(BaseSettings):
    database_url: str
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    log_level: str = "INFO"
    environment: str = "local"
    api_prefix: str = "/api"
    # CORS origins - can be JSON array or comma-separated string
    cors_origins: Union[List[str], str] = ["*"]
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_schema: str = "public"

    # Product/catalog reads are public unless switched off; writes always need a token
    public_catalog_reads: bool = True

    # Locale for user-facing error messages ("en" or "ar")
    message_locale: str = "en"

    # Request/response logging middleware
    request_logging: bool = True

    # Object storage (S3 compatible)
    aws_region: str = "us-east-1"
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    storage_bucket: str = ""
    storage_endpoint_url: str = ""
    storage_public_base_url: str = ""

    def get_cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        if isinstance(self.cors_origins, str):
            try:
                origins = json.loads(self.cors_origins)
            except (json.JSONDecodeError, ValueError):
                # Comma-separated
                origins = [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        else:
            origins = self.cors_origins

        return origins if isinstance(origins, list) else [origins]

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    class Config:
        env_file = f"config/{os.getenv('ENV', 'local')}.env"
        case_sensitive = False


settings = Settings()
