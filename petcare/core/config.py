import os

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuration class for environment variables and service settings.
    """

    # Service settings
    service_name: str = os.getenv("SERVICE_NAME", "petcare_adoption")
    environment: str = os.getenv("ENVIRONMENT", "development")
    debug: bool = os.getenv("DEBUG", "True").lower() == "true"

    # Logging settings
    log_level: str = os.getenv("LOG_LEVEL", "DEBUG")
    json_logs: bool = os.getenv("JSON_LOGS", "True").lower() == "true"

    # MongoDB settings
    mongodb: str = os.getenv("MONGODB", "mongodb://localhost:27017")
    mongodb_database: str = os.getenv("MONGODB_DATABASE", "petcare")
    pets_collection: str = os.getenv("PETS_COLLECTION", "pets")
    adoptions_collection: str = os.getenv("ADOPTIONS_COLLECTION", "adoptions")

    # MongoDB connection pool settings
    mongo_max_pool_size: int = int(os.getenv("MONGO_MAX_POOL_SIZE", "100"))
    mongo_min_pool_size: int = int(os.getenv("MONGO_MIN_POOL_SIZE", "0"))
    mongo_max_idle_time_ms: int = int(os.getenv("MONGO_MAX_IDLE_TIME_MS", "30000"))
    mongo_connect_timeout_ms: int = int(os.getenv("MONGO_CONNECT_TIMEOUT_MS", "5000"))
    mongo_server_selection_timeout_ms: int = int(
        os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "5000")
    )
    mongo_socket_timeout_ms: int = int(os.getenv("MONGO_SOCKET_TIMEOUT_MS", "30000"))

    # HTTP settings
    api_prefix: str = os.getenv("API_PREFIX", "/api")
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Authentication settings
    secret_key: str = os.getenv("SECRET_KEY", "your-secret-key-here")
    algorithm: str = os.getenv("ALGORITHM", "HS256")

    @property
    def cors_origin_list(self) -> list[str]:
        """
        Returns the allowed CORS origins.
        Format: CORS_ORIGINS=http://localhost:5173,https://petcare.example.com
        """
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Environment-specific logging configuration
    @property
    def logging_config(self) -> dict:
        """
        Returns logging configuration based on environment.
        """
        base_config = {
            "app_name": self.service_name,
            "log_level": self.log_level,
            "json_logs": self.json_logs,
        }

        if self.environment == "development":
            base_config.update({"json_logs": False, "log_level": "DEBUG" if self.debug else "INFO"})

        return base_config

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
