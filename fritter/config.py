from pydantic_settings import BaseSettings, SettingsConfigDict
from urllib.parse import quote_plus
from typing import Optional

class Settings(BaseSettings):
    MONGO_URL: str = "mongodb://localhost:27017"
    MONGO_USERNAME: Optional[str] = None
    MONGO_PASSWORD: Optional[str] = None
    MONGO_CLUSTER: Optional[str] = None
    MONGO_DB_NAME: str = "fritter"
    SESSION_SECRET_KEY: str = "change-me"
    SESSION_COOKIE_NAME: str = "fritter_session"
    SESSION_MAX_AGE: int = 60 * 60 * 24 * 7
    SESSION_COOKIE_SECURE: bool = False
    LOG_LEVEL: str = "INFO"

    # Atlas credentials win over the plain URL when all three are set
    @property
    def MONGO_URI(self) -> str:
        if not (self.MONGO_USERNAME and self.MONGO_PASSWORD and self.MONGO_CLUSTER):
            return self.MONGO_URL
        escaped_username = quote_plus(self.MONGO_USERNAME)
        escaped_password = quote_plus(self.MONGO_PASSWORD)
        return (
            f"mongodb+srv://{escaped_username}:{escaped_password}@{self.MONGO_CLUSTER}.mongodb.net/?retryWrites=true&w=majority&appName={self.MONGO_CLUSTER}"
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

# Instantiate the Config object
Config = Settings()
