import os
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "sqlite:///./smart_account.db"
    )

    # Identities (20-byte addresses, hex)
    ACCOUNT_ADDRESS: str = "0x00000000000000000000000000000000000A11CE"
    OPERATOR_ADDRESS: str = "0x0000000000000000000000000000000000000B0B"
    OWNER_ADDRESS: str = "0x0000000000000000000000000000000000000CA7"

    # Relay bearer tokens
    RELAY_TOKEN_SECRET: str = "change-me"
    RELAY_TOKEN_ISSUER: str = ""
    RELAY_TOKEN_LEEWAY_SECONDS: int = 0
    RELAY_TOKEN_MAX_TTL_SECONDS: int = 3600

    API_HOST: str = "127.0.0.1"
    API_PORT: int = 8000
    LOG_LEVEL: str = "INFO"


settings = Settings()
