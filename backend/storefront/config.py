import os
from dotenv import load_dotenv

load_dotenv()


def env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Reject settings that do not match their section schema on save
    STOREFRONT_VALIDATE_SETTINGS = env_flag("STOREFRONT_VALIDATE_SETTINGS", True)

    # Open editor sessions are dropped after this much inactivity
    EDITOR_SESSION_IDLE_MINUTES = int(os.getenv("EDITOR_SESSION_IDLE_MINUTES", "120"))
    # Oldest idle session of a merchant is dropped when opening one more
    EDITOR_MAX_SESSIONS_PER_MERCHANT = int(os.getenv("EDITOR_MAX_SESSIONS_PER_MERCHANT", "20"))

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///storefront-dev.db")

class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "test-secret"
    JWT_SECRET_KEY = "test-jwt-secret-with-enough-length-for-hs256"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    STOREFRONT_VALIDATE_SETTINGS = True

class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")

config_by_name = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig
}
