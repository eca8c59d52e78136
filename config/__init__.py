import os


def get_settings_module() -> str:
    # APP_ENV (or NODE_ENV for older deployments) picks the settings; default is development.
    env = (os.getenv("APP_ENV") or os.getenv("NODE_ENV") or "development").lower()

    # Production uses the real database
    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    # Anything else falls back to the development (test data) database
    return "config.development"
