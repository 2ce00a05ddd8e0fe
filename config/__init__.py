import os


def get_settings_module() -> str:
    # APP_ENV selects the settings module, default is development
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def split_list(value: str) -> tuple:
    """'Level 3, Level 4,,Xcel Gold' -> ('Level 3', 'Level 4', 'Xcel Gold')"""
    return tuple(p.strip() for p in (value or "").split(",") if p.strip())
