from .settings import Settings, SlackSettings, StoreSettings, LLMSettings, get_settings

__all__ = ["Settings", "SlackSettings", "StoreSettings", "LLMSettings", "get_settings"]
