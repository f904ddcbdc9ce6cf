from .settings import Settings, EngineLimits, get_settings, get_engine_limits

__all__ = ["Settings", "EngineLimits", "get_settings", "get_engine_limits"]
