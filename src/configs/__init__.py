from .configs_loader import FriendlyLogConfig, JsonLogConfig, configs

__all__ = [
    "configs",
    "FriendlyLogConfig",
    "JsonLogConfig",
]
