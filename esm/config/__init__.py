from .store import DEFAULT_REGISTRY, Config, ConfigStore

__all__ = ['DEFAULT_REGISTRY', 'Config', 'ConfigStore']
