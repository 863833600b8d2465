# bounce_shared/errors.py


class ConfigError(ValueError):
    """Screen geometry or tuning values that cannot produce a playable field."""
