from .normalize import extract_values, group_series, to_utc_millis

__all__ = ["extract_values", "group_series", "to_utc_millis"]
