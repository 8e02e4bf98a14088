"""Configuration, SDK tuning and logging setup."""
