"""Configuration, logging and manifest helpers."""
