"""YAML-backed application configuration."""
