"""Configuration and intent routing."""
