"""Configuration module — exports Settings."""

from akashic.config.settings import Settings

__all__ = ["Settings"]
