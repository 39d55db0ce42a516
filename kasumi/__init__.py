"""Minecraft: Java Edition protocol building blocks and a per-client connection loop."""

__version__ = "0.1.0"