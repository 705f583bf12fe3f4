"""Modrinth Mod Porter: install the Modrinth builds of a folder of Minecraft mods for another game version."""

__version__ = "1.0.0"
