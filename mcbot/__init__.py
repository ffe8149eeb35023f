"""Minecraft server status command for Discord."""
