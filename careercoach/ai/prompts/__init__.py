"""Prompt text for the AI agents."""
