"""Prompt templates for mcp-toolkit-server."""

from toolkit_mcp.prompts.templates import generate_prompt_messages, register_toolkit_prompts

__all__ = ["generate_prompt_messages", "register_toolkit_prompts"]
