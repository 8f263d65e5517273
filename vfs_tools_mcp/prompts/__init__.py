"""Aggregates the prompts the server exposes to agents."""

from .system import get_prompts as get_system_prompts


def get_all_prompts() -> dict[str, str]:
    """
    Returns a dictionary of all available prompts from all prompt files.
    """
    prompts = {}
    prompts.update(get_system_prompts())
    return prompts


def get_generation_prompt() -> str:
    """The full system prompt for a code generation turn."""
    return get_all_prompts()["generation"]
