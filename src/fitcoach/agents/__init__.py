"""AI generation: provider, prompts and bounded-retry orchestration."""

from .orchestrator import GenerationOrchestrator, GenerationPolicy, GenerationState
from .provider import AnthropicProvider, GenerationPrompt, GenerationProvider

__all__ = [
    "AnthropicProvider",
    "GenerationOrchestrator",
    "GenerationPolicy",
    "GenerationPrompt",
    "GenerationProvider",
    "GenerationState",
]
