"""Generation provider protocol and the Anthropic implementation."""

import json
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from anthropic import AsyncAnthropic
from loguru import logger

from ..errors import ProviderError


@dataclass(frozen=True)
class GenerationPrompt:
    """A prompt plus the JSON schema the answer must follow."""

    system: str
    prompt: str
    schema_name: str
    schema_description: str
    schema: dict


@runtime_checkable
class GenerationProvider(Protocol):
    """Turns a prompt/schema pair into a structured document."""

    async def generate(self, prompt: GenerationPrompt) -> dict:
        """Return a document shaped like ``prompt.schema`` or raise."""
        ...


def _decode_string_fields(document: dict, schema: dict) -> dict:
    """Decode array/object properties the model returned as JSON strings."""
    properties = schema.get("properties", {})
    for key, prop in properties.items():
        value = document.get(key)
        if isinstance(value, str) and prop.get("type") in ("array", "object"):
            try:
                document[key] = json.loads(value)
            except json.JSONDecodeError:
                logger.warning("Field returned as unparseable string", field=key)
    return document


class AnthropicProvider:
    """Generates structured documents with a forced tool call.

    The SDK's own retries are disabled; the orchestrator owns the retry
    policy.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "claude-sonnet-4-5",
        max_tokens: int = 16000,
        client: AsyncAnthropic | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self._client = client

    @property
    def client(self) -> AsyncAnthropic:
        """SDK client, created on first use so a missing key only fails generation."""
        if self._client is None:
            self._client = AsyncAnthropic(api_key=self.api_key, max_retries=0)
        return self._client

    async def generate(self, prompt: GenerationPrompt) -> dict:
        response = await self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=prompt.system,
            messages=[{"role": "user", "content": prompt.prompt}],
            tools=[
                {
                    "name": prompt.schema_name,
                    "description": prompt.schema_description,
                    "input_schema": prompt.schema,
                }
            ],
            tool_choice={"type": "tool", "name": prompt.schema_name},
        )

        for block in response.content:
            if block.type == "tool_use" and block.name == prompt.schema_name:
                logger.debug(
                    "Provider returned structured output",
                    schema_name=prompt.schema_name,
                    input_tokens=response.usage.input_tokens,
                    output_tokens=response.usage.output_tokens,
                )
                return _decode_string_fields(dict(block.input), prompt.schema)

        raise ProviderError(
            f"No {prompt.schema_name} tool call in response (stop_reason={response.stop_reason})"
        )
