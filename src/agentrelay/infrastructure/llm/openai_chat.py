"""
OpenAI chat-completions model service.

Works with any OpenAI-compatible endpoint that supports function tools
(OpenAI, Ollama, vLLM, LiteLLM proxies).
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, cast

from agentrelay.domain.interfaces import ModelServiceInterface
from agentrelay.domain.models import ModelReply, Role, ToolAction, ToolSpec, Turn

logger = logging.getLogger(__name__)

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"


@dataclass
class OpenAIChatModelConfig:
    """Configuration for OpenAIChatModel.

    This typed config ensures unknown fields are rejected at construction time.
    api_key and base_url fall back to the openai client's environment
    variables (OPENAI_API_KEY, OPENAI_BASE_URL) when None.
    """

    model: str = DEFAULT_OPENAI_MODEL
    base_url: str | None = None
    api_key: str | None = None
    timeout: float = 120.0
    max_tokens: int = 8192
    temperature: float = 0.2


class OpenAIChatModel(ModelServiceInterface):
    """Calls a chat-completions endpoint with the phase tools attached."""

    config_class = OpenAIChatModelConfig

    def __init__(self, config: OpenAIChatModelConfig | None = None, **kwargs: Any):
        """
        Args:
            config: Typed configuration object (preferred)
            **kwargs: Config fields, used when no config object is given
        """
        if config is None:
            config = OpenAIChatModelConfig(**kwargs)

        try:
            from openai import OpenAI
        except ImportError as err:
            raise ImportError("openai library required: pip install openai") from err

        self._config = config
        self._client = OpenAI(
            base_url=config.base_url,
            api_key=config.api_key,
            timeout=config.timeout,
        )

    def complete(
        self,
        instruction: str,
        transcript: tuple[Turn, ...],
        tools: tuple[ToolSpec, ...] = (),
    ) -> ModelReply:
        """Send the scoped transcript and parse the reply."""
        request: dict[str, Any] = {
            "model": self._config.model,
            "messages": self._to_messages(instruction, transcript),
            "max_tokens": self._config.max_tokens,
            "temperature": self._config.temperature,
        }
        if tools:
            request["tools"] = [self._to_tool(spec) for spec in tools]

        response = self._client.chat.completions.create(**cast(Any, request))
        message = response.choices[0].message

        actions = tuple(
            ToolAction(
                action_id=tc.id,
                name=tc.function.name,
                args=self._parse_arguments(tc.function.arguments),
            )
            for tc in (message.tool_calls or [])
        )
        return ModelReply(content=message.content or "", actions=actions)

    def _to_messages(
        self, instruction: str, transcript: tuple[Turn, ...]
    ) -> list[dict[str, Any]]:
        """Map transcript turns onto chat messages."""
        messages: list[dict[str, Any]] = [{"role": "system", "content": instruction}]
        for turn in transcript:
            if turn.role is Role.USER:
                messages.append({"role": "user", "content": turn.content})
            elif turn.role is Role.AGENT:
                message: dict[str, Any] = {"role": "assistant", "content": turn.content}
                if turn.actions:
                    # tool-call messages may carry null content
                    message["content"] = turn.content or None
                    message["tool_calls"] = [
                        {
                            "id": action.action_id,
                            "type": "function",
                            "function": {
                                "name": action.name,
                                "arguments": json.dumps(dict(action.args)),
                            },
                        }
                        for action in turn.actions
                    ]
                messages.append(message)
            else:
                messages.append(
                    {
                        "role": "tool",
                        "tool_call_id": turn.action_id or "",
                        "content": turn.content,
                    }
                )
        return messages

    def _to_tool(self, spec: ToolSpec) -> dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": spec.name,
                "description": spec.description,
                "parameters": spec.parameters,
            },
        }

    def _parse_arguments(self, raw: str | None) -> dict[str, Any]:
        """Decode tool-call arguments; malformed JSON becomes {}."""
        if not raw:
            return {}
        try:
            args = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding malformed tool arguments: %.200s", raw)
            return {}
        return args if isinstance(args, dict) else {}
