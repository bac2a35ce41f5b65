"""Builder for chat completion requests (`POST chat/completions`).

Parameter handling:
    - `frequency_penalty`, `presence_penalty`: [-2.0, 2.0].
    - `temperature`, `top_p`: [0.0, 2.0].
    - `max_tokens`: [1, 32768].
    - `n`: [1, 128].
    - `logit_bias`: every value in [-100, 100]; one bad entry rejects the map.
    - `logprobs`: not available for `gpt-4-vision-preview`.
    - `top_logprobs`: [0, 20], and only once `logprobs` is `True`.
    - `stop`: at most 4 sequences.
    - `seed`, `user`, `stream`, `tools`, `tool_choice`, `response_format`:
      stored as given after a type/choice check.

Interaction with transport:
    `build(networking)` posts `to_payload()` and returns a `ChatCompletion`.
    The `stream` flag is forwarded only; chunked delivery is not decoded.
"""

from pydantic import TypeAdapter, ValidationError

from assistantkit.builders.base import RequestBuilder, compact
from assistantkit.builders.validation import (
    check_choice,
    check_count,
    check_int_range,
    check_range,
    coerce_tools,
)
from assistantkit.core.errors import RestrictedValueError
from assistantkit.core.identifiers import get_identifier
from assistantkit.types.message import CompletionMessage

_MESSAGES = TypeAdapter(list[CompletionMessage])

MAX_STOP_SEQUENCES = 4
MAX_TOOLS = 128
LOGPROBS_UNSUPPORTED_MODELS = frozenset({"gpt-4-vision-preview"})
RESPONSE_FORMATS = frozenset({"text", "json_object"})
TOOL_CHOICE_MODES = frozenset({"none", "auto"})


class ChatBuilder(RequestBuilder):
    """Accumulates and validates a chat completion request."""

    def __init__(self, model, messages):
        self.model = get_identifier(model)
        try:
            self.messages = _MESSAGES.validate_python(list(messages))
        except ValidationError as e:
            raise RestrictedValueError(f"Invalid chat messages: {e}") from e
        if not self.messages:
            raise RestrictedValueError("At least one message is required")

        self.frequency_penalty = None
        self.logit_bias = None
        self.logprobs = None
        self.top_logprobs = None
        self.max_tokens = None
        self.n = None
        self.presence_penalty = None
        self.response_format = None
        self.seed = None
        self.stop = []
        self.stream = None
        self.temperature = None
        self.top_p = None
        self.tools = []
        self.tool_choice = None
        self.user = None

    def with_frequency_penalty(self, frequency_penalty: float) -> "ChatBuilder":
        self.frequency_penalty = check_range("frequency_penalty", frequency_penalty, -2.0, 2.0)
        return self

    def with_presence_penalty(self, presence_penalty: float) -> "ChatBuilder":
        self.presence_penalty = check_range("presence_penalty", presence_penalty, -2.0, 2.0)
        return self

    def with_temperature(self, temperature: float) -> "ChatBuilder":
        self.temperature = check_range("temperature", temperature, 0.0, 2.0)
        return self

    def with_top_p(self, top_p: float) -> "ChatBuilder":
        self.top_p = check_range("top_p", top_p, 0.0, 2.0)
        return self

    def with_max_tokens(self, max_tokens: int) -> "ChatBuilder":
        self.max_tokens = check_int_range("max_tokens", max_tokens, 1, 32768)
        return self

    def with_choice_count(self, n: int) -> "ChatBuilder":
        self.n = check_int_range("n", n, 1, 128)
        return self

    def with_logit_bias(self, logit_bias: dict) -> "ChatBuilder":
        """Set token biases; every value must lie in [-100, 100]."""
        checked = {}
        for token, bias in dict(logit_bias).items():
            checked[str(token)] = check_range(f"logit_bias[{token}]", bias, -100, 100)
        self.logit_bias = checked
        return self

    def with_logprobs(self, logprobs: bool = True) -> "ChatBuilder":
        if self.model in LOGPROBS_UNSUPPORTED_MODELS:
            raise RestrictedValueError(f"Logprobs is not supported for {self.model}")
        self.logprobs = bool(logprobs)
        if not self.logprobs:
            # A refinement without its prerequisite would be rejected upstream.
            self.top_logprobs = None
        return self

    def with_top_logprobs(self, top_logprobs: int) -> "ChatBuilder":
        if not self.logprobs:
            raise RestrictedValueError("Top Logprobs requires logprobs to be true")
        self.top_logprobs = check_int_range("top_logprobs", top_logprobs, 0, 20)
        return self

    def with_stop(self, stop: str | list[str]) -> "ChatBuilder":
        if isinstance(stop, str):
            stop = [stop]
        self.stop = check_count("stop", stop, MAX_STOP_SEQUENCES)
        return self

    def add_stop(self, sequence: str) -> "ChatBuilder":
        self.stop = check_count("stop", [*self.stop, sequence], MAX_STOP_SEQUENCES)
        return self

    def with_seed(self, seed: int) -> "ChatBuilder":
        if isinstance(seed, bool) or not isinstance(seed, int):
            raise RestrictedValueError("seed must be an integer")
        self.seed = seed
        return self

    def with_stream(self, stream: bool = True) -> "ChatBuilder":
        self.stream = bool(stream)
        return self

    def with_response_format(self, format_type: str) -> "ChatBuilder":
        self.response_format = {"type": check_choice("response_format", format_type, RESPONSE_FORMATS)}
        return self

    def with_tools(self, tools) -> "ChatBuilder":
        """Replace the tool list.

        A forced `tool_choice` must still name one of the new function tools;
        otherwise the call is rejected and the builder keeps its old tools.
        """
        tools = check_count("tools", coerce_tools(tools), MAX_TOOLS)
        if isinstance(self.tool_choice, dict):
            forced = self.tool_choice["function"]["name"]
            if forced not in {tool.function.name for tool in tools if tool.function is not None}:
                raise RestrictedValueError(
                    f"tool_choice forces {forced!r}, which is not among the new tools"
                )
        self.tools = tools
        return self

    def add_tool(self, tool) -> "ChatBuilder":
        self.tools = check_count("tools", [*self.tools, *coerce_tools([tool])], MAX_TOOLS)
        return self

    def with_tool_choice(self, tool_choice: str) -> "ChatBuilder":
        """Set `"none"`, `"auto"`, or force a function tool by its name."""
        if tool_choice in TOOL_CHOICE_MODES:
            self.tool_choice = tool_choice
            return self

        names = {tool.function.name for tool in self.tools if tool.function is not None}
        if tool_choice not in names:
            raise RestrictedValueError(
                f"tool_choice {tool_choice!r} is neither a mode nor a configured function tool"
            )
        self.tool_choice = {"type": "function", "function": {"name": tool_choice}}
        return self

    def with_user(self, user: str) -> "ChatBuilder":
        self.user = str(user)
        return self

    def to_payload(self) -> dict:
        return compact({
            "model": self.model,
            "messages": [m.model_dump(mode="json", exclude_none=True) for m in self.messages],
            "frequency_penalty": self.frequency_penalty,
            "logit_bias": self.logit_bias,
            "logprobs": self.logprobs,
            "top_logprobs": self.top_logprobs,
            "max_tokens": self.max_tokens,
            "n": self.n,
            "presence_penalty": self.presence_penalty,
            "response_format": self.response_format,
            "seed": self.seed,
            "stop": self.stop or None,
            "stream": self.stream,
            "temperature": self.temperature,
            "top_p": self.top_p,
            "tools": [tool.to_payload() for tool in self.tools] or None,
            "tool_choice": self.tool_choice,
            "user": self.user,
        })

    def build(self, networking):
        return networking.create_chat_completion(self.to_payload())
