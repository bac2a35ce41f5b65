"""Chat completion response shapes (`POST chat/completions`).

Streaming chunks are not modelled: the `stream` flag is forwarded by the
builder but partial-result delivery is out of scope.
"""

from assistantkit.types.common import FrozenModel, ToolCall, Usage
from assistantkit.types.message import MessageRole


class TopLogProb(FrozenModel):
    token: str
    logprob: float
    bytes: list[int] | None = None


class TokenLogProb(FrozenModel):
    token: str
    logprob: float
    bytes: list[int] | None = None
    top_logprobs: list[TopLogProb] = []


class ChoiceLogProbs(FrozenModel):
    content: list[TokenLogProb] | None = None


class ChatCompletionMessage(FrozenModel):
    role: MessageRole
    content: str | None = None
    tool_calls: list[ToolCall] | None = None


class Choice(FrozenModel):
    index: int
    finish_reason: str | None = None
    message: ChatCompletionMessage
    logprobs: ChoiceLogProbs | None = None


class ChatCompletion(FrozenModel):
    id: str
    object: str = "chat.completion"
    created: int
    model: str
    system_fingerprint: str | None = None
    choices: list[Choice]
    usage: Usage | None = None

    def first_content(self):
        """Return the text of the first choice, or `None` when it has none."""
        if not self.choices:
            return None
        return self.choices[0].message.content
