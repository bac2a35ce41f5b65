"""Tests for the chat completion builder's parameter validation."""

import pytest

from assistantkit.builders.chat import ChatBuilder
from assistantkit.core.errors import InvalidLengthError, OutOfRangeError, RestrictedValueError
from assistantkit.types.common import Tool

MESSAGES = [
    {"role": "system", "content": "You are terse."},
    {"role": "user", "content": "Hi"},
]


@pytest.fixture
def builder():
    return ChatBuilder("gpt-4", MESSAGES)


class TestConstruction:
    def test_requires_at_least_one_message(self):
        with pytest.raises(RestrictedValueError):
            ChatBuilder("gpt-4", [])

    def test_rejects_unknown_role(self):
        with pytest.raises(RestrictedValueError):
            ChatBuilder("gpt-4", [{"role": "narrator", "content": "x"}])

    def test_minimal_payload_has_only_model_and_messages(self, builder):
        payload = builder.to_payload()
        assert set(payload) == {"model", "messages"}
        assert payload["messages"][1] == {"role": "user", "content": "Hi"}


class TestRanges:
    """Range boundaries are inclusive; anything past them is rejected."""

    @pytest.mark.parametrize("value", [0.0, 2.0, 1.0])
    def test_temperature_accepts_boundaries(self, builder, value):
        assert builder.with_temperature(value).to_payload()["temperature"] == value

    @pytest.mark.parametrize("value", [-0.01, 2.01])
    def test_temperature_rejects_out_of_range(self, builder, value):
        with pytest.raises(OutOfRangeError) as exc:
            builder.with_temperature(value)
        assert exc.value.minimum == 0.0
        assert exc.value.maximum == 2.0

    def test_rejected_value_leaves_builder_unchanged(self, builder):
        builder.with_temperature(0.5)
        with pytest.raises(OutOfRangeError):
            builder.with_temperature(3.0)
        assert builder.to_payload()["temperature"] == 0.5

    @pytest.mark.parametrize("value", [-2.0, 2.0])
    def test_penalties_accept_boundaries(self, builder, value):
        payload = builder.with_frequency_penalty(value).with_presence_penalty(value).to_payload()
        assert payload["frequency_penalty"] == value
        assert payload["presence_penalty"] == value

    def test_penalty_rejects_below_minimum(self, builder):
        with pytest.raises(OutOfRangeError):
            builder.with_presence_penalty(-2.01)

    def test_top_p_rejects_above_maximum(self, builder):
        with pytest.raises(OutOfRangeError):
            builder.with_top_p(2.5)

    def test_max_tokens_bounds(self, builder):
        builder.with_max_tokens(1).with_max_tokens(32768)
        with pytest.raises(OutOfRangeError):
            builder.with_max_tokens(0)
        with pytest.raises(OutOfRangeError):
            builder.with_max_tokens(32769)
        assert builder.to_payload()["max_tokens"] == 32768

    def test_max_tokens_must_be_integer(self, builder):
        with pytest.raises(RestrictedValueError):
            builder.with_max_tokens(10.5)

    def test_choice_count_bounds(self, builder):
        assert builder.with_choice_count(128).to_payload()["n"] == 128
        with pytest.raises(OutOfRangeError):
            builder.with_choice_count(129)

    def test_bool_is_not_a_number(self, builder):
        with pytest.raises(RestrictedValueError):
            builder.with_temperature(True)


class TestLogitBias:
    def test_valid_map_is_stored(self, builder):
        payload = builder.with_logit_bias({50256: -100, "1234": 100}).to_payload()
        assert payload["logit_bias"] == {"50256": -100, "1234": 100}

    def test_one_bad_entry_rejects_whole_map(self, builder):
        builder.with_logit_bias({"1": 5})
        with pytest.raises(OutOfRangeError):
            builder.with_logit_bias({"2": 10, "3": 101})
        assert builder.to_payload()["logit_bias"] == {"1": 5}


class TestLogprobs:
    def test_top_logprobs_requires_logprobs(self, builder):
        with pytest.raises(RestrictedValueError):
            builder.with_top_logprobs(3)
        assert "top_logprobs" not in builder.to_payload()

    def test_top_logprobs_after_logprobs(self, builder):
        payload = builder.with_logprobs().with_top_logprobs(20).to_payload()
        assert payload["logprobs"] is True
        assert payload["top_logprobs"] == 20

    def test_top_logprobs_range(self, builder):
        builder.with_logprobs()
        with pytest.raises(OutOfRangeError):
            builder.with_top_logprobs(21)

    def test_disabling_logprobs_clears_top_logprobs(self, builder):
        builder.with_logprobs().with_top_logprobs(5).with_logprobs(False)
        payload = builder.to_payload()
        assert payload["logprobs"] is False
        assert "top_logprobs" not in payload

    def test_vision_model_rejects_logprobs(self):
        builder = ChatBuilder("gpt-4-vision-preview", MESSAGES)
        with pytest.raises(RestrictedValueError):
            builder.with_logprobs()


class TestStopAndTools:
    def test_single_stop_string(self, builder):
        assert builder.with_stop("END").to_payload()["stop"] == ["END"]

    def test_at_most_four_stop_sequences(self, builder):
        builder.with_stop(["a", "b", "c", "d"])
        with pytest.raises(InvalidLengthError) as exc:
            builder.add_stop("e")
        assert exc.value.actual == 5
        assert exc.value.maximum == 4
        assert builder.to_payload()["stop"] == ["a", "b", "c", "d"]

    def test_tool_choice_function_must_be_configured(self, builder):
        with pytest.raises(RestrictedValueError):
            builder.with_tool_choice("lookup")
        builder.add_tool(Tool.function_tool("lookup", parameters={"type": "object"}))
        payload = builder.with_tool_choice("lookup").to_payload()
        assert payload["tool_choice"] == {"type": "function", "function": {"name": "lookup"}}
        assert payload["tools"][0]["function"]["name"] == "lookup"

    def test_tool_choice_modes(self, builder):
        assert builder.with_tool_choice("auto").to_payload()["tool_choice"] == "auto"

    def test_replacing_tools_keeps_forced_choice_consistent(self, builder):
        builder.with_tools([Tool.function_tool("lookup")]).with_tool_choice("lookup")
        with pytest.raises(RestrictedValueError):
            builder.with_tools([Tool.function_tool("other")])

        payload = builder.to_payload()
        assert payload["tool_choice"] == {"type": "function", "function": {"name": "lookup"}}
        assert [tool["function"]["name"] for tool in payload["tools"]] == ["lookup"]

    def test_replacing_tools_with_mode_choice(self, builder):
        builder.with_tools([Tool.function_tool("lookup")]).with_tool_choice("auto")
        builder.with_tools([Tool.function_tool("other")])
        assert builder.to_payload()["tools"][0]["function"]["name"] == "other"

    def test_tool_dicts_are_accepted(self, builder):
        builder.with_tools([{"type": "function", "function": {"name": "f"}}])
        assert builder.to_payload()["tools"] == [{"type": "function", "function": {"name": "f"}}]

    def test_response_format_choices(self, builder):
        assert builder.with_response_format("json_object").to_payload()["response_format"] == {
            "type": "json_object"
        }
        with pytest.raises(RestrictedValueError):
            builder.with_response_format("xml")


class TestPayloadIsolation:
    def test_payload_is_a_fresh_copy(self, builder):
        builder.with_logit_bias({"1": 1})
        payload = builder.to_payload()
        payload["logit_bias"]["1"] = 99
        assert builder.to_payload()["logit_bias"] == {"1": 1}


class TestBuild:
    def test_build_posts_payload(self, builder, fake_networking):
        fake_networking.queue({
            "id": "chatcmpl-1",
            "object": "chat.completion",
            "created": 1700000000,
            "model": "gpt-4",
            "choices": [{
                "index": 0,
                "message": {"role": "assistant", "content": "Hello"},
                "finish_reason": "stop",
            }],
        })
        completion = builder.with_temperature(0.2).build(fake_networking)

        method, endpoint, body, _ = fake_networking.calls[0]
        assert (method, endpoint) == ("POST", "chat/completions")
        assert body["temperature"] == 0.2
        assert completion.first_content() == "Hello"
