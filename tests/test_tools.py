import asyncio
import json
from types import SimpleNamespace

import httpx
import openai
import pytest

from gpt_mcp.config import Config
from gpt_mcp.context import ServerContext
from gpt_mcp.llm.selector import ActiveModelState
from gpt_mcp.tools.generate import GenerateTool
from gpt_mcp.tools.messages import MessagesTool
from gpt_mcp.tools.status import StatusTool


class FakeClient:
    """Records payloads and returns a canned response (or raises)."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def create(self, variant, payload):
        self.calls.append((variant.name, payload))
        if self.error is not None:
            raise self.error
        return self.response


def _responses_reply(text, model="gpt-5.1-codex", usage=(5, 2, 7)):
    return SimpleNamespace(
        model=model,
        output=[SimpleNamespace(type="message", content=[SimpleNamespace(type="output_text", text=text)])],
        usage=SimpleNamespace(input_tokens=usage[0], output_tokens=usage[1], total_tokens=usage[2]),
    )


def _chat_reply(text, model="gpt-5.1-codex"):
    return SimpleNamespace(
        model=model,
        choices=[SimpleNamespace(message=SimpleNamespace(content=text))],
        usage=SimpleNamespace(prompt_tokens=4, completion_tokens=1, total_tokens=5),
    )


def _context(client, **config):
    cfg = Config(OPENAI_API_KEY="sk-test", **config)
    state = ActiveModelState(configured_id=cfg.GPT_MODEL, active_id="gpt-5.1-codex", fallback_id=cfg.FALLBACK_MODEL)
    return ServerContext(config=cfg, model_state=state, client=client)


def _text(result):
    assert len(result.content) == 1
    return result.content[0].text


def test_generate_returns_text_and_usage_footer():
    client = FakeClient(_responses_reply("Hello!"))
    result = asyncio.run(GenerateTool(_context(client)).call({"input": "Say hi"}))

    assert result.isError is False
    text = _text(result)
    assert text.startswith("Hello!")
    assert "**Usage:** 5 input tokens, 2 output tokens, 7 total" in text
    assert result.structuredContent["text"] == "Hello!"
    assert result.structuredContent["usage"] == {"input_tokens": 5, "output_tokens": 2, "total_tokens": 7}
    assert result.structuredContent["truncated"] is False

    variant, payload = client.calls[0]
    assert variant == "responses"
    assert payload["model"] == "gpt-5.1-codex"
    assert payload["input"] == "Say hi"
    assert payload["reasoning"] == {"effort": "medium"}


def test_generate_without_usage_has_no_footer():
    reply = _responses_reply("Hi")
    reply.usage = None
    result = asyncio.run(GenerateTool(_context(FakeClient(reply))).call({"input": "x"}))
    assert _text(result) == "Hi"
    assert "usage" not in result.structuredContent


def test_messages_reports_message_count():
    client = FakeClient(_responses_reply("4", usage=(3, 1, 4)))
    result = asyncio.run(MessagesTool(_context(client)).call({"messages": [{"role": "user", "content": "2+2?"}]}))

    assert result.isError is False
    assert _text(result).startswith("4")
    assert result.structuredContent["message_count"] == 1
    assert client.calls[0][1]["input"] == [{"role": "user", "content": "2+2?"}]


def test_messages_on_chat_variant():
    client = FakeClient(_chat_reply("Sure"))
    ctx = _context(client, GPT_API_TYPE="chat", GPT_REASONING_EFFORT="low")
    args = {
        "messages": [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "hello"}, {"role": "user", "content": "ok?"}],
        "instructions": "Be kind",
        "temperature": 0,
    }
    result = asyncio.run(MessagesTool(ctx).call(args))

    assert result.isError is False
    assert result.structuredContent["message_count"] == 3
    payload = client.calls[0][1]
    assert payload["messages"][0] == {"role": "developer", "content": "Be kind"}
    assert payload["temperature"] == 0
    assert payload["reasoning_effort"] == "low"


def test_invalid_api_key_is_reported_as_tool_error():
    response = httpx.Response(401, request=httpx.Request("POST", "https://api.openai.com/v1/responses"))
    error = openai.AuthenticationError("bad key", response=response, body=None)
    result = asyncio.run(GenerateTool(_context(FakeClient(error=error))).call({"input": "x"}))

    assert result.isError is True
    assert "Invalid API key" in _text(result)


def test_unknown_parameter_is_rejected_without_upstream_call():
    client = FakeClient(_responses_reply("never"))
    result = asyncio.run(GenerateTool(_context(client)).call({"input": "x", "max_tokens": 10}))

    assert result.isError is True
    assert "max_tokens" in _text(result)
    assert client.calls == []


def test_empty_input_is_rejected():
    client = FakeClient(_responses_reply("never"))
    result = asyncio.run(GenerateTool(_context(client)).call({"input": ""}))
    assert result.isError is True
    assert client.calls == []


def test_empty_messages_are_rejected():
    client = FakeClient(_responses_reply("never"))
    result = asyncio.run(MessagesTool(_context(client)).call({"messages": []}))
    assert result.isError is True
    assert client.calls == []


def test_effort_outside_variant_vocabulary_is_rejected():
    client = FakeClient(_chat_reply("never"))
    ctx = _context(client, GPT_API_TYPE="chat")
    result = asyncio.run(GenerateTool(ctx).call({"input": "x", "reasoning_effort": "minimal"}))

    assert result.isError is True
    assert "reasoning_effort" in _text(result)
    assert client.calls == []


def test_minimal_effort_is_accepted_by_responses_variant():
    client = FakeClient(_responses_reply("ok"))
    result = asyncio.run(GenerateTool(_context(client)).call({"input": "x", "reasoning_effort": "minimal"}))
    assert result.isError is False
    assert client.calls[0][1]["reasoning"] == {"effort": "minimal"}


def test_json_output_format():
    client = FakeClient(_responses_reply("Hello!", model="gpt-echo"))
    result = asyncio.run(GenerateTool(_context(client)).call({"input": "x", "response_format": "json"}))

    doc = json.loads(_text(result))
    assert doc["model"] == "gpt-echo"
    assert doc["text"] == "Hello!"
    assert doc["usage"]["total_tokens"] == 7


def test_long_output_is_truncated():
    client = FakeClient(_responses_reply("x" * 100))
    result = asyncio.run(GenerateTool(_context(client, CHARACTER_LIMIT=40)).call({"input": "x"}))

    text = _text(result)
    assert text.startswith("x" * 40)
    assert "Response truncated" in text
    assert result.structuredContent["truncated"] is True


def test_malformed_response_is_classified():
    client = FakeClient(response=SimpleNamespace(model="m", output=42, usage=None))
    result = asyncio.run(GenerateTool(_context(client)).call({"input": "x"}))
    assert result.isError is True
    assert _text(result).startswith("Error:")


def test_status_without_override():
    client = FakeClient()
    tool = StatusTool(_context(client))
    result = asyncio.run(tool.call({}))

    assert result.isError is False
    status = result.structuredContent
    assert status["active_model"] == "gpt-5.1-codex"
    assert status["configured_model"] is None
    assert status["fallback_used"] is False
    assert status["api_key_configured"] is True
    assert status["character_limit"] == 25000
    assert "(not set, using default)" in _text(result)
    assert client.calls == []


def test_status_reports_fallback():
    cfg = Config(OPENAI_API_KEY="sk-test", GPT_MODEL="gpt-missing")
    state = ActiveModelState(configured_id="gpt-missing", active_id=cfg.FALLBACK_MODEL, fallback_id=cfg.FALLBACK_MODEL, fallback_used=True)
    tool = StatusTool(ServerContext(config=cfg, model_state=state, client=FakeClient()))
    result = asyncio.run(tool.call({}))

    assert result.structuredContent["fallback_used"] is True
    assert "gpt-missing (not found, using fallback)" in _text(result)


def test_status_rejects_arguments():
    result = asyncio.run(StatusTool(_context(FakeClient())).call({"verbose": True}))
    assert result.isError is True


def test_definitions_follow_variant():
    chat = GenerateTool(_context(FakeClient(), GPT_API_TYPE="chat", GPT_REASONING_EFFORT="low")).get_definition()
    responses = GenerateTool(_context(FakeClient())).get_definition()

    def efforts(defn):
        prop = defn["inputSchema"]["properties"]["reasoning_effort"]
        return next(o["enum"] for o in prop["anyOf"] if "enum" in o)

    assert "minimal" not in efforts(chat)
    assert "minimal" in efforts(responses)
    assert responses["inputSchema"]["required"] == ["input"]
    assert responses["annotations"]["openWorldHint"] is True


def test_json_output_truncation_is_not_reparsed():
    client = FakeClient(_responses_reply("y" * 200))
    ctx = _context(client, CHARACTER_LIMIT=50)
    result = asyncio.run(GenerateTool(ctx).call({"input": "x", "response_format": "json"}))

    text = _text(result)
    assert result.isError is False
    assert result.structuredContent["truncated"] is True
    assert "Response truncated" in text
    with pytest.raises(json.JSONDecodeError):
        json.loads(text)


def test_chat_default_effort_sends_no_reasoning_field():
    cfg = Config.from_env({"OPENAI_API_KEY": "sk-test", "GPT_API_TYPE": "chat", "GPT_MODEL": "gpt-4.1"})
    state = ActiveModelState(configured_id="gpt-4.1", active_id="gpt-4.1", fallback_id=cfg.FALLBACK_MODEL)
    client = FakeClient(_chat_reply("Hi"))
    result = asyncio.run(GenerateTool(ServerContext(config=cfg, model_state=state, client=client)).call({"input": "x"}))

    assert result.isError is False
    assert "reasoning_effort" not in client.calls[0][1]
