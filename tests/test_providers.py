# -*- coding: utf-8 -*-
"""LLM client 测试：httpx.MockTransport，无网络。"""

from __future__ import annotations

import json
import os
from pathlib import Path

import httpx
import pytest

from audiobook2video.providers.llm.call_log import LoggedLLMClient
from audiobook2video.providers.llm.openai_compat_client import LLMConfig, OpenAICompatClient, load_llm_client


def _client(handler) -> OpenAICompatClient:
	cfg = LLMConfig(api_key="k", base_url="https://llm.test/v1", model="m1")
	return OpenAICompatClient(cfg, transport=httpx.MockTransport(handler))


def test_chat_json_ok():
	seen = {}

	def handler(request: httpx.Request) -> httpx.Response:
		seen["url"] = str(request.url)
		seen["auth"] = request.headers["authorization"]
		seen["body"] = json.loads(request.content)
		content = json.dumps({"shots": []})
		return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})

	with _client(handler) as c:
		assert c.chat_json("sys", "user") == {"shots": []}

	assert seen["url"] == "https://llm.test/v1/chat/completions"
	assert seen["auth"] == "Bearer k"
	assert seen["body"]["model"] == "m1"
	assert seen["body"]["response_format"] == {"type": "json_object"}
	assert [m["role"] for m in seen["body"]["messages"]] == ["system", "user"]


@pytest.mark.parametrize("response, msg", [
	(httpx.Response(500, text="boom"), "HTTP 500"),
	(httpx.Response(200, json={"choices": []}), "Unexpected response shape"),
	(httpx.Response(200, json={"choices": [{"message": {"content": "not json"}}]}), "not valid JSON"),
])
def test_chat_json_errors(response, msg):
	with _client(lambda request: response) as c:
		with pytest.raises(ValueError, match=msg):
			c.chat_json("sys", "user")


def test_load_from_dotenv(tmp_path: Path, monkeypatch):
	for k in ("LLM_API_KEY", "OPENAI_API_KEY", "LLM_BASE_URL", "LLM_MODEL", "LLM_TIMEOUT_S"):
		monkeypatch.delenv(k, raising=False)
	(tmp_path / ".env").write_text("LLM_API_KEY=abc\nLLM_MODEL=gpt-test\n", encoding="utf-8")

	c = load_llm_client(project_root=str(tmp_path))
	try:
		assert c.cfg.api_key == "abc"
		assert c.cfg.model == "gpt-test"
		assert c.cfg.base_url == "https://api.openai.com/v1"
		assert c.cfg.timeout_s == 120.0
	finally:
		c.close()
		# load_dotenv 直接写 os.environ，不经过 monkeypatch
		os.environ.pop("LLM_API_KEY", None)
		os.environ.pop("LLM_MODEL", None)


def test_exported_env_wins_over_dotenv(tmp_path: Path, monkeypatch):
	monkeypatch.setenv("LLM_API_KEY", "exported")
	monkeypatch.setenv("LLM_MODEL", "from-shell")
	monkeypatch.delenv("LLM_BASE_URL", raising=False)
	(tmp_path / ".env").write_text("LLM_API_KEY=abc\nLLM_MODEL=gpt-test\nLLM_BASE_URL=https://dotenv/v1\n", encoding="utf-8")

	c = load_llm_client(project_root=str(tmp_path))
	try:
		assert c.cfg.api_key == "exported"
		assert c.cfg.model == "from-shell"
		# 没 export 的变量仍从 .env 补上
		assert c.cfg.base_url == "https://dotenv/v1"
	finally:
		c.close()
		os.environ.pop("LLM_BASE_URL", None)


def test_explicit_args_win(tmp_path: Path, monkeypatch):
	monkeypatch.setenv("OPENAI_API_KEY", "env-key")
	monkeypatch.delenv("LLM_API_KEY", raising=False)
	c = load_llm_client(project_root=str(tmp_path), base_url="https://other/v1", model="x", timeout_s=5)
	try:
		assert c.cfg.api_key == "env-key"
		assert (c.cfg.base_url, c.cfg.model, c.cfg.timeout_s) == ("https://other/v1", "x", 5.0)
		assert c.cfg.provider == "openai-compatible"
	finally:
		c.close()


def test_missing_key(tmp_path: Path, monkeypatch):
	monkeypatch.delenv("LLM_API_KEY", raising=False)
	monkeypatch.delenv("OPENAI_API_KEY", raising=False)
	with pytest.raises(ValueError, match="Missing LLM_API_KEY"):
		load_llm_client(project_root=str(tmp_path))


def test_logged_client_records_failures(tmp_path: Path):
	class Boom:
		def chat_json(self, s, u):
			raise ValueError("bad gateway")

	log = tmp_path / "logs" / "llm.jsonl"
	with pytest.raises(ValueError):
		LoggedLLMClient(Boom(), log, task="gen_shots").chat_json("s", "uu")

	rec = json.loads(log.read_text(encoding="utf-8"))
	assert rec["task"] == "gen_shots"
	assert rec["ok"] is False and rec["error"] == "bad gateway"
	assert rec["user_chars"] == 2
