# -*- coding: utf-8 -*-
"""
providers/llm/openai_compat_client.py

这个文件做什么：
- 提供一个极薄的 OpenAI 兼容 Chat Completions client，供 skill 层调用。
- 支持从项目根目录的 .env 读取配置，不需要在 shell 里 export。
- 对外只暴露一个方法：chat_json(system_prompt, user_prompt) -> dict

配置来源优先级（从高到低）：
1) 显式传参（model/base_url/api_key/timeout_s）
2) 系统环境变量（已 export 的变量不会被 .env 覆盖）
3) .env 文件

变量：
- LLM_API_KEY（缺省时用 OPENAI_API_KEY）
- LLM_BASE_URL（默认 https://api.openai.com/v1）
- LLM_MODEL（默认 o3-mini）
- LLM_TIMEOUT_S（默认 120）

不做重试：失败直接 raise，由调用方决定是否重跑该 stage。
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import httpx
from dotenv import load_dotenv


DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "o3-mini"
DEFAULT_TIMEOUT_S = 120.0


@dataclass
class LLMConfig:
	api_key: str
	base_url: str
	model: str
	timeout_s: float = DEFAULT_TIMEOUT_S
	provider: str = "openai"


def _snip(s: str, n: int = 1000) -> str:
	if len(s) > n:
		return s[:n] + "...(truncated)"
	return s


class OpenAICompatClient:
	def __init__(self, cfg: LLMConfig, transport: Optional[httpx.BaseTransport] = None):
		self.cfg = cfg
		self._client = httpx.Client(
			base_url=cfg.base_url,
			timeout=httpx.Timeout(cfg.timeout_s),
			headers={
				"Authorization": f"Bearer {cfg.api_key}",
				"Content-Type": "application/json",
			},
			transport=transport,
		)

	def close(self) -> None:
		self._client.close()

	def __enter__(self) -> "OpenAICompatClient":
		return self

	def __exit__(self, *exc: Any) -> None:
		self.close()

	def chat_json(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
		payload: Dict[str, Any] = {
			"model": self.cfg.model,
			"messages": [
				{"role": "system", "content": system_prompt},
				{"role": "user", "content": user_prompt},
			],
			# JSON mode：减少 Markdown/废话
			"response_format": {"type": "json_object"},
		}

		r = self._client.post("/chat/completions", json=payload)

		if r.status_code < 200 or r.status_code >= 300:
			raise ValueError(f"LLM HTTP {r.status_code}: {_snip(r.text)}")

		data = r.json()

		try:
			content = data["choices"][0]["message"]["content"]
		except (KeyError, IndexError, TypeError):
			raise ValueError(f"Unexpected response shape: {_snip(json.dumps(data, ensure_ascii=False))}") from None

		try:
			return json.loads(content)
		except (TypeError, json.JSONDecodeError):
			raise ValueError(f"LLM output is not valid JSON. content_snip={_snip(str(content))}") from None


def find_project_root(start: Optional[Path] = None) -> Path:
	"""
	从 start（默认 cwd）向上找含 .env 的目录；找不到就用 start。
	"""
	here = Path(start or Path.cwd()).resolve()
	p = here
	while p != p.parent:
		if (p / ".env").exists():
			return p
		p = p.parent
	return here


def load_llm_client(
	project_root: Optional[str] = None,
	api_key: Optional[str] = None,
	base_url: Optional[str] = None,
	model: Optional[str] = None,
	timeout_s: Optional[float] = None,
) -> OpenAICompatClient:
	root = Path(project_root).resolve() if project_root else find_project_root()
	env_path = root / ".env"
	if env_path.exists():
		load_dotenv(dotenv_path=str(env_path), override=False)

	key = (api_key or os.environ.get("LLM_API_KEY", "") or os.environ.get("OPENAI_API_KEY", "")).strip()
	if not key:
		raise ValueError("Missing LLM_API_KEY / OPENAI_API_KEY (from .env or env)")

	url = (base_url or os.environ.get("LLM_BASE_URL", "")).strip() or DEFAULT_BASE_URL
	m = (model or os.environ.get("LLM_MODEL", "")).strip() or DEFAULT_MODEL
	t = float(timeout_s or os.environ.get("LLM_TIMEOUT_S", "").strip() or DEFAULT_TIMEOUT_S)
	provider = "openai" if url == DEFAULT_BASE_URL else "openai-compatible"

	cfg = LLMConfig(api_key=key, base_url=url, model=m, timeout_s=t, provider=provider)
	return OpenAICompatClient(cfg)
