# -*- coding: utf-8 -*-
"""
providers/llm/call_log.py

这个文件做什么：
- 包一层 llm_client，把每次 chat_json 调用记到 logs/llm.jsonl。
- 记录：任务名、模型、耗时、prompt 长度、成功/失败；不记录 prompt 正文。
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from audiobook2video.core.io import append_jsonl


class LoggedLLMClient:
	def __init__(self, inner: Any, log_path: Path, task: str):
		self.inner = inner
		self.log_path = Path(log_path)
		self.task = task

	@property
	def model(self) -> str:
		cfg = getattr(self.inner, "cfg", None)
		return getattr(cfg, "model", "") or ""

	def chat_json(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
		record: Dict[str, Any] = {
			"ts": datetime.now(timezone.utc).isoformat(timespec="seconds"),
			"task": self.task,
			"model": self.model,
			"system_chars": len(system_prompt),
			"user_chars": len(user_prompt),
		}

		t0 = time.monotonic()
		try:
			out = self.inner.chat_json(system_prompt, user_prompt)
		except Exception as e:
			record["ok"] = False
			record["error"] = str(e)[:500]
			raise
		else:
			record["ok"] = True
			return out
		finally:
			record["elapsed_s"] = round(time.monotonic() - t0, 3)
			append_jsonl(self.log_path, record)
