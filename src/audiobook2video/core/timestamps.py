# -*- coding: utf-8 -*-
"""
audiobook2video/core/timestamps.py

秒数 -> "HH:MM:SS.ss"，用于打印进度。
"""

from __future__ import annotations


def format_duration(total_seconds: float) -> str:
	hours = int(total_seconds // 3600)
	rest = total_seconds - hours * 3600
	minutes = int(rest // 60)
	seconds = rest - minutes * 60
	return f"{hours:02d}:{minutes:02d}:{seconds:05.2f}"
