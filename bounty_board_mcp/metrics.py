"""In-process counters for JSON-RPC traffic and tool outcomes, served at /metrics."""

from __future__ import annotations

from collections import Counter, defaultdict
from threading import Lock
from typing import DefaultDict, Dict, Optional


class MetricsRecorder:
    """Counts messages and tool calls; failed calls are also bucketed by exception class."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._messages = 0
        self._tool_success: Counter[str] = Counter()
        self._tool_error: Counter[str] = Counter()
        self._tool_error_kinds: DefaultDict[str, Counter[str]] = defaultdict(Counter)

    def incr_message(self) -> None:
        with self._lock:
            self._messages += 1

    def record_tool(self, tool: str, *, success: bool, error: Optional[BaseException] = None) -> None:
        with self._lock:
            if success:
                self._tool_success[tool] += 1
                return
            self._tool_error[tool] += 1
            kind = type(error).__name__ if error is not None else "unknown"
            self._tool_error_kinds[tool][kind] += 1

    def snapshot(self) -> Dict[str, object]:
        with self._lock:
            return {
                "messages": self._messages,
                "tool_success": dict(self._tool_success),
                "tool_error": dict(self._tool_error),
                "tool_error_kinds": {
                    tool: dict(kinds) for tool, kinds in self._tool_error_kinds.items()
                },
            }

    def reset(self) -> None:
        with self._lock:
            self._messages = 0
            self._tool_success.clear()
            self._tool_error.clear()
            self._tool_error_kinds.clear()


default_metrics = MetricsRecorder()
