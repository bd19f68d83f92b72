from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Mapping

from .domain_types import ResponseHook


class HookRegistry:
    """Ordered, additive set of response hooks for a single call.

    Every hook sees the same read-only payload. Hooks are never removed or
    de-duplicated: registering one twice runs it twice.
    """

    def __init__(self, hooks: Iterable[ResponseHook] = ()) -> None:
        self._hooks: list[ResponseHook] = list(hooks)

    def add(self, hook: ResponseHook) -> None:
        self._hooks.append(hook)

    def extend(self, hooks: Iterable[ResponseHook]) -> None:
        self._hooks.extend(hooks)

    def __len__(self) -> int:
        return len(self._hooks)

    def run(self, payload: Mapping[str, Any]) -> str | None:
        """Invoke every hook in registration order; return the first non-empty string."""
        view = MappingProxyType(dict(payload))
        first: str | None = None
        for hook in self._hooks:
            value = hook(view)
            if first is None and isinstance(value, str) and value:
                first = value
        return first


def capture_field(key: str) -> ResponseHook:
    """Hook returning ``payload[key]`` when it is a non-empty string."""

    def _hook(payload: Mapping[str, Any]) -> str | None:
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value
        return None

    _hook.__name__ = f"capture_{key}"
    return _hook
