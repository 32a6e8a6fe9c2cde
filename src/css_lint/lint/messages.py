"""Message templates for lint details."""

from typing import Any, Mapping, Optional


class MessageBundle:
    """Resolves message keys to text; overrides replace the default template.

    Templates use positional ``{0}`` placeholders.
    """

    def __init__(self, overrides: Optional[Mapping[str, str]] = None):
        self._overrides = dict(overrides or {})

    def localize(self, key: str, default: str, *args: Any) -> str:
        template = self._overrides.get(key, default)
        return template.format(*args)
