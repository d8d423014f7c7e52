"""
Message resolvers.

winlog never stores message text itself. Callers pass a resolver that turns
a message key plus positional parameters into display text; anything with a
``resolve(key, params)`` method will do.

ResourceBundle is the bundled implementation: a dict of templates formatted
with str.format(*params), loadable from a Java-style .properties file.

Usage::

    bundle = ResourceBundle({'Server.Started': 'Listening on port {0}'})
    bundle.resolve('Server.Started', (8080,))   # 'Listening on port 8080'
"""

from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Sequence, Union

from .errors import ResourceResolutionError


class MessageResolver(Protocol):
    """Anything that can resolve a message key to text."""

    def resolve(self, key: str, params: Sequence[Any] = ()) -> str:
        ...


class ResourceBundle:
    """Dict-backed resolver with positional {0}-style placeholders."""

    def __init__(self, messages: Dict[str, str], name: Optional[str] = None):
        self.messages = dict(messages)
        self.name = name

    def __contains__(self, key: str) -> bool:
        return key in self.messages

    def __len__(self) -> int:
        return len(self.messages)

    def resolve(self, key: str, params: Sequence[Any] = ()) -> str:
        """Format the template for *key* with *params*.

        Raises:
            ResourceResolutionError: If the key is unknown or the template
                needs more parameters than were given.
        """
        try:
            template = self.messages[key]
        except KeyError:
            where = f" in bundle '{self.name}'" if self.name else ''
            raise ResourceResolutionError(
                f"No message for key '{key}'{where}") from None
        try:
            return template.format(*params)
        except (IndexError, KeyError, ValueError) as e:
            raise ResourceResolutionError(
                f"Cannot format message '{key}': {e}") from e

    def get_string(self, key: str, *params: Any) -> str:
        """Varargs form of resolve()."""
        return self.resolve(key, params)

    @classmethod
    def from_properties(cls, path: Union[str, Path],
                        encoding: str = 'utf-8') -> 'ResourceBundle':
        """Load a bundle from a .properties file.

        Supports ``key=value`` and ``key: value`` lines, ``#``/``!``
        comments and trailing-backslash continuation lines.
        """
        path = Path(path)
        text = path.read_text(encoding=encoding)
        return cls(parse_properties(text), name=path.stem)


def parse_properties(text: str) -> Dict[str, str]:
    """Parse .properties content into a dict."""
    messages: Dict[str, str] = {}
    pending = ''
    for raw in text.splitlines():
        line = raw.strip() if not pending else raw.lstrip()
        if not pending and (not line or line[0] in '#!'):
            continue
        if line.endswith('\\') and not line.endswith('\\\\'):
            pending += line[:-1]
            continue
        line = pending + line
        pending = ''
        key, value = _split_property(line)
        messages[key] = value
    if pending:
        key, value = _split_property(pending)
        messages[key] = value
    return messages


def _split_property(line: str):
    for i, ch in enumerate(line):
        if ch in '=:':
            return line[:i].strip(), line[i + 1:].strip()
    parts = line.split(None, 1)
    return parts[0], (parts[1] if len(parts) > 1 else '')
