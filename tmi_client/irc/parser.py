"""IRC message parsing utilities."""

from __future__ import annotations

from ..errors.internal import ProtocolParseError
from .models import DecodedMessage


def parse_message(line: str) -> DecodedMessage:
    """Parse one trimmed TMI line into a ``DecodedMessage``.

    Grammar: ``[@tags ]:prefix COMMAND [target] [:trailing]``. Tokens are
    split on single spaces.

    Raises:
        ProtocolParseError: empty line, malformed tag entry, missing prefix
            or missing command.
    """
    if not line:
        raise ProtocolParseError("empty line", line=line)

    tokens = line.split(" ")
    metadata: dict[str, str] = {}

    if tokens[0].startswith("@"):
        metadata = _parse_tags(tokens.pop(0)[1:], line)

    if not tokens:
        raise ProtocolParseError("missing prefix", line=line)
    sender = _parse_sender(tokens.pop(0))
    if not sender:
        raise ProtocolParseError("empty prefix", line=line)

    if not tokens or not tokens[0]:
        raise ProtocolParseError("missing command", line=line)
    command = tokens.pop(0)

    target: str | None = None
    params = ""
    if tokens:
        target = tokens.pop(0)
        params = " ".join(tokens)
        if params.startswith(":"):
            params = params[1:]

    return DecodedMessage(
        sender=sender,
        command=command,
        target=target,
        params=params,
        metadata=metadata,
    )


def _parse_tags(raw_tags: str, line: str) -> dict[str, str]:
    tags: dict[str, str] = {}
    for entry in raw_tags.split(";"):
        if "=" not in entry:
            raise ProtocolParseError(f"malformed tag entry {entry!r}", line=line)
        # Values may themselves contain '='; only the first one separates.
        key, value = entry.split("=", 1)
        tags[key] = value
    return tags


def _parse_sender(prefix: str) -> str:
    # nick!user@host, user@host or a bare host all reduce to the short name
    if prefix.startswith(":"):
        prefix = prefix[1:]
    return prefix.split("@", 1)[0].split("!", 1)[0]


def format_line(command: str, *params: str, trailing: str | None = None) -> str:
    """Build an outgoing line without its terminator.

    >>> format_line("PRIVMSG", "#room", trailing="hi there")
    'PRIVMSG #room :hi there'
    """
    parts = [command, *params]
    if trailing is not None:
        parts.append(f":{trailing}")
    return " ".join(parts)
