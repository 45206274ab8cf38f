"""Incremental parser for OpenAI-style chat completion SSE streams."""

import codecs
import json
from typing import List, Optional


class SSEAccumulator:
    """
    Accumulates ``delta.content`` from ``data:`` lines as chunks arrive.

    Lines split across chunks stay in the buffer until their newline
    arrives. Complete lines whose JSON does not parse are dropped.
    ``data: [DONE]`` ends the stream.
    """

    def __init__(self):
        self._decoder = codecs.getincrementaldecoder("utf-8")()
        self._buffer = ""
        self.content = ""
        self.done = False

    def feed_bytes(self, chunk: bytes) -> List[str]:
        return self.feed(self._decoder.decode(chunk))

    def feed(self, text: str) -> List[str]:
        """Add text; return the content deltas completed by it."""
        self._buffer += text
        deltas: List[str] = []
        while not self.done:
            newline = self._buffer.find("\n")
            if newline == -1:
                break
            line = self._buffer[:newline]
            rest = self._buffer[newline + 1:]
            if line.endswith("\r"):
                line = line[:-1]

            if not line or line.startswith(":") or not line.startswith("data: "):
                self._buffer = rest
                continue

            payload = line[6:].strip()
            if payload == "[DONE]":
                self._buffer = rest
                self.done = True
                break

            self._buffer = rest
            delta = _parse_delta(payload)
            if delta and delta is not _MALFORMED:
                self.content += delta
                deltas.append(delta)
        return deltas

    def flush(self) -> List[str]:
        """Process whatever is left once the stream has closed."""
        tail = self._decoder.decode(b"", final=True)
        if tail:
            self._buffer += tail
        if not self._buffer or self.done:
            self._buffer = ""
            return []

        deltas: List[str] = []
        for raw in self._buffer.split("\n"):
            line = raw.rstrip("\r")
            if not line.startswith("data: "):
                continue
            payload = line[6:].strip()
            if payload == "[DONE]":
                self.done = True
                break
            delta = _parse_delta(payload)
            if delta and delta is not _MALFORMED:
                self.content += delta
                deltas.append(delta)
        self._buffer = ""
        return deltas


_MALFORMED = object()


def _parse_delta(payload: str):
    try:
        data = json.loads(payload)
    except json.JSONDecodeError:
        return _MALFORMED
    return _content_of(data)


def _content_of(data) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    choices = data.get("choices") or []
    if not choices:
        return None
    delta = choices[0].get("delta") or {}
    return delta.get("content")
