"""Tests for the incremental SSE accumulator."""

import json

from coach_ai.client.sse import SSEAccumulator


def data_line(content: str) -> str:
    return "data: " + json.dumps({"choices": [{"delta": {"content": content}}]}, ensure_ascii=False) + "\n"


class TestSSEAccumulator:

    def test_whole_lines(self):
        acc = SSEAccumulator()
        deltas = acc.feed(data_line("Hola") + data_line(", ¿qué tal?") + "data: [DONE]\n")
        assert deltas == ["Hola", ", ¿qué tal?"]
        assert acc.content == "Hola, ¿qué tal?"
        assert acc.done is True

    def test_line_split_across_chunks(self):
        acc = SSEAccumulator()
        line = data_line("Vamos")
        assert acc.feed(line[:15]) == []
        assert acc.feed(line[15:]) == ["Vamos"]

    def test_multibyte_character_split_across_chunks(self):
        acc = SSEAccumulator()
        raw = data_line("técnica").encode("utf-8")
        cut = raw.index("é".encode("utf-8")) + 1
        assert acc.feed_bytes(raw[:cut]) == []
        assert acc.feed_bytes(raw[cut:]) == ["técnica"]

    def test_malformed_line_does_not_block_later_lines(self):
        acc = SSEAccumulator()
        assert acc.feed('data: {"choices": [\n' + data_line("ok")) == ["ok"]
        assert acc.feed(data_line("sigue")) == ["sigue"]
        assert acc.content == "oksigue"

    def test_ignores_comments_blank_and_other_fields(self):
        acc = SSEAccumulator()
        deltas = acc.feed(": keep-alive\n\nevent: message\r\n" + data_line("ok"))
        assert deltas == ["ok"]

    def test_chunks_without_content(self):
        acc = SSEAccumulator()
        role_only = "data: " + json.dumps({"choices": [{"delta": {"role": "assistant"}}]}) + "\n"
        no_choices = "data: " + json.dumps({"choices": []}) + "\n"
        assert acc.feed(role_only + no_choices + data_line("x")) == ["x"]

    def test_nothing_after_done(self):
        acc = SSEAccumulator()
        acc.feed("data: [DONE]\n")
        assert acc.feed(data_line("late")) == []
        assert acc.flush() == []
        assert acc.content == ""

    def test_flush_handles_unterminated_last_line(self):
        acc = SSEAccumulator()
        assert acc.feed(data_line("uno") + data_line("dos").rstrip("\n")) == ["uno"]
        assert acc.flush() == ["dos"]
        assert acc.content == "unodos"

    def test_flush_skips_broken_json(self):
        acc = SSEAccumulator()
        acc.feed('data: {"choices": [')
        assert acc.flush() == []
        assert acc.content == ""
