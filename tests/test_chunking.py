"""Unit tests for transcript chunking."""

import pytest

from transcript_cleaner.utils.chunking import chunk_transcript, split_turns


def _turn(label, n_words):
    return f"{label}\n" + " ".join(["revenue"] * n_words)


class TestSplitTurns:
    def test_splits_at_labels_and_keeps_preamble(self):
        text = "Welcome.\nJane Smith (CEO)\nHi.\nJohn Doe (CFO)\nHello."
        assert split_turns(text) == [
            "Welcome.",
            "Jane Smith (CEO)\nHi.",
            "John Doe (CFO)\nHello.",
        ]

    def test_leading_label_does_not_create_empty_turn(self):
        text = "Jane Smith (CEO)\nHi."
        assert split_turns(text) == [text]


class TestChunkTranscript:
    def test_empty_input(self):
        assert chunk_transcript("") == []
        assert chunk_transcript("   \n  ") == []

    def test_short_transcript_is_one_chunk(self):
        text = _turn("Jane Smith (CEO)", 5)
        assert chunk_transcript(text, max_chars=1000) == [text]

    def test_chunks_break_at_turns(self):
        turns = [_turn(label, 8) for label in ("Jane Smith (CEO)", "John Doe (CFO)", "Krista Lee (Operator)")]
        text = "\n".join(turns)
        chunks = chunk_transcript(text, max_chars=120)

        assert len(chunks) == 3
        assert all(len(c) <= 120 for c in chunks)
        assert "\n".join(chunks) == text
        assert chunks == turns

    def test_small_turns_are_packed_together(self):
        turns = [_turn(label, 2) for label in ("Jane Smith (CEO)", "John Doe (CFO)")]
        text = "\n".join(turns)
        assert chunk_transcript(text, max_chars=1000) == [text]

    def test_oversized_turn_splits_at_lines(self):
        lines = ["Jane Smith (CEO)"] + [f"Line {i} " + "x" * 20 for i in range(6)]
        text = "\n".join(lines)
        chunks = chunk_transcript(text, max_chars=70)

        assert len(chunks) > 1
        assert all(len(c) <= 70 for c in chunks)
        assert "\n".join(chunks) == text

    def test_single_long_line_kept_whole(self):
        text = "x" * 200
        assert chunk_transcript(text, max_chars=50) == [text]

    def test_blank_lines_survive_rejoin(self):
        text = "\nJane Smith (CEO)\n\nHello there.\n\nJohn Doe (CFO)\n\nHi."
        chunks = chunk_transcript(text, max_chars=25)
        assert "\n".join(chunks) == text

    def test_invalid_budget(self):
        with pytest.raises(ValueError):
            chunk_transcript("text", max_chars=0)
