"""Unit and property-based tests for the response parser."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from peat.errors import AnalysisParseError
from peat.tutor import get_messages, parse_analysis, parse_reply
from peat.tutor.parser import RESPONSE_MARKER

# Text without newlines, colons, angle brackets or upper-case letters, so it
# can never form a SUMMARY/STARTER/RESPONSE marker or a </think> tag
plain_text = st.text(
    alphabet="abcdefghijklmnopqrstuvwxyz0123456789 .,?!'-",
    min_size=1,
    max_size=60,
).filter(lambda s: s.strip())


class TestParseAnalysis:
    """Tests for parse_analysis."""

    def test_example_output(self, analysis_output):
        """Test the documented example."""
        result = parse_analysis(analysis_output)

        assert result.summary == "Bees build hives."
        assert result.starters == ["Why cooperative?", "What risks?"]
        assert result.is_usable

    def test_trims_fields(self):
        """Test that summary and starters are trimmed."""
        text = "SUMMARY:    A story about trains.   \nSTARTER 1:   Do you like trains?  \n"
        result = parse_analysis(text)

        assert result.summary == "A story about trains."
        assert result.starters == ["Do you like trains?"]

    def test_ignores_surrounding_text(self):
        """Test that chatter around the markers is ignored."""
        text = (
            "Sure! Here is the analysis.\n\n"
            "SUMMARY: Cities are planting more trees.\n"
            "Some extra commentary.\n"
            "STARTER 1: Would you plant a tree?\n"
            "STARTER 2: Is your city green?\n"
            "STARTER 3: Who should pay for parks?\n"
            "Hope this helps!"
        )
        result = parse_analysis(text)

        assert result.summary == "Cities are planting more trees."
        assert result.starters == [
            "Would you plant a tree?",
            "Is your city green?",
            "Who should pay for parks?",
        ]

    def test_starters_keep_appearance_order(self):
        """Test that starters are ordered by appearance, not by number."""
        text = "SUMMARY: s\nSTARTER 3: third\nSTARTER 1: first\nSTARTER 2: second"
        result = parse_analysis(text)

        assert result.starters == ["third", "first", "second"]

    def test_missing_summary_uses_fallback(self):
        """Test that a missing summary falls back to the localized notice."""
        result = parse_analysis("STARTER 1: What do you think?")

        assert result.summary == get_messages("zh-TW").summary_fallback
        assert result.starters == ["What do you think?"]

    def test_blank_summary_uses_fallback(self):
        """Test that a SUMMARY line with no text counts as missing."""
        result = parse_analysis("SUMMARY:   \nSTARTER 1: What do you think?")

        assert result.summary == get_messages("zh-TW").summary_fallback

    def test_missing_summary_uses_locale_fallback(self):
        """Test that the fallback follows the given locale."""
        messages = get_messages("en")
        result = parse_analysis("STARTER 1: What do you think?", messages)

        assert result.summary == messages.summary_fallback

    def test_no_starters_raises(self):
        """Test that output without starters fails even with a summary."""
        with pytest.raises(AnalysisParseError):
            parse_analysis("SUMMARY: A perfectly fine summary.")

    def test_empty_text_raises(self):
        """Test that empty output fails."""
        with pytest.raises(AnalysisParseError):
            parse_analysis("")

    def test_blank_starters_are_skipped(self):
        """Test that STARTER lines with no text do not produce buttons."""
        text = "SUMMARY: s\nSTARTER 1:   \nSTARTER 2: real question"
        result = parse_analysis(text)

        assert result.starters == ["real question"]

    @given(plain_text, st.lists(plain_text, min_size=1, max_size=5))
    def test_recovers_well_formed_fields(self, summary: str, starters: list[str]):
        """Property test: well-formed output is recovered exactly, trimmed, in order."""
        lines = [f"SUMMARY: {summary}"]
        lines += [f"STARTER {i}: {starter}" for i, starter in enumerate(starters, 1)]
        result = parse_analysis("\n".join(lines))

        assert result.summary == summary.strip()
        assert result.starters == [s.strip() for s in starters]

    @given(st.one_of(st.none(), plain_text), st.lists(plain_text, max_size=5))
    def test_zero_starters_always_fails(self, summary: str | None, other_lines: list[str]):
        """Property test: output with no STARTER line always signals failure."""
        lines = list(other_lines)
        if summary is not None:
            lines.insert(0, f"SUMMARY: {summary}")
        with pytest.raises(AnalysisParseError):
            parse_analysis("\n".join(lines))


class TestParseReply:
    """Tests for parse_reply."""

    def test_example_output(self):
        """Test the documented example."""
        text = "THINK: user made an error\nRESPONSE: Good try! Use 'went' instead of 'go'."

        assert parse_reply(text) == "Good try! Use 'went' instead of 'go'."

    def test_multiline_response(self):
        """Test that the whole payload after the marker is kept."""
        text = "THINK: none\nRESPONSE: Nice point.\n\nWhat else did you notice?\n"

        assert parse_reply(text) == "Nice point.\n\nWhat else did you notice?"

    def test_repeated_markers_use_last(self):
        """Test that an echoed earlier turn does not leak into the reply."""
        text = (
            "RESPONSE: Old answer from before.\n"
            "THINK: plan the next question\n"
            "RESPONSE: New answer."
        )

        assert parse_reply(text) == "New answer."

    def test_reasoning_block_without_marker(self):
        """Test that text after the last </think> is used when RESPONSE is missing."""
        text = "<think>\nThe user wrote 'I goes'.\n</think>\n\nYou should say 'I go'. Why do you go there?"

        assert parse_reply(text) == "You should say 'I go'. Why do you go there?"

    def test_marker_after_reasoning_block(self):
        """Test a local model emitting reasoning tags and the RESPONSE marker."""
        text = "<think>plan</think>\nTHINK: fine\nRESPONSE: Great sentence!"

        assert parse_reply(text) == "Great sentence!"

    def test_no_markers_uses_last_line(self):
        """Test that the last non-empty line is used without any markers."""
        text = "I think the user is right.\nThat is a great idea!\n\n   \n"

        assert parse_reply(text) == "That is a great idea!"

    def test_empty_last_marker_uses_earlier_payload(self):
        """Test that a dangling RESPONSE marker falls back to the previous payload."""
        assert parse_reply("RESPONSE: Nice work!\nRESPONSE:") == "Nice work!"
        assert parse_reply("RESPONSE: Nice work!\nRESPONSE:   \nRESPONSE:\n") == "Nice work!"

    def test_only_empty_markers_use_text_before_them(self):
        """Test that the marker is never shown when every payload is empty."""
        assert parse_reply("THINK: plan\nHere is my reply.\nRESPONSE:") == "Here is my reply."
        assert parse_reply("<think>plan</think>\nGood point.\nRESPONSE:") == "Good point."

    def test_bare_marker(self):
        """Test that a lone marker gives an empty reply."""
        assert parse_reply("RESPONSE:") == ""
        assert parse_reply("RESPONSE: \nRESPONSE:") == ""

    def test_blank_input(self):
        """Test that blank input gives an empty reply."""
        assert parse_reply("") == ""
        assert parse_reply("  \n ") == ""

    @given(plain_text)
    def test_single_marker_returns_payload(self, payload: str):
        """Property test: one RESPONSE marker yields its trimmed payload."""
        assert parse_reply(f"THINK: thinking\nRESPONSE: {payload}") == payload.strip()

    @given(st.lists(plain_text, min_size=2, max_size=6))
    def test_many_markers_return_last_payload(self, payloads: list[str]):
        """Property test: N markers yield the payload of the last one."""
        text = "\n".join(f"THINK: step {i}\nRESPONSE: {p}" for i, p in enumerate(payloads))

        assert parse_reply(text) == payloads[-1].strip()

    @given(st.lists(st.one_of(plain_text, st.just(""), st.just("   ")), max_size=8), plain_text)
    def test_no_markers_returns_last_non_empty_line(self, lines: list[str], last: str):
        """Property test: without markers the last non-empty trimmed line is returned."""
        text = "\n".join([*lines, last, "", "  "])

        assert parse_reply(text) == last.strip()

    @given(st.text(min_size=1).filter(lambda s: s.strip()))
    def test_never_raises_on_non_empty_input(self, text: str):
        """Property test: any non-blank text gives a reply without the marker."""
        reply = parse_reply(text)

        assert isinstance(reply, str)
        assert RESPONSE_MARKER not in reply
        if any(part.strip() for part in text.split(RESPONSE_MARKER)):
            assert reply

    @given(
        st.lists(st.one_of(plain_text, st.just(""), st.just("   ")), min_size=1, max_size=6),
        st.lists(st.sampled_from(["", " ", "\n", "  \n "]), min_size=1, max_size=4),
    )
    def test_trailing_empty_markers_never_leak(self, payloads: list[str], blanks: list[str]):
        """Property test: empty trailing markers fall back to the last real payload."""
        text = "THINK: plan\n" + "".join(f"RESPONSE: {p}\n" for p in payloads)
        text += "".join(f"RESPONSE:{b}" for b in blanks)
        reply = parse_reply(text)

        assert RESPONSE_MARKER not in reply
        real = [p.strip() for p in payloads if p.strip()]
        assert reply == (real[-1] if real else "THINK: plan")
