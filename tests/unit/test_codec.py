"""Tests for the YAML document codec."""

import pytest

from slashform.core.codec import DocumentCodec
from slashform.core.errors import DecodeError, ErrorContext
from slashform.core.state import FormState


class TestParse:
    """Tests for decoding document text."""

    def test_parse_mapping(self, codec: DocumentCodec) -> None:
        raw = codec.parse("title: Greet\nsurfaces:\n  - issue_comment\n")
        assert raw == {"title": "Greet", "surfaces": ["issue_comment"]}

    @pytest.mark.parametrize("text", ["", "   \n", "# only a comment\n"])
    def test_empty_document(self, codec: DocumentCodec, text: str) -> None:
        assert codec.parse(text) == {}

    def test_malformed_yaml(self, codec: DocumentCodec) -> None:
        with pytest.raises(DecodeError) as exc_info:
            codec.parse('title: "unterminated\ntype: webhook\n')

        error = exc_info.value
        assert error.message
        assert error.line is not None
        assert error.column is not None

    def test_error_location_and_snippet(self, codec: DocumentCodec) -> None:
        text = "title: ok\ntype: [webhook\n"
        with pytest.raises(DecodeError) as exc_info:
            codec.parse(text, source="command.yml")

        error = exc_info.value
        assert "command.yml:" in str(error)
        assert error.message in str(error)

    def test_top_level_list_is_rejected(self, codec: DocumentCodec) -> None:
        with pytest.raises(DecodeError, match="must be a mapping"):
            codec.parse("- a\n- b\n")

    def test_top_level_scalar_is_rejected(self, codec: DocumentCodec) -> None:
        with pytest.raises(DecodeError, match="got str"):
            codec.parse("just some words\n")


class TestErrorContext:
    """Tests for the location and excerpt shown with decode errors."""

    def test_excerpt_numbers_lines_from_snippet_start(self) -> None:
        context = ErrorContext(line=4, column=7, snippet="a: 1\nb: 2\ntype: [x", snippet_start=2)

        assert context.excerpt() == [
            "   2 | a: 1",
            "   3 | b: 2",
            "   4 | type: [x",
            " " * 13 + "^",
        ]

    def test_no_snippet_no_excerpt(self) -> None:
        context = ErrorContext(line=1, column=1)

        assert context.excerpt() == []
        assert context.format() == "line 1, column 1"

    def test_format_with_source(self) -> None:
        context = ErrorContext(line=1, column=3, snippet="ab: [", source="command.yml")

        assert context.format().splitlines()[0] == "command.yml:1:3"
        assert context.format().splitlines()[-1] == " " * 9 + "^"


class TestSerialize:
    """Tests for encoding mappings."""

    def test_key_order_is_mapping_order(self, codec: DocumentCodec) -> None:
        text = codec.serialize({"zeta": "1", "alpha": "2"})
        assert text.index("zeta") < text.index("alpha")

    def test_lists_are_block_sequences(self, codec: DocumentCodec) -> None:
        text = codec.serialize({"surfaces": ["issue_comment", "pull_request_comment"]})
        assert text == "surfaces:\n- issue_comment\n- pull_request_comment\n"

    def test_tuples_serialize_as_lists(self, codec: DocumentCodec) -> None:
        assert codec.serialize({"a": ("x", "y")}) == codec.serialize({"a": ["x", "y"]})

    def test_multiline_text_uses_literal_block(self, codec: DocumentCodec) -> None:
        text = codec.serialize({"value": "line one\nline two"})
        assert text.startswith("value: |")
        assert codec.parse(text) == {"value": "line one\nline two"}

    def test_strings_that_look_like_other_types_stay_strings(self, codec: DocumentCodec) -> None:
        mapping = {"a": "yes", "b": "123", "c": "", "d": "null"}
        assert codec.parse(codec.serialize(mapping)) == mapping

    def test_unicode_written_as_is(self, codec: DocumentCodec) -> None:
        assert "héllo" in codec.serialize({"title": "héllo"})

    def test_shared_lists_are_not_aliased(self, codec: DocumentCodec) -> None:
        shared = ["a"]
        text = codec.serialize({"x": shared, "y": shared})
        assert "&" not in text
        assert "*" not in text

    def test_deterministic(self, codec: DocumentCodec, default_state: FormState) -> None:
        raw = default_state.to_raw()
        assert codec.serialize(raw) == codec.serialize(dict(raw))


class TestRoundTrip:
    """serialize(parse(serialize(m))) == serialize(m) for codec-produced mappings."""

    def test_default_state(self, codec: DocumentCodec, default_state: FormState) -> None:
        text = codec.serialize(default_state.to_raw())
        assert codec.serialize(codec.parse(text)) == text

    def test_edited_state(self, codec: DocumentCodec, default_state: FormState) -> None:
        state = (
            default_state.set("type", "md_shortcut")
            .set("value", "Line 1\nLine 2\n")
            .set("title", "Colon: in title")
            .set("surfaces", [])
        )
        text = codec.serialize(state.to_raw())
        assert codec.serialize(codec.parse(text)) == text

    def test_comments_are_not_preserved(self, codec: DocumentCodec) -> None:
        text = "# heading\ntitle: Greet  # inline\n"
        assert codec.serialize(codec.parse(text)) == "title: Greet\n"
