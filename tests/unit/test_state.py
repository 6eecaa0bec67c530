"""Tests for the state store."""

import pytest

from slashform.core.codec import DocumentCodec
from slashform.core.errors import InvalidOptionError, UnknownFieldError
from slashform.core.registry import SchemaRegistry
from slashform.core.state import FormState, init_from_raw


class TestInitFromRaw:
    """Tests for building state from a decoded document."""

    def test_missing_keys_take_defaults(self, registry: SchemaRegistry) -> None:
        state = init_from_raw(registry, {"title": "Greet"})

        assert state["title"] == "Greet"
        assert state["type"] == "webhook"
        assert state["value_source"] == "file.md"
        assert len(state) == len(registry)

    def test_unknown_keys_are_dropped(self, registry: SchemaRegistry) -> None:
        state = init_from_raw(registry, {"title": "Greet", "owner": "octocat"})

        assert "owner" not in state
        assert "owner" not in state.to_raw()

    def test_keys_follow_registry_order(self, registry: SchemaRegistry) -> None:
        raw = {"value_source": "x.md", "title": "Greet", "type": "md_shortcut"}
        state = init_from_raw(registry, raw)
        assert list(state) == list(registry.names())

    def test_lists_are_frozen(self, registry: SchemaRegistry) -> None:
        state = init_from_raw(registry, {"surfaces": ["issue_comment"]})
        assert state["surfaces"] == ("issue_comment",)

    def test_present_null_is_kept(self, registry: SchemaRegistry) -> None:
        """A key present in the document wins over the default, even when empty."""
        state = init_from_raw(registry, {"value_source": None})
        assert state["value_source"] is None


class TestSetAndVersions:
    """Tests for copy-on-write updates."""

    def test_set_returns_new_snapshot(self, default_state: FormState) -> None:
        updated = default_state.set("title", "Greet")

        assert updated is not default_state
        assert updated["title"] == "Greet"
        assert default_state["title"] == "My slash command"
        assert updated.version == default_state.version + 1

    def test_set_unknown_field(self, default_state: FormState) -> None:
        with pytest.raises(UnknownFieldError):
            default_state.set("owner", "octocat")

    def test_set_does_not_validate(self, default_state: FormState) -> None:
        updated = default_state.set("trigger-on", "has spaces")
        assert updated["trigger-on"] == "has spaces"

    def test_snapshot_cannot_be_mutated(self, default_state: FormState) -> None:
        with pytest.raises(TypeError):
            default_state["title"] = "x"  # type: ignore[index]

    def test_equality_ignores_version(self, default_state: FormState) -> None:
        same = default_state.set("title", "x").set("title", "My slash command")
        assert same == default_state
        assert same.version == default_state.version + 2

    def test_mapping_interface(self, default_state: FormState) -> None:
        assert default_state.get("title") == "My slash command"
        assert default_state.get("owner") is None
        assert "surfaces" in default_state


class TestToggle:
    """Tests for multi-select option toggling."""

    def test_add_follows_option_order(self, registry: SchemaRegistry) -> None:
        state = init_from_raw(registry, {"surfaces": ["pull_request_comment"]})

        updated = state.toggle("surfaces", "issue_description")

        assert updated["surfaces"] == ("issue_description", "pull_request_comment")

    def test_remove_from_populated_list(self, default_state: FormState) -> None:
        updated = default_state.toggle("surfaces", "issue_comment")

        assert updated["surfaces"] == (
            "issue_description",
            "pull_request_description",
            "pull_request_comment",
        )

    def test_toggle_twice_restores(self, default_state: FormState) -> None:
        updated = default_state.toggle("surfaces", "issue_comment").toggle(
            "surfaces", "issue_comment"
        )
        assert updated == default_state

    def test_undeclared_values_are_kept_after_options(self, registry: SchemaRegistry) -> None:
        state = init_from_raw(registry, {"surfaces": ["discussion", "issue_comment"]})

        updated = state.toggle("surfaces", "issue_description")

        assert updated["surfaces"] == ("issue_description", "issue_comment", "discussion")

    def test_toggle_empty_value(self, registry: SchemaRegistry) -> None:
        state = init_from_raw(registry, {"surfaces": None})
        assert state.toggle("surfaces", "issue_comment")["surfaces"] == ("issue_comment",)

    def test_toggle_non_multi_select(self, default_state: FormState) -> None:
        with pytest.raises(InvalidOptionError, match="only multi-select"):
            default_state.toggle("type", "webhook")

    def test_toggle_undeclared_option(self, default_state: FormState) -> None:
        with pytest.raises(InvalidOptionError, match="not an option"):
            default_state.toggle("surfaces", "discussion")


class TestRoundTripThroughCodec:
    """parse(serialize(state)) reproduces state under init_from_raw."""

    @pytest.mark.parametrize(
        "edits",
        [
            {},
            {"type": "md_shortcut", "value": "Hi\nthere", "value_source": ""},
            {"surfaces": [], "description": "multi\nline\n", "trigger-on": "has space"},
            {"title": "true", "trigger-on": "42"},
        ],
    )
    def test_round_trip(
        self, registry: SchemaRegistry, codec: DocumentCodec, default_state: FormState, edits
    ) -> None:
        state = default_state
        for name, value in edits.items():
            state = state.set(name, value)

        restored = init_from_raw(registry, codec.parse(codec.serialize(state.to_raw())))

        assert restored == state
        assert restored.to_raw() == state.to_raw()

    def test_unknown_key_never_reintroduced(
        self, registry: SchemaRegistry, codec: DocumentCodec
    ) -> None:
        state = init_from_raw(registry, codec.parse("title: Greet\nowner: octocat\n"))
        text = codec.serialize(state.set("title", "Hi").to_raw())
        assert "owner" not in text
