# tests/domain/test_variable_store.py
from domain.variable_store import VariableStore


class TestVariableStore:
    def test_add_and_get(self):
        store = VariableStore()
        store.add("token", "abc")
        assert store.get("token") == "abc"
        assert "token" in store
        assert len(store) == 1

    def test_add_overwrites_last_write_wins(self):
        store = VariableStore()
        store.add("id", "1")
        store.add("id", "2")
        assert store.get("id") == "2"
        assert len(store) == 1

    def test_initial_values(self):
        store = VariableStore({"tenant": "acme"})
        assert store.snapshot() == {"tenant": "acme"}

    def test_get_missing_returns_default(self):
        store = VariableStore()
        assert store.get("missing") is None
        assert store.get("missing", "x") == "x"

    def test_patch_replaces_every_occurrence(self):
        store = VariableStore({"id": "42", "host": "api.example.com"})
        result = store.patch("https://${host}/users/${id}?again=${id}")
        assert result == "https://api.example.com/users/42?again=42"

    def test_patch_allows_spaces_inside_braces(self):
        store = VariableStore({"id": "42"})
        assert store.patch("/users/${ id }") == "/users/42"

    def test_patch_leaves_unknown_placeholder_literal(self):
        store = VariableStore({"id": "42"})
        assert store.patch("${id}-${unknown}") == "42-${unknown}"

    def test_patch_without_placeholder_is_unchanged(self):
        store = VariableStore({"id": "42"})
        assert store.patch("plain text {id}") == "plain text {id}"

    def test_patch_empty_and_none(self):
        store = VariableStore()
        assert store.patch("") == ""
        assert store.patch(None) == ""

    def test_patch_does_not_rescan_replacement_text(self):
        store = VariableStore({"a": "${b}", "b": "B"})
        assert store.patch("${a}") == "${b}"

    def test_patch_is_idempotent_on_resolved_strings(self):
        store = VariableStore({"user": "alice", "id": "7"})
        template = '{"user": "${user}", "id": ${id}, "other": "${nope}"}'
        once = store.patch(template)
        assert store.patch(once) == once

    def test_snapshot_is_a_copy(self):
        store = VariableStore({"a": "1"})
        snap = store.snapshot()
        snap["a"] = "changed"
        assert store.get("a") == "1"

    def test_values_are_stored_as_text(self):
        store = VariableStore()
        store.add("n", 5)
        assert store.get("n") == "5"
