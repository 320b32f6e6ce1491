"""Tests for store key classification."""

from fade_compendiums import (
    ContentKey,
    EmbeddedKey,
    FolderKey,
    MalformedKey,
    classify_key,
)


class TestClassifyKey:
    def test_folder(self) -> None:
        kind = classify_key("!folders!F1")
        assert isinstance(kind, FolderKey)
        assert kind.id == "F1"
        assert kind.kind == "folder"

    def test_content(self) -> None:
        kind = classify_key("!actors!P1")
        assert isinstance(kind, ContentKey)
        assert kind.doc_type == "actors"
        assert kind.id == "P1"

    def test_embedded(self) -> None:
        kind = classify_key("!actors.items!P1.C1")
        assert isinstance(kind, EmbeddedKey)
        assert kind.parent_type == "actors"
        assert kind.child_type == "items"
        assert kind.parent_id == "P1"
        assert kind.child_id == "C1"
        assert kind.parent_key == "!actors!P1"

    def test_embedded_splits_on_first_dot(self) -> None:
        kind = classify_key("!actors.items.effects!P1.C1.E1")
        assert isinstance(kind, EmbeddedKey)
        assert kind.child_type == "items.effects"
        assert kind.parent_id == "P1"
        assert kind.child_id == "C1.E1"

    def test_embedded_without_child_id_is_malformed(self) -> None:
        assert isinstance(classify_key("!actors.items!P1"), MalformedKey)
        assert isinstance(classify_key("!actors.items!P1."), MalformedKey)

    def test_embedded_without_parent_id_is_malformed(self) -> None:
        assert isinstance(classify_key("!actors.items!.C1"), MalformedKey)

    def test_no_pattern_is_malformed(self) -> None:
        for key in ["actors", "!actors", "!!P1", "!actors!", ""]:
            kind = classify_key(key)
            assert isinstance(kind, MalformedKey), key
            assert kind.reason
