"""Tests for style identifiers, definitions and the shared registry."""

import pytest

from overlay_core.errors import StyleNamingConflict
from styling import (
    DEFAULT_PALETTE,
    StyleAssigner,
    StyleDefinition,
    StyleRegistry,
    color_for,
    style_id_for,
)


# ── style_id_for ───────────────────────────────────────────────

class TestStyleIdFor:
    def test_category_plus_index(self):
        assert style_id_for("bubble", 3) == "bubble3"
        assert style_id_for("selectionCube", 0) == "selectionCube0"

    def test_deterministic(self):
        assert style_id_for("bubble", 7) == style_id_for("bubble", 7)

    def test_collision_free_across_categories(self):
        categories = ["a", "ab", "b", "a_b", "a-b"]
        ids = [style_id_for(c, i) for c in categories for i in range(25)]
        assert len(ids) == len(set(ids))

    @pytest.mark.parametrize("category", ["bubble1", "", "1abc", "has space", None])
    def test_invalid_category(self, category):
        with pytest.raises(ValueError):
            style_id_for(category, 1)

    @pytest.mark.parametrize("index", [-1, 1.5, True, "2"])
    def test_invalid_index(self, index):
        with pytest.raises(ValueError):
            style_id_for("bubble", index)


# ── StyleDefinition ────────────────────────────────────────────

class TestStyleDefinition:
    def test_formats_values(self):
        d = StyleDefinition.of("cube", {"fill": "blue", "opacity": 0.15})
        assert d.as_dict() == {"fill": "blue", "opacity": "0.15"}
        assert d.to_css() == ".cube { fill: blue; opacity: 0.15 }"

    def test_owner_not_part_of_identity(self):
        a = StyleDefinition.of("x", {"fill": "red"}, owner="one")
        b = StyleDefinition.of("x", {"fill": "red"}, owner="two")
        assert a.same_as(b)

    def test_statement_order_ignored(self):
        a = StyleDefinition.of("x", {"fill": "red", "stroke": "black"})
        b = StyleDefinition.of("x", {"stroke": "black", "fill": "red"})
        assert a.same_as(b)

    def test_invalid_name(self):
        with pytest.raises(ValueError):
            StyleDefinition.of("not a name", {})


# ── StyleRegistry ──────────────────────────────────────────────

class TestStyleRegistry:
    def test_register_same_definition_many_times(self):
        reg = StyleRegistry()
        results = [reg.register(StyleDefinition.of("bubble1", {"fill": "red"})) for _ in range(5)]
        assert results == [True, False, False, False, False]
        assert len(reg) == 1
        assert reg.conflicts == []

    def test_conflict_keeps_first_definition(self):
        reg = StyleRegistry()
        original = StyleDefinition.of("bubble1", {"fill": "red"}, owner="first")
        reg.register(original)

        stored = reg.register(StyleDefinition.of("bubble1", {"fill": "green"}, owner="second"))

        assert stored is False
        assert reg.get("bubble1") is original
        assert len(reg.conflicts) == 1
        conflict = reg.conflicts[0]
        assert conflict.name == "bubble1"
        assert conflict.rejected.as_dict() == {"fill": "green"}

    def test_add_raises_on_conflict(self):
        reg = StyleRegistry()
        reg.add(StyleDefinition.of("cube", {"fill": "blue"}))
        with pytest.raises(StyleNamingConflict) as exc:
            reg.add(StyleDefinition.of("cube", {"fill": "red"}))
        assert exc.value.name == "cube"
        # add() does not record; only register() does
        assert reg.conflicts == []

    def test_contains_and_order(self):
        reg = StyleRegistry()
        reg.register(StyleDefinition.of("b", {"fill": "red"}))
        reg.register(StyleDefinition.of("a", {"fill": "red"}))
        assert "a" in reg and reg.contains("b")
        assert reg.names == ["b", "a"]
        assert [d.name for d in reg] == ["b", "a"]

    def test_to_css(self):
        reg = StyleRegistry()
        reg.register(StyleDefinition.of("a", {"fill": "red"}))
        reg.register(StyleDefinition.of("b", {"stroke": "blue"}))
        assert reg.to_css() == ".a { fill: red }\n.b { stroke: blue }"


# ── StyleAssigner ──────────────────────────────────────────────

class TestStyleAssigner:
    def test_ensure_registers_once(self):
        reg = StyleRegistry()
        assigner = StyleAssigner(reg, owner="bubbles")
        ids = [assigner.ensure("bubble", 2, {"fill": "red"}) for _ in range(3)]
        assert ids == ["bubble2"] * 3
        assert len(reg) == 1
        assert reg.get("bubble2").owner == "bubbles"

    def test_two_assigners_share_registry(self):
        reg = StyleRegistry()
        StyleAssigner(reg, owner="one").ensure_named("cube", {"fill": "blue"})
        StyleAssigner(reg, owner="two").ensure_named("cube", {"fill": "blue"})
        assert len(reg) == 1
        assert reg.conflicts == []

    def test_conflict_does_not_reach_caller(self):
        reg = StyleRegistry()
        StyleAssigner(reg).ensure_named("cube", {"fill": "blue"})
        name = StyleAssigner(reg).ensure_named("cube", {"fill": "red"})
        assert name == "cube"
        assert reg.get("cube").as_dict() == {"fill": "blue"}
        assert len(reg.conflicts) == 1


class TestPalette:
    def test_first_color(self):
        assert color_for(1) == DEFAULT_PALETTE[0]

    def test_cycles(self):
        assert color_for(len(DEFAULT_PALETTE) + 1) == color_for(1)

    def test_index_is_one_based(self):
        with pytest.raises(ValueError):
            color_for(0)
