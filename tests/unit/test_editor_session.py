"""Tests for the editor session and its dirty tracking."""
import json

import pytest

from mugo_menu.editor.session import EditorSession
from mugo_menu.errors import MenuParseError
from mugo_menu.menu.codec import menu_to_data, menu_from_data
from mugo_menu.menu_constants import NEW_GROUP_LABEL, NEW_ITEM_NAME, NEW_TAB_LABEL


def _menu():
    return menu_from_data({
        "tabs": [
            {"id": "drinks", "label": "Drinks", "groups": [
                {"label": "Hot", "items": [
                    {"name": "Espresso", "desc": "", "price": "2.50"},
                    {"name": "Cappuccino", "desc": "with milk", "price": "3.00"},
                ]},
            ]},
            {"id": "food", "label": "Food", "groups": [
                {"label": "Pizza", "items": [{"name": "Margherita", "desc": "", "price": "8.00"}]},
            ]},
            {"id": "dessert", "label": "Dessert", "groups": []},
        ]
    })


@pytest.fixture
def session():
    return EditorSession(_menu())


class TestDirtyTracking:
    """Edits mark the containing tab; saves clear every flag."""

    def test_new_session_is_clean(self, session):
        assert not session.is_dirty()
        assert not session.has_unsaved_changes

    @pytest.mark.parametrize("edit", [
        lambda s: s.set_tab_field(1, "label", "Cucina"),
        lambda s: s.set_tab_field(1, "title", "La cucina"),
        lambda s: s.set_group_label(1, 0, "Pizze"),
        lambda s: s.set_item_field(1, 0, 0, "price", "8.50"),
        lambda s: s.add_group(1),
        lambda s: s.add_item(1, 0),
        lambda s: s.delete_item(1, 0, 0),
    ])
    def test_edit_marks_only_its_tab(self, session, edit):
        edit(session)
        assert session.dirty == {1}

    def test_mark_saved_clears_all_flags(self, session):
        session.set_item_field(0, 0, 0, "price", "2.80")
        session.set_tab_field(1, "label", "Cucina")
        session.mark_saved()

        assert session.dirty == set()
        assert session.snapshot.tabs[0].groups[0].items[0].price == "2.80"
        assert not session.has_unsaved_changes

    def test_toggle_group_does_not_dirty(self, session):
        assert session.toggle_group(0, 0) is False
        assert session.toggle_group(0, 0) is True
        assert not session.is_dirty()


class TestIdempotence:
    def test_same_edit_twice_leaves_document_unchanged(self, session):
        session.set_item_field(0, 0, 1, "desc", "double shot")
        after_first = menu_to_data(session.document)
        session.set_item_field(0, 0, 1, "desc", "double shot")
        assert menu_to_data(session.document) == after_first


class TestRevert:
    def test_revert_restores_tab_and_clears_flag(self, session):
        session.set_item_field(0, 0, 0, "name", "Ristretto")
        session.set_tab_field(1, "label", "Cucina")

        assert session.revert_tab(0) is True
        assert session.document.tabs[0].groups[0].items[0].name == "Espresso"
        assert session.dirty == {1}
        assert session.document.tabs[1].label == "Cucina"

    def test_revert_uses_last_saved_snapshot(self, session):
        session.set_item_field(0, 0, 0, "price", "2.80")
        session.mark_saved()
        session.set_item_field(0, 0, 0, "price", "9.99")

        session.revert_tab(0)
        assert session.document.tabs[0].groups[0].items[0].price == "2.80"

    def test_revert_of_tab_missing_from_snapshot_is_noop(self, session):
        idx = session.add_tab()
        assert session.revert_tab(idx) is False
        assert session.is_dirty(idx)

    def test_revert_after_delete_restores_the_same_tab(self, session):
        session.delete_tab(0)
        session.set_tab_field(0, "label", "Cucina")

        assert session.revert_tab(0) is True
        assert [t.id for t in session.document.tabs] == ["food", "dessert"]
        assert session.document.tabs[0].label == "Food"
        assert session.dirty == set()

    def test_revert_after_delete_and_add(self, session):
        session.delete_tab(1)
        idx = session.add_tab(tab_id="new")

        assert session.revert_tab(idx) is False
        assert session.revert_tab(1) is True
        assert [t.id for t in session.document.tabs] == ["drinks", "dessert", "new"]

    def test_reverted_tab_is_independent_copy(self, session):
        session.revert_tab(0)
        session.set_item_field(0, 0, 0, "name", "Lungo")
        assert session.snapshot.tabs[0].groups[0].items[0].name == "Espresso"


class TestStructuralEdits:
    def test_add_tab_uses_placeholder_and_selects_it(self, session):
        idx = session.add_tab()
        tab = session.document.tabs[idx]
        assert idx == 3
        assert tab.label == NEW_TAB_LABEL
        assert tab.id.startswith("tab-")
        assert session.selected_tab == 3

    def test_add_group_and_item_placeholders(self, session):
        g = session.add_group(2)
        i = session.add_item(2, g)
        assert session.document.tabs[2].groups[g].label == NEW_GROUP_LABEL
        assert menu_to_data(session.document)["tabs"][2]["groups"][g]["items"][i] == {
            "name": NEW_ITEM_NAME, "desc": "", "price": ""
        }

    def test_delete_tab_shifts_following_flags(self, session):
        session.set_tab_field(0, "label", "Bar")
        session.set_tab_field(2, "label", "Dolci")
        session.select_tab(2)

        session.delete_tab(1)

        assert [t.id for t in session.document.tabs] == ["drinks", "dessert"]
        assert session.dirty == {0, 1}
        assert session.selected_tab == 1
        assert session.has_unsaved_changes

    def test_bad_indices_raise(self, session):
        with pytest.raises(IndexError):
            session.set_item_field(0, 0, 7, "name", "x")
        with pytest.raises(IndexError):
            session.set_tab_field(9, "label", "x")
        assert not session.is_dirty()

    def test_unknown_field_raises(self, session):
        with pytest.raises(ValueError, match="Unknown item field"):
            session.set_item_field(0, 0, 0, "calories", "12")
        with pytest.raises(ValueError, match="Unknown tab field"):
            session.set_tab_field(0, "groups", "x")


class TestApplyText:
    def test_invalid_json_applies_nothing(self, session):
        before = menu_to_data(session.document)
        with pytest.raises(MenuParseError):
            session.apply_text('{"tabs": [}')
        assert menu_to_data(session.document) == before
        assert not session.is_dirty()

    def test_changed_tabs_are_marked_dirty(self, session):
        data = menu_to_data(session.document)
        data["tabs"][1]["label"] = "Cucina"
        session.apply_text(json.dumps(data))

        assert session.document.tabs[1].label == "Cucina"
        assert session.dirty == {1}
