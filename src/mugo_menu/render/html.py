"""
Render layer - projects a menu document onto HTML element trees.

Every function is a full re-render from the document; nothing is cached or
diffed. A document that cannot be read renders as an empty container.
"""

import logging
from typing import Any, Optional, Union

from lxml import html as lxml_html
from lxml.html.builder import E

from mugo_menu.errors import MenuParseError
from mugo_menu.menu.codec import menu_from_data
from mugo_menu.menu.schema import Group, MenuDocument, Tab

logger = logging.getLogger(__name__)

DocumentLike = Union[MenuDocument, dict, Any]

EMPTY_ADMIN_MESSAGE = "Nessuna categoria. Aggiungi una categoria per iniziare."


def _coerce(document: DocumentLike) -> Optional[MenuDocument]:
    if document is None:
        return None
    try:
        return menu_from_data(document)
    except MenuParseError as e:
        logger.warning(f"Rendering empty menu, document is malformed: {e}")
        return None


def _cls(name: str) -> dict:
    return {"class": name}


def _item_article(item, name_tag: str = "h2"):
    return E.article(
        _cls("menu-item"),
        E.div(
            _cls("menu-item-main"),
            E(name_tag, _cls("menu-item-name"), item.name or ""),
            E.p(_cls("menu-item-desc"), item.desc or ""),
        ),
        E.div(_cls("menu-item-price"), item.price or ""),
    )


def _group_block(group: Group, name_tag: str = "h2"):
    block = E.div(_cls("menu-group"), E.p(_cls("menu-group-label"), group.label or ""))
    for item in group.items:
        block.append(_item_article(item, name_tag))
    return block


# ----------------------------------------------------------------------
# Storefront
# ----------------------------------------------------------------------
def render_storefront(document: DocumentLike):
    """Tab strip plus one panel per tab; the first tab is active."""
    tabs_nav = E.nav({"id": "menu-tabs", "class": "menu-tabs", "role": "tablist"})
    root = E.div({"id": "menu-root"})
    container = E.div(_cls("menu"), tabs_nav, root)

    doc = _coerce(document)
    if doc is None:
        return container

    for idx, tab in enumerate(doc.tabs):
        active = idx == 0
        tabs_nav.append(E.button(
            {
                "class": "menu-tab" + (" active" if active else ""),
                "data-target": tab.id,
                "role": "tab",
                "aria-selected": "true" if active else "false",
            },
            tab.label or tab.id,
        ))

        section = E.section(
            {"id": tab.id, "class": "menu-card" + (" active" if active else ""), "role": "tabpanel"},
            E.header(_cls("menu-card-header"), E.h1(_cls("menu-card-title-main"), tab.title or "")),
        )
        for group in tab.groups:
            section.append(_group_block(group))
        root.append(section)

    return container


# ----------------------------------------------------------------------
# Admin preview (read-only cards)
# ----------------------------------------------------------------------
def render_preview(document: DocumentLike):
    root = E.div({"id": "menu-preview"})
    doc = _coerce(document)
    if doc is None:
        return root

    for tab in doc.tabs:
        card = E.section(_cls("menu-card active"), E.h3(_cls("menu-card-title-main"), tab.title or tab.label or tab.id))
        for group in tab.groups:
            card.append(_group_block(group, name_tag="h4"))
        root.append(card)
    return root


# ----------------------------------------------------------------------
# Admin editor (editable form)
# ----------------------------------------------------------------------
def _text_input(name: str, value: str, placeholder: str):
    return E.input({"type": "text", "name": name, "value": value or "", "placeholder": placeholder})


def _admin_tab_card(tab: Tab, tab_idx: int):
    prefix = f"tabs.{tab_idx}"
    card = E.div(
        _cls("tab-card"),
        E.div(
            _cls("tab-header"),
            _text_input(f"{prefix}.label", tab.label or tab.id, "Nome categoria"),
            _text_input(f"{prefix}.id", tab.id, "Id categoria"),
        ),
    )
    groups_root = E.div(_cls("groups-root"))
    for group_idx, group in enumerate(tab.groups):
        gprefix = f"{prefix}.groups.{group_idx}"
        group_card = E.div(
            _cls("group-card" + ("" if group.is_open else " group-collapsed")),
            E.div(
                _cls("group-row"),
                _text_input(f"{gprefix}.label", group.label, "Nome sezione"),
                E.button(
                    {"class": "menu-tab group-toggle icon-btn", "title": "Chiudi sezione" if group.is_open else "Apri sezione"},
                    "▾" if group.is_open else "▸",
                ),
            ),
        )
        if group.is_open:
            items_root = E.div(_cls("items-root"))
            for item_idx, item in enumerate(group.items):
                iprefix = f"{gprefix}.items.{item_idx}"
                items_root.append(E.div(
                    _cls("item-row"),
                    E.div(
                        _cls("item-left"),
                        _text_input(f"{iprefix}.name", item.name, "Nome"),
                        _text_input(f"{iprefix}.desc", item.desc, "Descrizione"),
                    ),
                    E.div(_cls("item-right"), _text_input(f"{iprefix}.price", item.price, "Prezzo")),
                ))
            group_card.append(items_root)
        groups_root.append(group_card)
    card.append(groups_root)
    return card


def render_admin(session):
    """
    Editable view of an EditorSession: category strip (dirty tabs marked
    with '*') and the form for the selected tab.
    """
    tabs_nav = E.nav({"id": "category-tabs"})
    crud_root = E.div({"id": "crud-root"})
    container = E.div(_cls("admin"), tabs_nav, crud_root)

    doc = _coerce(getattr(session, "document", None))
    if doc is None or not doc.tabs:
        crud_root.append(E.div(EMPTY_ADMIN_MESSAGE))
        return container

    selected = session.selected_tab if 0 <= session.selected_tab < len(doc.tabs) else 0
    for idx, tab in enumerate(doc.tabs):
        label = tab.display_label(f"Categoria {idx + 1}")
        if session.is_dirty(idx):
            label += " *"
        tabs_nav.append(E.button(_cls("menu-tab" + (" active" if idx == selected else "")), label))

    crud_root.append(_admin_tab_card(doc.tabs[selected], selected))
    return container


# ----------------------------------------------------------------------
# Serialisation
# ----------------------------------------------------------------------
def to_html(element, pretty: bool = True) -> str:
    return lxml_html.tostring(element, encoding="unicode", pretty_print=pretty)


def render_page(body, title: str = "MUGO Menu", stylesheet: Optional[str] = "styles.css") -> str:
    """Wrap a rendered fragment in a complete HTML document."""
    head = E.head(E.meta({"charset": "utf-8"}), E.title(title))
    if stylesheet:
        head.append(E.link({"rel": "stylesheet", "href": stylesheet}))
    page = E.html(head, E.body(body))
    return lxml_html.tostring(page, encoding="unicode", pretty_print=True, doctype="<!DOCTYPE html>")
