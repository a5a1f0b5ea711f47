"""JSON (de)serialisation of menu documents."""

import json
import logging
from typing import Any

from pydantic import ValidationError

from mugo_menu.errors import MenuParseError
from mugo_menu.menu.schema import MenuDocument
from mugo_menu.menu_constants import JSON_INDENT

logger = logging.getLogger(__name__)


def menu_from_data(data: Any) -> MenuDocument:
    """Build a MenuDocument from already-decoded JSON."""
    if isinstance(data, MenuDocument):
        return data
    if not isinstance(data, dict):
        raise MenuParseError(f"Menu must be a JSON object, got {type(data).__name__}")
    try:
        return MenuDocument.model_validate(data)
    except ValidationError as e:
        raise MenuParseError(f"Invalid menu structure: {e.error_count()} error(s): {e.errors()[0]['msg']}") from e


def parse_menu(text: str) -> MenuDocument:
    """Parse editor/file text into a MenuDocument, raising MenuParseError on bad input."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MenuParseError(f"Invalid JSON: {e}") from e
    return menu_from_data(data)


def menu_to_data(document: MenuDocument) -> dict:
    return document.model_dump(mode="json")


def dump_menu(document: MenuDocument) -> str:
    """Serialise to the pretty-printed form used for menu.json."""
    return json.dumps(menu_to_data(document), indent=JSON_INDENT, ensure_ascii=False)


def empty_menu() -> MenuDocument:
    return MenuDocument(tabs=[])
