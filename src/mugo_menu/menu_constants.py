# Keys of the local key/value store (the browser localStorage keys of the web admin)
MENU_CACHE_KEY = "mugo-menu-json"
AUTH_FLAG_KEY = "mugo-admin-auth"
AUTH_TOKEN_KEY = "mugo-admin-token"
REMOTE_TOKEN_KEY = "mugo-remote-token"

MENU_FILENAME = "menu.json"
BACKUP_SUFFIX = ".bak"
JSON_INDENT = 2

AUTH_REALM = "MUGO Admin"

# Editable fields per level of the document
TAB_FIELDS: tuple[str, ...] = ("id", "label", "title")
ITEM_FIELDS: tuple[str, ...] = ("name", "desc", "price")

# Placeholders used by the admin editor when creating new entries
NEW_TAB_LABEL = "Nuova Categoria"
NEW_GROUP_LABEL = "Nuova sezione"
NEW_ITEM_NAME = "Nuova voce"
