from pathlib import Path
import shutil

from mugo_menu.menu_constants import BACKUP_SUFFIX

def atomic_write_text(text: str, out: Path) -> None:
    out = Path(out)
    out.parent.mkdir(parents=True, exist_ok=True)
    tmp = out.with_suffix(out.suffix + ".tmp")
    with open(tmp, "w", encoding="utf-8") as f:
        f.write(text)
    tmp.replace(out)             # atomic replace on same filesystem

def write_with_backup(text: str, out: Path) -> Path | None:
    """Copy the current file to <name>.bak, then atomically replace it. Returns the backup path."""
    out = Path(out)
    backup = None
    if out.exists():
        backup = out.with_name(out.name + BACKUP_SUFFIX)
        shutil.copyfile(out, backup)
    atomic_write_text(text, out)
    return backup
