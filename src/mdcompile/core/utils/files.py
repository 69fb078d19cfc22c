"""Source file discovery for a collection"""

from pathlib import Path


MD_EXTENSION = ".md"


def discover_ids(source_dir: Path) -> list[str]:
    """Return sorted document ids (filename stems) of the .md files directly under source_dir."""
    if not source_dir.is_dir():
        return []
    return sorted(p.stem for p in source_dir.iterdir() if p.is_file() and p.suffix == MD_EXTENSION)
