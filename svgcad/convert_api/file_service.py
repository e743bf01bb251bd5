from pathlib import Path
from typing import List
import os
import shutil
import tempfile


def list_svg_files(directory: Path) -> List[str]:
    if not directory.exists() or not directory.is_dir():
        return []
    return sorted(
        entry.name
        for entry in directory.iterdir()
        if entry.is_file() and entry.name.lower().endswith(".svg")
    )


def save_text_atomic(target_path: Path, content: str) -> Path:
    target_path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=target_path.parent,
        delete=False
    ) as tmp:
        tmp.write(content)
        tmp_path = Path(tmp.name)

    shutil.move(tmp_path, target_path)
    return target_path


def staging_path(target_path: Path) -> Path:
    target_path.parent.mkdir(parents=True, exist_ok=True)
    fd, name = tempfile.mkstemp(dir=target_path.parent, suffix=".partial")
    os.close(fd)
    return Path(name)


def commit_staged(staged: Path, target_path: Path) -> Path:
    os.replace(staged, target_path)
    return target_path
