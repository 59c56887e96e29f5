import json
import os
from pathlib import Path
from typing import List

import chardet
import pathspec


def read_source(file_path: str) -> str:
    with open(file_path, 'rb') as f:
        raw = f.read()
    guess = chardet.detect(raw)
    encoding = guess['encoding'] or 'utf-8'
    return raw.decode(encoding, errors='replace')


def write_json(file_path: str, data) -> None:
    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def _spec(patterns) -> pathspec.PathSpec:
    return pathspec.PathSpec.from_lines("gitwildmatch", patterns)


def scan_folder(config) -> List[str]:
    """
    Absolute paths of all files under the base folder that match an include
    pattern and neither an exclude pattern nor the folder's `.gitignore`.
    """
    root_dir = Path(config.base_folder)
    includes = _spec(config.includes)
    excludes = _spec(config.excludes)

    gitignore_pth = root_dir / ".gitignore"
    gitign_pattern = gitignore_pth.read_text().splitlines() if gitignore_pth.exists() else []
    ignored = _spec(gitign_pattern)

    files = []
    for file_path in root_dir.rglob("*"):
        if not file_path.is_file():
            continue
        rel_path = file_path.relative_to(root_dir).as_posix()
        if not includes.match_file(rel_path):
            continue
        if excludes.match_file(rel_path) or ignored.match_file(rel_path):
            continue
        files.append(os.path.abspath(str(file_path)))

    return sorted(files)
