import os
from dataclasses import replace
from typing import List

from redefine.model.types import Component

LIBRARY_DOCS = "index.md"


def strip_source_prefix(components: List[Component], base_folder: str) -> List[Component]:
    """Make each component's `source_path` relative to `base_folder`."""
    prefix = base_folder.replace("\\", "/").rstrip("/")

    stripped = []
    for comp in components:
        source_path = comp.source_path
        if source_path == prefix:
            source_path = ""
        elif source_path.startswith(prefix + "/"):
            source_path = source_path[len(prefix) + 1:]
        stripped.append(replace(comp, source_path=source_path))

    return stripped


def attach_docs(components: List[Component], docs_folder: str) -> List[Component]:
    if not docs_folder:
        return list(components)

    documented = []
    for comp in components:
        doc_file = os.path.join(docs_folder, comp.source_path, comp.name + ".md")
        if os.path.isfile(doc_file):
            with open(doc_file, "r", encoding="utf-8") as f:
                comp = replace(comp, docs=f.read())
        documented.append(comp)

    return documented


def read_library_docs(docs_folder: str) -> str:
    if not docs_folder:
        return ""

    index_path = os.path.join(docs_folder, LIBRARY_DOCS)
    if not os.path.isfile(index_path):
        return ""

    with open(index_path, "r", encoding="utf-8") as f:
        return f.read()
