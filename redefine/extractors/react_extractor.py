import time
from typing import Dict, List, Tuple

from redefine.ast.nodes import SourceFile
from redefine.ast.parser import TypeScriptParser
from redefine.base.component_extractor import ComponentExtractor
from redefine.extractors.detector import (
    extract_class_based_component,
    extract_function_based_component,
)
from redefine.model.types import Component


def get_name_and_path(file_path: str) -> Tuple[str, str]:
    """Split a file path at its last separator into (file name, directory)."""
    file_path = file_path.replace("\\", "/")
    if file_path.endswith("/"):
        file_path = file_path[:-1]

    last_slash = file_path.rfind("/")
    if last_slash < 0:
        return file_path, ""

    return file_path[last_slash + 1:], file_path[:last_slash]


def extract_components_from_source_file(name: str, path: str, source_file: SourceFile, syntax) -> List[Component]:
    print(f"Extracting components from: {path}/{name}")

    components = []
    for statement in source_file.statements:
        component = None
        if syntax.is_class_declaration(statement):
            component = extract_class_based_component(path, source_file, statement, syntax)
        elif syntax.is_function_declaration(statement):
            component = extract_function_based_component(path, source_file, statement, syntax)

        if component is not None:
            components.append(component)

    return components


def get_components(file_ast_map: Dict[str, SourceFile], syntax_kind) -> List[Component]:
    """
    Detect components across all parsed files. Results follow the map's
    iteration order; callers sort them.
    """
    start = time.time()

    components = []
    for file_path, source_file in file_ast_map.items():
        name, path = get_name_and_path(file_path)
        components.extend(extract_components_from_source_file(name, path, source_file, syntax_kind))

    print(f"Total number of components extracted: {len(components)}")
    print(f"Total time in extracting components: {time.time() - start:.3f}s")
    return components


def get_components_from_source_file(source_file: SourceFile, syntax_kind, name: str, path: str) -> List[Component]:
    return extract_components_from_source_file(name, path, source_file, syntax_kind)


class ReactComponentExtractor(ComponentExtractor):
    def __init__(self, parser: TypeScriptParser = None):
        self.parser = parser or TypeScriptParser()
        self.all_components = []

    def process_file(self, file_path):
        source_file = self.parser.parse_file(file_path)
        name, path = get_name_and_path(file_path)
        self.all_components = extract_components_from_source_file(
            name, path, source_file, self.parser.syntax_kind
        )

    def extract_all_components(self):
        return self.all_components
