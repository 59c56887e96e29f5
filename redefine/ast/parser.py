import time
import traceback
from typing import Dict, Iterable

import tree_sitter_typescript
from tqdm import tqdm
from tree_sitter import Language, Parser

from redefine.ast.converter import AstConverter
from redefine.ast.nodes import SourceFile
from redefine.ast.syntax_kind import SyntaxKind
from redefine.utils.files import read_source


class TypeScriptParser:
    """
    One parsing session. The TSX grammar handles .ts, .tsx, .js and .jsx
    alike, so a single kind catalog serves every file of the session.
    """

    def __init__(self):
        self.language = Language(tree_sitter_typescript.language_tsx())
        self.parser = Parser(self.language)
        self.syntax_kind = SyntaxKind.from_language(self.language)

    def parse(self, code: str, file_name: str = "") -> SourceFile:
        source_bytes = code.encode('utf-8')
        tree = self.parser.parse(source_bytes)
        return AstConverter(source_bytes, self.syntax_kind).convert(tree.root_node, file_name)

    def parse_file(self, file_path: str) -> SourceFile:
        return self.parse(read_source(file_path), file_path)

    def build_ast_for_files(self, files: Iterable[str]) -> Dict[str, SourceFile]:
        start = time.time()
        file_ast_map = {}
        for file_path in tqdm(list(files), desc="Parsing files"):
            try:
                file_ast_map[file_path] = self.parse_file(file_path)
            except Exception:
                print(traceback.format_exc())
                print(f"Unable to process - {file_path}. Skipping it.")

        print(f"Parsed {len(file_ast_map)} files in {time.time() - start:.2f}s")
        return file_ast_map
