import argparse
import json
import os
import sys
from typing import Any, Dict, List, Optional

from redefine.ast.parser import TypeScriptParser
from redefine.extractors.react_extractor import ReactComponentExtractor, get_components
from redefine.model.types import Component
from redefine.utils.config import PackageJson, RedefineConfig, load_config
from redefine.utils.docs import attach_docs, read_library_docs, strip_source_prefix
from redefine.utils.files import scan_folder, write_json

COMPONENTS_JSON = "components.json"


def sort_components(components: List[Component]) -> List[Component]:
    return sorted(components, key=lambda comp: comp.name)


def build_payload(config: RedefineConfig, components: List[Component]) -> Dict[str, Any]:
    package_json = config.package_json or PackageJson()
    return {
        "title": config.title,
        "description": package_json.description,
        "libDocs": read_library_docs(config.docs_folder),
        "version": package_json.version,
        "homePage": package_json.home_page,
        "author": package_json.author.to_dict(),
        "license": package_json.license,
        "libraryPath": config.library_path,
        "libraryUrl": config.library_url,
        "components": [comp.to_dict() for comp in components],
    }


def get_output_folder(config: RedefineConfig) -> str:
    root_dir = config.config_folder or config.base_folder
    package_json = config.package_json
    if package_json is not None and package_json.main_file:
        return os.path.join(root_dir, os.path.dirname(package_json.main_file))
    return root_dir


def create_components_json(base_folder: Optional[str] = None, output_path: Optional[str] = None) -> str:
    config = load_config(base_folder)

    files = scan_folder(config)
    print(f"Found {len(files)} source files in: {config.base_folder}")

    parser = TypeScriptParser()
    file_ast_map = parser.build_ast_for_files(files)
    components = get_components(file_ast_map, parser.syntax_kind)

    components = sort_components(components)
    components = strip_source_prefix(components, config.base_folder)
    components = attach_docs(components, config.docs_folder)

    payload = build_payload(config, components)

    if not output_path:
        output_path = os.path.join(get_output_folder(config), COMPONENTS_JSON)
    os.makedirs(os.path.dirname(os.path.abspath(output_path)), exist_ok=True)
    write_json(output_path, payload)

    print(f"Components JSON written to: {output_path}")
    return output_path


def print_file_components(file_path: str):
    if not os.path.isfile(file_path):
        raise ValueError(f"File does not exist: {file_path}")

    extractor = ReactComponentExtractor()
    extractor.process_file(os.path.abspath(file_path))
    serializable = [comp.to_dict() for comp in extractor.extract_all_components()]
    print(json.dumps(serializable, indent=2, ensure_ascii=False))


def main():
    parser = argparse.ArgumentParser(description='Redefine - React component documentation extractor')
    subparsers = parser.add_subparsers(dest='function', help='Available functions')

    # extract
    parser_extract = subparsers.add_parser('extract', help='Extract components of a library into components.json')
    parser_extract.add_argument('base_folder', nargs='?', default=None,
                                help='Folder to scan for components (default: current directory)')
    parser_extract.add_argument('--output', default=None,
                                help='Path of the components JSON file (default: next to package.json main)')

    # print_file
    parser_print = subparsers.add_parser('print_file', help='Print the components found in a single file')
    parser_print.add_argument('file', help='Source file to extract components from')

    args = parser.parse_args()

    if not args.function:
        parser.print_help()
        return

    try:
        if args.function == 'extract':
            print(f"Extracting components from: {args.base_folder or os.getcwd()}")
            create_components_json(base_folder=args.base_folder, output_path=args.output)

        elif args.function == 'print_file':
            print_file_components(args.file)

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
