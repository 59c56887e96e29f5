import json
import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

CONFIG_FILE = "redefine.config.json"
PACKAGE_JSON = "package.json"

DEFAULT_INCLUDES = ["*.ts", "*.tsx", "*.js", "*.jsx"]
DEFAULT_EXCLUDES = ["node_modules/", "*.d.ts"]

# npm person shorthand: "Name <email> (url)"
AUTHOR_PATTERN = re.compile(r"^\s*([^<(]*?)\s*(?:<([^>]*)>)?\s*(?:\(([^)]*)\))?\s*$")


@dataclass
class PackageAuthor:
    name: str = ""
    email: str = ""
    url: str = ""

    @classmethod
    def from_value(cls, value) -> "PackageAuthor":
        if isinstance(value, dict):
            return cls(
                name=value.get("name", "") or "",
                email=value.get("email", "") or "",
                url=value.get("url", "") or "",
            )
        if isinstance(value, str):
            match = AUTHOR_PATTERN.match(value)
            if match:
                return cls(*(group or "" for group in match.groups()))
            return cls(name=value.strip())
        return cls()

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "email": self.email, "url": self.url}


@dataclass
class PackageJson:
    name: str = ""
    version: str = ""
    description: str = ""
    home_page: str = ""
    author: PackageAuthor = field(default_factory=PackageAuthor)
    license: str = ""
    main_file: str = ""
    redefine: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PackageJson":
        return cls(
            name=data.get("name", "") or "",
            version=data.get("version", "") or "",
            description=data.get("description", "") or "",
            home_page=data.get("homepage", "") or data.get("homePage", "") or "",
            author=PackageAuthor.from_value(data.get("author")),
            license=data.get("license", "") or "",
            main_file=data.get("main", "") or "",
            redefine=data.get("redefine"),
        )


@dataclass
class RedefineConfig:
    """
    Resolved run configuration. `base_folder` and `docs_folder` are absolute;
    `config_folder` is the folder the configuration was loaded from.
    """
    base_folder: str
    includes: List[str] = field(default_factory=lambda: list(DEFAULT_INCLUDES))
    excludes: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDES))
    docs_folder: str = ""
    title: str = ""
    library_path: str = ""
    library_url: str = ""
    package_json: Optional[PackageJson] = None
    config_folder: str = ""


def read_json(file_path: str) -> Dict[str, Any]:
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ValueError(f"Unable to read {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {file_path}")
    return data


def load_package_json(folder: str) -> Optional[PackageJson]:
    package_path = os.path.join(folder, PACKAGE_JSON)
    if not os.path.isfile(package_path):
        return None
    return PackageJson.from_dict(read_json(package_path))


def _string_list(raw: Dict[str, Any], key: str, default: List[str]) -> List[str]:
    value = raw.get(key)
    if not value:
        return list(default)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"'{key}' must be a list of glob patterns")
    return list(value)


def build_config(config_folder: str, raw: Dict[str, Any], package_json: Optional[PackageJson] = None) -> RedefineConfig:
    base_folder = os.path.abspath(os.path.join(config_folder, raw.get("baseFolder", "") or ""))
    if not os.path.isdir(base_folder):
        raise ValueError(f"Base folder does not exist: {base_folder}")

    docs_folder = raw.get("docsFolder", "") or ""
    if docs_folder:
        docs_folder = os.path.abspath(os.path.join(base_folder, docs_folder))

    return RedefineConfig(
        base_folder=base_folder,
        includes=_string_list(raw, "includes", DEFAULT_INCLUDES),
        excludes=_string_list(raw, "excludes", DEFAULT_EXCLUDES),
        docs_folder=docs_folder,
        title=raw.get("title", "") or os.path.basename(base_folder),
        library_path=raw.get("libraryPath", "") or "",
        library_url=raw.get("libraryUrl", "") or "",
        package_json=package_json,
        config_folder=config_folder,
    )


def load_config(base_folder: Optional[str] = None) -> RedefineConfig:
    """
    Load the configuration for `base_folder` (the current directory when
    omitted). `redefine.config.json` wins over the `redefine` key of
    `package.json`; defaults apply when neither is present.
    """
    config_folder = os.path.abspath(base_folder or os.getcwd())
    if not os.path.isdir(config_folder):
        raise ValueError(f"Base folder does not exist: {config_folder}")

    package_json = load_package_json(config_folder)

    config_path = os.path.join(config_folder, CONFIG_FILE)
    if os.path.isfile(config_path):
        print(f"Init using {CONFIG_FILE}...")
        raw = read_json(config_path)
    elif package_json is not None and package_json.redefine is not None:
        print(f"Init using the redefine key of {PACKAGE_JSON}...")
        raw = package_json.redefine
        if not isinstance(raw, dict):
            raise ValueError(f"'redefine' in {PACKAGE_JSON} must be a JSON object")
    else:
        raw = {}

    return build_config(config_folder, raw, package_json)
