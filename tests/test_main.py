import json
import sys

import pytest

from redefine import main as cli
from redefine.main import create_components_json

BUTTON = """import React from 'react';

interface ButtonProps {
    /** Text of the button. */
    label: string;
    kind?: 'primary' | 'link';
}

/**
 * A clickable button.
 */
export default class Button extends React.Component<ButtonProps> {
    static defaultProps = { kind: 'primary' };

    render() {
        return <button>{this.props.label}</button>;
    }
}
"""

ALERT = """
/** Shows a message. */
export function Alert() {
    return <div role="alert" />;
}
"""


@pytest.fixture
def library(tmp_path):
    src = tmp_path / "src"
    (src / "buttons").mkdir(parents=True)
    (src / "buttons" / "Button.tsx").write_text(BUTTON, encoding="utf-8")
    (src / "Alert.tsx").write_text(ALERT, encoding="utf-8")
    (src / "Alert.d.ts").write_text("export declare function Alert(): any;", encoding="utf-8")

    docs = tmp_path / "docs"
    (docs / "buttons").mkdir(parents=True)
    (docs / "buttons" / "Button.md").write_text("# Button docs", encoding="utf-8")
    (docs / "index.md").write_text("# Library", encoding="utf-8")

    (tmp_path / "package.json").write_text(json.dumps({
        "name": "ui-kit",
        "version": "2.0.0",
        "description": "A UI kit",
        "main": "dist/index.js",
        "license": "MIT",
        "author": {"name": "Jane", "email": "jane@example.com"},
        "redefine": {"baseFolder": "src", "docsFolder": "../docs", "title": "UI Kit"},
    }), encoding="utf-8")
    return tmp_path


def test_create_components_json(library):
    output_path = create_components_json(str(library))
    assert output_path == str(library / "dist" / "components.json")

    with open(output_path, encoding="utf-8") as f:
        payload = json.load(f)

    assert payload["title"] == "UI Kit"
    assert payload["description"] == "A UI kit"
    assert payload["version"] == "2.0.0"
    assert payload["license"] == "MIT"
    assert payload["libDocs"] == "# Library"
    assert payload["author"] == {"name": "Jane", "email": "jane@example.com", "url": ""}

    components = payload["components"]
    assert [c["name"] for c in components] == ["Alert", "Button"]

    alert, button = components
    assert alert["sourcePath"] == ""
    assert alert["componentType"] == 1
    assert alert["description"] == "Shows a message."
    assert alert["docs"] == ""

    assert button["sourcePath"] == "buttons"
    assert button["componentType"] == 0
    assert button["description"] == "A clickable button."
    assert button["docs"] == "# Button docs"
    assert [p["name"] for p in button["props"]] == ["label", "kind"]
    assert button["props"][1]["type"] == "$enum"
    assert button["props"][1]["defaultValue"] == "primary"
    assert button["props"][1]["enumOf"] == [
        {"name": "primary", "type": "string"},
        {"name": "link", "type": "string"},
    ]


def test_create_components_json_explicit_output(library, tmp_path):
    output = tmp_path / "out" / "components.json"
    assert create_components_json(str(library), str(output)) == str(output)
    assert output.exists()


def test_cli_extract(library, monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["redefine", "extract", str(library)])
    cli.main()

    out = capsys.readouterr().out
    assert "Components JSON written to:" in out
    assert (library / "dist" / "components.json").exists()


def test_cli_print_file(library, monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["redefine", "print_file", str(library / "src" / "Alert.tsx")])
    cli.main()

    out = capsys.readouterr().out
    assert '"name": "Alert"' in out


def test_cli_errors_exit_with_status_one(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["redefine", "extract", str(tmp_path / "missing")])
    with pytest.raises(SystemExit) as exc_info:
        cli.main()

    assert exc_info.value.code == 1
    assert capsys.readouterr().err.startswith("Error:")
    assert not (tmp_path / "missing").exists()
