from redefine.model.types import Component, ComponentType
from redefine.utils.docs import attach_docs, read_library_docs, strip_source_prefix


def make(name, source_path):
    return Component(name=name, source_path=source_path, component_type=ComponentType.REACT_CLASS_COMPONENT)


def test_strip_source_prefix():
    components = [
        make("Button", "/lib/src/buttons"),
        make("Root", "/lib/src"),
        make("Other", "/elsewhere"),
        make("Similar", "/lib/srcx"),
    ]
    stripped = strip_source_prefix(components, "/lib/src/")

    assert [c.source_path for c in stripped] == ["buttons", "", "/elsewhere", "/lib/srcx"]
    # originals stay untouched
    assert components[0].source_path == "/lib/src/buttons"


def test_attach_docs(tmp_path):
    (tmp_path / "buttons").mkdir()
    (tmp_path / "buttons" / "Button.md").write_text("# Button", encoding="utf-8")

    components = [make("Button", "buttons"), make("Link", "buttons")]
    documented = attach_docs(components, str(tmp_path))

    assert documented[0].docs == "# Button"
    assert documented[1].docs == ""
    assert attach_docs(components, "") == components


def test_read_library_docs(tmp_path):
    assert read_library_docs("") == ""
    assert read_library_docs(str(tmp_path)) == ""

    (tmp_path / "index.md").write_text("Library docs", encoding="utf-8")
    assert read_library_docs(str(tmp_path)) == "Library docs"
