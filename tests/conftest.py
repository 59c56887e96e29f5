import pytest

from redefine.ast.parser import TypeScriptParser
from redefine.extractors.react_extractor import get_components_from_source_file


@pytest.fixture(scope="module")
def ts_parser():
    return TypeScriptParser()


@pytest.fixture(scope="module")
def extract(ts_parser):
    def _extract(code):
        source_file = ts_parser.parse(code, "testComponent.tsx")
        return get_components_from_source_file(
            source_file, ts_parser.syntax_kind, "testComponent.tsx", "in-memory/testing"
        )
    return _extract
