import json

from redefine.ast.syntax_kind import UNKNOWN
from redefine.extractors.react_extractor import (
    ReactComponentExtractor,
    get_components,
    get_name_and_path,
)
from redefine.model.types import ComponentType

HELLO_WORLD = """import React from 'react';

    export default class HelloWorld extends React.Component {

        render() {
            return <div>Hello World</div>
        }

    }
"""

HELLO_WORLD_WITH_PROPS = """import React from 'react';

    interface HelloWorldProps {
        /**
         * I am param string.
         */
        paramString:string;

        /**
         * I am param bool.
         */
        paramBool?:bool;

        /**
         * I am param any.
         */
        paramAny:any;

        /**
         * I am param number.
         */
        paramNumber:number;

        /**
         * I am param object.
         */
        paramObject:object;

        /**
         * I am param function.
         */
        paramFunction:Function;

        /**
         * I am param arrow function.
         */
        paramEmptyArrowFunction:() => void;

        /**
         * I am param arrow function with args.
         */
        paramArrowFunction: (str:string, num:number) => object;
    }

    /**
     * This is a hello world component
     */
    export default class HelloWorld extends React.Component<HelloWorldProps> {

        static defaultProps = {
            paramString: "hello",
            paramBool:false,
            paramAny: { name: "Redefine" },
            paramNumber: 256,
            paramObject: { hello : "world" },
            paramFunction: () => {},
        }

        render() {
            return <div>Hello World</div>
        }

    }
"""

FUNCTION_COMPONENT = """
    /**
     * Simple hello world component
     */
    export function HelloWorld() {
        return <div>Hello World</div>
    }
"""


def test_empty_source_file(extract):
    assert extract("") == []


def test_class_component_with_no_props_and_no_js_doc(extract):
    components = extract(HELLO_WORLD)
    assert len(components) == 1

    component = components[0]
    assert component.name == "HelloWorld"
    assert component.source_path == "in-memory/testing"
    assert component.description == ""
    assert component.component_type == ComponentType.REACT_CLASS_COMPONENT
    assert component.props == []


def test_class_component_with_props_and_js_doc(extract):
    components = extract(HELLO_WORLD_WITH_PROPS)
    assert len(components) == 1

    component = components[0]
    assert component.description == "This is a hello world component"
    assert component.component_type == ComponentType.REACT_CLASS_COMPONENT
    assert len(component.props) == 8

    expected = [
        ("paramString", "string", True, "hello", "I am param string."),
        ("paramBool", "bool", False, "false", "I am param bool."),
        ("paramAny", "any", True, "", "I am param any."),
        ("paramNumber", "number", True, "256", "I am param number."),
        ("paramObject", "object", True, "", "I am param object."),
        ("paramFunction", "Function", True, "", "I am param function."),
    ]
    for prop, (name, prop_type, required, default_value, description) in zip(component.props, expected):
        assert prop.name == name
        assert prop.prop_type == prop_type
        assert prop.required is required
        assert prop.default_value == default_value
        assert prop.description == description
        assert prop.return_type == ""
        assert prop.params is None
        assert prop.enum_types is None

    empty_arrow = component.props[6]
    assert empty_arrow.name == "paramEmptyArrowFunction"
    assert empty_arrow.prop_type == "$function"
    assert empty_arrow.required is True
    assert empty_arrow.default_value == ""
    assert empty_arrow.description == "I am param arrow function."
    assert empty_arrow.return_type == "void"
    assert empty_arrow.params == []
    assert empty_arrow.enum_types is None

    arrow = component.props[7]
    assert arrow.name == "paramArrowFunction"
    assert arrow.prop_type == "$function"
    assert arrow.description == "I am param arrow function with args."
    assert arrow.return_type == "object"
    assert [(p.name, p.param_type) for p in arrow.params] == [("str", "string"), ("num", "number")]
    assert arrow.enum_types is None


def test_simple_function_component(extract):
    components = extract(FUNCTION_COMPONENT)
    assert len(components) == 1

    component = components[0]
    assert component.name == "HelloWorld"
    assert component.description == "Simple hello world component"
    assert component.component_type == ComponentType.REACT_FUNCTION_COMPONENT
    assert component.props == []


def test_function_component_parameters_are_not_props(extract):
    components = extract("""
        interface Props { title: string }
        export function Title(props: Props) {
            return <h1>{props.title}</h1>;
        }
    """)
    assert len(components) == 1
    assert components[0].props == []


def test_extraction_is_idempotent(ts_parser):
    source_file = ts_parser.parse(HELLO_WORLD_WITH_PROPS, "HelloWorld.tsx")
    file_ast_map = {"/lib/src/HelloWorld.tsx": source_file}

    first = [c.to_dict() for c in get_components(file_ast_map, ts_parser.syntax_kind)]
    second = [c.to_dict() for c in get_components(file_ast_map, ts_parser.syntax_kind)]
    assert json.dumps(first) == json.dumps(second)


def test_get_components_keeps_duplicates_across_files(ts_parser):
    file_ast_map = {
        "/lib/a/HelloWorld.tsx": ts_parser.parse(HELLO_WORLD),
        "/lib/b/HelloWorld.tsx": ts_parser.parse(HELLO_WORLD),
        "/lib/b/empty.ts": ts_parser.parse(""),
    }
    components = get_components(file_ast_map, ts_parser.syntax_kind)
    assert sorted(c.source_path for c in components) == ["/lib/a", "/lib/b"]


def test_to_dict_shape(extract):
    component = extract(HELLO_WORLD_WITH_PROPS)[0]
    data = component.to_dict()

    assert set(data) == {"name", "sourcePath", "componentType", "description", "props", "docs"}
    assert data["componentType"] == 0

    prop = data["props"][7]
    assert set(prop) == {"name", "type", "enumOf", "required", "defaultValue", "description", "returnType", "params"}
    assert prop["params"] == [{"name": "str", "type": "string"}, {"name": "num", "type": "number"}]
    assert data["props"][0]["enumOf"] is None


def test_get_name_and_path():
    assert get_name_and_path("/lib/src/Button.tsx") == ("Button.tsx", "/lib/src")
    assert get_name_and_path("/lib/src/") == ("src", "/lib")
    assert get_name_and_path("Button.tsx") == ("Button.tsx", "")
    assert get_name_and_path("C:\\lib\\Button.tsx") == ("Button.tsx", "C:/lib")


def test_extractor_process_and_write(tmp_path, ts_parser):
    source = tmp_path / "HelloWorld.tsx"
    source.write_text(HELLO_WORLD_WITH_PROPS, encoding="utf-8")

    extractor = ReactComponentExtractor(ts_parser)
    extractor.process_file(str(source))
    components = extractor.extract_all_components()
    assert [c.name for c in components] == ["HelloWorld"]
    assert components[0].source_path == tmp_path.as_posix()

    out_path = tmp_path / "out.json"
    extractor.write_to_file(str(out_path))
    written = json.loads(out_path.read_text(encoding="utf-8"))
    assert written[0]["name"] == "HelloWorld"
    assert len(written[0]["props"]) == 8
    assert written[0]["props"][2]["type"] != UNKNOWN
