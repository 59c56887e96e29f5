from typing import Optional, Tuple

from redefine.ast.nodes import (
    ClassDeclaration,
    ExpressionWithTypeArguments,
    FunctionDeclaration,
    SourceFile,
    Statement,
)
from redefine.extractors.props import get_component_props, get_props_default_values
from redefine.model.types import Component, ComponentType

REACT_LIBRARY = "react"
COMPONENT_BASE_CLASSES = ("Component", "PureComponent")
RENDER_METHOD = "render"


def is_exported(source_file: SourceFile, statement: Statement, syntax) -> bool:
    name = statement.name.text if statement.name is not None else ""
    return syntax.has_export_modifier(statement) or source_file.is_name_exported(name)


def resolve_base_class(expression, syntax) -> Tuple[str, str]:
    """
    Split a heritage expression into (class name, import binding):
    `React.Component` -> ("Component", "React"), `Component` -> ("Component", "Component").
    """
    if syntax.is_property_access_expression(expression):
        name = expression.name.text if expression.name is not None else ""
        qualifier = expression.expression
        return name, qualifier.text if syntax.is_identifier(qualifier) else ""

    if syntax.is_identifier(expression):
        return expression.text, expression.text

    return "", ""


def detect_component_type(
    source_file: SourceFile, declaration: ClassDeclaration, syntax
) -> Optional[ExpressionWithTypeArguments]:
    """
    Return the heritage entry that makes `declaration` a React class
    component, or None. The first matching entry wins.
    """
    if not declaration.has_heritage_clauses():
        return None

    for clause in declaration.heritage_clauses:
        for entry in clause.types:
            name, binding = resolve_base_class(entry.expression, syntax)
            if name not in COMPONENT_BASE_CLASSES or not binding:
                continue
            if source_file.get_import_path(binding).lower() == REACT_LIBRARY:
                return entry

    return None


def get_props_members(source_file: SourceFile, entry: ExpressionWithTypeArguments, syntax):
    if not entry.type_arguments:
        return []

    props_type = entry.type_arguments[0]
    if props_type is None:
        return []
    if props_type.type_name:
        return source_file.get_members_of_type(props_type.type_name)
    # Component<{ title: string }>
    if syntax.is_object_type(props_type):
        return list(props_type.members)
    return []


def extract_class_based_component(
    path: str, source_file: SourceFile, declaration: ClassDeclaration, syntax
) -> Optional[Component]:
    if not is_exported(source_file, declaration, syntax):
        return None

    if not declaration.has_heritage_clauses():
        return None

    if not syntax.has_method_named(declaration, RENDER_METHOD):
        return None

    entry = detect_component_type(source_file, declaration, syntax)
    if entry is None:
        return None

    default_values = get_props_default_values(declaration, syntax)
    members = get_props_members(source_file, entry, syntax)

    return Component(
        name=declaration.get_class_name(syntax),
        source_path=path,
        component_type=ComponentType.REACT_CLASS_COMPONENT,
        description=syntax.get_doc_comment(declaration.js_doc),
        props=get_component_props(members, default_values, syntax),
    )


def returns_markup(statement: Statement, syntax) -> bool:
    # return <div /> ...
    if syntax.is_return_statement(statement):
        return syntax.is_jsx_like_expression(statement.expression)

    # (<div />);
    if syntax.is_expression_statement(statement):
        expression = statement.expression
        return syntax.is_parenthesized_expression(expression) and syntax.is_jsx_like_expression(expression)

    return False


def extract_function_based_component(
    path: str, source_file: SourceFile, declaration: FunctionDeclaration, syntax
) -> Optional[Component]:
    if not is_exported(source_file, declaration, syntax):
        return None

    if declaration.body is None or not declaration.body.statements:
        return None

    # TODO: derive props from the first parameter's type annotation
    for statement in declaration.body.statements:
        if returns_markup(statement, syntax):
            return Component(
                name=declaration.name.text if declaration.name is not None else "",
                source_path=path,
                component_type=ComponentType.REACT_FUNCTION_COMPONENT,
                description=syntax.get_doc_comment(declaration.js_doc),
            )

    return None
