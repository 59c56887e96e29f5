from typing import Dict, List, Optional

from redefine.ast.nodes import ClassDeclaration, Member, Property, TypeNode
from redefine.model.types import ENUM_TYPE, FUNCTION_TYPE, ParamDef, PropDef

DEFAULT_PROPS = "defaultProps"


def get_component_props(members: List[Member], default_values: Dict[str, str], syntax) -> List[PropDef]:
    props = []
    for member in members:
        # index signatures and computed names carry no usable prop name
        if member.name is None or not member.name.text:
            continue
        props.append(get_component_prop(member, default_values, syntax))
    return props


def get_component_prop(member: Member, default_values: Dict[str, str], syntax) -> PropDef:
    """
    Build the prop definition for one member of a props interface.

    The member type is resolved in order: a named reference is used
    verbatim, then a primitive keyword, then a union (`$enum`), then a
    function type (`$function`). Anything else stays `$unknown`.
    """
    name = member.name.text
    fields = {
        "name": name,
        "required": not member.question_token,
        "default_value": default_values.get(name, ""),
        "description": syntax.get_doc_comment(member.js_doc),
    }

    member_type = member.type
    if member_type is not None and member_type.type_name:
        return PropDef(prop_type=member_type.type_name, **fields)

    resolved = syntax.resolve_type(member_type)
    if not syntax.is_unknown_type(resolved) and not syntax.is_function_type(member_type):
        return PropDef(prop_type=resolved, **fields)

    if syntax.is_union_type(member_type):
        enum_types = [get_enum_variant(branch, syntax) for branch in member_type.types]
        return PropDef(prop_type=ENUM_TYPE, enum_types=enum_types, **fields)

    if syntax.is_function_type(member_type):
        params = [
            ParamDef(
                name=param.name.text if param.name is not None else "",
                param_type=syntax.resolve_type(param.type),
            )
            for param in member_type.parameters
        ]
        return PropDef(
            prop_type=FUNCTION_TYPE,
            params=params,
            return_type=syntax.resolve_type(member_type.return_type),
            **fields,
        )

    return PropDef(**fields)


def get_enum_variant(branch: TypeNode, syntax) -> ParamDef:
    # Size = Small | 'large' | 42 | string
    if branch.type_name:
        return ParamDef(name=branch.type_name, param_type="")

    if syntax.is_literal_type(branch):
        literal = branch.literal
        return ParamDef(
            name=literal.text if literal is not None else "",
            param_type=syntax.resolve_literal_type(literal),
        )

    resolved = syntax.resolve_type(branch)
    if not syntax.is_unknown_type(resolved) and not syntax.is_function_type(branch):
        return ParamDef(name=resolved, param_type=resolved)

    return ParamDef(name="", param_type=resolved)


def find_default_props_member(declaration: ClassDeclaration, syntax) -> Optional[Member]:
    """The `static defaultProps` member of a class, if declared."""
    for member in declaration.members:
        if member.name is not None and member.name.text == DEFAULT_PROPS \
                and syntax.has_static_modifier(member):
            return member
    return None


def get_props_default_values(declaration: ClassDeclaration, syntax) -> Dict[str, str]:
    default_values = {}

    default_props = find_default_props_member(declaration, syntax)
    if default_props is None or not syntax.is_object_literal_expression(default_props.initializer):
        return default_values

    for prop in default_props.initializer.properties:
        if prop.name is None:
            continue
        default_values[prop.name.text] = extract_prop_value(prop, syntax)

    return default_values


def extract_prop_value(prop: Property, syntax) -> str:
    initializer = prop.initializer
    if initializer is None:
        return ""

    kind = initializer.kind
    if kind == syntax.true_keyword:
        return "true"
    if kind == syntax.false_keyword:
        return "false"
    if kind == syntax.null_keyword:
        return "null"

    # literals and identifiers carry their text, other expressions none
    return initializer.text
