from typing import Dict, Iterable, Optional

from redefine.ast.nodes import ExportAssignment, ExportDeclaration

UNKNOWN = "$unknown"

# catalog attribute -> (tree-sitter node kind, is named)
NODE_KINDS = {
    # declarations & statements
    "source_file": ("program", True),
    "class_declaration": ("class_declaration", True),
    "abstract_class_declaration": ("abstract_class_declaration", True),
    "class_expression": ("class", True),
    "function_declaration": ("function_declaration", True),
    "generator_function_declaration": ("generator_function_declaration", True),
    "interface_declaration": ("interface_declaration", True),
    "type_alias_declaration": ("type_alias_declaration", True),
    "import_declaration": ("import_statement", True),
    "export_statement": ("export_statement", True),
    "return_statement": ("return_statement", True),
    "expression_statement": ("expression_statement", True),
    "block": ("statement_block", True),
    "comment": ("comment", True),
    # class & interface parts
    "heritage_clause": ("class_heritage", True),
    "extends_clause": ("extends_clause", True),
    "implements_clause": ("implements_clause", True),
    "extends_type_clause": ("extends_type_clause", True),
    "import_clause": ("import_clause", True),
    "method_definition": ("method_definition", True),
    "field_definition": ("public_field_definition", True),
    "property_signature": ("property_signature", True),
    "method_signature": ("method_signature", True),
    "required_parameter": ("required_parameter", True),
    "optional_parameter": ("optional_parameter", True),
    # expressions
    "identifier": ("identifier", True),
    "property_identifier": ("property_identifier", True),
    "shorthand_property_identifier": ("shorthand_property_identifier", True),
    "property_access_expression": ("member_expression", True),
    "parenthesized_expression": ("parenthesized_expression", True),
    "call_expression": ("call_expression", True),
    "object_literal_expression": ("object", True),
    "property_assignment": ("pair", True),
    "arrow_function": ("arrow_function", True),
    "function_expression": ("function_expression", True),
    "string_literal": ("string", True),
    "numeric_literal": ("number", True),
    "true_keyword": ("true", True),
    "false_keyword": ("false", True),
    "null_keyword": ("null", True),
    "undefined_keyword": ("undefined", True),
    "jsx_element": ("jsx_element", True),
    "jsx_self_closing_element": ("jsx_self_closing_element", True),
    "jsx_fragment": ("jsx_fragment", True),
    # types
    "type_reference": ("type_identifier", True),
    "generic_type": ("generic_type", True),
    "qualified_type": ("nested_type_identifier", True),
    "union_type": ("union_type", True),
    "function_type": ("function_type", True),
    "literal_type": ("literal_type", True),
    "object_type": ("object_type", True),
    "any_keyword": ("any", False),
    "number_keyword": ("number", False),
    "boolean_keyword": ("boolean", False),
    "string_keyword": ("string", False),
    "void_keyword": ("void", False),
    "never_keyword": ("never", False),
    "object_keyword": ("object", False),
    # modifiers
    "export_keyword": ("export", False),
    "default_keyword": ("default", False),
    "static_keyword": ("static", False),
}


class SyntaxKind:
    """
    Read-only catalog of node kind ids for one parsing session, together
    with the predicates the detector and extractor use to classify nodes.
    Kinds missing from the grammar are kept as None and never match.
    """

    def __init__(self, kinds: Dict[str, Optional[int]]):
        for attr in NODE_KINDS:
            setattr(self, attr, kinds.get(attr))

        self._canonical_types = self._table({
            "number_keyword": "number",
            "string_keyword": "string",
            "boolean_keyword": "boolean",
            "void_keyword": "void",
            "function_type": "Function",
            "any_keyword": "any",
            "null_keyword": "null",
            "undefined_keyword": "undefined",
            "never_keyword": "never",
            "object_keyword": "object",
        })
        self._literal_types = self._table({
            "string_literal": "string",
            "numeric_literal": "number",
            "true_keyword": "boolean",
            "false_keyword": "boolean",
        })

    @classmethod
    def from_language(cls, language) -> "SyntaxKind":
        kinds = {}
        for attr, (node_kind, named) in NODE_KINDS.items():
            kinds[attr] = language.id_for_node_kind(node_kind, named)
        return cls(kinds)

    def _table(self, names: Dict[str, str]) -> Dict[int, str]:
        table = {}
        for attr, type_name in names.items():
            kind = getattr(self, attr)
            if kind is not None:
                table[kind] = type_name
        return table

    @staticmethod
    def _is(node, *kinds) -> bool:
        if node is None:
            return False
        return any(kind is not None and node.kind == kind for kind in kinds)

    # ------------- Statements -------------

    def is_class_declaration(self, node) -> bool:
        return self._is(node, self.class_declaration, self.abstract_class_declaration)

    def is_function_declaration(self, node) -> bool:
        return self._is(node, self.function_declaration, self.generator_function_declaration)

    def is_interface_declaration(self, node) -> bool:
        return self._is(node, self.interface_declaration)

    def is_type_alias_declaration(self, node) -> bool:
        return self._is(node, self.type_alias_declaration)

    def is_import_declaration(self, node) -> bool:
        return self._is(node, self.import_declaration)

    def is_export_assignment(self, node) -> bool:
        return self._is(node, self.export_statement) and isinstance(node, ExportAssignment)

    def is_export_declaration(self, node) -> bool:
        return self._is(node, self.export_statement) and isinstance(node, ExportDeclaration)

    def is_return_statement(self, node) -> bool:
        return self._is(node, self.return_statement)

    def is_expression_statement(self, node) -> bool:
        return self._is(node, self.expression_statement)

    def is_heritage_clause(self, node) -> bool:
        return self._is(node, self.heritage_clause, self.extends_clause,
                        self.implements_clause, self.extends_type_clause)

    # ------------- Members -------------

    def is_method_declaration(self, member) -> bool:
        if self._is(member, self.method_definition):
            return True
        # handleClick = () => {...}
        return self._is(member, self.field_definition) and \
            self._is(member.initializer, self.arrow_function, self.function_expression)

    def has_method_named(self, declaration, method_name: str) -> bool:
        if not self.is_class_declaration(declaration):
            return False

        for member in declaration.members:
            if self.is_method_declaration(member) and member.name is not None \
                    and member.name.text == method_name:
                return True

        return False

    def _has_modifier(self, node, kind) -> bool:
        if node is None or kind is None:
            return False
        return any(modifier.kind == kind for modifier in node.modifiers)

    def has_export_modifier(self, node) -> bool:
        return self._has_modifier(node, self.export_keyword)

    def has_default_modifier(self, node) -> bool:
        return self._has_modifier(node, self.default_keyword)

    def has_static_modifier(self, node) -> bool:
        return self._has_modifier(node, self.static_keyword)

    # ------------- Expressions -------------

    def is_identifier(self, node) -> bool:
        return self._is(node, self.identifier)

    def is_property_access_expression(self, node) -> bool:
        return self._is(node, self.property_access_expression)

    def is_parenthesized_expression(self, node) -> bool:
        return self._is(node, self.parenthesized_expression)

    def is_call_expression(self, node) -> bool:
        return self._is(node, self.call_expression)

    def is_object_literal_expression(self, node) -> bool:
        return self._is(node, self.object_literal_expression)

    def is_jsx_like_expression(self, expr) -> bool:
        if expr is None:
            return False

        # return <Component /> ... or return <> ... </>
        if self._is(expr, self.jsx_element, self.jsx_self_closing_element, self.jsx_fragment):
            return True

        # return ( <div> ... </div> )
        if self.is_parenthesized_expression(expr):
            return self.is_jsx_like_expression(expr.expression)

        return False

    # ------------- Types -------------

    def is_union_type(self, node) -> bool:
        return self._is(node, self.union_type)

    def is_function_type(self, node) -> bool:
        return self._is(node, self.function_type)

    def is_literal_type(self, node) -> bool:
        return self._is(node, self.literal_type)

    def is_object_type(self, node) -> bool:
        return self._is(node, self.object_type)

    def is_type_reference(self, node) -> bool:
        return self._is(node, self.type_reference, self.generic_type, self.qualified_type)

    def resolve_type(self, node) -> str:
        """Canonical name of a primitive keyword or function type, `$unknown` otherwise."""
        if node is None:
            return UNKNOWN

        return self._canonical_types.get(node.kind, UNKNOWN)

    def resolve_literal_type(self, node) -> str:
        """Primitive of a literal type (`'a'` -> string, `1` -> number, `true` -> boolean)."""
        if self.is_literal_type(node):
            node = node.literal
        if node is None:
            return UNKNOWN

        literal = self._literal_types.get(node.kind)
        if literal is not None:
            return literal

        # null and undefined
        return self.resolve_type(node)

    @staticmethod
    def is_unknown_type(type_name: str) -> bool:
        return type_name == UNKNOWN

    # ------------- Docs -------------

    @staticmethod
    def get_doc_comment(js_doc: Iterable) -> str:
        comments = [doc.comment for doc in js_doc or []]
        if not comments:
            return ""
        if len(comments) == 1:
            return comments[0]
        return "\n".join(comments)
