from typing import List, Optional

from redefine.ast.nodes import (
    Block,
    CallExpression,
    ClassDeclaration,
    DocComment,
    ExportAssignment,
    ExportDeclaration,
    Expression,
    ExpressionStatement,
    ExpressionWithTypeArguments,
    FunctionDeclaration,
    HeritageClause,
    ImportClause,
    ImportDeclaration,
    InterfaceDeclaration,
    Member,
    ObjectLiteralExpression,
    ParenthesizedExpression,
    Parameter,
    Property,
    PropertyAccessExpression,
    ReturnStatement,
    SourceFile,
    Statement,
    Token,
    TypeAliasDeclaration,
    TypeNode,
)

TEXT_EXPRESSIONS = {
    "identifier", "property_identifier", "shorthand_property_identifier",
    "private_property_identifier", "number", "true", "false", "null",
    "undefined", "this",
}

SKIPPED_MEMBERS = {
    "comment", "decorator", "class_static_block", "index_signature",
    "call_signature", "construct_signature",
}

MODIFIERS = {
    "static", "readonly", "abstract", "async", "declare", "get", "set",
    "accessibility_modifier", "override_modifier",
}


def is_js_doc(raw: str) -> bool:
    return raw.startswith("/**") and not raw.startswith("/**/")


def parse_js_doc(raw: str) -> str:
    """Comment text of a `/** ... */` block, without delimiters, stars and @tags."""
    body = raw[3:-2] if raw.endswith("*/") else raw[3:]
    lines = []
    for line in body.splitlines():
        line = line.strip()
        if line.startswith("*"):
            line = line[1:].strip()
        if line.startswith("@"):
            break
        lines.append(line)
    return "\n".join(lines).strip()


class AstConverter:
    """
    Converts a tree-sitter TSX tree into the redefine syntax tree.
    Kind tags are the tree-sitter kind ids of the session `syntax` catalog.
    """

    def __init__(self, source_bytes: bytes, syntax):
        self.source = source_bytes
        self.syntax = syntax

    # ------------- Text helpers -------------

    def get_text(self, node) -> str:
        return self.source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    def string_value(self, node) -> str:
        text = self.get_text(node)
        if len(text) >= 2 and text[0] in "'\"`" and text[-1] == text[0]:
            return text[1:-1]
        return text

    def token(self, node) -> Optional[Token]:
        if node is None:
            return None
        if node.type == "string":
            return Token(kind=node.kind_id, text=self.string_value(node))
        return Token(kind=node.kind_id, text=self.get_text(node))

    @staticmethod
    def first_field(node, *names):
        for name in names:
            child = node.child_by_field_name(name)
            if child is not None:
                return child
        return None

    @staticmethod
    def first_named(node):
        for child in node.named_children:
            if child.type != "comment":
                return child
        return None

    def get_js_doc(self, node) -> List[DocComment]:
        docs = []
        sibling = node.prev_sibling
        while sibling is not None:
            if sibling.type == "comment":
                text = self.get_text(sibling)
                if is_js_doc(text):
                    docs.append(DocComment(kind=sibling.kind_id, comment=parse_js_doc(text)))
            elif sibling.is_named:
                break
            sibling = sibling.prev_sibling
        docs.reverse()
        return docs

    # ------------- Source file & statements -------------

    def convert(self, root, file_name: str = "") -> SourceFile:
        statements = []
        for child in root.named_children:
            statement = self.convert_statement(child)
            if statement is not None:
                statements.append(statement)

        return SourceFile(
            kind=root.kind_id,
            statements=statements,
            file_name=file_name,
            syntax_kind=self.syntax,
        )

    def convert_statement(self, node) -> Optional[Statement]:
        t = node.type
        if t == "comment":
            return None

        js_doc = self.get_js_doc(node)
        if t == "export_statement":
            return self.convert_export(node, js_doc)
        if t == "import_statement":
            return self.convert_import(node, js_doc)
        if t == "return_statement":
            return ReturnStatement(
                kind=node.kind_id,
                js_doc=js_doc,
                expression=self.convert_expression(self.first_named(node)),
            )
        if t == "expression_statement":
            return ExpressionStatement(
                kind=node.kind_id,
                js_doc=js_doc,
                expression=self.convert_expression(self.first_named(node)),
            )
        return self.convert_declaration(node, js_doc, [])

    def convert_declaration(self, node, js_doc, modifiers, kind=None) -> Statement:
        t = node.type
        if t in ("class_declaration", "abstract_class_declaration", "class"):
            return self.convert_class(node, js_doc, modifiers, kind)
        if t in ("function_declaration", "generator_function_declaration",
                 "function_expression", "function"):
            return self.convert_function(node, js_doc, modifiers, kind)
        if t == "interface_declaration":
            return self.convert_interface(node, js_doc, modifiers)
        if t == "type_alias_declaration":
            return TypeAliasDeclaration(
                kind=node.kind_id,
                js_doc=js_doc,
                modifiers=modifiers,
                name=self.token(node.child_by_field_name("name")),
                type=self.convert_type(node.child_by_field_name("value")),
            )
        return Statement(kind=node.kind_id, js_doc=js_doc, modifiers=modifiers)

    def convert_export(self, node, js_doc) -> Statement:
        modifiers = [
            Token(kind=c.kind_id, text=c.type)
            for c in node.children
            if c.type in ("export", "default")
        ]

        declaration = node.child_by_field_name("declaration")
        if declaration is not None:
            return self.convert_declaration(declaration, js_doc, modifiers)

        value = node.child_by_field_name("value")
        if value is not None:
            # export default class Foo extends ... / export default function Foo() ...
            if value.child_by_field_name("name") is not None:
                if value.type == "class":
                    return self.convert_declaration(value, js_doc, modifiers, self.syntax.class_declaration)
                if value.type in ("function_expression", "function"):
                    return self.convert_declaration(value, js_doc, modifiers, self.syntax.function_declaration)

            return ExportAssignment(
                kind=node.kind_id,
                js_doc=js_doc,
                modifiers=modifiers,
                expression=self.convert_expression(value),
            )

        elements = []
        for child in node.named_children:
            if child.type != "export_clause":
                continue
            for spec in child.named_children:
                if spec.type == "export_specifier":
                    elements.append(self.token(spec.child_by_field_name("name")))

        source = node.child_by_field_name("source")
        return ExportDeclaration(
            kind=node.kind_id,
            js_doc=js_doc,
            modifiers=modifiers,
            elements=[e for e in elements if e is not None],
            module_specifier=self.string_value(source) if source is not None else "",
        )

    def convert_import(self, node, js_doc) -> ImportDeclaration:
        clause = None
        for child in node.named_children:
            if child.type == "import_clause":
                clause = self.convert_import_clause(child)

        source = node.child_by_field_name("source")
        return ImportDeclaration(
            kind=node.kind_id,
            js_doc=js_doc,
            import_clause=clause,
            module_specifier=self.string_value(source) if source is not None else "",
        )

    def convert_import_clause(self, node) -> ImportClause:
        name = None
        namespace = None
        elements = []
        for child in node.named_children:
            if child.type == "identifier":
                name = self.token(child)
            elif child.type == "namespace_import":
                namespace = self.token(self.first_named(child))
            elif child.type == "named_imports":
                for spec in child.named_children:
                    if spec.type != "import_specifier":
                        continue
                    local = self.first_field(spec, "alias", "name")
                    if local is not None:
                        elements.append(self.token(local))

        return ImportClause(kind=node.kind_id, name=name, namespace=namespace, elements=elements)

    def convert_class(self, node, js_doc, modifiers, kind=None) -> ClassDeclaration:
        heritage = []
        for child in node.named_children:
            if child.type != "class_heritage":
                continue
            for clause in child.named_children:
                if clause.type in ("extends_clause", "implements_clause"):
                    heritage.append(self.convert_heritage_clause(clause))

        body = node.child_by_field_name("body")
        return ClassDeclaration(
            kind=kind if kind is not None else node.kind_id,
            js_doc=js_doc,
            modifiers=modifiers,
            name=self.token(node.child_by_field_name("name")),
            heritage_clauses=heritage,
            members=self.convert_members(body) if body is not None else [],
        )

    def convert_function(self, node, js_doc, modifiers, kind=None) -> FunctionDeclaration:
        body = None
        body_node = node.child_by_field_name("body")
        if body_node is not None and body_node.type == "statement_block":
            statements = []
            for child in body_node.named_children:
                statement = self.convert_statement(child)
                if statement is not None:
                    statements.append(statement)
            body = Block(kind=body_node.kind_id, statements=statements)

        return FunctionDeclaration(
            kind=kind if kind is not None else node.kind_id,
            js_doc=js_doc,
            modifiers=modifiers,
            name=self.token(node.child_by_field_name("name")),
            parameters=self.convert_parameters(node.child_by_field_name("parameters")),
            body=body,
        )

    def convert_interface(self, node, js_doc, modifiers) -> InterfaceDeclaration:
        heritage = []
        for child in node.named_children:
            if child.type == "extends_type_clause":
                heritage.append(self.convert_heritage_clause(child))

        body = node.child_by_field_name("body")
        return InterfaceDeclaration(
            kind=node.kind_id,
            js_doc=js_doc,
            modifiers=modifiers,
            name=self.token(node.child_by_field_name("name")),
            heritage_clauses=heritage,
            members=self.convert_members(body) if body is not None else [],
        )

    # ------------- Heritage -------------

    def convert_heritage_clause(self, clause) -> HeritageClause:
        types = []
        for child in clause.named_children:
            if child.type == "comment":
                continue
            if child.type == "type_arguments":
                # extends React.Component<Props>: arguments follow their expression
                if types:
                    last = types[-1]
                    types[-1] = ExpressionWithTypeArguments(
                        kind=last.kind,
                        expression=last.expression,
                        type_arguments=self.convert_type_arguments(child),
                    )
                continue
            types.append(self.convert_heritage_type(child, clause.kind_id))

        return HeritageClause(kind=clause.kind_id, types=types)

    def convert_heritage_type(self, node, kind) -> ExpressionWithTypeArguments:
        expression = node
        type_arguments = None
        if node.type in ("instantiation_expression", "generic_type"):
            expression = self.first_field(node, "function", "name")
            if expression is None:
                expression = self.first_named(node)
            for child in node.named_children:
                if child.type == "type_arguments":
                    type_arguments = child

        return ExpressionWithTypeArguments(
            kind=kind,
            expression=self.convert_type_expression(expression),
            type_arguments=self.convert_type_arguments(type_arguments),
        )

    def convert_type_expression(self, node) -> Optional[Expression]:
        """Type names in heritage position, expressed the way value expressions are."""
        if node is None:
            return None
        if node.type == "type_identifier":
            return Expression(kind=self.syntax.identifier, text=self.get_text(node))
        if node.type == "nested_type_identifier":
            module = node.child_by_field_name("module")
            name = node.child_by_field_name("name")
            return PropertyAccessExpression(
                kind=self.syntax.property_access_expression,
                expression=self.convert_type_expression(module),
                name=self.token(name),
            )
        if node.type == "nested_identifier":
            parts = [c for c in node.named_children if c.type != "comment"]
            if len(parts) == 2:
                return PropertyAccessExpression(
                    kind=self.syntax.property_access_expression,
                    expression=self.convert_type_expression(parts[0]),
                    name=self.token(parts[1]),
                )
        return self.convert_expression(node)

    def convert_type_arguments(self, node) -> List[TypeNode]:
        if node is None:
            return []
        return [self.convert_type(c) for c in node.named_children if c.type != "comment"]

    # ------------- Members & parameters -------------

    def convert_members(self, body) -> List[Member]:
        members = []
        for child in body.named_children:
            member = self.convert_member(child)
            if member is not None:
                members.append(member)
        return members

    def convert_member(self, node) -> Optional[Member]:
        t = node.type
        if t in SKIPPED_MEMBERS:
            return None

        modifiers = [
            Token(kind=c.kind_id, text=self.get_text(c))
            for c in node.children
            if c.type in MODIFIERS
        ]

        if t in ("method_signature", "abstract_method_signature"):
            member_type = TypeNode(
                kind=self.syntax.function_type,
                parameters=self.convert_parameters(node.child_by_field_name("parameters")),
                return_type=self.convert_type(node.child_by_field_name("return_type")),
                text=self.get_text(node),
            )
        else:
            member_type = self.convert_type(node.child_by_field_name("type"))

        initializer = None
        if t != "method_definition":
            initializer = self.convert_expression(node.child_by_field_name("value"))

        return Member(
            kind=node.kind_id,
            name=self.token(node.child_by_field_name("name")),
            type=member_type,
            question_token=any(c.type == "?" for c in node.children),
            modifiers=modifiers,
            initializer=initializer,
            js_doc=self.get_js_doc(node),
        )

    def convert_parameters(self, node) -> List[Parameter]:
        if node is None:
            return []

        parameters = []
        for child in node.named_children:
            if child.type not in ("required_parameter", "optional_parameter"):
                continue
            pattern = child.child_by_field_name("pattern")
            parameters.append(Parameter(
                kind=child.kind_id,
                name=self.token(pattern),
                type=self.convert_type(child.child_by_field_name("type")),
                question_token=child.type == "optional_parameter",
            ))
        return parameters

    # ------------- Types -------------

    def convert_type(self, node) -> Optional[TypeNode]:
        if node is None:
            return None

        t = node.type
        if t in ("type_annotation", "parenthesized_type"):
            return self.convert_type(self.first_named(node))

        text = self.get_text(node)
        if t == "predefined_type":
            # the keyword token carries the primitive kind
            keyword = node.children[0] if node.child_count > 0 else node
            return TypeNode(kind=keyword.kind_id, text=text)
        if t in ("type_identifier", "nested_type_identifier"):
            return TypeNode(kind=node.kind_id, type_name=text, text=text)
        if t == "generic_type":
            name = self.first_field(node, "name")
            if name is None:
                name = self.first_named(node)
            return TypeNode(kind=node.kind_id, type_name=self.get_text(name), text=text)
        if t == "union_type":
            return TypeNode(kind=node.kind_id, types=self.flatten_union(node), text=text)
        if t == "function_type":
            return TypeNode(
                kind=node.kind_id,
                parameters=self.convert_parameters(node.child_by_field_name("parameters")),
                return_type=self.convert_type(node.child_by_field_name("return_type")),
                text=text,
            )
        if t == "literal_type":
            return TypeNode(kind=node.kind_id, literal=self.convert_literal(self.first_named(node)), text=text)
        if t == "object_type":
            return TypeNode(kind=node.kind_id, members=self.convert_members(node), text=text)

        return TypeNode(kind=node.kind_id, text=text)

    def flatten_union(self, node) -> List[TypeNode]:
        types = []
        for child in node.named_children:
            if child.type == "comment":
                continue
            if child.type == "union_type":
                types.extend(self.flatten_union(child))
            else:
                types.append(self.convert_type(child))
        return types

    # ------------- Expressions -------------

    def convert_expression(self, node) -> Optional[Expression]:
        if node is None:
            return None

        t = node.type
        if t in TEXT_EXPRESSIONS:
            return Expression(kind=node.kind_id, text=self.get_text(node))
        if t == "string":
            return Expression(kind=node.kind_id, text=self.string_value(node))
        if t == "parenthesized_expression":
            return ParenthesizedExpression(
                kind=node.kind_id,
                expression=self.convert_expression(self.first_named(node)),
            )
        if t == "member_expression":
            return PropertyAccessExpression(
                kind=node.kind_id,
                expression=self.convert_expression(node.child_by_field_name("object")),
                name=self.token(node.child_by_field_name("property")),
            )
        if t == "call_expression":
            args = node.child_by_field_name("arguments")
            arguments = []
            if args is not None and args.type == "arguments":
                arguments = [self.convert_expression(a) for a in args.named_children if a.type != "comment"]
            return CallExpression(
                kind=node.kind_id,
                expression=self.convert_expression(node.child_by_field_name("function")),
                arguments=arguments,
            )
        if t == "object":
            return ObjectLiteralExpression(kind=node.kind_id, properties=self.convert_properties(node))

        return Expression(kind=node.kind_id)

    def convert_literal(self, node) -> Optional[Expression]:
        # -1: the operand carries the literal kind, the source keeps the sign
        if node is not None and node.type == "unary_expression":
            operand = node.child_by_field_name("argument")
            kind = operand.kind_id if operand is not None else node.kind_id
            return Expression(kind=kind, text=self.get_text(node))
        return self.convert_expression(node)

    def convert_properties(self, node) -> List[Property]:
        properties = []
        for child in node.named_children:
            if child.type == "pair":
                properties.append(Property(
                    kind=child.kind_id,
                    name=self.token(child.child_by_field_name("key")),
                    initializer=self.convert_expression(child.child_by_field_name("value")),
                ))
            elif child.type == "shorthand_property_identifier":
                name = self.token(child)
                properties.append(Property(
                    kind=child.kind_id,
                    name=name,
                    initializer=Expression(kind=child.kind_id, text=name.text),
                ))
        return properties
