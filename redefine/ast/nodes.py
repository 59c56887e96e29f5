from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Dict, List, Optional


# ---------------------------
# Leaf nodes
# ---------------------------

@dataclass(frozen=True)
class Token:
    """Identifier, keyword or modifier with its source text."""
    kind: int
    text: str = ""


@dataclass(frozen=True)
class DocComment:
    kind: int
    comment: str = ""


# ---------------------------
# Expressions
# ---------------------------

@dataclass(frozen=True)
class Expression:
    """
    Any expression. Identifiers and literals carry their text (string
    literals without quotes); complex expressions carry an empty text.
    """
    kind: int
    text: str = ""


@dataclass(frozen=True)
class PropertyAccessExpression(Expression):
    expression: Optional[Expression] = None
    name: Optional[Token] = None


@dataclass(frozen=True)
class ParenthesizedExpression(Expression):
    expression: Optional[Expression] = None


@dataclass(frozen=True)
class CallExpression(Expression):
    expression: Optional[Expression] = None
    arguments: List[Expression] = field(default_factory=list)


@dataclass(frozen=True)
class Property:
    kind: int
    name: Optional[Token] = None
    initializer: Optional[Expression] = None


@dataclass(frozen=True)
class ObjectLiteralExpression(Expression):
    properties: List[Property] = field(default_factory=list)


# ---------------------------
# Types, parameters & members
# ---------------------------

@dataclass(frozen=True)
class Parameter:
    kind: int
    name: Optional[Token] = None
    type: Optional["TypeNode"] = None
    question_token: bool = False


@dataclass(frozen=True)
class TypeNode:
    kind: int
    type_name: Optional[str] = None
    types: List["TypeNode"] = field(default_factory=list)
    literal: Optional[Expression] = None
    parameters: List[Parameter] = field(default_factory=list)
    return_type: Optional["TypeNode"] = None
    members: List["Member"] = field(default_factory=list)
    text: str = ""


@dataclass(frozen=True)
class Member:
    kind: int
    name: Optional[Token] = None
    type: Optional[TypeNode] = None
    question_token: bool = False
    modifiers: List[Token] = field(default_factory=list)
    initializer: Optional[Expression] = None
    js_doc: List[DocComment] = field(default_factory=list)


@dataclass(frozen=True)
class ExpressionWithTypeArguments:
    kind: int
    expression: Optional[Expression] = None
    type_arguments: List[TypeNode] = field(default_factory=list)


@dataclass(frozen=True)
class HeritageClause:
    kind: int
    types: List[ExpressionWithTypeArguments] = field(default_factory=list)


@dataclass(frozen=True)
class ImportClause:
    kind: int
    name: Optional[Token] = None
    namespace: Optional[Token] = None
    elements: List[Token] = field(default_factory=list)


# ---------------------------
# Statements
# ---------------------------

@dataclass(frozen=True)
class Statement:
    kind: int
    js_doc: List[DocComment] = field(default_factory=list)
    modifiers: List[Token] = field(default_factory=list)


@dataclass(frozen=True)
class Block:
    kind: int
    statements: List[Statement] = field(default_factory=list)


@dataclass(frozen=True)
class ClassDeclaration(Statement):
    name: Optional[Token] = None
    heritage_clauses: List[HeritageClause] = field(default_factory=list)
    members: List[Member] = field(default_factory=list)

    def get_class_name(self, syntax) -> str:
        if not syntax.is_class_declaration(self):
            raise ValueError("Expected a class declaration")
        return self.name.text if self.name else ""

    def has_heritage_clauses(self) -> bool:
        return len(self.heritage_clauses) > 0


@dataclass(frozen=True)
class FunctionDeclaration(Statement):
    name: Optional[Token] = None
    parameters: List[Parameter] = field(default_factory=list)
    body: Optional[Block] = None


@dataclass(frozen=True)
class InterfaceDeclaration(Statement):
    name: Optional[Token] = None
    heritage_clauses: List[HeritageClause] = field(default_factory=list)
    members: List[Member] = field(default_factory=list)


@dataclass(frozen=True)
class TypeAliasDeclaration(Statement):
    name: Optional[Token] = None
    type: Optional[TypeNode] = None


@dataclass(frozen=True)
class ImportDeclaration(Statement):
    import_clause: Optional[ImportClause] = None
    module_specifier: str = ""


@dataclass(frozen=True)
class ExportAssignment(Statement):
    """`export default <expression>`"""
    expression: Optional[Expression] = None


@dataclass(frozen=True)
class ExportDeclaration(Statement):
    """`export { A, B as C }`, optionally re-exported `from` a module."""
    elements: List[Token] = field(default_factory=list)
    module_specifier: str = ""


@dataclass(frozen=True)
class ReturnStatement(Statement):
    expression: Optional[Expression] = None


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    expression: Optional[Expression] = None


# ---------------------------
# Source file
# ---------------------------

@dataclass(frozen=True)
class SourceFile:
    kind: int
    statements: List[Statement] = field(default_factory=list)
    file_name: str = ""
    syntax_kind: Any = field(default=None, repr=False, compare=False)

    @cached_property
    def imports(self) -> Dict[str, str]:
        """Local import name -> module path it was imported from."""
        imports = {}
        for st in self.statements:
            if not self.syntax_kind.is_import_declaration(st):
                continue

            clause = st.import_clause
            if clause is None:
                continue

            library = st.module_specifier
            if clause.name is not None:
                imports[clause.name.text] = library
            if clause.namespace is not None:
                imports[clause.namespace.text] = library
            for element in clause.elements:
                imports[element.text] = library

        return imports

    def get_import_path(self, name: str) -> str:
        return self.imports.get(name, "")

    def is_name_exported(self, name: str) -> bool:
        """
        True when `name` is exported by a separate statement of this file:
        `export default Foo`, `export { Foo }` or a wrapping call such as
        `export default injectIntl(Foo)`.
        """
        if not name:
            return False

        syntax = self.syntax_kind
        for st in self.statements:
            if syntax.is_export_assignment(st):
                if _references_name(st.expression, name, syntax):
                    return True
                continue

            if syntax.is_export_declaration(st) and not st.module_specifier:
                if any(element.text == name for element in st.elements):
                    return True

        return False

    def get_members_of_type(self, type_name: str) -> List[Member]:
        import_library = self.get_import_path(type_name)
        if import_library:
            return self.get_members_of_type_from_library(import_library, type_name)

        return self._get_local_members(type_name, set())

    def get_members_of_type_from_library(self, import_library: str, type_name: str) -> List[Member]:
        # types declared in other modules are not resolved
        return []

    def _get_local_members(self, type_name: str, seen: set) -> List[Member]:
        if type_name in seen:
            return []
        seen.add(type_name)

        syntax = self.syntax_kind
        for st in self.statements:
            name = getattr(st, "name", None)
            if name is None or name.text != type_name:
                continue

            if syntax.is_interface_declaration(st):
                members = list(st.members)
                own = {m.name.text for m in members if m.name is not None}
                for clause in st.heritage_clauses:
                    for base in clause.types:
                        base_name = base.expression.text if base.expression else ""
                        if not base_name or self.get_import_path(base_name):
                            continue
                        for inherited in self._get_local_members(base_name, seen):
                            if inherited.name is not None and inherited.name.text in own:
                                continue
                            members.append(inherited)
                            if inherited.name is not None:
                                own.add(inherited.name.text)
                return members

            if syntax.is_type_alias_declaration(st) and syntax.is_object_type(st.type):
                return list(st.type.members)

        return []


def _references_name(expr: Optional[Expression], name: str, syntax) -> bool:
    if expr is None:
        return False

    if syntax.is_identifier(expr):
        return expr.text == name

    if syntax.is_parenthesized_expression(expr):
        return _references_name(expr.expression, name, syntax)

    # export default connect(mapState)(withRouter(Foo))
    if syntax.is_call_expression(expr):
        for arg in expr.arguments:
            if _references_name(arg, name, syntax):
                return True
        if syntax.is_call_expression(expr.expression):
            return _references_name(expr.expression, name, syntax)

    return False
