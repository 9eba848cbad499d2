"""Query helpers over tree-sitter TypeScript syntax trees.

Small, composable lookups used by the code extractors: imports, class
declarations and their members, dependency injection sites and call
expressions. All traversals are iterative.
"""

import re
from typing import Iterator, List, Optional, Pattern, Sequence, Tuple, Union

from tree_sitter import Node

CLASS_TYPES = frozenset({"class_declaration", "abstract_class_declaration", "class"})
FUNCTION_VALUE_TYPES = frozenset({"arrow_function", "function_expression", "function"})
PARAMETER_TYPES = frozenset({"required_parameter", "optional_parameter"})
PARAMETER_MODIFIER_TYPES = frozenset({"accessibility_modifier", "override_modifier", "readonly"})
WRAPPER_TYPES = frozenset(
    {"parenthesized_expression", "as_expression", "satisfies_expression", "non_null_expression"}
)

_ESCAPE_PATTERN = re.compile(
    r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])"
)
_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


def node_text(node: Node) -> str:
    """Decoded source text of a node."""
    return node.text.decode("utf-8") if node.text is not None else ""


def walk(node: Node) -> Iterator[Node]:
    """Yield node and all named descendants in source order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.named_children))


def _named_children(node: Node) -> List[Node]:
    return [child for child in node.named_children if child.type != "comment"]


def _unescape(match: "re.Match[str]") -> str:
    escape = match.group(1)
    if escape.startswith("u{"):
        return chr(int(escape[2:-1], 16))
    if escape[0] in "ux" and len(escape) > 1:
        return chr(int(escape[1:], 16))
    if escape in ("\n", "\r", "\r\n", "\u2028", "\u2029"):
        return ""
    return _SIMPLE_ESCAPES.get(escape, escape)


def string_literal_value(node: Node) -> Optional[str]:
    """Value of a string literal or a template string without substitutions.

    Returns:
        Decoded string, or None if node is not such a literal.
    """
    if node.type == "template_string":
        if any(child.type == "template_substitution" for child in node.named_children):
            return None
    elif node.type != "string":
        return None
    return _ESCAPE_PATTERN.sub(_unescape, node_text(node)[1:-1])


def unwrap_expression(node: Node) -> Node:
    """Strip parentheses, `as`/`satisfies` casts and non-null assertions."""
    while node.type in WRAPPER_TYPES or node.type == "type_assertion":
        children = _named_children(node)
        if not children:
            break
        node = children[-1] if node.type == "type_assertion" else children[0]
    return node


# Imports


def _import_source(statement: Node) -> Optional[str]:
    source = statement.child_by_field_name("source")
    return string_literal_value(source) if source is not None else None


def _import_specifiers(statement: Node) -> Iterator[Node]:
    for node in walk(statement):
        if node.type == "import_specifier":
            yield node


def find_named_import(
    root: Node, name: str, module: Union[str, Pattern[str]]
) -> Optional[Tuple[str, str]]:
    """Find `import { name }` or `import { name as alias }` from a module.

    Matches a specifier whose imported name or alias equals name.

    Args:
        root: Tree root.
        name: Imported name or local alias.
        module: Exact module name, or compiled pattern searched in it.

    Returns:
        (imported name, local name), or None if there is no such import.
    """
    for statement in root.named_children:
        if statement.type != "import_statement":
            continue
        source = _import_source(statement)
        if source is None:
            continue
        if isinstance(module, str):
            if source != module:
                continue
        elif not module.search(source):
            continue
        for specifier in _import_specifiers(statement):
            imported = specifier.child_by_field_name("name")
            alias = specifier.child_by_field_name("alias")
            imported_name = node_text(imported) if imported is not None else ""
            local_name = node_text(alias) if alias is not None else imported_name
            if name in (imported_name, local_name):
                return imported_name, local_name
    return None


def find_import_of(root: Node, local_name: str) -> Optional[Tuple[str, str]]:
    """Find the import that binds a local name.

    Args:
        root: Tree root.
        local_name: Name used in the file.

    Returns:
        (module path, imported name), or None if the name is not imported.
        For default imports the imported name is the local name.
    """
    for statement in root.named_children:
        if statement.type != "import_statement":
            continue
        source = _import_source(statement)
        if source is None:
            continue
        for specifier in _import_specifiers(statement):
            imported = specifier.child_by_field_name("name")
            alias = specifier.child_by_field_name("alias")
            imported_name = node_text(imported) if imported is not None else ""
            bound = node_text(alias) if alias is not None else imported_name
            if bound == local_name:
                return source, imported_name
        for clause in statement.named_children:
            if clause.type != "import_clause":
                continue
            for child in clause.named_children:
                if child.type == "identifier" and node_text(child) == local_name:
                    return source, local_name
    return None


# Classes


def find_class_declarations(root: Node, name: Optional[str] = None) -> List[Node]:
    """Find class declarations and expressions, optionally by name."""
    classes = []
    for node in walk(root):
        if node.type not in CLASS_TYPES:
            continue
        if name is not None:
            class_name = node.child_by_field_name("name")
            if class_name is None or node_text(class_name) != name:
                continue
        classes.append(node)
    return classes


def get_superclass_name(class_node: Node) -> Optional[str]:
    """Name of the class a class extends, if it is a plain identifier."""
    for child in class_node.children:
        if child.type != "class_heritage":
            continue
        for clause in child.named_children:
            if clause.type != "extends_clause":
                continue
            value = clause.child_by_field_name("value")
            if value is None:
                children = _named_children(clause)
                value = children[0] if children else None
            if value is not None and value.type == "identifier":
                return node_text(value)
    return None


def _class_members(class_node: Node) -> List[Node]:
    body = class_node.child_by_field_name("body")
    return _named_children(body) if body is not None else []


def _member_name(member: Node) -> str:
    name = member.child_by_field_name("name")
    return node_text(name) if name is not None else ""


def _type_matches(type_annotation: Optional[Node], type_name: str) -> bool:
    if type_annotation is None:
        return False
    for child in _named_children(type_annotation):
        text = node_text(child)
        if child.type == "generic_type":
            inner = child.child_by_field_name("name")
            text = node_text(inner) if inner is not None else text
        if text == type_name or text.endswith(f".{type_name}"):
            return True
    return False


def is_inject_call(node: Optional[Node], inject_function: str, type_name: str) -> bool:
    """Check for `inject(TypeName)` (optionally with type arguments)."""
    if node is None:
        return False
    node = unwrap_expression(node)
    if node.type != "call_expression":
        return False
    function = node.child_by_field_name("function")
    if function is None or function.type != "identifier" or node_text(function) != inject_function:
        return False
    argument = first_argument(node)
    return argument is not None and node_text(argument) == type_name


def find_constructor(class_node: Node) -> Optional[Node]:
    """The class constructor method, if declared."""
    for member in _class_members(class_node):
        if member.type == "method_definition" and _member_name(member) == "constructor":
            return member
    return None


def _parameters(function_node: Node) -> List[Node]:
    parameters = function_node.child_by_field_name("parameters")
    if parameters is None:
        return []
    return [child for child in parameters.named_children if child.type in PARAMETER_TYPES]


def _parameter_name(parameter: Node) -> str:
    pattern = parameter.child_by_field_name("pattern")
    return node_text(pattern) if pattern is not None else ""


def _is_parameter_property(parameter: Node) -> bool:
    return any(child.type in PARAMETER_MODIFIER_TYPES for child in parameter.children)


def find_constructor_parameters(
    class_node: Node, type_name: str, properties: bool
) -> List[str]:
    """Names of constructor parameters typed as type_name.

    Args:
        class_node: Class declaration.
        type_name: Expected parameter type.
        properties: True for parameter properties (with an accessibility
            or readonly modifier), False for plain parameters.

    Returns:
        Parameter names in declaration order.
    """
    constructor = find_constructor(class_node)
    if constructor is None:
        return []
    return [
        _parameter_name(parameter)
        for parameter in _parameters(constructor)
        if _is_parameter_property(parameter) == properties
        and _type_matches(parameter.child_by_field_name("type"), type_name)
    ]


def find_class_properties_by_type(
    class_node: Node, type_name: str, inject_function: str = "inject"
) -> List[str]:
    """Names of class members that hold a type_name instance.

    Looks at, in order: constructor parameter properties, typed property
    declarations, properties initialized with `inject(TypeName)` and
    getters returning the type.

    Args:
        class_node: Class declaration.
        type_name: Service type name.
        inject_function: Name of the dependency injection helper.

    Returns:
        Property names, `#private` names included, without duplicates.
    """
    names = find_constructor_parameters(class_node, type_name, properties=True)
    members = _class_members(class_node)

    for member in members:
        if member.type == "public_field_definition" and _type_matches(
            member.child_by_field_name("type"), type_name
        ):
            names.append(_member_name(member))
    for member in members:
        if member.type == "public_field_definition" and is_inject_call(
            member.child_by_field_name("value"), inject_function, type_name
        ):
            names.append(_member_name(member))
    for member in members:
        if (
            member.type == "method_definition"
            and any(child.type == "get" for child in member.children)
            and _type_matches(member.child_by_field_name("return_type"), type_name)
        ):
            names.append(_member_name(member))

    return list(dict.fromkeys(name for name in names if name))


# Functions


def find_function_definitions(root: Node) -> List[Node]:
    """Function declarations and functions assigned to variables."""
    functions = []
    for node in walk(root):
        if node.type == "function_declaration":
            functions.append(node)
        elif node.type == "variable_declarator":
            value = node.child_by_field_name("value")
            if value is not None and value.type in FUNCTION_VALUE_TYPES:
                functions.append(value)
    return functions


def find_inject_variables(scope: Node, inject_function: str, type_name: str) -> List[str]:
    """Variables initialized with `inject(TypeName)` inside a scope."""
    names = []
    for node in walk(scope):
        if node.type == "variable_declarator" and is_inject_call(
            node.child_by_field_name("value"), inject_function, type_name
        ):
            name = node.child_by_field_name("name")
            if name is not None and name.type == "identifier":
                names.append(node_text(name))
    return names


# Calls


def first_argument(call: Node) -> Optional[Node]:
    """First argument of a call expression, skipping comments."""
    arguments = call.child_by_field_name("arguments")
    if arguments is None:
        return None
    children = _named_children(arguments)
    return children[0] if children else None


def _calls(scope: Node) -> Iterator[Tuple[Node, Node]]:
    for node in walk(scope):
        if node.type == "call_expression":
            function = node.child_by_field_name("function")
            if function is not None:
                yield node, function


def _member_parts(function: Node) -> Optional[Tuple[Node, str]]:
    if function.type != "member_expression":
        return None
    target = function.child_by_field_name("object")
    prop = function.child_by_field_name("property")
    if target is None or prop is None:
        return None
    return target, node_text(prop)


def find_function_calls(scope: Node, function_name: str) -> List[Node]:
    """Calls of a plain function: `name(...)`."""
    return [
        call
        for call, function in _calls(scope)
        if function.type == "identifier" and node_text(function) == function_name
    ]


def find_method_calls(scope: Node, receiver: str, methods: Sequence[str]) -> List[Node]:
    """Calls like `receiver.method(...)` on a plain variable."""
    calls = []
    for call, function in _calls(scope):
        parts = _member_parts(function)
        if parts is None:
            continue
        target, method = parts
        if method in methods and target.type == "identifier" and node_text(target) == receiver:
            calls.append(call)
    return calls


def find_property_method_calls(
    scope: Node, property_name: str, methods: Sequence[str]
) -> List[Node]:
    """Calls like `this.property.method(...)` for an exact property name."""
    calls = []
    for call, function in _calls(scope):
        parts = _member_parts(function)
        if parts is None or parts[1] not in methods:
            continue
        owner = _member_parts(parts[0])
        if owner is None:
            continue
        receiver, name = owner
        if receiver.type == "this" and name == property_name:
            calls.append(call)
    return calls
