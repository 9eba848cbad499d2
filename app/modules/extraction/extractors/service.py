"""Service call extraction: `this.translate.get('key')`."""

from typing import Dict, List, Optional, Sequence, Tuple

from tree_sitter import Node

from infrastructure.configuration import settings
from infrastructure.i18n import TranslationSet
from modules.extraction.extractors.base import Extractor
from modules.extraction.property_resolver import ResolverContext, SuperclassPropertyResolver
from modules.extraction.resolvers import resolve_literal_strings
from modules.extraction.typescript import is_script_path, parse_source
from modules.extraction.typescript.queries import (
    find_class_declarations,
    find_class_properties_by_type,
    find_constructor,
    find_constructor_parameters,
    find_function_definitions,
    find_inject_variables,
    find_method_calls,
    find_property_method_calls,
    first_argument,
)


class ServiceExtractor(Extractor):
    """Collect keys passed to translation service methods.

    A service handle is found through:

    - constructor injection: `constructor(private translate: TranslateService)`
    - a typed property: `translate: TranslateService`
    - the inject helper: `translate = inject(TranslateService)`
    - a getter: `get translate(): TranslateService`
    - an ancestor class declaring any of the above, in this file or another
    - a variable in a plain function: `const t = inject(TranslateService)`

    Only direct calls count: `this.translate.get('key')` on a property,
    `translate.get('key')` on a constructor parameter or function variable.

    Args:
        context: Run-scoped memo for cross-file ancestor lookups.
        service_type: Service class name.
        method_names: Methods whose first argument is a key.
        inject_function: Dependency injection helper name.
    """

    name = "service"

    def __init__(
        self,
        context: Optional[ResolverContext] = None,
        service_type: Optional[str] = None,
        method_names: Optional[Sequence[str]] = None,
        inject_function: Optional[str] = None,
    ):
        extraction = settings.extraction
        self.service_type = service_type or extraction.service_type
        self.method_names = list(
            method_names if method_names is not None else extraction.service_methods
        )
        self.inject_function = inject_function or extraction.inject_function
        self.resolver = SuperclassPropertyResolver(
            self.service_type, self.inject_function, context
        )

    def extract(self, source: str, file_path: str) -> Optional[TranslationSet]:
        if not is_script_path(file_path):
            return None
        root = parse_source(source, file_path)
        classes = find_class_declarations(root)
        functions = find_function_definitions(root)
        if not classes and not functions:
            return None

        calls: List[Node] = []
        for function in functions:
            calls.extend(self._function_calls(function))
        for class_node in classes:
            calls.extend(self._constructor_calls(class_node))
            for property_name in self.service_properties(class_node, root, file_path):
                calls.extend(
                    find_property_method_calls(class_node, property_name, self.method_names)
                )

        translations = TranslationSet()
        for call in _unique_calls(calls):
            argument = first_argument(call)
            if argument is None:
                continue
            keys = [key for key in resolve_literal_strings(argument) if key]
            translations = translations.add_keys(keys, file_path)
        return translations

    def service_properties(self, class_node: Node, root: Node, file_path: str) -> List[str]:
        """Service property names of a class, inherited ones as a fallback."""
        names = find_class_properties_by_type(class_node, self.service_type, self.inject_function)
        if names:
            return names
        return self.resolver.find_inherited_properties(class_node, root, file_path)

    def _function_calls(self, function: Node) -> List[Node]:
        calls = []
        for variable in find_inject_variables(function, self.inject_function, self.service_type):
            calls.extend(find_method_calls(function, variable, self.method_names))
        return calls

    def _constructor_calls(self, class_node: Node) -> List[Node]:
        constructor = find_constructor(class_node)
        if constructor is None:
            return []
        calls = []
        for properties in (False, True):
            for parameter in find_constructor_parameters(class_node, self.service_type, properties):
                calls.extend(find_method_calls(constructor, parameter, self.method_names))
        return calls


def _unique_calls(calls: List[Node]) -> List[Node]:
    """Drop calls found through more than one route, keeping source order."""
    unique: Dict[Tuple[int, int], Node] = {}
    for call in calls:
        unique.setdefault((call.start_byte, call.end_byte), call)
    return sorted(unique.values(), key=lambda call: call.start_byte)
