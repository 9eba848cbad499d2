"""Cross-file lookup of translation service properties.

A component often inherits its TranslateService handle from a base class
declared in another file. SuperclassPropertyResolver follows the `extends`
chain through imports until it finds a class that declares the handle.

Import paths are resolved like the TypeScript compiler does for the common
cases:

- `./base` and `../shared/base`: relative to the importing file
- `/abs/path/base`: used as is
- `app/shared/base`: relative to `compilerOptions.baseUrl` of the nearest
  tsconfig.json, or to the importing file's directory without one

A path resolving to a directory stands for every `.ts` file directly in
it, since the class name alone does not say which file declares it.
Anything that cannot be found or read means "no inherited property".
"""

import os
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

import json5
from tree_sitter import Node

from infrastructure.configuration import settings
from infrastructure.logging import get_module_logger
from modules.extraction.typescript import parse_source
from modules.extraction.typescript.queries import (
    find_class_declarations,
    find_class_properties_by_type,
    find_import_of,
    get_superclass_name,
)

logger = get_module_logger()

ClassRef = Tuple[str, str]


class ResolverContext:
    """Lookup state shared by all files of one extraction run.

    Attributes:
        properties: Inherited property names keyed by
            (importing directory, import path, class name).
        base_dirs: Resolved project base directory per source directory.
        trees: Parsed syntax trees per ancestor file, None if unreadable.
        project_config_file: File name searched for baseUrl.
    """

    def __init__(self, project_config_file: Optional[str] = None):
        self.project_config_file = (
            project_config_file or settings.extraction.project_config_file
        )
        self.properties: Dict[Tuple[str, str, str], List[str]] = {}
        self.base_dirs: Dict[Path, Path] = {}
        self.trees: Dict[Path, Optional[Node]] = {}

    def clear(self) -> None:
        self.properties.clear()
        self.base_dirs.clear()
        self.trees.clear()


class SuperclassPropertyResolver:
    """Find service properties a class inherits from its ancestors.

    Args:
        type_name: Service type, e.g. "TranslateService".
        inject_function: Dependency injection helper name.
        context: Run-scoped memo tables. A fresh one is used if omitted.

    Example:
        resolver = SuperclassPropertyResolver("TranslateService", "inject")
        names = resolver.find_inherited_properties(class_node, root, "src/app/a.component.ts")
    """

    def __init__(
        self,
        type_name: str,
        inject_function: str = "inject",
        context: Optional[ResolverContext] = None,
    ):
        self.type_name = type_name
        self.inject_function = inject_function
        self.context = context or ResolverContext()

    def find_inherited_properties(
        self,
        class_node: Node,
        root: Node,
        file_path: str,
        _seen: Optional[Set[ClassRef]] = None,
    ) -> List[str]:
        """Service property names declared by the nearest ancestor that has any.

        Args:
            class_node: Class whose ancestors are searched.
            root: Syntax tree of the file declaring class_node.
            file_path: Path of that file.

        Returns:
            Property names, empty if no ancestor declares one or an
            ancestor cannot be found.
        """
        superclass = get_superclass_name(class_node)
        if superclass is None:
            return []

        seen = _seen if _seen is not None else set()
        ref = (os.path.abspath(file_path), superclass)
        if ref in seen:
            logger.debug("superclass_cycle", file_path=file_path, superclass=superclass)
            return []
        seen.add(ref)

        imported = find_import_of(root, superclass)
        if imported is None:
            return self._resolve_declarations(
                find_class_declarations(root, superclass), root, file_path, seen
            )

        import_path, imported_name = imported
        directory = Path(os.path.abspath(file_path)).parent
        key = (str(directory), import_path, imported_name)
        memo = self.context.properties
        if key in memo:
            return list(memo[key])

        names: List[str] = []
        for candidate in self.candidate_files(directory, import_path):
            tree = self._parse_file(candidate)
            if tree is None:
                continue
            declarations = find_class_declarations(tree, imported_name)
            names.extend(self._resolve_declarations(declarations, tree, str(candidate), seen))

        names = list(dict.fromkeys(names))
        memo[key] = names
        if not names:
            logger.debug(
                "superclass_property_not_found",
                file_path=file_path,
                superclass=imported_name,
                import_path=import_path,
            )
        return list(names)

    def _resolve_declarations(
        self, declarations: List[Node], root: Node, file_path: str, seen: Set[ClassRef]
    ) -> List[str]:
        names: List[str] = []
        for declaration in declarations:
            own = find_class_properties_by_type(declaration, self.type_name, self.inject_function)
            if own:
                names.extend(own)
            else:
                names.extend(self.find_inherited_properties(declaration, root, file_path, seen))
        return names

    def candidate_files(self, directory: Path, import_path: str) -> List[Path]:
        """Files that may declare a class imported from import_path.

        Args:
            directory: Directory of the importing file.
            import_path: Module path as written in the import.

        Returns:
            `<target>.ts` if it exists, else the target itself if it is a
            file, else the `.ts` files directly inside the target directory.
        """
        if import_path.startswith("."):
            target = directory / import_path
        elif import_path.startswith("/"):
            target = Path(import_path)
        else:
            target = self.project_base_dir(directory) / import_path
        target = Path(os.path.normpath(target))

        source_file = target.with_name(target.name + ".ts")
        if source_file.is_file():
            return [source_file]
        if target.is_file():
            return [target]
        if target.is_dir():
            return sorted(
                path for path in target.iterdir() if path.suffix == ".ts" and path.is_file()
            )
        return []

    def project_base_dir(self, directory: Path) -> Path:
        """Base directory for bare import paths, from the nearest project config."""
        cached = self.context.base_dirs.get(directory)
        if cached is not None:
            return cached

        base_dir = directory
        config_path = self._find_project_config(directory)
        if config_path is not None:
            base_url = self._read_base_url(config_path)
            if base_url:
                base_dir = Path(os.path.normpath(config_path.parent / base_url))

        self.context.base_dirs[directory] = base_dir
        return base_dir

    def _find_project_config(self, directory: Path) -> Optional[Path]:
        for folder in (directory, *directory.parents):
            candidate = folder / self.context.project_config_file
            if candidate.is_file():
                return candidate
        return None

    def _read_base_url(self, config_path: Path) -> str:
        try:
            config = json5.loads(config_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("project_config_unreadable", path=str(config_path), error=str(e))
            return ""
        if not isinstance(config, dict):
            return ""
        compiler_options = config.get("compilerOptions")
        if not isinstance(compiler_options, dict):
            return ""
        base_url = compiler_options.get("baseUrl")
        return base_url if isinstance(base_url, str) else ""

    def _parse_file(self, path: Path) -> Optional[Node]:
        trees = self.context.trees
        if path not in trees:
            try:
                source = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.debug("superclass_file_unreadable", path=str(path), error=str(e))
                trees[path] = None
            else:
                trees[path] = parse_source(source, str(path))
        return trees[path]
