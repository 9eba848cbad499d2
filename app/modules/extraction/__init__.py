"""Translation key extraction.

Scans component templates and TypeScript sources for translatable strings,
merges them with the previous output and writes the result.

Subpackages:
- template: markup and binding expression parsing
- typescript: tree-sitter parsing and query helpers
- extractors: directive, pipe, marker, function and service extractors
- post_processors: transforms applied to the merged draft

Modules:
- resolvers: static string resolution for expression nodes
- property_resolver: translation service lookup through superclasses
- task: the extract task tying everything together
- factory: builds a task from validated options
- paths: input pattern expansion
"""

__version__ = "1.0.0"
