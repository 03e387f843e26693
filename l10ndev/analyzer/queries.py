#!/usr/bin/env python3
"""
Tree-sitter query sources used by the script analyzer.

Each recognized idiom is its own pattern so that every predicate refers to
a capture that is always present in the match. Matches are interpreted by
which captures they carry, not by pattern index.

Captures produced by the import query:
    @source      module name of the import/require ('vscode', '@vscode/l10n')
    @variable    identifier bound to the whole module or to require(M).prop
    @property    destructured or accessed symbol ('l10n', 't')
    @alias       local name of a destructured symbol ({ t: alias })
    @namespace   identifier of `import * as X`
    @named       imported symbol of `import { X }`
    @named_alias local name of `import { X as alias }`

Captures produced by the call query:
    @args        the arguments node, or the template of a tagged call
"""

from typing import Iterable, Optional


def _quoted(values: Iterable[str]) -> str:
    return ' '.join(f'"{value}"' for value in values)


_REQUIRE_CALL = """(call_expression
      function: (identifier) @require
      arguments: (arguments . (string (string_fragment) @source)))"""


def import_query(modules: list[str], symbols: list[str]) -> str:
    """
    Build the query matching require() and import bindings of the given modules.

    Args:
        modules: Module names to anchor on (host module and translation module)
        symbols: Exported symbols worth binding (translation namespace and call name)

    Returns:
        Query source
    """
    module_names = _quoted(modules)
    symbol_names = _quoted(symbols)
    require = _REQUIRE_CALL
    require_predicates = f'(#eq? @require "require") (#any-of? @source {module_names})'
    property_access = f"""(member_expression
      object: {require}
      property: (property_identifier) @property)"""

    return f"""
; const x = require(M)
(variable_declarator
  name: (identifier) @variable
  value: {require}
  {require_predicates})

; const x = require(M).l10n
(variable_declarator
  name: (identifier) @variable
  value: {property_access}
  {require_predicates}
  (#any-of? @property {symbol_names}))

; const {{ l10n }} = require(M)
(variable_declarator
  name: (object_pattern
    (shorthand_property_identifier_pattern) @property)
  value: {require}
  {require_predicates}
  (#any-of? @property {symbol_names}))

; const {{ l10n: alias }} = require(M)
(variable_declarator
  name: (object_pattern
    (pair_pattern
      key: (property_identifier) @property
      value: (identifier) @alias))
  value: {require}
  {require_predicates}
  (#any-of? @property {symbol_names}))

; let x; x = require(M)
(assignment_expression
  left: (identifier) @variable
  right: {require}
  {require_predicates})

; let x; x = require(M).l10n
(assignment_expression
  left: (identifier) @variable
  right: {property_access}
  {require_predicates}
  (#any-of? @property {symbol_names}))

; import * as x from M
(import_statement
  (import_clause
    (namespace_import (identifier) @namespace))
  source: (string (string_fragment) @source)
  (#any-of? @source {module_names}))

; import {{ l10n }} from M, import {{ l10n as alias }} from M
(import_statement
  (import_clause
    (named_imports
      (import_specifier
        name: (identifier) @named
        alias: (identifier)? @named_alias)))
  source: (string (string_fragment) @source)
  (#any-of? @source {module_names})
  (#any-of? @named {symbol_names}))
"""


def call_query(
    host: Optional[str],
    namespace: Optional[str],
    namespace_property: str,
    call_property: str,
    bare_call: Optional[str] = None,
) -> str:
    """
    Build the query matching translation calls for one set of local names.

    Matches ``namespace.call_property(...)`` when a namespace is bound,
    ``host.namespace_property.call_property(...)`` when a host is bound and
    ``bare_call(...)`` when the call function itself was imported under that
    local name. Unbound names contribute no pattern.

    Args:
        host: Local name of the host module object, if imported
        namespace: Local name of the translation namespace object, if imported
        namespace_property: Property name of the translation namespace on the host
        call_property: Property name of the call function on the namespace
        bare_call: Local name of a directly imported call function

    Returns:
        Query source
    """
    patterns = []
    if namespace:
        patterns.append(f"""(call_expression
  function: (member_expression
    object: (identifier) @namespace
    property: (property_identifier) @call)
  arguments: (_) @args
  (#eq? @namespace "{namespace}")
  (#eq? @call "{call_property}"))""")
    if host:
        patterns.append(f"""(call_expression
  function: (member_expression
    object: (member_expression
      object: (identifier) @host
      property: (property_identifier) @namespace)
    property: (property_identifier) @call)
  arguments: (_) @args
  (#eq? @host "{host}")
  (#eq? @namespace "{namespace_property}")
  (#eq? @call "{call_property}"))""")
    if bare_call:
        patterns.append(f"""(call_expression
  function: (identifier) @call
  arguments: (_) @args
  (#eq? @call "{bare_call}"))""")
    return '\n\n'.join(patterns)


def literal_query(attributes: list[str]) -> str:
    """Build the query matching template literals used as JSX attribute values."""
    return f"""(jsx_attribute
  (_) @attribute
  (jsx_expression (template_string) @literal)
  (#any-of? @attribute {_quoted(attributes)}))"""
