from typing import Literal, Optional

SymbolType = Literal["component", "props"]

PROP_KINDS: set[str] = {"property", "field", "method"}
COMPONENT_KINDS: set[str] = {
    "class",
    "interface",
    "variable",
    "constant",
    "function",
    "module",
    "namespace",
}


def classify(name: str, kind: Optional[str] = None) -> SymbolType:
    """
    Decide whether a declaration name refers to a component or to one of its props.

    A symbol kind reported by the language service wins when we know it.
    Otherwise this is a purely lexical guess: a name whose first character
    changes when uppercased (`onClick`) is a prop, anything else (`Button`) is
    a component. Names starting with `_`, `$` or a digit therefore count as
    components, and so does an all-caps prop name.
    """
    if kind:
        lowered = kind.lower()
        if lowered in PROP_KINDS:
            return "props"
        if lowered in COMPONENT_KINDS:
            return "component"

    if not name:
        return "component"
    first = name[0]
    return "props" if first.upper() != first else "component"
