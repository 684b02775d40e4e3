from typing import Dict, Literal, Optional

InsertKind = Literal["direct", "inquiry"]

DEFAULT_TRIGGER = "#"

INSERT_KIND_BY_TRIGGER: Dict[str, InsertKind] = {
    "!": "direct",
    "#": "inquiry",
}


def insert_kind_for(trigger_character: Optional[str]) -> InsertKind:
    # Manual invocation and unknown triggers behave like "#"
    return INSERT_KIND_BY_TRIGGER.get(trigger_character or DEFAULT_TRIGGER, "inquiry")


def add_handler_prefix(handler_name: str) -> str:
    """`onClick` -> `handleClick`; names without an `on` prefix get `handle` prepended."""
    if handler_name.startswith("on") and len(handler_name) > 2 and handler_name[2].isupper():
        rest = handler_name[2:]
    else:
        rest = handler_name[:1].upper() + handler_name[1:]
    return f"handle{rest}"


def direct_insert_text(handler_name: str, in_class_component: bool) -> str:
    receiver = "this." if in_class_component else ""
    return f"{handler_name}={{{receiver}{add_handler_prefix(handler_name)}}} "
