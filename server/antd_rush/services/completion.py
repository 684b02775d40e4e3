import logging
from typing import List, Optional

from antd_rush.config import AFTER_COMPLETION_COMMAND, RushConfig
from antd_rush.models import (
    CompletionCommand,
    CompletionCommandArguments,
    CompletionItem,
    PositionModel,
    RangeModel,
)
from antd_rush.services.cancellation import CancellationToken
from antd_rush.services.catalog import Catalog
from antd_rush.services.document import Position, TextDocument
from antd_rush.services.documentation import DocumentationStore, props_card
from antd_rush.services.insertion import InsertKind, direct_insert_text, insert_kind_for
from antd_rush.services.jsx_tree import (
    find_enclosing_class,
    find_enclosing_jsx_component,
    parse_document,
)

logger = logging.getLogger(__name__)


def _trigger_range(position: Position) -> RangeModel:
    # The trigger character sits just left of the cursor
    return RangeModel(
        start=PositionModel(line=position.line, character=max(position.character - 1, 0)),
        end=PositionModel(line=position.line, character=position.character),
    )


def build_completion_item(
    document: TextDocument,
    position: Position,
    component: str,
    handler_name: str,
    insert_kind: InsertKind,
    class_component: Optional[str],
    in_class_component: bool,
    config: RushConfig,
    docs: DocumentationStore,
) -> CompletionItem:
    prop_doc = docs.lookup_prop(config.language, component, handler_name)
    documentation = props_card(prop_doc, config.language, type_first=True) if prop_doc else None

    if insert_kind == "direct":
        insert_text = direct_insert_text(handler_name, in_class_component)
    else:
        insert_text = handler_name

    return CompletionItem(
        label=handler_name,
        documentation=documentation,
        insertText=insert_text,
        command=CompletionCommand(
            title="afterCompletion",
            command=AFTER_COMPLETION_COMMAND,
            arguments=CompletionCommandArguments(
                range=_trigger_range(position),
                path=document.path,
                handlerName=handler_name,
                insertKind=insert_kind,
                classComponent=class_component,
            ),
        ),
    )


def provide_completions(
    document: TextDocument,
    position: Position,
    trigger_character: Optional[str],
    config: RushConfig,
    catalog: Catalog,
    docs: DocumentationStore,
    token: Optional[CancellationToken] = None,
) -> List[CompletionItem]:
    """
    Offer the handlers of the catalog component the cursor is inside.

    Returns an empty list when the cursor is not inside a known component, or
    when that component has no handlers.
    """
    if token is not None and token.is_cancellation_requested:
        return []

    tree = parse_document(document)
    component = find_enclosing_jsx_component(tree, document, position, catalog)
    if component is None:
        return []

    handlers = catalog.handlers(component)
    if not handlers:
        return []

    class_node = find_enclosing_class(tree, document, position)
    class_name = getattr(class_node, "name", None) if class_node is not None else None
    insert_kind = insert_kind_for(trigger_character)

    logger.debug(f"Completing {len(handlers)} handlers for <{component}> ({insert_kind})")

    return [
        build_completion_item(
            document,
            position,
            component,
            handler_name,
            insert_kind,
            class_component=class_name,
            in_class_component=class_node is not None,
            config=config,
            docs=docs,
        )
        for handler_name in handlers
    ]
