import logging
from typing import Dict, List, Optional

import anyio

from antd_rush.config import TARGET_MODULE, RushConfig
from antd_rush.models import HoverResponse
from antd_rush.services.cancellation import CancellationToken
from antd_rush.services.catalog import Catalog
from antd_rush.services.document import Location, Position, TextDocument
from antd_rush.services.documentation import (
    DocumentationStore,
    compose_doc_links,
    intl,
    props_card,
)
from antd_rush.services.jsx_tree import find_enclosing_jsx_component, parse_document
from antd_rush.services.language_service import LanguageService
from antd_rush.services.modules import is_module_path, match_component_folder
from antd_rush.services.symbols import classify

logger = logging.getLogger(__name__)


async def definition_in_module(
    service: LanguageService,
    document: TextDocument,
    position: Position,
    module: str = TARGET_MODULE,
) -> Optional[Location]:
    """
    Where the symbol under the cursor is declared inside `module`, if anywhere.

    Both lookups run concurrently. Type definitions win because they point at
    the props interface rather than at the value that carries it.
    """
    results: Dict[str, List[Location]] = {}

    async def run(key: str, lookup) -> None:
        results[key] = list(await lookup(document, position) or [])

    async with anyio.create_task_group() as tg:
        tg.start_soon(run, "definitions", service.definitions)
        tg.start_soon(run, "type_definitions", service.type_definitions)

    definitions = [loc for loc in results["definitions"] if is_module_path(loc.path, module)]
    type_definitions = [loc for loc in results["type_definitions"] if is_module_path(loc.path, module)]

    if len(type_definitions) > 1:
        logger.info(f"Got {len(type_definitions)} type definitions under {module}, using the first")
    if len(definitions) > 1:
        logger.info(f"Got {len(definitions)} definitions under {module}, using the first")

    if type_definitions:
        return type_definitions[0]
    if definitions:
        return definitions[0]
    return None


def _props_hover(
    document: TextDocument,
    position: Position,
    config: RushConfig,
    catalog: Catalog,
    docs: DocumentationStore,
) -> Optional[HoverResponse]:
    prop_name = document.word_at(position)
    if not prop_name:
        return None

    tree = parse_document(document)
    component = find_enclosing_jsx_component(tree, document, position, catalog)
    if component is None:
        return None
    key = catalog.match_exact(component)
    if key is None:
        return None

    doc = docs.require_prop(config.language, key, prop_name)
    return HoverResponse(contents=[props_card(doc, config.language)])


def _component_hover(
    symbol_name: str,
    location: Location,
    config: RushConfig,
    catalog: Catalog,
    docs: DocumentationStore,
    module: str,
) -> Optional[HoverResponse]:
    folder = match_component_folder(location.path, module)
    if folder is None:
        return None

    key = catalog.resolve(symbol_name, folder)
    if key is None:
        return None

    tables = docs.require_component_tables(config.language, key)
    links = compose_doc_links(folder, config.language)
    header = f"**{key}** {intl('componentHint', config.language)} [ {links} ]"
    return HoverResponse(contents=[header, *tables])


async def provide_hover(
    document: TextDocument,
    position: Position,
    service: LanguageService,
    config: RushConfig,
    catalog: Catalog,
    docs: DocumentationStore,
    token: Optional[CancellationToken] = None,
    module: str = TARGET_MODULE,
) -> Optional[HoverResponse]:
    """
    Hover card for a component or prop declared in the target library.

    Returns None whenever the symbol is not ours. Raises ConsistencyError when
    the catalog knows the symbol but the documentation tables don't.
    """
    if token is not None and token.is_cancellation_requested:
        return None

    location = await definition_in_module(service, document, position, module)
    if location is None:
        return None

    symbol = await service.container_symbol(location)
    if symbol is None or not symbol.name:
        return None

    if classify(symbol.name, symbol.kind) == "props":
        return _props_hover(document, position, config, catalog, docs)
    return _component_hover(symbol.name, location, config, catalog, docs, module)
