import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException, Request

from antd_rush.config import RushConfig, resolve_language
from antd_rush.errors import ConsistencyError
from antd_rush.models import (
    CompletionRequest,
    CompletionResponse,
    DocumentModel,
    HoverRequest,
    HoverResponse,
    LocationModel,
    PositionModel,
)
from antd_rush.services.cancellation import CancellationToken
from antd_rush.services.catalog import get_catalog
from antd_rush.services.completion import provide_completions
from antd_rush.services.document import Location, Position, TextDocument
from antd_rush.services.documentation import get_documentation
from antd_rush.services.hover import provide_hover
from antd_rush.services.language_service import ContainerSymbol, StaticLanguageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/assist", tags=["assist"])

# Process-wide settings, read once at startup
CONFIG = RushConfig.from_env()


def _config_for(language: Optional[str]) -> RushConfig:
    if language is None:
        return CONFIG
    return RushConfig(language=resolve_language(language))


def _position(model: PositionModel) -> Position:
    return Position(line=model.line, character=model.character)


def _document(model: DocumentModel) -> TextDocument:
    return TextDocument(path=model.path, text=model.text)


def _language_service(
    definitions: List[LocationModel],
    type_definitions: List[LocationModel],
) -> StaticLanguageService:
    # Kept per list: one location may be named differently by each lookup
    symbols: Dict[Location, ContainerSymbol] = {}
    type_definition_symbols: Dict[Location, ContainerSymbol] = {}

    def convert(models: List[LocationModel], names: Dict[Location, ContainerSymbol]) -> List[Location]:
        locations = []
        for m in models:
            location = Location(path=m.path, position=_position(m.position))
            if m.symbolName:
                names[location] = ContainerSymbol(name=m.symbolName, kind=m.symbolKind)
            locations.append(location)
        return locations

    return StaticLanguageService(
        definitions=convert(definitions, symbols),
        type_definitions=convert(type_definitions, type_definition_symbols),
        symbols=symbols,
        type_definition_symbols=type_definition_symbols,
    )


async def _token(request: Request) -> CancellationToken:
    # A client that already hung up doesn't need an answer
    return CancellationToken(is_cancellation_requested=await request.is_disconnected())


@router.post("/completions", response_model=CompletionResponse)
async def completions(body: CompletionRequest, request: Request):
    """
    Handler completions for the Ant Design component around the cursor.
    """
    items = provide_completions(
        document=_document(body.document),
        position=_position(body.position),
        trigger_character=body.triggerCharacter,
        config=_config_for(body.language),
        catalog=get_catalog(),
        docs=get_documentation(),
        token=await _token(request),
    )
    return CompletionResponse(items=items)


@router.post("/hover", response_model=Optional[HoverResponse])
async def hover(body: HoverRequest, request: Request):
    """
    Hover card for the symbol under the cursor.

    The editor sends the definition and type-definition locations it found,
    each tagged with the name of the declaration at that location.
    """
    service = _language_service(body.definitions, body.typeDefinitions)
    try:
        return await provide_hover(
            document=_document(body.document),
            position=_position(body.position),
            service=service,
            config=_config_for(body.language),
            catalog=get_catalog(),
            docs=get_documentation(),
            token=await _token(request),
        )
    except ConsistencyError as e:
        logger.error(f"Hover failed for {body.document.path}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
