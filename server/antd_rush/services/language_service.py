from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Sequence

from antd_rush.services.document import Location, Position, TextDocument


@dataclass(frozen=True)
class ContainerSymbol:
    name: str
    kind: Optional[str] = None  # "property", "class", ... when the editor knows it


class LanguageService(Protocol):
    """What hover resolution needs from the editor's TypeScript service."""

    async def definitions(self, document: TextDocument, position: Position) -> List[Location]:
        ...

    async def type_definitions(self, document: TextDocument, position: Position) -> List[Location]:
        ...

    async def container_symbol(self, location: Location) -> Optional[ContainerSymbol]:
        ...


class StaticLanguageService:
    """
    Answers from lookups the editor already ran and sent along with the request.

    The editor resolves definitions on its side; we only replay them, so the
    position argument is ignored.
    """

    def __init__(
        self,
        definitions: Sequence[Location] = (),
        type_definitions: Sequence[Location] = (),
        symbols: Optional[Dict[Location, ContainerSymbol]] = None,
        type_definition_symbols: Optional[Dict[Location, ContainerSymbol]] = None,
    ):
        self._definitions = list(definitions)
        self._type_definitions = list(type_definitions)
        self._symbols = dict(symbols or {})
        self._type_definition_symbols = dict(type_definition_symbols or {})

    async def definitions(self, document: TextDocument, position: Position) -> List[Location]:
        return list(self._definitions)

    async def type_definitions(self, document: TextDocument, position: Position) -> List[Location]:
        return list(self._type_definitions)

    async def container_symbol(self, location: Location) -> Optional[ContainerSymbol]:
        # Type definitions win during resolution, so their names win for shared locations
        symbol = self._type_definition_symbols.get(location)
        if symbol is not None:
            return symbol
        return self._symbols.get(location)
