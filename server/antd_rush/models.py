from typing import List, Optional
from pydantic import BaseModel, Field


# --- Bundled data ---

class ComponentEntry(BaseModel):
    # Handler/prop names offered as completions, in display order
    methods: List[str] = Field(default_factory=list)


class PropDoc(BaseModel):
    description: str = ""
    type: str = ""
    default_value: str = Field(default="", alias="default")
    version: str = ""

    model_config = {
        "populate_by_name": True
    }


# --- Requests ---

class PositionModel(BaseModel):
    line: int = Field(ge=0)
    character: int = Field(ge=0)


class RangeModel(BaseModel):
    start: PositionModel
    end: PositionModel


class DocumentModel(BaseModel):
    path: str
    text: str


class LocationModel(BaseModel):
    path: str
    position: PositionModel
    # Name/kind of the declaration at this location, as reported by the editor
    symbolName: Optional[str] = None
    symbolKind: Optional[str] = None


class CompletionRequest(BaseModel):
    document: DocumentModel
    position: PositionModel
    triggerCharacter: Optional[str] = None
    language: Optional[str] = None


class HoverRequest(BaseModel):
    document: DocumentModel
    position: PositionModel
    definitions: List[LocationModel] = Field(default_factory=list)
    typeDefinitions: List[LocationModel] = Field(default_factory=list)
    language: Optional[str] = None


# --- Responses ---

class CompletionCommandArguments(BaseModel):
    range: RangeModel
    path: str
    handlerName: str
    insertKind: str  # "direct" | "inquiry"
    classComponent: Optional[str] = None


class CompletionCommand(BaseModel):
    title: str
    command: str
    arguments: CompletionCommandArguments


class CompletionItem(BaseModel):
    label: str
    kind: str = "method"
    documentation: Optional[str] = None
    insertText: str
    command: CompletionCommand


class CompletionResponse(BaseModel):
    items: List[CompletionItem] = Field(default_factory=list)


class HoverResponse(BaseModel):
    # Markdown blocks, rendered in order
    contents: List[str] = Field(default_factory=list)


class CatalogComponent(BaseModel):
    name: str
    methods: List[str]


class ResolveResponse(BaseModel):
    key: Optional[str] = None
