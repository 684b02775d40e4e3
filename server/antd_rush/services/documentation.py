"""
Documentation tables for catalog components.

Two tables are kept per documentation language:

- props: component -> prop/handler name -> `PropDoc`
- components: component -> markdown blocks (the API tables of the docs page)

Each table has a soft lookup (returns None) and a `require_*` variant that
raises `ConsistencyError`. Callers that already matched the component against
the catalog use the strict variant, since a gap at that point means the data
files disagree with each other.
"""
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from pydantic import ValidationError

from antd_rush.config import DATA_DIR, DEFINITION_FILE, RAW_TABLE_FILE, DocLanguage
from antd_rush.errors import CatalogError, ConsistencyError
from antd_rush.models import PropDoc

logger = logging.getLogger(__name__)

DOC_URL_TEMPLATES: Dict[DocLanguage, str] = {
    DocLanguage.EN: "https://ant.design/components/{folder}/",
    DocLanguage.ZH: "https://ant.design/components/{folder}-cn/",
}

LINK_LABELS: Dict[DocLanguage, str] = {
    DocLanguage.EN: "EN",
    DocLanguage.ZH: "中文",
}

CARD_LABELS: Dict[DocLanguage, Dict[str, str]] = {
    DocLanguage.EN: {
        "type": "type",
        "description": "description",
        "default": "default",
        "version": "version",
    },
    DocLanguage.ZH: {
        "type": "类型",
        "description": "说明",
        "default": "默认值",
        "version": "版本",
    },
}

INTL: Dict[str, Dict[DocLanguage, str]] = {
    "componentHint": {
        DocLanguage.EN: "component documentation",
        DocLanguage.ZH: "组件文档",
    },
}


def intl(key: str, language: DocLanguage) -> str:
    return INTL[key][language]


@dataclass(frozen=True)
class CardItem:
    label: str  # key into CARD_LABELS
    value: str
    display: str = "text"  # "text" | "blockCode"


def compose_card_message(items: List[CardItem], language: DocLanguage) -> str:
    """Render label/value pairs as a markdown card, skipping empty values."""
    labels = CARD_LABELS[language]
    sections: List[str] = []
    for item in items:
        if not item.value:
            continue
        label = labels.get(item.label, item.label)
        if item.display == "blockCode":
            sections.append(f"**{label}**\n```typescript\n{item.value}\n```")
        else:
            sections.append(f"**{label}**: {item.value}")
    return "\n\n".join(sections)


def compose_doc_link(component_folder: str, language: DocLanguage) -> str:
    return DOC_URL_TEMPLATES[language].format(folder=component_folder)


def compose_doc_links(component_folder: str, language: DocLanguage) -> str:
    """Markdown links to every docs language, the configured one first."""
    ordered = [language] + [lang for lang in DocLanguage if lang != language]
    return " | ".join(
        f"[{LINK_LABELS[lang]}]({compose_doc_link(component_folder, lang)})" for lang in ordered
    )


class DocumentationStore:
    def __init__(
        self,
        props: Mapping[DocLanguage, Mapping[str, Mapping[str, PropDoc]]],
        components: Mapping[DocLanguage, Mapping[str, List[str]]],
    ):
        self._props = props
        self._components = components

    @classmethod
    def from_mapping(cls, raw_props: Mapping, raw_components: Mapping) -> "DocumentationStore":
        props: Dict[DocLanguage, Dict[str, Dict[str, PropDoc]]] = {}
        components: Dict[DocLanguage, Dict[str, List[str]]] = {}

        for raw_language, table in raw_props.items():
            language = _parse_language(raw_language)
            if language is None:
                continue
            try:
                props[language] = {
                    component: {name: PropDoc.model_validate(doc) for name, doc in prop_docs.items()}
                    for component, prop_docs in table.items()
                }
            except (ValidationError, AttributeError) as e:
                raise CatalogError(f"invalid props documentation for {raw_language}: {e}") from e

        for raw_language, table in raw_components.items():
            language = _parse_language(raw_language)
            if language is None:
                continue
            if not isinstance(table, dict) or not all(isinstance(v, list) for v in table.values()):
                raise CatalogError(f"invalid component documentation for {raw_language}")
            components[language] = {component: [str(b) for b in blocks] for component, blocks in table.items()}

        return cls(props, components)

    # --- Props ---

    def lookup_prop(self, language: DocLanguage, component: str, prop: str) -> Optional[PropDoc]:
        return self._props.get(language, {}).get(component, {}).get(prop)

    def require_prop(self, language: DocLanguage, component: str, prop: str) -> PropDoc:
        component_props = self._props.get(language, {}).get(component)
        if component_props is None:
            raise ConsistencyError(f"did not match component for {component}")
        doc = component_props.get(prop)
        if doc is None:
            raise ConsistencyError(f"did not match prop {prop} for component {component}")
        return doc

    # --- Component tables ---

    def component_tables(self, language: DocLanguage, component: str) -> Optional[List[str]]:
        return self._components.get(language, {}).get(component)

    def require_component_tables(self, language: DocLanguage, component: str) -> List[str]:
        tables = self.component_tables(language, component)
        if tables is None:
            raise ConsistencyError(f"did not match documentation tables for {component}")
        return tables


def _parse_language(raw: str) -> Optional[DocLanguage]:
    try:
        return DocLanguage(raw)
    except ValueError:
        logger.warning(f"Ignoring documentation for unknown language {raw!r}")
        return None


def props_card(doc: PropDoc, language: DocLanguage, type_first: bool = False) -> str:
    if type_first:
        # Completion popups lead with the signature
        items = [
            CardItem("type", doc.type, display="blockCode"),
            CardItem("description", doc.description),
        ]
    else:
        items = [
            CardItem("description", doc.description),
            CardItem("type", doc.type),
        ]
    items += [
        CardItem("default", doc.default_value),
        CardItem("version", doc.version),
    ]
    return compose_card_message(items, language)


def _read_json(path: Path) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"failed to load documentation from {path}: {e}") from e
    if not isinstance(data, dict):
        raise CatalogError(f"documentation at {path} must be a JSON object")
    return data


def load_documentation(data_dir: Optional[Path] = None) -> DocumentationStore:
    data_dir = data_dir or DATA_DIR
    store = DocumentationStore.from_mapping(
        _read_json(data_dir / DEFINITION_FILE),
        _read_json(data_dir / RAW_TABLE_FILE),
    )
    logger.info(f"Loaded documentation tables from {data_dir}")
    return store


_documentation: Optional[DocumentationStore] = None


def get_documentation() -> DocumentationStore:
    global _documentation
    if _documentation is None:
        _documentation = load_documentation()
    return _documentation
