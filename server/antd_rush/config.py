import os
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Tuple

from pydantic import BaseModel

DATA_DIR: Path = Path(__file__).resolve().parent / "data"

COMPONENT_MAP_FILE = "component_map.json"
DEFINITION_FILE = "definition.json"
RAW_TABLE_FILE = "raw_table.json"

# Installed package whose symbols we document, i.e. node_modules/antd/...
TARGET_MODULE = "antd"

# `class Foo extends Component` / `extends React.PureComponent` etc.
COMPONENT_BASE_NAMES: Tuple[str, ...] = ("Component", "PureComponent")

AFTER_COMPLETION_COMMAND = "antdRush.afterCompletion"

LANGUAGE_ENV_VAR = "ANTD_RUSH_LANGUAGE"


class DocLanguage(str, Enum):
    EN = "en"
    ZH = "zh"


DEFAULT_LANGUAGE = DocLanguage.EN

LANGUAGE_ALIASES: Dict[str, DocLanguage] = {
    "en": DocLanguage.EN,
    "english": DocLanguage.EN,
    "zh": DocLanguage.ZH,
    "zh-cn": DocLanguage.ZH,
    "chinese": DocLanguage.ZH,
    "中文": DocLanguage.ZH,
}


def resolve_language(raw: Optional[str]) -> DocLanguage:
    """
    Map a user-facing language setting onto a documentation language.

    Anything we don't recognise (including no setting at all) falls back to
    English.
    """
    if not raw:
        return DEFAULT_LANGUAGE
    return LANGUAGE_ALIASES.get(raw.strip().lower(), DEFAULT_LANGUAGE)


class RushConfig(BaseModel):
    language: DocLanguage = DEFAULT_LANGUAGE

    model_config = {
        "frozen": True
    }

    @classmethod
    def from_env(cls) -> "RushConfig":
        return cls(language=resolve_language(os.environ.get(LANGUAGE_ENV_VAR)))
