import re
from functools import lru_cache
from typing import Optional

from antd_rush.config import TARGET_MODULE


@lru_cache(maxsize=None)
def _folder_pattern(module: str) -> re.Pattern:
    # node_modules/antd/lib/button/index.d.ts -> "button"
    return re.compile(rf"/node_modules/{re.escape(module)}/(?:lib|es)/([^/]+)/")


def _as_posix(path: str) -> str:
    path = path.replace("\\", "/")
    return path if path.startswith("/") else "/" + path


def is_module_path(path: str, module: str = TARGET_MODULE) -> bool:
    """True when `path` points inside the installed `module` package."""
    return f"/node_modules/{module}/" in _as_posix(path)


def match_component_folder(path: str, module: str = TARGET_MODULE) -> Optional[str]:
    match = _folder_pattern(module).search(_as_posix(path))
    if match is None:
        return None
    return match.group(1)
