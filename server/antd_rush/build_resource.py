"""
Rebuild the bundled data files from an Ant Design source checkout.

Every component folder under `components/` has one docs page per language
(`index.en-US.md`, `index.zh-CN.md`). The tables in each page's `## API`
section are collected into:

- component_map.json: component -> {"methods": [on* props]}
- definition.json:    language -> component -> prop -> PropDoc fields
- raw_table.json:     language -> component -> markdown tables, as written

Tables directly under the API heading (or under a free-text heading such as
"Common API") belong to the page's component. A heading naming a component
(`### Input.Search`, `### Column`) switches to that component, with undotted
names qualified by the page's component (`Table.Column`). Lower-case headings
(`### pagination`) and type headings (`### FormInstance`) describe config
objects and are skipped.
"""
import argparse
import json
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from antd_rush.config import (
    COMPONENT_MAP_FILE,
    DATA_DIR,
    DEFINITION_FILE,
    RAW_TABLE_FILE,
    DocLanguage,
)

logger = logging.getLogger(__name__)

DOC_FILES: Dict[DocLanguage, str] = {
    DocLanguage.EN: "index.en-US.md",
    DocLanguage.ZH: "index.zh-CN.md",
}

# Header cell -> PropDoc field
COLUMN_FIELDS: Dict[str, str] = {
    "property": "name",
    "param": "name",
    "parameter": "name",
    "name": "name",
    "参数": "name",
    "属性": "name",
    "名称": "name",
    "description": "description",
    "说明": "description",
    "描述": "description",
    "type": "type",
    "类型": "type",
    "default": "default",
    "default value": "default",
    "默认值": "default",
    "version": "version",
    "版本": "version",
}

HANDLER_RE = re.compile(r"^on[A-Z]")

_TITLE_RE = re.compile(r"^title:\s*(?P<title>\S.*?)\s*$", re.MULTILINE)
_HEADING_RE = re.compile(r"^(?P<level>#{2,6})\s+(?P<text>.+?)\s*#*\s*$")
_COMPONENT_HEADING_RE = re.compile(r"^[A-Z][A-Za-z0-9]*(\.[A-Z][A-Za-z0-9]*)*$")
_CONFIG_HEADING_RE = re.compile(r"^[a-z][\w.]*$")
_CELL_SPLIT_RE = re.compile(r"(?<!\\)\|")

# Sub-headings of the API section that never name a component
NON_COMPONENT_HEADINGS = {"Methods", "Events", "Interface", "FAQ"}


@dataclass
class ApiTable:
    component: str
    lines: List[str] = field(default_factory=list)

    @property
    def markdown(self) -> str:
        return "\n".join(self.lines)


def split_row(line: str) -> List[str]:
    """Cells of a markdown table row, with `\\|` unescaped."""
    line = line.strip()
    if line.startswith("|"):
        line = line[1:]
    if line.endswith("|") and not line.endswith("\\|"):
        line = line[:-1]
    return [cell.strip().replace("\\|", "|") for cell in _CELL_SPLIT_RE.split(line)]


def _is_separator(line: str) -> bool:
    cells = split_row(line)
    return bool(cells) and all(re.fullmatch(r":?-{3,}:?", c) for c in cells)


def read_title(markdown: str) -> Optional[str]:
    match = _TITLE_RE.search(markdown)
    return match.group("title").strip("'\"") if match else None


def component_for_heading(heading: str, title: str) -> Optional[str]:
    """
    Which component a `###` heading inside the API section documents.

    Returns `title` for free-text headings and None for headings that describe
    config objects or types rather than a component.
    """
    heading = heading.strip("` ")
    if heading in NON_COMPONENT_HEADINGS or _CONFIG_HEADING_RE.match(heading):
        return None
    if not _COMPONENT_HEADING_RE.match(heading):
        return title
    if heading == title or "." in heading:
        return heading
    if heading.startswith(title):
        return None
    return f"{title}.{heading}"


def iter_api_tables(markdown: str, title: str) -> Iterator[ApiTable]:
    in_api = False
    component: Optional[str] = title
    table: Optional[ApiTable] = None

    for line in markdown.splitlines():
        stripped = line.strip()

        if table is not None:
            if stripped.startswith("|"):
                table.lines.append(stripped)
                continue
            yield table
            table = None

        heading = _HEADING_RE.match(stripped)
        if heading:
            level = len(heading.group("level"))
            text = heading.group("text")
            if level == 2:
                in_api = text.strip().lower() == "api"
                component = title
            elif in_api:
                component = component_for_heading(text, title)
            continue

        if in_api and component is not None and stripped.startswith("|"):
            table = ApiTable(component=component, lines=[stripped])

    if table is not None:
        yield table


def parse_table(table: ApiTable) -> Dict[str, Dict[str, str]]:
    """Prop rows of an API table keyed by prop name. Tables without a name column yield nothing."""
    lines = [line for line in table.lines if not _is_separator(line)]
    if not lines:
        return {}

    columns = [COLUMN_FIELDS.get(cell.lower()) for cell in split_row(lines[0])]
    if "name" not in columns:
        return {}

    props: Dict[str, Dict[str, str]] = {}
    for line in lines[1:]:
        record = {"description": "", "type": "", "default": "", "version": ""}
        name = ""
        for column, cell in zip(columns, split_row(line)):
            if column == "name":
                name = cell.strip("` ")
            elif column is not None:
                record[column] = cell
        if name:
            props[name] = record
    return props


@dataclass
class Resources:
    component_map: Dict[str, Dict[str, List[str]]] = field(default_factory=dict)
    definitions: Dict[str, Dict[str, Dict[str, Dict[str, str]]]] = field(default_factory=dict)
    raw_tables: Dict[str, Dict[str, List[str]]] = field(default_factory=dict)

    def add_page(self, language: DocLanguage, markdown: str, fallback_title: str) -> int:
        title = read_title(markdown) or fallback_title
        added = 0
        for table in iter_api_tables(markdown, title):
            props = parse_table(table)
            if not props:
                continue
            added += 1
            self.raw_tables.setdefault(language.value, {}).setdefault(table.component, []).append(
                table.markdown
            )
            component_props = self.definitions.setdefault(language.value, {}).setdefault(
                table.component, {}
            )
            component_props.update(props)

            methods = self.component_map.setdefault(table.component, {"methods": []})["methods"]
            for name in props:
                if HANDLER_RE.match(name) and name not in methods:
                    methods.append(name)
        return added

    def write(self, output_dir: Path) -> None:
        output_dir.mkdir(parents=True, exist_ok=True)
        for filename, data in (
            (COMPONENT_MAP_FILE, dict(sorted(self.component_map.items()))),
            (DEFINITION_FILE, self.definitions),
            (RAW_TABLE_FILE, self.raw_tables),
        ):
            with open(output_dir / filename, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
                f.write("\n")


def _pascal_case(folder: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in folder.split("-"))


def iter_doc_pages(components_dir: Path) -> Iterator[Tuple[DocLanguage, Path, str]]:
    for folder in sorted(os.listdir(components_dir)):
        if folder.startswith(("_", ".")):
            continue
        for language, filename in DOC_FILES.items():
            page = components_dir / folder / filename
            if page.is_file():
                yield language, page, _pascal_case(folder)


def build_resources(components_dir: Path) -> Resources:
    if not components_dir.is_dir():
        raise FileNotFoundError(f"not a directory: {components_dir}")

    resources = Resources()
    for language, page, fallback_title in iter_doc_pages(components_dir):
        count = resources.add_page(language, page.read_text(encoding="utf-8"), fallback_title)
        if count == 0:
            logger.debug(f"No API tables in {page}")
        else:
            print(f"✅ {page.relative_to(components_dir)}: {count} API tables", flush=True)

    for language in DOC_FILES:
        documented = set(resources.definitions.get(language.value, {}))
        missing = sorted(set(resources.component_map) - documented)
        if missing:
            logger.warning(f"No {language.value} documentation for: {', '.join(missing)}")
    return resources


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="antd-rush-build-resource",
        description="Rebuild the catalog and documentation tables from an Ant Design checkout.",
    )
    parser.add_argument(
        "components_dir",
        type=Path,
        help="The `components/` directory of an ant-design source checkout.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=DATA_DIR,
        help=f"Directory to write the JSON files to (default: {DATA_DIR}).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.components_dir.is_dir():
        parser.error(f"not a directory: {args.components_dir}")

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print(f"🔍 Reading docs from: {args.components_dir}", flush=True)
    resources = build_resources(args.components_dir)
    resources.write(args.output)
    print(f"📦 Wrote {len(resources.component_map)} components to {args.output}", flush=True)


if __name__ == "__main__":
    main()
