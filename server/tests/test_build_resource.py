import json
import logging
import textwrap

import pytest

from antd_rush import build_resource
from antd_rush.build_resource import (
    ApiTable,
    Resources,
    build_resources,
    component_for_heading,
    iter_api_tables,
    parse_table,
    split_row,
)
from antd_rush.config import COMPONENT_MAP_FILE, DEFINITION_FILE, RAW_TABLE_FILE, DocLanguage

BUTTON_EN = """
---
category: Components
type: General
title: Button
---

To trigger an operation.

## When To Use

| Property | Description |
| --- | --- |
| ignored | outside the API section |

## API

| Property | Description | Type | Default | Version |
| --- | --- | --- | --- | --- |
| block | Option to fit button width to its parent width | boolean | false |  |
| loading | Set the loading status of button | boolean \\| { delay: number } | false |  |
| onClick | Set the handler to handle `click` event | (event) => void | - |  |

## Design Token
"""

BUTTON_ZH = """
---
category: Components
subtitle: 按钮
title: Button
---

## API

| 属性 | 说明 | 类型 | 默认值 | 版本 |
| --- | --- | --- | --- | --- |
| block | 将按钮宽度调整为其父宽度的选项 | boolean | false |  |
| loading | 设置按钮载入状态 | boolean \\| { delay: number } | false |  |
| onClick | 点击按钮时的回调 | (event) => void | - |  |
"""

TABLE_EN = """
---
title: Table
---

## API

### Table

| Property | Description | Type | Default |
| --- | --- | --- | --- |
| rowKey | Row's unique key | string \\| function(record): string | `key` |
| onChange | Callback executed when pagination, filters or sorter is changed | function | - |

### Column

One of the Table `columns` prop for describing the table's columns.

| Property | Description | Type | Default |
| --- | --- | --- | --- |
| onCell | Set props on per cell | function(record, rowIndex) | - |
| title | Title of this column | ReactNode | - |

### pagination

| Property | Description | Type | Default |
| --- | --- | --- | --- |
| position | Specify the position of `Pagination` | Array | \\[`bottomRight`] |
"""

DATE_PICKER_EN = """
## API

### Common API

| Property | Description | Type | Default |
| --- | --- | --- | --- |
| onOpenChange | Callback when the popup calendar is popped up or closed | function(open) | - |

### RangePicker

| Property | Description | Type | Default |
| --- | --- | --- | --- |
| onCalendarChange | Callback function, can be executed when the start time or the end time of the range is changing | function(dates, dateStrings, info) | - |
"""


def _components_dir(tmp_path):
    pages = {
        "button/index.en-US.md": BUTTON_EN,
        "button/index.zh-CN.md": BUTTON_ZH,
        "table/index.en-US.md": TABLE_EN,
        "date-picker/index.en-US.md": DATE_PICKER_EN,
        "_util/index.en-US.md": BUTTON_EN,
    }
    root = tmp_path / "components"
    for relative, markdown in pages.items():
        page = root / relative
        page.parent.mkdir(parents=True, exist_ok=True)
        page.write_text(textwrap.dedent(markdown).lstrip(), encoding="utf-8")
    return root


@pytest.mark.parametrize(
    "heading, expected",
    [
        ("Table", "Table"),
        ("Column", "Table.Column"),
        ("`ColumnGroup`", "Table.ColumnGroup"),
        ("Input.Search", "Input.Search"),
        ("Common API", "Table"),
        ("pagination", None),
        ("rowSelection", None),
        ("TableProps", None),
        ("Methods", None),
    ],
)
def test_component_for_heading(heading, expected):
    assert component_for_heading(heading, "Table") == expected


def test_split_row_keeps_escaped_pipes_inside_cells():
    assert split_row("| loading | boolean \\| { delay: number } | false |") == [
        "loading",
        "boolean | { delay: number }",
        "false",
    ]


def test_parse_table_reads_columns_by_header():
    table = ApiTable(
        "Button",
        [
            "| 属性 | 类型 | 说明 |",
            "| :--- | --- | ---: |",
            "| `danger` | boolean | 设置危险按钮 |",
            "| size | `large` \\| `small` | 设置按钮大小 |",
        ],
    )

    assert parse_table(table) == {
        "danger": {"description": "设置危险按钮", "type": "boolean", "default": "", "version": ""},
        "size": {"description": "设置按钮大小", "type": "`large` | `small`", "default": "", "version": ""},
    }


def test_parse_table_without_name_column_is_ignored():
    table = ApiTable("Button", ["| Key | Value |", "| --- | --- |", "| a | b |"])
    assert parse_table(table) == {}


def test_only_api_section_tables_are_collected():
    tables = list(iter_api_tables(textwrap.dedent(BUTTON_EN), "Button"))

    assert [t.component for t in tables] == ["Button"]
    assert "ignored" not in tables[0].markdown


def test_add_page_uses_folder_name_without_title():
    resources = Resources()

    added = resources.add_page(DocLanguage.EN, textwrap.dedent(DATE_PICKER_EN), "DatePicker")

    assert added == 2
    assert resources.component_map == {
        "DatePicker": {"methods": ["onOpenChange"]},
        "DatePicker.RangePicker": {"methods": ["onCalendarChange"]},
    }


def test_build_resources_and_write(tmp_path, capsys, caplog):
    components = _components_dir(tmp_path)
    output = tmp_path / "out"

    with caplog.at_level(logging.WARNING):
        resources = build_resources(components)
    resources.write(output)

    component_map = json.loads((output / COMPONENT_MAP_FILE).read_text(encoding="utf-8"))
    definitions = json.loads((output / DEFINITION_FILE).read_text(encoding="utf-8"))
    raw_tables = json.loads((output / RAW_TABLE_FILE).read_text(encoding="utf-8"))

    assert list(component_map) == [
        "Button",
        "DatePicker",
        "DatePicker.RangePicker",
        "Table",
        "Table.Column",
    ]
    assert component_map["Button"] == {"methods": ["onClick"]}
    assert component_map["Table.Column"] == {"methods": ["onCell"]}

    assert definitions["en"]["Button"]["loading"]["type"] == "boolean | { delay: number }"
    assert definitions["zh"]["Button"]["onClick"]["description"] == "点击按钮时的回调"
    assert "position" not in definitions["en"]["Table"]
    assert set(definitions["zh"]) == {"Button"}

    assert raw_tables["en"]["Table.Column"][0].startswith("| Property | Description | Type | Default |")
    assert "\\|" in raw_tables["zh"]["Button"][0]

    assert "No zh documentation for: DatePicker, DatePicker.RangePicker, Table, Table.Column" in caplog.text
    assert "button/index.en-US.md: 1 API tables" in capsys.readouterr().out


def test_build_resources_requires_a_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        build_resources(tmp_path / "missing")


def test_cli_writes_to_output_dir(tmp_path, capsys):
    components = _components_dir(tmp_path)
    output = tmp_path / "data"

    build_resource.main([str(components), "--output", str(output)])

    assert (output / COMPONENT_MAP_FILE).is_file()
    assert "Wrote 5 components" in capsys.readouterr().out


def test_cli_rejects_missing_components_dir(tmp_path):
    with pytest.raises(SystemExit):
        build_resource.main([str(tmp_path / "nope")])
