import textwrap

from antd_rush.services.catalog import Catalog
from antd_rush.services.document import Position, TextDocument
from antd_rush.services.jsx_tree import (
    ClassDeclarationNode,
    JsxElementNode,
    class_extends,
    find_enclosing_class,
    find_enclosing_jsx_component,
    iter_nodes,
    node_at,
    parse_document,
    unclosed_tags,
    wrap,
)

CURSOR = "|"


def _doc(code: str):
    """Build a document from `code`, using `|` as the cursor marker."""
    code = textwrap.dedent(code)
    index = code.index(CURSOR)
    text = code[:index] + code[index + 1:]
    line = code.count("\n", 0, index)
    character = index - (code.rfind("\n", 0, index) + 1)
    document = TextDocument(path="/proj/src/App.tsx", text=text)
    return document, Position(line, character)


def _catalog() -> Catalog:
    return Catalog.from_mapping(
        {
            "Button": {"methods": ["onClick"]},
            "Form": {"methods": ["onFinish"]},
            "Table": {"methods": ["onChange"]},
            "Table.Column": {"methods": ["onCell"]},
        }
    )


def _component(code: str):
    document, position = _doc(code)
    tree = parse_document(document)
    return find_enclosing_jsx_component(tree, document, position, _catalog())


def test_innermost_component_wins():
    code = """
    const App = () => (
      <Table dataSource={data}>
        <Table.Column title="Na|me" dataIndex="name" />
      </Table>
    );
    """
    assert _component(code) == "Table.Column"


def test_cursor_on_tag_name_counts_as_inside():
    code = """
    const App = () => <Form><But|ton type="primary">Go</Button></Form>;
    """
    assert _component(code) == "Button"


def test_cursor_in_children_text():
    code = """
    const App = () => (
      <Form>
        <Button>Cl|ick</Button>
      </Form>
    );
    """
    assert _component(code) == "Button"


def test_cursor_in_attribute_expression():
    code = """
    const App = () => <Button onClick={() => setOpen(tr|ue)}>Go</Button>;
    """
    assert _component(code) == "Button"


def test_unknown_elements_are_skipped():
    code = """
    const App = () => (
      <Form>
        <div className="ro|w" />
      </Form>
    );
    """
    assert _component(code) == "Form"


def test_outside_jsx_returns_none():
    code = """
    const total = add(1, |2);
    const App = () => <Button>Go</Button>;
    """
    assert _component(code) is None


def test_unknown_jsx_only_returns_none():
    code = """
    const App = () => <div><span>te|xt</span></div>;
    """
    assert _component(code) is None


def test_half_typed_tag_is_recovered():
    code = """
    import { Button } from 'antd';

    const App = () => (
      <div>
        <Button #|
      </div>
    );
    """
    assert _component(code) == "Button"


def test_half_typed_tag_inside_known_parent_prefers_inner():
    code = """
    const App = () => (
      <Form layout="inline">
        <Button !|
      </Form>
    );
    """
    assert _component(code) == "Button"


def test_unfinished_tag_in_another_statement_is_not_reported():
    document, position = _doc(
        "const A = () => <Modal #\nconst B = () => <div>te|xt</div>;"
    )
    catalog = Catalog.from_mapping(
        {"Button": {"methods": ["onClick"]}, "Modal": {"methods": ["onOk"]}}
    )

    tree = parse_document(document)

    assert find_enclosing_jsx_component(tree, document, position, catalog) is None


def test_error_after_the_cursor_does_not_trigger_recovery():
    code = """
    const A = () => <div>te|xt</div>;
    const B = () => <Button #
    """
    assert _component(code) is None


def test_clean_statement_is_resolved_from_the_tree_despite_errors_elsewhere():
    code = """
    const A = () => <Table #
    const B = () => <Form><Button>G|o</Button></Form>;
    """
    assert _component(code) == "Button"


def test_unclosed_tags_tracks_nesting():
    assert unclosed_tags("<Form><Button onClick={() => go()} ") == ["Button", "Form"]
    assert unclosed_tags("<Form><Input /><Select>x</Select>") == ["Form"]
    assert unclosed_tags("<Form></Form>") == []


def test_unclosed_tags_ignores_type_arguments_and_fragments():
    assert unclosed_tags("const [a] = useState<Foo>(1); <Modal>") == ["Modal"]
    assert unclosed_tags("<><Button>") == ["Button"]
    assert unclosed_tags("<>x</>") == []


def test_unclosed_tags_drops_abandoned_opening_tags():
    assert unclosed_tags("<Modal #\nconst B = () => <div>te") == ["div"]
    assert unclosed_tags("if (a <b) { go(); } <Button ") == ["Button"]
    assert unclosed_tags("<Form>{items.map((i) => <Item key={i} />)}<Button ") == ["Button", "Form"]
    assert unclosed_tags("function f() { return <Modal # } <div>") == ["div"]


CLASS_CODE = """
import React from 'react';

class Foo extends React.Component {
  render() {
    return <Button onClick={this.handleClick}>Go</Button>;
  }
}

function helper() {
  return 1;
}
"""


def test_find_enclosing_class_extending_react_component():
    document, position = _doc(CLASS_CODE.replace("Go</Button>", "G|o</Button>"))
    tree = parse_document(document)

    node = find_enclosing_class(tree, document, position)

    assert isinstance(node, ClassDeclarationNode)
    assert node.name == "Foo"
    assert node.superclass_expression == "React.Component"


def test_find_enclosing_class_outside_class_returns_none():
    document, position = _doc(CLASS_CODE.replace("return 1;", "return |1;"))
    tree = parse_document(document)

    assert find_enclosing_class(tree, document, position) is None


def test_class_predicate_handles_bare_names_and_type_arguments():
    code = """
    class Panel extends PureComponent<Props, State> {
      render() {
        return <Button>G|o</Button>;
      }
    }
    """
    document, position = _doc(code)
    tree = parse_document(document)

    node = find_enclosing_class(tree, document, position)
    assert node is not None and node.name == "Panel"


def test_class_predicate_rejects_other_superclasses():
    code = """
    class Store extends EventEmitter {
      emit() {
        return <Button>G|o</Button>;
      }
    }
    """
    document, position = _doc(code)
    tree = parse_document(document)

    assert find_enclosing_class(tree, document, position) is None
    node = find_enclosing_class(tree, document, position, predicate=class_extends("EventEmitter"))
    assert node is not None and node.name == "Store"


def test_inward_iteration_visits_subtree():
    document, _ = _doc(CLASS_CODE + "|")
    tree = parse_document(document)

    classes = [
        n for n in iter_nodes(wrap(tree.root_node), "inward") if isinstance(n, ClassDeclarationNode)
    ]
    jsx = [n for n in iter_nodes(wrap(tree.root_node), "inward") if isinstance(n, JsxElementNode)]

    assert [c.name for c in classes] == ["Foo"]
    assert [j.tag_name for j in jsx] == ["Button", "Button"]


def test_node_at_and_outward_walk_reach_root():
    document, position = _doc(CLASS_CODE.replace("Go</Button>", "G|o</Button>"))
    tree = parse_document(document)

    kinds = [n.kind for n in iter_nodes(node_at(tree, document, position))]

    assert "jsx_element" in kinds
    assert "class_declaration" in kinds
    assert kinds.index("jsx_element") < kinds.index("class_declaration")
