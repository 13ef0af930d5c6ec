#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_ast_validation.py
"""Unit tests for structural validation of document trees."""

import pytest
from utils import atom, block, doc, para, text, var

from mailtree.ast import Mark, Node, dict_to_node, validate_document
from mailtree.exceptions import InvariantViolationError, UnsupportedNodeTypeError


@pytest.mark.unit
class TestValidDocuments:
    """Trees that satisfy every invariant."""

    def test_minimal_document(self) -> None:
        validate_document(dict_to_node(doc(para(text("ok")))))

    def test_template_fixture_is_valid(self, welcome_template: dict) -> None:
        validate_document(dict_to_node(welcome_template))

    def test_columns_with_columns(self) -> None:
        tree = doc(block("columns", block("column", para()), block("column", para())))
        validate_document(dict_to_node(tree))


@pytest.mark.unit
class TestInvariantViolations:
    """Each invariant is reported as a structural error."""

    def test_root_must_be_doc(self) -> None:
        with pytest.raises(InvariantViolationError) as exc_info:
            validate_document(dict_to_node(para(text("x"))))
        assert exc_info.value.path == "root"

    @pytest.mark.parametrize("content", [None, ()])
    def test_root_must_have_content(self, content) -> None:
        with pytest.raises(InvariantViolationError):
            validate_document(Node("doc", content=content))

    def test_atomic_node_with_content(self) -> None:
        tree = doc({"type": "button", "content": [text("nope")]})
        with pytest.raises(InvariantViolationError) as exc_info:
            validate_document(dict_to_node(tree))
        assert exc_info.value.node_type == "button"
        assert exc_info.value.path == "doc/0:button"

    def test_columns_with_non_column_child(self) -> None:
        tree = doc(block("columns", block("column", para()), para(text("stray"))))
        with pytest.raises(InvariantViolationError) as exc_info:
            validate_document(dict_to_node(tree))
        assert exc_info.value.node_type == "columns"
        assert exc_info.value.path == "doc/0:columns/1"

    def test_marks_on_non_text_node(self) -> None:
        tree = Node("doc", content=(Node("paragraph", content=(), marks=(Mark("bold"),)),))
        with pytest.raises(InvariantViolationError):
            validate_document(tree)

    def test_text_with_content(self) -> None:
        tree = Node("doc", content=(Node("paragraph", content=(Node("text", text="a", content=(Node("text"),)),)),))
        with pytest.raises(InvariantViolationError):
            validate_document(tree)

    def test_variable_directly_under_doc(self) -> None:
        with pytest.raises(InvariantViolationError):
            validate_document(dict_to_node(doc(var("name"))))

    @pytest.mark.parametrize(
        "container,child",
        [
            ("paragraph", block("section", para(text("x")))),
            ("paragraph", atom("button", text="Go", url="https://example.com")),
            ("heading", atom("image", src="https://example.com/a.png")),
            ("footer", atom("spacer")),
            ("paragraph", para(text("nested"))),
            ("codeBlock", block("bulletList", block("listItem", para()))),
        ],
    )
    def test_inline_container_with_block_child(self, container: str, child: dict) -> None:
        tree = doc(block(container, text("a"), child))
        with pytest.raises(InvariantViolationError) as exc_info:
            validate_document(dict_to_node(tree))
        assert exc_info.value.node_type == container
        assert exc_info.value.path == f"doc/0:{container}/1"

    def test_inline_container_with_inline_children(self) -> None:
        tree = doc(para(text("a"), var("name"), atom("hardBreak"), atom("inlineImage", src="https://example.com/i.png")))
        validate_document(dict_to_node(tree))

    def test_unknown_child_of_inline_container(self) -> None:
        with pytest.raises(UnsupportedNodeTypeError):
            validate_document(dict_to_node(doc(para(text("a"), atom("sparkle")))))

    def test_nested_doc(self) -> None:
        with pytest.raises(InvariantViolationError):
            validate_document(dict_to_node(doc(block("section", doc(para())))))


@pytest.mark.unit
class TestUnknownTypes:
    """Unknown node types fail loudly wherever they appear."""

    def test_unknown_type_at_top_level(self) -> None:
        with pytest.raises(UnsupportedNodeTypeError) as exc_info:
            validate_document(dict_to_node(doc({"type": "not-a-real-node"})))
        assert exc_info.value.node_type == "not-a-real-node"

    def test_unknown_type_deep_in_hidden_section(self) -> None:
        tree = doc(block("section", block("section", atom("mystery")), showIfKey="never"))
        with pytest.raises(UnsupportedNodeTypeError):
            validate_document(dict_to_node(tree))
