#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_insertion.py
"""Tests for safe_insert."""

import pytest
from prosemirror.model import Fragment
from utils import (
    assert_doc_equal,
    atom_block,
    atom_inline,
    blockquote,
    create_tr,
    doc,
    p,
    paragraph,
    row,
    schema,
    strong,
    table,
    td,
    td_cursor,
)

from structedit import InsertOptions, NodeSelection, PositionError, TextSelection, safe_insert


def atom_inline_node():
    return schema.nodes["atomInline"].create_checked()


def blockquote_node(text):
    return schema.nodes["blockquote"].create_checked(None, paragraph(text))


@pytest.mark.unit
class TestDirectInsertion:
    """Tests for content that fits at the target position."""

    def test_inserts_node_at_cursor(self):
        """Test inserting an inline atom inside a paragraph."""
        tr = create_tr(doc(p("one<cursor>")))
        new_tr = safe_insert(tr, atom_inline_node())
        assert new_tr is not tr
        assert_doc_equal(new_tr.doc, doc(p("one", atom_inline())))

    def test_inserts_fragment_at_cursor(self):
        """Test inserting a fragment holding an inline atom."""
        tr = create_tr(doc(p("one<cursor>")))
        new_tr = safe_insert(tr, Fragment.from_(atom_inline_node()))
        assert new_tr is not tr
        assert_doc_equal(new_tr.doc, doc(p("one", atom_inline())))

    def test_cursor_at_start_of_inline_content(self):
        """Test that the cursor lands at the start of an inserted inline atom."""
        tr = create_tr(doc(p("one<cursor>")))
        new_tr = safe_insert(tr, atom_inline_node())
        assert isinstance(new_tr.selection, TextSelection)
        assert new_tr.selection.head == 4
        assert new_tr.selection.resolved_from.node_after.type.name == "atomInline"

    def test_cursor_at_start_of_inserted_text(self):
        """Test that inserted text is followed into rather than skipped over."""
        tr = create_tr(doc(p("one<cursor>two")))
        new_tr = safe_insert(tr, schema.text("abc"))
        assert_doc_equal(new_tr.doc, doc(p("oneabctwo")))
        assert new_tr.selection.empty
        assert new_tr.selection.head == 4

    def test_inline_content_in_empty_paragraph_is_inserted_not_replaced(self):
        """Test that an empty paragraph that accepts the content is kept."""
        tr = create_tr(doc(p("<cursor>")))
        new_tr = safe_insert(tr, atom_inline_node())
        assert_doc_equal(new_tr.doc, doc(p(atom_inline())))

    def test_inserts_at_start_of_document(self):
        """Test inserting a paragraph at position 0."""
        tr = create_tr(doc(p("one"), p("two<cursor>")))
        new_tr = safe_insert(tr, paragraph("new"), 0)
        assert new_tr is not tr
        assert_doc_equal(new_tr.doc, doc(p("new"), p("one"), p("two")))
        assert new_tr.selection.resolved_from.parent.text_content == "new"

    def test_inserts_fragment_at_start_of_document(self):
        """Test inserting a fragment at position 0."""
        tr = create_tr(doc(p("one"), p("two<cursor>")))
        new_tr = safe_insert(tr, Fragment.from_(paragraph("new")), 0)
        assert new_tr is not tr
        assert_doc_equal(new_tr.doc, doc(p("new"), p("one"), p("two")))
        assert new_tr.selection.resolved_from.parent.text_content == "new"

    def test_inserts_between_two_nodes(self):
        """Test inserting a paragraph at the boundary between two paragraphs."""
        tr = create_tr(doc(p("one"), p("two<cursor>")))
        new_tr = safe_insert(tr, paragraph("new"), 5)
        assert new_tr is not tr
        assert_doc_equal(new_tr.doc, doc(p("one"), p("new"), p("two")))
        assert new_tr.selection.resolved_from.parent.text_content == "new"


@pytest.mark.unit
class TestAncestorFallback:
    """Tests for content placed after an ancestor of the target position."""

    def test_inserts_paragraph_after_parent(self):
        """Test that a paragraph typed inside marked text lands after the block."""
        tr = create_tr(doc(p(strong("zero"), "o<cursor>ne"), p("three")))
        new_tr = safe_insert(tr, paragraph("two"))
        assert new_tr is not tr
        assert_doc_equal(new_tr.doc, doc(p(strong("zero"), "one"), p("two"), p("three")))
        assert new_tr.selection.resolved_from.parent.text_content == "two"

    def test_inserts_fragment_after_parent(self):
        """Test the same placement for a fragment."""
        tr = create_tr(doc(p(strong("zero"), "o<cursor>ne"), p("three")))
        new_tr = safe_insert(tr, Fragment.from_(paragraph("two")))
        assert new_tr is not tr
        assert_doc_equal(new_tr.doc, doc(p(strong("zero"), "one"), p("two"), p("three")))
        assert new_tr.selection.resolved_from.parent.text_content == "two"

    def test_explicit_position_inside_paragraph(self):
        """Test that position 1 sends a paragraph after the first paragraph."""
        tr = create_tr(doc(p("one"), p("two<cursor>")))
        new_tr = safe_insert(tr, paragraph("new"), 1)
        assert new_tr is not tr
        assert_doc_equal(new_tr.doc, doc(p("one"), p("new"), p("two")))
        assert new_tr.selection.resolved_from.parent.text_content == "new"

    def test_walks_out_of_nested_containers(self):
        """Test that a table is placed after the blockquote holding the cursor."""
        tr = create_tr(doc(blockquote(p("a<cursor>"))))
        content = table(row(td(p("cell")))).node
        new_tr = safe_insert(tr, content)
        assert_doc_equal(new_tr.doc, doc(blockquote(p("a"), table(row(td(p("cell")))))))
        assert new_tr.selection.resolved_from.parent.text_content == "cell"

    def test_returns_same_transaction_when_nothing_fits(self):
        """Test that a table row has no valid place in a document of paragraphs."""
        tr = create_tr(doc(p("one<cursor>")))
        content = row(td(p("x"))).node
        assert safe_insert(tr, content) is tr


@pytest.mark.unit
class TestEmptyParentReplacement:
    """Tests for content replacing an empty block."""

    def test_replaces_empty_paragraph(self):
        """Test that an empty paragraph gives way to a blockquote."""
        tr = create_tr(doc(p("one"), p("<cursor>"), p("three")))
        new_tr = safe_insert(tr, Fragment.from_(blockquote_node("two")))
        assert new_tr is not tr
        assert_doc_equal(new_tr.doc, doc(p("one"), blockquote(p("two")), p("three")))
        assert new_tr.selection.resolved_from.parent.text_content == "two"

    def test_replaces_empty_paragraph_in_table_cell(self):
        """Test that the empty paragraph of a cell is replaced in place."""
        tr = create_tr(doc(table(row(td_cursor))))
        new_tr = safe_insert(tr, paragraph("new"))
        assert_doc_equal(new_tr.doc, doc(table(row(td(p("new"))))))
        assert new_tr.selection.resolved_from.parent.text_content == "new"

    def test_selects_inserted_atom_without_text(self):
        """Test that a lone atom replacing an empty paragraph becomes selected."""
        tr = create_tr(doc(blockquote(p("<cursor>"))))
        new_tr = safe_insert(tr, schema.nodes["atomBlock"].create_checked())
        assert_doc_equal(new_tr.doc, doc(blockquote(atom_block())))
        assert isinstance(new_tr.selection, NodeSelection)
        assert new_tr.selection.from_ == 1

    def test_replaces_smallest_empty_ancestor_that_fits(self):
        """Test that an empty row is replaced when neither paragraph nor cell can host a row."""
        tr = create_tr(doc(table(row(td_cursor))))
        content = row(td(p("x"))).node
        new_tr = safe_insert(tr, content)
        assert_doc_equal(new_tr.doc, doc(table(row(td(p("x"))))))
        assert new_tr.selection.resolved_from.parent.text_content == "x"


@pytest.mark.unit
class TestInsertOptions:
    """Tests for the options accepted by safe_insert."""

    def test_try_to_replace_replaces_selected_node(self):
        """Test replacing a selected paragraph instead of inserting next to it."""
        built = doc(p("one"), p("test"), p("two"))
        tr = create_tr(built)
        tr.set_selection(NodeSelection.create(built.node, 5))
        new_tr = safe_insert(tr, paragraph("new"), options=InsertOptions(try_to_replace=True))
        assert_doc_equal(new_tr.doc, doc(p("one"), p("new"), p("two")))
        assert new_tr.selection.resolved_from.parent.text_content == "new"

    def test_without_try_to_replace_selected_node_is_kept(self):
        """Test that the selected paragraph survives by default."""
        built = doc(p("one"), p("test"), p("two"))
        tr = create_tr(built)
        tr.set_selection(NodeSelection.create(built.node, 5))
        new_tr = safe_insert(tr, paragraph("new"))
        assert_doc_equal(new_tr.doc, doc(p("one"), p("test"), p("new"), p("two")))

    def test_select_inserted_disabled_keeps_mapped_selection(self):
        """Test that the cursor stays where it was when asked to."""
        tr = create_tr(doc(p("one<cursor>"), p("three")))
        new_tr = safe_insert(tr, paragraph("two"), options=InsertOptions(select_inserted=False))
        assert_doc_equal(new_tr.doc, doc(p("one"), p("two"), p("three")))
        assert new_tr.selection.head == 4


@pytest.mark.unit
class TestPreconditions:
    """Tests for caller errors, which are raised rather than ignored."""

    def test_position_outside_document_raises(self):
        """Test that a stale position is reported."""
        tr = create_tr(doc(p("one")))
        with pytest.raises(PositionError):
            safe_insert(tr, paragraph("new"), 100)

    def test_unsupported_content_raises(self):
        """Test that content must be a node or fragment."""
        tr = create_tr(doc(p("one<cursor>")))
        with pytest.raises(TypeError):
            safe_insert(tr, "text")

    def test_empty_fragment_is_a_no_op(self):
        """Test that inserting nothing returns the same transaction."""
        tr = create_tr(doc(p("one<cursor>")))
        assert safe_insert(tr, Fragment.empty) is tr
        assert safe_insert(tr, Fragment.empty, 0) is tr
        assert tr.steps == []

    def test_empty_fragment_does_not_replace_selected_node(self):
        """Test that an empty fragment leaves a node selection alone."""
        built = doc(p("one"), atom_block())
        tr = create_tr(built)
        tr.set_selection(NodeSelection.create(built.node, 5))
        assert safe_insert(tr, Fragment.empty, options=InsertOptions(try_to_replace=True)) is tr
