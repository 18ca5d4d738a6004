#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_options.py
"""Tests for the option classes."""

import dataclasses

import pytest

from structedit import InsertOptions, MarkupOptions


@pytest.mark.unit
class TestOptions:
    """Tests for InsertOptions and MarkupOptions."""

    def test_defaults(self):
        """Test the default values."""
        assert InsertOptions() == InsertOptions(try_to_replace=False, select_inserted=True)
        assert MarkupOptions() == MarkupOptions(merge_attrs=True, merge_marks=True)

    def test_options_are_frozen(self):
        """Test that options cannot be changed in place."""
        options = InsertOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.try_to_replace = True

    def test_create_updated(self):
        """Test deriving a modified copy."""
        options = MarkupOptions()
        updated = options.create_updated(merge_attrs=False)
        assert updated.merge_attrs is False
        assert updated.merge_marks is True
        assert options.merge_attrs is True

    def test_fields_carry_help_text(self):
        """Test that every field documents itself."""
        for options_class in (InsertOptions, MarkupOptions):
            for option_field in dataclasses.fields(options_class):
                assert option_field.metadata["help"]
