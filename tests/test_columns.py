"""Tests for the Aral column schema."""

import pytest
from markupsafe import Markup

from aral_table.columns import ARAL_COLUMNS, ColumnDef, get_column, get_value, render_link
from models.data_models import Aral


class TestColumnDef:
    
    def test_default_cell_is_raw_text(self):
        column = ColumnDef(key="category", label="Category")
        assert column.cell({"category": "Category A"}) == "Category A"
    
    def test_default_cell_stringifies_values(self):
        column = ColumnDef(key="id", label="ID")
        assert column.cell({"id": 12}) == "12"
    
    def test_missing_attribute_renders_empty(self):
        column = ColumnDef(key="link", label="Link")
        assert column.cell({"id": 1}) == ""
        assert column.cell({"id": 1, "link": None}) == ""
    
    def test_reads_model_attributes(self):
        row = Aral(id=1, source_name="Test Source 1", category="Category A", field="Field 1")
        column = ColumnDef(key="source_name", label="Source Name")
        assert column.cell(row) == "Test Source 1"
    
    def test_custom_render_receives_row(self):
        column = ColumnDef(key="field", label="Field", render=lambda row: row["field"].upper())
        assert column.cell({"field": "physics"}) == "PHYSICS"
    
    def test_render_errors_propagate(self):
        """A broken cell renderer is a bug in the column and is not hidden."""
        def broken(row):
            raise KeyError("nope")
        
        column = ColumnDef(key="field", label="Field", render=broken)
        with pytest.raises(KeyError):
            column.cell({"field": "physics"})


class TestRenderLink:
    
    def test_safe_external_link(self):
        html = render_link({"link": "https://arxiv.org"})
        assert isinstance(html, Markup)
        assert 'href="https://arxiv.org"' in html
        assert 'target="_blank"' in html
        assert 'rel="noopener noreferrer"' in html
    
    def test_link_is_escaped(self):
        html = render_link({"link": 'https://example.com/?a=1&b="2"'})
        assert "&amp;" in html
        assert "&#34;2&#34;" in html
    
    def test_no_link_renders_empty(self):
        assert render_link({"link": None}) == ""
        assert render_link({}) == ""
    
    def test_script_url_is_not_linked(self):
        row = Aral(
            id=1, source_name="Test Source 1", category="Category A", field="Field 1",
            link="javascript:alert(document.cookie)",
        )
        html = render_link(row)
        assert not isinstance(html, Markup)
        assert "href" not in html
        assert html == "javascript:alert(document.cookie)"
    
    @pytest.mark.parametrize("link", [
        " JavaScript:alert(1)",
        "data:text/html,<script>alert(1)</script>",
        "ftp://example.com/file",
        "example.com",
    ])
    def test_non_http_links_render_as_text(self, link):
        html = render_link({"link": link})
        assert not isinstance(html, Markup)
        assert "<a " not in str(Markup.escape(html))
    
    def test_scheme_check_is_case_insensitive(self):
        html = render_link({"link": "HTTPS://arxiv.org"})
        assert isinstance(html, Markup)
        assert 'href="HTTPS://arxiv.org"' in html


class TestAralColumns:
    
    def test_column_order_and_labels(self):
        assert [c.key for c in ARAL_COLUMNS] == ["source_name", "category", "field", "link"]
        assert [c.label for c in ARAL_COLUMNS] == ["Source Name", "Category", "Field", "Link"]
    
    def test_only_link_has_custom_render(self):
        assert [c.key for c in ARAL_COLUMNS if c.render] == ["link"]
    
    def test_get_column(self):
        assert get_column(ARAL_COLUMNS, "category").label == "Category"
        assert get_column(ARAL_COLUMNS, "unknown") is None


def test_get_value_dict_and_object():
    row = Aral(id=1, source_name="Test Source 1", category="Category A", field="Field 1")
    assert get_value(row, "category") == "Category A"
    assert get_value({"category": "Category B"}, "category") == "Category B"
    assert get_value(row, "missing") is None
