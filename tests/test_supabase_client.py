"""
Tests for the Supabase resource client.

These tests use mocking to avoid requiring a real database connection.
"""

import pytest
from unittest.mock import Mock, MagicMock, call, patch

from storage.supabase_client import PAGE_SIZE, ResourceFetchError, SupabaseClient


class TestSupabaseClientInit:
    
    def test_creates_client_from_credentials(self):
        with patch("storage.supabase_client.create_client") as mock_create:
            client = SupabaseClient("https://test-project.supabase.co", "key", table_name="resource_staging")
        
        mock_create.assert_called_once_with("https://test-project.supabase.co", "key")
        assert client.client is mock_create.return_value
        assert client.table_name == "resource_staging"


class TestSupabaseResourceMethods:
    """Tests for resource-related Supabase methods."""
    
    def setup_method(self):
        """Set up test fixtures."""
        self.mock_supabase = Mock()
        self.client = SupabaseClient.__new__(SupabaseClient)
        self.client.client = self.mock_supabase
        self.client.table_name = "resource"
        
        self.mock_query = MagicMock()
        self.mock_supabase.table.return_value = self.mock_query
        self.mock_query.select.return_value = self.mock_query
        self.mock_query.eq.return_value = self.mock_query
        self.mock_query.order.return_value = self.mock_query
        self.mock_query.limit.return_value = self.mock_query
        self.mock_query.offset.return_value = self.mock_query
    
    def test_get_all_resources(self, mock_data):
        """Test fetching all resources ordered by source name."""
        mock_result = Mock()
        mock_result.data = mock_data
        self.mock_query.execute.return_value = mock_result
        
        result = self.client.get_all_resources()
        
        self.mock_supabase.table.assert_called_with("resource")
        self.mock_query.select.assert_called_with("*")
        self.mock_query.order.assert_called_once_with("source_name", desc=False)
        assert result == mock_data
        self.mock_query.limit.assert_called_once_with(PAGE_SIZE)
        self.mock_query.offset.assert_called_once_with(0)
    
    def test_get_all_resources_reads_every_page(self):
        """A table larger than one response is fetched in full, in order."""
        rows = [{"id": i, "source_name": f"Source {i:04d}"} for i in range(1, 1501)]
        first_page, second_page = Mock(), Mock()
        first_page.data = rows[:1000]
        second_page.data = rows[1000:]
        self.mock_query.execute.side_effect = [first_page, second_page]
        
        result = self.client.get_all_resources()
        
        assert len(result) == 1500
        assert result == rows
        assert self.mock_query.offset.call_args_list == [call(0), call(1000)]
        assert self.mock_query.order.call_args_list == [call("source_name", desc=False)] * 2
    
    def test_get_all_resources_exact_page_multiple(self):
        """A full last page is followed by one empty read, then the loop stops."""
        full_page, empty_page = Mock(), Mock()
        full_page.data = [{"id": i} for i in range(PAGE_SIZE)]
        empty_page.data = []
        self.mock_query.execute.side_effect = [full_page, empty_page]
        
        assert len(self.client.get_all_resources()) == PAGE_SIZE
        assert self.mock_query.execute.call_count == 2
    
    def test_get_all_resources_error_on_later_page(self):
        first_page = Mock()
        first_page.data = [{"id": i} for i in range(PAGE_SIZE)]
        self.mock_query.execute.side_effect = [first_page, Exception("connection reset")]
        
        with pytest.raises(ResourceFetchError):
            self.client.get_all_resources()
    
    def test_get_all_resources_custom_order(self):
        mock_result = Mock()
        mock_result.data = []
        self.mock_query.execute.return_value = mock_result
        
        self.client.get_all_resources(order_by="category")
        
        self.mock_query.order.assert_called_once_with("category", desc=False)
    
    def test_get_all_resources_none_data(self):
        """A response without data is an empty snapshot."""
        mock_result = Mock()
        mock_result.data = None
        self.mock_query.execute.return_value = mock_result
        
        assert self.client.get_all_resources() == []
    
    def test_get_all_resources_error(self):
        """Any Supabase failure surfaces as ResourceFetchError."""
        self.mock_query.execute.side_effect = Exception("Database connection failed")
        
        with pytest.raises(ResourceFetchError) as exc_info:
            self.client.get_all_resources()
        
        assert str(exc_info.value) == "Failed to fetch resources"
        assert isinstance(exc_info.value.__cause__, Exception)
    
    def test_get_resource_found(self, mock_data):
        mock_result = Mock()
        mock_result.data = [mock_data[2]]
        self.mock_query.execute.return_value = mock_result
        
        result = self.client.get_resource(3)
        
        self.mock_query.eq.assert_called_once_with("id", 3)
        assert result["source_name"] == "Another Source"
    
    def test_get_resource_missing(self):
        mock_result = Mock()
        mock_result.data = []
        self.mock_query.execute.return_value = mock_result
        
        assert self.client.get_resource(42) is None
    
    def test_get_resource_error(self):
        self.mock_query.execute.side_effect = Exception("timeout")
        
        with pytest.raises(ResourceFetchError):
            self.client.get_resource(1)
    
    def test_get_resource_stats(self, mock_data):
        """Test counting resources per category."""
        count_result = Mock()
        count_result.count = 5
        category_result = Mock()
        category_result.data = [{"category": row["category"]} for row in mock_data]
        self.mock_query.execute.side_effect = [count_result, category_result]
        
        stats = self.client.get_resource_stats()
        
        self.mock_query.select.assert_any_call("*", count="exact", head=True)
        self.mock_query.select.assert_called_with("category")
        assert stats["total"] == 5
        assert stats["categories"] == {"Category A": 2, "Category B": 2, "Category C": 1}
    
    def test_get_resource_stats_counts_past_one_page(self):
        """Totals and category counts cover tables larger than one response."""
        rows = [{"category": "Category A" if i % 3 else "Category B"} for i in range(1500)]
        count_result = Mock()
        count_result.count = 1500
        first_page, second_page = Mock(), Mock()
        first_page.data = rows[:1000]
        second_page.data = rows[1000:]
        self.mock_query.execute.side_effect = [count_result, first_page, second_page]
        
        stats = self.client.get_resource_stats()
        
        assert stats["total"] == 1500
        assert sum(stats["categories"].values()) == 1500
        assert stats["categories"] == {"Category A": 1000, "Category B": 500}
    
    def test_get_resource_stats_missing_count(self):
        count_result = Mock()
        count_result.count = None
        empty = Mock()
        empty.data = []
        self.mock_query.execute.side_effect = [count_result, empty]
        
        assert self.client.get_resource_stats() == {"total": 0, "categories": {}}
    
    def test_get_resource_stats_error(self):
        self.mock_query.execute.side_effect = Exception("boom")
        
        assert self.client.get_resource_stats() == {"total": 0, "categories": {}}
