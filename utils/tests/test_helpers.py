import pytest

from utils.logging_utils import mask_value
from utils.pagination import paginate, parse_page_params
from utils.serializers import normalize_string_list


@pytest.mark.unit
class TestNormalizeStringList:
    def test_accepts_comma_separated_string(self):
        assert normalize_string_list("jazz, live ,,jazz,outdoor") == ["jazz", "live", "outdoor"]

    def test_accepts_list_and_none(self):
        assert normalize_string_list(["a", " b ", "", "a"]) == ["a", "b"]
        assert normalize_string_list(None) == []


@pytest.mark.unit
class TestPagination:
    def test_parse_page_params_clamps(self):
        assert parse_page_params({}) == (1, 20)
        assert parse_page_params({"page": "-3", "page_size": "500"}) == (1, 100)
        assert parse_page_params({"page": "x", "page_size": "y"}) == (1, 20)

    def test_out_of_range_page_returns_last(self):
        page = paginate(list(range(45)), page=9, page_size=20)

        assert page["count"] == 45
        assert page["page"] == 3
        assert page["num_pages"] == 3
        assert page["results"] == list(range(40, 45))
        assert page["has_next"] is False
        assert page["has_previous"] is True


@pytest.mark.unit
class TestMasking:
    def test_mask_value(self):
        assert mask_value("ada@example.com") == "ad***@example.com"
        assert mask_value("pi_1234567890abcdef") == "pi_1...cdef"
        assert mask_value("short") == "***"
        assert mask_value(42) == 42
