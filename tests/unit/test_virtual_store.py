"""
Tests for the virtual "All" store helpers
"""
import pytest

from household_hub.errors import Forbidden, InvalidArgument
from household_hub.services.virtual_store import (
    ALL_STORE,
    ALL_STORE_ID,
    forbid_virtual,
    is_virtual,
    parse_store_id,
    require_real_store_id,
)


@pytest.mark.unit
class TestVirtualStore:
    def test_constant(self):
        assert ALL_STORE.as_dict() == {"id": -1, "name": "All", "modified": None}

    @pytest.mark.parametrize("value", [-1, "-1", " -1 "])
    def test_is_virtual(self, value):
        assert is_virtual(value)

    @pytest.mark.parametrize("value", [1, "7", "abc", None, "", True])
    def test_is_not_virtual(self, value):
        assert not is_virtual(value)

    def test_parse_store_id(self):
        assert parse_store_id("12") == 12
        assert parse_store_id(5) == 5
        assert parse_store_id("1.5") is None
        assert parse_store_id("abc") is None
        assert parse_store_id(None) is None
        assert parse_store_id(False) is None

    def test_forbid_virtual(self):
        with pytest.raises(Forbidden) as exc_info:
            forbid_virtual(ALL_STORE_ID, action="deleted")
        assert exc_info.value.status_code == 403
        assert "deleted" in exc_info.value.message

        forbid_virtual(3)

    def test_require_real_store_id(self):
        assert require_real_store_id("3") == 3
        with pytest.raises(Forbidden):
            require_real_store_id("-1")
        with pytest.raises(InvalidArgument):
            require_real_store_id("abc")
        with pytest.raises(InvalidArgument):
            require_real_store_id(0)
