import pytest
from common.json_fields import StringListField, StringMapField, coerce_string_list, coerce_string_map
from rest_framework.exceptions import ValidationError


def test_coerce_helpers_tolerate_malformed_values():
    assert coerce_string_list('["a", "b"]') == ["a", "b"]
    assert coerce_string_list("not json") == []
    assert coerce_string_list(["a", 3, None]) == ["a"]
    assert coerce_string_map('{"metal": "gold"}') == {"metal": "gold"}
    assert coerce_string_map({"carat": 2, "cut": None}) == {"carat": "2"}
    assert coerce_string_map([1, 2]) == {}


def test_fields_reject_wrong_shapes():
    list_field = StringListField()
    map_field = StringMapField()

    assert list_field.run_validation(["x"]) == ["x"]
    assert map_field.run_validation({"size": "7"}) == {"size": "7"}
    with pytest.raises(ValidationError):
        list_field.run_validation({"a": "1"})
    with pytest.raises(ValidationError):
        map_field.run_validation(["a"])
