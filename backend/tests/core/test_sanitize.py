"""Value Sanitization — verifies loose model fields become plain strings."""

from lucid.core.sanitize import sanitize_list, sanitize_string


def test_falsy_values_become_empty_string():
    for val in (None, "", 0, [], {}):
        assert sanitize_string(val) == ""


def test_strings_pass_through():
    assert sanitize_string("静谧之海") == "静谧之海"


def test_numbers_are_stringified():
    assert sanitize_string(42) == "42"
    assert sanitize_string(1.5) == "1.5"


def test_dict_uses_first_truthy_text_field():
    assert sanitize_string({"title": "T", "content": "C"}) == "C"
    assert sanitize_string({"text": "", "value": "V"}) == "V"


def test_dict_without_text_fields_is_compact_json():
    assert sanitize_string({"mood": "calm"}) == '{"mood":"calm"}'


def test_nested_text_field_is_resolved():
    assert sanitize_string({"text": {"content": "deep"}}) == "deep"


def test_list_becomes_compact_json():
    assert sanitize_string(["a", 1]) == '["a",1]'


def test_sanitize_list_drops_empty_items():
    assert sanitize_list(["joy", "", {"name": "hope"}, None]) == ["joy", "hope"]


def test_sanitize_list_wraps_scalar():
    assert sanitize_list("fear") == ["fear"]
    assert sanitize_list(None) == []


def test_booleans_render_lowercase():
    assert sanitize_string(True) == "true"
    assert sanitize_string(False) == ""
    assert sanitize_string({"value": True}) == "true"
    assert sanitize_list([True, "x"]) == ["true", "x"]
