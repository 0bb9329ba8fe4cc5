"""
Tests for wire message encoding.
"""

from g2client.schema import (
    AddConfigRequest,
    AddConfigResponse,
    DestroyRequest,
    GetDefaultConfigIDResponse,
    InitRequest,
    ReplaceDefaultConfigIDRequest,
    VersionResponse,
    decode,
    encode,
)


class TestEncode:
    """Messages to wire dicts."""

    def test_string_fields_use_wire_names(self):
        request = AddConfigRequest(config_str='{"G2_CONFIG": {}}', config_comments="first")
        assert encode(request) == {"configStr": '{"G2_CONFIG": {}}', "configComments": "first"}

    def test_int64_is_decimal_string(self):
        request = ReplaceDefaultConfigIDRequest(old_config_id=1, new_config_id=9223372036854775807)
        assert encode(request) == {"oldConfigID": "1", "newConfigID": "9223372036854775807"}

    def test_int32_stays_number(self):
        request = InitRequest(module_name="m", ini_params="{}", verbose_logging=1)
        assert encode(request)["verboseLogging"] == 1

    def test_empty_message(self):
        assert encode(DestroyRequest()) == {}

    def test_values_are_passed_verbatim(self):
        """No trimming or validation of string content."""
        request = AddConfigRequest(config_str="  not json  ", config_comments="")
        assert encode(request)["configStr"] == "  not json  "


class TestDecode:
    """Wire dicts to messages."""

    def test_int64_from_string_or_number(self):
        assert decode(AddConfigResponse, {"result": "1001"}).result == 1001
        assert decode(AddConfigResponse, {"result": 1001}).result == 1001
        assert decode(GetDefaultConfigIDResponse, {"configID": "42"}).config_id == 42

    def test_missing_fields_are_zero_values(self):
        assert decode(AddConfigResponse, {}).result == 0
        assert decode(VersionResponse, {}).result == ""
        assert decode(VersionResponse, None).result == ""

    def test_null_is_zero_value(self):
        assert decode(GetDefaultConfigIDResponse, {"configID": None}).config_id == 0

    def test_unknown_fields_ignored(self):
        response = decode(VersionResponse, {"result": "3.5", "extra": True})
        assert response == VersionResponse(result="3.5")
