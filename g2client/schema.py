"""
Wire messages for the G2 services.

Field names, types and defaults follow the protobuf JSON mapping of the
service definitions: camelCase names, int64 values carried as decimal
strings, int32 values as numbers, absent fields decoding to zero values.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Type, TypeVar

STRING = "string"
INT32 = "int32"
INT64 = "int64"

_ZERO = {STRING: "", INT32: 0, INT64: 0}

M = TypeVar("M")


def wire_field(name: str, kind: str = STRING):
    """Declare a message field carried on the wire as `name`."""
    return field(default=_ZERO[kind], metadata={"wire": name, "kind": kind})


def _encode_value(kind: str, value: Any) -> Any:
    if kind == INT64:
        return str(int(value))
    if kind == INT32:
        return int(value)
    return value


def _decode_value(kind: str, value: Any) -> Any:
    if value is None:
        return _ZERO[kind]
    if kind in (INT32, INT64):
        return int(value)
    return str(value)


def encode(message: Any) -> Dict[str, Any]:
    """Convert a message into its JSON wire form."""
    return {
        f.metadata["wire"]: _encode_value(f.metadata["kind"], getattr(message, f.name))
        for f in fields(message)
    }


def decode(message_type: Type[M], payload: Dict[str, Any]) -> M:
    """Build a message from its JSON wire form. Unknown keys are ignored."""
    payload = payload or {}
    values = {}
    for f in fields(message_type):
        wire = f.metadata["wire"]
        if wire in payload:
            values[f.name] = _decode_value(f.metadata["kind"], payload[wire])
    return message_type(**values)


# g2configmgr.G2ConfigMgr


@dataclass
class AddConfigRequest:
    config_str: str = wire_field("configStr")
    config_comments: str = wire_field("configComments")


@dataclass
class AddConfigResponse:
    result: int = wire_field("result", INT64)


@dataclass
class DestroyRequest:
    pass


@dataclass
class DestroyResponse:
    pass


@dataclass
class GetConfigRequest:
    config_id: int = wire_field("configID", INT64)


@dataclass
class GetConfigResponse:
    result: str = wire_field("result")


@dataclass
class GetConfigListRequest:
    pass


@dataclass
class GetConfigListResponse:
    result: str = wire_field("result")


@dataclass
class GetDefaultConfigIDRequest:
    pass


@dataclass
class GetDefaultConfigIDResponse:
    config_id: int = wire_field("configID", INT64)


@dataclass
class InitRequest:
    module_name: str = wire_field("moduleName")
    ini_params: str = wire_field("iniParams")
    verbose_logging: int = wire_field("verboseLogging", INT32)


@dataclass
class InitResponse:
    pass


@dataclass
class ReplaceDefaultConfigIDRequest:
    old_config_id: int = wire_field("oldConfigID", INT64)
    new_config_id: int = wire_field("newConfigID", INT64)


@dataclass
class ReplaceDefaultConfigIDResponse:
    pass


@dataclass
class SetDefaultConfigIDRequest:
    config_id: int = wire_field("configID", INT64)


@dataclass
class SetDefaultConfigIDResponse:
    pass


# g2product.G2Product (Destroy and Init share the messages above)


@dataclass
class LicenseRequest:
    pass


@dataclass
class LicenseResponse:
    result: str = wire_field("result")


@dataclass
class ValidateLicenseFileRequest:
    license_file_path: str = wire_field("licenseFilePath")


@dataclass
class ValidateLicenseFileResponse:
    result: str = wire_field("result")


@dataclass
class ValidateLicenseStringBase64Request:
    license_string: str = wire_field("licenseString")


@dataclass
class ValidateLicenseStringBase64Response:
    result: str = wire_field("result")


@dataclass
class VersionRequest:
    pass


@dataclass
class VersionResponse:
    result: str = wire_field("result")
