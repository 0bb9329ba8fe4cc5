"""Client for the G2Product service: license and version metadata."""

from typing import Optional

from .operation import InstrumentedClient, operation
from .schema import (
    DestroyRequest,
    DestroyResponse,
    InitRequest,
    InitResponse,
    LicenseRequest,
    LicenseResponse,
    ValidateLicenseFileRequest,
    ValidateLicenseFileResponse,
    ValidateLicenseStringBase64Request,
    ValidateLicenseStringBase64Response,
    VersionRequest,
    VersionResponse,
)
from .transport import CallContext

PRODUCT_ID = 6006

ID_MESSAGES = {
    3: "Enter Destroy().",
    4: "Exit  Destroy() returned (err, elapsed).",
    9: "Enter Init(moduleName, iniParams, verboseLogging).",
    10: "Exit  Init(moduleName, iniParams, verboseLogging) returned (err, elapsed).",
    11: "Enter License().",
    12: "Exit  License() returned (license, err, elapsed).",
    13: "Enter SetLogLevel(logLevel).",
    14: "Exit  SetLogLevel(logLevel) returned (err, elapsed).",
    15: "Enter ValidateLicenseFile(licenseFilePath).",
    16: "Exit  ValidateLicenseFile(licenseFilePath) returned (result, err, elapsed).",
    17: "Enter ValidateLicenseStringBase64(licenseString).",
    18: "Exit  ValidateLicenseStringBase64(licenseString) returned (result, err, elapsed).",
    19: "Enter Version().",
    20: "Exit  Version() returned (version, err, elapsed).",
}


class G2ProductClient(InstrumentedClient):
    """Remote G2Product."""

    SERVICE = "g2product.G2Product"
    PRODUCT_ID = PRODUCT_ID
    LOGGER_NAME = "g2client.g2product"
    ID_MESSAGES = ID_MESSAGES

    @operation("Destroy", 3, notify_id=8001)
    def destroy(self, ctx: Optional[CallContext] = None) -> None:
        self._invoke("Destroy", DestroyRequest(), DestroyResponse, ctx)

    @operation(
        "Init",
        9,
        notify_id=8002,
        notify_fields={
            "iniParams": "ini_params",
            "moduleName": "module_name",
            "verboseLogging": "verbose_logging",
        },
    )
    def init(self, module_name: str, ini_params: str, verbose_logging: int, ctx: Optional[CallContext] = None) -> None:
        request = InitRequest(module_name=module_name, ini_params=ini_params, verbose_logging=verbose_logging)
        self._invoke("Init", request, InitResponse, ctx)

    @operation("License", 11, notify_id=8003)
    def license(self, ctx: Optional[CallContext] = None) -> str:
        """Return the license metadata JSON document."""
        return self._invoke("License", LicenseRequest(), LicenseResponse, ctx).result

    @operation("SetLogLevel", 13)
    def set_log_level(self, log_level: str, ctx: Optional[CallContext] = None) -> None:
        """Accepted for interface compatibility; the remote log level is not changed."""

    @operation("ValidateLicenseFile", 15, notify_id=8004, notify_fields={"licenseFilePath": "license_file_path"})
    def validate_license_file(self, license_file_path: str, ctx: Optional[CallContext] = None) -> str:
        request = ValidateLicenseFileRequest(license_file_path=license_file_path)
        return self._invoke("ValidateLicenseFile", request, ValidateLicenseFileResponse, ctx).result

    @operation("ValidateLicenseStringBase64", 17, notify_id=8005)
    def validate_license_string_base64(self, license_string: str, ctx: Optional[CallContext] = None) -> str:
        request = ValidateLicenseStringBase64Request(license_string=license_string)
        response = self._invoke(
            "ValidateLicenseStringBase64", request, ValidateLicenseStringBase64Response, ctx
        )
        return response.result

    @operation("Version", 19, notify_id=8006)
    def version(self, ctx: Optional[CallContext] = None) -> str:
        """Return the engine version JSON document."""
        return self._invoke("Version", VersionRequest(), VersionResponse, ctx).result
