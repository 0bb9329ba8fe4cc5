"""
Client for the G2ConfigMgr service.

Adds, retrieves and lists Senzing configuration documents stored by the
remote engine and manages which configuration is the default.
"""

from typing import Optional

from .operation import InstrumentedClient, operation
from .schema import (
    AddConfigRequest,
    AddConfigResponse,
    DestroyRequest,
    DestroyResponse,
    GetConfigListRequest,
    GetConfigListResponse,
    GetConfigRequest,
    GetConfigResponse,
    GetDefaultConfigIDRequest,
    GetDefaultConfigIDResponse,
    InitRequest,
    InitResponse,
    ReplaceDefaultConfigIDRequest,
    ReplaceDefaultConfigIDResponse,
    SetDefaultConfigIDRequest,
    SetDefaultConfigIDResponse,
)
from .transport import CallContext

PRODUCT_ID = 6002

ID_MESSAGES = {
    1: "Enter AddConfig(configStr, configComments).",
    2: "Exit  AddConfig(configStr, configComments) returned (configID, err, elapsed).",
    5: "Enter Destroy().",
    6: "Exit  Destroy() returned (err, elapsed).",
    7: "Enter GetConfig(configID).",
    8: "Exit  GetConfig(configID) returned (configStr, err, elapsed).",
    9: "Enter GetConfigList().",
    10: "Exit  GetConfigList() returned (configList, err, elapsed).",
    11: "Enter GetDefaultConfigID().",
    12: "Exit  GetDefaultConfigID() returned (configID, err, elapsed).",
    17: "Enter Init(moduleName, iniParams, verboseLogging).",
    18: "Exit  Init(moduleName, iniParams, verboseLogging) returned (err, elapsed).",
    19: "Enter ReplaceDefaultConfigID(oldConfigID, newConfigID).",
    20: "Exit  ReplaceDefaultConfigID(oldConfigID, newConfigID) returned (err, elapsed).",
    21: "Enter SetDefaultConfigID(configID).",
    22: "Exit  SetDefaultConfigID(configID) returned (err, elapsed).",
    23: "Enter SetLogLevel(logLevel).",
    24: "Exit  SetLogLevel(logLevel) returned (err, elapsed).",
}


class G2ConfigMgrClient(InstrumentedClient):
    """Remote G2ConfigMgr: configuration documents and the default configuration id."""

    SERVICE = "g2configmgr.G2ConfigMgr"
    PRODUCT_ID = PRODUCT_ID
    LOGGER_NAME = "g2client.g2configmgr"
    ID_MESSAGES = ID_MESSAGES

    @operation("AddConfig", 1, notify_id=8001, notify_fields={"configComments": "config_comments"})
    def add_config(self, config_str: str, config_comments: str, ctx: Optional[CallContext] = None) -> int:
        """
        Add a Senzing configuration JSON document to the Senzing database.

        Args:
            config_str: The Senzing configuration JSON document
            config_comments: Free-form comments describing the document
            ctx: Cancellation context

        Returns:
            The identifier of the stored configuration
        """
        request = AddConfigRequest(config_str=config_str, config_comments=config_comments)
        return self._invoke("AddConfig", request, AddConfigResponse, ctx).result

    @operation("Destroy", 5, notify_id=8002)
    def destroy(self, ctx: Optional[CallContext] = None) -> None:
        """Release the remote G2ConfigMgr. Call after all other calls are complete."""
        self._invoke("Destroy", DestroyRequest(), DestroyResponse, ctx)

    @operation("GetConfig", 7, notify_id=8003)
    def get_config(self, config_id: int, ctx: Optional[CallContext] = None) -> str:
        """
        Retrieve a specific Senzing configuration JSON document.

        Args:
            config_id: Identifier of the configuration to retrieve
            ctx: Cancellation context

        Returns:
            The configuration JSON document
        """
        request = GetConfigRequest(config_id=config_id)
        return self._invoke("GetConfig", request, GetConfigResponse, ctx).result

    @operation("GetConfigList", 9, notify_id=8004)
    def get_config_list(self, ctx: Optional[CallContext] = None) -> str:
        """Return a JSON document listing the stored configurations."""
        return self._invoke("GetConfigList", GetConfigListRequest(), GetConfigListResponse, ctx).result

    @operation("GetDefaultConfigID", 11, notify_id=8005)
    def get_default_config_id(self, ctx: Optional[CallContext] = None) -> int:
        """Return the identifier of the configuration currently in use."""
        response = self._invoke("GetDefaultConfigID", GetDefaultConfigIDRequest(), GetDefaultConfigIDResponse, ctx)
        return response.config_id

    @operation(
        "Init",
        17,
        notify_id=8006,
        notify_fields={
            "iniParams": "ini_params",
            "moduleName": "module_name",
            "verboseLogging": "verbose_logging",
        },
    )
    def init(self, module_name: str, ini_params: str, verbose_logging: int, ctx: Optional[CallContext] = None) -> None:
        """
        Initialize the remote G2ConfigMgr. Must be called prior to any other calls.

        Args:
            module_name: Name identifying this node in system logs
            ini_params: JSON string of engine configuration parameters
            verbose_logging: 0 for no Senzing logging, 1 for logging
            ctx: Cancellation context
        """
        request = InitRequest(module_name=module_name, ini_params=ini_params, verbose_logging=verbose_logging)
        self._invoke("Init", request, InitResponse, ctx)

    @operation("ReplaceDefaultConfigID", 19, notify_id=8007, notify_fields={"newConfigID": "new_config_id"})
    def replace_default_config_id(
        self,
        old_config_id: int,
        new_config_id: int,
        ctx: Optional[CallContext] = None,
    ) -> None:
        """
        Replace the default configuration id, compare-and-swap style.

        Fails remotely if old_config_id is no longer the default. To simply
        set the default, use set_default_config_id().
        """
        request = ReplaceDefaultConfigIDRequest(old_config_id=old_config_id, new_config_id=new_config_id)
        self._invoke("ReplaceDefaultConfigID", request, ReplaceDefaultConfigIDResponse, ctx)

    @operation("SetDefaultConfigID", 21, notify_id=8008, notify_fields={"configID": "config_id"})
    def set_default_config_id(self, config_id: int, ctx: Optional[CallContext] = None) -> None:
        """Make config_id the default configuration."""
        request = SetDefaultConfigIDRequest(config_id=config_id)
        self._invoke("SetDefaultConfigID", request, SetDefaultConfigIDResponse, ctx)

    @operation("SetLogLevel", 23)
    def set_log_level(self, log_level: str, ctx: Optional[CallContext] = None) -> None:
        """Accepted for interface compatibility; the remote log level is not changed."""
