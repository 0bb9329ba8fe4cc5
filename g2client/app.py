import argparse
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional

from . import __version__
from .env import Settings, load_env
from .g2configmgr import G2ConfigMgrClient
from .g2product import G2ProductClient
from .logger import MessageLogger
from .observers import EchoObserver
from .transport import CallContext, HttpTransport, RemoteCallError

MESSAGES = {
    2001: "Testing g2client.",
    2002: "Configuration added.",
    2003: "Default configuration set.",
    2004: "License",
    2005: "Version",
    5103: "AddConfig failed.",
    5104: "SetDefaultConfigID failed.",
    5105: "ReplaceDefaultConfigID failed.",
    5106: "GetConfig failed.",
    5107: "GetConfigList failed.",
    5108: "GetDefaultConfigID failed.",
    5109: "Init failed.",
    5110: "Destroy failed.",
    5303: "License failed.",
    5304: "Version failed.",
}


@dataclass
class Runtime:
    settings: Settings
    logger: MessageLogger
    transport: HttpTransport
    configmgr: G2ConfigMgrClient
    product: G2ProductClient

    def context(self) -> CallContext:
        return CallContext(timeout=self.settings.timeout)

    def close(self) -> None:
        # Let pending observer deliveries finish before the session goes away.
        self.configmgr.observers.shutdown(wait=True)
        self.product.observers.shutdown(wait=True)
        self.transport.close()
        for logger in (self.logger, self.configmgr.logger, self.product.logger):
            logger.close()


def build_transport(settings: Settings) -> HttpTransport:
    return HttpTransport(settings.server_url)


def build_runtime(settings: Settings) -> Runtime:
    logging_options = {
        "level": settings.log_level,
        "log_dir": settings.log_dir,
        "enable_file": settings.log_dir is not None,
    }
    transport = build_transport(settings)
    return Runtime(
        settings=settings,
        logger=MessageLogger(name="g2client.app", id_messages=MESSAGES, **logging_options),
        transport=transport,
        configmgr=G2ConfigMgrClient(transport, logger=G2ConfigMgrClient.new_logger(**logging_options)),
        product=G2ProductClient(transport, logger=G2ProductClient.new_logger(**logging_options)),
    )


def fail_on_error(logger: MessageLogger, message_id: int, err: Exception) -> None:
    logger.log(message_id, err)
    raise SystemExit(f"Error: {err}")


def _require(rt: Runtime, message_id: int, fn: Callable, *args):
    """Run a client call; any remote error is fatal."""
    try:
        return fn(*args, ctx=rt.context())
    except RemoteCallError as e:
        fail_on_error(rt.logger, message_id, e)


def _read_input(path_arg: str) -> str:
    input_path = Path(path_arg)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    return input_path.read_text(encoding="utf-8")


def cmd_demo(args: argparse.Namespace, rt: Runtime) -> None:
    rt.logger.log(2001, {"ProgramName": "g2client", "BuildVersion": __version__})

    observer1 = EchoObserver("Observer 1")
    observer2 = EchoObserver("Observer 2")
    rt.configmgr.register_observer(observer1)
    rt.configmgr.register_observer(observer2)
    rt.product.register_observer(observer1)

    config_str = _read_input(args.config_file)
    comments = args.comments or f"Created by g2client demo at {datetime.now(timezone.utc)}"

    config_id = _require(rt, 5103, rt.configmgr.add_config, config_str, comments)
    rt.logger.log(2002, config_id)
    _require(rt, 5104, rt.configmgr.set_default_config_id, config_id)
    rt.logger.log(2003, config_id)

    rt.logger.log(2004, _require(rt, 5303, rt.product.license))
    rt.logger.log(2005, _require(rt, 5304, rt.product.version))

    rt.configmgr.logger.log_metrics_summary()
    rt.product.logger.log_metrics_summary()


def cmd_add_config(args: argparse.Namespace, rt: Runtime) -> None:
    config_str = _read_input(args.input)
    comments = args.comments or f"Added by g2client at {datetime.now(timezone.utc)}"
    config_id = _require(rt, 5103, rt.configmgr.add_config, config_str, comments)
    print(f"Config ID: {config_id}")


def cmd_get_config(args: argparse.Namespace, rt: Runtime) -> None:
    print(_require(rt, 5106, rt.configmgr.get_config, args.id))


def cmd_list_configs(args: argparse.Namespace, rt: Runtime) -> None:
    print(_require(rt, 5107, rt.configmgr.get_config_list))


def cmd_get_default(args: argparse.Namespace, rt: Runtime) -> None:
    print(f"Default config ID: {_require(rt, 5108, rt.configmgr.get_default_config_id)}")


def cmd_set_default(args: argparse.Namespace, rt: Runtime) -> None:
    _require(rt, 5104, rt.configmgr.set_default_config_id, args.id)
    print(f"Default config ID set to {args.id}")


def cmd_replace_default(args: argparse.Namespace, rt: Runtime) -> None:
    _require(rt, 5105, rt.configmgr.replace_default_config_id, args.old, args.new)
    print(f"Default config ID replaced: {args.old} -> {args.new}")


def cmd_init_configmgr(args: argparse.Namespace, rt: Runtime) -> None:
    s = rt.settings
    _require(rt, 5109, rt.configmgr.init, s.module_name, s.ini_params, s.verbose_logging)
    print("G2ConfigMgr initialized")


def cmd_destroy_configmgr(args: argparse.Namespace, rt: Runtime) -> None:
    _require(rt, 5110, rt.configmgr.destroy)
    print("G2ConfigMgr destroyed")


def cmd_license(args: argparse.Namespace, rt: Runtime) -> None:
    print(_require(rt, 5303, rt.product.license))


def cmd_version(args: argparse.Namespace, rt: Runtime) -> None:
    print(_require(rt, 5304, rt.product.version))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="g2client", description="Client for the Senzing G2 services")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--server-url", help="Server base URL (or set G2CLIENT_SERVER_URL)")
    parser.add_argument("--log-level", help="TRACE, DEBUG, INFO, WARN, ERROR, FATAL or PANIC (or set G2CLIENT_LOG_LEVEL)")
    parser.add_argument("--log-dir", help="Also write logs to this directory (or set G2CLIENT_LOG_DIR)")
    parser.add_argument("--timeout", type=float, help="Per-command deadline in seconds (or set G2CLIENT_TIMEOUT)")

    subparsers = parser.add_subparsers(dest="command")
    demo = subparsers.add_parser("demo", help="Install a configuration, make it default and show the license")
    demo.add_argument("--config-file", required=True, help="Path to a Senzing configuration JSON document")
    demo.add_argument("--comments", help="Comments stored with the configuration")
    demo.set_defaults(func=cmd_demo)

    add = subparsers.add_parser("add-config", help="Store a configuration JSON document")
    add.add_argument("--input", required=True, help="Path to a Senzing configuration JSON document")
    add.add_argument("--comments", help="Comments stored with the configuration")
    add.set_defaults(func=cmd_add_config)

    get = subparsers.add_parser("get-config", help="Print a stored configuration document")
    get.add_argument("--id", type=int, required=True, help="Configuration identifier")
    get.set_defaults(func=cmd_get_config)

    lst = subparsers.add_parser("list-configs", help="List stored configurations")
    lst.set_defaults(func=cmd_list_configs)

    gdf = subparsers.add_parser("get-default", help="Print the default configuration identifier")
    gdf.set_defaults(func=cmd_get_default)

    sdf = subparsers.add_parser("set-default", help="Set the default configuration identifier")
    sdf.add_argument("--id", type=int, required=True, help="Configuration identifier")
    sdf.set_defaults(func=cmd_set_default)

    rdf = subparsers.add_parser("replace-default", help="Replace the default configuration identifier (compare-and-swap)")
    rdf.add_argument("--old", type=int, required=True, help="Expected current default")
    rdf.add_argument("--new", type=int, required=True, help="New default")
    rdf.set_defaults(func=cmd_replace_default)

    ini = subparsers.add_parser("init-configmgr", help="Initialize the remote G2ConfigMgr from G2CLIENT_* settings")
    ini.set_defaults(func=cmd_init_configmgr)

    dst = subparsers.add_parser("destroy-configmgr", help="Destroy the remote G2ConfigMgr")
    dst.set_defaults(func=cmd_destroy_configmgr)

    lic = subparsers.add_parser("license", help="Print license metadata")
    lic.set_defaults(func=cmd_license)

    ver = subparsers.add_parser("version", help="Print engine version")
    ver.set_defaults(func=cmd_version)
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    if args.server_url:
        settings.server_url = args.server_url
    if args.log_level:
        settings.log_level = args.log_level.upper()
    if args.log_dir:
        settings.log_dir = Path(args.log_dir)
    if args.timeout is not None:
        settings.timeout = args.timeout
    return settings


def main(argv: Optional[List[str]] = None):
    # Load .env if present (G2CLIENT_SERVER_URL, G2CLIENT_LOG_LEVEL, etc.)
    load_env()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if not hasattr(args, "func"):
        parser.print_help()
        return

    settings = apply_overrides(Settings.from_env(), args)
    rt = build_runtime(settings)
    try:
        args.func(args, rt)
    finally:
        rt.close()


if __name__ == "__main__":
    main()
