"""Command line interface: ``qml-deploy deploy`` and ``qml-deploy clean``."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from loguru import logger

from .build import clean, deploy
from .build_config import DeployConfig
from .errors import DeployError
from .logger import setup_logging


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="store_true", help="Enable step logging")
    common.add_argument("--log-file", type=Path, help="Also write JSON logs to this file")

    parser = argparse.ArgumentParser(
        prog="qml-deploy",
        description="Package a Go/QML application with its Qt dependencies",
    )
    parser.add_argument(
        "-C",
        "--directory",
        type=Path,
        default=Path.cwd(),
        help="Project directory (default: current directory)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    deploy_cmd = commands.add_parser(
        "deploy",
        parents=[common],
        help="Run the platform-specific deployment routine",
        description=(
            "Embeds resources, compiles the binary, copies Qt libraries, "
            "plugins and modules. Supported platforms: darwin, linux, windows."
        ),
    )
    deploy_cmd.add_argument(
        "--dmg",
        action="store_true",
        help="Create an installable disk image (darwin only)",
    )
    deploy_cmd.add_argument("--profile", type=Path, help="Deploy profile (default: deploy_profile.yaml)")

    clean_cmd = commands.add_parser(
        "clean",
        parents=[common],
        help="Clean deployment leftovers and wizard files",
        description="Runs `rice clean` and removes wizard files left in the project dir.",
    )
    clean_cmd.add_argument(
        "-a",
        "--all",
        dest="all_outputs",
        action="store_true",
        help="Remove the platform-specific output dir",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else None)
    setup_logging(verbose=args.verbose, log_file=args.log_file)

    config = DeployConfig.default(args.directory.resolve())
    try:
        if args.command == "deploy":
            config.dmg = args.dmg and config.platform == "darwin"
            if args.dmg and not config.dmg:
                logger.warning("deploy: --dmg is only supported on darwin; ignoring")
            if args.profile is not None:
                config.profile_path = (config.base_dir / args.profile).resolve()
            path = deploy(config)
            logger.success("deploy: bundle written to {}", path)
        else:
            clean(config, all_outputs=args.all_outputs)
    except DeployError as exc:
        logger.error("{}", exc)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
