"""Deploy orchestration: build the executable and lay out the bundle."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from .build_config import WIZARD_LEFTOVERS, DeployConfig
from .errors import DeployError
from .fileops import remove_tree
from .logger import log_deploy_event
from .platforms import DEPLOYERS, DeployContext
from .profile import load_profile
from .toolchain import Toolchain


def _toolchain_for(config: DeployConfig, toolchain: Toolchain | None) -> Toolchain:
    return toolchain or Toolchain(config.tools, cwd=config.base_dir)


def _prepare_output(path: Path) -> None:
    remove_tree(path)
    path.mkdir(parents=True)


def deploy(config: DeployConfig, toolchain: Toolchain | None = None) -> Path:
    """Produce the distributable bundle for ``config.platform``.

    Returns the platform output directory. On failure the partially written
    output directory is removed and the error is re-raised; file system
    errors are reported as ``DeployError``.
    """

    deployer = DEPLOYERS.get(config.platform)
    if deployer is None:
        raise DeployError(f"deploy: platform unsupported: {config.platform}")
    toolchain = _toolchain_for(config, toolchain)

    path = config.output_dir
    try:
        _prepare_output(path)
        pkg = toolchain.pkg_info()
        qt = toolchain.qt_info()
        profile = load_profile(config.profile_path)
        logger.info("deploy: profile loaded")
        logger.debug("deploy: package name: {}", pkg.name)
        logger.debug("deploy: qt base: {} ({})", qt.base_path, qt.version)

        logger.debug("deploy: embedding resources")
        toolchain.embed_resources()

        ctx = DeployContext(
            config=config,
            pkg=pkg,
            qt=qt,
            profile=profile,
            toolchain=toolchain,
        )
        bundle = deployer(ctx)
    except Exception as exc:
        logger.debug("deploy: removing partial output {}", path)
        remove_tree(path)
        if isinstance(exc, OSError):
            raise DeployError(f"deploy [{config.platform}]: {exc}") from exc
        raise

    toolchain.clean_resources()
    log_deploy_event("bundle_ready", platform=config.platform, path=str(bundle))
    return path


def clean(
    config: DeployConfig,
    all_outputs: bool = False,
    toolchain: Toolchain | None = None,
) -> None:
    """Remove resource-embedding leftovers and wizard files.

    With ``all_outputs`` the platform output directory is removed as well.
    """

    try:
        for name in WIZARD_LEFTOVERS:
            leftover = config.base_dir / name
            if leftover.exists():
                logger.debug("clean: removing {}", leftover)
                leftover.unlink()

        _toolchain_for(config, toolchain).clean_resources()

        if all_outputs:
            path = config.output_dir
            if path.resolve() in (config.base_dir.resolve(), config.out_dir.resolve()):
                raise DeployError(f"clean: refusing to remove {path}")
            logger.debug("clean: removing {}", path)
            remove_tree(path)
    except OSError as exc:
        raise DeployError(f"clean: {exc}") from exc


__all__ = ["deploy", "clean"]
