"""cratefind - find the name a dependency is imported under in Cargo.toml.

Code generators that emit references to a dependency cannot rely on the
dependency's published name: the importing crate may have renamed it with
``alias = { package = "real-name" }``. This module offers the single-shot
lookup (read ``$CARGO_MANIFEST_DIR/Cargo.toml``, build, search) and the CLI.

For repeated lookups, build one :class:`manifest.Manifest` and search it.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from typing import Callable, List, Mapping, Optional

from args import parse_args
from cli_config import FinderConfig, apply_cli_overrides, load_config
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes
from manifest import (
    DependencySelector,
    Manifest,
    ManifestError,
    NotFoundError,
    Package,
)

logger = logging.getLogger(__name__)


def find_crate(
    predicate: Callable[[str], bool],
    selector: DependencySelector = DependencySelector.DEFAULT,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[Package]:
    """Find a dependency of the crate being built.

    Reads ``Cargo.toml`` in ``CARGO_MANIFEST_DIR`` and returns the first
    dependency whose alias or upstream name satisfies ``predicate``, or None
    when nothing matches.

    Raises:
        ManifestIOError: the variable is unset or the file cannot be read.
        DocumentFormatError: the manifest is malformed.
        InvalidRenameError: a ``package`` field is empty.
    """
    manifest = Manifest.from_env(selector, environ)
    try:
        return manifest.search_any(predicate)
    except NotFoundError:
        return None


def find_crate_name(
    predicate: Callable[[str], bool],
    selector: DependencySelector = DependencySelector.DEFAULT,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    """Like :func:`find_crate`, returning the identifier to import the crate under."""
    package = find_crate(predicate, selector, environ)
    return package.ident if package is not None else None


def _setup_logging(args, config: FinderConfig) -> None:
    if config.log_level:
        os.environ[Constants.ENV_LOG_LEVEL] = str(config.log_level).upper()

    configure_logging()

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def _load_manifest(args, config: FinderConfig) -> Manifest:
    if args.MANIFEST_PATH:
        return Manifest.from_path(args.MANIFEST_PATH, config.selector)
    return Manifest.from_env(
        config.selector,
        dir_env=config.manifest_dir_env,
        file_name=config.manifest_file,
    )


def _render(package: Package, args) -> str:
    if args.JSON:
        return json.dumps(
            {
                "name": package.name,
                "version": package.version,
                "key": package.import_name,
                "ident": package.ident,
            }
        )
    if args.ORIGINAL:
        return package.name
    return package.ident


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point; returns an ExitCodes value."""
    args = parse_args(argv)

    try:
        config = apply_cli_overrides(load_config(args.CONFIG), args)
    except ValueError as e:
        configure_logging()
        logger.error("%s", e)
        return ExitCodes.FILE_ERROR.value

    _setup_logging(args, config)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(
                event="function_entry",
                component="cli",
                action="main",
                names=",".join(args.names),
                selector=config.dependencies,
            ),
        )

    accepted = frozenset(args.names)
    try:
        manifest = _load_manifest(args, config)
    except ManifestError as e:
        logger.error("%s", e)
        return ExitCodes.FILE_ERROR.value

    if args.ALL_MATCHES:
        packages = list(manifest.find_all(accepted.__contains__))
    else:
        found = manifest.find(accepted.__contains__)
        packages = [found] if found is not None else []

    if not packages:
        logger.warning(
            "None of %s is declared in the selected dependency sections (%s).",
            ", ".join(args.names),
            config.dependencies,
        )
        return ExitCodes.NOT_FOUND.value

    for package in packages:
        sys.stdout.write(_render(package, args) + "\n")
    return ExitCodes.SUCCESS.value


if __name__ == "__main__":
    sys.exit(main())
