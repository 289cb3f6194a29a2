"""asdf-go-install - install Go command-line tools with asdf

    Returns:
        int: Exit code
"""
import json
import logging
import sys

from args import parse_args
from asdf_env import load_env
from cli_config import apply_config, load_config_file
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes
from errors import AgiError, FetchError, NotFoundError, ValidationError
from manifest.models import Manifest
from registry.pkgsite import PkgSiteSource
from repository.git import resolve_tag_reference
from versioning.service import InstallResolution, collect_versions

logger = logging.getLogger(__name__)


def exit_code_for(exc: AgiError) -> ExitCodes:
    """Map an error to the process exit code reported to asdf."""
    # ManifestNotFoundError is both; a missing manifest reports NOT_FOUND.
    if isinstance(exc, NotFoundError):
        return ExitCodes.NOT_FOUND
    if isinstance(exc, ValidationError):
        return ExitCodes.INVALID_MANIFEST
    if isinstance(exc, FetchError):
        return ExitCodes.CONNECTION_ERROR
    # PersistenceError, EncodingError
    return ExitCodes.FILE_ERROR


def cmd_list_all(args, source) -> None:
    """Print every valid version, lowest first, on one line."""
    print(str(collect_versions(source, args.PACKAGE)))


def cmd_latest(args, source) -> None:
    """Print the latest stable version."""
    print(collect_versions(source, args.PACKAGE).latest_stable().original)


def cmd_resolve(args, source, data_dir: str) -> None:
    """Resolve the latest stable version and persist the plugin manifest."""
    resolution = InstallResolution(
        source,
        args.PLUGIN,
        args.PACKAGE,
        data_dir,
        reference_resolver=None if args.NO_REFERENCE else resolve_tag_reference,
    )
    manifest = resolution.run()
    print(resolution.selected.original if resolution.selected else "")
    if is_debug_enabled(logger):
        logger.debug(
            "Resolution complete",
            extra=extra_context(
                event="resolve",
                component="cli",
                plugin=manifest.plugin_name,
                state=resolution.state.value,
                rejected=len(resolution.rejected),
            ),
        )


def cmd_show(args, data_dir: str) -> None:
    """Print the validated manifest as JSON."""
    manifest = Manifest.read(data_dir, args.PLUGIN)
    print(json.dumps(manifest.to_document(), indent=2))


def main(argv=None) -> int:
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(level=args.LOG_LEVEL, log_file=args.LOG_FILE)
    apply_config(load_config_file(args.CONFIG))

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.action)
        )

    data_dir = args.DATA_DIR or load_env().data_dir
    source = PkgSiteSource(Constants.PKGSITE_BASE_URL)

    try:
        if args.action == "list-all":
            cmd_list_all(args, source)
        elif args.action == "latest":
            cmd_latest(args, source)
        elif args.action == "resolve":
            cmd_resolve(args, source, data_dir)
        elif args.action == "show":
            cmd_show(args, data_dir)
    except AgiError as exc:
        logger.error("%s", exc)
        return exit_code_for(exc).value

    return ExitCodes.SUCCESS.value


if __name__ == "__main__":
    sys.exit(main())
