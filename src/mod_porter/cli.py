"""
Modrinth Mod Porter - console entry point.
Asks for a mods folder, a Minecraft version and an installation folder, then
installs the matching Modrinth build of every mod it recognizes.
"""

import argparse
import sys

from mod_porter import __version__
from mod_porter.core import (
    ArchiveIdentityExtractor,
    CompatibilityResolver,
    ConfigManager,
    ModInstaller,
    ModMappingTable,
    ModPorter,
    ModrinthClient,
)
from mod_porter.core.constants import DEFAULT_LOADER, LOG_FILE
from mod_porter.model_types import MappingLoadStatus
from mod_porter.utils.console_log import ConsoleLog
from mod_porter.utils.path_validator import FolderValidator


def build_parser():
    parser = argparse.ArgumentParser(
        prog="mod-porter",
        description="Install the Modrinth builds of a folder of Minecraft mods for another game version."
    )
    parser.add_argument("--source", help="folder containing the .jar files to port")
    parser.add_argument("--game-version", help="target Minecraft version, e.g. 1.20.1")
    parser.add_argument("--install-dir", help="folder the downloaded mods are written to")
    parser.add_argument("--loader", help=f"loader filter for the versions page (default: {DEFAULT_LOADER})")
    parser.add_argument("--mappings", help="path to mod_mappings.json (default: ./mod_mappings.json)")
    parser.add_argument("--no-pause", action="store_true",
                        help="do not wait for a key press after creating the mappings template")
    parser.add_argument("--debug", action="store_true", help="show debug messages")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def prompt(message, default=None, input_func=input):
    """Ask for a value; an empty answer picks the default when there is one."""
    print(message)
    if default:
        print(f"  [Enter for: {default}]")
    answer = input_func().strip()
    return answer or (default or "")


def prompt_game_version(default=None, input_func=input):
    while True:
        version = prompt("Enter the Minecraft version in the format 1.x.x:", default, input_func)
        if version:
            return version
        print("The Minecraft version cannot be empty.")


def load_mapping_table(config_manager, pause, input_func=input):
    result = config_manager.load_mappings()
    if result.status is MappingLoadStatus.TEMPLATE_CREATED and pause:
        print(f"A template '{config_manager.mappings_file.name}' has been created. "
              "Add your mod mappings and press Enter to continue.")
        input_func()
        # Reload so edits made during the pause are used
        result = config_manager.load_mappings()
    return ModMappingTable(result.mappings)


def main(argv=None, input_func=input):
    args = build_parser().parse_args(argv)
    log = ConsoleLog(log_file=LOG_FILE, show_debug=args.debug)

    config_manager = ConfigManager(log_callback=log, mappings_file=args.mappings)
    pause = not args.no_pause and sys.stdin is not None and sys.stdin.isatty()

    try:
        mapping_table = load_mapping_table(config_manager, pause=pause, input_func=input_func)
        prefs = config_manager.load_preferences()

        source = args.source or prompt("Enter the path to the folder containing .jar files:",
                                       prefs.get('last_source_dir'), input_func)
        ok, error = FolderValidator.validate_source(source)
        if not ok:
            log(error, error=True)
            return 1
        source_dir = FolderValidator.normalize(source)

        game_version = args.game_version or prompt_game_version(prefs.get('last_game_version'), input_func)

        install = args.install_dir or prompt("Enter the path where the mods should be installed:",
                                             prefs.get('last_install_dir'), input_func)
        ok, error = FolderValidator.validate_install(install)
        if not ok:
            log(error, error=True)
            return 1
        install_dir = FolderValidator.normalize(install)
        writable, error = FolderValidator.check_write_permissions(install_dir)
        if not writable:
            log(error, warning=True)

        loader = args.loader or DEFAULT_LOADER
        config_manager.remember(source_dir, install_dir, game_version)

        client = ModrinthClient()
        try:
            porter = ModPorter(
                extractor=ArchiveIdentityExtractor(log),
                mapping_table=mapping_table,
                resolver=CompatibilityResolver(client, log),
                installer=ModInstaller(client, log, loader=loader),
                log_callback=log,
            )
            report = porter.run(source_dir, game_version, install_dir)
        finally:
            client.close()
    except (KeyboardInterrupt, EOFError):
        log("\nCancelled", warning=True)
        return 130

    if report.get_total_processed():
        log(report.generate_summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
