"""Per-archive workflow: identity -> mapping -> compatibility -> install."""
from pathlib import Path
from typing import List, Union

from .constants import ARCHIVE_SUFFIX
from .installation_report import InstallationReport
from mod_porter.model_types import ModOutcome, InstallStage
from mod_porter.utils.symbols import LogSymbols


STAGE_DESCRIPTIONS = {
    InstallStage.PROJECT_LOOKUP_FAILED: "project lookup failed",
    InstallStage.FETCH_PAGE_FAILED: "versions page could not be fetched",
    InstallStage.NO_LINK_FOUND: "no download link found",
    InstallStage.DOWNLOAD_FAILED: "download failed",
    InstallStage.WRITE_FAILED: "file could not be written",
}


def find_archives(folder: Union[str, Path]) -> List[Path]:
    """List the .jar files directly inside folder, sorted by name."""
    folder = Path(folder)
    return sorted(
        (p for p in folder.iterdir() if p.is_file() and p.suffix.lower() == ARCHIVE_SUFFIX),
        key=lambda p: p.name
    )


class ModPorter:
    """Runs every archive of a folder through the resolution chain, one at a time."""

    def __init__(self, extractor, mapping_table, resolver, installer, log_callback=None):
        self.extractor = extractor
        self.mapping_table = mapping_table
        self.resolver = resolver
        self.installer = installer
        self.log_callback = log_callback

    def _log(self, message, **kwargs):
        if self.log_callback:
            self.log_callback(message, **kwargs)

    def process_archive(self, archive: Path, game_version: str, install_dir: Path) -> ModOutcome:
        mod_id = self.extractor.extract_identity(archive)
        if not mod_id:
            self._log(f"Failed to extract mod name for {archive.name}.", error=True)
            return ModOutcome(archive.name, None, None, False, None)

        api_name = self.mapping_table.resolve(mod_id)
        compatible = self.resolver.is_compatible(api_name, game_version)

        self._log(f"Minecraft Mod Id: {mod_id}")
        if api_name != mod_id:
            self._log(f"  Mapped {mod_id} {LogSymbols.ARROW_RIGHT} {api_name}", debug=True)

        if not compatible:
            self._log(f"Not compatible with Minecraft {game_version}")
            return ModOutcome(archive.name, mod_id, api_name, False, None)

        self._log(f"Compatible with Minecraft {game_version}", success=True)
        self._log(api_name)
        result = self.installer.install(api_name, game_version, install_dir)
        return ModOutcome(archive.name, mod_id, api_name, True, result)

    def run(self, source_dir: Union[str, Path], game_version: str,
            install_dir: Union[str, Path]) -> InstallationReport:
        report = InstallationReport(game_version)
        install_dir = Path(install_dir)

        archives = find_archives(source_dir)
        if not archives:
            self._log("No .jar files found in the specified folder.")
            return report

        total = len(archives)
        self._log(f"\nChecking {total} mod{'s' if total > 1 else ''} against Minecraft {game_version}...")
        self._log(LogSymbols.SEPARATOR * 60)

        for index, archive in enumerate(archives, 1):
            self._log(f"[{index}/{total}] {archive.name}", debug=True)
            try:
                outcome = self.process_archive(archive, game_version, install_dir)
            except Exception as e:
                # A bug in one archive's processing must not end the run
                self._log(f"  {LogSymbols.ERROR} Unexpected error for {archive.name}: {e}", error=True)
                report.add_error(archive.name, archive.name, f"unexpected error: {type(e).__name__}")
                self._log("")
                continue
            self._record(report, outcome)
            self._log("")

        return report

    def _record(self, report, outcome: ModOutcome):
        if outcome.mod_id is None:
            report.add_skipped(outcome.archive, "no mod id or name in metadata")
        elif not outcome.compatible:
            report.add_incompatible(outcome.archive, outcome.api_name)
        elif outcome.install.success:
            report.add_installed(outcome.archive, outcome.api_name, outcome.install.path)
        else:
            report.add_error(outcome.archive, outcome.api_name,
                             STAGE_DESCRIPTIONS.get(outcome.install.stage, outcome.install.stage.value),
                             outcome.install.download_url)
