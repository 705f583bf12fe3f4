"""
Run progress tracking and reporting.
"""

import time
from datetime import datetime

from mod_porter.utils.symbols import LogSymbols


class InstallationReport:
    """Tracks what happened to every archive for the end-of-run summary."""
    
    def __init__(self, game_version=None, clock=time.time):
        self.game_version = game_version
        self.installed = []
        self.incompatible = []
        self.skipped = []
        self.errors = []
        self._clock = clock
        self.start_time = clock()
    
    def add_installed(self, archive, api_name, path):
        """Record a mod whose matching build was written to the install folder."""
        self.installed.append({
            'archive': archive,
            'mod': api_name,
            'path': str(path)
        })
    
    def add_incompatible(self, archive, api_name):
        """Record a mod with no build for the target game version."""
        self.incompatible.append({
            'archive': archive,
            'mod': api_name
        })
    
    def add_skipped(self, archive, reason):
        """Record an archive whose identity could not be read."""
        self.skipped.append({
            'archive': archive,
            'reason': reason
        })
    
    def add_error(self, archive, api_name, stage, url=None):
        """Record a compatible mod that failed to install."""
        self.errors.append({
            'archive': archive,
            'mod': api_name,
            'stage': stage,
            'url': url,
            'timestamp': datetime.now().strftime('%H:%M:%S')
        })
    
    def get_duration(self):
        """Get run duration in seconds."""
        return self._clock() - self.start_time
    
    def generate_summary(self):
        """Generate a formatted summary report."""
        duration = self.get_duration()
        minutes, seconds = divmod(int(duration), 60)
        target = f" for Minecraft {self.game_version}" if self.game_version else ""
        
        summary = [
            "\n" + LogSymbols.SEPARATOR * 60,
            f"{LogSymbols.SUCCESS} Run Complete{target} ({minutes}m {seconds}s)",
            LogSymbols.SEPARATOR * 60,
            f"{LogSymbols.SUCCESS} {len(self.installed)} installed | "
            f"{LogSymbols.NOT_INSTALLED} {len(self.incompatible)} incompatible | "
            f"{LogSymbols.INFO} {len(self.skipped)} skipped | "
            f"{LogSymbols.ERROR} {len(self.errors)} errors"
        ]
        
        if self.installed:
            summary.append("\nInstalled:")
            for item in self.installed:
                summary.append(f"  {LogSymbols.SUCCESS} {item['mod']} {LogSymbols.ARROW_RIGHT} {item['path']}")
        
        if self.incompatible:
            summary.append("\nNo build for this version:")
            for item in self.incompatible:
                summary.append(f"  {LogSymbols.NOT_INSTALLED} {item['mod']} ({item['archive']})")
        
        if self.skipped:
            summary.append("\nSkipped:")
            for item in self.skipped:
                summary.append(f"  {LogSymbols.INFO} {item['archive']}: {item['reason']}")
        
        if self.errors:
            summary.append("\nErrors:")
            for item in self.errors:
                summary.append(f"  {LogSymbols.ERROR} {item['mod']}: {item['stage']}")
                if item['url']:
                    summary.append(f"    URL: {item['url']}")
        
        return "\n".join(summary)
    
    def has_errors(self):
        """Check if any errors occurred."""
        return len(self.errors) > 0
    
    def get_total_processed(self):
        """Get total number of archives processed."""
        return len(self.installed) + len(self.incompatible) + len(self.skipped) + len(self.errors)
