"""Game version compatibility check against a Modrinth project."""

from mod_porter.utils.error_messages import describe_fetch_failure
from mod_porter.utils.symbols import LogSymbols


def supports_version(project: dict, target_version: str) -> bool:
    """Exact string membership of target_version in project['game_versions']."""
    game_versions = project.get('game_versions')
    if not isinstance(game_versions, list):
        return False
    return any(isinstance(v, str) and v == target_version for v in game_versions)


class CompatibilityResolver:
    
    def __init__(self, client, log_callback=None):
        self.client = client
        self.log_callback = log_callback
    
    def _log(self, message, **kwargs):
        if self.log_callback:
            self.log_callback(message, **kwargs)
    
    def is_compatible(self, remote_id: str, target_version: str) -> bool:
        """True only when the project explicitly lists target_version. Any failure means False."""
        result = self.client.get_project(remote_id)
        if not result.ok:
            self._log(f"  {LogSymbols.WARNING} Project lookup for '{remote_id}' failed "
                      f"({result.status.value}): {result.error}", debug=True)
            error_type, message = describe_fetch_failure(result)
            # 404s stay in the debug log
            if message and error_type != 'network_404':
                self._log(f"\n{message}", warning=True)
            return False
        
        if 'game_versions' not in result.payload:
            self._log(f"  Project '{remote_id}' declares no game_versions", debug=True)
        return supports_version(result.payload, target_version)
