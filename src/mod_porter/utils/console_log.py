"""Terminal log sink: severity-tagged console output mirrored to a log file."""
import sys
from datetime import datetime
from pathlib import Path


class ConsoleLog:
    """Callable log sink with the signature log(message, error=..., info=..., ...).

    Every component takes one of these as its ``log_callback``.
    """
    
    def __init__(self, log_file=None, show_debug=False, stream=None, error_stream=None):
        self.log_file = Path(log_file) if log_file else None
        self.show_debug = show_debug
        self.stream = stream
        self.error_stream = error_stream
    
    def _format_log_entry(self, message, error=False, info=False, warning=False, debug=False, success=False):
        """Format a log entry with timestamp and level prefix.
        
        Returns:
            tuple: (log_entry: str, level: str)
        """
        timestamp = datetime.now().strftime('%H:%M:%S')
        
        if error:
            prefix, level = 'ERROR: ', 'error'
        elif warning:
            prefix, level = 'WARNING: ', 'warning'
        elif info:
            prefix, level = 'INFO: ', 'info'
        elif debug:
            prefix, level = 'DEBUG: ', 'debug'
        elif success:
            prefix, level = '', 'success'
        else:
            prefix, level = '', 'normal'
        
        log_entry = f"[{timestamp}] {prefix}{message}\n"
        return (log_entry, level)
    
    def _write_log_to_file(self, log_entry):
        if not self.log_file:
            return
        try:
            with open(self.log_file, 'a', encoding='utf-8') as f:
                f.write(log_entry)
        except OSError:
            pass
    
    def __call__(self, message, error=False, info=False, warning=False, debug=False, success=False):
        log_entry, level = self._format_log_entry(
            message, error=error, info=info, warning=warning, debug=debug, success=success
        )
        self._write_log_to_file(log_entry)
        
        if debug and not self.show_debug:
            return
        
        if level == 'error':
            stream = self.error_stream or sys.stderr
        else:
            stream = self.stream or sys.stdout
        print(message, file=stream)
