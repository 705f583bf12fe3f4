"""Folder validation for the source and installation directories."""
from pathlib import Path
from typing import Optional, Tuple, Union

from .error_messages import get_user_friendly_error


class FolderValidator:
    
    @staticmethod
    def normalize(path: Union[str, Path, None]) -> Optional[Path]:
        """Turn user input into a Path: strips whitespace and surrounding quotes, expands ~."""
        if path is None:
            return None
        if isinstance(path, Path):
            return path.expanduser()
        cleaned = path.strip().strip('"').strip("'")
        if not cleaned:
            return None
        return Path(cleaned).expanduser()
    
    @staticmethod
    def validate_source(path: Union[str, Path, None]) -> Tuple[bool, Optional[str]]:
        """Validate the folder holding the .jar files to port."""
        path_obj = FolderValidator.normalize(path)
        if path_obj is None or not path_obj.is_dir():
            return False, "Invalid folder path."
        return True, None
    
    @staticmethod
    def validate_install(path: Union[str, Path, None]) -> Tuple[bool, Optional[str]]:
        """Validate the folder the downloaded mods are written to. It must already exist."""
        path_obj = FolderValidator.normalize(path)
        if path_obj is None or not path_obj.is_dir():
            return False, "Invalid installation folder path."
        return True, None
    
    @staticmethod
    def check_write_permissions(path: Union[str, Path]) -> Tuple[bool, Optional[str]]:
        """Check that files can be created in path.
        
        Returns:
            tuple: (success: bool, error_message: str or None)
        """
        test_file = Path(path) / ".mod_porter_write_test"
        try:
            test_file.write_text("test")
            test_file.unlink()
            return True, None
        except (PermissionError, OSError) as e:
            return False, f"{get_user_friendly_error('permission_denied')}\n\nTechnical: {e}"
