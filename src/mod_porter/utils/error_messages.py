"""User-friendly error message templates."""

import zipfile
import zlib

import requests

from .symbols import LogSymbols


def get_user_friendly_error(error_type, error_details=""):
    """Convert error type to user-friendly message with actionable steps."""
    messages = {
        'network_timeout': (
            f"{LogSymbols.ERROR_BOLD} Connection timeout\n\n"
            "Modrinth took too long to respond.\n\n"
            "Try:\n"
            f"{LogSymbols.BULLET} Check your internet connection\n"
            f"{LogSymbols.BULLET} Try again later (server might be busy)\n"
            f"{LogSymbols.BULLET} Check if your firewall is blocking the connection"
        ),
        
        'network_404': (
            f"{LogSymbols.ERROR_BOLD} Project not found (404)\n\n"
            "Modrinth has no project under this id.\n\n"
            "Try:\n"
            f"{LogSymbols.BULLET} Look the mod up on modrinth.com and note its slug\n"
            f"{LogSymbols.BULLET} Add an ExpectedName/ApiName entry to mod_mappings.json"
        ),
        
        'rate_limited': (
            LogSymbols.WARNING + " Rate limited by Modrinth (429)\n\n"
            "Too many requests were sent in a short time.\n\n"
            "Try:\n"
            f"{LogSymbols.BULLET} Wait a minute and run the tool again"
        ),
        
        'disk_space': (
            f"{LogSymbols.ERROR_BOLD} Not enough disk space\n\n"
            "The installation folder's drive is full.\n\n"
            "Try:\n"
            f"{LogSymbols.BULLET} Free up some space\n"
            f"{LogSymbols.BULLET} Install to a different drive"
        ),
        
        'permission_denied': (
            f"{LogSymbols.ERROR_BOLD} Permission denied\n\n"
            "The tool can't write to the installation folder.\n\n"
            "Try:\n"
            f"{LogSymbols.BULLET} Check folder permissions\n"
            f"{LogSymbols.BULLET} Close Minecraft if it's running"
        ),
        
        'corrupted_archive': (
            f"{LogSymbols.ERROR_BOLD} Unreadable mod archive\n\n"
            "The .jar file is damaged or not a zip archive.\n\n"
            "Try:\n"
            f"{LogSymbols.BULLET} Re-download the mod from its original source"
        ),
    }
    
    default_message = (
        f"{LogSymbols.ERROR_BOLD} An error occurred\n\n"
        f"Technical details: {error_details}\n\n"
        f"Try:\n"
        f"{LogSymbols.BULLET} Check the log for more information\n"
        f"{LogSymbols.BULLET} Run again with --debug"
    )
    
    return messages.get(error_type, default_message)


def suggest_fix_for_error(exception):
    # Network errors
    if isinstance(exception, (requests.exceptions.Timeout, requests.exceptions.ConnectionError)):
        return 'network_timeout'
    elif isinstance(exception, requests.exceptions.HTTPError):
        status = exception.response.status_code if exception.response is not None else None
        if status == 404:
            return 'network_404'
        elif status == 429:
            return 'rate_limited'
    elif isinstance(exception, requests.exceptions.RequestException):
        # RequestException subclasses OSError; keep it out of the file system branch
        return None
    
    # File system errors
    elif isinstance(exception, PermissionError):
        return 'permission_denied'
    elif isinstance(exception, OSError):
        if 'No space left' in str(exception):
            return 'disk_space'
        return 'permission_denied'
    
    # Archive errors
    elif isinstance(exception, (zipfile.BadZipFile, zlib.error, EOFError)):
        return 'corrupted_archive'
    
    return None  # Use default message


def describe_fetch_failure(result):
    """Classify a failed remote call.

    Returns:
        tuple: (error_type or None, user-friendly message or None)
    """
    if result.exception is None:
        return None, None
    error_type = suggest_fix_for_error(result.exception)
    if error_type is None:
        return None, None
    return error_type, get_user_friendly_error(error_type, result.error or "")
