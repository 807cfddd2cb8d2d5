"""Clipboard access through the platform's command-line tools."""

import subprocess
import sys

from mediautils.utils.errors import ClipboardUnavailableError


def _copy_command():
    if sys.platform == 'darwin':
        return ['pbcopy']
    if sys.platform.startswith('win'):
        return ['clip']
    return ['xclip', '-selection', 'clipboard']


def _paste_command():
    if sys.platform == 'darwin':
        return ['pbpaste']
    if sys.platform.startswith('win'):
        return ['powershell', '-NoProfile', '-Command', 'Get-Clipboard']
    return ['xclip', '-selection', 'clipboard', '-o']


def copy_to_clipboard(text):
    """Copy text to the clipboard.

    Args:
        text: The text to be copied

    Raises:
        ClipboardUnavailableError: If the clipboard tool is not installed
        subprocess.CalledProcessError: If the clipboard tool fails
    """
    command = _copy_command()
    try:
        subprocess.run(command, input=text, text=True, check=True)
    except FileNotFoundError as e:
        raise ClipboardUnavailableError(f"Clipboard tool not found: {command[0]}") from e


def paste_from_clipboard():
    """Return the text currently on the clipboard.

    Raises:
        ClipboardUnavailableError: If the clipboard tool is not installed
        subprocess.CalledProcessError: If the clipboard tool fails
    """
    command = _paste_command()
    try:
        result = subprocess.run(command, capture_output=True, text=True, check=True)
    except FileNotFoundError as e:
        raise ClipboardUnavailableError(f"Clipboard tool not found: {command[0]}") from e
    return result.stdout
