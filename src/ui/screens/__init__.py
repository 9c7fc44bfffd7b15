"""
UI Screens - Full page components with data binding.
The final layer of the atomic design hierarchy.
"""

from .login_screen import LoginScreen
from .files_screen import FilesScreen
from .upload_picker_screen import UploadPickerScreen
from .screen_manager import ScreenManager

__all__ = [
    'LoginScreen',
    'FilesScreen',
    'UploadPickerScreen',
    'ScreenManager',
]
