"""
Global constants for Portal Browser.
Contains path configuration, display settings, portal endpoints and timing constants.
"""

import os

# **************************************************************** #
#                       Environment Detection                        #
# **************************************************************** #
DEV_MODE = os.getenv("DEV_MODE", "false").lower() == "true"

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))

# **************************************************************** #
#                       Path Configuration                           #
# **************************************************************** #
if DEV_MODE:
    LOG_DIR = os.path.join(SCRIPT_DIR, "..", "workdir")
    CONFIG_FILE = os.path.join(SCRIPT_DIR, "..", "workdir", "config.json")
else:
    LOG_DIR = SCRIPT_DIR
    CONFIG_FILE = os.path.join(SCRIPT_DIR, "config.json")

os.makedirs(LOG_DIR, exist_ok=True)
LOG_FILE = os.path.join(LOG_DIR, "error.log")

# **************************************************************** #
#                       Display Settings                             #
# **************************************************************** #
FPS = 30
SCREEN_WIDTH = 960
SCREEN_HEIGHT = 600
DOUBLE_CLICK_MS = 400

# **************************************************************** #
#                       Portal API                                   #
# **************************************************************** #
DEFAULT_SERVER_URL = "http://localhost:8080"
API_LOGIN = "/api/login"
API_FILES = "/api/files"
API_UPLOAD = "/api/upload"
API_RENAME = "/api/rename"
API_DELETE = "/api/delete"
API_DOWNLOAD = "/api/download"
REQUEST_CONTENT_TYPE = "application/text;charset=utf-8"
REQUEST_TIMEOUT = 30  # seconds

# Suggested name when more than one file is downloaded
DEFAULT_ARCHIVE_NAME = "smallbasic-files.zip"

# **************************************************************** #
#                       Notices                                      #
# **************************************************************** #
NOTICE_DURATION_MS = 5000

LOGIN_HELPER_TEXT = (
    "Enter the access token displayed on the SmallBASIC [About] screen."
)
INVALID_TOKEN_TEXT = (
    "Invalid token. Enter the access token displayed on the SmallBASIC [About] screen."
)
