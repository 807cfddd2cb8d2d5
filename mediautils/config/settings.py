"""
Configuration settings for the media utilities.
Every value can be overridden through environment variables.
"""

import os

# HTTP configuration
REQUEST_TIMEOUT = int(os.environ.get("REQUEST_TIMEOUT", "30"))  # seconds
USER_AGENT = os.environ.get(
    "USER_AGENT",
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36'
)

# Retry configuration for hosted APIs
BASE_DELAY = 1  # Base delay between retries in seconds
MAX_RETRIES = int(os.environ.get("MAX_RETRIES", "3"))
MAX_DELAY = 60  # Maximum delay between retries in seconds

# OpenAI Whisper configuration
OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY", "")
WHISPER_MODEL = os.environ.get("WHISPER_MODEL", "whisper-1")
OPENAI_TIMEOUT = float(os.environ.get("OPENAI_TIMEOUT", "600"))
OPENAI_MAX_RETRIES = int(os.environ.get("OPENAI_MAX_RETRIES", "2"))

# DeepL configuration
DEEPL_API_KEY = os.environ.get("DEEPL_API_KEY", "")
DEEPL_API_URL = os.environ.get("DEEPL_API_URL", "https://api-free.deepl.com/v2/translate")
DEEPL_MAX_CHARS = int(os.environ.get("DEEPL_MAX_CHARS", "5000"))  # characters per request

# Imgur configuration
IMGUR_CLIENT_ID = os.environ.get("IMGUR_CLIENT_ID", "dd32dd3c6aaa9a0")
IMGUR_UPLOAD_URL = "https://api.imgur.com/3/image"

# S3 configuration (endpoint is only needed for S3-compatible stores such as R2)
AWS_REGION = os.environ.get("AWS_REGION", "us-east-1")
S3_ENDPOINT_URL = os.environ.get("S3_ENDPOINT_URL", "")
S3_ACCESS_KEY_ID = os.environ.get("S3_ACCESS_KEY_ID", "")
S3_SECRET_ACCESS_KEY = os.environ.get("S3_SECRET_ACCESS_KEY", "")

# External binaries
FFMPEG_PATH = os.environ.get("FFMPEG_PATH", "ffmpeg")
YT_DLP_PATH = os.environ.get("YT_DLP_PATH", "yt-dlp")
YT_DLP_OUTPUT_TEMPLATE = "%(playlist_index)s-%(channel)s-%(id)s.%(ext)s"
YT_DLP_RELEASE_URL = "https://github.com/yt-dlp/yt-dlp/releases/latest/download"
YT_DLP_SUBTITLE_LANG = "en"

# Image optimization configuration (applied before image hosting uploads)
IMAGE_OPTIMIZATION = {
    'enabled': True,  # Set to False to upload images untouched
    'max_width': 1920,  # Maximum width in pixels
    'max_height': 1080,  # Maximum height in pixels
    'jpeg_quality': 90,  # JPEG quality (0-100)
    'preserve_transparency': True,  # Keep PNG output for transparent images
}

# Warn about missing credentials; each wrapper checks again when it is used
missing_vars = []
if not OPENAI_API_KEY:
    missing_vars.append("OPENAI_API_KEY")
if not DEEPL_API_KEY:
    missing_vars.append("DEEPL_API_KEY")

if missing_vars:
    print(f"[WARNING] Missing environment variables: {', '.join(missing_vars)}")
    print("[WARNING] Transcription and translation need these to be set before use.")
