"""Video download and metadata fetcher built on the yt-dlp binary."""

import os
import json
import stat
import subprocess
import sys
from dataclasses import dataclass
from typing import Dict, List, Optional

import requests

from mediautils.config.settings import (
    YT_DLP_PATH,
    YT_DLP_OUTPUT_TEMPLATE,
    YT_DLP_RELEASE_URL,
    YT_DLP_SUBTITLE_LANG,
    REQUEST_TIMEOUT
)
from mediautils.utils.errors import YtDlpError
from mediautils.utils.text import vtt_to_plain_text


@dataclass
class DownloadedVideo:
    """A file written by yt-dlp using YT_DLP_OUTPUT_TEMPLATE."""
    index: Optional[int]
    channel: str
    id: str
    path: str


@dataclass
class VideoDetails:
    """Title, channel, URL and English subtitle text of a video."""
    title: str
    channel: str
    subtitle: str
    url: str


def _release_asset_name():
    if sys.platform.startswith('win'):
        return 'yt-dlp.exe'
    if sys.platform == 'darwin':
        return 'yt-dlp_macos'
    return 'yt-dlp'


def download_ytdlp_if_needed(ytdlp_path: str) -> bool:
    """Download the latest yt-dlp release binary if it is not present.

    Args:
        ytdlp_path: Where the binary should live

    Returns:
        True if the binary was downloaded, False if it already existed
    """
    if os.path.exists(ytdlp_path):
        return False

    url = f"{YT_DLP_RELEASE_URL}/{_release_asset_name()}"
    print(f"[INFO] Downloading yt-dlp from {url}")

    response = requests.get(url, timeout=REQUEST_TIMEOUT, allow_redirects=True)
    response.raise_for_status()

    directory = os.path.dirname(ytdlp_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(ytdlp_path, 'wb') as file:
        file.write(response.content)

    mode = os.stat(ytdlp_path).st_mode
    os.chmod(ytdlp_path, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    print(f"[INFO] yt-dlp saved to {ytdlp_path}")
    return True


def generate_auth_args(cookie_file: Optional[str] = None,
                       username: Optional[str] = None,
                       password: Optional[str] = None) -> List[str]:
    """Build yt-dlp authentication arguments.

    A cookie file takes precedence over a username/password login.

    Args:
        cookie_file: Path to a Netscape-format cookie file
        username: Account username
        password: Account password

    Returns:
        List of command-line arguments, empty when no auth is given
    """
    if cookie_file:
        return ["--cookies", cookie_file]
    if username and password:
        return ["-u", username, "-p", password]
    return []


def parse_downloaded_filename(filename: str, outdir: str) -> DownloadedVideo:
    """Parse a file name produced by YT_DLP_OUTPUT_TEMPLATE.

    Args:
        filename: Name of the file inside ``outdir``
        outdir: Directory holding the file

    Returns:
        DownloadedVideo record; ``index`` is None when yt-dlp wrote "NA"
    """
    stem = os.path.splitext(filename)[0]
    parts = stem.split("-")
    index_part = parts[0] if parts else ""
    channel = parts[1] if len(parts) > 1 else ""
    # Ids may contain hyphens; channel names are assumed not to
    video_id = "-".join(parts[2:]) if len(parts) > 2 else ""

    try:
        index = int(index_part)
    except ValueError:
        index = None

    return DownloadedVideo(
        index=index,
        channel=channel,
        id=video_id,
        path=os.path.join(outdir, filename)
    )


class YtDlpFetcher:
    """Class for downloading videos and metadata with yt-dlp."""

    def __init__(self, ytdlp_path=YT_DLP_PATH):
        """Initialize the fetcher.

        Args:
            ytdlp_path: Path to the yt-dlp binary (or its name on PATH)
        """
        self.ytdlp_path = ytdlp_path

    def _exec(self, args: List[str]) -> str:
        """Run yt-dlp and return its standard output.

        Raises:
            YtDlpError: If the binary is missing or exits with an error
        """
        cmd = [self.ytdlp_path, *args]
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise YtDlpError(f"yt-dlp not found at '{self.ytdlp_path}'") from e

        if result.returncode != 0:
            raise YtDlpError(
                f"yt-dlp exited with code {result.returncode}: {result.stderr.strip()}",
                returncode=result.returncode,
                stderr=result.stderr
            )
        return result.stdout

    def download_video(self, url: str, outdir: str = ".",
                       cookie_file: Optional[str] = None,
                       username: Optional[str] = None,
                       password: Optional[str] = None) -> List[DownloadedVideo]:
        """Download a video or playlist into a directory.

        The directory is listed afterwards even if yt-dlp fails, so files
        downloaded before an error are still returned.

        Args:
            url: Video or playlist URL
            outdir: Output directory
            cookie_file: Optional cookie file for authentication
            username: Optional account username
            password: Optional account password

        Returns:
            List of DownloadedVideo entries for the files in ``outdir``
        """
        os.makedirs(outdir, exist_ok=True)
        output = os.path.join(outdir, YT_DLP_OUTPUT_TEMPLATE)

        try:
            stdout = self._exec([
                url,
                "-f", "b",
                "--output", output,
                *generate_auth_args(cookie_file, username, password),
            ])
            print(stdout)
        except YtDlpError as e:
            print(f"[ERROR] Video download failed: {e}")

        return [
            parse_downloaded_filename(filename, outdir)
            for filename in sorted(os.listdir(outdir))
        ]

    def fetch_video_info(self, url: str,
                         cookie_file: Optional[str] = None,
                         username: Optional[str] = None,
                         password: Optional[str] = None) -> Dict:
        """Fetch the yt-dlp info JSON of a video.

        Args:
            url: Video URL
            cookie_file: Optional cookie file for authentication
            username: Optional account username
            password: Optional account password

        Returns:
            Parsed info dictionary
        """
        stdout = self._exec([
            url,
            "--dump-json",
            *generate_auth_args(cookie_file, username, password),
        ])
        return json.loads(stdout)

    def fetch_detailed_info(self, url: str,
                            cookie_file: Optional[str] = None,
                            username: Optional[str] = None,
                            password: Optional[str] = None) -> VideoDetails:
        """Fetch title, channel, URL and English subtitles of a video.

        Subtitles (manual or automatic) are written next to the info
        filename, converted to plain text and then removed.

        Args:
            url: Video URL
            cookie_file: Optional cookie file for authentication
            username: Optional account username
            password: Optional account password

        Returns:
            VideoDetails of the video
        """
        auth_args = generate_auth_args(cookie_file, username, password)
        info = self.fetch_video_info(url, cookie_file, username, password)

        stdout = self._exec([
            url,
            "--skip-download",
            "--write-sub",
            "--write-auto-subs",
            "--sub-lang", YT_DLP_SUBTITLE_LANG,
            "--sub-format", "vtt",
            "--output", info['filename'],
            *auth_args,
        ])
        print(stdout)

        vtt_path = f"{info['filename']}.{YT_DLP_SUBTITLE_LANG}.vtt"
        subtitle = vtt_to_plain_text(vtt_path)
        os.remove(vtt_path)

        return VideoDetails(
            title=info.get('fulltitle', ''),
            channel=info.get('channel', ''),
            subtitle=subtitle,
            url=info.get('original_url', url)
        )
