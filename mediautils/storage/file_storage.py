"""Local file storage for downloaded content."""

import os
from urllib.parse import urlparse

import requests

from mediautils.config.settings import REQUEST_TIMEOUT, USER_AGENT
from mediautils.utils.errors import DownloadError

CHUNK_SIZE = 64 * 1024


def retrieve_filename_from_url(url):
    """Return the filename part of a URL, ignoring any query string.

    Args:
        url: URL pointing at a file

    Returns:
        The last path segment of the URL
    """
    return url.split("?")[0].split("/")[-1]


def download_file(url, output_path, timeout=REQUEST_TIMEOUT):
    """Download a file from a URL to a local path.

    Args:
        url: URL of the file
        output_path: Local path where the file is written
        timeout: Request timeout in seconds

    Raises:
        DownloadError: If the server answers with an error status
        requests.RequestException: If the transfer breaks off; nothing is
            left at ``output_path`` in that case
    """
    headers = {'User-Agent': USER_AGENT}

    with requests.get(url, headers=headers, timeout=timeout, stream=True) as response:
        if not response.ok:
            raise DownloadError(
                f"Failed to download: {response.reason}",
                status_code=response.status_code,
                retry_after=response.headers.get('Retry-After')
            )

        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        # output_path only appears once the whole body has been written
        part_path = f"{output_path}.part"
        size = 0
        try:
            with open(part_path, 'wb') as file:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        file.write(chunk)
                        size += len(chunk)
        except Exception as e:
            print(f"[ERROR] Download of {url} failed after {size} bytes: {e}")
            if os.path.exists(part_path):
                os.remove(part_path)
            raise

        os.replace(part_path, output_path)

    print(f"[INFO] Downloaded {urlparse(url).netloc} file to {output_path} ({size} bytes)")
