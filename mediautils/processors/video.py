"""Audio and frame extraction from video files using ffmpeg."""

import os
import subprocess

from mediautils.config.settings import FFMPEG_PATH
from mediautils.utils.errors import VideoProcessingError


def _run_ffmpeg(args):
    """Run ffmpeg with the given arguments.

    Args:
        args: Arguments passed after the ffmpeg binary

    Raises:
        VideoProcessingError: If ffmpeg is missing or exits with an error
    """
    cmd = [FFMPEG_PATH, "-y", *args]
    try:
        subprocess.run(cmd, capture_output=True, text=True, check=True)
    except FileNotFoundError as e:
        raise VideoProcessingError(f"ffmpeg not found at '{FFMPEG_PATH}'") from e
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        raise VideoProcessingError(f"ffmpeg exited with code {e.returncode}: {stderr}") from e


def extract_audio_from_video(video_file_path, output_audio_path):
    """Extract the audio track of a video and save it as MP3.

    Nothing is done when the output file already exists.

    Args:
        video_file_path: Path to the video file
        output_audio_path: Where the extracted audio should be saved
    """
    if os.path.exists(output_audio_path):
        print(f'[INFO] Audio already extracted: "{output_audio_path}"')
        return

    try:
        _run_ffmpeg(["-i", str(video_file_path), "-vn", "-f", "mp3", str(output_audio_path)])
    except VideoProcessingError as e:
        print(f"[ERROR] Error extracting audio: {e}")
        raise

    print(f"[INFO] Extraction completed: {output_audio_path}")


def extract_frame_from_video(video_path, output_path, timestamp):
    """Extract a single frame from a video and save it as JPEG.

    Args:
        video_path: Path to the video file
        output_path: Directory where the JPEG should be saved
        timestamp: Position of the frame (e.g. "00:00:01.000")

    Returns:
        Path to the saved JPEG image, named after the video with its
        extension replaced by ``.jpeg``
    """
    filename = os.path.splitext(os.path.basename(str(video_path)))[0] + ".jpeg"
    image_path = os.path.join(output_path, filename)
    os.makedirs(output_path, exist_ok=True)

    try:
        _run_ffmpeg(["-ss", timestamp, "-i", str(video_path), "-frames:v", "1", image_path])
    except VideoProcessingError as e:
        print(f"[ERROR] An error occurred: {e}")
        raise

    print("[INFO] Image successfully extracted and saved.")
    return image_path
