"""
Imgur image hosting utility with optional image optimization.
"""

import io

import requests
from PIL import Image, ImageOps, UnidentifiedImageError

from mediautils.config.settings import (
    IMGUR_CLIENT_ID,
    IMGUR_UPLOAD_URL,
    IMAGE_OPTIMIZATION,
    REQUEST_TIMEOUT
)
from mediautils.utils.errors import ImageUploadError
from mediautils.utils.retry import retry_with_backoff


class ImgurUploader:
    """Class for uploading images to Imgur."""

    def __init__(self, client_id=IMGUR_CLIENT_ID, upload_url=IMGUR_UPLOAD_URL):
        """Initialize the uploader.

        Args:
            client_id: Imgur application client ID
            upload_url: Image upload endpoint
        """
        self.client_id = client_id
        self.upload_url = upload_url

    @staticmethod
    def _to_bytes(image_data):
        if isinstance(image_data, str):
            return image_data.encode('utf-8')
        return bytes(image_data)

    def optimize_image(self, image_data):
        """Optimize an image by resizing and re-encoding it.

        Transparent images are saved as PNG, everything else as JPEG.

        Args:
            image_data: Raw image bytes

        Returns:
            Optimized image bytes, or the original bytes if the image could not be decoded
        """
        if not IMAGE_OPTIMIZATION['enabled']:
            return image_data

        try:
            img = Image.open(io.BytesIO(image_data))
            # Auto-orient image based on EXIF data
            img = ImageOps.exif_transpose(img)
        except (UnidentifiedImageError, OSError) as e:
            print(f"[WARNING] Could not decode image, uploading original: {e}")
            return image_data

        print(f"[INFO] Original image: {img.width}x{img.height} ({len(image_data)} bytes)")

        max_width = IMAGE_OPTIMIZATION['max_width']
        max_height = IMAGE_OPTIMIZATION['max_height']

        if img.width > max_width or img.height > max_height:
            # Keep aspect ratio
            ratio = min(max_width / img.width, max_height / img.height)
            new_size = (max(1, int(img.width * ratio)), max(1, int(img.height * ratio)))
            img = img.resize(new_size, Image.Resampling.LANCZOS)
            print(f"[INFO] Resized to: {new_size[0]}x{new_size[1]}")

        has_transparency = (
            (img.mode in ('RGBA', 'LA', 'P') and 'transparency' in img.info) or
            (img.mode == 'RGBA' and img.getextrema()[3][0] < 255)
        )

        output_buffer = io.BytesIO()
        if has_transparency and IMAGE_OPTIMIZATION['preserve_transparency']:
            if img.mode != 'RGBA':
                img = img.convert('RGBA')
            img.save(output_buffer, format='PNG', optimize=True)
        else:
            if img.mode in ('RGBA', 'LA', 'P'):
                # JPEG has no alpha channel, flatten onto white
                img = img.convert('RGBA')
                background = Image.new('RGB', img.size, (255, 255, 255))
                background.paste(img, mask=img.split()[-1])
                img = background
            elif img.mode != 'RGB':
                img = img.convert('RGB')
            img.save(output_buffer, format='JPEG', quality=IMAGE_OPTIMIZATION['jpeg_quality'], optimize=True)

        optimized_data = output_buffer.getvalue()
        print(f"[INFO] Optimized: {len(optimized_data)} bytes")
        return optimized_data

    @retry_with_backoff
    def upload(self, image_data):
        """Upload an image to Imgur.

        Args:
            image_data: Image content as bytes (a str is sent UTF-8 encoded)

        Returns:
            Public link of the uploaded image

        Raises:
            ImageUploadError: If Imgur rejects the upload
        """
        response = requests.post(
            self.upload_url,
            data=self._to_bytes(image_data),
            headers={
                'Authorization': f'Client-ID {self.client_id}',
                'Content-Type': 'application/octet-stream',
            },
            timeout=REQUEST_TIMEOUT
        )

        if not response.ok:
            raise ImageUploadError(
                f"Failed to upload image: {response.reason}",
                status_code=response.status_code,
                retry_after=response.headers.get('Retry-After')
            )

        link = response.json()['data']['link']
        print(f"[INFO] Successfully uploaded image to Imgur: {link}")
        return link

    def upload_file(self, path, optimize=False):
        """Read an image file and upload it to Imgur.

        Args:
            path: Path to the image file
            optimize: Resize and re-encode the image before uploading

        Returns:
            Public link of the uploaded image
        """
        with open(path, 'rb') as file:
            image_data = file.read()

        if optimize:
            image_data = self.optimize_image(image_data)

        return self.upload(image_data)


def upload_to_imgur(image_data):
    """Upload an image to Imgur with the configured client ID.

    Args:
        image_data: Image content as bytes, bytearray, memoryview or str

    Returns:
        Public link of the uploaded image
    """
    return ImgurUploader().upload(image_data)
