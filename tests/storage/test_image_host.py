import io
import os
import tempfile
import unittest
from unittest.mock import patch, MagicMock

from PIL import Image

from mediautils.storage import image_host
from mediautils.storage.image_host import ImgurUploader, upload_to_imgur
from mediautils.utils.errors import ImageUploadError


def make_image_bytes(size=(64, 48), mode='RGB', color=(200, 30, 30), fmt='PNG'):
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format=fmt)
    return buffer.getvalue()


def make_response(status_code=200, json_data=None, reason="OK"):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.reason = reason
    response.headers = {}
    response.json.return_value = json_data or {}
    return response


class TestImgurUpload(unittest.TestCase):

    def setUp(self):
        self.uploader = ImgurUploader(client_id="test-client")
        self.sleep_patch = patch('mediautils.utils.retry.time.sleep')
        self.sleep_patch.start()

    def tearDown(self):
        self.sleep_patch.stop()

    @patch('mediautils.storage.image_host.requests.post')
    def test_upload_returns_link(self, mock_post):
        mock_post.return_value = make_response(json_data={"data": {"link": "https://i.imgur.com/abc.png"}})

        link = self.uploader.upload(b"imagebytes")

        self.assertEqual(link, "https://i.imgur.com/abc.png")
        kwargs = mock_post.call_args.kwargs
        self.assertEqual(mock_post.call_args[0][0], "https://api.imgur.com/3/image")
        self.assertEqual(kwargs['data'], b"imagebytes")
        self.assertEqual(kwargs['headers']['Authorization'], "Client-ID test-client")
        self.assertEqual(kwargs['headers']['Content-Type'], "application/octet-stream")

    @patch('mediautils.storage.image_host.requests.post')
    def test_upload_accepts_str_and_bytearray(self, mock_post):
        mock_post.return_value = make_response(json_data={"data": {"link": "https://i.imgur.com/x.png"}})

        self.uploader.upload("text-data")
        self.assertEqual(mock_post.call_args.kwargs['data'], b"text-data")

        self.uploader.upload(bytearray(b"raw"))
        self.assertEqual(mock_post.call_args.kwargs['data'], b"raw")

    @patch('mediautils.storage.image_host.requests.post')
    def test_upload_failure(self, mock_post):
        mock_post.return_value = make_response(status_code=400, reason="Bad Request")

        with self.assertRaises(ImageUploadError) as ctx:
            self.uploader.upload(b"imagebytes")

        self.assertEqual(str(ctx.exception), "Failed to upload image: Bad Request")
        mock_post.assert_called_once()

    @patch('mediautils.storage.image_host.requests.post')
    def test_upload_to_imgur_uses_configured_client(self, mock_post):
        mock_post.return_value = make_response(json_data={"data": {"link": "https://i.imgur.com/y.png"}})

        self.assertEqual(upload_to_imgur(b"bytes"), "https://i.imgur.com/y.png")
        self.assertEqual(
            mock_post.call_args.kwargs['headers']['Authorization'],
            f"Client-ID {image_host.IMGUR_CLIENT_ID}"
        )

    @patch('mediautils.storage.image_host.requests.post')
    def test_upload_file_with_optimization(self, mock_post):
        mock_post.return_value = make_response(json_data={"data": {"link": "https://i.imgur.com/z.jpg"}})
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "photo.png")
            with open(path, 'wb') as file:
                file.write(make_image_bytes())

            self.uploader.upload_file(path, optimize=True)

        sent = mock_post.call_args.kwargs['data']
        self.assertEqual(Image.open(io.BytesIO(sent)).format, 'JPEG')


class TestOptimizeImage(unittest.TestCase):

    def setUp(self):
        self.uploader = ImgurUploader(client_id="test-client")
        self.settings_patch = patch.dict(image_host.IMAGE_OPTIMIZATION, {
            'enabled': True,
            'max_width': 100,
            'max_height': 100,
            'jpeg_quality': 80,
            'preserve_transparency': True,
        })
        self.settings_patch.start()

    def tearDown(self):
        self.settings_patch.stop()

    def test_resizes_keeping_aspect_ratio(self):
        optimized = self.uploader.optimize_image(make_image_bytes(size=(400, 200)))

        img = Image.open(io.BytesIO(optimized))
        self.assertEqual(img.size, (100, 50))
        self.assertEqual(img.format, 'JPEG')

    def test_transparent_image_stays_png(self):
        data = make_image_bytes(size=(50, 50), mode='RGBA', color=(0, 0, 0, 0))

        img = Image.open(io.BytesIO(self.uploader.optimize_image(data)))

        self.assertEqual(img.format, 'PNG')
        self.assertEqual(img.mode, 'RGBA')

    def test_undecodable_data_is_returned_unchanged(self):
        self.assertEqual(self.uploader.optimize_image(b"not an image"), b"not an image")

    def test_disabled_optimization(self):
        data = make_image_bytes(size=(400, 200))
        with patch.dict(image_host.IMAGE_OPTIMIZATION, {'enabled': False}):
            self.assertEqual(self.uploader.optimize_image(data), data)


if __name__ == '__main__':
    unittest.main()
