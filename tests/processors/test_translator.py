import unittest
from unittest.mock import patch, MagicMock, ANY

from mediautils.processors.translator import DeepLTranslator, translate_text_via_deepl
from mediautils.utils.errors import ConfigurationError, TranslationError

TEST_API_KEY = "deepl-test-key"
TEST_API_URL = "https://api-free.deepl.com/v2/translate"


def make_response(status_code=200, json_data=None, headers=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = json_data if json_data is not None else {}
    response.headers = headers or {}
    return response


class TestDeepLTranslator(unittest.TestCase):

    def setUp(self):
        self.translator = DeepLTranslator(api_key=TEST_API_KEY, api_url=TEST_API_URL)
        # Keep retries from sleeping
        self.sleep_patch = patch('mediautils.utils.retry.time.sleep')
        self.mock_sleep = self.sleep_patch.start()

    def tearDown(self):
        self.sleep_patch.stop()

    @patch('mediautils.processors.translator.requests.post')
    def test_translate_success(self, mock_post):
        mock_post.return_value = make_response(json_data={
            "translations": [{"detected_source_language": "EN", "text": "Hallo Welt"}]
        })

        result = self.translator.translate("Hello world", "DE")

        self.assertEqual(result, "Hallo Welt")
        mock_post.assert_called_once_with(
            TEST_API_URL,
            headers={
                'Content-Type': 'application/json',
                'Authorization': f'DeepL-Auth-Key {TEST_API_KEY}',
            },
            json={'text': ["Hello world"], 'target_lang': "DE"},
            timeout=ANY
        )

    @patch('mediautils.processors.translator.requests.post')
    def test_translate_http_error(self, mock_post):
        mock_post.return_value = make_response(status_code=403)

        with self.assertRaises(TranslationError) as ctx:
            self.translator.translate("Hello", "DE")

        self.assertEqual(ctx.exception.status_code, 403)
        self.assertIn("403", str(ctx.exception))
        mock_post.assert_called_once()

    @patch('mediautils.processors.translator.requests.post')
    def test_translate_no_translations(self, mock_post):
        mock_post.return_value = make_response(json_data={"translations": []})

        with self.assertRaises(TranslationError) as ctx:
            self.translator.translate("Hello", "DE")

        self.assertEqual(str(ctx.exception), "No translation received from the API.")

    @patch('mediautils.processors.translator.requests.post')
    def test_translate_retries_server_errors(self, mock_post):
        mock_post.side_effect = [
            make_response(status_code=503),
            make_response(json_data={"translations": [{"text": "Bonjour"}]}),
        ]

        self.assertEqual(self.translator.translate("Hello", "FR"), "Bonjour")
        self.assertEqual(mock_post.call_count, 2)
        self.mock_sleep.assert_called_once()

    def test_missing_api_key(self):
        translator = DeepLTranslator(api_key="", api_url=TEST_API_URL)
        translator.api_key = ""
        with self.assertRaises(ConfigurationError):
            translator.translate("Hello", "DE")

    @patch('mediautils.processors.translator.requests.post')
    def test_translate_long_text_translates_each_paragraph(self, mock_post):
        mock_post.side_effect = lambda url, headers, json, timeout: make_response(
            json_data={"translations": [{"text": json['text'][0].upper()}]}
        )
        text = "first chunk of words\nsecond chunk of words"

        result = self.translator.translate_long_text(text, "DE", max_chars=25)

        self.assertEqual(result, "FIRST CHUNK OF WORDS\nSECOND CHUNK OF WORDS")
        self.assertEqual(mock_post.call_count, 2)
        sent = [c.kwargs['json']['text'][0] for c in mock_post.call_args_list]
        self.assertEqual(sent, ["first chunk of words", "second chunk of words"])

    @patch('mediautils.processors.translator.requests.post')
    def test_translate_long_text_empty_input_skips_request(self, mock_post):
        self.assertEqual(self.translator.translate_long_text("", "DE"), "")
        mock_post.assert_not_called()

    @patch('mediautils.processors.translator.requests.post')
    def test_translate_text_via_deepl(self, mock_post):
        mock_post.return_value = make_response(json_data={"translations": [{"text": "Hola"}]})

        self.assertEqual(translate_text_via_deepl("Hello", "ES", TEST_API_KEY), "Hola")
        headers = mock_post.call_args.kwargs['headers']
        self.assertEqual(headers['Authorization'], f'DeepL-Auth-Key {TEST_API_KEY}')


if __name__ == '__main__':
    unittest.main()
