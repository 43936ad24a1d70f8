#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

import os
import tempfile
from pathlib import Path
from unittest import TestCase
from unittest.mock import patch

import pydantic
import pytest

from xformview.auth import AuthConfig, get_auth_headers
from xformview.config import ViewerConfig
from xformview.defaults import DEFAULT_CONFIG_PATH


class ViewerConfigTest(TestCase):
    def setUp(self):
        environ = {
            k: v for k, v in os.environ.items() if not k.startswith("XFORMVIEW_")
        }
        self.environ_patch = patch.dict(os.environ, environ, clear=True)
        self.environ_patch.start()

    def tearDown(self):
        self.environ_patch.stop()

    def test_ctor(self):
        config = ViewerConfig()
        self.assertEqual(None, config.api_url)
        self.assertEqual(None, config.auth_type)
        self.assertEqual(20, config.page_size)
        self.assertEqual(0.5, config.debounce_window)
        self.assertEqual(30.0, config.timeout)

    def test_validation(self):
        with pytest.raises(pydantic.ValidationError):
            ViewerConfig(debounce_window=-1)
        with pytest.raises(pydantic.ValidationError):
            ViewerConfig(timeout=0)
        with pytest.raises(pydantic.ValidationError):
            ViewerConfig(page_sizes=[10])

    def test_effective_page_size(self):
        self.assertEqual(50, ViewerConfig(page_size=50).effective_page_size)
        self.assertEqual(20, ViewerConfig(page_size=13).effective_page_size)

    def test_create_empty(self):
        with tempfile.TemporaryDirectory() as tmp_dir_name:
            config_path = Path(tmp_dir_name) / "config"
            config = ViewerConfig.create(config_path=config_path)
            self.assertIsInstance(config, ViewerConfig)
            self.assertEqual("http://127.0.0.1:9200", config.api_url)
            self.assertEqual(None, config.auth_type)

    def test_create_from_env(self):
        os.environ.update(
            dict(
                XFORMVIEW_API_URL="https://search.pippo.org",
                XFORMVIEW_AUTH_TYPE="basic",
                XFORMVIEW_USERNAME="pippo",
                XFORMVIEW_PASSWORD="poppi",
                XFORMVIEW_PAGE_SIZE="50",
            )
        )
        with tempfile.TemporaryDirectory() as tmp_dir_name:
            config_path = Path(tmp_dir_name) / "config"
            config = ViewerConfig.create(config_path=config_path)
            self.assertEqual("https://search.pippo.org", config.api_url)
            self.assertEqual("basic", config.auth_type)
            self.assertEqual("pippo", config.username)
            self.assertEqual(50, config.page_size)

    def test_create_from_file(self):
        config = ViewerConfig(api_url="https://search.pippo.org", page_size=10)
        with tempfile.TemporaryDirectory() as tmp_dir_name:
            config_path = Path(tmp_dir_name) / "config"
            self.assertEqual(config_path, config.write(config_path=config_path))
            config = ViewerConfig.create(config_path=config_path)
            self.assertEqual("https://search.pippo.org", config.api_url)
            self.assertEqual(10, config.page_size)

    def test_create_precedence(self):
        os.environ.update(
            dict(
                # Should take precedence over file
                XFORMVIEW_API_URL="https://search.test.org",
            )
        )
        config = ViewerConfig(api_url="https://search.pippo.org")
        with tempfile.TemporaryDirectory() as tmp_dir_name:
            config_path = Path(tmp_dir_name) / "config"
            config.write(config_path=config_path)
            config = ViewerConfig.create(config_path=config_path)
            self.assertEqual("https://search.test.org", config.api_url)
            config = ViewerConfig.create(
                config_path=config_path, api_url="https://search.kwargs.org"
            )
            self.assertEqual("https://search.kwargs.org", config.api_url)

    def test_from_missing_or_empty_file(self):
        with tempfile.TemporaryDirectory() as tmp_dir_name:
            config_path = Path(tmp_dir_name) / "config"
            self.assertIsNone(ViewerConfig.from_file(config_path))
            config_path.write_text("")
            self.assertIsNone(ViewerConfig.from_file(config_path))

    def test_normalize_config_path(self):
        path = Path("i/am/a/path")
        self.assertIs(path, ViewerConfig.normalize_config_path(path))
        self.assertEqual(path, ViewerConfig.normalize_config_path("i/am/a/path"))
        self.assertEqual(DEFAULT_CONFIG_PATH, ViewerConfig.normalize_config_path(""))

    def test_get_set_get_default(self):
        d1 = ViewerConfig.get_default()
        self.assertEqual({"api_url": "http://127.0.0.1:9200"}, d1.to_dict())
        d2 = ViewerConfig.set_default(ViewerConfig(api_url="http://pippo.org"))
        try:
            self.assertEqual(d1, d2)
            self.assertEqual(
                {"api_url": "http://pippo.org"}, ViewerConfig.get_default().to_dict()
            )
        finally:
            ViewerConfig.set_default(d2)


class AuthHeadersTest(TestCase):
    def test_none(self):
        self.assertEqual({}, get_auth_headers(AuthConfig()))
        self.assertEqual({}, get_auth_headers(AuthConfig(auth_type="none")))

    def test_basic(self):
        self.assertEqual(
            {"Authorization": "Basic cGlwcG86cG9wcGk="},
            AuthConfig(
                auth_type="basic", username="pippo", password="poppi"
            ).auth_headers,
        )
        with pytest.raises(ValueError, match="username/password"):
            get_auth_headers(AuthConfig(auth_type="basic", username="pippo"))

    def test_token(self):
        self.assertEqual(
            {"X-Auth-Token": "t0k3n"},
            get_auth_headers(AuthConfig(auth_type="token", token="t0k3n")),
        )
        self.assertEqual(
            {"Authorization": "Bearer t0k3n"},
            get_auth_headers(
                AuthConfig(auth_type="token", token="t0k3n", use_bearer=True)
            ),
        )
        with pytest.raises(ValueError, match="Missing API token"):
            get_auth_headers(AuthConfig(auth_type="token"))

    def test_api_key(self):
        self.assertEqual(
            {"X-API-Key": "k3y"},
            get_auth_headers(AuthConfig(auth_type="api-key", api_key="k3y")),
        )
        with pytest.raises(ValueError, match="api_key must be set"):
            get_auth_headers(AuthConfig(auth_type="api-key"))
