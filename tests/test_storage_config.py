from __future__ import annotations

from decimal import Decimal

import pytest

from core.storage.config import DEFAULT_MAX_AGE, GCSConfig, parse_max_age


def test_from_options_reads_host_configuration_keys():
    config = GCSConfig.from_options(
        {
            "projectId": "my-project",
            "key": "/secrets/gcs.json",
            "bucket": "demo",
            "assetDomain": "https://cdn.example.com/demo",
            "insecure": "true",
            "maxAge": "3600",
            "basePath": "blog",
            "uploadFolderPath": "content/images",
        }
    )

    assert config == GCSConfig(
        bucket="demo",
        project_id="my-project",
        key_filename="/secrets/gcs.json",
        asset_domain="https://cdn.example.com/demo",
        insecure=True,
        max_age=3600,
        base_path="blog",
        upload_folder_path="content/images",
    )
    assert config.cache_control == "public, max-age=3600"


def test_from_options_prefers_key_filename_over_key():
    config = GCSConfig.from_options({"bucket": "demo", "key": "a.json", "keyFilename": "b.json"})

    assert config.key_filename == "b.json"


def test_from_options_defaults():
    config = GCSConfig.from_options({"bucket": "demo"})

    assert config.insecure is False
    assert config.max_age == DEFAULT_MAX_AGE
    assert config.asset_domain is None


def test_from_options_keeps_fractional_max_age_strings():
    config = GCSConfig.from_options({"bucket": "demo", "maxAge": "86400.0"})

    assert config.max_age == 86400
    assert config.cache_control == "public, max-age=86400"


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, DEFAULT_MAX_AGE),
        ("abc", DEFAULT_MAX_AGE),
        ("", DEFAULT_MAX_AGE),
        (True, DEFAULT_MAX_AGE),
        ("120", 120),
        (" 45 ", 45),
        (0, 0),
        (600, 600),
        (3600.0, 3600),
        (Decimal("7200"), 7200),
        ("86400.0", 86400),
        ("1e3", 1000),
        ("inf", DEFAULT_MAX_AGE),
        ("nan", DEFAULT_MAX_AGE),
    ],
)
def test_parse_max_age(value, expected):
    assert parse_max_age(value) == expected
