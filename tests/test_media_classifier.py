from __future__ import annotations

import pytest

from core.storage.classifier import classify, extension_of, file_name_for, resolve_content_type
from core.storage.types import FileDescriptor, MediaCategory


@pytest.mark.parametrize(
    "name, expected",
    [
        ("photo.PNG", MediaCategory.IMAGES),
        ("logo.svg", MediaCategory.IMAGES),
        ("favicon.ico", MediaCategory.IMAGES),
        ("holiday.webp", MediaCategory.IMAGES),
        ("clip.mkv", MediaCategory.MEDIA),
        ("talk.MP4", MediaCategory.MEDIA),
        ("song.flac", MediaCategory.MEDIA),
        ("voice.m4a", MediaCategory.MEDIA),
        ("report.pdf", MediaCategory.FILES),
        ("notes.txt", MediaCategory.FILES),
        ("Makefile", MediaCategory.FILES),
    ],
)
def test_classify_by_extension(name: str, expected: MediaCategory):
    assert classify(FileDescriptor(name=name)) == expected


@pytest.mark.parametrize(
    "declared_type, expected",
    [
        ("image/heic", MediaCategory.IMAGES),
        ("video/x-custom", MediaCategory.MEDIA),
        ("audio/x-custom", MediaCategory.MEDIA),
        ("application/x-custom", MediaCategory.FILES),
    ],
)
def test_declared_type_routes_files_without_a_known_extension(declared_type: str, expected: MediaCategory):
    assert classify(FileDescriptor(name="upload", type=declared_type)) == expected


def test_extension_lookup_wins_over_declared_type():
    assert classify(FileDescriptor(name="report.pdf", type="image/png")) == MediaCategory.FILES


def test_classify_uses_path_when_name_is_missing():
    descriptor = FileDescriptor(path="/tmp/uploads/song.mp3")

    assert file_name_for(descriptor) == "song.mp3"
    assert classify(descriptor) == MediaCategory.MEDIA


def test_path_extension_classifies_when_name_has_none():
    descriptor = FileDescriptor(name="upload", path="/tmp/x.png")

    assert classify(descriptor) == MediaCategory.IMAGES
    assert resolve_content_type(descriptor) == "image/png"


def test_path_lookup_wins_over_declared_type_when_name_has_no_extension():
    assert classify(FileDescriptor(name="upload", path="/tmp/clip.mp4", type="application/x-custom")) == MediaCategory.MEDIA


def test_empty_descriptor_falls_back_to_placeholder_name():
    descriptor = FileDescriptor()

    assert file_name_for(descriptor) == "file"
    assert classify(descriptor) == MediaCategory.FILES


def test_extension_of_is_lowercase_and_ignores_directories():
    assert extension_of("Photo.JPEG") == "jpeg"
    assert extension_of("dir.d/readme") == ""
    assert extension_of("archive.tar.gz") == "gz"


def test_resolve_content_type_prefers_lookup_then_declared_then_default():
    assert resolve_content_type(FileDescriptor(name="a.bin", path="/tmp/a.png", type="text/plain")) == "image/png"
    assert resolve_content_type(FileDescriptor(path="/tmp/upload-123", type="text/plain")) == "text/plain"
    assert resolve_content_type(FileDescriptor(path="/tmp/upload-123")) == "application/octet-stream"
