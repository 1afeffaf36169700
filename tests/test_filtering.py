from __future__ import annotations

import pytest

from themesync.errors import IgnoreFileError
from themesync.filtering import FileFilter, drop_shadowed_keys


def test_drop_shadowed_keys_prefers_liquid_in_any_order():
    assert drop_shadowed_keys(["templates/foo.json", "templates/foo.json.liquid"]) == ["templates/foo.json.liquid"]
    assert drop_shadowed_keys(["templates/foo.json.liquid", "templates/foo.json"]) == ["templates/foo.json.liquid"]


def test_drop_shadowed_keys_keeps_order_of_unrelated_keys():
    keys = ["assets/b.css", "assets/a.css.liquid", "assets/a.css", "layout/theme.liquid"]

    assert drop_shadowed_keys(keys) == ["assets/b.css", "assets/a.css.liquid", "layout/theme.liquid"]


@pytest.mark.parametrize(
    ("pattern", "path", "expected"),
    [
        ("templates/ignore.html.liquid", "templates/ignore.html.liquid", True),
        ("templates/ignore.html.liquid", "templates/other.liquid", False),
        ("*.bak", "assets/style.css.bak", True),
        ("*.bak", "assets/style.css", False),
        ("snippets/", "snippets/header.liquid", True),
        ("snippets/", "sections/header.liquid", False),
        ("/\\.min\\.js$/", "assets/app.min.js", True),
        ("/\\.min\\.js$/", "assets/app.js", False),
        ("settings_data.json", "config/settings_data.json", True),
    ],
)
def test_match_supports_globs_directories_and_expressions(pattern, path, expected):
    assert FileFilter([pattern], include_defaults=False).match(path) is expected


@pytest.mark.parametrize(
    "path",
    [
        ".git/HEAD",
        "assets/.DS_Store",
        "config.yml",
        ".env",
        ".env.production",
        "node_modules/lib/index.js",
        "project.sublime-project",
    ],
)
def test_default_patterns(path):
    assert FileFilter().match(path) is True


def test_defaults_can_be_disabled():
    assert FileFilter(include_defaults=False).match("config.yml") is False


def test_filter_keys_ignores_before_resolving_shadowing():
    file_filter = FileFilter(["templates/ignore.html.liquid"])
    keys = ["templates/ignore.html.liquid", "templates/other.liquid", "templates/foo", "templates/foo.liquid"]

    assert file_filter.filter_keys(keys) == ["templates/other.liquid", "templates/foo.liquid"]


def test_ignore_files_are_read(tmp_path):
    ignore_file = tmp_path / "themeignore"
    ignore_file.write_text("# comment\n\n*.bak\n/\\.tmp$/\n")

    file_filter = FileFilter(ignore_files=[ignore_file], include_defaults=False)

    assert file_filter.patterns == ("*.bak", "/\\.tmp$/")
    assert file_filter.match("assets/a.bak") is True
    assert file_filter.match("assets/a.tmp") is True
    assert file_filter.match("assets/a.css") is False


def test_missing_ignore_file_raises(tmp_path):
    with pytest.raises(IgnoreFileError, match="Could not read ignore file"):
        FileFilter(ignore_files=[tmp_path / "nope"])


def test_invalid_expression_raises():
    with pytest.raises(IgnoreFileError, match="Invalid ignore expression"):
        FileFilter(["/([a-z/"], include_defaults=False)
