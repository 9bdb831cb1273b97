import re

import responses

from iconsync.errors import FailureReason, Found, NotFound
from iconsync.registry import RepositoryScan
from iconsync.resolvers.repository import (
    KNOWN_ICON_PATHS,
    rank_candidates,
    resolve_repository,
    score_path,
)

API = "https://api.github.com/repos/owner/repo"
CONTENTS = re.compile(r"https://api\.github\.com/repos/owner/repo/contents/.*")


def test_packaging_icon_beats_screenshot():
    packaging = "src-tauri/icons/icon.png"
    screenshot = "docs/screenshot.png"
    assert score_path(packaging) > score_path(screenshot)
    ranked = rank_candidates(
        [{"path": screenshot, "type": "blob"}, {"path": packaging, "type": "blob"}]
    )
    assert ranked[0].path == packaging


def test_size_tokens_differ_by_twelve():
    assert score_path("res/icon_512.png") - score_path("res/icon_128.png") == 12


def test_only_largest_size_token_counts():
    # "1024" wins before "512" is considered
    assert score_path("x/1024-512.png") == score_path("x/1024.png")


def test_extension_bonus_is_exclusive():
    assert score_path("a.png") == 30
    assert score_path("a.svg") == 18
    assert score_path("a.icns") == 8
    assert score_path("a.ico") == 8


def test_keywords_are_additive():
    # icons dir + /icons/ + icon + png + 128 hint
    assert score_path("src-tauri/icons/128x128.png") == 60 + 40 + 20 + 30 + 4
    assert score_path("web/favicon.ico") == 20 + 10 + 8


def test_penalty_applied_once():
    assert score_path("store/screenshots/banner.png") == 30 - 50


def test_rank_skips_trees_and_non_images():
    tree = [
        {"path": "src-tauri/icons", "type": "tree"},
        {"path": "README.md", "type": "blob"},
        {"path": "assets/Logo.SVG", "type": "blob"},
    ]
    assert [c.path for c in rank_candidates(tree)] == ["assets/Logo.SVG"]


def test_known_path_short_circuits_tree_scan(client):
    dl = "https://raw.githubusercontent.com/owner/repo/main/icon.png"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, f"{API}/contents/icon.png", json={"download_url": dl})
        result = resolve_repository(client, RepositoryScan("owner", "repo"))
        assert len(rsps.calls) == 1
    assert result == Found(dl, "github:owner/repo")


def test_known_paths_tried_in_order(client):
    dl = "https://raw.githubusercontent.com/owner/repo/main/app/src/main/ic_launcher.png"
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.GET,
            f"{API}/contents/app/src/main/ic_launcher.png",
            json={"download_url": dl},
        )
        rsps.add(responses.GET, CONTENTS, status=404)
        result = resolve_repository(client, RepositoryScan("owner", "repo"))
        urls = [c.request.url for c in rsps.calls]
    assert isinstance(result, Found) and result.url == dl
    assert urls[-1].endswith("app/src/main/ic_launcher.png")
    assert len(urls) == KNOWN_ICON_PATHS.index("app/src/main/ic_launcher.png") + 1


def test_tree_scan_fallback(client):
    tree = {
        "tree": [
            {"path": "docs/screenshots/home.png", "type": "blob"},
            {"path": "src-tauri/icons/512x512.png", "type": "blob"},
            {"path": "web/favicon.ico", "type": "blob"},
        ]
    }
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, CONTENTS, status=404)
        rsps.add(responses.GET, API, json={"default_branch": "dev"})
        rsps.add(responses.GET, f"{API}/git/trees/dev", json=tree)
        result = resolve_repository(client, RepositoryScan("owner", "repo"))
        tree_call = rsps.calls[-1].request
    assert result == Found(
        "https://raw.githubusercontent.com/owner/repo/dev/src-tauri/icons/512x512.png",
        "github:owner/repo",
    )
    assert "recursive=1" in tree_call.url
    assert tree_call.headers["Accept"] == "application/vnd.github+json"


def test_missing_default_branch_falls_back_to_main(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, CONTENTS, status=404)
        rsps.add(responses.GET, API, json={})
        rsps.add(
            responses.GET,
            f"{API}/git/trees/main",
            json={"tree": [{"path": "logo.svg", "type": "blob"}]},
        )
        result = resolve_repository(client, RepositoryScan("owner", "repo"))
    assert isinstance(result, Found)
    assert result.url.endswith("/owner/repo/main/logo.svg")


def test_no_icon_in_repository(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, CONTENTS, status=404)
        rsps.add(responses.GET, API, json={"default_branch": "main"})
        rsps.add(
            responses.GET,
            f"{API}/git/trees/main",
            json={"tree": [{"path": "README.md", "type": "blob"}]},
        )
        result = resolve_repository(client, RepositoryScan("owner", "repo"))
    assert isinstance(result, NotFound)
    assert result.reason is FailureReason.NO_ICON_IN_REPOSITORY


def test_repository_metadata_failure(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, CONTENTS, status=404)
        rsps.add(responses.GET, API, status=404, json={"message": "Not Found"})
        result = resolve_repository(client, RepositoryScan("owner", "repo"))
    assert isinstance(result, NotFound)
    assert result.reason is FailureReason.NO_ICON_IN_REPOSITORY


def test_rank_ignores_malformed_entries():
    tree = [None, "icon.png", ["x"], {"path": "icon.png", "type": "blob"}]
    assert [c.path for c in rank_candidates(tree)] == ["icon.png"]
