import responses
from responses import matchers

from config import BROWSER_USER_AGENT
from iconsync.errors import FailureReason, Found, NotFound
from iconsync.registry import StorefrontScrape
from iconsync.resolvers.storefront import extract_og_image, resolve_storefront

PLAY = "https://play.google.com/store/apps/details"

PAGE = """
<html><head>
<meta property="og:title" content="Hiddify">
<meta property="og:image" content="https://play-lh.googleusercontent.com/abc=w526-h296&amp;rw">
<meta property="og:image" content="https://example.com/second.png">
</head></html>
"""


def test_extract_first_og_image_unescaped():
    assert extract_og_image(PAGE) == "https://play-lh.googleusercontent.com/abc=w526-h296&rw"


def test_extract_tolerates_single_quotes():
    page = "<meta  property='og:image'  content='https://x/icon.png' />"
    assert extract_og_image(page) == "https://x/icon.png"


def test_resolve_storefront(client):
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.GET,
            PLAY,
            body=PAGE,
            match=[
                matchers.query_param_matcher({"id": "com.vpn4tv.hiddify", "hl": "en", "gl": "US"}),
                matchers.header_matcher({"User-Agent": BROWSER_USER_AGENT}),
            ],
        )
        result = resolve_storefront(client, StorefrontScrape("com.vpn4tv.hiddify"))
    assert isinstance(result, Found)
    assert result.provenance == "play:com.vpn4tv.hiddify"


def test_missing_preview_image(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, PLAY, body="<html><head></head></html>")
        result = resolve_storefront(client, StorefrontScrape("com.example"))
    assert isinstance(result, NotFound)
    assert result.reason is FailureReason.PREVIEW_IMAGE_NOT_FOUND


def test_page_error(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, PLAY, status=404)
        result = resolve_storefront(client, StorefrontScrape("com.example"))
    assert isinstance(result, NotFound)
    assert result.reason is FailureReason.PREVIEW_IMAGE_NOT_FOUND
