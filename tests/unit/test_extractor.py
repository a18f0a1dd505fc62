from bs4 import BeautifulSoup

from web_version_tracker import extractor
from web_version_tracker.extractor import extract_config_blob, find_web_player_url

from conftest import make_page


def test_plain_text_script_wins_over_other_matches():
    html = (
        '<div id="appServerConfig">from-div</div>'
        '<script id="appServerConfig" type="text/plain">  from-plain  </script>'
    )
    result = extract_config_blob(html)
    assert result.blob == "from-plain"
    assert result.strategy == 'script[id="appServerConfig"][type="text/plain"]'


def test_script_with_other_type_is_second_choice():
    html = (
        '<div id="appServerConfig">from-div</div>'
        '<script id="appServerConfig" type="application/json">\n  from-script\n</script>'
    )
    result = extract_config_blob(html)
    assert result.blob == "from-script"
    assert result.strategy == 'script[id="appServerConfig"]'


def test_any_element_with_id_is_third_choice():
    html = '<main><div id="appServerConfig"> <span>abc</span>def </div></main>'
    result = extract_config_blob(html)
    assert result.blob == "abcdef"
    assert result.strategy == "#appServerConfig"


def test_regex_fallback_captures_tag_content():
    soup = BeautifulSoup("", "html.parser")
    html = '<script nonce="x" id="appServerConfig" data-x="1"> eyJhIjoxfQ== </script>'
    assert extractor._by_regex(soup, html) == "eyJhIjoxfQ=="
    assert extractor._by_regex(soup, "<script id=\"other\">abc</script>") is None


def test_regex_finds_tag_the_parser_treats_as_comment():
    html = "<html><head><!-- <script id=\"appServerConfig\">QUJD</script> --></head></html>"
    result = extract_config_blob(html)
    assert result.blob == "QUJD"
    assert result.strategy == "regex"


def test_regex_strategy_used_when_structured_ones_miss(monkeypatch):
    monkeypatch.setattr(
        extractor,
        "BLOB_STRATEGIES",
        [("never", lambda soup, html: None), ("regex", extractor._by_regex)],
    )
    result = extract_config_blob('<script id="appServerConfig">QUJD</script>')
    assert result.blob == "QUJD"
    assert result.strategy == "regex"


def test_missing_config_tag_gives_no_blob():
    result = extract_config_blob("<html><body><p>nothing here</p></body></html>")
    assert result.blob is None
    assert result.strategy is None


def test_whitespace_only_tag_gives_empty_blob():
    result = extract_config_blob(make_page(blob="   \n\t "))
    assert result.blob == ""


def test_web_player_is_first_matching_script_in_document_order():
    html = make_page(
        blob="QUJD",
        scripts=[
            "https://cdn.test/vendor.js",
            "https://cdn.test/web-player.js.map",
            "https://cdn.test/web-player/web-player.111.js",
            "https://cdn.test/web-player/web-player.222.js",
        ],
    )
    assert extract_config_blob(html).web_player_url == "https://cdn.test/web-player/web-player.111.js"


def test_web_player_absent_is_not_an_error():
    result = extract_config_blob(make_page(blob="QUJD", scripts=["https://cdn.test/app.js"]))
    assert result.blob == "QUJD"
    assert result.web_player_url is None


def test_inline_scripts_are_skipped_for_web_player():
    soup = BeautifulSoup("<script>var x = 'web-player.js';</script>", "html.parser")
    assert find_web_player_url(soup) is None
