"""Test the marketplace price/logo extraction cascade."""

import pytest
from bs4 import BeautifulSoup

from portfolio_api.services.atom_pricing.extractor import (
    MAX_JSON_DEPTH,
    extract_logo,
    extract_price_and_logo,
)
from portfolio_api.services.atom_pricing.models import PRICE_REQUEST, ExtractionResult


def _page(head: str = "", body: str = "") -> str:
    return f"<html><head>{head}</head><body>{body}</body></html>"


def _json_ld(payload: str) -> str:
    return f'<script type="application/ld+json">{payload}</script>'


class TestRequestMarker:
    """The explicit "Price Request" text wins over everything else."""

    def test_marker_overrides_structured_price(self) -> None:
        html = _page(
            head=_json_ld('{"@type": "Product", "offers": {"price": "950"}}')
            + '<meta itemprop="price" content="1288">',
            body="<div>Price Request</div>",
        )

        result = extract_price_and_logo(html)

        assert result.price == PRICE_REQUEST
        assert result.is_request is True

    @pytest.mark.parametrize(
        "text", ["price request", "REQUEST PRICE", "Price   Request", "Request\nPrice"]
    )
    def test_marker_is_case_and_whitespace_tolerant(self, text: str) -> None:
        result = extract_price_and_logo(_page(body=f"<p>{text}</p><p>$10</p>"))

        assert result.price == PRICE_REQUEST

    def test_marker_still_reports_logo(self) -> None:
        html = _page(
            head='<meta property="og:image" content="https://cdn.atom.com/chic.png">',
            body="<button>Request Price</button>",
        )

        result = extract_price_and_logo(html)

        assert result.is_request is True
        assert result.logo == "https://cdn.atom.com/chic.png"


class TestJsonLd:
    """Structured data is the preferred price source."""

    @pytest.mark.parametrize(
        "payload",
        [
            '{"@type": "Product", "offers": {"price": "950"}}',
            '{"@type": "Product", "offers": {"price": 950}}',
            '{"@type": "Product", "offers": [{"price": "950"}, {"price": "10"}]}',
            '{"price": " 950 "}',
        ],
    )
    def test_price_is_dollar_prefixed(self, payload: str) -> None:
        result = extract_price_and_logo(_page(head=_json_ld(payload)))

        assert result == ExtractionResult(price="$950")
        assert result.is_request is False

    def test_existing_dollar_sign_is_kept(self) -> None:
        html = _page(head=_json_ld('{"offers": {"price": "$1,288"}}'))

        assert extract_price_and_logo(html).price == "$1,288"

    @pytest.mark.parametrize(
        ("number", "expected"),
        [("1288.00", "$1288"), ("1e3", "$1000"), ("950.50", "$950.5"), ("-0.0", "$0")],
    )
    def test_numeric_price_is_rendered_as_displayed(self, number: str, expected: str) -> None:
        html = _page(head=_json_ld('{"offers": {"price": ' + number + "}}"))

        assert extract_price_and_logo(html).price == expected

    def test_nested_graph_is_walked(self) -> None:
        payload = (
            '{"@context": "https://schema.org", "@graph": ['
            '{"@type": "WebPage", "name": "ChicDrift"},'
            '{"@type": "Product", "offers": {"@type": "Offer", "price": "2500"}}'
            "]}"
        )

        assert extract_price_and_logo(_page(head=_json_ld(payload))).price == "$2500"

    def test_first_object_in_document_order_wins(self) -> None:
        payload = '[{"name": "a", "price": "100"}, {"offers": {"price": "200"}}]'

        assert extract_price_and_logo(_page(head=_json_ld(payload))).price == "$100"

    def test_empty_offer_price_falls_back_to_own_price(self) -> None:
        payload = '{"offers": {"price": "  "}, "price": "42"}'

        assert extract_price_and_logo(_page(head=_json_ld(payload))).price == "$42"

    def test_malformed_block_does_not_stop_later_blocks(self) -> None:
        html = _page(
            head=_json_ld('{"offers": {"price": ')
            + _json_ld('{"@type": "Organization"}')
            + _json_ld('{"offers": {"price": "777"}}')
        )

        assert extract_price_and_logo(html).price == "$777"

    def test_deeply_nested_price_is_ignored_without_error(self) -> None:
        depth = MAX_JSON_DEPTH + 10
        payload = '{"a": ' * depth + '{"price": "5"}' + "}" * depth

        result = extract_price_and_logo(_page(head=_json_ld(payload)))

        assert result.price == PRICE_REQUEST

    def test_pathological_nesting_does_not_raise(self) -> None:
        payload = "[" * 5_000 + "]" * 5_000

        result = extract_price_and_logo(_page(head=_json_ld(payload)))

        assert result.price == PRICE_REQUEST


class TestMetaAndSpan:
    def test_meta_price_is_dollar_prefixed(self) -> None:
        html = _page(head='<meta itemprop="price" content="1288">')

        result = extract_price_and_logo(html)

        assert result.price == "$1288"
        assert result.is_request is False

    def test_meta_attribute_names_are_case_insensitive(self) -> None:
        html = _page(head='<META ITEMPROP="price" CONTENT="1288">')

        assert extract_price_and_logo(html).price == "$1288"

    def test_blank_meta_price_is_skipped(self) -> None:
        html = _page(head='<meta itemprop="price" content="  ">', body="<p>no offer</p>")

        assert extract_price_and_logo(html).price == PRICE_REQUEST

    def test_span_text_is_returned_verbatim(self) -> None:
        html = _page(body='<span class="big price-show">1,288 <small>USD</small></span>')

        assert extract_price_and_logo(html).price == "1,288 USD"

    def test_span_text_includes_nested_tags_and_decoded_entities(self) -> None:
        html = _page(body='<span class="price-show"><span>$1</span>&nbsp;USD</span>')

        assert extract_price_and_logo(html).price == "$1\xa0USD"

    def test_span_request_text_split_by_tags(self) -> None:
        html = _page(body='<span class="price-show">Price <b>Request</b></span>$20')

        assert extract_price_and_logo(html).price == PRICE_REQUEST

    def test_span_without_digits_falls_through(self) -> None:
        html = _page(body='<span class="price-show">Make an offer</span><p>Only $450</p>')

        assert extract_price_and_logo(html).price == "$450"


class TestDollarPattern:
    def test_amount_near_keyword(self) -> None:
        html = _page(body="<div>Buy it now for the amount of $ 2,500.00 today</div>")

        assert extract_price_and_logo(html).price == "$2,500.00"

    def test_first_characters_scanned_without_keyword(self) -> None:
        assert extract_price_and_logo(_page(body="<p>Only $99</p>")).price == "$99"

    def test_amount_beyond_fallback_window_is_ignored(self) -> None:
        html = "x" * 2100 + "$99"

        assert extract_price_and_logo(html).price == PRICE_REQUEST


class TestDefaultsAndLogo:
    def test_no_signal_defaults_to_price_request(self) -> None:
        result = extract_price_and_logo(_page(body="<h1>ChicDrift.com</h1>"))

        assert result == ExtractionResult(price=PRICE_REQUEST)
        assert result.is_request is True
        assert result.as_dict() == {"price": PRICE_REQUEST, "isRequest": True}

    def test_empty_document(self) -> None:
        assert extract_price_and_logo("").price == PRICE_REQUEST

    def test_og_image_preferred_over_logo_image(self) -> None:
        html = _page(
            head='<meta property="og:image" content="/og.png">',
            body='<img src="https://cdn.atom.com/logo-image/chic.png">',
        )

        assert extract_price_and_logo(html).logo == "/og.png"

    def test_logo_image_fallback(self) -> None:
        html = _page(
            body='<img src="/hero.jpg"><img src="https://cdn.atom.com/logo-image/chic.png">'
        )

        assert extract_price_and_logo(html).logo == "https://cdn.atom.com/logo-image/chic.png"

    def test_blank_og_image_falls_back_to_logo_image(self) -> None:
        html = '<meta property="og:image" content=""><img src="/a/logo-image/x.png">'

        result = extract_price_and_logo(html)

        assert result.logo == "/a/logo-image/x.png"
        assert result.as_dict()["logo"] == "/a/logo-image/x.png"

    def test_blank_og_image_alone_means_no_logo(self) -> None:
        html = _page(head='<meta property="og:image" content="  ">')

        assert "logo" not in extract_price_and_logo(html).as_dict()

    def test_logo_absent(self) -> None:
        assert extract_logo(BeautifulSoup('<img src="/hero.jpg">', "html.parser")) is None

    def test_extraction_is_idempotent(self) -> None:
        html = _page(
            head=_json_ld('{"offers": {"price": "950"}}')
            + '<meta property="og:image" content="/og.png">'
        )

        first = extract_price_and_logo(html)
        second = extract_price_and_logo(html)

        assert first == second
        assert first.as_dict() == {"price": "$950", "isRequest": False, "logo": "/og.png"}


class TestUnparseableMarkup:
    """Markup the HTML parser rejects is still scanned as raw text."""

    def test_dollar_amount_found_without_a_parse_tree(self) -> None:
        result = extract_price_and_logo("<![foo bar $3")

        assert result == ExtractionResult(price="$3")

    def test_request_marker_found_without_a_parse_tree(self) -> None:
        result = extract_price_and_logo("<![foo Price Request $3")

        assert result.price == PRICE_REQUEST
        assert result.logo is None

    def test_defaults_when_raw_text_has_no_price(self) -> None:
        result = extract_price_and_logo('<![foo <meta itemprop="price" content="9">')

        assert result == ExtractionResult(price=PRICE_REQUEST)
