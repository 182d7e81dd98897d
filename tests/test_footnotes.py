"""Tests for answer_text.footnotes."""

import pytest

from answer_text.exceptions import InvalidReferenceURLError
from answer_text.footnotes import (
    MARKER_LINE_SYMBOL,
    build_markdown,
    clean_quote,
    expand_grouped_markers,
    find_markers,
    format_references,
    needs_correction,
    reconcile,
    reference_hostname,
    renumber_markers,
    strip_markers,
)
from answer_text.models import Answer, Reference


class TestExpandGroupedMarkers:
    def test_without_spaces(self):
        assert expand_grouped_markers("[^1,^2,^3]") == "[^1], [^2], [^3]"

    def test_with_spaces(self):
        assert expand_grouped_markers("See [^1, ^2] here") == "See [^1], [^2] here"

    def test_multiple_groups(self):
        text = "A [^1, ^2]. B [^3,^4]."
        assert expand_grouped_markers(text) == "A [^1], [^2]. B [^3], [^4]."

    def test_single_marker_untouched(self):
        assert expand_grouped_markers("Fact[^1].") == "Fact[^1]."

    def test_space_before_comma_is_not_a_group(self):
        assert expand_grouped_markers("[^1 , ^2]") == "[^1 , ^2]"


class TestFindMarkers:
    def test_order_and_duplicates(self):
        markers = find_markers("A[^1] b[^2] c[^1]")
        assert [m.label for m in markers] == ["1", "2", "1"]
        assert [m.number for m in markers] == [1, 2, 1]

    def test_positions(self):
        markers = find_markers("A[^12] b")
        assert len(markers) == 1
        assert markers[0].start == 1
        assert markers[0].end == 6
        assert markers[0].number == 12

    def test_grouped_marker_is_not_a_single_marker(self):
        assert find_markers("[^1, ^2]") == []

    def test_no_markers(self):
        assert find_markers("Plain text [1] and ^2") == []


class TestRewriteMarkers:
    def test_strip(self):
        assert strip_markers("a[^1] b[^2]") == "a b"

    def test_renumber(self):
        assert renumber_markers("[^5] x [^5] y [^9]") == "[^1] x [^2] y [^3]"

    def test_renumber_with_precomputed_markers(self):
        text = "One[^3] two[^3]"
        assert renumber_markers(text, find_markers(text)) == "One[^1] two[^2]"


class TestNeedsCorrection:
    @pytest.mark.parametrize(
        "text, reference_count, expected",
        [
            ("[^2] [^2] [^2]", 3, True),   # one per reference, all identical
            ("[^4][^4]", 3, True),         # identical and out of range
            ("[^4]", 3, True),             # a single out-of-range marker
            ("[^4][^5]", 3, True),         # all out of range
            ("[^1][^2]", 3, False),
            ("[^1][^1]", 3, False),
            ("[^1][^4]", 3, False),
            ("[^1][^2][^3]", 3, False),
        ],
    )
    def test_conditions(self, text, reference_count, expected):
        assert needs_correction(find_markers(text), reference_count) is expected

    def test_labels_compared_as_written(self):
        # "01" and "1" are different labels, and neither exceeds the count.
        assert needs_correction(find_markers("[^01][^1]"), 2) is False


class TestReconcileWithoutReferences:
    def test_markers_removed(self):
        assert reconcile("Paris[^1] is big[^2].", []) == "Paris is big."

    def test_none_references(self):
        assert reconcile("Paris[^1].", None) == "Paris."

    def test_grouped_markers_expanded_then_removed(self):
        result = reconcile("Claim [^1, ^2] end", [])
        assert "[^" not in result
        assert result == "Claim ,  end"

    def test_result_trimmed(self):
        assert reconcile("  text [^1]  ", []) == "text"


class TestReconcileWithoutMarkers:
    def test_appends_all_citations(self, references, reference_block):
        result = reconcile("Paris is the capital.", references)
        assert result == (
            f"Paris is the capital.\n\n{MARKER_LINE_SYMBOL}[^1][^2][^3]\n\n{reference_block}"
        )

    def test_marker_line_symbol(self):
        assert MARKER_LINE_SYMBOL == "⁜"


class TestReconcileCorrection:
    def test_repeated_marker_renumbered(self, references, reference_block):
        result = reconcile("[^2] [^2] [^2]", references)
        assert result == f"[^1] [^2] [^3]\n\n{reference_block}"

    def test_out_of_range_markers_renumbered(self, references, reference_block):
        result = reconcile("A[^7]. B[^9].", references)
        assert result == f"A[^1]. B[^2].\n\n{reference_block}"

    def test_grouped_markers_renumbered(self, references, reference_block):
        result = reconcile("Facts [^5, ^5, ^5]", references)
        assert result == f"Facts [^1], [^2], [^3]\n\n{reference_block}"


class TestReconcileUnusedReferences:
    def test_lists_uncited_references(self, references, reference_block):
        result = reconcile("Paris[^1] is the capital.", references)
        assert result == (
            f"Paris[^1] is the capital.\n\n{MARKER_LINE_SYMBOL}[^2][^3]\n\n{reference_block}"
        )

    def test_out_of_range_marker_does_not_count_as_used(self, references):
        result = reconcile("A[^1] B[^5]", references)
        assert f"{MARKER_LINE_SYMBOL}[^2][^3]\n\n" in result
        assert result.startswith("A[^1] B[^5]\n\n")


class TestReconcileDefault:
    def test_block_appended(self, references, reference_block):
        result = reconcile("A[^1] B[^2] C[^3]", references)
        assert result == f"A[^1] B[^2] C[^3]\n\n{reference_block}"

    def test_more_markers_than_references(self):
        refs = [Reference(exact_quote="one"), Reference(exact_quote="two")]
        result = reconcile("A[^1] B[^2] C[^1] D[^2]", refs)
        assert result == "A[^1] B[^2] C[^1] D[^2]\n\n[^1]: one\n\n[^2]: two"

    def test_every_reference_listed_once(self, references):
        result = reconcile("A[^1] B[^2] C[^3]", references)
        for number in (1, 2, 3):
            assert result.count(f"[^{number}]: ") == 1


class TestFormatReferences:
    def test_punctuation_removed(self):
        result = reconcile("Greeting[^1]", [Reference(exact_quote="Hello, world!!")])
        assert result.endswith("[^1]: Hello world")

    def test_clean_quote_keeps_collapsed_trailing_space(self):
        assert clean_quote("Hello, world!!") == "Hello world "

    def test_unicode_letters_and_numbers_kept(self):
        assert clean_quote("Ça coûte 5 €, naïve_test") == "Ça coûte 5 naïve test"

    def test_cjk_punctuation(self):
        assert clean_quote("東京は日本の首都です。") == "東京は日本の首都です "

    def test_whitespace_collapsed(self):
        assert clean_quote("a \n\t b") == "a b"

    def test_link_for_http_url(self):
        block = format_references(
            [Reference(exact_quote="quote", url="http://docs.python.org/3/")]
        )
        assert block == "[^1]: quote [docs.python.org](http://docs.python.org/3/)"

    def test_no_link_for_missing_or_non_http_url(self):
        block = format_references(
            [
                Reference(exact_quote="a"),
                Reference(exact_quote="b", url=""),
                Reference(exact_quote="c", url="mailto:someone@example.com"),
            ]
        )
        assert block == "[^1]: a\n\n[^2]: b\n\n[^3]: c"

    def test_empty_list(self):
        assert format_references([]) == ""


class TestReferenceHostname:
    def test_leading_www_removed(self):
        assert reference_hostname("https://www.example.com/a") == "example.com"

    def test_inner_www_kept(self):
        assert reference_hostname("http://news.www.example.com") == "news.www.example.com"

    def test_lowercased_and_port_dropped(self):
        assert reference_hostname("https://WWW.Example.COM:8443/x") == "example.com"

    @pytest.mark.parametrize("url", ["https://", "httpfoo", "http:///path-only"])
    def test_missing_host_raises(self, url):
        with pytest.raises(InvalidReferenceURLError) as exc_info:
            reference_hostname(url)
        assert exc_info.value.url == url

    def test_unparseable_url_keeps_original_error(self):
        with pytest.raises(InvalidReferenceURLError) as exc_info:
            reference_hostname("http://[::1")
        assert isinstance(exc_info.value.original_error, ValueError)

    @pytest.mark.parametrize(
        "url",
        [
            "http://exa mple.com/",
            "http://ex<ample>.com/",
            "https://exa%20mple.com",
            "http://example.com|evil/",
        ],
    )
    def test_forbidden_host_characters_raise(self, url):
        with pytest.raises(InvalidReferenceURLError):
            reference_hostname(url)

    def test_non_numeric_port_raises(self):
        with pytest.raises(InvalidReferenceURLError) as exc_info:
            reference_hostname("http://example.com:abc/")
        assert isinstance(exc_info.value.original_error, ValueError)

    def test_internationalized_host_as_punycode(self):
        assert reference_hostname("https://www.bücher.de/x") == "xn--bcher-kva.de"

    def test_ipv6_host(self):
        assert reference_hostname("http://[::1]:8080/") == "::1"

    def test_malformed_url_fails_reconcile(self):
        refs = [Reference(exact_quote="q", url="http://exa mple.com/")]
        with pytest.raises(InvalidReferenceURLError):
            reconcile("A[^1]", refs)

    def test_reconcile_propagates_error(self, references):
        refs = references + [Reference(exact_quote="broken", url="https://")]
        with pytest.raises(ValueError):
            reconcile("A[^1]", refs)


class TestBuildMarkdown:
    def test_from_record(self):
        answer = Answer.model_validate(
            {
                "answer": "Paris is the capital.[^1, ^2]",
                "references": [
                    {"exactQuote": "Paris is the capital", "url": "https://www.example.com/paris"},
                    {"exactQuote": "France (country)"},
                ],
            }
        )
        assert build_markdown(answer) == (
            "Paris is the capital.[^1], [^2]\n\n"
            "[^1]: Paris is the capital [example.com](https://www.example.com/paris)\n\n"
            "[^2]: France country"
        )
