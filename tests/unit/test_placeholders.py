"""Unit tests for placeholder extraction, naming validation and sample values."""

import pytest

from template_guard.strategies.placeholders import (
    VALID_PLACEHOLDER_KEYWORDS,
    build_preview_data,
    extract_placeholders,
    format_validation_errors,
    is_valid_placeholder_name,
    sample_value,
    validate_template_placeholders,
)


# =============================================================================
# Extraction Tests
# =============================================================================


class TestExtractPlaceholders:
    """Test suite for extract_placeholders."""

    def test_single_placeholder(self):
        """Test extraction from a minimal template body."""
        assert extract_placeholders("<div>{{title}}</div>") == ["title"]

    def test_sorted_not_first_appearance(self):
        """Test that results are sorted lexicographically."""
        html = '<div>{{title}}</div><img src="{{imageUrl}}" />'
        assert extract_placeholders(html) == ["imageUrl", "title"]

    def test_deduplicates(self):
        """Test that repeated placeholders appear once."""
        assert extract_placeholders("<h1>{{title}}</h1><p>{{title}}</p>") == ["title"]

    def test_trims_whitespace(self):
        """Test that surrounding whitespace inside the braces is removed."""
        html = "<div>{{ title }}</div><p>{{  description  }}</p>"
        assert extract_placeholders(html) == ["description", "title"]

    def test_whitespace_only_capture_is_dropped(self):
        """Test that empty captures are discarded."""
        assert extract_placeholders("{{   }}{{title}}") == ["title"]

    def test_single_braces_ignored(self):
        """Test that single-brace tokens are not placeholders."""
        html = "<div>{title}</div><p>{{valid}}</p><span>{invalid}</span>"
        assert extract_placeholders(html) == ["valid"]

    def test_no_placeholders(self):
        """Test static markup yields an empty list."""
        assert extract_placeholders("<div>Static content</div>") == []

    @pytest.mark.parametrize("text", [None, ""])
    def test_empty_input(self, text):
        """Test that missing text yields an empty list."""
        assert extract_placeholders(text) == []

    def test_url_pattern(self):
        """Test extraction from a URL template."""
        pattern = "{{baseUrl}}?utm_source={{utm_source}}&id={{ campaign }}"
        assert extract_placeholders(pattern) == ["baseUrl", "campaign", "utm_source"]

    def test_idempotent(self):
        """Test that re-extracting the rendered set is stable."""
        html = "<a href='{{link}}'>{{ buttonText }}</a>{{title}}{{link}}"
        first = extract_placeholders(html)
        second = extract_placeholders(html)
        rebuilt = extract_placeholders("".join(f"{{{{{name}}}}}" for name in first))

        assert first == second == rebuilt
        assert first == sorted(set(first))


# =============================================================================
# Naming Validation Tests
# =============================================================================


class TestPlaceholderNaming:
    """Test suite for is_valid_placeholder_name."""

    @pytest.mark.parametrize(
        "name",
        [
            "productImage",
            "bannerImg",
            "heroPicture",
            "productUrl",
            "ctaLink",
            "buttonHref",
            "productTitle",
            "mainHeadline",
            "pageHeader",
            "productDescription",
            "bodyText",
            "mainContent",
            "salePrice",
            "startDate",
            "brandName",
            "serviceIcon",
            "jobCategory",
            "userRating",
        ],
    )
    def test_valid_names(self, name):
        """Test names built around domain keywords."""
        assert is_valid_placeholder_name(name) is True

    @pytest.mark.parametrize("name", ["invalidField", "randomValue", "xyz", "", "   ", None])
    def test_invalid_names(self, name):
        """Test names with no domain keyword."""
        assert is_valid_placeholder_name(name) is False

    def test_case_insensitive(self):
        """Test that matching ignores case."""
        assert is_valid_placeholder_name("PRODUCTTITLE") is True
        assert is_valid_placeholder_name("ProductImage") is True
        assert is_valid_placeholder_name("button_text") is True

    def test_keyword_table_size(self):
        """Test the whitelist covers the documented categories."""
        assert 50 <= len(VALID_PLACEHOLDER_KEYWORDS) <= 70
        assert len(set(VALID_PLACEHOLDER_KEYWORDS)) == len(VALID_PLACEHOLDER_KEYWORDS)


class TestValidateTemplatePlaceholders:
    """Test suite for template-level naming validation."""

    def test_valid_template(self):
        """Test that a conforming template yields no errors."""
        html = '<div>{{title}}</div><img src="{{imageUrl}}" /><a href="{{link}}">{{buttonText}}</a>'
        assert validate_template_placeholders(html) == []

    def test_collects_every_invalid_name(self):
        """Test that all violations are reported in one message."""
        html = "<div>{{title}}</div>{{foo}}{{bar}}"
        errors = validate_template_placeholders(html)

        assert len(errors) == 2
        assert errors[0] == "Placeholders violating the naming convention: bar, foo"
        assert "image" in errors[1]

    def test_format_as_multiline(self):
        """Test joining messages into a single failure."""
        errors = validate_template_placeholders("{{foo}}")
        message = format_validation_errors(errors)

        assert message.count("\n") == 1
        assert message.startswith("Placeholders violating")


# =============================================================================
# Sample Value Tests
# =============================================================================


class TestSampleValue:
    """Test suite for sample_value."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("image", "/images/sample-ad.svg"),
            ("heroPhoto", "/images/sample-ad.svg"),
            ("link", "#"),
            ("title", "Sample Title"),
            ("price", "Free"),
            ("button", "Sign up now"),
            ("date", "December 31, 2025"),
            ("brandName", "Sample Brand"),
            ("icon", "/images/sample-icon.svg"),
            ("service", "Career support service"),
            ("rating", "★★★★★ 4.8"),
            ("category", "Sample Category"),
        ],
    )
    def test_categories(self, name, expected):
        """Test the canned value of each category."""
        assert sample_value(name) == expected

    def test_first_matching_category_wins(self):
        """Test priority order: image beats url, title beats name."""
        assert sample_value("imageUrl") == "/images/sample-ad.svg"
        assert sample_value("titleName") == "Sample Title"

    def test_description_precedes_button(self):
        """Test that 'text' matches the description group before 'button'."""
        assert sample_value("buttonText").startswith("This is a sample description")

    def test_fallback(self):
        """Test names matching no category."""
        assert sample_value("foo") == "Sample foo"

    def test_case_insensitive(self):
        assert sample_value("PRICE") == "Free"


class TestBuildPreviewData:
    """Test suite for build_preview_data."""

    def test_prefers_stored_values(self):
        """Test that stored values are used and gaps filled with samples."""
        preview = build_preview_data(["title", "price", "rating"], {"title": "Spring Sale", "price": 0})

        assert preview == {"title": "Spring Sale", "price": "0", "rating": "★★★★★ 4.8"}

    def test_without_data(self):
        assert build_preview_data(["foo"]) == {"foo": "Sample foo"}
