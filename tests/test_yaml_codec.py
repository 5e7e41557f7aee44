"""Tests for the YAML-LD frontmatter adapter."""

import pytest

from mdxld_workers.adapters.yaml_codec import (
    YamlFrontmatter,
    lift_typed_attributes,
    quote_reserved,
)
from mdxld_workers.core.errors import MetadataExtractionError


def test_quote_reserved_keys():
    """Test that @-prefixed keys are quoted."""
    assert quote_reserved("@context: x") == "'@context': x"
    assert quote_reserved("  @type: Person") == "  '@type': Person"
    assert quote_reserved("  - @id: p1") == "  - '@id': p1"
    assert quote_reserved("@context:") == "'@context':"


def test_quote_reserved_values():
    """Test that @-prefixed values are quoted."""
    assert quote_reserved("type: @id") == "type: '@id'"
    assert quote_reserved("- @json") == "- '@json'"
    assert quote_reserved("'@type': @id") == "'@type': '@id'"


def test_quote_reserved_leaves_other_lines_alone():
    block = "\n".join([
        "'@type': Person",
        "email: me@example.com",
        "$type: Article",
        "# @comment",
        "url: https://example.org/@user",
    ])
    assert quote_reserved(block) == block


def test_quote_reserved_leaves_quoted_values_alone():
    """Test that "@" inside an already quoted value is not touched."""
    for line in ('title: "a: @b"', "title: 'a: @b'", 'contact: "Mail: @me, css: @media"'):
        assert quote_reserved(line) == line


@pytest.mark.parametrize("value", ['"Contact: @handle"', "'Contact: @handle'"])
def test_decode_quoted_value_with_at_sign(value):
    doc = YamlFrontmatter().decode(f"---\ntitle: {value}\n---\nbody")
    assert doc.data == {"title": "Contact: @handle"}
    assert doc.content == "body"


def test_quote_reserved_skips_block_scalars():
    block = "style: |\n  @media screen {}\n  @import x;\nnext: @id"
    assert quote_reserved(block) == "style: |\n  @media screen {}\n  @import x;\nnext: '@id'"


def test_decode_splits_frontmatter_and_body():
    doc = YamlFrontmatter().decode("---\ntitle: Hello\n---\n# Body\n")
    assert doc.data == {"title": "Hello"}
    assert doc.content == "# Body\n"


def test_decode_empty_frontmatter():
    doc = YamlFrontmatter().decode("---\n---\nbody\n---\nmore")
    assert doc.data == {}
    assert doc.content == "body\n---\nmore"


def test_decode_without_frontmatter():
    doc = YamlFrontmatter().decode("no frontmatter here")
    assert doc.data == {}
    assert doc.content == "no frontmatter here"


def test_decode_keeps_prefixed_keys_in_data():
    """Test that lifted typed attributes stay in the data bag too."""
    doc = YamlFrontmatter().decode("---\n$type: Article\n@id: a-1\n---\n")
    assert doc.data == {"$type": "Article", "@id": "a-1"}
    assert doc.typed_attributes.type == "Article"
    assert doc.typed_attributes.id == "a-1"


def test_decode_errors_are_wrapped():
    with pytest.raises(MetadataExtractionError) as excinfo:
        YamlFrontmatter().decode("---\ntitle: [unclosed\n---\n")
    assert "Failed to extract metadata" in str(excinfo.value)
    assert excinfo.value.__cause__ is not None


def test_lift_typed_attributes_prefers_dollar():
    typed = lift_typed_attributes({"@type": "B", "$type": "A"})
    assert typed.type == "A"


def test_lift_typed_attributes_ignores_plain_keys():
    typed = lift_typed_attributes({"type": "plain", "context": "x"})
    assert typed.as_dict() == {}


def test_lift_typed_attributes_shapes():
    """Test the coercions applied to each typed attribute."""
    typed = lift_typed_attributes({
        "$id": 7,
        "$context": {"vocab": "https://schema.org/"},
        "'@list'": "solo",
        "@set": ["a", "b", "a"],
        "$reverse": "yes",
        "$language": ["not", "a", "string"],
    })
    assert typed.id == "7"
    assert typed.context == {"vocab": "https://schema.org/"}
    assert typed.list == ["solo"]
    assert typed.set == ["a", "b"]
    assert typed.reverse is True
    assert typed.language is None


def test_lift_typed_attributes_skips_malformed_context():
    assert lift_typed_attributes({"$context": 5}).context is None


def test_encode_has_no_yaml_aliases():
    """Test that shared values are written out in full."""
    routes = ["/a"]
    text = YamlFrontmatter().encode({"list": routes, "@list": routes})
    assert text.startswith("---\n")
    assert text.endswith("---\n")
    assert "&id" not in text
    assert "'@list':" in text


def test_encode_output_decodes_back():
    meta = {"type": "Article", "@type": "Article", "routes": ["/x"]}
    codec = YamlFrontmatter()
    doc = codec.decode(codec.encode(meta) + "body")
    assert doc.data == meta
    assert doc.content == "body"


def test_encode_empty():
    assert YamlFrontmatter().encode({}) == ""
