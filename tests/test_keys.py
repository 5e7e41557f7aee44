"""Tests for the prefix-aware key model."""

from mdxld_workers.core.keys import Key, classify, spellings, unquote


def test_classify_prefixes():
    """Test that @ and $ are split from the base name."""
    assert classify("@type") == Key(prefix="@", base="type")
    assert classify("$worker") == Key(prefix="$", base="worker")
    assert classify("title") == Key(prefix=None, base="title")


def test_classify_strips_one_quote_layer():
    """Test that literal quotes around keys are removed before inspection."""
    assert classify("'@context'") == Key(prefix="@", base="context")
    assert classify('"$id"') == Key(prefix="$", base="id")
    assert classify("'title'") == Key(prefix=None, base="title")
    # Only one layer, and only matching pairs
    assert classify("\"'@id'\"").base == "'@id'"
    assert classify("'@id\"") == Key(prefix=None, base="'@id\"")


def test_classify_edge_cases():
    """Test that every key is classifiable."""
    assert classify("") == Key(prefix=None, base="")
    assert classify("@") == Key(prefix="@", base="")
    assert classify("@@type") == Key(prefix="@", base="@type")
    assert classify(42) == Key(prefix=None, base="42")


def test_key_text():
    """Test the unquoted spelling of a classified key."""
    assert classify("'$author'").text == "$author"
    assert classify("plain").text == "plain"
    assert not classify("plain").is_prefixed


def test_spellings():
    """Test the three canonical spellings."""
    assert spellings("type") == ("type", "@type", "$type")


def test_unquote_short_strings():
    assert unquote("'") == "'"
    assert unquote("''") == ""
