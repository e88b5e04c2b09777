"""Test normalization, decoration stripping and keyword extraction"""

import pytest

from playlist_importer.matching.text import (
    extract_keywords,
    is_bigram,
    normalize,
    strip_decoration,
)


def clean(title):
    return normalize(strip_decoration(title))


class TestNormalize:
    """Test normalize()"""

    def test_case_and_diacritics_insensitive(self):
        assert normalize("Café") == normalize("CAFE") == "cafe"
        assert normalize("Beyoncé - Halo") == "beyonce halo"

    def test_ampersand_and_plus(self):
        assert normalize("Simon & Garfunkel") == "simon and garfunkel"
        assert normalize("Rock+Roll") == "rock and roll"

    def test_quotes_are_deleted(self):
        assert normalize("Don't Stop!") == "dont stop"
        assert normalize("Sigur Rós «Hoppípolla»") == "sigur ros hoppipolla"

    def test_punctuation_becomes_space(self):
        assert normalize("AC/DC") == "ac dc"
        assert normalize("Hello...World") == "hello world"

    def test_whitespace_collapsed_and_trimmed(self):
        assert normalize("  Hello \t  World \n") == "hello world"

    def test_fullwidth_characters(self):
        assert normalize("ＡＢＣ") == "abc"

    def test_styled_capitals(self):
        assert normalize("The Weeknd - 𝐁𝐥𝐢𝐧𝐝𝐢𝐧𝐠 𝐋𝐢𝐠𝐡𝐭𝐬") == "the weeknd blinding lights"
        assert normalize("𝘏𝘢𝘭𝘰") == "halo"
        assert normalize("ℌello") == "hello"

    def test_dotted_capital_i(self):
        assert normalize("İstanbul") == "istanbul"

    def test_empty(self):
        assert normalize("") == ""
        assert normalize("!!!") == ""

    @pytest.mark.parametrize("text", [
        "Café del Mar",
        "Simon & Garfunkel - The Boxer",
        "  «Quoted»  Title ++ ",
        "Mötley Crüe - Kickstart My Heart",
        "",
    ])
    def test_idempotent(self, text):
        once = normalize(text)
        assert normalize(once) == once


class TestStripDecoration:
    """Test strip_decoration()"""

    def test_bracketed_qualifiers(self):
        assert clean("Artist - Song (Official Video)") == "artist song"
        assert clean("Title [Lyrics]") == "title"
        assert clean("Song {HD}") == "song"
        assert clean("Song (Color Coded Lyrics)") == "song"
        assert clean("Hotel California (Live)") == "hotel california"

    def test_featuring_group_removed(self):
        assert clean("Song (feat. Someone)") == "song"

    def test_unbracketed_feat_word(self):
        assert clean("Artist - Song ft. Other") == "artist song other"

    def test_trailing_pipe_segment(self):
        assert clean("Song Name (Official Video) | HD") == "song name"
        assert clean("Song Name | Official Music Video") == "song name"

    def test_pipe_without_qualifier_kept(self):
        assert clean("Song | Artist") == "song artist"

    def test_language_tags(self):
        assert clean("Song (HAN/ROM/ENG Lyrics)") == "song"
        assert clean("Song HAN/ROM/ENG") == "song"

    def test_removed_text_does_not_fuse_words(self):
        assert clean("Hello(Official Video)World") == "hello world"

    def test_stopwords_only_as_whole_words(self):
        assert clean("Special Delivery") == "special delivery"
        assert clean("Editor") == "editor"

    def test_decoration_only_title(self):
        assert clean("Official Video") == ""
        assert extract_keywords(strip_decoration("(Official Video) official video")) == frozenset()

    def test_empty(self):
        assert strip_decoration("") == ""


class TestExtractKeywords:
    """Test extract_keywords()"""

    def test_unigrams_and_bigrams(self):
        assert extract_keywords("Artist - Song") == {"artist", "song", "artist_song"}

    def test_short_words_do_not_break_adjacency(self):
        assert extract_keywords("The End of Time") == {
            "the", "end", "time", "the_end", "end_time",
        }

    def test_single_word(self):
        assert extract_keywords("Hello") == {"hello"}

    def test_short_input_is_empty(self):
        assert extract_keywords("") == frozenset()
        assert extract_keywords("a to be") == frozenset()

    def test_deterministic(self):
        text = "Daft Punk - Get Lucky ft. Pharrell Williams"
        assert extract_keywords(text) == extract_keywords(text)

    def test_normalizes_input(self):
        assert extract_keywords("CAFÉ Tacvba") == extract_keywords("cafe tacvba")

    def test_is_bigram(self):
        assert is_bigram("end_time")
        assert not is_bigram("end")
