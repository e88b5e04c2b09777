"""
Text normalization and keyword extraction for matching.

Three steps turn noisy text into comparable keyword sets:

    1. strip_decoration(): removes promotional qualifiers from YouTube
       video titles ("(Official Video)", "[Lyrics]", "| 4K", "ft.").
       Applied to playlist titles only, never to local metadata.
    2. normalize(): ASCII-lowercase canonical form, idempotent.
    3. extract_keywords(): unigrams of 3+ characters plus underscore-joined
       bigrams of adjacent surviving words.

The decoration vocabulary is data (DECORATION_RULES, DECORATION_STOPWORDS):
extend those tuples to recognise new qualifiers without touching the scorer.

Example:
    cleaned = strip_decoration("Daft Punk - Get Lucky (Official Video) ft. Pharrell")
    normalize(cleaned)
    # "daft punk get lucky pharrell"
    extract_keywords(cleaned)
    # {"daft", "punk", "get", "lucky", "pharrell",
    #  "daft_punk", "punk_get", "get_lucky", "lucky_pharrell"}
"""

import re
import unicodedata


# Words shorter than this are dropped before forming unigrams and bigrams
MIN_KEYWORD_LENGTH = 3

# Separator used to join adjacent words into a bigram keyword.
# normalize() never emits it, so it also marks a keyword as a bigram.
BIGRAM_SEPARATOR = "_"

# Quote-like characters deleted outright so "don't" stays one word
_QUOTE_CHARS = "'\"`´‘’‚‛“”„‟«»‹›"
_QUOTE_TABLE = str.maketrans("", "", _QUOTE_CHARS)

_NON_ALNUM_PATTERN = re.compile(r"[^a-z0-9\s]")
_AMPERSAND_PATTERN = re.compile(r"[&+]")

# Qualifier words that mark a bracket group or pipe segment as decoration
_QUALIFIERS = (
    r"official|lyrics?|audio|music\s+video|video|visuali[sz]er|colou?r\s+coded"
    r"|live|m/?v|hd|hq|4k|8k|remix|cover|feat\.?|ft\.?|featuring|prod\.?"
    r"|han|rom|eng"
)

# Ordered (pattern, replacement) rules, applied to the raw title
DECORATION_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    # (Official Video), [Lyric Video], {HD}, (feat. Someone), (Han/Rom/Eng)
    (
        re.compile(
            rf"[(\[{{【][^)\]}}】]*?\b(?:{_QUALIFIERS})(?![a-z0-9])[^)\]}}】]*[)\]}}】]",
            re.IGNORECASE,
        ),
        " ",
    ),
    # Trailing pipe segments such as "| Official Music Video" or "| 4K"
    (
        re.compile(
            rf"\s*[|｜][^|｜]*\b(?:{_QUALIFIERS})(?![a-z0-9]).*$",
            re.IGNORECASE,
        ),
        " ",
    ),
    # Unbracketed "Official Music Video", "Lyric Video", "Music Video"
    (
        re.compile(
            r"\bofficial\s+(?:music\s+|lyric\s+)?(?:video|audio|visuali[sz]er)\b",
            re.IGNORECASE,
        ),
        " ",
    ),
    (re.compile(r"\blyrics?\s+video\b", re.IGNORECASE), " "),
    (re.compile(r"\bmusic\s+video\b", re.IGNORECASE), " "),
    (re.compile(r"\bcolou?r\s+coded\b", re.IGNORECASE), " "),
    # Auto-generated channel suffix
    (re.compile(r"\s-\s*topic\b", re.IGNORECASE), " "),
    # Language tag combinations outside brackets: "HAN/ROM/ENG", "Rom & Eng"
    (
        re.compile(
            r"\b(?:han|rom|eng)(?:\s*[/&+,]\s*(?:han|rom|eng))+\b",
            re.IGNORECASE,
        ),
        " ",
    ),
)

# Standalone words removed after the rules above
DECORATION_STOPWORDS: tuple[str, ...] = (
    "official",
    "video",
    "audio",
    "lyrics",
    "lyric",
    "feat",
    "ft",
    "featuring",
    "prod",
    "remix",
    "vip",
    "edit",
    "version",
    "live",
    "cover",
    "han",
    "rom",
    "eng",
    "mv",
    "hd",
    "hq",
    "4k",
    "8k",
    "visualizer",
    "visualiser",
    "topic",
)

_STOPWORD_PATTERN = re.compile(
    r"(?<![a-z0-9])(?:"
    + "|".join(re.escape(word) for word in DECORATION_STOPWORDS)
    + r")(?![a-z0-9])",
    re.IGNORECASE,
)


def normalize(text: str) -> str:
    """
    Canonicalize text into an ASCII-lowercase, single-spaced string.

    Steps: Unicode compatibility decomposition, lowercase, combining marks
    dropped, '&' and '+' become 'and', quote characters are deleted,
    every other character outside [a-z0-9 whitespace] becomes a space,
    whitespace runs collapse and the result is trimmed. Lowercasing comes
    after decomposition: styled capitals such as "𝐁" or "ℌ" have no
    lowercase form of their own.

    The function is pure and idempotent: normalize(normalize(x)) == normalize(x).

    Examples:
        normalize("Café")           # "cafe"
        normalize("Simon & Garfunkel")  # "simon and garfunkel"
        normalize("Don't Stop!")    # "dont stop"
    """
    if not text:
        return ""

    decomposed = unicodedata.normalize("NFKD", text).lower()
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    stripped = _AMPERSAND_PATTERN.sub(" and ", stripped)
    stripped = stripped.translate(_QUOTE_TABLE)
    stripped = _NON_ALNUM_PATTERN.sub(" ", stripped)
    return " ".join(stripped.split())


def strip_decoration(raw_title: str) -> str:
    """
    Remove YouTube-specific decoration from a raw video title.

    Applies DECORATION_RULES in order, then removes DECORATION_STOPWORDS
    occurring as standalone words. Removed text is replaced by a space so
    the words on each side never fuse. The output is meant to be passed
    to normalize() (directly or through extract_keywords()).

    Args:
        raw_title: Title exactly as returned by the playlist API.

    Returns:
        The title without decoration. May be blank when the title was
        nothing but decoration.

    Example:
        normalize(strip_decoration("Song Name (Official Video) | HD"))
        # "song name"
    """
    if not raw_title:
        return ""

    cleaned = raw_title
    for pattern, replacement in DECORATION_RULES:
        cleaned = pattern.sub(replacement, cleaned)

    return _STOPWORD_PATTERN.sub(" ", cleaned)


def extract_keywords(text: str) -> frozenset[str]:
    """
    Turn text into a set of unigram and bigram keywords.

    The text is normalized, split on whitespace and words shorter than
    MIN_KEYWORD_LENGTH are discarded. Bigrams join each adjacent pair of
    the *filtered* sequence, so a dropped short word does not break
    adjacency ("the end of time" -> "the_end", "end_time").

    Args:
        text: Any text; normalization is applied here.

    Returns:
        Frozen set of keywords. Empty for empty or all-short input.
    """
    words = [w for w in normalize(text).split() if len(w) >= MIN_KEYWORD_LENGTH]

    keywords = set(words)
    keywords.update(
        f"{first}{BIGRAM_SEPARATOR}{second}"
        for first, second in zip(words, words[1:])
    )
    return frozenset(keywords)


def is_bigram(keyword: str) -> bool:
    """Return True if the keyword was formed from two adjacent words."""
    return BIGRAM_SEPARATOR in keyword
