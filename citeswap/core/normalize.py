"""Title normalization used for bibliography matching."""
import re

# German characters and the ASCII spelling used by sources that avoid them.
_TRANSLITERATIONS = (
    ("ä", "a"),
    ("ö", "o"),
    ("ü", "u"),
    ("ß", "ss"),
)

_NON_ALNUM = re.compile(r"[\W_]")


def normalize_title(title: str) -> str:
    """Reduce a title to a comparison key.

    The title is lower-cased, German umlauts and sharp s are transliterated,
    then everything that is not a letter or digit is removed. Letters
    outside ASCII (é, ñ) count as letters and stay in the key, so "Café"
    and "Cafe" do not match. Two titles match if and only if their keys
    are equal.

    Args:
        title: Free-text title

    Returns:
        Lowercase alphanumeric key without separators
    """
    key = title.lower()
    for source, target in _TRANSLITERATIONS:
        key = key.replace(source, target)
    return _NON_ALNUM.sub("", key)
