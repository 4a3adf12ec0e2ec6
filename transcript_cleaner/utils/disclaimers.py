# transcript_cleaner/utils/disclaimers.py
# ------------------------------------------------------------
# Fixed publisher disclaimers wrapped around a finished transcript.
# Output is WordPress-ready HTML (<p><em>...</em></p>).
#
# Env:
#   DISCLAIMER_BRAND   - publisher name (default "Benzinga")
#   DISCLAIMER_URL     - link in the top disclaimer
# -------------------------------------------------------------------
import os

DISCLAIMER_BRAND = os.getenv("DISCLAIMER_BRAND", "Benzinga")
DISCLAIMER_URL = os.getenv("DISCLAIMER_URL", "https://www.benzinga.com/apis/")


class DisclaimersAlreadyAdded(ValueError):
    pass


def top_disclaimer(brand: str = DISCLAIMER_BRAND, url: str = DISCLAIMER_URL) -> str:
    return (
        f"<p><em>This transcript is brought to you by {brand} APIs. "
        f'For real-time access to our entire catalog, <a href="{url}">please visit {brand} APIs</a> '
        "for a consultation.</em></p>"
    )


def bottom_disclaimer(brand: str = DISCLAIMER_BRAND) -> str:
    return (
        "<p><em>This transcript is to be used for informational purposes only. "
        f"Though {brand} believes the content to be substantially and directionally correct, "
        f"{brand} cannot and does not guarantee 100% accuracy of the content herein. "
        "Audio quality, accents, and technical issues could impact the exactness and we advise "
        "you to refer to source audio files before making any decisions based upon the above.</em></p>"
    )


def has_disclaimers(text: str, brand: str = DISCLAIMER_BRAND) -> bool:
    return f"This transcript is brought to you by {brand} APIs" in text


def add_disclaimers(text: str, brand: str = DISCLAIMER_BRAND, url: str = DISCLAIMER_URL) -> str:
    """Top disclaimer + blank line + transcript + blank line + bottom disclaimer."""
    if has_disclaimers(text, brand):
        raise DisclaimersAlreadyAdded("Disclaimers already added")
    return f"{top_disclaimer(brand, url)}\n\n{text.strip()}\n\n{bottom_disclaimer(brand)}"
