"""Clothing advice from the current temperature."""

import bisect

# Upper bounds of the first five bins; a value equal to a bound belongs to the next bin
TEMPERATURE_THRESHOLDS_C: tuple[float, ...] = (5, 10, 15, 20, 25)

CLOTHING_ADVICE: tuple[str, ...] = (
    "厚手のコート、マフラー、手袋を忘れずに！",
    "コートと暖かいセーターがおすすめです。",
    "ジャケットや軽めのコートが適しています。",
    "長袖シャツやカーディガンがちょうどいいでしょう。",
    "半袖シャツと薄手の上着があれば快適です。",
    "涼しい服装で、日よけ対策もお忘れなく！",
)


def clothing_advice(temp_c: float) -> str:
    """Get the clothing suggestion for a temperature in Celsius.

    Bins are (-inf, 5), [5, 10), [10, 15), [15, 20), [20, 25), [25, inf).
    NaN compares false against every bound and lands in the last bin.
    """
    idx = bisect.bisect_right(TEMPERATURE_THRESHOLDS_C, temp_c)
    return CLOTHING_ADVICE[idx]
