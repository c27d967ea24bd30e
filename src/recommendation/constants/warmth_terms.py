"""
Lexical warmth vocabulary.

Used to compare free-text clothing values (custom options, imported
values) that carry no rank in a category's option list. Matching is by
lower-case substring, with no precedence between terms: an option can
be both "warm" and "cold" at the same time ("Short sleeve + jacket").
"""

WARM_TERMS = (
    "merino",
    "base layer + jacket",
    "base layer + fleece",
    "expedition",
    "heavy",
    "fleece",
    "puffy",
    "jacket",
    "softshell",
)

COLD_TERMS = (
    "t-shirt",
    "singlet",
    "tank",
    "short sleeve",
    "short",
    "none",
)

# Terms that mark the current value as light enough to warrant searching
# for a warmer option. Deliberately excludes "none".
UPGRADE_FROM_TERMS = ("t-shirt", "singlet", "tank", "short")

# Suggestion text checks
LONG_TERMS = ("long",)
LONG_BOTTOM_TERMS = ("tight", "pant")
