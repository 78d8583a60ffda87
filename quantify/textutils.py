# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""
String helper functions for unit names and symbols.
"""

import re

# Words that do not change in the plural, also when prefixed (kilohertz).
UNCOUNTABLE = (
    "clo",
    "gauss",
    "hertz",
    "horsepower",
    "hundredweight",
    "lux",
    "percent",
    "siemens",
    "stokes",
)

_UNCOUNTABLE_RE = re.compile(r"({})\b".format("|".join(UNCOUNTABLE)), re.I)
_FOOT_RE = re.compile(r"\bfoot\b", re.I)
_PARENTHETICAL_RE = re.compile(r"^(.+?)( \(.*\))$")
_HEAD_WORD_RE = re.compile(r"^(degree|pound)( (?!mole\b).+)$", re.I)
_QUALIFIER_RE = re.compile(r"^(.+?)( of .+| force)$", re.I)

_TO_SUPERSCRIPT_RE = re.compile(r"\^([23])\b")
_FROM_SUPERSCRIPT_RE = re.compile(r"([¹²³])")
_SUPERSCRIPT_INDEX = {"¹": "", "²": "^2", "³": "^3"}


def pluralize(name):
    """Return the plural form of a unit name.

    Qualified names pluralize the head word: "degrees celsius", "feet of
    water", "british thermal units (ISO)". Otherwise the last word takes the
    plural ending.
    """
    if not name or _UNCOUNTABLE_RE.search(name):
        return name
    if _FOOT_RE.search(name):
        return _FOOT_RE.sub(lambda mo: mo.group(0)[0] + "eet", name, count=1)
    mo = (_PARENTHETICAL_RE.match(name) or _HEAD_WORD_RE.match(name) or
          _QUALIFIER_RE.match(name))
    if mo:
        return pluralize(mo.group(1)) + mo.group(2)
    return _pluralize_word(name)


def _pluralize_word(word):
    lower = word.lower()
    if lower.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    if lower.endswith("y") and len(word) > 1 and lower[-2] not in "aeiou":
        return word[:-1] + "ies"
    return word + "s"


def ordinalize(number):
    """Return the ordinal string for an integer, such as "4th" or "22nd"."""
    number = int(number)
    if abs(number) % 100 in (11, 12, 13):
        return "{}th".format(number)
    return "{}{}".format(number, {1: "st", 2: "nd", 3: "rd"}.get(abs(number) % 10, "th"))


def to_power(name, index):
    """Express a unit name raised to a power in words.

    >>> to_power("metre", 2)
    'square metre'
    >>> to_power("second", 4)
    'second to the 4th power'
    """
    if index == 1:
        return name
    if index == 2:
        return "square " + name
    if index == 3:
        return "cubic " + name
    return "{} to the {} power".format(name, ordinalize(index))


def with_superscript_characters(text):
    """Replace "^2" and "^3" index notation with superscript characters."""
    return _TO_SUPERSCRIPT_RE.sub(lambda mo: "²" if mo.group(1) == "2" else "³", text)


def without_superscript_characters(text):
    """Replace superscript characters with "^" index notation."""
    return _FROM_SUPERSCRIPT_RE.sub(lambda mo: _SUPERSCRIPT_INDEX[mo.group(1)], text)


def remove_underscores(text):
    return text.replace("_", " ")

# vim:ts=4:sw=4:softtabstop=4:smarttab:expandtab:fileencoding=utf-8
