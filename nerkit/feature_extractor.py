# In nerkit/feature_extractor.py
"""Token-level feature extractors.

Every extractor exposes ``name`` and ``apply(sentence, index)``, which
returns the ordered list of ``Feature`` objects for the token at
``index``. An empty list means the extractor has nothing to say about
that token.
"""

import enum
import unicodedata

from nerkit.structures import Feature

# Sentinel for values that fall outside the token or the sentence.
OUT = 'OUT'

PRECEDING = 'Preceding'
FOLLOWING = 'Following'


class FeatureExtractor:
    name = None

    def apply(self, sentence, index):
        raise NotImplementedError

    def __repr__(self):
        return f"<{type(self).__name__} {self.name}>"


class TokenFunction(FeatureExtractor):
    """Applies a function to the token's text and emits its value under ``name``."""

    def __init__(self, name, function):
        self.name = name
        self.function = function

    def apply(self, sentence, index):
        value = self.function(sentence.tokens[index].text)
        if value is None:
            return []
        return [Feature(self.name, value)]


# --- Orthographic functions ---

ALL_UPPERCASE = 'ALL_UPPERCASE'
INITIAL_UPPERCASE = 'INITIAL_UPPERCASE'
ALL_LOWERCASE = 'ALL_LOWERCASE'
MIXED_CASE = 'MIXED_CASE'
DIGIT = 'DIGIT'
OTHER = 'OTHER'


def capital_type(text):
    """Classifies the capitalization of a token. Defined for every string."""
    if text.isdigit():
        return DIGIT
    cased = [char for char in text if char.isupper() or char.islower()]
    if not cased:
        return OTHER
    if all(char.isupper() for char in cased):
        return ALL_UPPERCASE
    if all(char.islower() for char in cased):
        return ALL_LOWERCASE
    if cased[0].isupper() and all(char.islower() for char in cased[1:]):
        return INITIAL_UPPERCASE
    return MIXED_CASE


def is_camel_case(text):
    """'true' if a lowercase letter is directly followed by an uppercase one (e.g. 'iPhone')."""
    for current, following in zip(text, text[1:]):
        if current.islower() and following.isupper():
            return 'true'
    return 'false'


# --- Character category patterns ---

class PatternType(enum.Enum):
    ONE_PER_CHAR = 'CharPattern'
    REPEATS_MERGED = 'CharPatternRepeatsMerged'
    REPEATS_AS_KLEENE_PLUS = 'CharPatternRepeatsAsKleenePlus'


# Unicode general categories and the code used for each in patterns.
CATEGORY_CODES = {
    'Cc': 'Cc', 'Cf': 'Cf', 'Cn': 'Cn', 'Co': 'Co', 'Cs': 'Cs',
    'Ll': 'Ll', 'Lm': 'Lm', 'Lo': 'Lo', 'Lt': 'Lt', 'Lu': 'Lu',
    'Mc': 'Mc', 'Me': 'Me', 'Mn': 'Mn',
    'Nd': 'Nd', 'Nl': 'Nl', 'No': 'No',
    'Pc': 'Pc', 'Pd': 'Pd', 'Pe': 'Pe', 'Pf': 'Pf', 'Pi': 'Pi', 'Po': 'Po', 'Ps': 'Ps',
    'Sc': 'Sc', 'Sk': 'Sk', 'Sm': 'Sm', 'So': 'So',
    'Zl': 'Zl', 'Zp': 'Zp', 'Zs': 'Zs',
}


def classify_char(char):
    category = unicodedata.category(char)
    try:
        return CATEGORY_CODES[category]
    except KeyError:
        raise ValueError(f"Unknown character category {category!r} for {char!r}") from None


def character_category_pattern(text, pattern_type=PatternType.ONE_PER_CHAR):
    """
    Renders the Unicode category of each character of ``text``.

    ONE_PER_CHAR:           'XX00' -> 'LuLuNdNd'
    REPEATS_MERGED:         'XX00' -> 'LuNd'
    REPEATS_AS_KLEENE_PLUS: 'X000' -> 'LuNd+'
    """
    parts = []
    last_category = None
    repeated = False
    for char in text:
        category = classify_char(char)
        if pattern_type is PatternType.ONE_PER_CHAR:
            parts.append(category)
        elif category != last_category:
            parts.append(category)
            repeated = False
        elif pattern_type is PatternType.REPEATS_AS_KLEENE_PLUS and not repeated:
            parts.append('+')
            repeated = True
        last_category = category
    return ''.join(parts)


class CharacterCategoryPattern(FeatureExtractor):

    def __init__(self, pattern_type=PatternType.ONE_PER_CHAR):
        self.pattern_type = pattern_type
        self.name = pattern_type.value

    def apply(self, sentence, index):
        text = sentence.tokens[index].text
        return [Feature(self.name, character_category_pattern(text, self.pattern_type))]


# --- Prefix / suffix n-grams ---

class Orientation(enum.Enum):
    LEFT_TO_RIGHT = 'Left'
    RIGHT_TO_LEFT = 'Right'


class CharacterNgram(FeatureExtractor):
    """
    Serves character n-grams of the token text.

    For trigram suffixes of tokens with at least 7 characters ('ion' of
    'emotion') use ``CharacterNgram(Orientation.RIGHT_TO_LEFT, 0, 3, 7)``.
    The orientation decides whether index 0 is the first or the last
    character; the n-gram itself is always returned left to right.
    Tokens shorter than ``minimum_length`` get the value 'OUT'.
    """

    def __init__(self, orientation, start, end, minimum_length=None, lower_case=False):
        if minimum_length is None:
            minimum_length = end - start
        if minimum_length < end:
            raise ValueError("minimum_length must be greater than or equal to end")
        self.orientation = orientation
        self.start = start
        self.end = end
        self.minimum_length = minimum_length
        self.lower_case = lower_case

        parts = ['NGram', orientation.value, str(start), str(end), str(minimum_length)]
        if lower_case:
            parts.append('lower')
        self.name = '_'.join(parts)

    def ngram(self, text):
        if len(text) < self.minimum_length:
            return OUT
        if self.orientation is Orientation.LEFT_TO_RIGHT:
            value = text[self.start:self.end]
        else:
            value = text[len(text) - self.end:len(text) - self.start]
        return value.lower() if self.lower_case else value

    def apply(self, sentence, index):
        return [Feature(self.name, self.ngram(sentence.tokens[index].text))]


# --- Simple token extractors ---

class CoveredText(FeatureExtractor):
    name = 'CoveredText'

    def apply(self, sentence, index):
        return [Feature(self.name, sentence.tokens[index].text)]


class Position(FeatureExtractor):
    """Index of the token inside its sentence."""
    name = 'Position'

    def apply(self, sentence, index):
        return [Feature(self.name, str(index))]


def capital_type_extractor():
    return TokenFunction('CapitalType', capital_type)


def camel_case_extractor():
    return TokenFunction('CamelCase', is_camel_case)


# --- Context windows ---

class ContextWindow(FeatureExtractor):
    """
    Emits the features of ``base`` for the ``size`` tokens before or after the target.

    Feature names carry the direction and the offset, e.g.
    ``Preceding_1_CapitalType`` for the token right before the target.
    Offsets that fall outside the sentence produce the value 'OUT'.
    """

    def __init__(self, base, size, direction):
        if direction not in (PRECEDING, FOLLOWING):
            raise ValueError(f"direction must be {PRECEDING!r} or {FOLLOWING!r}, got {direction!r}")
        if size < 1:
            raise ValueError("size must be at least 1")
        self.base = base
        self.size = size
        self.direction = direction
        self.name = f"{direction}_{size}_{base.name}"

    def apply(self, sentence, index):
        step = -1 if self.direction == PRECEDING else 1
        features = []
        for offset in range(1, self.size + 1):
            prefix = f"{self.direction}_{offset}"
            position = index + step * offset
            if 0 <= position < len(sentence):
                for feature in self.base.apply(sentence, position):
                    features.append(Feature(f"{prefix}_{feature.name}", feature.value))
            else:
                features.append(Feature(f"{prefix}_{self.base.name}", OUT))
        return features


def windowed(base, size):
    """The preceding window, the base extractor itself and the following window."""
    return [
        ContextWindow(base, size, PRECEDING),
        base,
        ContextWindow(base, size, FOLLOWING),
    ]
