# In nerkit/registry.py
"""Builds the list of active feature extractors from a flag mapping.

The order of ``FEATURE_FLAGS`` is the order in which features appear in
every instance, whatever order the configuration lists its flags in. A
flag is active only when its value is exactly ``"1"``; 'true', 'yes' or
a boolean ``True`` leave it off.
"""

import logging

from nerkit import gazetteer
from nerkit.feature_extractor import (
    FOLLOWING,
    PRECEDING,
    CharacterCategoryPattern,
    CharacterNgram,
    ContextWindow,
    CoveredText,
    Orientation,
    PatternType,
    Position,
    camel_case_extractor,
    capital_type_extractor,
    windowed,
)

logger = logging.getLogger(__name__)

ACTIVE = '1'


def _word(store):
    return [
        CoveredText(),
        ContextWindow(CoveredText(), 2, PRECEDING),
        ContextWindow(CoveredText(), 2, FOLLOWING),
    ]


def _affix(orientation, length):
    def build(store):
        return windowed(CharacterNgram(orientation, 0, length), 1)
    return build


def _single(factory, *args):
    def build(store):
        return [factory(store, *args)]
    return build


def _character_category(store):
    return [
        CharacterCategoryPattern(PatternType.ONE_PER_CHAR),
        CharacterCategoryPattern(PatternType.REPEATS_MERGED),
    ]


FEATURE_FLAGS = [
    ('usePosition', lambda store: [Position()]),
    ('useFreeBase', lambda store: [gazetteer.FreeBaseFeature()]),
    ('useClarkPosInduction', _single(gazetteer.clark_pos_induction)),
    ('useWordFeature', _word),
    ('useCapitalFeature', lambda store: windowed(capital_type_extractor(), 2)),
    ('usePrefix1Feature', _affix(Orientation.LEFT_TO_RIGHT, 1)),
    ('usePrefix2Feature', _affix(Orientation.LEFT_TO_RIGHT, 2)),
    ('usePrefix3Feature', _affix(Orientation.LEFT_TO_RIGHT, 3)),
    ('usePrefix4Feature', _affix(Orientation.LEFT_TO_RIGHT, 4)),
    ('useSuffix1Feature', _affix(Orientation.RIGHT_TO_LEFT, 1)),
    ('useSuffix2Feature', _affix(Orientation.RIGHT_TO_LEFT, 2)),
    ('useSuffix3Feature', _affix(Orientation.RIGHT_TO_LEFT, 3)),
    ('useSuffix4Feature', _affix(Orientation.RIGHT_TO_LEFT, 4)),
    ('useFirstNameFeature', _single(gazetteer.first_names)),
    ('useSimilarWord1Feature', _single(gazetteer.similar_word, 1)),
    ('useSimilarWord2Feature', _single(gazetteer.similar_word, 2)),
    ('useSimilarWord3Feature', _single(gazetteer.similar_word, 3)),
    ('useSimilarWord4Feature', _single(gazetteer.similar_word, 4)),
    ('useCamelCaseFeature', lambda store: [camel_case_extractor()]),
    ('useDBPediaPersonListFeature', _single(gazetteer.dbpedia_persons)),
    ('useDBPediaLocationListFeature', _single(gazetteer.dbpedia_locations)),
    ('useTopicClass100Feature', _single(gazetteer.topic_class, 100)),
    ('useTopicClass50Feature', _single(gazetteer.topic_class, 50)),
    ('useTopicClass200Feature', _single(gazetteer.topic_class, 200)),
    ('useTopicClass500Feature', _single(gazetteer.topic_class, 500)),
    ('useCharacterCategoryFeature', _character_category),
    ('useDBPediaPersonLastNameFeature', _single(gazetteer.last_names)),
    ('useSuffixClassFeature', _single(gazetteer.suffix_classes)),
    # Template features for user-supplied lists.
    ('lookUpFeature', _single(gazetteer.template_lookup)),
    ('listFeature', _single(gazetteer.template_list)),
]

KNOWN_FLAGS = frozenset(flag for flag, _ in FEATURE_FLAGS)

# Spellings used by existing GermaNER configuration files.
FLAG_ALIASES = {
    'usePreffix1Feature': 'usePrefix1Feature',
    'usePreffix2Feature': 'usePrefix2Feature',
    'usePreffix3Feature': 'usePrefix3Feature',
    'usePreffix4Feature': 'usePrefix4Feature',
}


def is_active(config, flag):
    names = [flag] + [alias for alias, target in FLAG_ALIASES.items() if target == flag]
    return any(str(config.get(name, '0')) == ACTIVE for name in names)


def uses_freebase(config):
    return is_active(config, 'useFreeBase')


def get_features(config, store):
    """Returns the active extractors in declaration order."""
    for flag in config:
        if flag not in KNOWN_FLAGS and flag not in FLAG_ALIASES:
            logger.warning("Ignoring unknown feature flag '%s'", flag)

    extractors = []
    for flag, build in FEATURE_FLAGS:
        if is_active(config, flag):
            extractors.extend(build(store))
    logger.info("Using %d feature extractors", len(extractors))
    return extractors
