from __future__ import annotations

from typing import List

from .models import PosConfig

NOUN = "#Noun"
VERB = "#Verb"
ADJECTIVE = "#Adjective"
ADVERB = "#Adverb"
CONJUNCTION = "#Conjunction"
PRONOUN = "#Pronoun"
AUXILIARY = "#Auxiliary"
MODAL = "#Modal"

# Characters around the caret in which no highlight may start or end.
CARET_BUFFER = 2

# Sentinel caret position meaning "no caret constraint".
NO_CARET = -1


def default_pos_configs() -> List[PosConfig]:
    """
    Return the style table in priority order.

    Earlier rows claim a range first, so a word tagged both noun and verb is
    shown as a noun. Adding a category only requires a new row here.
    """
    return [
        PosConfig(
            tag=NOUN,
            class_name="cm-pos-noun",
            setting_key="nouns",
            exclusion_tags=[PRONOUN],
        ),
        PosConfig(
            tag=VERB,
            class_name="cm-pos-verb",
            setting_key="verbs",
            exclusion_tags=[AUXILIARY, MODAL],
        ),
        PosConfig(tag=ADJECTIVE, class_name="cm-pos-adjective", setting_key="adjectives"),
        PosConfig(tag=ADVERB, class_name="cm-pos-adverb", setting_key="adverbs"),
        PosConfig(
            tag=CONJUNCTION, class_name="cm-pos-conjunction", setting_key="conjunctions"
        ),
    ]


POS_CONFIGS: List[PosConfig] = default_pos_configs()
