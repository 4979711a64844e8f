"""
Tiny helper script that drives a headless editor through a typing burst.
Uses the lexicon tagger so no NLP model is needed; swap in `tagger_name="spacy"`
once a spaCy model is installed.
"""

from __future__ import annotations

import asyncio

from pos_highlighter.config import HighlighterConfig
from pos_highlighter.context import HighlightSession
from pos_highlighter.host import HeadlessEditor
from pos_highlighter.preferences import HighlightPreferences
from pos_highlighter.scheduling import AsyncioScheduler
from pos_highlighter.taggers import build_tagger_from_config


def _show(label: str, editor: HeadlessEditor) -> None:
    print("-" * 40)
    print(label)
    for deco in editor.decorations:
        print(f"  [{deco.start:>3}, {deco.end:>3}) {deco.class_name:<20} {editor.text[deco.start:deco.end]}")


async def main() -> None:
    config = HighlighterConfig(
        tagger_name="lexicon",
        activity_timeout_ms=600,
        debounce_ms=100,
        lexicon={
            "#Noun": ["fox", "dog", "river"],
            "#Verb": ["jumps", "crossed"],
            "#Adjective": ["quick", "lazy"],
            "#Conjunction": ["and"],
        },
    )
    editor = HeadlessEditor("The quick fox jumps over the lazy dog.")
    session = HighlightSession(
        editor,
        build_tagger_from_config(config),
        HighlightPreferences(),
        AsyncioScheduler(),
        config,
    )

    editor.set_caret(0)
    await asyncio.sleep(0.2)
    _show("Initial analysis", editor)

    for chunk in [" Then", " it", " crossed", " the", " river."]:
        editor.insert(chunk)
        await asyncio.sleep(0.05)
    _show("While typing (remapped, nothing new)", editor)

    await asyncio.sleep(0.8)
    _show("After the editor went quiet", editor)
    session.close()


if __name__ == "__main__":
    asyncio.run(main())
