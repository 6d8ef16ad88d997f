from __future__ import annotations

import re
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup, Comment, Doctype, NavigableString, Tag  # type: ignore

from .logging_utils import debug_log

if TYPE_CHECKING:
    from .engine import ShavianEngine

__all__ = ["should_transliterate_node", "transliterate_html"]

SKIPPED_TAGS = frozenset(
    {"script", "style", "noscript", "iframe", "textarea", "input", "code", "pre", "xmp"}
)
SKIPPED_CLASSES = frozenset({"ipa"})

_BRACKETED = re.compile(r"\[.*?\]")
_IPA_SYMBOLS = re.compile(r"[ˈˌaɪeæɑɔʊŋʃʒθðʔçɾʁʀɱɲʋʤʧɡɣɬ]")


def _is_english(lang: str) -> bool:
    return lang.strip().lower().startswith("en")


def should_transliterate_node(node: NavigableString) -> bool:
    """
    Decide whether a text node holds English prose.

    Nodes under code-like or form elements, under ``class="ipa"`` elements or
    under a non-English ``lang`` ancestor are left alone, as are bracketed
    IPA transcriptions.
    """
    if isinstance(node, (Comment, Doctype)):
        return False
    text = str(node)
    if not text.strip():
        return False
    for ancestor in node.parents:
        if not isinstance(ancestor, Tag) or isinstance(ancestor, BeautifulSoup):
            continue
        if ancestor.name in SKIPPED_TAGS:
            return False
        classes = ancestor.get("class") or []
        if isinstance(classes, str):
            classes = classes.split()
        if any(cls.lower() in SKIPPED_CLASSES for cls in classes):
            return False
        lang = ancestor.get("lang")
        if isinstance(lang, str) and lang and not _is_english(lang):
            debug_log(f"skipping <{ancestor.name}> with lang={lang!r}")
            return False
    if _BRACKETED.search(text) and _IPA_SYMBOLS.search(text):
        return False
    return True


def transliterate_html(markup: str, engine: "ShavianEngine", reverse: bool = False) -> str:
    """Transliterate every prose text node of ``markup``; each node starts a fresh context."""
    soup = BeautifulSoup(markup, "html.parser")
    convert = engine.reverse_transliterate if reverse else engine.transliterate
    changed = 0
    for node in list(soup.find_all(string=True)):
        if not should_transliterate_node(node):
            continue
        text = str(node)
        new_text = convert(text)
        if new_text != text:
            node.replace_with(new_text)
            changed += 1
    debug_log(f"transliterated {changed} text node(s)")
    return str(soup)
