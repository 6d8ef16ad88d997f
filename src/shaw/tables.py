"""Curated word tables consulted ahead of (or instead of) the lexicon."""

from __future__ import annotations

PROPER_NAME_MARKER = "·"
QUOTE_OPEN = "‹"
QUOTE_CLOSE = "›"

SHAVIAN_FIRST = 0x10450
SHAVIAN_LAST = 0x1047F

# Delimiters carried at the front of lexicon forms.
FORCED_NAME_DELIMITER = "."
LOWERCASE_DELIMITER = ":"
SOURCE_DELIMITERS = ".:"

COMPOUND_SEPARATORS = ("—", "–", "-", "…", "|")
SENTENCE_TERMINATORS = ".!?"

# Proper names whose rendering differs from (or is missing in) the lexicon.
NAMES: dict[str, str] = {
    "who": "𐑣𐑵",
    "shaw": "𐑖𐑷",
}

# Multi-word titles rendered inside quotation brackets.
NAME_PHRASES: tuple[tuple[str, ...], ...] = (
    ("doctor", "who"),
)

SENTENCE_STARTERS = frozenset({"the", "a", "an", "this", "that", "these", "those"})

FUNCTION_WORDS: dict[str, str] = {
    "and": "𐑯",
    "of": "𐑝",
    "the": "𐑞",
    "to": "𐑑",
    "a": "𐑩",
    "an": "𐑩𐑯",
    "in": "𐑦𐑯",
    "on": "𐑪𐑯",
    "at": "𐑨𐑑",
    "is": "𐑦𐑟",
    "are": "𐑸",
    "was": "𐑢𐑪𐑟",
    "were": "𐑢𐑻",
    "for": "𐑓",
    "with": "𐑢𐑦𐑞",
    "by": "𐑚𐑲",
    "from": "𐑓𐑮𐑪𐑥",
    "had": "𐑣𐑨𐑛",
    "have": "𐑣𐑨𐑝",
    "has": "𐑣𐑨𐑟",
    "would": "𐑢𐑫𐑛",
    "could": "𐑒𐑫𐑛",
    "should": "𐑖𐑫𐑛",
    "will": "𐑢𐑦𐑤",
    "can": "𐑒𐑨𐑯",
    "may": "𐑥𐑱",
    "shall": "𐑖𐑨𐑤",
    "do": "𐑛",
    "does": "𐑛𐑳𐑟",
    "did": "𐑛𐑦𐑛",
    "be": "𐑚",
    "been": "𐑚𐑰𐑯",
    "being": "𐑚𐑰𐑦𐑙",
    "this": "𐑞𐑦𐑕",
    "that": "𐑞𐑨𐑑",
    "which": "𐑢𐑦𐑗",
    "who": "𐑣",
    "what": "𐑢𐑪𐑑",
    "when": "𐑢𐑧𐑯",
    "where": "𐑢𐑺",
    "why": "𐑢𐑲",
    "how": "𐑣𐑬",
    "not": "𐑯𐑪𐑑",
    "no": "𐑯𐑴",
    "yes": "𐑘𐑧𐑕",
    "all": "𐑷𐑤",
    "any": "𐑧𐑯𐑦",
    "some": "𐑕𐑳𐑥",
    "one": "𐑢𐑳𐑯",
    "two": "𐑑",
    "three": "𐑔𐑮",
    "four": "𐑓𐑹",
    "five": "𐑓𐑲𐑝",
    "or": "𐑹",
    "but": "𐑚𐑳𐑑",
    "as": "𐑨𐑟",
    "it": "𐑦𐑑",
    "he": "𐑣𐑰",
    "she": "𐑖𐑰",
    "we": "𐑢𐑰",
    "they": "𐑞𐑱",
}

# Reduced pronunciations of "to", keyed by the preceding word.
TO_REDUCTIONS: dict[str, str] = {
    "have": "𐑨𐑓",
    "has": "𐑨𐑕",
    "used": "𐑕𐑑",
    "unused": "𐑕𐑑",
    "supposed": "𐑕𐑑",
}

# Applied last when building the reverse index.
REVERSE_OVERRIDES: dict[str, str] = {
    "𐑑": "to",
    "𐑮𐑰𐑛": "read",
    "𐑘𐑻": "year",
    "𐑣𐑽": "hear",
    "𐑸": "are",
    "𐑹": "or",
    "𐑥𐑱𐑛": "made",
    "𐑒𐑪𐑟": "cause",
    "𐑚𐑰": "be",
    "𐑚": "be",
    "𐑚𐑲": "by",
    "𐑞": "the",
    "𐑛": "do",
    "𐑢𐑻": "were",
    "𐑓": "for",
    "𐑢𐑦𐑞": "with",
    "𐑓𐑮𐑪𐑥": "from",
    "𐑣": "who",
    "𐑜": "g",
    "𐑒": "k",
    "𐑩": "a",
}

# Closed-class words that are not capitalized at a non-genuine sentence start.
REVERSE_FUNCTION_WORDS = frozenset(
    {"a", "an", "the", "and", "or", "but", "of", "in", "on", "at", "by", "for", "with", "from"}
)

POSSESSIVE_SUFFIX = "𐑟"

CONTRACTION_SUFFIXES: dict[str, str] = {
    "n't": "𐑯𐑑",
    "'re": "𐑮",
    "'ll": "𐑤",
    "'ve": "𐑝",
    "'d": "𐑛",
    "'m": "𐑥",
    "'s": "𐑟",
}

# Stems of negative contractions that do not resolve on their own.
NEGATIVE_STEMS: dict[str, str] = {
    "do": "𐑛𐑴",
    "ca": "𐑒𐑭",
    "wo": "𐑢𐑴",
    "sha": "𐑖𐑭",
    "ai": "𐑱",
}

# Bases whose 's is a contraction of "is"/"has"/"us", never a possessive.
CONTRACTED_S_BASES = frozenset(
    {"it", "he", "she", "that", "what", "there", "here", "who", "where", "how", "let"}
)

VOICELESS_FINALS = frozenset("𐑐𐑑𐑒𐑓𐑔")

PAST_TENSE_ENDING = "𐑩𐑛"
BASE_VERB_TAG = "VVI"
SINGULAR_TAGS = ("NN1", "NN0", "AJ0", "VVI")
PROPER_NOUN_TAGS = frozenset({"NP0", "NNP", "NNPS"})

IRREGULAR_PAST_TENSE: dict[str, str] = {
    "came": "come",
    "wrote": "write",
    "made": "make",
    "built": "build",
    "bought": "buy",
    "caught": "catch",
    "stood": "stand",
    "said": "say",
    "did": "do",
    "gave": "give",
    "went": "go",
    "had": "have",
    "heard": "hear",
    "kept": "keep",
    "knew": "know",
    "laid": "lay",
    "led": "lead",
    "left": "leave",
    "lost": "lose",
    "met": "meet",
    "paid": "pay",
    "put": "put",
    "ran": "run",
    "saw": "see",
    "sold": "sell",
    "sent": "send",
    "set": "set",
    "sat": "sit",
    "spoke": "speak",
    "spent": "spend",
    "took": "take",
    "taught": "teach",
    "told": "tell",
    "thought": "think",
    "understood": "understand",
    "wore": "wear",
    "won": "win",
    "became": "become",
    "grew": "grow",
    "fell": "fall",
    "felt": "feel",
    "slept": "sleep",
    "meant": "mean",
    "read": "read",
    "found": "find",
    "got": "get",
    "held": "hold",
}

PAST_TENSE_OVERRIDES: dict[str, str] = {
    "witnessed": "𐑢𐑦𐑑𐑯𐑩𐑕𐑑",
    "wrote": "𐑮𐑴𐑑",
    "made": "𐑥𐑱𐑛",
    "came": "𐑒𐑱𐑥",
    "said": "𐑕𐑧𐑛",
    "saw": "𐑕𐑷",
    "went": "𐑢𐑧𐑯𐑑",
    "died": "𐑛𐑲𐑛",
    "represented": "𐑮𐑧𐑐𐑮𐑦𐑟𐑧𐑯𐑑𐑩𐑛",
    "allowed": "𐑩𐑤𐑬𐑛",
    "gave": "𐑜𐑱𐑝",
    "knew": "𐑯𐑿",
    "ran": "𐑮𐑨𐑯",
    "took": "𐑑𐑫𐑒",
    "thought": "𐑔𐑷𐑑",
    "told": "𐑑𐑴𐑤𐑛",
    "found": "𐑓𐑬𐑯𐑛",
    "got": "𐑜𐑪𐑑",
    "spoke": "𐑕𐑐𐑴𐑒",
    "became": "𐑚𐑦𐑒𐑱𐑥",
}

IRREGULAR_PLURALS: dict[str, str] = {
    "children": "child",
    "women": "woman",
    "men": "man",
    "teeth": "tooth",
    "feet": "foot",
    "geese": "goose",
    "mice": "mouse",
    "people": "person",
    "cacti": "cactus",
    "fungi": "fungus",
    "radii": "radius",
    "alumni": "alumnus",
    "syllabi": "syllabus",
    "phenomena": "phenomenon",
    "criteria": "criterion",
    "analyses": "analysis",
    "crises": "crisis",
    "diagnoses": "diagnosis",
    "theses": "thesis",
    "hypotheses": "hypothesis",
    "oases": "oasis",
    "oxen": "ox",
    "lives": "life",
    "knives": "knife",
    "wolves": "wolf",
    "leaves": "leaf",
    "loaves": "loaf",
    "shelves": "shelf",
    "thieves": "thief",
    "wives": "wife",
    "halves": "half",
    "elves": "elf",
    "calves": "calf",
}

PLURAL_OVERRIDES: dict[str, str] = {
    "children": "𐑗𐑦𐑤𐑛𐑮𐑩𐑯",
    "women": "𐑢𐑦𐑥𐑩𐑯",
    "men": "𐑥𐑧𐑯",
    "teeth": "𐑑𐑰𐑔",
    "feet": "𐑓𐑰𐑑",
    "geese": "𐑜𐑰𐑕",
    "mice": "𐑥𐑲𐑕",
    "people": "𐑐𐑰𐑐𐑩𐑤",
    "sheep": "𐑖𐑰𐑐",
    "fish": "𐑓𐑦𐑖",
    "data": "𐑛𐑱𐑑𐑩",
    "media": "𐑥𐑰𐑛𐑾",
    "oxen": "𐑪𐑒𐑕𐑩𐑯",
    "houses": "𐑣𐑬𐑟𐑩𐑟",
    "cities": "𐑕𐑦𐑑𐑦𐑟",
    "countries": "𐑒𐑳𐑯𐑑𐑮𐑦𐑟",
    "families": "𐑓𐑨𐑥𐑦𐑤𐑦𐑟",
    "stories": "𐑕𐑑𐑹𐑦𐑟",
    "companies": "𐑒𐑳𐑥𐑐𐑩𐑯𐑦𐑟",
    "ladies": "𐑤𐑱𐑛𐑦𐑟",
    "babies": "𐑚𐑱𐑚𐑦𐑟",
    "leaves": "𐑤𐑰𐑝𐑟",
    "knives": "𐑯𐑲𐑝𐑟",
    "wives": "𐑢𐑲𐑝𐑟",
    "lives": "𐑤𐑲𐑝𐑟",
    "halves": "𐑣𐑭𐑝𐑟",
    "shelves": "𐑖𐑧𐑤𐑝𐑟",
    "wolves": "𐑢𐑫𐑤𐑝𐑟",
    "elves": "𐑧𐑤𐑝𐑟",
    "thieves": "𐑔𐑰𐑝𐑟",
    "calves": "𐑒𐑭𐑝𐑟",
}

PLURAL_EXCLUDED_ENDINGS = ("ss", "us", "is", "ous")
SIBILANT_PLURAL_ENDINGS = ("sses", "ches", "shes", "xes", "zes")
SIBILANT_SINGULAR_ENDINGS = ("s", "z", "x", "ch", "sh", "ce", "ge", "se", "ze")
O_ES_EXCEPTIONS = frozenset({"shoes", "toes", "hoes"})
VOWELS = frozenset("aeiou")
