from .dictionary import DictionaryLoadError, DictionaryStore, ReverseIndex, load_default_dictionary, load_dictionary
from .engine import EngineConfig, ShavianEngine, create_engine
from .html import transliterate_html
from .nlp import PosTagger, PosTaggerUnavailableError
from .overrides import VocabularyOverride, load_vocabulary_overrides
from .resolver import DEFAULT_POLICIES, CascadeResolver, ProperNameMarker, Resolution, TransliterationContext
from .reverse import ReverseResolver

__all__ = [
    "ShavianEngine",
    "EngineConfig",
    "create_engine",
    "DictionaryStore",
    "DictionaryLoadError",
    "ReverseIndex",
    "load_dictionary",
    "load_default_dictionary",
    "CascadeResolver",
    "ReverseResolver",
    "ProperNameMarker",
    "TransliterationContext",
    "Resolution",
    "DEFAULT_POLICIES",
    "PosTagger",
    "PosTaggerUnavailableError",
    "VocabularyOverride",
    "load_vocabulary_overrides",
    "transliterate_html",
]
