"""Output codecs: flat JSON, namespaced JSON and gettext catalogs."""

from infrastructure.i18n.codecs.base import TranslationCodec
from infrastructure.i18n.codecs.json_codec import JsonCodec
from infrastructure.i18n.codecs.namespaced_json import NamespacedJsonCodec
from infrastructure.i18n.codecs.po import PoCodec

__all__ = ["TranslationCodec", "JsonCodec", "NamespacedJsonCodec", "PoCodec"]
