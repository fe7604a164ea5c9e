"""
Keyword dictionaries for shipment instruction documents.

Vendor PDFs label the same things differently per language ("Ladedatum",
"Load date", "Date de chargement"). The parser never hardcodes labels:
it receives a KeywordDictionary built once by build_keyword_dictionary()
and injected into the parsing entry point, so tests can swap in their own.

All keywords are stored lower-case. Task headings and instruction markers
are matched against their upper-cased form.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from models.shipment import Language, TaskType


class DetailField(str, Enum):
    """Labelled fields found in the header or inside a task."""
    COMPANY = "in order of"
    TRUCK = "truck"
    DRIVER = "driver"
    CHASSIS = "chassis"
    CONTAINER = "container"
    TANK_DETAILS = "tankdetails"
    GENERAL_REMARK = "general remark"

    CUSTOMER_REFERENCE = "customer reference"
    LOAD_REFERENCE = "load reference"
    UNLOAD_REFERENCE = "unload reference"
    LOAD_DATE = "load date"
    UNLOAD_DATE = "unload date"
    TANK_STATUS = "tank status"
    PRODUCT = "product"
    WEIGHT = "weight"
    VOLUME = "volume"
    TEMPERATURE = "temperature"
    COMPARTMENT = "compartment"
    REMARK = "remark"
    DESTINATION = "destination"


# Fallback order when a label is not found in the document's own language
LANGUAGE_ORDER = (Language.FRENCH, Language.GERMAN, Language.ENGLISH, Language.POLISH, Language.UKRAINIAN)


# Task headings. Order matters for deterministic matching: unload before load.
TASK_KEYWORDS: dict[TaskType, tuple[str, ...]] = {
    TaskType.UNLOAD: ("unload", "entladen", "rozładunek", "déchargement"),
    TaskType.LOAD: ("load", "laden", "załadunek", "prise en charge", "chargement"),
    TaskType.COLLECT: ("collect", "aufnehmen", "aufnehmer bei", "odbiór", "collecte"),
    TaskType.DROPOFF: (
        "drop off", "absatteln", "absetzen", "odstawienie", "odczepienie",
        "dépose", "dételage", "décroche", "decouple",
    ),
    TaskType.CLEANING: ("cleaning", "reinigen", "czyszczenie", "nettoyage"),
}

# Language markers on the first lines, checked in this order.
# "instructions de" must come before "instruction" because it contains it.
INSTRUCTION_MARKERS: tuple[tuple[Language, str], ...] = (
    (Language.FRENCH, "instructions de"),
    (Language.GERMAN, "anweisung"),
    (Language.ENGLISH, "instruction"),
)

INSTRUCTION_DESCRIPTIONS: dict[Language, tuple[str, ...]] = {
    Language.GERMAN: ("lade", "entlade", "umfuhr", "absetz"),
    Language.ENGLISH: ("load", "unload", "transfer", "shunt", "drop"),
    Language.FRENCH: ("chargement", "déchargement", "shunt"),
}

# Description keyword -> longer word that contains it and must win
DESCRIPTION_EXCLUSIONS: dict[str, str] = {
    "lade": "entlade",
    "load": "unload",
    "chargement": "déchargement",
}

DETAIL_KEYWORDS: dict[DetailField, dict[Language, tuple[str, ...]]] = {
    DetailField.COMPANY: {
        Language.GERMAN: ("im auftrag von",),
        Language.FRENCH: ("pour le compte de",),
        Language.ENGLISH: ("in order of",),
    },
    DetailField.TRUCK: {
        Language.ENGLISH: ("truck",),
        Language.FRENCH: ("n° camion",),
    },
    DetailField.DRIVER: {
        Language.GERMAN: ("fahrer",),
        Language.FRENCH: ("chauffeur",),
        Language.ENGLISH: ("driver",),
    },
    DetailField.CHASSIS: {
        Language.ENGLISH: ("chassis",),
        Language.FRENCH: ("chassis",),
        Language.GERMAN: ("chassis",),
    },
    DetailField.CONTAINER: {
        Language.ENGLISH: ("container", "tank"),
        Language.GERMAN: ("container", "tank"),
        Language.FRENCH: ("conteneur",),
    },
    DetailField.TANK_DETAILS: {
        Language.ENGLISH: ("tankdetails",),
        Language.GERMAN: ("tankdetails",),
        Language.FRENCH: ("détails du conteneur",),
    },
    DetailField.GENERAL_REMARK: {
        Language.GERMAN: ("genereller hinweis",),
        Language.ENGLISH: ("general remark",),
        Language.FRENCH: ("commentaires généraux",),
    },
    DetailField.CUSTOMER_REFERENCE: {
        Language.ENGLISH: ("customer reference",),
        Language.FRENCH: ("référence client",),
        Language.GERMAN: ("kundenreferenz",),
    },
    DetailField.UNLOAD_REFERENCE: {
        Language.GERMAN: ("entladereferenz",),
        Language.ENGLISH: ("unload reference",),
        Language.FRENCH: ("référence de livraison",),
    },
    DetailField.LOAD_REFERENCE: {
        Language.GERMAN: ("ladereferenz",),
        Language.ENGLISH: ("load reference",),
        Language.FRENCH: ("référence de chargement",),
    },
    DetailField.UNLOAD_DATE: {
        Language.ENGLISH: ("unload date",),
        Language.FRENCH: ("date de livraison",),
        Language.GERMAN: ("entladedatum",),
    },
    DetailField.LOAD_DATE: {
        Language.ENGLISH: ("load date",),
        Language.FRENCH: ("date de chargement",),
        Language.GERMAN: ("ladedatum",),
    },
    DetailField.PRODUCT: {
        Language.ENGLISH: ("product",),
        Language.FRENCH: ("produit",),
        Language.GERMAN: ("produkt",),
    },
    DetailField.REMARK: {
        Language.GERMAN: ("hinweis",),
        Language.ENGLISH: ("remark",),
        Language.FRENCH: ("commentaires",),
    },
    DetailField.WEIGHT: {
        Language.FRENCH: ("poids",),
        Language.ENGLISH: ("weight",),
        Language.GERMAN: ("gewicht",),
    },
    DetailField.VOLUME: {
        Language.ENGLISH: ("volume",),
        Language.FRENCH: ("volume",),
        Language.GERMAN: ("volumen",),
    },
    DetailField.TEMPERATURE: {
        Language.ENGLISH: ("temp", "temperature"),
        Language.GERMAN: ("temp", "temperatur"),
        Language.FRENCH: ("temp", "température", "tempér"),
    },
    DetailField.COMPARTMENT: {
        Language.FRENCH: ("compartiment",),
        Language.ENGLISH: ("compartment",),
        Language.GERMAN: ("kammer",),
    },
    DetailField.DESTINATION: {
        Language.ENGLISH: ("destination",),
        Language.FRENCH: ("destination",),
    },
    DetailField.TANK_STATUS: {
        Language.ENGLISH: ("tank status",),
        Language.FRENCH: ("etat du conteneur",),
    },
}


def _freeze(mapping: dict) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class KeywordDictionary:
    """
    Immutable keyword tables used by every parsing step.

    Attributes:
        task_keywords: Task headings per task type, in matching order
        instruction_markers: (language, marker) pairs in priority order
        instruction_descriptions: Description keywords per language
        description_exclusions: keyword -> containing word that vetoes it
        detail_keywords: Labels per field and language
        split_marker_languages: Languages whose marker may put the
            description keyword on the following line
        marker_first_languages: Languages whose instruction label reads
            "<MARKER> <DESCRIPTION>" instead of "<DESCRIPTION> <MARKER>"
        shipment_id_label: Literal token starting the shipment id line
        vendor_suffixes: Company names printed after the shipment id
    """

    task_keywords: Mapping[TaskType, tuple[str, ...]]
    instruction_markers: tuple[tuple[Language, str], ...]
    instruction_descriptions: Mapping[Language, tuple[str, ...]]
    description_exclusions: Mapping[str, str]
    detail_keywords: Mapping[DetailField, Mapping[Language, tuple[str, ...]]]
    split_marker_languages: frozenset = field(default_factory=lambda: frozenset({Language.FRENCH}))
    marker_first_languages: frozenset = field(default_factory=lambda: frozenset({Language.FRENCH}))
    shipment_id_label: str = "Shipment"
    vendor_suffixes: tuple[str, ...] = ("Hoyer GmbH",)

    @property
    def all_task_keywords(self) -> tuple[str, ...]:
        """Every task heading keyword, flattened in task order."""
        return tuple(
            keyword
            for keywords in self.task_keywords.values()
            for keyword in keywords
        )

    def labels(self, detail: DetailField, language: Optional[Language] = None) -> tuple[str, ...]:
        """
        Labels of a field in every language, longest first.

        Longer labels must win ("temperature" over "temp", "volumen" over
        "volume"). Among labels of equal length the document language
        comes first, then LANGUAGE_ORDER.
        """
        per_language = self.detail_keywords.get(detail, {})

        ordered_languages = list(LANGUAGE_ORDER)
        if language is not None:
            ordered_languages.remove(language)
            ordered_languages.insert(0, language)

        ranked: list[tuple[int, int, str]] = []
        seen = set()
        for rank, lang in enumerate(ordered_languages):
            for label in per_language.get(lang, ()):
                if label in seen:
                    continue
                seen.add(label)
                ranked.append((-len(label), rank, label))

        return tuple(label for _, _, label in sorted(ranked))


def build_keyword_dictionary(
    task_keywords: Optional[dict[TaskType, tuple[str, ...]]] = None,
    detail_keywords: Optional[dict[DetailField, dict[Language, tuple[str, ...]]]] = None,
    vendor_suffixes: Optional[tuple[str, ...]] = None,
) -> KeywordDictionary:
    """
    Build the keyword dictionary used by the shipment parser.

    Pure: every call returns a fresh immutable value built from the module
    tables, optionally overridden per table.

    Args:
        task_keywords: Replacement task heading table
        detail_keywords: Replacement label table
        vendor_suffixes: Replacement vendor names after the shipment id

    Returns:
        KeywordDictionary
    """
    tasks = task_keywords if task_keywords is not None else TASK_KEYWORDS
    details = detail_keywords if detail_keywords is not None else DETAIL_KEYWORDS

    return KeywordDictionary(
        task_keywords=_freeze({
            task_type: tuple(k.lower() for k in keywords)
            for task_type, keywords in tasks.items()
        }),
        instruction_markers=INSTRUCTION_MARKERS,
        instruction_descriptions=_freeze(INSTRUCTION_DESCRIPTIONS),
        description_exclusions=_freeze(DESCRIPTION_EXCLUSIONS),
        detail_keywords=_freeze({
            detail: _freeze({
                language: tuple(k.lower() for k in labels)
                for language, labels in per_language.items()
            })
            for detail, per_language in details.items()
        }),
        vendor_suffixes=vendor_suffixes if vendor_suffixes is not None else ("Hoyer GmbH",),
    )
