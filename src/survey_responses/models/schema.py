"""
Schema registry for the purchase-journey survey.

The order of ``SCHEMA_FIELDS`` is the column order of every stored record
and every CSV export. It is fixed at import time and never mutated.

Example Usage:
    >>> from survey_responses.models.schema import field_ids, label_for
    >>>
    >>> field_ids()[:2]
    ('created_at', 'purchaseTriggers')
    >>> label_for("purchaseChannel")
    'Where did you purchase the product?'
"""
from __future__ import annotations

from typing import Dict, Optional, Tuple

from pydantic import BaseModel, Field


__all__ = [
    "FieldDefinition",
    "SCHEMA_FIELDS",
    "CREATED_AT_FIELD",
    "field_ids",
    "labels",
    "label_for",
    "id_for_label",
]


CREATED_AT_FIELD = "created_at"


class FieldDefinition(BaseModel):
    """
    A single survey question.

    Attributes:
        id: Short internal key sent by the form.
        label: Question text used as the CSV column header.
        multi: Whether the question accepts several answers.
    """
    id: str = Field(description="Field identifier")
    label: str = Field(description="Human-readable question text")
    multi: bool = Field(default=False, description="Multi-select question")

    model_config = {"frozen": True}


_EXPANDED_CONSIDERATION = (
    "During your research, did you start considering any tech brands or "
    "products that you hadn’t thought of initially?"
)
_EXPANSION_REASONS = (
    "If yes, what caused you to add these options to your consideration set?"
)


# Checkbox groups; every other question takes a single answer
_MULTI_SELECT_FIELDS = frozenset({
    "purchaseTriggers",
    "initialBrands",
    "initialReasons",
    "infoSources",
    "expansionReasons",
    "expansionReasonsRepeat",
    "purchaseDrivers",
    "channelReasons",
    "postPurchaseActions",
})


SCHEMA_FIELDS: Tuple[FieldDefinition, ...] = tuple(
    FieldDefinition(id=field_id, label=label, multi=field_id in _MULTI_SELECT_FIELDS)
    for field_id, label in (
        (CREATED_AT_FIELD, "Submission time"),
        ("purchaseTriggers",
         "Think about the last tech product you purchased. "
         "What triggered your decision to buy it?"),
        ("purchaseTriggersOther", "Purchase triggers: Other (please specify)"),
        ("purchaseDescription", "Would you describe this purchase as:"),
        ("initialBrands",
         "Which tech brands or products did you initially consider "
         "when deciding what to buy?"),
        ("initialBrandsOther", "Initial consideration brands: Other (please specify)"),
        ("initialReasons", "Why did these brands come to mind first?"),
        ("initialReasonsOther", "Initial consideration reasons: Other (please specify)"),
        ("brandsNotConsidered",
         "Were there any tech brands you did not consider? Why do you think that was?"),
        ("evaluationMethods",
         "How did you evaluate or compare the different tech products "
         "before making a decision?"),
        ("infoSources",
         "What information sources did you consult during your decision process?"),
        ("infoSourcesOther", "Information sources: Other (please specify)"),
        ("strongestInfluence",
         "Which of these sources had the strongest influence on your "
         "final decision, and why?"),
        ("expandedConsideration", _EXPANDED_CONSIDERATION),
        ("expandedConsiderationRepeat", f"{_EXPANDED_CONSIDERATION} (repeat)"),
        ("expansionReasons", _EXPANSION_REASONS),
        ("expansionReasonsOther", "Expansion reasons: Other (please specify)"),
        ("expansionReasonsRepeat", f"{_EXPANSION_REASONS} (repeat)"),
        ("expansionReasonsRepeatOther", "Expansion reasons repeat: Other (please specify)"),
        ("purchaseDrivers",
         "What ultimately made you choose the specific tech product you bought?"),
        ("purchaseDriversOther", "Purchase drivers: Other (please specify)"),
        ("purchaseChannel", "Where did you purchase the product?"),
        ("channelReasons", "Why did you choose that retailer or platform?"),
        ("channelReasonsOther", "Channel reasons: Other (please specify)"),
        ("postPurchaseActions",
         "After purchasing the tech product, did you do any of the following?"),
        ("postPurchaseMotivation",
         "What motivated you to engage (or not engage) in these behaviours?"),
        ("advocacyLikelihood",
         "How likely are you to actively recommend this tech brand to others? (1-5)"),
        ("advocacyMotivation",
         "What would make you more likely to recommend this brand in the future?"),
        ("repurchaseLikelihood",
         "When buying a similar tech product in the future, how likely are "
         "you to choose the same brand?"),
        ("switchFactors",
         "What factors would most likely cause you to switch to a different "
         "tech brand next time?"),
    )
)

_FIELD_IDS: Tuple[str, ...] = tuple(field.id for field in SCHEMA_FIELDS)
_LABELS: Tuple[str, ...] = tuple(field.label for field in SCHEMA_FIELDS)
_LABEL_BY_ID: Dict[str, str] = {field.id: field.label for field in SCHEMA_FIELDS}
_ID_BY_LABEL: Dict[str, str] = {field.label: field.id for field in SCHEMA_FIELDS}

assert len(_LABEL_BY_ID) == len(SCHEMA_FIELDS), "duplicate field identifier"
assert len(_ID_BY_LABEL) == len(SCHEMA_FIELDS), "duplicate field label"


def field_ids() -> Tuple[str, ...]:
    """Field identifiers in schema order."""
    return _FIELD_IDS


def labels() -> Tuple[str, ...]:
    """Field labels in schema order."""
    return _LABELS


def label_for(field_id: str) -> str:
    """
    Look up the label of a registered field.

    Raises:
        KeyError: If ``field_id`` is not in the registry.
    """
    return _LABEL_BY_ID[field_id]


def id_for_label(label: str) -> Optional[str]:
    """Reverse lookup; ``None`` when the label is unknown."""
    return _ID_BY_LABEL.get(label)
