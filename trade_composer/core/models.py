"""
Data models for trade schema composition.

Uses frozen dataclasses with tuple collections so merged schemas and composed
taxonomies cannot change after they are returned. Raw registry data keeps the
camelCase keys of the JSON behavior schemas and is parsed with from_dict.
Client requests arrive as JSON and are validated by pydantic models.
"""

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


class MalformedSchemaError(ValueError):
    """A registry entry is missing required fields or holds invalid values."""

    def __init__(self, trade: str, issues: Iterable[str]):
        self.trade = trade
        self.issues = list(issues)
        super().__init__(f"Malformed schema for '{trade}': {'; '.join(self.issues)}")


def _set(obj: Any, name: str, value: Any) -> None:
    """Assign on a frozen dataclass from __post_init__."""
    object.__setattr__(obj, name, value)


def _strings(values: Iterable[Any] | None) -> tuple[str, ...]:
    if not values:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(str(v) for v in values)


class Formality(str, Enum):
    """Reply formality levels, ordered from least to most formal."""

    CASUAL = "casual"
    MEDIUM = "medium"
    PROFESSIONAL = "professional"

    @property
    def rank(self) -> int:
        return _FORMALITY_RANK[self]


_FORMALITY_RANK = {
    Formality.CASUAL: 1,
    Formality.MEDIUM: 2,
    Formality.PROFESSIONAL: 3,
}


class EntityKind(str, Enum):
    """Client entity kinds that fill taxonomy placeholder slots."""

    MANAGER = "manager"
    SUPPLIER = "supplier"

    @property
    def slot_prefix(self) -> str:
        return self.value.capitalize()


# ---------------------------------------------------------------------------
# Behavior schema
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VoiceProfile:
    """How replies should sound."""

    tone: str
    formality_level: Formality = Formality.MEDIUM
    allow_pricing_in_replies: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VoiceProfile":
        return cls(
            tone=data.get("tone", ""),
            formality_level=Formality(data.get("formalityLevel", Formality.MEDIUM.value)),
            allow_pricing_in_replies=bool(data.get("allowPricingInReplies", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "tone": self.tone,
            "formalityLevel": self.formality_level.value,
            "allowPricingInReplies": self.allow_pricing_in_replies,
        }


@dataclass(frozen=True)
class AutoReplyPolicy:
    """Which categories may be answered automatically, and how confidently."""

    enabled_categories: tuple[str, ...] = ()
    min_confidence: float = 0.75
    excluded_domains: tuple[str, ...] = ()

    def __post_init__(self):
        _set(self, "enabled_categories", _strings(self.enabled_categories))
        _set(self, "excluded_domains", _strings(self.excluded_domains))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AutoReplyPolicy":
        return cls(
            enabled_categories=data.get("enabledCategories", ()),
            min_confidence=float(data.get("minConfidence", 0.75)),
            excluded_domains=data.get("excludedDomains", ()),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "enabledCategories": list(self.enabled_categories),
            "minConfidence": self.min_confidence,
            "excludedDomains": list(self.excluded_domains),
        }


@dataclass(frozen=True)
class FollowUpGuidelines:
    preferred_phrasing: tuple[str, ...] = ()

    def __post_init__(self):
        _set(self, "preferred_phrasing", _strings(self.preferred_phrasing))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FollowUpGuidelines":
        return cls(preferred_phrasing=data.get("preferredPhrasing", ()))

    def to_dict(self) -> dict[str, Any]:
        return {"preferredPhrasing": list(self.preferred_phrasing)}


@dataclass(frozen=True)
class UpsellGuidelines:
    enabled: bool = False
    trigger_categories: tuple[str, ...] = ()
    text: str = ""

    def __post_init__(self):
        _set(self, "trigger_categories", _strings(self.trigger_categories))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UpsellGuidelines":
        return cls(
            enabled=bool(data.get("enabled", False)),
            trigger_categories=data.get("triggerCategories", ()),
            text=data.get("text", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "enabled": self.enabled,
            "triggerCategories": list(self.trigger_categories),
            "text": self.text,
        }


@dataclass(frozen=True)
class CategoryOverride:
    """Per-category reply tuning. Lower priority_level means higher priority."""

    priority_level: int
    custom_language: tuple[str, ...] = ()

    def __post_init__(self):
        _set(self, "custom_language", _strings(self.custom_language))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CategoryOverride":
        return cls(
            priority_level=int(data.get("priorityLevel", 3)),
            custom_language=data.get("customLanguage", ()),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "priorityLevel": self.priority_level,
            "customLanguage": list(self.custom_language),
        }


@dataclass(frozen=True)
class Signature:
    closing_text: str = ""
    signature_block: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Signature":
        return cls(
            closing_text=data.get("closingText", ""),
            signature_block=data.get("signatureBlock", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"closingText": self.closing_text, "signatureBlock": self.signature_block}


# ---------------------------------------------------------------------------
# Label taxonomy
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LabelColor:
    background: str
    text: str = "#ffffff"

    def to_dict(self) -> dict[str, str]:
        return {"backgroundColor": self.background, "textColor": self.text}


_SLOT_NAME = re.compile(r"^\{\{(Manager|Supplier)(\d+)\}\}$")


@dataclass(frozen=True)
class Slot:
    """Placeholder for the index-th (1-based) client manager or supplier."""

    kind: EntityKind
    index: int

    @property
    def placeholder(self) -> str:
        return "{{%s%d}}" % (self.kind.slot_prefix, self.index)

    @classmethod
    def parse(cls, name: str) -> "Slot | None":
        """Recognise legacy '{{Manager3}}' style names."""
        match = _SLOT_NAME.match(name or "")
        if not match:
            return None
        return cls(kind=EntityKind(match.group(1).lower()), index=int(match.group(2)))


@dataclass(frozen=True)
class LabelNode:
    """One label in the taxonomy tree."""

    name: str
    color: LabelColor | None = None
    intent: str | None = None
    critical: bool = False
    description: str | None = None
    children: tuple["LabelNode", ...] = ()
    slot: Slot | None = None

    def __post_init__(self):
        _set(self, "children", tuple(self.children))

    @property
    def is_slot(self) -> bool:
        return self.slot is not None

    def with_children(self, children: Iterable["LabelNode"]) -> "LabelNode":
        return replace(self, children=tuple(children))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "color": self.color.to_dict() if self.color else None,
            "intent": self.intent,
            "critical": self.critical,
            "children": [child.to_dict() for child in self.children],
        }


def label(name: str, *children: LabelNode, **attrs: Any) -> LabelNode:
    """Shorthand used by the registry data modules. Placeholder names become slots."""
    attrs.setdefault("slot", Slot.parse(name))
    return LabelNode(name=name, children=children, **attrs)


def slot_labels(kind: EntityKind, count: int) -> tuple[LabelNode, ...]:
    """Placeholder slots 1..count for one entity kind."""
    slots = (Slot(kind=kind, index=i) for i in range(1, count + 1))
    return tuple(LabelNode(name=s.placeholder, slot=s) for s in slots)


@dataclass(frozen=True)
class Taxonomy:
    """A label forest plus the order in which its top-level labels are created."""

    labels: tuple[LabelNode, ...]
    root_order: tuple[str, ...]

    def __post_init__(self):
        _set(self, "labels", tuple(self.labels))
        _set(self, "root_order", tuple(self.root_order))

    def get(self, name: str) -> LabelNode | None:
        for node in self.labels:
            if node.name == name:
                return node
        return None


@dataclass(frozen=True)
class LabelOverride:
    """Replacement for one top-level category's subtree. None keeps the base value."""

    children: tuple[LabelNode, ...] = ()
    description: str | None = None
    intent: str | None = None
    color: LabelColor | None = None

    def __post_init__(self):
        _set(self, "children", tuple(self.children))

    def apply(self, node: LabelNode) -> LabelNode:
        return replace(
            node,
            children=self.children,
            description=self.description if self.description is not None else node.description,
            intent=self.intent if self.intent is not None else node.intent,
            color=self.color if self.color is not None else node.color,
        )


@dataclass(frozen=True)
class LabelExtension:
    """How one trade customises the universal taxonomy."""

    overrides: Mapping[str, LabelOverride] = field(default_factory=dict)
    additions: tuple[LabelNode, ...] = ()
    # Top-level category new additions are provisioned in front of
    anchor: str | None = None

    def __post_init__(self):
        _set(self, "overrides", MappingProxyType(dict(self.overrides)))
        _set(self, "additions", tuple(self.additions))


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

REQUIRED_SCHEMA_FIELDS = ("voiceProfile", "behaviorGoals", "autoReplyPolicy", "signature")


@dataclass(frozen=True)
class TradeSchema:
    """Base schema of one trade, or the merged schema of several."""

    trade_types: tuple[str, ...]
    voice_profile: VoiceProfile
    behavior_goals: tuple[str, ...]
    auto_reply_policy: AutoReplyPolicy
    follow_up_guidelines: FollowUpGuidelines
    upsell_guidelines: UpsellGuidelines
    category_overrides: Mapping[str, CategoryOverride]
    signature: Signature
    label_taxonomy: Taxonomy

    def __post_init__(self):
        _set(self, "trade_types", _strings(self.trade_types))
        _set(self, "behavior_goals", _strings(self.behavior_goals))
        _set(self, "category_overrides", MappingProxyType(dict(self.category_overrides)))

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        trade: str,
        label_taxonomy: Taxonomy,
    ) -> "TradeSchema":
        """
        Parse a raw behavior definition.

        Raises:
            MalformedSchemaError: If required fields are missing or invalid
        """
        issues = [f"missing required field '{key}'" for key in REQUIRED_SCHEMA_FIELDS if not data.get(key)]
        if issues:
            raise MalformedSchemaError(trade, issues)

        voice = data["voiceProfile"]
        if not voice.get("tone"):
            issues.append("missing voiceProfile.tone")
        if voice.get("formalityLevel", Formality.MEDIUM.value) not in {f.value for f in Formality}:
            issues.append(f"invalid voiceProfile.formalityLevel '{voice.get('formalityLevel')}'")
        confidence = data["autoReplyPolicy"].get("minConfidence", 0.75)
        if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
            issues.append(f"invalid autoReplyPolicy.minConfidence '{confidence}'")
        if not isinstance(data["behaviorGoals"], (list, tuple)):
            issues.append("behaviorGoals must be a list")
        for category, override in (data.get("categoryOverrides") or {}).items():
            if not isinstance(override.get("priorityLevel", 3), int):
                issues.append(f"invalid categoryOverrides.{category}.priorityLevel")
        if issues:
            raise MalformedSchemaError(trade, issues)

        return cls(
            trade_types=(trade,),
            voice_profile=VoiceProfile.from_dict(voice),
            behavior_goals=data["behaviorGoals"],
            auto_reply_policy=AutoReplyPolicy.from_dict(data["autoReplyPolicy"]),
            follow_up_guidelines=FollowUpGuidelines.from_dict(data.get("followUpGuidelines") or {}),
            upsell_guidelines=UpsellGuidelines.from_dict(data.get("upsellGuidelines") or {}),
            category_overrides={
                category: CategoryOverride.from_dict(override)
                for category, override in (data.get("categoryOverrides") or {}).items()
            },
            signature=Signature.from_dict(data["signature"]),
            label_taxonomy=label_taxonomy,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase shape of the JSON behavior schemas."""
        return {
            "tradeTypes": list(self.trade_types),
            "voiceProfile": self.voice_profile.to_dict(),
            "behaviorGoals": list(self.behavior_goals),
            "autoReplyPolicy": self.auto_reply_policy.to_dict(),
            "followUpGuidelines": self.follow_up_guidelines.to_dict(),
            "upsellGuidelines": self.upsell_guidelines.to_dict(),
            "categoryOverrides": {
                category: override.to_dict() for category, override in self.category_overrides.items()
            },
            "signature": self.signature.to_dict(),
            "labelTaxonomy": {
                "labels": [node.to_dict() for node in self.label_taxonomy.labels],
                "rootOrder": list(self.label_taxonomy.root_order),
            },
        }


@dataclass(frozen=True)
class PromptFacts:
    """Trade vocabulary used to fill the reply prompt."""

    primary_product_service: str = "products and services"
    primary_product_category: str = "products"
    inquiry_types: tuple[str, ...] = (
        "Service Job Inquiry",
        "New Product Inquiry",
        "Parts & Accessories Inquiry",
        "Technical Help / Troubleshooting",
    )
    tech_prep_tips: str = "(like ensuring the equipment is accessible)"
    delivery_prep_actions: str = "(gate width, access, power setup)"
    partner_support: str = "(like electricians or contractors)"
    technical_specs: str = "amperage, clearance, or installation requirements"
    upsell_opportunities: str = "(like filters, parts, or accessories)"
    upsell_language: str = (
        '"If you need any parts, accessories, or supplies, let us know. We can bring those along!"'
    )
    product_details: str = "brand, model, and approximate year"
    new_client_info_required: tuple[str, ...] = (
        "Full name",
        "Address (with city)",
        "Product brand and approx. year",
        "Access details",
        "Problem description and any error codes",
    )

    def __post_init__(self):
        _set(self, "inquiry_types", _strings(self.inquiry_types))
        _set(self, "new_client_info_required", _strings(self.new_client_info_required))


# ---------------------------------------------------------------------------
# Client inputs
# ---------------------------------------------------------------------------


def _listish(value: Any) -> Any:
    """Let a single string or null stand in for a list."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return value


@dataclass(frozen=True)
class Entity:
    """A client manager (name, email) or supplier (name, domains)."""

    name: str
    email: str | None = None
    domains: tuple[str, ...] = ()

    def __post_init__(self):
        _set(self, "domains", _strings(self.domains))

    def fields(self) -> dict[str, Any]:
        """Per-item values visible inside a template block."""
        return {
            "name": self.name,
            "email": self.email,
            "domains": ", ".join(self.domains),
        }

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "email": self.email, "domains": list(self.domains)}


class EntityInput(BaseModel):
    """Raw manager or supplier entry: a dict, a plain name or an Entity."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    email: str | None = None
    domains: tuple[str, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def from_name_or_entity(cls, data: Any) -> Any:
        if data is None:
            return {}
        if isinstance(data, str):
            return {"name": data}
        if isinstance(data, Entity):
            return data.to_dict()
        return data

    @field_validator("name", mode="before")
    @classmethod
    def blank_name(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("domains", mode="before")
    @classmethod
    def domain_list(cls, value: Any) -> Any:
        return _listish(value)

    def to_entity(self) -> Entity:
        return Entity(name=self.name, email=self.email, domains=self.domains)


class BusinessFacts(BaseModel):
    """
    Flat business facts supplied by the caller for scalar placeholders.

    Accepts the camelCase keys of the onboarding profile. Unknown scalar
    keys are kept in extra.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = Field(default=None, validation_alias=AliasChoices("name", "businessName", "business_name"))
    phone: str | None = Field(default=None, validation_alias=AliasChoices("phone", "businessPhone"))
    after_hours_phone: str | None = Field(
        default=None, validation_alias=AliasChoices("after_hours_phone", "afterHoursPhone")
    )
    website_url: str | None = Field(
        default=None, validation_alias=AliasChoices("website_url", "websiteUrl", "website")
    )
    email_domain: str | None = Field(default=None, validation_alias=AliasChoices("email_domain", "emailDomain"))
    currency: str | None = None
    timezone: str | None = None
    service_areas: tuple[str, ...] = Field(default=(), validation_alias=AliasChoices("service_areas", "serviceAreas"))
    operating_hours: str | None = Field(
        default=None, validation_alias=AliasChoices("operating_hours", "operatingHours")
    )
    response_time: str | None = Field(default=None, validation_alias=AliasChoices("response_time", "responseTime"))
    pricing_info: str | None = Field(default=None, validation_alias=AliasChoices("pricing_info", "pricingInfo"))
    payment_options: str | None = Field(
        default=None, validation_alias=AliasChoices("payment_options", "paymentOptions")
    )
    upcoming_holidays: tuple[str, ...] = Field(
        default=(), validation_alias=AliasChoices("upcoming_holidays", "upcomingHolidays")
    )
    links: dict[str, str] = Field(default_factory=dict)
    extra: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def collect_extra(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        known: set[str] = set()
        for field_name, info in cls.model_fields.items():
            known.add(field_name)
            if isinstance(info.validation_alias, AliasChoices):
                known.update(choice for choice in info.validation_alias.choices if isinstance(choice, str))

        values = {key: value for key, value in data.items() if key in known}
        extra = {key: str(value) for key, value in (data.get("extra") or {}).items() if value is not None}
        for key, value in data.items():
            if key not in known and value is not None and not isinstance(value, (Mapping, list, tuple)):
                extra[key] = str(value)
        values["extra"] = extra
        return values

    @field_validator("service_areas", "upcoming_holidays", mode="before")
    @classmethod
    def text_list(cls, value: Any) -> Any:
        return _listish(value)

    @field_validator("links", mode="before")
    @classmethod
    def drop_empty_links(cls, value: Any) -> Any:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            return value
        return {key: link for key, link in value.items() if link}


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MergeResult:
    """Result from merging the schemas of a client's trades."""

    schema: TradeSchema
    resolved_trades: tuple[str, ...]
    prompt_facts: PromptFacts
    warnings: tuple[str, ...] = ()

    @property
    def is_fallback(self) -> bool:
        """True when no requested trade resolved and the base template was used."""
        return not self.resolved_trades


@dataclass(frozen=True)
class ComposedTaxonomy:
    """Label tree with all slots resolved, plus its provisioning order."""

    labels: tuple[LabelNode, ...]
    root_order: tuple[str, ...]
    provisioning_order: tuple[str, ...]
    warnings: tuple[str, ...] = ()

    def __post_init__(self):
        _set(self, "labels", tuple(self.labels))
        _set(self, "root_order", tuple(self.root_order))
        _set(self, "provisioning_order", tuple(self.provisioning_order))
        _set(self, "warnings", tuple(self.warnings))

    def get(self, name: str) -> LabelNode | None:
        for node in self.labels:
            if node.name == name:
                return node
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "labels": [node.to_dict() for node in self.labels],
            "provisioningOrder": list(self.provisioning_order),
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class ValidationReport:
    """Integrity check outcome. Errors block provisioning at the caller's discretion."""

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class RenderedTemplate:
    """Final template text plus the placeholders that had no value."""

    text: str
    unresolved: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


_TRADE_TYPE_KEYS = ("trade_types", "business_types", "businessTypes")


class ProfileRequest(BaseModel):
    """
    One client configuration request.

    Accepts the onboarding profile shape: a business_types list, or the
    legacy single business_type.
    """

    model_config = ConfigDict(frozen=True)

    trade_types: tuple[str, ...] = Field(default=(), validation_alias=AliasChoices(*_TRADE_TYPE_KEYS))
    managers: tuple[EntityInput, ...] = ()
    suppliers: tuple[EntityInput, ...] = ()
    business: BusinessFacts = Field(
        default_factory=BusinessFacts, validation_alias=AliasChoices("business", "business_info")
    )
    template: str | None = None
    # Callers pass the current timestamp explicitly; composition never reads the clock
    now: str | None = None

    @model_validator(mode="before")
    @classmethod
    def legacy_business_type(cls, data: Any) -> Any:
        if not isinstance(data, Mapping) or not data.get("business_type"):
            return data
        if any(data.get(key) for key in _TRADE_TYPE_KEYS):
            return data
        values = {key: value for key, value in data.items() if key not in _TRADE_TYPE_KEYS}
        values["business_types"] = [data["business_type"]]
        return values

    @field_validator("trade_types", "managers", "suppliers", mode="before")
    @classmethod
    def list_or_none(cls, value: Any) -> Any:
        return _listish(value)

    @field_validator("business", mode="before")
    @classmethod
    def empty_business(cls, value: Any) -> Any:
        return {} if value is None else value


@dataclass(frozen=True)
class ClientProfile:
    """Everything composed for one client."""

    trade_types: tuple[str, ...]
    schema: TradeSchema
    reply_prompt: str
    taxonomy: ComposedTaxonomy
    validation: ValidationReport
    managers: tuple[Entity, ...] = ()
    suppliers: tuple[Entity, ...] = ()
    warnings: tuple[str, ...] = ()
    # BEHAVIOR_* placeholder values for workflow deployment
    behavior: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        _set(self, "behavior", MappingProxyType(dict(self.behavior)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "tradeTypes": list(self.trade_types),
            "schema": self.schema.to_dict(),
            "replyPrompt": self.reply_prompt,
            "taxonomy": self.taxonomy.to_dict(),
            "validation": self.validation.to_dict(),
            "managers": [m.to_dict() for m in self.managers],
            "suppliers": [s.to_dict() for s in self.suppliers],
            "warnings": list(self.warnings),
            "behavior": dict(self.behavior),
        }
